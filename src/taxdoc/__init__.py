"""Income-Tax document intelligence package."""

__version__ = "0.1.0"
