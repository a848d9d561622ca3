"""Exceptions raised by the document pipeline."""
from __future__ import annotations


class PDFProcessingError(RuntimeError):
    """Base exception for PDF pipeline failures."""


class InvalidPDFInputError(PDFProcessingError, ValueError):
    """Raised when the caller passes structurally wrong arguments."""


class PDFTooLargeError(InvalidPDFInputError):
    """Raised when a PDF buffer exceeds the supported size."""

    def __init__(self, message: str, *, size_bytes: int, limit_bytes: int) -> None:
        super().__init__(message)
        self.size_bytes = size_bytes
        self.limit_bytes = limit_bytes


class PDFExtractionError(PDFProcessingError):
    """Raised when the underlying PDF library fails to read a document."""

    def __init__(self, message: str, *, cause: Exception | None = None) -> None:
        super().__init__(message)
        self.__cause__ = cause
