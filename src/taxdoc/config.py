"""Environment-driven settings for the service and command-line tool."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv

from taxdoc.pipeline.constants import DEFAULT_CHUNK_OVERLAP, DEFAULT_CHUNK_SIZE

LOGGER = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parents[2]


def _int_from_env(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError:
        LOGGER.warning("Invalid integer for %s: %s; using default %s", name, value, default)
        return default


@dataclass(frozen=True, slots=True)
class Settings:
    chunk_size: int = DEFAULT_CHUNK_SIZE
    chunk_overlap: int = DEFAULT_CHUNK_OVERLAP
    log_dir: Path = Path("logs")
    log_level: str = "INFO"
    pdf_password: str = ""

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            chunk_size=_int_from_env("TAXDOC_CHUNK_SIZE", DEFAULT_CHUNK_SIZE),
            chunk_overlap=_int_from_env("TAXDOC_CHUNK_OVERLAP", DEFAULT_CHUNK_OVERLAP),
            log_dir=Path(os.getenv("TAXDOC_LOG_DIR", "logs")),
            log_level=os.getenv("TAXDOC_LOG_LEVEL", "INFO").strip().upper() or "INFO",
            pdf_password=os.getenv("TAXDOC_PDF_PASSWORD", ""),
        )


def load_env_file() -> None:
    """Seed the environment from the project's ``.env`` file when present."""

    env_file = PROJECT_ROOT / ".env"
    if env_file.exists():
        load_dotenv(dotenv_path=env_file, override=False)
    else:
        load_dotenv(override=False)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    load_env_file()
    return Settings.from_env()
