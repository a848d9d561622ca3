"""Byte-level and structural sanity checks for uploaded PDFs."""
from __future__ import annotations

import logging
from typing import Any, Optional

from .backends import PDFBackend, get_default_backend
from .constants import MAX_PDF_SIZE, PDF_SIGNATURE
from .models import ValidationResult

LOGGER = logging.getLogger(__name__)

_BYTES_PER_MB = 1024 * 1024


def format_megabytes(size: int) -> str:
    return f"{size / _BYTES_PER_MB:.1f}"


def is_pdf_buffer(data: Any) -> bool:
    return isinstance(data, (bytes, bytearray))


class PDFValidator:
    """Validate PDF buffers before any expensive processing.

    Failures are reported through :class:`ValidationResult`; ``validate`` never
    raises.
    """

    def __init__(self, backend: Optional[PDFBackend] = None) -> None:
        self.backend = backend or get_default_backend()

    def validate(self, data: Any) -> ValidationResult:
        if not is_pdf_buffer(data):
            return ValidationResult(
                is_valid=False,
                file_size=0,
                page_count=0,
                error="Input must be a Buffer containing PDF data",
            )

        size = len(data)
        if size == 0:
            return ValidationResult(is_valid=False, file_size=0, page_count=0, error="PDF buffer is empty")

        if size > MAX_PDF_SIZE:
            return ValidationResult(
                is_valid=False,
                file_size=size,
                page_count=0,
                error=(
                    f"File size ({format_megabytes(size)} MB) exceeds maximum "
                    f"({MAX_PDF_SIZE // _BYTES_PER_MB} MB)"
                ),
            )

        if bytes(data[: len(PDF_SIGNATURE)]) != PDF_SIGNATURE:
            return ValidationResult(
                is_valid=False,
                file_size=size,
                page_count=0,
                error="File does not have a valid PDF header. Ensure this is a PDF file.",
            )

        try:
            document = self.backend.load(bytes(data))
            page_count = self.backend.page_count(document)
        except Exception as error:
            LOGGER.debug("PDF structure check failed: %s", error)
            return ValidationResult(
                is_valid=False,
                file_size=size,
                page_count=0,
                error=f"PDF structure is corrupted or unreadable: {error}",
            )

        return ValidationResult(is_valid=True, file_size=size, page_count=page_count, error=None)
