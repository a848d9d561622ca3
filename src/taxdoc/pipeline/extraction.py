"""Text extraction from PDF buffers, whole-document or by page range."""
from __future__ import annotations

import logging
from typing import Any, Optional

from .backends import PDFBackend, get_default_backend
from .constants import MAX_PDF_SIZE, MIN_TEXT_THRESHOLD
from .errors import InvalidPDFInputError, PDFExtractionError, PDFTooLargeError
from .models import ExtractionResult, PageRangeExtraction, PDFMetadata
from .validation import format_megabytes, is_pdf_buffer

LOGGER = logging.getLogger(__name__)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


class PDFTextExtractor:
    """Extract text and metadata using the configured :class:`PDFBackend`."""

    def __init__(self, backend: Optional[PDFBackend] = None) -> None:
        self.backend = backend or get_default_backend()

    def extract(self, data: Any) -> ExtractionResult:
        """Extract all text from ``data``.

        The text is trimmed before it is measured against
        ``MIN_TEXT_THRESHOLD``; documents below it are reported as having no
        text layer (typically scanned images).
        """

        if not is_pdf_buffer(data):
            raise InvalidPDFInputError("Invalid input: pdf data must be bytes")
        if len(data) == 0:
            raise InvalidPDFInputError("Invalid input: PDF buffer is empty")
        if len(data) > MAX_PDF_SIZE:
            raise PDFTooLargeError(
                f"PDF file size ({format_megabytes(len(data))} MB) exceeds maximum allowed size "
                f"({MAX_PDF_SIZE // (1024 * 1024)} MB)",
                size_bytes=len(data),
                limit_bytes=MAX_PDF_SIZE,
            )

        try:
            parsed = self.backend.parse(bytes(data))
        except Exception as error:
            raise PDFExtractionError(f"Failed to parse PDF: {error}", cause=error) from error

        text = (parsed.text or "").strip()
        info = parsed.info or {}
        metadata = PDFMetadata(
            title=info.get("Title") or "",
            author=info.get("Author") or "",
            creator=info.get("Creator") or "",
            producer=info.get("Producer") or "",
        )
        LOGGER.debug("Extracted %s characters from %s pages", len(text), parsed.page_count)
        return ExtractionResult(
            text=text,
            page_count=parsed.page_count or 0,
            has_text_layer=len(text) >= MIN_TEXT_THRESHOLD,
            metadata=metadata,
        )

    def extract_page_range(self, data: Any, start_page: int, end_page: int) -> PageRangeExtraction:
        """Extract text from pages ``start_page`` to ``end_page`` (1-indexed, inclusive).

        Both bounds are clamped to the document length, so the returned bounds
        may be smaller than the requested ones.
        """

        if not is_pdf_buffer(data):
            raise InvalidPDFInputError("Invalid input: pdf data must be bytes")
        if not _is_int(start_page) or not _is_int(end_page):
            raise InvalidPDFInputError("start_page and end_page must be integers")
        if start_page < 1:
            raise InvalidPDFInputError("start_page must be at least 1")
        if end_page < start_page:
            raise InvalidPDFInputError("end_page must be greater than or equal to start_page")

        try:
            document = self.backend.load(bytes(data))
            total_pages = self.backend.page_count(document)
            if total_pages < 1:
                raise PDFExtractionError("document has no pages")

            actual_start = min(start_page, total_pages)
            actual_end = min(end_page, total_pages)
            page_indices = list(range(actual_start - 1, actual_end))

            subset = self.backend.extract_pages(document, page_indices)
            parsed = self.backend.parse(subset)
        except Exception as error:
            raise PDFExtractionError(f"Failed to extract page range: {error}", cause=error) from error

        LOGGER.debug(
            "Extracted pages %s-%s (requested %s-%s) of %s",
            actual_start,
            actual_end,
            start_page,
            end_page,
            total_pages,
        )
        return PageRangeExtraction(
            text=(parsed.text or "").strip(),
            page_count=len(page_indices),
            start_page=actual_start,
            end_page=actual_end,
        )
