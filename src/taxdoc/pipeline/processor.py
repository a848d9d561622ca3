"""High level pipeline: validate, extract, classify and chunk a PDF."""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Optional

from taxdoc.logging_config import AUDIT_LOGGER_NAME
from taxdoc.telemetry import emit_document_event, traced_duration

from .backends import PDFBackend, get_default_backend
from .chunking import ChunkingConfig, TextChunker
from .classification import DocumentClassifier
from .constants import DEFAULT_CHUNK_OVERLAP, DEFAULT_CHUNK_SIZE, PREVIEW_LENGTH
from .extraction import PDFTextExtractor
from .models import DocumentSummary, PreparedDocument
from .validation import PDFValidator, is_pdf_buffer

LOGGER = logging.getLogger(__name__)
AUDIT_LOGGER = logging.getLogger(AUDIT_LOGGER_NAME)


def _buffer_size(data: Any) -> int:
    return len(data) if is_pdf_buffer(data) else 0


@dataclass(frozen=True, slots=True)
class ProcessorConfig:
    chunk_size: int = DEFAULT_CHUNK_SIZE
    overlap: int = DEFAULT_CHUNK_OVERLAP


class DocumentProcessor:
    """Pipeline orchestrating validation, extraction, classification and chunking.

    ``prepare`` and ``summarize`` never raise: every failure, expected or not,
    is reported through the ``is_valid``/``error`` fields of the result.
    """

    def __init__(
        self,
        config: Optional[ProcessorConfig] = None,
        backend: Optional[PDFBackend] = None,
    ) -> None:
        self.config = config or ProcessorConfig()
        self.backend = backend or get_default_backend()
        self.validator = PDFValidator(self.backend)
        self.extractor = PDFTextExtractor(self.backend)
        self.classifier = DocumentClassifier()

    def prepare(
        self,
        data: Any,
        *,
        chunk_size: Optional[int] = None,
        overlap: Optional[int] = None,
    ) -> PreparedDocument:
        """Process a PDF buffer and return text, classification and chunks."""

        started = time.perf_counter()
        validation = self.validator.validate(data)
        if not validation.is_valid:
            result = PreparedDocument(is_valid=False, error=validation.error, file_size=_buffer_size(data))
            self._record(result, started)
            return result

        try:
            with traced_duration("document.extract", logger=LOGGER, file_size=len(data)):
                extraction = self.extractor.extract(data)
            document_info = self.classifier.classify(extraction.text)
            chunker = TextChunker(
                ChunkingConfig.from_options(
                    chunk_size if chunk_size is not None else self.config.chunk_size,
                    overlap if overlap is not None else self.config.overlap,
                )
            )
            chunks = chunker.chunk(extraction.text)
        except Exception as error:
            LOGGER.warning("PDF processing failed after validation: %s", error)
            result = PreparedDocument(
                is_valid=False,
                error=f"PDF processing failed: {error}",
                page_count=validation.page_count,
                file_size=len(data),
            )
            self._record(result, started)
            return result

        result = PreparedDocument(
            is_valid=True,
            error=None,
            text=extraction.text,
            page_count=extraction.page_count,
            has_text_layer=extraction.has_text_layer,
            metadata=extraction.metadata,
            document_info=document_info,
            chunks=tuple(chunks),
            file_size=len(data),
        )
        self._record(result, started)
        return result

    def summarize(self, data: Any) -> DocumentSummary:
        """Return a preview of the document without the full text or chunks."""

        try:
            prepared = self.prepare(data)
            if not prepared.is_valid:
                return DocumentSummary(is_valid=False, error=prepared.error, file_size=_buffer_size(data))

            return DocumentSummary(
                is_valid=True,
                error=None,
                page_count=prepared.page_count,
                file_size=prepared.file_size,
                character_count=len(prepared.text),
                has_text_layer=prepared.has_text_layer,
                document_type=prepared.document_info.document_type,
                sections=prepared.document_info.sections,
                assessment_years=prepared.document_info.assessment_years,
                preview=prepared.text[:PREVIEW_LENGTH],
            )
        except Exception as error:
            LOGGER.exception("Unexpected error while summarising PDF")
            return DocumentSummary(
                is_valid=False,
                error=f"Failed to summarize PDF: {error}",
                file_size=_buffer_size(data),
            )

    def _record(self, result: PreparedDocument, started: float) -> None:
        duration_ms = (time.perf_counter() - started) * 1000.0
        emit_document_event(
            "document.prepare.complete" if result.is_valid else "document.prepare.failed",
            file_size=result.file_size,
            is_valid=result.is_valid,
            page_count=result.page_count,
            document_type=result.document_info.document_type,
            chunks=len(result.chunks),
            duration_ms=duration_ms,
            error=result.error,
        )
        AUDIT_LOGGER.info(
            {
                "event": "prepare",
                "is_valid": result.is_valid,
                "file_size": result.file_size,
                "page_count": result.page_count,
                "document_type": result.document_info.document_type,
                "chunk_count": len(result.chunks),
            }
        )
