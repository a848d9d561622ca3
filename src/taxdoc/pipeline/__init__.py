"""Document intelligence pipeline for Income-Tax PDFs.

The functions below are the public entry points. Each accepts an optional
``backend`` so callers can substitute the PDF primitives.
"""
from __future__ import annotations

from typing import Any, List, Optional

from .backends import PDFBackend, PyPDFBackend, get_default_backend
from .chunking import ChunkingConfig, TextChunker
from .classification import DocumentClassifier
from .constants import (
    BOUNDARY_THRESHOLD,
    DEFAULT_CHUNK_OVERLAP,
    DEFAULT_CHUNK_SIZE,
    IT_SECTION_PATTERNS,
    MAX_PDF_SIZE,
    MIN_TEXT_THRESHOLD,
    PREVIEW_LENGTH,
)
from .errors import InvalidPDFInputError, PDFExtractionError, PDFProcessingError, PDFTooLargeError
from .extraction import PDFTextExtractor
from .models import (
    Chunk,
    DocumentClassification,
    DocumentSummary,
    ExtractionResult,
    PageRangeExtraction,
    ParsedPDF,
    PDFMetadata,
    PreparedDocument,
    ValidationResult,
)
from .processor import DocumentProcessor, ProcessorConfig
from .validation import PDFValidator

_CLASSIFIER = DocumentClassifier()


def validate_pdf(data: Any, *, backend: Optional[PDFBackend] = None) -> ValidationResult:
    return PDFValidator(backend).validate(data)


def extract_text(data: Any, *, backend: Optional[PDFBackend] = None) -> ExtractionResult:
    return PDFTextExtractor(backend).extract(data)


def extract_page_range(
    data: Any,
    start_page: int,
    end_page: int,
    *,
    backend: Optional[PDFBackend] = None,
) -> PageRangeExtraction:
    return PDFTextExtractor(backend).extract_page_range(data, start_page, end_page)


def classify_document(text: Any) -> DocumentClassification:
    return _CLASSIFIER.classify(text)


def chunk_text(
    text: Any,
    chunk_size: Optional[int] = None,
    overlap: Optional[int] = None,
) -> List[Chunk]:
    return TextChunker(ChunkingConfig.from_options(chunk_size, overlap)).chunk(text)


def prepare_for_analysis(
    data: Any,
    *,
    chunk_size: Optional[int] = None,
    overlap: Optional[int] = None,
    backend: Optional[PDFBackend] = None,
) -> PreparedDocument:
    return DocumentProcessor(backend=backend).prepare(data, chunk_size=chunk_size, overlap=overlap)


def summarize_pdf(data: Any, *, backend: Optional[PDFBackend] = None) -> DocumentSummary:
    return DocumentProcessor(backend=backend).summarize(data)


__all__ = [
    "BOUNDARY_THRESHOLD",
    "Chunk",
    "ChunkingConfig",
    "DEFAULT_CHUNK_OVERLAP",
    "DEFAULT_CHUNK_SIZE",
    "DocumentClassification",
    "DocumentClassifier",
    "DocumentProcessor",
    "DocumentSummary",
    "ExtractionResult",
    "IT_SECTION_PATTERNS",
    "InvalidPDFInputError",
    "MAX_PDF_SIZE",
    "MIN_TEXT_THRESHOLD",
    "PDFBackend",
    "PDFExtractionError",
    "PDFMetadata",
    "PDFProcessingError",
    "PDFTextExtractor",
    "PDFTooLargeError",
    "PDFValidator",
    "PREVIEW_LENGTH",
    "PageRangeExtraction",
    "ParsedPDF",
    "PreparedDocument",
    "ProcessorConfig",
    "PyPDFBackend",
    "TextChunker",
    "ValidationResult",
    "chunk_text",
    "classify_document",
    "extract_page_range",
    "extract_text",
    "get_default_backend",
    "prepare_for_analysis",
    "summarize_pdf",
]
