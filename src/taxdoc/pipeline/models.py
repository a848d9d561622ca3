"""Result records produced by the document pipeline."""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Optional

from .constants import UNKNOWN_DOCUMENT_TYPE


def _as_plain(value: Any) -> Any:
    if isinstance(value, tuple):
        return [_as_plain(item) for item in value]
    if isinstance(value, dict):
        return {key: _as_plain(item) for key, item in value.items()}
    return value


class _Record:
    """Mixin giving records a JSON-friendly ``to_dict``."""

    __slots__ = ()

    def to_dict(self) -> dict[str, Any]:
        return _as_plain(asdict(self))  # type: ignore[call-overload]


@dataclass(frozen=True, slots=True)
class ValidationResult(_Record):
    """Outcome of the byte-level and structural checks on a PDF buffer."""

    is_valid: bool
    file_size: int
    page_count: int
    error: Optional[str] = None


@dataclass(frozen=True, slots=True)
class PDFMetadata(_Record):
    title: str = ""
    author: str = ""
    creator: str = ""
    producer: str = ""


@dataclass(frozen=True, slots=True)
class ParsedPDF:
    """Raw output of the text extraction primitive."""

    text: str
    page_count: int
    info: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class ExtractionResult(_Record):
    """Full-document text along with page count and document metadata."""

    text: str
    page_count: int
    has_text_layer: bool
    metadata: PDFMetadata = field(default_factory=PDFMetadata)


@dataclass(frozen=True, slots=True)
class PageRangeExtraction(_Record):
    """Text extracted from a page range.

    ``start_page`` and ``end_page`` are the bounds actually used after clamping
    to the document length, which may differ from the requested ones.
    """

    text: str
    page_count: int
    start_page: int
    end_page: int


@dataclass(frozen=True, slots=True)
class Chunk(_Record):
    text: str
    index: int
    total: int
    start_char: int
    end_char: int


@dataclass(frozen=True, slots=True)
class DocumentClassification(_Record):
    """Income-Tax references detected in a document's text."""

    sections: tuple[str, ...] = ()
    document_type: str = UNKNOWN_DOCUMENT_TYPE
    pan_numbers: tuple[str, ...] = ()
    assessment_years: tuple[str, ...] = ()
    is_income_tax_document: bool = False


@dataclass(frozen=True, slots=True)
class PreparedDocument(_Record):
    """Unified output of validation, extraction, classification and chunking."""

    is_valid: bool
    error: Optional[str]
    text: str = ""
    page_count: int = 0
    has_text_layer: bool = False
    metadata: PDFMetadata = field(default_factory=PDFMetadata)
    document_info: DocumentClassification = field(default_factory=DocumentClassification)
    chunks: tuple[Chunk, ...] = ()
    file_size: int = 0


@dataclass(frozen=True, slots=True)
class DocumentSummary(_Record):
    """Lightweight preview of a prepared document without the full text."""

    is_valid: bool
    error: Optional[str]
    page_count: int = 0
    file_size: int = 0
    character_count: int = 0
    has_text_layer: bool = False
    document_type: str = UNKNOWN_DOCUMENT_TYPE
    sections: tuple[str, ...] = ()
    assessment_years: tuple[str, ...] = ()
    preview: str = ""
