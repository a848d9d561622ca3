"""API router exposing the document pipeline over HTTP."""
from __future__ import annotations

from functools import lru_cache
from typing import Any, Optional

from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile
from pydantic import BaseModel, Field

from taxdoc.config import get_settings
from taxdoc.pipeline import (
    ChunkingConfig,
    DocumentProcessor,
    InvalidPDFInputError,
    PDFExtractionError,
    ProcessorConfig,
    TextChunker,
    classify_document,
)
from taxdoc.telemetry import emit_exception

router = APIRouter(prefix="/documents", tags=["documents"])


class ClassifyRequest(BaseModel):
    """Request body accepted by the classify endpoint."""

    text: str = Field(..., description="Extracted document text to classify.")


class ChunkRequest(BaseModel):
    """Request body accepted by the chunk endpoint."""

    text: str = Field(..., description="Text to split into chunks.")
    chunk_size: Optional[int] = Field(None, ge=1, description="Maximum characters per chunk.")
    overlap: Optional[int] = Field(None, ge=0, description="Characters shared by adjacent chunks.")


class ChunkResponse(BaseModel):
    chunks: list[dict[str, Any]]


@lru_cache(maxsize=1)
def get_document_processor() -> DocumentProcessor:
    """FastAPI dependency returning the shared :class:`DocumentProcessor`."""

    settings = get_settings()
    return DocumentProcessor(ProcessorConfig(chunk_size=settings.chunk_size, overlap=settings.chunk_overlap))


async def _read_upload(file: UploadFile) -> bytes:
    contents = await file.read()
    await file.seek(0)
    return contents


@router.post("/validate")
async def validate_document(
    file: UploadFile = File(...),
    processor: DocumentProcessor = Depends(get_document_processor),
) -> dict[str, Any]:
    """Run byte-level and structural checks on an uploaded PDF."""

    data = await _read_upload(file)
    return processor.validator.validate(data).to_dict()


@router.post("/extract")
async def extract_document(
    file: UploadFile = File(...),
    start_page: Optional[int] = Query(None, description="First page (1-indexed, inclusive)."),
    end_page: Optional[int] = Query(None, description="Last page (1-indexed, inclusive)."),
    processor: DocumentProcessor = Depends(get_document_processor),
) -> dict[str, Any]:
    """Extract text from the whole document, or a page range when both bounds are given."""

    data = await _read_upload(file)
    if (start_page is None) != (end_page is None):
        raise HTTPException(status_code=400, detail="start_page and end_page must be provided together")

    try:
        if start_page is not None and end_page is not None:
            return processor.extractor.extract_page_range(data, start_page, end_page).to_dict()
        return processor.extractor.extract(data).to_dict()
    except InvalidPDFInputError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except PDFExtractionError as exc:
        emit_exception(module=__name__, error=exc, suggestion="Check that the upload is a readable PDF")
        raise HTTPException(status_code=422, detail=str(exc)) from exc


@router.post("/classify")
def classify(request: ClassifyRequest) -> dict[str, Any]:
    """Detect Income-Tax sections, PANs and assessment years in text."""

    return classify_document(request.text).to_dict()


@router.post("/chunk", response_model=ChunkResponse)
def chunk(
    request: ChunkRequest,
    processor: DocumentProcessor = Depends(get_document_processor),
) -> ChunkResponse:
    """Split text into overlapping chunks for token-limited consumers."""

    chunk_size = request.chunk_size if request.chunk_size is not None else processor.config.chunk_size
    overlap = request.overlap if request.overlap is not None else processor.config.overlap
    try:
        chunker = TextChunker(ChunkingConfig.from_options(chunk_size, overlap))
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return ChunkResponse(chunks=[item.to_dict() for item in chunker.chunk(request.text)])


@router.post("/prepare")
async def prepare_document(
    file: UploadFile = File(...),
    chunk_size: Optional[int] = Query(None, ge=1),
    overlap: Optional[int] = Query(None, ge=0),
    processor: DocumentProcessor = Depends(get_document_processor),
) -> dict[str, Any]:
    """Validate, extract, classify and chunk an uploaded PDF."""

    data = await _read_upload(file)
    return processor.prepare(data, chunk_size=chunk_size, overlap=overlap).to_dict()


@router.post("/summary")
async def summarize_document(
    file: UploadFile = File(...),
    processor: DocumentProcessor = Depends(get_document_processor),
) -> dict[str, Any]:
    """Return a lightweight preview of an uploaded PDF."""

    data = await _read_upload(file)
    return processor.summarize(data).to_dict()
