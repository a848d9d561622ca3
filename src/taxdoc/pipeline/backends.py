"""PDF primitives used by the pipeline.

The pipeline never talks to a PDF library directly. It goes through a
:class:`PDFBackend`, which keeps validation, classification and chunking
testable with in-memory fakes.
"""
from __future__ import annotations

import io
import logging
from abc import ABC, abstractmethod
from functools import lru_cache
from typing import Any, Sequence

from pdfminer.high_level import extract_text as pdfminer_extract_text
from PyPDF2 import PasswordType, PdfReader, PdfWriter
from PyPDF2.errors import FileNotDecryptedError

from .models import ParsedPDF

LOGGER = logging.getLogger(__name__)


class PDFBackend(ABC):
    """Abstract interface over structural PDF parsing and text extraction."""

    @abstractmethod
    def load(self, data: bytes) -> Any:
        """Parse the document structure, tolerating encryption.

        Raises when the structure cannot be read.
        """

    @abstractmethod
    def page_count(self, document: Any) -> int:
        """Return the number of pages in a loaded document."""

    @abstractmethod
    def extract_pages(self, document: Any, page_indices: Sequence[int]) -> bytes:
        """Copy the given zero-based pages into a new document and serialise it."""

    @abstractmethod
    def parse(self, data: bytes) -> ParsedPDF:
        """Extract text, page count and the document information dictionary."""


def _count_locked_pages(reader: PdfReader) -> int:
    """Read ``/Count`` from the page tree of a document that could not be decrypted.

    Page tree dictionaries hold names, numbers and references only, and those
    are stored unencrypted. PyPDF2 reads its own ``/Encrypt`` dictionary the
    same way.
    """

    reader._override_encryption = True
    try:
        return int(reader.trailer["/Root"]["/Pages"]["/Count"])
    finally:
        reader._override_encryption = False


class PyPDFBackend(PDFBackend):
    """Backend built on PyPDF2 for structure and pdfminer.six for text.

    Encrypted documents are opened with ``password`` (empty by default, which
    unlocks owner-only protection). When the password does not unlock the
    document its structure is still readable, so validation succeeds, while
    text extraction fails.
    """

    def __init__(self, password: str = "") -> None:
        self.password = password

    def load(self, data: bytes) -> PdfReader:
        reader = PdfReader(io.BytesIO(data), strict=False)
        if reader.is_encrypted and reader.decrypt(self.password) == PasswordType.NOT_DECRYPTED:
            LOGGER.debug("PDF is encrypted and the configured password does not open it")
        return reader

    def page_count(self, document: PdfReader) -> int:
        try:
            return len(document.pages)
        except FileNotDecryptedError:
            return _count_locked_pages(document)

    def extract_pages(self, document: PdfReader, page_indices: Sequence[int]) -> bytes:
        writer = PdfWriter()
        for index in page_indices:
            writer.add_page(document.pages[index])
        output = io.BytesIO()
        writer.write(output)
        return output.getvalue()

    def parse(self, data: bytes) -> ParsedPDF:
        reader = self.load(data)
        text = pdfminer_extract_text(io.BytesIO(data), password=self.password) or ""
        info: dict[str, Any] = {}
        metadata = reader.metadata
        if metadata is not None:
            fields = {
                "Title": metadata.title,
                "Author": metadata.author,
                "Creator": metadata.creator,
                "Producer": metadata.producer,
            }
            info = {key: str(value) for key, value in fields.items() if value}
        page_count = len(reader.pages)
        LOGGER.debug("Parsed PDF with %s pages and %s characters", page_count, len(text))
        return ParsedPDF(text=text, page_count=page_count, info=info)


@lru_cache(maxsize=1)
def get_default_backend() -> PDFBackend:
    """Return the shared backend instance used when none is injected."""

    from taxdoc.config import get_settings

    return PyPDFBackend(password=get_settings().pdf_password)
