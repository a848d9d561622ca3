"""Shared fixtures: an in-memory PDF backend and a minimal real PDF builder."""
from __future__ import annotations

import io
import os
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Sequence

import pytest
from PyPDF2 import PdfReader, PdfWriter

os.environ.setdefault("TAXDOC_LOG_DIR", str(Path(tempfile.gettempdir()) / "taxdoc-test-logs"))

from taxdoc.pipeline import ParsedPDF, PDFBackend  # noqa: E402

_SUBSET_MARKER = b"%PDF-SUBSET\n"


@dataclass
class _FakeDocument:
    pages: List[str]


@dataclass
class FakePDFBackend(PDFBackend):
    """Deterministic backend that never touches a real PDF library."""

    pages: Sequence[str] = ("",)
    info: Dict[str, Any] = field(default_factory=dict)
    load_error: Optional[Exception] = None
    parse_error: Optional[Exception] = None
    page_count_override: Optional[int] = None
    loaded: List[bytes] = field(default_factory=list)
    subsets: List[List[int]] = field(default_factory=list)

    def load(self, data: bytes) -> _FakeDocument:
        self.loaded.append(data)
        if self.load_error is not None:
            raise self.load_error
        return _FakeDocument(pages=list(self.pages))

    def page_count(self, document: _FakeDocument) -> int:
        return len(document.pages)

    def extract_pages(self, document: _FakeDocument, page_indices: Sequence[int]) -> bytes:
        self.subsets.append(list(page_indices))
        selected = "\f".join(document.pages[index] for index in page_indices)
        return _SUBSET_MARKER + selected.encode("utf-8")

    def parse(self, data: bytes) -> ParsedPDF:
        if self.parse_error is not None:
            raise self.parse_error
        if data.startswith(_SUBSET_MARKER):
            text = data[len(_SUBSET_MARKER):].decode("utf-8")
            return ParsedPDF(text=text, page_count=text.count("\f") + 1, info={})
        page_count = self.page_count_override if self.page_count_override is not None else len(self.pages)
        return ParsedPDF(text="\n\n".join(self.pages), page_count=page_count, info=dict(self.info))


def _escape(text: str) -> str:
    return text.replace("\\", "\\\\").replace("(", "\\(").replace(")", "\\)")


def build_pdf(pages: Sequence[str]) -> bytes:
    """Build a small but well-formed PDF with one line of Helvetica text per page."""

    page_total = len(pages)
    kids = " ".join(f"{4 + 2 * index} 0 R" for index in range(page_total))
    objects: List[bytes] = [
        b"<< /Type /Catalog /Pages 2 0 R >>",
        f"<< /Type /Pages /Kids [{kids}] /Count {page_total} >>".encode("ascii"),
        b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
    ]
    for index, text in enumerate(pages):
        content_number = 5 + 2 * index
        stream = f"BT /F1 10 Tf 36 720 Td ({_escape(text)}) Tj ET".encode("latin-1")
        objects.append(
            (
                "<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
                f"/Contents {content_number} 0 R /Resources << /Font << /F1 3 0 R >> >> >>"
            ).encode("ascii")
        )
        objects.append(b"<< /Length %d >>\nstream\n" % len(stream) + stream + b"\nendstream")

    output = bytearray(b"%PDF-1.4\n")
    offsets: List[int] = []
    for number, body in enumerate(objects, start=1):
        offsets.append(len(output))
        output += b"%d 0 obj\n" % number + body + b"\nendobj\n"

    xref_offset = len(output)
    output += b"xref\n0 %d\n" % (len(objects) + 1)
    output += b"0000000000 65535 f \n"
    for offset in offsets:
        output += b"%010d 00000 n \n" % offset
    output += b"trailer\n<< /Size %d /Root 1 0 R >>\n" % (len(objects) + 1)
    output += b"startxref\n%d\n%%%%EOF\n" % xref_offset
    return bytes(output)


def encrypt_pdf(data: bytes, *, user_password: str, owner_password: str = "owner") -> bytes:
    """Re-write ``data`` with the PDF Standard security handler."""

    reader = PdfReader(io.BytesIO(data))
    writer = PdfWriter()
    for page in reader.pages:
        writer.add_page(page)
    writer.encrypt(user_password=user_password, owner_password=owner_password)
    output = io.BytesIO()
    writer.write(output)
    return output.getvalue()


@pytest.fixture
def make_pdf() -> Callable[[Sequence[str]], bytes]:
    return build_pdf


@pytest.fixture
def fake_backend_factory() -> Callable[..., FakePDFBackend]:
    def _factory(**kwargs: Any) -> FakePDFBackend:
        return FakePDFBackend(**kwargs)

    return _factory


@pytest.fixture
def pdf_header_bytes() -> bytes:
    """Bytes that pass the signature check; structure is up to the backend."""

    return b"%PDF-1.7\n" + b"0" * 64


@pytest.fixture
def make_encrypted_pdf() -> Callable[..., bytes]:
    def _factory(pages: Sequence[str], *, user_password: str, owner_password: str = "owner") -> bytes:
        return encrypt_pdf(build_pdf(pages), user_password=user_password, owner_password=owner_password)

    return _factory
