from __future__ import annotations

from typing import Iterator

import pytest
from fastapi.testclient import TestClient

from taxdoc.api.documents import get_document_processor
from taxdoc.main import app
from taxdoc.pipeline import DocumentProcessor, ProcessorConfig

NOTICE_TEXT = "Intimation under Section 143(1) of the Income Tax Act for A.Y. 2023-24, PAN ABCDE1234F"


@pytest.fixture
def client(fake_backend_factory) -> Iterator[TestClient]:
    backend = fake_backend_factory(pages=["First page", NOTICE_TEXT, "Third page"])
    processor = DocumentProcessor(ProcessorConfig(chunk_size=40, overlap=5), backend=backend)
    app.dependency_overrides[get_document_processor] = lambda: processor
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def _upload(data: bytes) -> dict:
    return {"file": ("notice.pdf", data, "application/pdf")}


def test_health_endpoints(client: TestClient) -> None:
    assert client.get("/").text == "ok"
    assert client.get("/healthz").text == "ok"


def test_validate_endpoint(client: TestClient, pdf_header_bytes: bytes) -> None:
    response = client.post("/documents/validate", files=_upload(pdf_header_bytes))

    assert response.status_code == 200
    assert response.json() == {
        "is_valid": True,
        "file_size": len(pdf_header_bytes),
        "page_count": 3,
        "error": None,
    }


def test_validate_endpoint_reports_bad_header(client: TestClient) -> None:
    response = client.post("/documents/validate", files=_upload(b"PK\x03\x04 zip archive"))

    assert response.status_code == 200
    payload = response.json()
    assert payload["is_valid"] is False
    assert "valid PDF header" in payload["error"]


def test_extract_endpoint(client: TestClient, pdf_header_bytes: bytes) -> None:
    response = client.post("/documents/extract", files=_upload(pdf_header_bytes))

    assert response.status_code == 200
    payload = response.json()
    assert payload["page_count"] == 3
    assert NOTICE_TEXT in payload["text"]
    assert payload["has_text_layer"] is True
    assert set(payload["metadata"]) == {"title", "author", "creator", "producer"}


def test_extract_page_range_endpoint(client: TestClient, pdf_header_bytes: bytes) -> None:
    response = client.post(
        "/documents/extract",
        params={"start_page": 2, "end_page": 9},
        files=_upload(pdf_header_bytes),
    )

    assert response.status_code == 200
    payload = response.json()
    assert payload["start_page"] == 2
    assert payload["end_page"] == 3
    assert payload["page_count"] == 2
    assert "First page" not in payload["text"]


def test_extract_page_range_requires_both_bounds(client: TestClient, pdf_header_bytes: bytes) -> None:
    response = client.post("/documents/extract", params={"start_page": 2}, files=_upload(pdf_header_bytes))

    assert response.status_code == 400


def test_extract_page_range_rejects_inverted_bounds(client: TestClient, pdf_header_bytes: bytes) -> None:
    response = client.post(
        "/documents/extract",
        params={"start_page": 3, "end_page": 1},
        files=_upload(pdf_header_bytes),
    )

    assert response.status_code == 400
    assert "end_page" in response.json()["detail"]


def test_extract_endpoint_reports_parse_failure(fake_backend_factory, pdf_header_bytes: bytes) -> None:
    backend = fake_backend_factory(parse_error=RuntimeError("unsupported filter"))
    app.dependency_overrides[get_document_processor] = lambda: DocumentProcessor(backend=backend)
    try:
        response = TestClient(app).post("/documents/extract", files=_upload(pdf_header_bytes))
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 422
    assert response.json()["detail"] == "Failed to parse PDF: unsupported filter"


def test_classify_endpoint(client: TestClient) -> None:
    response = client.post("/documents/classify", json={"text": NOTICE_TEXT})

    assert response.status_code == 200
    assert response.json() == {
        "sections": ["143(1)"],
        "document_type": "Intimation",
        "pan_numbers": ["ABCDE1234F"],
        "assessment_years": ["2023-24"],
        "is_income_tax_document": True,
    }


def test_chunk_endpoint_uses_processor_defaults(client: TestClient) -> None:
    response = client.post("/documents/chunk", json={"text": NOTICE_TEXT})

    assert response.status_code == 200
    chunks = response.json()["chunks"]
    assert len(chunks) > 1
    assert chunks[0]["start_char"] == 0
    assert chunks[-1]["end_char"] == len(NOTICE_TEXT)
    assert all(item["total"] == len(chunks) for item in chunks)


def test_chunk_endpoint_rejects_bad_configuration(client: TestClient) -> None:
    response = client.post("/documents/chunk", json={"text": NOTICE_TEXT, "chunk_size": 10, "overlap": 10})

    assert response.status_code == 400
    assert response.json()["detail"] == "overlap must be less than chunk_size"


def test_prepare_endpoint(client: TestClient, pdf_header_bytes: bytes) -> None:
    response = client.post(
        "/documents/prepare",
        params={"chunk_size": 500, "overlap": 0},
        files=_upload(pdf_header_bytes),
    )

    assert response.status_code == 200
    payload = response.json()
    assert payload["is_valid"] is True
    assert payload["document_info"]["document_type"] == "Intimation"
    assert len(payload["chunks"]) == 1
    assert payload["file_size"] == len(pdf_header_bytes)


def test_prepare_endpoint_returns_invalid_envelope(client: TestClient) -> None:
    response = client.post("/documents/prepare", files=_upload(b""))

    assert response.status_code == 200
    payload = response.json()
    assert payload["is_valid"] is False
    assert payload["chunks"] == []
    assert payload["document_info"]["document_type"] == "Unknown"


def test_summary_endpoint(client: TestClient, pdf_header_bytes: bytes) -> None:
    response = client.post("/documents/summary", files=_upload(pdf_header_bytes))

    assert response.status_code == 200
    payload = response.json()
    assert payload["is_valid"] is True
    assert payload["document_type"] == "Intimation"
    assert payload["sections"] == ["143(1)"]
    assert payload["preview"].startswith("First page")
    assert "chunks" not in payload


def test_api_is_a_regular_package() -> None:
    import taxdoc.api

    assert taxdoc.api.__file__ is not None
    assert taxdoc.api.__file__.endswith("__init__.py")
