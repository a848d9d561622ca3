#!/usr/bin/env python3
"""Command-line helper for inspecting Income-Tax PDFs.

Usage::

    taxdoc --extract notice.pdf
    taxdoc --validate notice.pdf
    taxdoc --detect notice.pdf
    taxdoc --summary notice.pdf
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence, TextIO

from taxdoc.config import get_settings
from taxdoc.pipeline import (
    DocumentProcessor,
    PDFProcessingError,
    ProcessorConfig,
)

_RULE_WIDTH = 65
_EXTRACT_PREVIEW_CHARS = 2000


def _configure_logging(level: str) -> None:
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="taxdoc",
        description="Validate, extract and classify Income-Tax PDF documents.",
    )
    commands = parser.add_mutually_exclusive_group(required=True)
    commands.add_argument("--extract", dest="command", action="store_const", const="extract", help="Extract text from a PDF")
    commands.add_argument("--validate", dest="command", action="store_const", const="validate", help="Validate a PDF file")
    commands.add_argument("--detect", dest="command", action="store_const", const="detect", help="Detect the document type")
    commands.add_argument("--summary", dest="command", action="store_const", const="summary", help="Print a document summary")
    parser.add_argument("file", nargs="?", help="Path to the PDF file")
    return parser


def _joined(values: Sequence[str]) -> str:
    return ", ".join(values) or "None detected"


def _run_extract(processor: DocumentProcessor, data: bytes, out: TextIO) -> None:
    result = processor.extractor.extract(data)
    print(f"Pages: {result.page_count}", file=out)
    print(f"Has text layer: {result.has_text_layer}", file=out)
    print(f"Text length: {len(result.text)} characters", file=out)
    print(f"Metadata: {json.dumps(result.metadata.to_dict(), indent=2)}", file=out)
    print("\n--- Extracted Text ---\n", file=out)
    print(result.text[:_EXTRACT_PREVIEW_CHARS], file=out)
    if len(result.text) > _EXTRACT_PREVIEW_CHARS:
        print(f"\n... ({len(result.text) - _EXTRACT_PREVIEW_CHARS} more characters)", file=out)


def _run_validate(processor: DocumentProcessor, data: bytes, out: TextIO) -> int:
    result = processor.validator.validate(data)
    if result.is_valid:
        print("Status: VALID", file=out)
        print(f"Pages: {result.page_count}", file=out)
        print(f"Size: {result.file_size / 1024:.1f} KB", file=out)
        return 0
    print("Status: INVALID", file=out)
    print(f"Error: {result.error}", file=out)
    return 1


def _run_detect(processor: DocumentProcessor, data: bytes, out: TextIO) -> None:
    extraction = processor.extractor.extract(data)
    info = processor.classifier.classify(extraction.text)
    print(f"Document Type: {info.document_type}", file=out)
    print(f"Is IT Document: {info.is_income_tax_document}", file=out)
    print(f"Sections: {_joined(info.sections)}", file=out)
    print(f"PAN Numbers: {_joined(info.pan_numbers)}", file=out)
    print(f"Assessment Years: {_joined(info.assessment_years)}", file=out)


def _run_summary(processor: DocumentProcessor, data: bytes, out: TextIO) -> int:
    summary = processor.summarize(data)
    print(f"Valid: {summary.is_valid}", file=out)
    print(f"Pages: {summary.page_count}", file=out)
    print(f"Characters: {summary.character_count}", file=out)
    print(f"Has Text Layer: {summary.has_text_layer}", file=out)
    print(f"Document Type: {summary.document_type}", file=out)
    print(f"Sections: {_joined(summary.sections)}", file=out)
    print(f"Assessment Years: {_joined(summary.assessment_years)}", file=out)
    if summary.error:
        print(f"Error: {summary.error}", file=out)
    if summary.preview:
        print("\n--- Preview ---\n", file=out)
        print(summary.preview, file=out)
    return 0 if summary.is_valid else 1


def main(argv: Optional[Sequence[str]] = None, processor: Optional[DocumentProcessor] = None) -> int:
    args = _build_parser().parse_args(argv)
    settings = get_settings()
    _configure_logging(settings.log_level)
    out = sys.stdout

    print("\n" + "=" * _RULE_WIDTH, file=out)
    print("  Income-Tax Document Processor", file=out)
    print("=" * _RULE_WIDTH + "\n", file=out)

    if not args.file:
        print("Error: Please provide a PDF file path", file=out)
        print(f"Usage: taxdoc --{args.command} <file.pdf>", file=out)
        return 1

    path = Path(args.file).resolve()
    if not path.is_file():
        print(f"Error: File not found: {path}", file=out)
        return 1

    data = path.read_bytes()
    print(f"File: {path}", file=out)
    print(f"Size: {len(data) / 1024:.1f} KB", file=out)
    print("-" * _RULE_WIDTH + "\n", file=out)

    if processor is None:
        processor = DocumentProcessor(
            ProcessorConfig(chunk_size=settings.chunk_size, overlap=settings.chunk_overlap)
        )

    try:
        if args.command == "extract":
            _run_extract(processor, data, out)
            return 0
        if args.command == "validate":
            return _run_validate(processor, data, out)
        if args.command == "detect":
            _run_detect(processor, data, out)
            return 0
        return _run_summary(processor, data, out)
    except PDFProcessingError as error:
        print(f"Error: {error}", file=out)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
