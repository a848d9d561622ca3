"""Limits and pattern catalogs shared by the document pipeline."""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Final

MAX_PDF_SIZE: Final[int] = 50 * 1024 * 1024
MIN_TEXT_THRESHOLD: Final[int] = 50
DEFAULT_CHUNK_SIZE: Final[int] = 100_000
DEFAULT_CHUNK_OVERLAP: Final[int] = 500
# Boundary snapping may shrink a chunk by at most 30%.
BOUNDARY_THRESHOLD: Final[float] = 0.7
PREVIEW_LENGTH: Final[int] = 500
PDF_SIGNATURE: Final[bytes] = b"%PDF-"

UNKNOWN_DOCUMENT_TYPE: Final[str] = "Unknown"


@dataclass(frozen=True, slots=True)
class SectionPattern:
    """Signature of an Income-Tax Act section within notice text."""

    pattern: re.Pattern[str]
    document_type: str
    section: str


def _section(regex: str, document_type: str, section: str) -> SectionPattern:
    return SectionPattern(re.compile(regex, re.IGNORECASE), document_type, section)


# Evaluated in order; the first match decides the document type.
IT_SECTION_PATTERNS: Final[tuple[SectionPattern, ...]] = (
    _section(r"section\s*143\s*\(\s*1\s*\)", "Intimation", "143(1)"),
    _section(r"section\s*143\s*\(\s*2\s*\)", "Scrutiny Notice", "143(2)"),
    _section(r"section\s*143\s*\(\s*3\s*\)", "Assessment Order", "143(3)"),
    _section(r"section\s*144", "Best Judgment Assessment", "144"),
    _section(r"section\s*147", "Reassessment", "147"),
    _section(r"section\s*148", "Reassessment Notice", "148"),
    _section(r"section\s*148A", "Reassessment Notice", "148A"),
    _section(r"section\s*154", "Rectification Order", "154"),
    _section(r"section\s*156", "Demand Notice", "156"),
    _section(r"section\s*245", "Set Off Notice", "245"),
    _section(r"section\s*246A", "Appeal", "246A"),
    _section(r"section\s*250", "CIT(A) Order", "250"),
    _section(r"section\s*254", "ITAT Order", "254"),
    _section(r"section\s*263", "Revision Order", "263"),
    _section(r"section\s*264", "Revision Order", "264"),
    _section(r"section\s*271", "Penalty Notice", "271"),
    _section(r"section\s*274", "Penalty Notice", "274"),
)

IT_KEYWORD_PATTERNS: Final[tuple[re.Pattern[str], ...]] = tuple(
    re.compile(regex, re.IGNORECASE)
    for regex in (
        r"income\s*tax",
        r"assessing\s*officer",
        r"commissioner.*income\s*tax",
        r"centralized\s*processing\s*centre",
        r"CPC.*Bengaluru",
        r"CBDT",
        r"Form\s*No\.\s*(?:16|26AS|ITR)",
        r"total\s*income",
        r"tax\s*payable",
        r"assessment\s*year",
    )
)

# Minimum keyword hits for a section-less text to count as an Income-Tax document.
IT_KEYWORD_MIN_MATCHES: Final[int] = 2

PAN_RE: Final[re.Pattern[str]] = re.compile(r"[A-Z]{5}[0-9]{4}[A-Z]")
ASSESSMENT_YEAR_RE: Final[re.Pattern[str]] = re.compile(
    r"(?:A\.?\s*Y\.?\s*|Assessment\s+Year\s*:?\s*)([0-9]{4}\s*[-–]\s*[0-9]{2,4})",
    re.IGNORECASE,
)
