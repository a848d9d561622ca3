"""Classification of Income-Tax documents from their extracted text."""
from __future__ import annotations

import logging
import re
from typing import Any, Iterable, Sequence

from .constants import (
    ASSESSMENT_YEAR_RE,
    IT_KEYWORD_MIN_MATCHES,
    IT_KEYWORD_PATTERNS,
    IT_SECTION_PATTERNS,
    PAN_RE,
    UNKNOWN_DOCUMENT_TYPE,
    SectionPattern,
)
from .models import DocumentClassification

LOGGER = logging.getLogger(__name__)

_WHITESPACE_RE = re.compile(r"\s+")


def _unique(values: Iterable[str]) -> tuple[str, ...]:
    return tuple(dict.fromkeys(values))


class DocumentClassifier:
    """Detect IT Act sections, PANs and assessment years in document text.

    The section catalog is a flat ordered table. Every entry that matches
    contributes its section label; the first matching entry in catalog order
    (not in text order) decides the document type.
    """

    def __init__(
        self,
        section_patterns: Sequence[SectionPattern] = IT_SECTION_PATTERNS,
        keyword_patterns: Sequence[re.Pattern[str]] = IT_KEYWORD_PATTERNS,
    ) -> None:
        self.section_patterns = tuple(section_patterns)
        self.keyword_patterns = tuple(keyword_patterns)

    def classify(self, text: Any) -> DocumentClassification:
        if not isinstance(text, str) or not text:
            return DocumentClassification()

        sections: list[str] = []
        document_type = UNKNOWN_DOCUMENT_TYPE
        for entry in self.section_patterns:
            if entry.pattern.search(text):
                sections.append(entry.section)
                if document_type == UNKNOWN_DOCUMENT_TYPE:
                    document_type = entry.document_type

        pan_numbers = _unique(PAN_RE.findall(text))
        assessment_years = _unique(
            _WHITESPACE_RE.sub("", match.group(1)) for match in ASSESSMENT_YEAR_RE.finditer(text)
        )

        keyword_matches = sum(1 for pattern in self.keyword_patterns if pattern.search(text))
        is_income_tax_document = bool(sections) or keyword_matches >= IT_KEYWORD_MIN_MATCHES

        LOGGER.debug(
            "Classified text as %s (sections=%s, keywords=%s)",
            document_type,
            sections,
            keyword_matches,
        )
        return DocumentClassification(
            sections=tuple(sections),
            document_type=document_type,
            pan_numbers=pan_numbers,
            assessment_years=assessment_years,
            is_income_tax_document=is_income_tax_document,
        )
