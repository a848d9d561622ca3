"""Chunking utilities for splitting document text into model-sized segments."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterator, List, Optional, Tuple

from .constants import BOUNDARY_THRESHOLD, DEFAULT_CHUNK_OVERLAP, DEFAULT_CHUNK_SIZE
from .models import Chunk

LOGGER = logging.getLogger(__name__)

_PARAGRAPH_BREAK = "\n\n"
_SENTENCE_BREAK = ". "


@dataclass(frozen=True, slots=True)
class ChunkingConfig:
    chunk_size: int = DEFAULT_CHUNK_SIZE
    overlap: int = DEFAULT_CHUNK_OVERLAP

    def __post_init__(self) -> None:
        if isinstance(self.chunk_size, bool) or not isinstance(self.chunk_size, int) or self.chunk_size <= 0:
            raise ValueError("chunk_size must be a positive integer")
        if isinstance(self.overlap, bool) or not isinstance(self.overlap, int) or self.overlap < 0:
            raise ValueError("overlap must be a non-negative integer")
        if self.overlap >= self.chunk_size:
            raise ValueError("overlap must be less than chunk_size")

    @classmethod
    def from_options(cls, chunk_size: Optional[int] = None, overlap: Optional[int] = None) -> "ChunkingConfig":
        return cls(
            chunk_size=DEFAULT_CHUNK_SIZE if chunk_size is None else chunk_size,
            overlap=DEFAULT_CHUNK_OVERLAP if overlap is None else overlap,
        )


class TextChunker:
    """Split text into bounded, overlapping chunks.

    Chunk ends snap back to the last paragraph break, then the last sentence
    break, when doing so keeps at least 70% of ``chunk_size``.
    """

    def __init__(self, config: Optional[ChunkingConfig] = None) -> None:
        self.config = config or ChunkingConfig()

    def chunk(self, text: Any) -> List[Chunk]:
        if not isinstance(text, str) or not text:
            return []

        spans = list(self._spans(text))
        total = len(spans)
        LOGGER.debug("Split %s characters into %s chunks", len(text), total)
        return [
            Chunk(text=text[start:end], index=index, total=total, start_char=start, end_char=end)
            for index, (start, end) in enumerate(spans)
        ]

    def _spans(self, text: str) -> Iterator[Tuple[int, int]]:
        chunk_size = self.config.chunk_size
        overlap = self.config.overlap
        text_length = len(text)

        if text_length <= chunk_size:
            yield 0, text_length
            return

        start = 0
        while start < text_length:
            end = min(start + chunk_size, text_length)
            if end < text_length:
                end = self._find_boundary(text, start, end)

            yield start, end
            if end >= text_length:
                break

            next_start = end - overlap
            if next_start <= start:
                next_start = end
            start = next_start

    def _find_boundary(self, text: str, start: int, end: int) -> int:
        threshold = start + self.config.chunk_size * BOUNDARY_THRESHOLD
        paragraph_break = text.rfind(_PARAGRAPH_BREAK, start, end)
        if paragraph_break > threshold:
            return paragraph_break + len(_PARAGRAPH_BREAK)
        sentence_break = text.rfind(_SENTENCE_BREAK, start, end)
        if sentence_break > threshold:
            return sentence_break + len(_SENTENCE_BREAK)
        return end
