"""
Boundary-aware text chunker.

Splits page text into overlapping windows of at most `max_chunk_size`
characters. Window ends are pulled back to a sentence, paragraph or word
boundary; window starts are aligned to a nearby punctuation or whitespace.

Dependencies: re (stdlib)
System role: First stage of the ingestion pipeline
"""

import logging
import re

from ragdesk.models.chunk import Chunk

logger = logging.getLogger(__name__)

_SENTENCE_TERMINATORS = (".", "!", "?")
_START_BOUNDARIES = (".", "!", "?", ";", ":", "\n", " ")
_WORD_BOUNDARY = re.compile(r".*\b")


def _check_geometry(max_chunk_size: int, overlap_size: int) -> None:
    if max_chunk_size <= 0:
        raise ValueError("max_chunk_size must be positive")
    if overlap_size < 0:
        raise ValueError("overlap_size cannot be negative")


class TextChunker:
    """
    Greedy sliding-window chunker.

    Pure and synchronous; safe to share between pipelines.
    """

    def __init__(
        self,
        max_chunk_size: int = 1000,
        overlap_size: int = 100,
        boundary_window: int = 200,
        align_window: int = 60,
    ) -> None:
        """
        Initialize chunker defaults.

        Args:
            max_chunk_size: Upper bound on chunk length in characters
            overlap_size: Characters shared between consecutive windows
            boundary_window: Lookback for pulling a window end to a boundary
            align_window: Lookback for aligning the next window start
        """
        _check_geometry(max_chunk_size, overlap_size)

        self.max_chunk_size = max_chunk_size
        self.overlap_size = overlap_size
        self.boundary_window = boundary_window
        self.align_window = align_window

    def chunk(
        self,
        text: str,
        max_chunk_size: int | None = None,
        overlap_size: int | None = None,
    ) -> list[str]:
        """
        Split text into trimmed, non-empty chunks.

        Args:
            text: Raw page text
            max_chunk_size: Override for the configured maximum
            overlap_size: Override for the configured overlap

        Returns:
            list[str]: Chunks in document order, empty for blank input
        """
        return [
            span.text
            for span in self.chunk_spans(text, max_chunk_size, overlap_size)
        ]

    def chunk_spans(
        self,
        text: str,
        max_chunk_size: int | None = None,
        overlap_size: int | None = None,
        page_number: int | None = None,
    ) -> list[Chunk]:
        """
        Split text into chunks carrying offsets into the trimmed text.

        Args:
            text: Raw page text
            max_chunk_size: Override for the configured maximum
            overlap_size: Override for the configured overlap
            page_number: Page number stamped on every chunk

        Returns:
            list[Chunk]: Chunks in document order

        Raises:
            ValueError: When an override is non-positive (size) or negative (overlap)
        """
        max_size = self.max_chunk_size if max_chunk_size is None else max_chunk_size
        overlap = self.overlap_size if overlap_size is None else overlap_size
        _check_geometry(max_size, overlap)

        if not text or not text.strip():
            return []

        clean = text.strip()
        length = len(clean)
        if length <= max_size:
            return [Chunk(text=clean, start_offset=0, end_offset=length, page_number=page_number)]

        logger.debug(
            f"{__name__}:chunk_spans - Chunking {length} chars "
            f"(max={max_size}, overlap={overlap})"
        )

        chunks: list[Chunk] = []
        start = 0
        while start < length:
            end = min(start + max_size, length)
            if end < length:
                end = self._find_end(clean, start, end)

            raw = clean[start:end]
            piece = raw.strip()
            if piece:
                lead = len(raw) - len(raw.lstrip())
                chunks.append(
                    Chunk(
                        text=piece,
                        start_offset=start + lead,
                        end_offset=start + lead + len(piece),
                        page_number=page_number,
                    )
                )

            if end >= length:
                break

            tentative = end if end - start <= overlap else end - overlap
            min_next = max(tentative, start + 1)
            aligned = self._align_start(clean, min_next)
            start = min_next if aligned <= start else aligned

        logger.debug(f"{__name__}:chunk_spans - Produced {len(chunks)} chunks")
        return chunks

    def _find_end(self, text: str, start: int, end: int) -> int:
        """Pull end back to the best boundary inside the lookback window."""
        window_start = max(start, end - self.boundary_window)

        sentence = max(text.rfind(mark, window_start, end) for mark in _SENTENCE_TERMINATORS)
        if sentence != -1:
            return sentence + 1

        paragraph = text.rfind("\n\n", window_start, end)
        if paragraph != -1:
            return paragraph + 2

        space = text.rfind(" ", window_start, end)
        if space > start:
            return space

        return end

    def _align_start(self, text: str, proposed: int) -> int:
        """Move a proposed start back to just after nearby punctuation or whitespace."""
        if proposed <= 0:
            return 0

        window_from = max(0, proposed - self.align_window)
        window = text[window_from:proposed]

        boundary = max(window.rfind(mark) for mark in _START_BOUNDARIES)
        if boundary >= 0:
            return window_from + boundary + 1

        match = _WORD_BOUNDARY.match(window)
        if match and match.group(0):
            return window_from + len(match.group(0))

        return proposed
