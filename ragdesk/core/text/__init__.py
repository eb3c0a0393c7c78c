"""Text preparation: chunking and metadata sanitisation."""

from ragdesk.core.text.chunker import TextChunker
from ragdesk.core.text.sanitizer import sanitize_text, sanitize_values

__all__ = ["TextChunker", "sanitize_text", "sanitize_values"]
