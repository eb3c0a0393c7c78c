"""
Text sanitizer for vector metadata.

Removes code points that metadata stores reject and normalises to NFC.

Dependencies: unicodedata (stdlib)
System role: Metadata string hygiene during ingestion
"""

import re
import unicodedata

# C0 controls except tab, LF and CR
_CONTROL_CHARS = re.compile(r"[\x00-\x08\x0B\x0C\x0E-\x1F]")


def _is_dropped(code_point: int) -> bool:
    if 0xD800 <= code_point <= 0xDFFF:
        return True
    return (code_point & 0xFFFF) in (0xFFFE, 0xFFFF)


def sanitize_text(value: str | None) -> str:
    """
    Clean a string for storage as vector metadata.

    Drops surrogates and non-characters, replaces control characters with a
    space, applies NFC normalisation and trims. Never raises.

    Args:
        value: Raw string, may be None

    Returns:
        str: Sanitized string, empty for empty input
    """
    if not value:
        return ""

    cleaned = "".join(ch for ch in str(value) if not _is_dropped(ord(ch)))
    cleaned = _CONTROL_CHARS.sub(" ", cleaned)
    return unicodedata.normalize("NFC", cleaned).strip()


def sanitize_values(values: list[str] | None) -> list[str]:
    """Sanitize each value, dropping those that end up empty."""
    if not values:
        return []
    return [cleaned for cleaned in (sanitize_text(v) for v in values) if cleaned]
