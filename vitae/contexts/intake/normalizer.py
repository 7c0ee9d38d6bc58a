"""
Raw text normalizer for the Intake context.

Turns extracted resume text (from PDF, DOCX or plain text) into a LineStream:
an ordered tuple of trimmed, non-empty lines. Every extractor reads the
LineStream, never the raw text.

Normalize BEFORE parsing: all character-level cleanup happens here so the
extractors only deal with single-spaced printable lines.
"""

import re
import unicodedata
from typing import Tuple, Union

LineStream = Tuple[str, ...]

# Unicode replacements: problematic char -> plain equivalent.
# Dashes and bullets are kept; the section extractors split on them.
UNICODE_REPLACEMENTS = {
    # Zero-width characters -> remove
    "\u200b": "",  # zero-width space
    "\u200c": "",  # zero-width non-joiner
    "\u200d": "",  # zero-width joiner
    "\u2060": "",  # word joiner
    "\ufeff": "",  # BOM
    # Quotes
    "\u2018": "'",  # left single quote
    "\u2019": "'",  # right single quote
    "\u201c": '"',  # left double quote
    "\u201d": '"',  # right double quote
}

_LINE_BREAKS = re.compile(r"\r\n?|[\u2028\u2029\x0b\x0c\x85]")
_HORIZONTAL_WHITESPACE = re.compile(r"[^\S\n]+")


def as_text(raw: Union[str, bytes, None]) -> str:
    """Coerce raw input to str. Bytes are decoded as UTF-8 with replacement."""
    if raw is None:
        return ""
    if isinstance(raw, bytes):
        return raw.decode("utf-8", errors="replace")
    return raw


def is_blank(raw: Union[str, bytes, None]) -> bool:
    """True for None, empty, or whitespace-only input."""
    return not as_text(raw).strip()


def normalize_unicode(text: str) -> str:
    """
    Apply NFKC normalization and replace problematic characters.

    NFKC folds compatibility forms (ligatures, full-width letters,
    non-breaking spaces) into their plain equivalents.
    """
    text = unicodedata.normalize("NFKC", text)
    for char, replacement in UNICODE_REPLACEMENTS.items():
        text = text.replace(char, replacement)
    return text


def _printable(char: str) -> str:
    return char if char == "\n" or char.isprintable() else " "


def clean_text(raw: Union[str, bytes, None]) -> str:
    """
    Normalize raw text while keeping line structure.

    - unify line endings to \\n
    - replace non-printable characters with spaces
    - collapse runs of horizontal whitespace to a single space
    """
    text = normalize_unicode(as_text(raw))
    text = _LINE_BREAKS.sub("\n", text)
    text = "".join(_printable(char) for char in text)
    return _HORIZONTAL_WHITESPACE.sub(" ", text)


def to_line_stream(raw: Union[str, bytes, None]) -> LineStream:
    """
    Build the LineStream for raw text.

    Args:
        raw: Extracted resume text

    Returns:
        Tuple of trimmed, non-empty lines in document order
    """
    return tuple(line.strip() for line in clean_text(raw).split("\n") if line.strip())
