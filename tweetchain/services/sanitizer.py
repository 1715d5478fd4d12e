"""
Tweet sanitizer and tokenizer.

Scraped tweets are dirty: non-ASCII characters, HTML-escaped ampersands and
links. Those are stripped here before the text reaches the chain. @mentions
and #hashtags are kept verbatim since they are real vocabulary.
"""
from __future__ import annotations

import re
import string
from typing import List, Union

from .errors import SanitizeError

URL_RE = re.compile(r"(?:f|ht)tps?://\S+")
ESCAPED_AMP = "&amp;"
WHITESPACE_RE = re.compile(r"\s+")

# string.printable holds the ASCII separators too, they are needed for splitting
_PRINTABLE = frozenset(string.printable)


def _coerce(raw: Union[str, bytes]) -> str:
    """Reduce input to printable ASCII, deleting anything else."""
    if raw is None:
        raise SanitizeError("cannot sanitize None")
    if isinstance(raw, (bytes, bytearray)):
        raw = bytes(raw).decode("utf-8", errors="ignore")
    elif not isinstance(raw, str):
        raise SanitizeError(f"cannot sanitize {type(raw).__name__}")
    return "".join(ch for ch in raw if ch in _PRINTABLE)


def sanitize_text(raw: Union[str, bytes]) -> str:
    """
    Clean a raw sample without tokenizing it.

    Args:
        raw: Tweet text, or UTF-8 bytes

    Returns:
        Printable ASCII text without escaped ampersands or URLs, stripped

    Raises:
        SanitizeError: raw is None or not text at all
    """
    text = _coerce(raw)

    # "&am&amp;p;" collapses into a new "&amp;" after one pass
    while ESCAPED_AMP in text:
        text = text.replace(ESCAPED_AMP, "")

    text = URL_RE.sub("", text)
    return text.strip()


def sanitize(raw: Union[str, bytes]) -> List[str]:
    """
    Clean and tokenize a raw sample.

    Tokens are whitespace-delimited and case-sensitive; punctuation is left
    attached ("dog." and "dog" are different tokens).

    Raises:
        SanitizeError: raw is None or not text at all
    """
    text = sanitize_text(raw)
    return [tok for tok in WHITESPACE_RE.split(text) if tok]
