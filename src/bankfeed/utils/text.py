"""Text decoding and cleaning for statement free-text fields."""

import html
import re
import unicodedata
from typing import Optional, Union

# Tried in order when the source does not declare an encoding. cp1252 is a
# superset of latin-1 for printable characters and is what most banks mean
# by "8859-1".
FALLBACK_ENCODINGS = ("utf-8", "cp1252", "latin-1")

# Charset names found in OFX headers and XML declarations.
_CHARSET_ALIASES = {
    "1252": "cp1252",
    "8859-1": "latin-1",
    "iso-8859-1": "latin-1",
    "usascii": "ascii",
    "us-ascii": "ascii",
    "none": None,
    "csunicode": "utf-8",
    "unicode": "utf-8",
}

_WHITESPACE_RE = re.compile(r"\s+")
_EDGE_PUNCTUATION = " \t-*#:;,./\\|"


def normalize_charset(name: Optional[str]) -> Optional[str]:
    """Map a declared charset name to a Python codec name."""
    if not name:
        return None
    key = name.strip().lower()
    if key in _CHARSET_ALIASES:
        return _CHARSET_ALIASES[key]
    return key


def decode_bytes(content: bytes, declared: Optional[str] = None) -> str:
    """Decode statement bytes to text.

    The declared charset is tried first, then the fallback encodings.
    ``latin-1`` never fails, so this always returns a string.
    """
    encodings = []
    codec = normalize_charset(declared)
    if codec:
        encodings.append(codec)
    encodings.extend(e for e in FALLBACK_ENCODINGS if e not in encodings)

    for encoding in encodings:
        try:
            return content.decode(encoding)
        except (UnicodeDecodeError, LookupError):
            continue
    return content.decode("latin-1", errors="replace")


def unescape_markup(value: str) -> str:
    """Unescape HTML entities, including double-escaped ones like ``&amp;amp;``."""
    for _ in range(3):
        unescaped = html.unescape(value)
        if unescaped == value:
            break
        value = unescaped
    return value


def clean_text(value: Union[str, bytes, None]) -> Optional[str]:
    """Return canonical text for a free-text field, or None when empty.

    Decodes bytes, unescapes markup, NFC-normalizes and collapses whitespace.
    """
    if value is None:
        return None
    if isinstance(value, bytes):
        value = decode_bytes(value)
    value = unescape_markup(value)
    value = unicodedata.normalize("NFC", value)
    value = _WHITESPACE_RE.sub(" ", value).strip()
    return value or None


def display_payee(value: Optional[str]) -> str:
    """Return the display form of a cleaned payee."""
    if not value:
        return ""
    return value.strip(_EDGE_PUNCTUATION) or value
