"""
Text helpers used by content tags.

Every function here is a pure ``str -> str`` transform with no side effects.
"""

from __future__ import annotations

import hashlib
import html
import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Optional
from urllib.parse import quote_plus, unquote_plus

_BLANK_LINES_RE = re.compile(r"^\s*$\n*", re.MULTILINE)
_NON_ASCII_RE = re.compile(r"[^\x00-\x7F]+")

# Typographic punctuation that editors and web pages substitute for plain ASCII
_ACCENT_MARKS = str.maketrans({
    "–": "-",
    "—": "-",
    "―": "-",
    "‗": "_",
    "‘": "'",
    "’": "'",
    "‚": ",",
    "‛": "'",
    "“": '"',
    "”": '"',
    "„": '"',
    "…": "...",
    "′": "'",
    "″": '"',
})


def capitalize(text: str) -> str:
    """Upper-case the first character; everything else is left alone."""
    if not text or text.isspace():
        return text
    first = text[0]
    if first.islower():
        return first.upper() + text[1:]
    return text


def _hex_digest(algorithm: str, text: str) -> str:
    # ASCII like the rest of the hashing helpers: non-ASCII chars become '?'
    data = text.encode("ascii", errors="replace")
    return hashlib.new(algorithm, data).hexdigest()


def md5(text: str) -> str:
    return _hex_digest("md5", text)


def sha256(text: str) -> str:
    return _hex_digest("sha256", text)


def html_decode(text: str) -> str:
    return html.unescape(text)


def url_decode(text: str) -> str:
    return unquote_plus(text)


def url_encode(text: str) -> str:
    return quote_plus(text)


def parse_number(text: str) -> Optional[Decimal]:
    """
    Parse *text* as a decimal number, allowing thousands separators.

    Returns None for anything that is not a finite number.
    """
    candidate = text.strip().replace(",", "")
    if not candidate:
        return None
    try:
        number = Decimal(candidate)
    except InvalidOperation:
        return None
    if not number.is_finite():
        return None
    return number


def format_number(text: str, decimal_places: int) -> str:
    """
    Format numeric *text* with thousands separators and a fixed scale.

    Non-numeric text is returned unchanged.
    """
    number = parse_number(text)
    if number is None:
        return text
    places = max(decimal_places, 0)
    quantum = Decimal(1).scaleb(-places)
    rounded = number.quantize(quantum, rounding=ROUND_HALF_UP)
    return f"{rounded:,.{places}f}"


def normalize_accents(text: str) -> str:
    return text.translate(_ACCENT_MARKS)


def remove_blank_lines(text: str) -> str:
    """Drop lines that are empty or contain only whitespace."""
    return _BLANK_LINES_RE.sub("", text)


def remove_non_ascii(text: str) -> str:
    return _NON_ASCII_RE.sub("", text)


def safe_left(text: str, length: int) -> str:
    """First *length* characters; never raises for short strings."""
    if not text or length <= 0:
        return ""
    return text[:length]


def safe_right(text: str, length: int) -> str:
    """Last *length* characters; never raises for short strings."""
    if not text or length <= 0:
        return ""
    return text[-length:]


def mid(text: str, start_position: int, length: int) -> str:
    """
    Substring starting at the 1-based *start_position*.

    Out-of-range positions are clamped instead of raising.
    """
    if not text or length <= 0:
        return ""
    start = max(start_position, 1) - 1
    return text[start:start + length]


__all__ = [
    "capitalize",
    "md5",
    "sha256",
    "html_decode",
    "url_decode",
    "url_encode",
    "parse_number",
    "format_number",
    "normalize_accents",
    "remove_blank_lines",
    "remove_non_ascii",
    "safe_left",
    "safe_right",
    "mid",
]
