"""
ASCII normalisation of exported text.
"""

import re
import string
import unicodedata
from typing import Tuple

from recipe_scan.schema import RecipeField, RecipeRecord

_FRACTIONS = {
    "½": "1/2",
    "⅓": "1/3",
    "⅔": "2/3",
    "¼": "1/4",
    "¾": "3/4",
    "⅕": "1/5",
    "⅖": "2/5",
    "⅗": "3/5",
    "⅘": "4/5",
    "⅙": "1/6",
    "⅚": "5/6",
    "⅛": "1/8",
    "⅜": "3/8",
    "⅝": "5/8",
    "⅞": "7/8",
}

_REPLACEMENTS = str.maketrans({
    "‘": "'",
    "’": "'",
    "“": '"',
    "”": '"',
    "–": "-",
    "—": "-",
    "…": "...",
    "°": " deg ",
    **_FRACTIONS,
})

# A fraction glyph glued to a whole number ("1½") keeps the numbers apart
_MIXED_NUMBER = re.compile(r"(?<=\d)(?=[" + "".join(_FRACTIONS) + "])")
_HORIZONTAL_WS = re.compile(r"[ \t]+")

# Zero-width joiner, variation selectors, combining keycap
_MARKER_JOINERS = {"‍", "︎", "️", "⃣"}


def sanitize(text: str) -> str:
    """
    Normalise typographic characters to ASCII spellings.

    Curly quotes become straight, dashes become hyphens, the ellipsis becomes
    three periods, the degree sign becomes " deg " and vulgar fractions become
    n/d. Runs of spaces and tabs collapse to one space; line breaks are kept.
    Idempotent.
    """
    text = _MIXED_NUMBER.sub(" ", text)
    text = text.translate(_REPLACEMENTS)
    text = _HORIZONTAL_WS.sub(" ", text)
    return text.strip()


def sanitize_record(record: RecipeRecord) -> RecipeRecord:
    """Sanitize every field of a record in place."""
    for field in RecipeField:
        record.set(field, sanitize(record.get(field)))
    return record


def _is_marker_char(char: str) -> bool:
    return char in _MARKER_JOINERS or unicodedata.category(char) in ("So", "Sk")


def split_title_marker(title: str) -> Tuple[str, str]:
    """
    Split a title into its text and a trailing pictographic marker.

    Returns:
        (text, marker) where marker includes the whitespace before it
    """
    end = len(title)
    while end > 0 and _is_marker_char(title[end - 1]):
        end -= 1
    if end == len(title):
        return title, ""
    text = title[:end].rstrip()
    return text, title[len(text):]


def fix_title_case(title: str) -> str:
    """
    Title-case an all-caps title, leaving its trailing marker alone.

    "CHICKEN SOUP 🍲" becomes "Chicken Soup 🍲"; titles with any lowercase
    letter are returned unchanged.
    """
    text, marker = split_title_marker(title)
    has_upper = any(c.isupper() for c in text)
    has_lower = any(c.islower() for c in text)
    if not has_upper or has_lower:
        return title
    return string.capwords(text) + marker
