"""
Name normalization shared by the filename parser and the folder resolver.

    "ZP Škoda"  -> "ZP SKODA"
    "zp_skoda"  -> "ZP SKODA"
    "#@!test"   -> "TEST"
"""

import re
import unicodedata
from typing import Optional

_SEPARATORS = re.compile(r'[-_]+')
_WHITESPACE = re.compile(r'\s+')
_LEADING_JUNK = re.compile(r'^[^A-Za-z0-9]+')


def normalize(value: Optional[str]) -> str:
    value = (value or "").strip()
    if not value:
        return ""

    # Diacritics off: NFD splits "Š" into "S" + combining caron
    value = unicodedata.normalize("NFD", value)
    value = "".join(ch for ch in value if not unicodedata.combining(ch))

    value = _SEPARATORS.sub(" ", value)
    value = _WHITESPACE.sub(" ", value).strip()
    value = _LEADING_JUNK.sub("", value)
    return value.upper()


def token_sequence_contains(haystack: str, needle: str) -> bool:
    """True when needle's tokens occur as a contiguous run inside haystack's.

    Both arguments are expected to be normalized already.
    """
    if haystack == needle:
        return True
    hay_tokens = haystack.split()
    needle_tokens = needle.split()
    if not needle_tokens:
        return False
    width = len(needle_tokens)
    for i in range(len(hay_tokens) - width + 1):
        if hay_tokens[i:i + width] == needle_tokens:
            return True
    return False
