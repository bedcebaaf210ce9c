"""
Insurer catalog
===============
Closed list of the Czech health-insurance companies whose reports are tracked.

Each member carries its display-name variants (the first one is canonical and
is used when a folder has to be created), plus the spreadsheet column where
the roster marks that a client is insured there.
"""

from enum import Enum
from typing import Optional


class Insurer(Enum):
    CPZP = (("CPZP", "ČPZP"), "K", 11)
    OZP = (("OZP",), "L", 12)
    RBP = (("RBP", "RPB"), "M", 13)
    VOZP = (("VOZP", "V0ZP"), "N", 14)
    VZP = (("VZP",), "O", 15)
    ZP_SKODA = (("ZP Škoda", "ZPŠ", "ZPS", "ZP Skoda"), "P", 16)
    ZPMV = (("ZPMV", "ZMVP"), "Q", 17)

    def __init__(self, display_names: tuple, column_letter: str, column_index: int):
        self.display_names = display_names
        self.column_letter = column_letter
        self.column_index = column_index

    @property
    def canonical_name(self) -> str:
        return self.display_names[0]

    def __str__(self) -> str:
        return self.canonical_name

    @classmethod
    def default(cls) -> "Insurer":
        """First catalog entry, used when a filename names no insurer."""
        return next(iter(cls))

    @classmethod
    def from_display_name(cls, name: Optional[str]) -> Optional["Insurer"]:
        if name is None:
            return None
        return _BY_ALIAS.get(name.strip().lower())

    @classmethod
    def from_column_letter(cls, letter: Optional[str]) -> Optional["Insurer"]:
        if letter is None:
            return None
        return _BY_COLUMN_LETTER.get(letter.strip().upper())

    @classmethod
    def from_column_index(cls, index: int) -> Optional["Insurer"]:
        return _BY_COLUMN_INDEX.get(index)


# ── Lookup tables (built once, read-only) ────────────────────────────────────

_BY_ALIAS = {alias.lower(): ins for ins in Insurer for alias in ins.display_names}
_BY_COLUMN_LETTER = {ins.column_letter: ins for ins in Insurer}
_BY_COLUMN_INDEX = {ins.column_index: ins for ins in Insurer}
