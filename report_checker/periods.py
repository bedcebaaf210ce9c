"""Target period selection: Czech month names and (year, month) pairs."""

import datetime
from enum import Enum
from typing import Union

from report_checker.normalize import normalize


class CzechMonth(Enum):
    LEDEN = ("Leden", 1)
    UNOR = ("Únor", 2)
    BREZEN = ("Březen", 3)
    DUBEN = ("Duben", 4)
    KVETEN = ("Květen", 5)
    CERVEN = ("Červen", 6)
    CERVENEC = ("Červenec", 7)
    SRPEN = ("Srpen", 8)
    ZARI = ("Září", 9)
    RIJEN = ("Říjen", 10)
    LISTOPAD = ("Listopad", 11)
    PROSINEC = ("Prosinec", 12)

    def __init__(self, czech_name: str, number: int):
        self.czech_name = czech_name
        self.number = number

    def __str__(self) -> str:
        return self.czech_name

    @classmethod
    def from_number(cls, number: int) -> "CzechMonth":
        for month in cls:
            if month.number == number:
                return month
        raise ValueError(f"Month number out of range: {number}")

    @classmethod
    def parse(cls, value: Union[int, str]) -> "CzechMonth":
        """Accept 1-12 (int or digits) or a Czech month name, diacritics optional."""
        if isinstance(value, int):
            return cls.from_number(value)
        text = (value or "").strip()
        if text.isdigit():
            return cls.from_number(int(text))
        wanted = normalize(text)
        for month in cls:
            if normalize(month.czech_name) == wanted:
                return month
        raise ValueError(f"Unknown month: {value!r}")


def default_year() -> int:
    return datetime.date.today().year
