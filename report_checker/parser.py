"""
Filename parser
===============
Turns one report filename into a ParsedFileName.

Report files are named by hand, so the layout varies; what every valid name
has is an 8-digit ICO and a year-month somewhere among its segments:

    10751416_VZP_2025_11.pdf         → ICO 10751416, 2025-11-01, VZP
    PPPZ-02604477-2025-11.pdf        → ICO 02604477, 2025-11-01
    Report 12345678 202507 OZP.pdf   → ICO 12345678, 2025-07-01, OZP

Segments are split on hyphens, underscores and whitespace. The insurer is
read from the name too, and the parent folder is checked against it: a VZP
report filed under an OZP folder is flagged with invalid_directory so the
match engine can ignore it and the folder resolver can move it.
"""

import datetime
import logging
import re
from pathlib import Path
from typing import List, Optional, Tuple, Union

from report_checker.errors import ReportParseError
from report_checker.insurers import Insurer
from report_checker.models import ErrorKind, ParsedFileName, ParseError
from report_checker.normalize import normalize, token_sequence_contains

logger = logging.getLogger(__name__)

MIN_SEGMENTS = 3

ICO_PATTERN = re.compile(r'(?<!\d)(\d{8})(?!\d)', re.ASCII)
YEAR_PATTERN = re.compile(r'\d{4}', re.ASCII)
MONTH_PATTERN = re.compile(r'0[1-9]|1[0-2]')
SIX_DIGITS = re.compile(r'\d{6}', re.ASCII)
YEAR_MONTH_HYPHEN = re.compile(r'(?<!\d)(\d{4})-(0[1-9]|1[0-2])(?!\d)', re.ASCII)
YEAR_MONTH_COMBINED = re.compile(r'(?<!\d)(\d{4})(0[1-9]|1[0-2])(?!\d)', re.ASCII)

_TO_HYPHEN = re.compile(r'[\s_]+')
_HYPHENS = re.compile(r'-+')


# ── Segment helpers ──────────────────────────────────────────────────────────

def strip_extension(file_name: str) -> str:
    dot = file_name.rfind('.')
    return file_name[:dot] if dot > 0 else file_name


def split_segments(base_name: str) -> Tuple[str, List[str]]:
    """Return the hyphen-normalized name and its non-empty segments."""
    normalized = _TO_HYPHEN.sub('-', base_name)
    tokens = [t for t in _HYPHENS.split(normalized) if t.strip()]
    return normalized, tokens


def extract_ico(base_name: str) -> Optional[str]:
    m = ICO_PATTERN.search(base_name)
    return m.group(1) if m else None


# ── Year-month strategies (tried in order, first hit wins) ───────────────────

def _adjacent_tokens(tokens, normalized):
    for first, second in zip(tokens, tokens[1:]):
        if YEAR_PATTERN.fullmatch(first) and MONTH_PATTERN.fullmatch(second):
            return first, second
    return None


def _six_digit_token(tokens, normalized):
    # exactly six digits, so an 8-digit ICO token never qualifies
    for token in tokens:
        if SIX_DIGITS.fullmatch(token) and MONTH_PATTERN.fullmatch(token[4:]):
            return token[:4], token[4:]
    return None


def _hyphenated_anywhere(tokens, normalized):
    m = YEAR_MONTH_HYPHEN.search(normalized)
    return (m.group(1), m.group(2)) if m else None


def _combined_anywhere(tokens, normalized):
    m = YEAR_MONTH_COMBINED.search(normalized)
    return (m.group(1), m.group(2)) if m else None


YEAR_MONTH_STRATEGIES = (
    _adjacent_tokens,
    _six_digit_token,
    _hyphenated_anywhere,
    _combined_anywhere,
)


def find_year_month(tokens: List[str], normalized: str) -> Optional[Tuple[str, str]]:
    for strategy in YEAR_MONTH_STRATEGIES:
        found = strategy(tokens, normalized)
        if found:
            return found
    return None


# ── Insurer resolution ───────────────────────────────────────────────────────

def match_insurer(tokens: List[str], base_name: str) -> Optional[Insurer]:
    for token in tokens:
        insurer = Insurer.from_display_name(token)
        if insurer:
            return insurer
    # Multi-word aliases ("ZP Škoda") never survive tokenization intact
    base_lower = base_name.lower()
    for insurer in Insurer:
        if any(alias.lower() in base_lower for alias in insurer.display_names):
            return insurer
    return None


def directory_matches(parent_name: str, insurer: Insurer) -> bool:
    if not parent_name.strip():
        return False
    parent = normalize(parent_name)
    return any(token_sequence_contains(parent, normalize(alias))
               for alias in insurer.display_names)


# ── Parser ───────────────────────────────────────────────────────────────────

class FilenameParser:
    """Parses report filenames.

    With strict_insurer a name that mentions no known insurer is a parse
    error; otherwise it is attributed to Insurer.default() and a warning is
    logged.
    """

    def __init__(self, strict_insurer: bool = False):
        self.strict_insurer = strict_insurer

    def parse(self, file_path: Union[str, Path]) -> Union[ParsedFileName, ParseError]:
        path = Path(file_path)
        file_name = path.name
        base_name = strip_extension(file_name)
        normalized, tokens = split_segments(base_name)

        if len(tokens) < MIN_SEGMENTS:
            return ParseError(ErrorKind.INSUFFICIENT_SEGMENTS,
                              f"Filename does not provide enough segments: {file_path}")

        ico = extract_ico(base_name)
        if ico is None:
            return ParseError(ErrorKind.MISSING_ICO,
                              f"ICO not found in file name {file_name}")

        year_month = find_year_month(tokens, normalized)
        if year_month is None:
            return ParseError(ErrorKind.MISSING_YEAR_MONTH,
                              f"Filename does not contain year-month information: {file_path}")

        year, month = year_month
        try:
            report_date = datetime.date(int(year), int(month), 1)
        except ValueError:
            return ParseError(ErrorKind.INVALID_DATE,
                              f"Invalid date segment in filename {file_name}")

        insurer = match_insurer(tokens, base_name)
        if insurer is None:
            if self.strict_insurer:
                return ParseError(ErrorKind.UNKNOWN_INSURER,
                                  f"No insurance company found in file name {file_name}")
            insurer = Insurer.default()
            logger.warning("No insurance company token found in filename '%s'; using default %s",
                           file_name, insurer)

        parent_name = path.parent.name
        return ParsedFileName(
            ico=ico,
            report_date=report_date,
            insurer=insurer,
            file_path=str(file_path),
            invalid_directory=not directory_matches(parent_name, insurer),
            parent_dir_name=parent_name,
        )

    def parse_or_raise(self, file_path: Union[str, Path]) -> ParsedFileName:
        outcome = self.parse(file_path)
        if isinstance(outcome, ParseError):
            raise ReportParseError(outcome)
        return outcome
