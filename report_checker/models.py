"""
Data model
==========
Records passed between the walker, the parser and the match engine.
All of them are frozen; the match engine builds new Client instances instead
of flipping flags on the ones it was given.
"""

import datetime
from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, Optional, Tuple

from report_checker.insurers import Insurer


class ErrorKind(Enum):
    INSUFFICIENT_SEGMENTS = "insufficient_segments"
    MISSING_ICO = "missing_ico"
    MISSING_YEAR_MONTH = "missing_year_month"
    INVALID_DATE = "invalid_date"
    UNKNOWN_INSURER = "unknown_insurer"
    DIRECTORY_READ_FAILURE = "directory_read_failure"


@dataclass(frozen=True)
class ParsedFileName:
    ico: str
    report_date: datetime.date
    insurer: Insurer
    file_path: str
    invalid_directory: bool = False
    parent_dir_name: str = ""


@dataclass(frozen=True)
class ParseError:
    """Expected parse failure for a single file."""
    kind: ErrorKind
    message: str


@dataclass(frozen=True)
class ErrorReport:
    file_name: str
    error_message: str
    kind: Optional[ErrorKind] = None


@dataclass(frozen=True)
class WalkResult:
    parsed_file_names: Tuple[ParsedFileName, ...] = ()
    error_reports: Tuple[ErrorReport, ...] = ()


@dataclass(frozen=True)
class Client:
    name: str
    ico: str
    required_insurers: FrozenSet[Insurer] = field(default_factory=frozenset)
    report_generated: bool = False
