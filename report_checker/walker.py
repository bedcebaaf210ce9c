"""
Directory walker
================
Scans a reports tree and parses every file in it.

    walk(root) -> WalkResult(parsed_file_names, error_reports)

Files are collected first, then sorted by full path, so the output order does
not depend on how the filesystem lists directories. A file that fails to
parse becomes an ErrorReport and the scan goes on; a tree that cannot be
listed at all yields a single ErrorReport for the root and nothing else.
"""

import logging
import os
from pathlib import Path
from typing import List, Optional, Union

from tqdm import tqdm

from report_checker.models import ErrorKind, ErrorReport, ParseError, WalkResult
from report_checker.parser import FilenameParser

logger = logging.getLogger(__name__)

NOT_A_DIRECTORY = "Provided path is not a directory"


def _raise(err: OSError):
    raise err


def collect_files(root: Union[str, Path]) -> List[str]:
    """Every regular file under root, sorted by path. Raises OSError."""
    files = []
    for dirpath, _dirnames, filenames in os.walk(str(root), onerror=_raise):
        for fn in filenames:
            p = os.path.join(dirpath, fn)
            if os.path.isfile(p):
                files.append(p)
    return sorted(files)


def walk(root: Union[str, Path], parser: Optional[FilenameParser] = None,
         show_progress: bool = False) -> WalkResult:
    root_str = str(root)
    logger.debug("Starting to read reports from folder: %s", root_str)
    if not os.path.isdir(root_str):
        logger.warning("Provided path %s is not a directory", root_str)
        return WalkResult((), (ErrorReport(root_str, NOT_A_DIRECTORY,
                                           ErrorKind.DIRECTORY_READ_FAILURE),))

    try:
        files = collect_files(root_str)
    except OSError as exc:
        logger.error("Unable to read files from %s", root_str, exc_info=True)
        return WalkResult((), (ErrorReport(root_str, f"Unable to read files: {exc}",
                                           ErrorKind.DIRECTORY_READ_FAILURE),))

    parser = parser or FilenameParser()
    parsed, errors = [], []
    bar = tqdm(files, desc="Reading reports", unit="file", disable=not show_progress,
               bar_format="{l_bar}{bar}| {n_fmt}/{total_fmt} [{elapsed}<{remaining}]")
    for path in bar:
        name = os.path.basename(path)
        try:
            outcome = parser.parse(path)
        except Exception as exc:
            logger.error("Unexpected error while processing %s", path, exc_info=True)
            errors.append(ErrorReport(name, f"Unexpected error: {exc}"))
            continue
        if isinstance(outcome, ParseError):
            logger.warning("%s", outcome.message)
            errors.append(ErrorReport(name, outcome.message, outcome.kind))
        else:
            parsed.append(outcome)

    logger.debug("Completed reading reports: %d successful, %d errors",
                 len(parsed), len(errors))
    return WalkResult(tuple(parsed), tuple(errors))
