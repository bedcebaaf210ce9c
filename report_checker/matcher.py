"""
Match engine
============
Decides, per client, whether the reports for a target month are all there.

    available = {ico: {insurers with a correctly filed report that month}}

    client without required insurers → any report for the ICO is enough
    client with required insurers    → available[ico] must cover all of them

Files flagged invalid_directory never count. Nothing here touches the
filesystem and nothing is mutated; callers get a new client list back.
"""

import dataclasses
import logging
from collections import defaultdict
from typing import Dict, FrozenSet, Iterable, List, Optional

from report_checker.insurers import Insurer
from report_checker.models import Client, ParsedFileName, WalkResult

logger = logging.getLogger(__name__)


def ico_key(ico: Optional[str]) -> Optional[str]:
    """Trimmed ICO, or None when it is missing or blank."""
    if ico is None:
        return None
    return ico.strip() or None


def available_insurers(parsed_files: Iterable[ParsedFileName], target_year: int,
                       target_month: int) -> Dict[str, FrozenSet[Insurer]]:
    by_ico = defaultdict(set)
    for pf in parsed_files:
        if pf.invalid_directory:
            continue
        if pf.report_date.year != target_year or pf.report_date.month != target_month:
            continue
        key = ico_key(pf.ico)
        if key:
            by_ico[key].add(pf.insurer)
    return {ico: frozenset(insurers) for ico, insurers in by_ico.items()}


def is_satisfied(client: Client, available: Dict[str, FrozenSet[Insurer]]) -> bool:
    have = available.get(ico_key(client.ico))
    if have is None:
        return False
    required = _required(client)
    if not required:
        return bool(have)
    return have >= required


def _required(client: Client) -> FrozenSet[Insurer]:
    # None means "any insurer", same as an empty set
    return frozenset(client.required_insurers or ())


def missing_insurers(client: Client,
                     available: Dict[str, FrozenSet[Insurer]]) -> FrozenSet[Insurer]:
    """Required insurers with no report; empty for clients without requirements."""
    have = available.get(ico_key(client.ico), frozenset())
    return _required(client) - have


def evaluate(clients: Iterable[Client], parsed_files: Iterable[ParsedFileName],
             target_year: int, target_month: int) -> List[Client]:
    available = available_insurers(parsed_files, target_year, target_month)
    logger.info("Found %d reports (by ICO) matching year %d and month %d",
                len(available), target_year, target_month)

    updated = []
    for client in clients:
        has_report = is_satisfied(client, available)
        updated.append(dataclasses.replace(client, report_generated=has_report))
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Client %s: ICO=%s, Report=%s, RequiredInsurers=%s AvailableInsurers=%s",
                         client.name, client.ico, has_report,
                         sorted(map(str, _required(client))),
                         sorted(map(str, available.get(ico_key(client.ico), ()))))

    with_reports = sum(1 for c in updated if c.report_generated)
    logger.info("Match evaluation complete: %d/%d clients have reports",
                with_reports, len(updated))
    return updated


def evaluate_walk(clients: Iterable[Client], walk_result: WalkResult,
                  target_year: int, target_month: int) -> List[Client]:
    """evaluate() over a WalkResult, logging what the walk could not use."""
    parsed = walk_result.parsed_file_names
    logger.info("Found %d parsed report files", len(parsed))
    if walk_result.error_reports:
        logger.warning("Encountered %d errors while reading reports:",
                       len(walk_result.error_reports))
        for err in walk_result.error_reports:
            logger.warning("  - %s: %s", err.file_name, err.error_message)
    invalid = sum(1 for pf in parsed if pf.invalid_directory)
    if invalid:
        logger.info("Excluding %d files with invalid parent directories from matching", invalid)
    return evaluate(clients, parsed, target_year, target_month)
