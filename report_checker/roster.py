"""
Client roster loader.

Reads a JSON array like:

    [
      {"name": "Alfa s.r.o.", "ico": "10751416", "insurers": ["VZP", "OZP"]},
      {"name": "Beta a.s.",   "ico": "02604477"}
    ]

A client without "insurers" is satisfied by a report from any insurer.
"""

import json
import logging
from pathlib import Path
from typing import List, Union

from report_checker.errors import RosterError
from report_checker.insurers import Insurer
from report_checker.models import Client

logger = logging.getLogger(__name__)


def client_from_entry(entry, position: int) -> Client:
    if not isinstance(entry, dict):
        raise RosterError(f"Roster entry #{position} is not an object")
    name = str(entry.get("name") or "").strip()
    ico = str(entry.get("ico") or "").strip()
    if not ico:
        raise RosterError(f"Roster entry #{position} ({name or 'unnamed'}) has no ICO")

    required = set()
    for raw in entry.get("insurers") or []:
        insurer = Insurer.from_display_name(str(raw))
        if insurer is None:
            raise RosterError(f"Roster entry #{position} ({name}): unknown insurer {raw!r}")
        required.add(insurer)
    return Client(name=name, ico=ico, required_insurers=frozenset(required))


def load_clients(path: Union[str, Path]) -> List[Client]:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")
    try:
        data = json.loads(path.read_text(encoding='utf-8'))
    except json.JSONDecodeError as exc:
        raise RosterError(f"Roster {path} is not valid JSON: {exc}") from exc
    if not isinstance(data, list):
        raise RosterError(f"Roster {path} must contain a JSON array")

    clients = [client_from_entry(entry, i) for i, entry in enumerate(data, 1)]
    logger.info("Read %d clients from %s", len(clients), path)
    return clients
