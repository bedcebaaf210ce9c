"""
Folder resolver
===============
Finds (or creates) the folder a report belongs in and moves files there.

Folder names are compared with the same normalization the parser uses, so a
report for ZP Škoda can land in "zp_skoda", "2025 ZP-SKODA reports" or
"ZP Škoda". Moves overwrite a same-named file at the destination; a batch of
moves is not transactional.
"""

import logging
import os
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Union

from report_checker.insurers import Insurer
from report_checker.models import ParsedFileName
from report_checker.normalize import normalize, token_sequence_contains

logger = logging.getLogger(__name__)


@dataclass
class Move:
    source: str
    destination: str
    insurer: Insurer
    status: str = "planned"   # planned, done, skipped, failed
    error: str = ""


class FolderResolver:
    def __init__(self, root: Union[str, Path]):
        self.root = Path(root)

    def _subdirectories(self, base: Optional[Path] = None):
        """Depth-first pre-order, sorted by name, root itself excluded."""
        base = self.root if base is None else base
        for d in sorted(p for p in base.iterdir() if p.is_dir() and not p.is_symlink()):
            yield d
            yield from self._subdirectories(d)

    def find_folder(self, insurer: Insurer) -> Optional[Path]:
        if not self.root.is_dir():
            return None
        aliases = [normalize(a) for a in insurer.display_names]
        for d in self._subdirectories():
            name = normalize(d.name)
            if any(token_sequence_contains(name, a) for a in aliases):
                return d
        return None

    def ensure_folder(self, insurer: Insurer) -> Path:
        found = self.find_folder(insurer)
        if found is not None:
            return found
        created = self.root / insurer.canonical_name
        created.mkdir(parents=True, exist_ok=True)
        logger.info("Created folder %s for %s", created, insurer)
        return created

    def move_file(self, file: Union[str, Path], target_dir: Union[str, Path]) -> Path:
        src, target_dir = Path(file), Path(target_dir)
        target_dir.mkdir(parents=True, exist_ok=True)
        dest = target_dir / src.name
        if dest.exists():
            if os.path.samefile(src, dest):
                return dest
            if dest.is_dir():
                raise IsADirectoryError(f"Destination is a directory: {dest}")
            dest.unlink()
        shutil.move(str(src), str(dest))
        logger.debug("Moved %s -> %s", src, dest)
        return dest

    def relocate(self, parsed_files: Iterable[ParsedFileName],
                 dry_run: bool = True) -> List[Move]:
        """Move every file flagged invalid_directory into its insurer's folder."""
        moves = []
        for pf in parsed_files:
            if not pf.invalid_directory:
                continue
            src = Path(pf.file_path)
            move = Move(source=str(src), destination="", insurer=pf.insurer)
            moves.append(move)
            try:
                target = self.find_folder(pf.insurer) or self.root / pf.insurer.canonical_name
                move.destination = str(target / src.name)
                if dry_run:
                    continue
                if not src.exists():
                    move.status = "skipped"
                    continue
                move.destination = str(self.move_file(src, self.ensure_folder(pf.insurer)))
                move.status = "done"
            except OSError as exc:
                move.status = "failed"
                move.error = str(exc)
                logger.error("Failed to move file %s: %s", src, exc)

        done = sum(1 for m in moves if m.status == "done")
        failed = sum(1 for m in moves if m.status == "failed")
        logger.info("Relocation %s: %d planned, %d done, %d failed",
                    "preview" if dry_run else "complete", len(moves), done, failed)
        return moves
