"""
Timestamped manifest backups and retention.

A backup of `AddOns.txt` is a sibling file named
`AddOns.txt.backup.YYYYMMDD_HHMMSS`.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import List, Optional
import logging
import shutil

log = logging.getLogger(__name__)

BACKUP_MARKER = ".backup."
TIMESTAMP_FORMAT = "%Y%m%d_%H%M%S"


def backup_prefix(path: Path) -> str:
    return path.name + BACKUP_MARKER


def backup_path_for(path: Path, now: Optional[datetime] = None) -> Path:
    stamp = (now or datetime.now()).strftime(TIMESTAMP_FORMAT)
    return path.with_name(backup_prefix(path) + stamp)


def create_backup(path: Path, now: Optional[datetime] = None) -> Optional[Path]:
    """
    Copy `path` to a timestamped sibling. Returns the backup path, or None when
    there is nothing to back up. An existing backup with the same timestamp is
    never overwritten: it holds the older manifest and is returned as is.
    """
    if not path.exists():
        return None
    target = backup_path_for(path, now)
    try:
        with path.open("rb") as src, target.open("xb") as dst:
            shutil.copyfileobj(src, dst)
    except FileExistsError:
        log.info("backup %s already exists, keeping it", target)
        return target
    log.info("created backup %s", target)
    return target


def list_backups(path: Path) -> List[Path]:
    """Backups of `path`, newest (by modification time) first."""
    prefix = backup_prefix(path)
    backups = [p for p in path.parent.iterdir() if p.is_file() and p.name.startswith(prefix)]
    backups.sort(key=lambda p: p.stat().st_mtime, reverse=True)
    return backups


def prune_backups(path: Path, keep: int) -> List[Path]:
    """
    Delete all but the `keep` most recently modified backups of `path`.
    Returns the removed paths. Listing errors propagate; a file that cannot
    be removed is logged and left behind.
    """
    if keep < 0:
        raise ValueError("keep must be >= 0")
    removed: List[Path] = []
    for old in list_backups(path)[keep:]:
        try:
            old.unlink()
        except OSError as e:
            log.warning("could not remove old backup %s: %s", old, e)
            continue
        removed.append(old)
    if removed:
        log.info("pruned %d old backup(s) of %s", len(removed), path.name)
    return removed
