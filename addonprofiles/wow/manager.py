"""
Profile store: account discovery, profile loading and applying a profile to
an account's AddOns.txt.

Install layout:
    <install>/WTF/Account/<account>/SavedVariables/AddonProfilesDB.lua
    <install>/WTF/Account/<account>/AddOns.txt
    <install>/WTF/Account/<account>/AddOns.txt.backup.YYYYMMDD_HHMMSS

Every call reads from disk; nothing is cached between calls. Callers
serialize concurrent use of the same account.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Union
import logging

from addonprofiles.core.errors import (
    BackupFailed,
    ConfigError,
    InvalidInstallDirectory,
    NoAccountSelected,
    StoreIOError,
    WriteFailed,
)
from addonprofiles.core.types import Database, Profile
from addonprofiles.lua import DATABASE_VAR_NAME, parse_file
from addonprofiles.wow.backups import create_backup, prune_backups
from addonprofiles.wow.manifest import MANIFEST_FILENAME, read_manifest, write_manifest

log = logging.getLogger(__name__)

PathLike = Union[str, Path]

DEFAULT_BACKUP_COUNT = 5


def accounts_dir(install_path: PathLike) -> Path:
    return Path(install_path) / "WTF" / "Account"


def saved_variables_path(install_path: PathLike, account: str) -> Path:
    return accounts_dir(install_path) / account / "SavedVariables" / f"{DATABASE_VAR_NAME}.lua"


def manifest_path(install_path: PathLike, account: str) -> Path:
    return accounts_dir(install_path) / account / MANIFEST_FILENAME


def _is_present(path: Path) -> bool:
    """
    Unlike Path.exists(), only a missing file counts as absent; any other
    stat failure (permissions, a file where a directory should be) raises.
    """
    try:
        path.stat()
    except FileNotFoundError:
        return False
    return True


def _require_account(account: Optional[str]) -> str:
    if not account:
        raise NoAccountSelected()
    return account


@dataclass(frozen=True)
class ApplyResult:
    manifest_path: Path
    backup_path: Optional[Path] = None
    pruned: List[Path] = field(default_factory=list)


def validate_install_directory(path: PathLike) -> None:
    p = Path(path)
    if not p.exists():
        raise InvalidInstallDirectory(f"directory does not exist: {p}", missing=str(p))
    if not p.is_dir():
        raise InvalidInstallDirectory(f"path is not a directory: {p}")
    if not (p / "WTF").exists():
        raise InvalidInstallDirectory("WTF directory not found", missing="WTF")
    if not (p / "WTF" / "Account").exists():
        raise InvalidInstallDirectory("WTF/Account directory not found", missing="WTF/Account")


def list_accounts(install_path: PathLike) -> List[str]:
    root = accounts_dir(install_path)
    try:
        return sorted(child.name for child in root.iterdir() if child.is_dir())
    except OSError as e:
        raise StoreIOError(f"failed to read accounts directory {root}: {e}") from e


def load_profiles(install_path: PathLike, account: str) -> Database:
    """
    Parse the account's AddonProfilesDB. A missing file is an empty Database.
    """
    path = saved_variables_path(install_path, _require_account(account))
    try:
        if not _is_present(path):
            log.debug("no saved variables at %s", path)
            return Database.empty()
        return parse_file(path)
    except OSError as e:
        raise StoreIOError(f"failed to read {path}: {e}") from e


def active_addons(install_path: PathLike, account: str) -> Dict[str, bool]:
    path = manifest_path(install_path, _require_account(account))
    try:
        if not _is_present(path):
            return {}
        return read_manifest(path)
    except OSError as e:
        raise StoreIOError(f"failed to read {path}: {e}") from e


def apply_profile(
    install_path: PathLike,
    account: str,
    profile: Profile,
    backup_count: int = DEFAULT_BACKUP_COUNT,
) -> ApplyResult:
    """
    Back up AddOns.txt, rewrite it from `profile.addons`, then prune backups
    down to `backup_count`.

      - backup failure: BackupFailed, manifest untouched
      - write failure: WriteFailed, the backup stays
      - pruning failure: logged only
    """
    path = manifest_path(install_path, _require_account(account))
    if backup_count < 1:
        raise ConfigError("backup count must be at least 1")

    try:
        backup = create_backup(path)
    except OSError as e:
        raise BackupFailed(f"failed to create backup of {path}: {e}") from e

    try:
        write_manifest(path, profile.addons)
    except OSError as e:
        raise WriteFailed(f"failed to write {path}: {e}") from e
    log.info(
        "applied profile %r to %s (%d/%d enabled)",
        profile.name,
        path,
        profile.enabled_count,
        len(profile.addons),
    )

    pruned: List[Path] = []
    try:
        pruned = prune_backups(path, backup_count)
    except OSError as e:
        log.warning("failed to clean up old backups of %s: %s", path, e)

    return ApplyResult(manifest_path=path, backup_path=backup, pruned=pruned)


@dataclass(frozen=True)
class ProfileStore:
    """
    Binds injected configuration (install path, account, retention) to the
    module-level operations.
    """
    install_path: Path
    account: str = ""
    backup_count: int = DEFAULT_BACKUP_COUNT

    @classmethod
    def from_config(cls, config) -> "ProfileStore":
        return cls(
            install_path=Path(config.install_path),
            account=config.selected_account,
            backup_count=config.backup_count,
        )

    def with_account(self, account: str) -> "ProfileStore":
        return ProfileStore(install_path=self.install_path, account=account, backup_count=self.backup_count)

    def validate(self) -> None:
        validate_install_directory(self.install_path)

    def list_accounts(self) -> List[str]:
        return list_accounts(self.install_path)

    def load_profiles(self) -> Database:
        return load_profiles(self.install_path, self.account)

    def active_addons(self) -> Dict[str, bool]:
        return active_addons(self.install_path, self.account)

    def apply_profile(self, profile: Profile) -> ApplyResult:
        return apply_profile(self.install_path, self.account, profile, self.backup_count)
