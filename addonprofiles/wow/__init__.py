"""
Docstring for addonprofiles.wow
"""

from .backups import create_backup, list_backups, prune_backups
from .manager import (
    DEFAULT_BACKUP_COUNT,
    ApplyResult,
    ProfileStore,
    active_addons,
    apply_profile,
    list_accounts,
    load_profiles,
    manifest_path,
    saved_variables_path,
    validate_install_directory,
)
from .manifest import parse_manifest, read_manifest, render_manifest, write_manifest

__all__ = [
    "DEFAULT_BACKUP_COUNT",
    "ApplyResult",
    "ProfileStore",
    "active_addons",
    "apply_profile",
    "create_backup",
    "list_accounts",
    "list_backups",
    "load_profiles",
    "manifest_path",
    "parse_manifest",
    "prune_backups",
    "read_manifest",
    "render_manifest",
    "saved_variables_path",
    "validate_install_directory",
    "write_manifest",
]
