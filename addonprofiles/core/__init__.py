"""
Docstring for addonprofiles.core
"""

from .errors import (
    AddonProfilesError,
    BackupFailed,
    ConfigError,
    InvalidInstallDirectory,
    MalformedTable,
    NoAccountSelected,
    StoreIOError,
    WriteFailed,
)
from .types import Database, LuaValue, Profile, ProfileEntry, ProfileSection, Scope

__all__ = [
    "AddonProfilesError",
    "BackupFailed",
    "ConfigError",
    "InvalidInstallDirectory",
    "MalformedTable",
    "NoAccountSelected",
    "StoreIOError",
    "WriteFailed",
    "Database",
    "LuaValue",
    "Profile",
    "ProfileEntry",
    "ProfileSection",
    "Scope",
]
