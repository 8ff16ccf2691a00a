"""
Error types raised by the parsing and profile store layers.
Contains:
    - AddonProfilesError base class (a RuntimeError)
    - one subclass per failure the callers are expected to tell apart
"""

from __future__ import annotations

from typing import Any, Optional


class AddonProfilesError(RuntimeError):
    pass


class MalformedTable(AddonProfilesError):
    """
    The token stream does not describe a literal table.
    Load operations recover from this by using the fallback extractor.
    """

    def __init__(self, message: str, token: Optional[Any] = None, index: Optional[int] = None) -> None:
        super().__init__(message)
        self.token = token
        self.index = index


class StoreIOError(AddonProfilesError):
    pass


class NoAccountSelected(AddonProfilesError):
    def __init__(self, message: str = "no account selected") -> None:
        super().__init__(message)


class InvalidInstallDirectory(AddonProfilesError):
    def __init__(self, message: str, missing: Optional[str] = None) -> None:
        super().__init__(message)
        self.missing = missing


class BackupFailed(AddonProfilesError):
    pass


class WriteFailed(AddonProfilesError):
    pass


class ConfigError(AddonProfilesError):
    pass
