"""
Data types used throughout the system.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple, Union

# Values produced by the table parser. Closed set: no floats, no arrays.
LuaTable = Dict[str, "LuaValue"]
LuaValue = Union[str, int, bool, None, LuaTable]

CharacterKey = str  # "<CharacterName> - <RealmName>"


class Scope(str, Enum):
    account = "account"
    character = "character"


@dataclass(frozen=True)
class Profile:
    name: str
    scope: Scope
    addons: Dict[str, bool] = field(default_factory=dict)
    auto_deps: bool = True
    created: int = 0  # unix seconds, 0 when unknown

    @property
    def enabled_count(self) -> int:
        return sum(1 for enabled in self.addons.values() if enabled)

    def filtered_addons(self, search: str = "") -> List[Tuple[str, bool]]:
        """
        Sorted (name, enabled) pairs, optionally narrowed to names containing
        `search` (case-insensitive).
        """
        needle = search.strip().lower()
        return [
            (name, self.addons[name])
            for name in sorted(self.addons)
            if not needle or needle in name.lower()
        ]


@dataclass(frozen=True)
class ProfileSection:
    """
    One `global` or per-character block of the database.
    """
    active_profile: str = ""
    profiles: Dict[str, Profile] = field(default_factory=dict)


@dataclass(frozen=True)
class ProfileEntry:
    name: str
    scope: Scope
    is_active: bool
    profile: Profile
    character: Optional[CharacterKey] = None


@dataclass(frozen=True)
class Database:
    """
    Parsed AddonProfilesDB.

    `account` holds the `global` section (account-wide profiles),
    `characters` maps "<Name> - <Realm>" to that character's section.
    Built fresh on every load and never mutated afterwards.
    """
    account: ProfileSection = field(default_factory=ProfileSection)
    characters: Dict[CharacterKey, ProfileSection] = field(default_factory=dict)

    @classmethod
    def empty(cls) -> "Database":
        return cls(account=ProfileSection(), characters={})

    def is_empty(self) -> bool:
        return not self.account.profiles and not self.account.active_profile and not self.characters

    def find_profile(self, name: str, character: Optional[CharacterKey] = None) -> Optional[Profile]:
        if character is not None:
            section = self.characters.get(character)
            if section is not None and name in section.profiles:
                return section.profiles[name]
        return self.account.profiles.get(name)

    def profile_entries(self, character: Optional[CharacterKey] = None) -> List[ProfileEntry]:
        """
        Flat listing for display: global profiles sorted by name, followed by
        the given character's profiles sorted by name.
        """
        entries = [
            ProfileEntry(
                name=name,
                scope=Scope.account,
                is_active=name == self.account.active_profile,
                profile=self.account.profiles[name],
            )
            for name in sorted(self.account.profiles)
        ]
        if character is None:
            return entries

        section = self.characters.get(character)
        if section is None:
            return entries
        for name in sorted(section.profiles):
            entries.append(
                ProfileEntry(
                    name=name,
                    scope=Scope.character,
                    is_active=name == section.active_profile,
                    profile=section.profiles[name],
                    character=character,
                )
            )
        return entries
