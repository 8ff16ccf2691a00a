"""
Map a parsed AddonProfilesDB table onto typed profile records.

The SavedVariables file is not validated by the addon that writes it, so
every lookup is type-checked and anything of the wrong shape is skipped
rather than reported.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from addonprofiles.core.types import Database, LuaTable, Profile, ProfileSection, Scope


def _table(v: Any) -> Optional[LuaTable]:
    return v if isinstance(v, dict) else None


def _int(v: Any) -> Optional[int]:
    # bool is an int subclass; a boolean `created` is not a timestamp.
    if isinstance(v, int) and not isinstance(v, bool):
        return v
    return None


def build_profile(name: str, scope: Scope, table: LuaTable) -> Profile:
    addons: Dict[str, bool] = {}
    for addon, enabled in (_table(table.get("addons")) or {}).items():
        if isinstance(enabled, bool):
            addons[addon] = enabled

    auto_deps = table.get("autoDeps")
    created = _int(table.get("created"))
    return Profile(
        name=name,
        scope=scope,
        addons=addons,
        auto_deps=auto_deps if isinstance(auto_deps, bool) else True,
        created=created if created is not None else 0,
    )


def _section(table: LuaTable, scope: Scope) -> ProfileSection:
    active = table.get("activeProfile")
    profiles: Dict[str, Profile] = {}
    for name, raw in (_table(table.get("profiles")) or {}).items():
        body = _table(raw)
        if body is not None:
            profiles[name] = build_profile(name, scope, body)
    return ProfileSection(
        active_profile=active if isinstance(active, str) else "",
        profiles=profiles,
    )


def map_database(root: Any) -> Database:
    """
    Build a Database from the root table. Missing `global` or `char`
    sections give empty sections.
    """
    root_table = _table(root) or {}

    global_table = _table(root_table.get("global"))
    account = _section(global_table, Scope.account) if global_table is not None else ProfileSection()

    characters: Dict[str, ProfileSection] = {}
    for char_key, raw in (_table(root_table.get("char")) or {}).items():
        body = _table(raw)
        if body is not None:
            characters[char_key] = _section(body, Scope.character)

    return Database(account=account, characters=characters)
