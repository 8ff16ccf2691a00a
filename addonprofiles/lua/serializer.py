"""Render parsed values back into SavedVariables text."""

from __future__ import annotations

from typing import Any, List

from addonprofiles.core.types import LuaTable, LuaValue


def canonicalize(value: Any) -> Any:
    if isinstance(value, dict):
        return {k: canonicalize(value[k]) for k in sorted(value.keys())}
    return value


def _scalar(value: LuaValue) -> str:
    if value is None:
        return "nil"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, str):
        # Strings are kept exactly as lexed (escapes untranslated), so they
        # are written back verbatim.
        return f'"{value}"'
    raise TypeError(f"cannot serialize {type(value).__name__}")


def _write(value: LuaValue, depth: int, out: List[str]) -> None:
    if not isinstance(value, dict):
        out.append(_scalar(value))
        return
    if not value:
        out.append("{\n" + "\t" * depth + "}")
        return
    out.append("{\n")
    for key, item in value.items():
        if not isinstance(key, str):
            raise TypeError(f"table keys must be strings, got {type(key).__name__}")
        out.append("\t" * (depth + 1) + f'["{key}"] = ')
        _write(item, depth + 1, out)
        out.append(",\n")
    out.append("\t" * depth + "}")


def dumps(value: LuaValue) -> str:
    """Serialize a value with keys in sorted order, so output is stable."""
    out: List[str] = []
    _write(canonicalize(value), 0, out)
    return "".join(out)


def dump_assignment(name: str, table: LuaTable) -> str:
    """A complete SavedVariables file body: `<name> = { ... }`."""
    return f"\n{name} = {dumps(table)}\n"
