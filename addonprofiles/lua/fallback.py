"""
Best-effort profile extraction for files the table parser rejects.

Works directly on the text: table bodies are isolated by counting brace
depth (skipping string literals and `--` comments) and the known keys are
picked out with patterns. Nothing in here raises; whatever cannot be
recognized is left out of the result.
"""

from __future__ import annotations

from typing import Dict, Optional
import re

from addonprofiles.core.types import Database, Profile, ProfileSection, Scope
from addonprofiles.lua.parser import DATABASE_VAR_NAME, INT64_MAX, INT64_MIN

_KEY_RE = re.compile(r'\[\s*"((?:[^"\\\n]|\\.)*)"\s*\]\s*=\s*')
_INT_RE = re.compile(r"-?\d+")


def _skip_string(text: str, i: int) -> int:
    """`i` is on the opening quote; returns the index after the closing one."""
    i += 1
    while i < len(text) and text[i] != '"':
        if text[i] == "\\":
            i += 1
        i += 1
    return min(i + 1, len(text))


def _skip_comment(text: str, i: int) -> int:
    end = text.find("\n", i)
    return len(text) if end < 0 else end


def match_brace(text: str, start: int) -> int:
    """
    Index just past the `}` closing the `{` at `start`. An unbalanced table
    runs to the end of the text.
    """
    depth = 0
    i = start
    n = len(text)
    while i < n:
        ch = text[i]
        if ch == '"':
            i = _skip_string(text, i)
            continue
        if ch == "-" and text.startswith("--", i):
            i = _skip_comment(text, i)
            continue
        if ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return i + 1
        i += 1
    return n


def _read_scalar(text: str, i: int) -> tuple[str, int]:
    if i < len(text) and text[i] == '"':
        end = _skip_string(text, i)
        return text[i:end], end
    end = i
    while end < len(text) and text[end] not in ",\n}":
        end += 1
    raw = text[i:end]
    comment = raw.find("--")
    if comment >= 0:
        raw = raw[:comment]
    return raw.strip(), end


def scan_entries(body: str) -> Dict[str, str]:
    """
    Top-level `["key"] = value` entries of a table body, as raw text.
    Nested tables are returned whole (braces included) and not descended.
    """
    out: Dict[str, str] = {}
    i = 0
    n = len(body)
    while i < n:
        m = _KEY_RE.match(body, i)
        if m:
            start = m.end()
            if body.startswith("{", start):
                end = match_brace(body, start)
                out[m.group(1)] = body[start:end]
            else:
                out[m.group(1)], end = _read_scalar(body, start)
            i = max(end, start)
            continue

        ch = body[i]
        if ch == "{":
            i = match_brace(body, i)
        elif ch == '"':
            i = _skip_string(body, i)
        elif ch == "-" and body.startswith("--", i):
            i = _skip_comment(body, i)
        else:
            i += 1
    return out


def _table_body(raw: Optional[str]) -> Optional[str]:
    if raw is None or not raw.startswith("{"):
        return None
    return raw[1:-1] if raw.endswith("}") else raw[1:]


def _string(raw: Optional[str]) -> Optional[str]:
    if raw is None or not raw.startswith('"'):
        return None
    inner = raw[1:]
    return inner[:-1] if inner.endswith('"') else inner


def _profile(name: str, scope: Scope, body: str) -> Profile:
    entries = scan_entries(body)

    addons: Dict[str, bool] = {}
    addons_body = _table_body(entries.get("addons"))
    if addons_body is not None:
        for addon, raw in scan_entries(addons_body).items():
            if raw in ("true", "false"):
                addons[addon] = raw == "true"

    auto_deps = entries.get("autoDeps")
    created_raw = entries.get("created") or ""
    created = 0
    if _INT_RE.fullmatch(created_raw):
        created = max(INT64_MIN, min(INT64_MAX, int(created_raw)))

    return Profile(
        name=name,
        scope=scope,
        addons=addons,
        auto_deps=auto_deps != "false",
        created=created,
    )


def _section(body: Optional[str], scope: Scope) -> ProfileSection:
    if body is None:
        return ProfileSection()
    entries = scan_entries(body)
    profiles: Dict[str, Profile] = {}
    profiles_body = _table_body(entries.get("profiles"))
    if profiles_body is not None:
        for name, raw in scan_entries(profiles_body).items():
            profile_body = _table_body(raw)
            if profile_body is not None:
                profiles[name] = _profile(name, scope, profile_body)
    return ProfileSection(
        active_profile=_string(entries.get("activeProfile")) or "",
        profiles=profiles,
    )


def _find_root(text: str, var_name: str) -> int:
    """
    Index of the `{` assigned to `var_name`, else of the first `{`, else -1.
    Strings and comments are skipped.
    """
    assign = re.compile(re.escape(var_name) + r"\s*=\s*\{")
    first = -1
    i = 0
    n = len(text)
    while i < n:
        ch = text[i]
        if ch == '"':
            i = _skip_string(text, i)
            continue
        if ch == "-" and text.startswith("--", i):
            i = _skip_comment(text, i)
            continue
        if ch == "{" and first < 0:
            first = i
        elif text.startswith(var_name, i) and (i == 0 or not (text[i - 1].isalnum() or text[i - 1] == "_")):
            m = assign.match(text, i)
            if m:
                return m.end() - 1
        i += 1
    return first


def _root_body(text: str, var_name: str) -> Optional[str]:
    start = _find_root(text, var_name)
    if start < 0:
        return None
    return _table_body(text[start:match_brace(text, start)])


def extract_database(text: str, var_name: str = DATABASE_VAR_NAME) -> Database:
    """
    Recover whatever global and per-character profiles can be found in
    `text`. The result may be incomplete; it is never an error.
    """
    root = _root_body(text, var_name)
    if root is None:
        return Database.empty()

    entries = scan_entries(root)
    account = _section(_table_body(entries.get("global")), Scope.account)

    characters: Dict[str, ProfileSection] = {}
    char_body = _table_body(entries.get("char"))
    if char_body is not None:
        for char_key, raw in scan_entries(char_body).items():
            body = _table_body(raw)
            if body is not None:
                characters[char_key] = _section(body, Scope.character)

    return Database(account=account, characters=characters)
