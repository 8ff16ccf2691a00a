"""
End-to-end SavedVariables parsing, including the fallback path.
"""

from __future__ import annotations

from pathlib import Path
import logging

import pytest

from addonprofiles.core.errors import MalformedTable
from addonprofiles.core.types import Scope
from addonprofiles.lua import parse, parse_file, parse_structured

DATA = Path(__file__).resolve().parent / "testdata"


def test_global_profiles():
    db = parse_file(DATA / "valid_profile.lua")

    assert len(db.account.profiles) == 2
    assert db.account.active_profile == "Default"

    default = db.account.profiles["Default"]
    assert default.name == "Default"
    assert default.scope == Scope.account
    assert default.auto_deps is True
    assert default.created == 1700000000
    assert default.addons == {"Ace3": True, "DBM-Core": True, "Details": True}

    raiding = db.account.profiles["Raiding"]
    assert len(raiding.addons) == 3
    assert all(raiding.addons.values())


def test_character_profiles():
    db = parse_file(DATA / "valid_profile.lua")

    section = db.characters["TestChar - TestRealm"]
    assert section.active_profile == "PvP"
    assert len(section.profiles) == 1

    pvp = section.profiles["PvP"]
    assert pvp.scope == Scope.character
    assert pvp.auto_deps is False
    assert pvp.created == 0
    assert pvp.addons == {"Gladius": True, "OmniCC": True}


def test_malformed_file_rejected_by_structured_parser():
    with pytest.raises(MalformedTable):
        parse_structured((DATA / "malformed_profile.lua").read_text(encoding="utf-8"))


def test_malformed_file_falls_back(caplog):
    with caplog.at_level(logging.WARNING, logger="addonprofiles.lua"):
        db = parse_file(DATA / "malformed_profile.lua")
    assert "fallback" in caplog.text
    assert db.account.active_profile == "Questing"
    assert set(db.account.profiles) == {"Questing"}
    assert db.characters["Alt - Silvermoon"].active_profile == "Bank"


def test_well_formed_file_does_not_fall_back(caplog):
    with caplog.at_level(logging.WARNING, logger="addonprofiles.lua"):
        parse_file(DATA / "valid_profile.lua")
    assert caplog.text == ""


def test_empty_database_table():
    db = parse("AddonProfilesDB = {}\n")
    assert db.is_empty()


def test_no_table_at_all_is_empty():
    db = parse("-- nothing saved yet\n")
    assert db.is_empty()


def test_deep_nesting_falls_back(caplog):
    depth = 5000
    text = (
        'AddonProfilesDB = { ["global"] = { ["activeProfile"] = "Deep" }, '
        + '["x"] = {' * depth
        + "}" * depth
        + " }\n"
    )
    with pytest.raises(MalformedTable, match="nested too deeply"):
        parse_structured(text)

    with caplog.at_level(logging.WARNING, logger="addonprofiles.lua"):
        db = parse(text)
    assert "fallback" in caplog.text
    assert db.account.active_profile == "Deep"
