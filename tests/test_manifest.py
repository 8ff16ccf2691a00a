"""
Tests for AddOns.txt parsing and writing.
"""

from __future__ import annotations

from pathlib import Path
import os
import stat

import pytest

from addonprofiles.wow import manifest
from addonprofiles.wow.manifest import parse_manifest, read_manifest, render_manifest, write_manifest

DATA = Path(__file__).resolve().parent / "testdata"


def test_reads_fixture():
    assert read_manifest(DATA / "AddOns.txt") == {
        "Ace3": True,
        "AddonProfiles": False,
        "Details": True,
        "DBM-Core": True,
        "WeakAuras": False,
        "BigWigs": True,
    }


def test_comment_marker_disables_regardless_of_value():
    assert parse_manifest("# Foo: 1\n#Bar:1\n  #   Baz : 1\n") == {"Foo": False, "Bar": False, "Baz": False}


def test_only_exact_one_enables():
    assert parse_manifest("A:   1  \nB: 2\nC: yes\nD:\n") == {"A": True, "B": False, "C": False, "D": False}


def test_split_on_first_colon():
    assert parse_manifest("Odd: Name: 1\n") == {"Odd": False}


def test_lines_without_colon_ignored():
    assert parse_manifest("\n\njust text\n   \n") == {}


def test_render_sorted_with_disabled_commented():
    assert render_manifest({"b": False, "a": True, "C": True}) == "C: 1\na: 1\n# b: 0\n"


def test_write_creates_parent_and_leaves_no_temp_files(tmp_path: Path):
    path = tmp_path / "acct" / "AddOns.txt"
    write_manifest(path, {"X": True, "Y": False})
    assert path.read_text(encoding="utf-8") == "X: 1\n# Y: 0\n"
    assert [p.name for p in path.parent.iterdir()] == ["AddOns.txt"]


def test_failed_write_keeps_previous_manifest(tmp_path: Path, monkeypatch):
    path = tmp_path / "AddOns.txt"
    path.write_text("Old: 1\n", encoding="utf-8")

    def boom(src, dst):
        raise OSError("disk full")

    monkeypatch.setattr(manifest.os, "replace", boom)
    with pytest.raises(OSError):
        write_manifest(path, {"New": True})

    assert path.read_text(encoding="utf-8") == "Old: 1\n"
    assert [p.name for p in tmp_path.iterdir()] == ["AddOns.txt"]


def test_write_keeps_existing_permissions(tmp_path: Path):
    path = tmp_path / "AddOns.txt"
    path.write_text("Old: 1\n", encoding="utf-8")
    os.chmod(path, 0o644)

    write_manifest(path, {"New": True})

    assert stat.S_IMODE(path.stat().st_mode) == 0o644


def test_new_manifest_mode_follows_umask(tmp_path: Path):
    path = tmp_path / "AddOns.txt"
    old = os.umask(0o022)
    try:
        write_manifest(path, {"New": True})
    finally:
        os.umask(old)

    assert stat.S_IMODE(path.stat().st_mode) == 0o644
