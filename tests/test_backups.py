"""
Tests for manifest backups and retention.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
import logging
import os

from addonprofiles.wow.backups import create_backup, list_backups, prune_backups


def _make_backups(path: Path, count: int, base: float = 1_600_000_000.0) -> list:
    made = []
    for i in range(count):
        b = path.with_name(f"{path.name}.backup.202001{i + 1:02d}_000000")
        b.write_text(f"backup {i}\n", encoding="utf-8")
        os.utime(b, (base + i * 60, base + i * 60))
        made.append(b)
    return made


def test_create_backup_copies_with_timestamp(tmp_path: Path):
    path = tmp_path / "AddOns.txt"
    path.write_text("Ace3: 1\n", encoding="utf-8")

    backup = create_backup(path, now=datetime(2024, 1, 2, 3, 4, 5))

    assert backup == tmp_path / "AddOns.txt.backup.20240102_030405"
    assert backup.read_text(encoding="utf-8") == "Ace3: 1\n"
    assert path.read_text(encoding="utf-8") == "Ace3: 1\n"


def test_create_backup_without_manifest(tmp_path: Path):
    assert create_backup(tmp_path / "AddOns.txt") is None
    assert list(tmp_path.iterdir()) == []


def test_list_backups_newest_first_and_ignores_other_files(tmp_path: Path):
    path = tmp_path / "AddOns.txt"
    made = _make_backups(path, 3)
    (tmp_path / "AddOns.txt.old").write_text("x", encoding="utf-8")
    (tmp_path / "Other.txt.backup.20200101_000000").write_text("x", encoding="utf-8")

    assert list_backups(path) == list(reversed(made))


def test_prune_keeps_most_recent(tmp_path: Path):
    path = tmp_path / "AddOns.txt"
    made = _make_backups(path, 5)

    removed = prune_backups(path, 2)

    assert sorted(removed) == sorted(made[:3])
    assert sorted(list_backups(path)) == sorted(made[3:])


def test_prune_with_fewer_backups_than_limit(tmp_path: Path):
    path = tmp_path / "AddOns.txt"
    _make_backups(path, 2)
    assert prune_backups(path, 5) == []
    assert len(list_backups(path)) == 2


def test_prune_logs_and_skips_undeletable(tmp_path: Path, monkeypatch, caplog):
    path = tmp_path / "AddOns.txt"
    made = _make_backups(path, 4)
    locked = made[0]

    real_unlink = Path.unlink

    def flaky_unlink(self, *args, **kwargs):
        if self.name == locked.name:
            raise PermissionError("locked")
        return real_unlink(self, *args, **kwargs)

    monkeypatch.setattr(Path, "unlink", flaky_unlink)
    with caplog.at_level(logging.WARNING, logger="addonprofiles.wow.backups"):
        removed = prune_backups(path, 1)

    assert sorted(removed) == sorted(made[1:3])
    assert locked.exists()
    assert "could not remove" in caplog.text


def test_create_backup_keeps_existing_backup_with_same_timestamp(tmp_path: Path):
    path = tmp_path / "AddOns.txt"
    now = datetime(2024, 1, 2, 3, 4, 5)
    path.write_text("Original: 1\n", encoding="utf-8")
    first = create_backup(path, now=now)

    path.write_text("First: 1\n", encoding="utf-8")
    second = create_backup(path, now=now)

    assert second == first
    assert first.read_text(encoding="utf-8") == "Original: 1\n"
    assert len(list_backups(path)) == 1
