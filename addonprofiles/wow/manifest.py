"""
AddOns.txt reading and writing.

Format, one addon per line:
    AddonName: 1        enabled
    AddonName: 0        disabled
    # AddonName: 0      disabled (commented out, whatever the value says)
Blank lines and lines without a colon are ignored.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Mapping
import logging
import os
import shutil
import tempfile

log = logging.getLogger(__name__)

MANIFEST_FILENAME = "AddOns.txt"


def _default_mode() -> int:
    # What open(path, "w") would have produced.
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def parse_manifest(text: str) -> Dict[str, bool]:
    addons: Dict[str, bool] = {}
    for line in text.splitlines():
        line = line.strip()
        if not line:
            continue
        name, sep, value = line.partition(":")
        if not sep:
            continue
        name = name.strip()
        enabled = value.strip() == "1"
        if name.startswith("#"):
            name = name[1:].strip()
            enabled = False
        addons[name] = enabled
    return addons


def read_manifest(path: Path) -> Dict[str, bool]:
    addons = parse_manifest(path.read_text(encoding="utf-8", errors="replace"))
    log.debug("read %d manifest entries from %s", len(addons), path)
    return addons


def render_manifest(addons: Mapping[str, bool]) -> str:
    lines = []
    for name in sorted(addons):
        if addons[name]:
            lines.append(f"{name}: 1\n")
        else:
            lines.append(f"# {name}: 0\n")
    return "".join(lines)


def write_manifest(path: Path, addons: Mapping[str, bool]) -> None:
    """
    Replace `path` with the rendered manifest. The content goes to a temp file
    in the same directory first and is renamed over the target once flushed,
    so a failed write leaves the previous manifest in place. The file keeps
    the permissions of the manifest it replaces.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    data = render_manifest(addons).encode("utf-8")

    fd, tmp = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=str(path.parent))
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        if path.exists():
            shutil.copymode(path, tmp)
        else:
            os.chmod(tmp, _default_mode())
        os.replace(tmp, path)
    except BaseException:
        if os.path.exists(tmp):
            os.unlink(tmp)
        raise
