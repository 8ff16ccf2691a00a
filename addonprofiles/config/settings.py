"""
Injected store configuration.

The core does not locate preference directories; the caller hands it a
YAML file (or nothing) and the environment may override any field:
  - ADDONPROFILES_INSTALL_PATH
  - ADDONPROFILES_ACCOUNT
  - ADDONPROFILES_BACKUP_COUNT
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional
import os

import yaml  # requires pyyaml

from addonprofiles.core.errors import ConfigError, InvalidInstallDirectory
from addonprofiles.wow.manager import DEFAULT_BACKUP_COUNT, validate_install_directory

ENV_INSTALL_PATH = "ADDONPROFILES_INSTALL_PATH"
ENV_ACCOUNT = "ADDONPROFILES_ACCOUNT"
ENV_BACKUP_COUNT = "ADDONPROFILES_BACKUP_COUNT"


@dataclass(frozen=True)
class StoreConfig:
    install_path: str = ""
    selected_account: str = ""
    backup_count: int = DEFAULT_BACKUP_COUNT

    def validate(self) -> None:
        if not self.install_path:
            raise ConfigError("install path is not set")
        if self.backup_count < 1:
            raise ConfigError("backup count must be at least 1")
        try:
            validate_install_directory(self.install_path)
        except InvalidInstallDirectory as e:
            raise ConfigError(f"invalid install path {self.install_path}: {e}") from e


def _norm_str(v: Any) -> str:
    # YAML `null` means unset.
    if v is None:
        return ""
    return str(v).strip()


def _backup_count(v: Any) -> int:
    if v is None or v == "":
        return DEFAULT_BACKUP_COUNT
    try:
        n = int(v)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"backup count must be an integer, got {v!r}") from e
    # 0 is what an unset field looks like in older config files.
    return n if n != 0 else DEFAULT_BACKUP_COUNT


def config_from_mapping(data: Mapping[str, Any]) -> StoreConfig:
    return StoreConfig(
        install_path=_norm_str(data.get("install_path")),
        selected_account=_norm_str(data.get("selected_account")),
        backup_count=_backup_count(data.get("backup_count")),
    )


def apply_env(config: StoreConfig, environ: Optional[Mapping[str, str]] = None) -> StoreConfig:
    env = os.environ if environ is None else environ
    overrides: Dict[str, Any] = {}
    if env.get(ENV_INSTALL_PATH, "").strip():
        overrides["install_path"] = env[ENV_INSTALL_PATH].strip()
    if env.get(ENV_ACCOUNT, "").strip():
        overrides["selected_account"] = env[ENV_ACCOUNT].strip()
    if env.get(ENV_BACKUP_COUNT, "").strip():
        overrides["backup_count"] = _backup_count(env[ENV_BACKUP_COUNT].strip())
    return replace(config, **overrides) if overrides else config


def load_config(path: Optional[Path] = None, environ: Optional[Mapping[str, str]] = None) -> StoreConfig:
    """
    Defaults, then the YAML file at `path` if it exists, then environment.
    """
    config = StoreConfig()
    if path is not None and path.exists():
        try:
            data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"{path}: invalid YAML: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError(f"{path}: expected a mapping at top level")
        config = config_from_mapping(data)
    return apply_env(config, environ)


def dump_config(config: StoreConfig, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(yaml.safe_dump(asdict(config), sort_keys=True), encoding="utf-8")
