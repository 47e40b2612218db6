from __future__ import annotations

from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional

from .lib.env import PATHS


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class Settings:
    host_resolv_conf: str = PATHS.host_resolv_conf
    default_shell: str = PATHS.default_shell
    skip_resolv_conf: bool = False
    mount_bin: str = "mount"
    umount_bin: str = "umount"
    chroot_bin: str = "chroot"
    log_path: Optional[str] = None

    @classmethod
    def from_mapping(cls, raw: Dict[str, Any]) -> "Settings":
        known = {f.name: f for f in fields(cls)}
        unknown = sorted(set(raw) - set(known))
        if unknown:
            raise ConfigError(f"Unknown config keys: {', '.join(unknown)}")

        values: Dict[str, Any] = {}
        for key, value in raw.items():
            if key == "skip_resolv_conf":
                if not isinstance(value, bool):
                    raise ConfigError(f"{key} must be true or false")
                values[key] = value
            elif key == "log_path" and value is None:
                values[key] = None
            else:
                if not isinstance(value, str) or not value:
                    raise ConfigError(f"{key} must be a non-empty string")
                values[key] = value
        return replace(cls(), **values)


def load_settings(path: Optional[str] = None) -> Settings:
    """Read settings from YAML.

    An explicit path must exist. Without one, the system-wide file is used
    only when present.
    """

    if path is None:
        p = Path(PATHS.config_default)
        if not p.exists():
            return Settings()
    else:
        p = Path(path)
        if not p.exists():
            raise ConfigError(f"Config file does not exist: {path}")

    if p.suffix.lower() not in {".yaml", ".yml"}:
        raise ConfigError("config file must be YAML")

    try:
        import yaml  # type: ignore
    except Exception as e:  # pragma: no cover
        raise RuntimeError("PyYAML is required to read the config file") from e

    try:
        raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {p}: {e}") from e
    if not isinstance(raw, dict):
        raise ConfigError(f"{p} must contain a mapping/object")

    return Settings.from_mapping(raw)
