# store_config.py
from __future__ import annotations

import configparser
import os
import platform
from dataclasses import dataclass
from pathlib import Path
from typing import Optional


_DEFAULTS = {
    ("Tools", "pw_dump"): "pw-dump",
    ("Tools", "pw_cli"): "pw-cli",
    ("Logging", "level"): "WARNING",
}


def _linux_xdg_config_dir() -> Path:
    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg)
    return Path.home() / ".config"


def user_config_dir(app_name: str) -> Path:
    sysname = (platform.system() or "").lower()
    if sysname.startswith("linux"):
        return _linux_xdg_config_dir() / app_name
    return Path.home() / ".config" / app_name


@dataclass(frozen=True)
class Settings:
    pw_dump: str = "pw-dump"
    pw_cli: str = "pw-cli"
    log_level: str = "WARNING"


@dataclass(frozen=True)
class ConfigStore:
    app_name: str = "pw-volume"
    filename: str = "pw-volume.cfg"
    path_override: Optional[Path] = None

    @property
    def dir_path(self) -> Path:
        if self.path_override is not None:
            return self.path_override.parent
        return user_config_dir(self.app_name)

    @property
    def file_path(self) -> Path:
        if self.path_override is not None:
            return self.path_override
        return self.dir_path / self.filename

    def load(self) -> configparser.ConfigParser:
        # read-only: a missing or unreadable file leaves the defaults in place
        cfg = configparser.ConfigParser()
        cfg.read(self.file_path, encoding="utf-8")

        for (section, key), default in _DEFAULTS.items():
            if not cfg.has_section(section):
                cfg.add_section(section)
            value = cfg.get(section, key, fallback="").strip()
            cfg.set(section, key, value or default)

        return cfg

    def settings(self) -> Settings:
        cfg = self.load()
        return Settings(
            pw_dump=cfg.get("Tools", "pw_dump"),
            pw_cli=cfg.get("Tools", "pw_cli"),
            log_level=cfg.get("Logging", "level").upper(),
        )
