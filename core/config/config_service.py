"""Typed, layered configuration loader with precedence handling."""
from __future__ import annotations

import os
import configparser
import shutil
from dataclasses import dataclass, fields
from pathlib import Path
from threading import RLock
from typing import Any, Dict

# --------------------------------------------------------------------------- #
#  Paths & default definitions
# --------------------------------------------------------------------------- #

def _find_project_root() -> Path:
    here = Path(__file__).resolve()
    for parent in here.parents:
        if (parent / "core").is_dir() and (parent / "placement").is_dir():
            return parent
    return here.parents[2]

PROJECT_ROOT = _find_project_root()
CONFIG_DIR = PROJECT_ROOT / "core" / "config"
DEFAULTS_INI = CONFIG_DIR / "defaults.ini"
MACHINE_INI = CONFIG_DIR / "config.ini"

ENV_PREFIX = "SIGNPLACER_"


_DEFAULTS: Dict[str, Dict[str, Any]] = {
    "Database": {
        "logging": (PROJECT_ROOT / "databases" / "logs.db").as_posix(),
    },
    "General": {
        "app_name": "SignPlacer",
        "version": "1.0.0",
    },
    "Placement": {
        "default_width": "200",
        "default_height": "50",
    },
    "Render": {
        "fit_mode": "contain",
        "max_canvas_width": "800",
        "max_canvas_height": "1000",
        "zoom": "1.0",
    },
}


# --------------------------------------------------------------------------- #
#  Datamodels
# --------------------------------------------------------------------------- #

@dataclass
class DatabaseConfig:
    logging: Path


@dataclass
class GeneralConfig:
    app_name: str = "SignPlacer"
    version: str = ""


@dataclass
class PlacementConfig:
    """Overlay defaults in on-screen pixels."""
    default_width: float = 200.0
    default_height: float = 50.0


@dataclass
class RenderConfig:
    fit_mode: str = "contain"      # none | contain | stretch
    max_canvas_width: int = 800
    max_canvas_height: int = 1000
    zoom: float = 1.0


# --------------------------------------------------------------------------- #
#  Helpers
# --------------------------------------------------------------------------- #

def _ensure_machine_config() -> None:
    """Ensure config directory and machine config exist."""
    CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    if not MACHINE_INI.exists():
        if DEFAULTS_INI.exists():
            shutil.copy(DEFAULTS_INI, MACHINE_INI)
        else:
            parser = configparser.ConfigParser()
            parser.read_dict(_DEFAULTS)
            with MACHINE_INI.open("w", encoding="utf-8") as fh:
                parser.write(fh)


def _read_ini(path: Path) -> Dict[str, Dict[str, Any]]:
    cp = configparser.ConfigParser()
    cp.read(path, encoding="utf-8")
    return {section: dict(cp.items(section)) for section in cp.sections()}


def _apply(target: Dict[str, Dict[str, Any]], source: Dict[str, Dict[str, Any]]) -> None:
    for section, items in source.items():
        target.setdefault(section, {}).update(items)


def _cast(value: Any, typ: Any) -> Any:
    # field.type is a string under postponed annotations
    if typ in (Path, "Path"):
        return Path(str(value)).expanduser()
    if typ in (bool, "bool"):
        if isinstance(value, bool):
            return value
        return str(value).strip().lower() in {"1", "true", "yes", "on"}
    if typ in (int, "int"):
        return int(float(value))
    if typ in (float, "float"):
        return float(value)
    return str(value)


def _build_dataclass(cls: type, data: Dict[str, Any]) -> Any:
    kwargs = {}
    for field in fields(cls):
        val = data.get(field.name, field.default)
        kwargs[field.name] = _cast(val, field.type)
    return cls(**kwargs)


def _env_overlays() -> Dict[str, Dict[str, Any]]:
    result: Dict[str, Dict[str, Any]] = {}
    for env_key, value in os.environ.items():
        if not env_key.startswith(ENV_PREFIX):
            continue
        remainder = env_key[len(ENV_PREFIX):]
        parts = remainder.split("__", 1)
        if len(parts) != 2:
            continue
        section, key = parts
        section = section.title()
        key = key.lower()
        result.setdefault(section, {})[key] = value
    return result


def _user_config_path() -> Path:
    if os.name == "nt":
        appdata = os.environ.get("APPDATA") or (Path.home() / "AppData" / "Roaming")
        return Path(appdata) / "SignPlacer" / "config.ini"
    return Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config")) / "signplacer" / "config.ini"


# --------------------------------------------------------------------------- #
#  ConfigService
# --------------------------------------------------------------------------- #


class ConfigService:
    """Facade merging layered configuration with type safety."""

    def __init__(self, *, ensure_machine_config: bool = True) -> None:
        self._lock = RLock()
        if ensure_machine_config:
            _ensure_machine_config()
        self.reload()

    # ------------------------------------------------------------------ #
    def reload(self) -> None:
        with self._lock:
            merged: Dict[str, Dict[str, Any]] = {}

            # Layer 0: embedded defaults
            _apply(merged, _DEFAULTS)

            # Layer 1: defaults.ini
            if DEFAULTS_INI.exists():
                _apply(merged, _read_ini(DEFAULTS_INI))

            # Layer 2: environment variables
            _apply(merged, _env_overlays())

            # Layer 3: machine config
            if MACHINE_INI.exists():
                _apply(merged, _read_ini(MACHINE_INI))

            # Layer 4: user overrides
            user_ini = _user_config_path()
            if user_ini.exists():
                _apply(merged, _read_ini(user_ini))

            self.database = _build_dataclass(DatabaseConfig, merged.get("Database", {}))
            self.general = _build_dataclass(GeneralConfig, merged.get("General", {}))
            self.placement = _build_dataclass(PlacementConfig, merged.get("Placement", {}))
            self.render = _build_dataclass(RenderConfig, merged.get("Render", {}))


# Global singleton
config_service = ConfigService()
