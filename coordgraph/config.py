"""
Configuration management for coordgraph.

Handles persistent configuration including:
- Server host and port
- Status message timeout
- Preferred theme, coordinate system and start mode

Config is stored in config.json next to the executable/project root.
Environment variables (also read from a .env file by app.py) take
priority over the file.
"""

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from coordgraph.coords import CoordSystem
from coordgraph.constants import STATUS_TIMEOUT
from coordgraph.paths import get_config_path
from coordgraph.theme import Theme
from coordgraph.workspace import EditMode

logger = logging.getLogger(__name__)

ENV_PREFIX = "COORDGRAPH_"

# Keys a user may persist from the page
PREFERENCE_KEYS = ("theme", "coord_system", "mode")


@dataclass(frozen=True)
class Settings:
    host: str = "127.0.0.1"
    port: int = 8082
    status_timeout: float = STATUS_TIMEOUT
    theme: Theme = Theme.LIGHT
    coord_system: CoordSystem = CoordSystem.CG
    mode: EditMode = EditMode.VERTEX
    log_level: str = "INFO"


def load_config(path: Optional[Path] = None) -> dict:
    """Load configuration from config.json."""
    config_path = path or get_config_path()
    if config_path.exists():
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
                return data if isinstance(data, dict) else {}
        except (json.JSONDecodeError, IOError) as e:
            logger.warning(f"Ignoring unreadable config {config_path}: {e}")
            return {}
    return {}


def save_config(config: dict, path: Optional[Path] = None) -> None:
    """Save configuration to config.json."""
    config_path = path or get_config_path()
    with open(config_path, 'w', encoding='utf-8') as f:
        json.dump(config, f, indent=2)


def set_preference(key: str, value: Any, path: Optional[Path] = None) -> None:
    """Persist one UI preference (theme, coordinate system or mode)."""
    if key not in PREFERENCE_KEYS:
        raise ValueError(f"Unknown preference '{key}'")
    config = load_config(path)
    config[key] = value.value if hasattr(value, "value") else value
    save_config(config, path)


def _lookup(config: dict, key: str) -> Optional[str]:
    env_value = os.environ.get(ENV_PREFIX + key.upper())
    if env_value:
        return env_value
    value = config.get(key)
    return None if value is None else str(value)


def _coerce(raw: Optional[str], convert, default):
    if raw is None:
        return default
    try:
        return convert(raw)
    except ValueError:
        logger.warning(f"Invalid config value {raw!r}, using {default!r}")
        return default


def get_settings(path: Optional[Path] = None) -> Settings:
    """
    Resolve settings.

    Priority:
    1. Environment variables COORDGRAPH_<KEY>
    2. Stored in config.json
    3. Built-in defaults
    """
    config = load_config(path)
    defaults = Settings()
    return Settings(
        host=_lookup(config, "host") or defaults.host,
        port=_coerce(_lookup(config, "port"), int, defaults.port),
        status_timeout=_coerce(_lookup(config, "status_timeout"), float, defaults.status_timeout),
        theme=_coerce(_lookup(config, "theme"), Theme, defaults.theme),
        coord_system=_coerce(_lookup(config, "coord_system"), CoordSystem, defaults.coord_system),
        mode=_coerce(_lookup(config, "mode"), EditMode, defaults.mode),
        log_level=(_lookup(config, "log_level") or defaults.log_level).upper(),
    )
