from __future__ import annotations

import logging
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path.home() / ".typecheck" / "config.yaml"


@dataclass(frozen=True)
class TypeCheckConfig:
    auto_skip_separators: bool = True
    auto_indent: bool = True
    history_size: int = 200
    daily_goal_minutes: int = 30
    idle_threshold_ms: int = 2000
    tick_interval_ms: int = 1000


def _from_mapping(raw: Dict[str, Any], base: TypeCheckConfig, source: str) -> TypeCheckConfig:
    known = {f.name: f for f in fields(TypeCheckConfig)}
    values: Dict[str, Any] = {}
    for key, value in raw.items():
        if key not in known:
            raise ValueError(f"{source}: unknown option '{key}'")
        expected = type(getattr(base, key))
        if expected is bool:
            if not isinstance(value, bool):
                raise ValueError(f"{source}: '{key}' must be true or false")
        elif isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise ValueError(f"{source}: '{key}' must be a non-negative integer")
        values[key] = value
    return replace(base, **values)


def load_config(path: Optional[Path] = None) -> TypeCheckConfig:
    """Read options from a YAML mapping, falling back to the defaults.

    A missing or unreadable file yields the defaults; a file with unknown
    keys or wrongly typed values raises ``ValueError``.
    """
    config_path = path or DEFAULT_CONFIG_PATH
    if not config_path.exists():
        return TypeCheckConfig()
    try:
        raw = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    except (yaml.YAMLError, OSError) as e:
        logger.warning("Could not load config from %s: %s", config_path, e)
        return TypeCheckConfig()
    if raw is None:
        return TypeCheckConfig()
    if not isinstance(raw, dict):
        raise ValueError(f"{config_path.name}: expected a YAML mapping of options")
    return _from_mapping(raw, base=TypeCheckConfig(), source=config_path.name)
