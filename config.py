"""Configuration loading for the Hanoi stepper."""
from __future__ import annotations

import copy
import logging
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from hanoi_moves import InvalidArgument, PEG_COUNT

logger = logging.getLogger(__name__)


DEFAULT_PATH = "config.yaml"

# Every snapshot of the solution is kept in memory, 2**n of them
MAX_DISKS = 10


DEFAULTS: Dict[str, Any] = {
    "disks": {"min": 1, "max": MAX_DISKS, "default": 4},
    "pegs": {"src": 0, "dest": 2, "temp": 1},
    "viewer": {
        "autoplay_ms": 400,
        "window_size": [640, 480],
        "fps": 30,
    },
}


class DotDict(dict):
    """Dictionary with dot-access to nested keys."""

    def __getattr__(self, key: str) -> Any:
        try:
            value = self[key]
        except KeyError as exc:
            raise AttributeError(key) from exc
        if isinstance(value, dict) and not isinstance(value, DotDict):
            value = DotDict(value)
            self[key] = value
        return value

    __setattr__ = dict.__setitem__
    __delattr__ = dict.__delitem__


def get_config_value(config: DotDict, path: str, default: Any | None = None) -> Any:
    """Safely retrieve a nested configuration value."""
    current: Any = config
    for part in path.split("."):
        if isinstance(current, dict) and part in current:
            current = getattr(current, part) if isinstance(current, DotDict) else current[part]
        else:
            logger.warning("Config key '%s' missing, using default %r", path, default)
            return default
    return current


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            _merge(base[key], value)
        else:
            if key not in base:
                logger.warning("Unknown config key '%s'", key)
            base[key] = value
    return base


def _validate(config: DotDict) -> DotDict:
    lo, hi = config.disks.min, config.disks.max
    for bound in (lo, hi):
        if isinstance(bound, bool) or not isinstance(bound, int):
            raise InvalidArgument(f"disk bounds must be integers, got {bound!r}")
    if not 1 <= lo <= hi <= MAX_DISKS:
        raise InvalidArgument(
            f"disk bounds must satisfy 1 <= min <= max <= {MAX_DISKS}, got [{lo}, {hi}]"
        )
    default = config.disks.default
    if isinstance(default, bool) or not isinstance(default, int):
        raise InvalidArgument(f"default disk count must be an integer, got {default!r}")
    if not lo <= default <= hi:
        clamped = max(lo, min(hi, default))
        logger.warning("Default disk count %r outside [%d, %d], using %d", default, lo, hi, clamped)
        config.disks.default = clamped

    pegs = (config.pegs.src, config.pegs.dest, config.pegs.temp)
    if sorted(pegs) != list(range(PEG_COUNT)):
        raise InvalidArgument(f"peg convention must be a permutation of 0..{PEG_COUNT - 1}, got {pegs}")
    if config.viewer.autoplay_ms <= 0:
        raise InvalidArgument(f"autoplay_ms must be positive, got {config.viewer.autoplay_ms}")
    return config


def load_config(path: Optional[str] = None) -> DotDict:
    """Load the YAML configuration merged over the built-in defaults.

    Parameters
    ----------
    path:
        Path to a YAML file. ``None`` reads ``config.yaml`` from the working
        directory when it exists and falls back to the built-in defaults.

    Returns
    -------
    DotDict
        Configuration data accessible by keys or attributes.
    """
    data = copy.deepcopy(DEFAULTS)
    if path is None and Path(DEFAULT_PATH).is_file():
        path = DEFAULT_PATH
    if path is not None:
        config_path = Path(path)
        if not config_path.is_file():
            raise FileNotFoundError(f"Configuration file not found: {path}")
        with config_path.open("r", encoding="utf-8") as f:
            loaded = yaml.safe_load(f) or {}
        if not isinstance(loaded, dict):
            raise InvalidArgument(f"Configuration root must be a mapping: {path}")
        _merge(data, loaded)
    return _validate(DotDict(data))
