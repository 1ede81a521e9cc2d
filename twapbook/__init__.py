"""twapbook package initialization"""

from copy import deepcopy
from pathlib import Path
from typing import Union

import yaml

__version__ = "0.1.0"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

DEFAULTS = {
    "logging": {"level": "INFO", "path": None, "max_bytes": 5 * 1024 * 1024, "backup_count": 3},
    "replay": {"strict": True, "trace": False},
    "metrics": {"path": None},
}


def _validate_log_level(level: str) -> str:
    """Normalise and check a logging level name."""
    level = str(level).strip().upper()
    if level not in LOG_LEVELS:
        raise ValueError(f"logging.level must be one of {', '.join(LOG_LEVELS)}, got {level!r}")
    return level


def _validate_flag(section: str, key: str, value) -> bool:
    if not isinstance(value, bool):
        raise ValueError(f"{section}.{key} must be true or false, got {value!r}")
    return value


def _validate_count(section: str, key: str, value, minimum: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < minimum:
        raise ValueError(f"{section}.{key} must be an integer >= {minimum}, got {value!r}")
    return value


def load_config(path: Union[str, Path, None] = None) -> dict:
    """Load and parse the YAML configuration.

    Parameters
    ----------
    path
        Path to a YAML file. If *None*, defaults to ``config.yaml`` in the
        package directory.

    Returns
    -------
    dict
        Parsed configuration dictionary, with missing sections and keys
        filled from :data:`DEFAULTS`.
    """
    path = Path(path) if path else Path(__file__).with_name("config.yaml")
    with path.open("r", encoding="utf-8") as f:
        loaded = yaml.safe_load(f) or {}

    if not isinstance(loaded, dict):
        raise ValueError(f"{path}: top level of the configuration must be a mapping")

    config = deepcopy(DEFAULTS)
    for section, values in loaded.items():
        if values is None:
            continue
        if not isinstance(values, dict):
            raise ValueError(f"{path}: section {section!r} must be a mapping")
        config.setdefault(section, {}).update(values)

    config["logging"]["level"] = _validate_log_level(config["logging"]["level"])
    config["logging"]["max_bytes"] = _validate_count("logging", "max_bytes", config["logging"]["max_bytes"], 1)
    config["logging"]["backup_count"] = _validate_count(
        "logging", "backup_count", config["logging"]["backup_count"], 0
    )
    for key in ("strict", "trace"):
        config["replay"][key] = _validate_flag("replay", key, config["replay"][key])

    return config
