"""Configuration loading with layered overrides."""

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

import yaml

from emmcctl.core.style import COLOR_MODES

# Standard eMMC program/erase cycle rating
DEFAULT_CYCLES_MAX = 3000
# Average wear percentages separating the health tiers
DEFAULT_WEAR_THRESHOLD_WARNING = 50
DEFAULT_WEAR_THRESHOLD_CRITICAL = 80

PROJECT_CONFIG = Path(".emmcctl.yaml")


class ConfigError(Exception):
    """Invalid configuration value."""

    pass


@dataclass
class Config:
    """Effective analyzer settings."""

    cycles_max: int = DEFAULT_CYCLES_MAX
    wear_threshold_warning: int = DEFAULT_WEAR_THRESHOLD_WARNING
    wear_threshold_critical: int = DEFAULT_WEAR_THRESHOLD_CRITICAL
    color: str = "auto"
    log_enabled: bool = True
    log_dir: str | None = None


def user_config_path() -> Path:
    """Path of the per-user config file."""
    return Path.home() / ".config" / "emmcctl" / "config.yaml"


def load_config_file(path: Path) -> dict[str, Any]:
    """Load a YAML config file if it exists."""
    if not path.exists():
        return {}
    try:
        with open(path) as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError):
        return {}
    if not isinstance(data, dict):
        return {}
    return data


def validate_config(config: Config) -> Config:
    """
    Check config values.

    Raises:
        ConfigError: If a value is out of range or of the wrong type
    """
    if not isinstance(config.cycles_max, int) or isinstance(config.cycles_max, bool) \
            or config.cycles_max <= 0:
        raise ConfigError(f"cycles_max must be a positive integer, got {config.cycles_max!r}")

    for name in ("wear_threshold_warning", "wear_threshold_critical"):
        value = getattr(config, name)
        if not isinstance(value, int) or isinstance(value, bool) or not 0 <= value <= 100:
            raise ConfigError(f"{name} must be an integer between 0 and 100, got {value!r}")

    if config.wear_threshold_warning > config.wear_threshold_critical:
        raise ConfigError("wear_threshold_warning must be <= wear_threshold_critical")

    if config.color not in COLOR_MODES:
        raise ConfigError(
            f"color must be one of {', '.join(COLOR_MODES)}, got {config.color!r}"
        )

    if not isinstance(config.log_enabled, bool):
        raise ConfigError(f"log_enabled must be true or false, got {config.log_enabled!r}")

    if config.log_dir is not None and not isinstance(config.log_dir, str):
        raise ConfigError(f"log_dir must be a path string, got {config.log_dir!r}")

    return config


def load_config(path: Path | None = None) -> Config:
    """
    Build the effective config.

    Precedence: explicit path -> project .emmcctl.yaml -> user config ->
    defaults. Unknown keys are ignored.

    Raises:
        ConfigError: If an explicit path is missing or the merged values are invalid
    """
    known = {f.name for f in fields(Config)}
    merged: dict[str, Any] = {}

    layers = [user_config_path(), PROJECT_CONFIG]
    if path is not None:
        if not path.is_file():
            raise ConfigError(f"Config file not found: {path}")
        layers.append(path)

    for layer in layers:
        data = load_config_file(layer)
        merged.update({k: v for k, v in data.items() if k in known})

    return validate_config(Config(**merged))
