"""Configuration loading and management utilities.

Adapter settings live in YAML files read with OmegaConf. User files are
merged over :data:`DEFAULT_CONFIG`, so they only need to name what differs.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from omegaconf import DictConfig, OmegaConf
from omegaconf.errors import OmegaConfBaseException

from edgemotion.exceptions import ConfigurationError

DEFAULT_CONFIG: dict[str, Any] = {
    "model": {
        "path": "???",
        "num_threads": None,
    },
    "labels": ["stationary", "pick_up"],
    "codec": {
        "byte_order": "native",
    },
    "window": {
        "size": 1.5,
        "overlap": 0.5,
        "sampling_rate": 50,
    },
    "logging": {
        "level": "INFO",
        "file": None,
        "rich": True,
    },
}

REQUIRED_KEYS = ["model.path", "labels", "codec.byte_order"]


def load_config(config_path: str | Path) -> DictConfig:
    """Load a YAML configuration file.

    Args:
        config_path: Path to the YAML configuration file.

    Returns:
        Configuration as a DictConfig object.

    Raises:
        ConfigurationError: If the configuration file does not exist.
    """
    config_path = Path(config_path)
    if not config_path.exists():
        raise ConfigurationError(f"Configuration file not found: {config_path}")

    return OmegaConf.load(config_path)


def load_adapter_config(
    config_path: str | Path | None = None,
    overrides: list[str] | None = None,
) -> DictConfig:
    """Load adapter settings merged over the defaults.

    Args:
        config_path: Optional YAML file with user settings.
        overrides: Optional dotlist overrides, e.g. ``["model.path=m.tflite"]``.

    Returns:
        Merged configuration.
    """
    configs = [OmegaConf.create(DEFAULT_CONFIG)]
    if config_path is not None:
        configs.append(load_config(config_path))
    if overrides:
        configs.append(OmegaConf.from_dotlist(overrides))
    return merge_configs(*configs)


def merge_configs(*configs: DictConfig) -> DictConfig:
    """Merge multiple configurations; later ones override earlier ones."""
    return OmegaConf.merge(*configs)


def to_dict(config: DictConfig) -> dict[str, Any]:
    """Convert a DictConfig to a plain dictionary."""
    return OmegaConf.to_container(config, resolve=True)


def validate_config(config: DictConfig, required_keys: list[str] | None = None) -> None:
    """Check that required keys are present and set.

    Args:
        config: Configuration to validate.
        required_keys: Dot-separated key paths. Defaults to :data:`REQUIRED_KEYS`.

    Raises:
        ConfigurationError: If any required key is missing or unset.
    """
    missing = []
    for key in required_keys or REQUIRED_KEYS:
        try:
            value = OmegaConf.select(config, key, throw_on_missing=True)
        except OmegaConfBaseException:
            value = None
        if value is None:
            missing.append(key)

    if missing:
        raise ConfigurationError(f"Missing required configuration keys: {missing}")


def get_nested(config: DictConfig, key: str, default: Any = None) -> Any:
    """Get a nested configuration value, or ``default`` when absent or unset."""
    try:
        value = OmegaConf.select(config, key, throw_on_missing=True)
    except OmegaConfBaseException:
        return default
    return default if value is None else value


def save_config(config: DictConfig, path: str | Path) -> None:
    """Save configuration to a YAML file."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    OmegaConf.save(config, path)
