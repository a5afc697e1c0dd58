"""Configuration management for godl."""
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from .. import constants
from ..utils.exceptions import ConfigValidationError
from .catalog import CatalogConfig
from .platform import get_platform_info

TRUE_VALUES = ("1", "true", "yes", "on", "y")
FALSE_VALUES = ("0", "false", "no", "off", "n", "")

def init_paths(base_path: Optional[Path] = None) -> None:
    """Initialize global paths for godl.

    Args:
        base_path: Optional custom base path. If None, uses ~/.config/godl

    Raises:
        ValueError: If base_path cannot be created
    """
    if base_path is not None and not (base_path.exists() or base_path.parent.exists()):
        raise ValueError(f"Base path {base_path} does not exist and cannot be created")

    constants.GODL_HOME = base_path or Path.home() / ".config" / "godl"
    constants.GODL_CONFIG_FILE = constants.GODL_HOME / "config.yaml"

def _ensure_config_dir() -> None:
    """Ensure configuration directory exists.

    Raises:
        RuntimeError: If directory cannot be created
    """
    try:
        constants.GODL_HOME.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise RuntimeError(f"Failed to create config directory {constants.GODL_HOME}: {e}")

def to_bool(value: Any) -> bool:
    """Interpret a config or environment value as a boolean.

    Raises:
        ConfigValidationError: If the value is not a recognised boolean
    """
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in TRUE_VALUES:
        return True
    if text in FALSE_VALUES:
        return False
    raise ConfigValidationError(f"Invalid boolean value: {value!r}")

def _coerce(key: str, value: Any) -> Any:
    if key in constants.BOOLEAN_CONFIG_KEYS:
        return to_bool(value)
    return "" if value is None else str(value)

def load_global_config() -> Dict[str, Any]:
    """Load global configuration from YAML file."""
    if not constants.GODL_CONFIG_FILE.exists():
        return {}

    try:
        with open(constants.GODL_CONFIG_FILE, 'r') as f:
            user_config = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise RuntimeError(f"Failed to load config file {constants.GODL_CONFIG_FILE}: {e}")
    if not isinstance(user_config, dict):
        raise ConfigValidationError(f"Config file {constants.GODL_CONFIG_FILE} must contain a mapping")
    return user_config

def save_global_config(config: Dict[str, Any]) -> None:
    """Save global configuration to YAML file.

    Args:
        config: Configuration dictionary to save

    Raises:
        RuntimeError: If config cannot be saved
    """
    _ensure_config_dir()
    try:
        with open(constants.GODL_CONFIG_FILE, 'w') as f:
            yaml.safe_dump(config, f, default_flow_style=False)
    except (yaml.YAMLError, OSError) as e:
        raise RuntimeError(f"Failed to save config file {constants.GODL_CONFIG_FILE}: {e}")

def validate_key(key: str) -> None:
    if key not in constants.DEFAULT_CONFIG:
        raise ConfigValidationError(
            f"Unknown config key '{key}'. Valid keys: {', '.join(constants.DEFAULT_CONFIG)}"
        )

def set_config_value(key: str, value: Any) -> Dict[str, Any]:
    """Validate and persist a single global config value.

    Returns:
        Dict[str, Any]: The saved configuration

    Raises:
        ConfigValidationError: If key is unknown or value has the wrong type
    """
    validate_key(key)
    config = load_global_config()
    config[key] = _coerce(key, value)
    save_global_config(config)
    return config

def env_overrides(environ: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
    """Collect configuration values bound to GODL_* environment variables."""
    environ = os.environ if environ is None else environ
    overrides = {}
    for var, key in constants.ENV_VARS.items():
        if var in environ:
            overrides[key] = _coerce(key, environ[var])
    return overrides

def load_settings(environ: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
    """Merge defaults, the config file and environment variables, in that order."""
    settings = constants.DEFAULT_CONFIG.copy()
    for key, value in load_global_config().items():
        if key in settings:
            settings[key] = _coerce(key, value)
    settings.update(env_overrides(environ))
    return settings

def catalog_config_from_settings(settings: Mapping[str, Any]) -> CatalogConfig:
    """Build the catalog configuration described by merged settings."""
    os_override = settings.get("os_override") or None
    arch_override = settings.get("arch_override") or None
    platform = None
    if os_override or arch_override:
        platform = get_platform_info(os_override, arch_override)
    return CatalogConfig(
        base_url=settings.get("base_url") or constants.BASE_URL,
        include_release_candidates=to_bool(settings.get("include_release_candidates", False)),
        platform=platform,
    )
