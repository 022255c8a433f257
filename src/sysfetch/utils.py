"""
sysfetch Utility Functions

This module provides helper functions for:
    - Settings file management (YAML)
    - Logging utilities
    - Human-readable unit formatting
"""

import copy
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from platformdirs import user_config_dir

from .errors import ConfigurationError

# Configure module logger
logger = logging.getLogger("sysfetch")

APP_NAME = "sysfetch"
BYTE_UNITS = ("B", "KiB", "MiB", "GiB", "TiB", "PiB")


# =============================================================================
# Settings Management
# =============================================================================

def default_settings_path() -> Path:
    """Return the per-user settings file location."""
    return Path(user_config_dir(APP_NAME)) / "config.yaml"


def get_default_settings() -> Dict[str, Any]:
    """Return default settings values."""
    return {
        "general": {
            "modules": None,
            "parallel": True,
            "values_only": False,
            "max_workers": 8,
        },
        "display": {
            "color": True,
        },
        "logo": {
            "enabled": True,
            "name": None,
            "custom_file": None,
        },
        "debug": {
            "verbose": False,
            "log_level": "WARNING",
            "save_debug_logs": False,
            "debug_log_file": None,
        },
    }


def merge_settings(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """
    Deep-merge ``overrides`` into a copy of ``base``.

    Args:
        base: Settings to start from (not modified)
        overrides: Values taking precedence; nested dicts are merged

    Returns:
        New merged settings dictionary
    """
    merged = copy.deepcopy(base)
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_settings(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_settings(settings_path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load settings from a YAML file.

    Args:
        settings_path: Path to settings file. If None, uses the per-user
            config directory.

    Returns:
        Settings dictionary merged over the defaults

    Raises:
        ConfigurationError: If an explicitly given settings file does not exist
    """
    defaults = get_default_settings()
    path = Path(settings_path) if settings_path else default_settings_path()

    if not path.exists():
        if settings_path:
            raise ConfigurationError(f"Settings file not found: {path}")
        logger.debug(f"Settings file not found: {path}. Using defaults.")
        return defaults

    try:
        with open(path, "r", encoding="utf-8") as f:
            loaded = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        logger.error(f"Error loading settings: {e}")
        return defaults

    if not isinstance(loaded, dict):
        if loaded is not None:
            logger.error(f"Ignoring settings file {path}: expected a mapping")
        return defaults
    return merge_settings(defaults, loaded)


def save_settings(settings: Dict[str, Any], settings_path: Optional[str] = None) -> bool:
    """
    Save settings to a YAML file.

    Returns:
        True if successful, False otherwise
    """
    path = Path(settings_path) if settings_path else default_settings_path()

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            yaml.safe_dump(settings, f, default_flow_style=False, sort_keys=False)
        return True
    except OSError as e:
        logger.error(f"Error saving settings: {e}")
        return False


# =============================================================================
# Logging Utilities
# =============================================================================

def setup_logging(settings: Optional[Dict[str, Any]] = None) -> logging.Logger:
    """
    Set up logging for sysfetch.

    Log records go to stderr (never stdout, which carries the report) and
    only when verbose output or DEBUG level is requested.

    Args:
        settings: Settings dictionary

    Returns:
        Configured package logger

    Raises:
        ConfigurationError: If the debug section is not a mapping
    """
    settings = settings or get_default_settings()
    debug_settings = settings.get("debug") or {}
    if not isinstance(debug_settings, dict):
        raise ConfigurationError(
            f"Settings section 'debug' must be a mapping, got {debug_settings!r}"
        )

    level_name = str(debug_settings.get("log_level") or "WARNING").upper()
    log_level = getattr(logging, level_name, logging.WARNING)
    verbose = debug_settings.get("verbose", False)
    if verbose:
        log_level = logging.DEBUG

    package_logger = logging.getLogger("sysfetch")
    package_logger.setLevel(log_level)
    package_logger.propagate = False

    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()

    if verbose or log_level == logging.DEBUG:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(log_level)
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        )
        console_handler.setFormatter(formatter)
        package_logger.addHandler(console_handler)
    else:
        package_logger.addHandler(logging.NullHandler())

    if debug_settings.get("save_debug_logs", False):
        log_file = Path(
            debug_settings.get("debug_log_file")
            or Path(user_config_dir(APP_NAME)) / "debug.log"
        )
        log_file.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.DEBUG)
        file_formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s"
        )
        file_handler.setFormatter(file_formatter)
        package_logger.addHandler(file_handler)

    return package_logger


# =============================================================================
# Formatting Helpers
# =============================================================================

def format_bytes(num_bytes: int) -> str:
    """
    Format a byte count with binary prefixes and two decimals.

    Example:
        >>> format_bytes(9_040_000_000)
        '8.42 GiB'
    """
    size = float(num_bytes)
    unit_index = 0
    while size >= 1024.0 and unit_index < len(BYTE_UNITS) - 1:
        size /= 1024.0
        unit_index += 1
    return f"{size:.2f} {BYTE_UNITS[unit_index]}"


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}" if count == 1 else f"{count} {unit}s"


def format_uptime(seconds: int) -> str:
    """
    Format a duration as days, hours and minutes.

    Zero-valued parts are omitted; durations under a minute read
    ``"0 minutes"``.
    """
    days, remainder = divmod(int(seconds), 86400)
    hours, remainder = divmod(remainder, 3600)
    minutes = remainder // 60

    parts: List[str] = []
    if days:
        parts.append(_plural(days, "day"))
    if hours:
        parts.append(_plural(hours, "hour"))
    if minutes or not parts:
        parts.append(_plural(minutes, "minute"))
    return ", ".join(parts)
