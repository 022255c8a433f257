"""
Run Configuration

``Config`` is the immutable description of one run. It is assembled once by
``ConfigBuilder`` from settings and command-line flags, then shared
read-only by every component.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Tuple, Union

from .detectors import ModuleKind
from .errors import ConfigurationError
from .logo.database import LOGOS, ALIASES
from .registry import available_modules, parse_module_list
from .scheduler import DEFAULT_MAX_WORKERS


@dataclass(frozen=True)
class Config:
    """Resolved configuration for one report."""
    modules: Tuple[ModuleKind, ...]
    parallel: bool = True
    values_only: bool = False
    logo_enabled: bool = True
    logo_name: Optional[str] = None
    custom_logo: Optional[Tuple[str, ...]] = None
    color: bool = True
    max_workers: int = DEFAULT_MAX_WORKERS

    @classmethod
    def builder(cls) -> "ConfigBuilder":
        """Builder with defaults: all modules, parallel, labels, logo."""
        return ConfigBuilder()


class ConfigBuilder:
    """
    Fluent builder for ``Config``.

    Every setter validates its input and returns the builder; ``build``
    produces the frozen Config.

    Example:
        config = (
            Config.builder()
            .with_module_names("os,memory")
            .parallel(False)
            .build()
        )
    """

    def __init__(self):
        self._modules: Tuple[ModuleKind, ...] = tuple(available_modules())
        self._parallel = True
        self._values_only = False
        self._logo_enabled = True
        self._logo_name: Optional[str] = None
        self._custom_logo: Optional[Tuple[str, ...]] = None
        self._color = True
        self._max_workers = DEFAULT_MAX_WORKERS

    def with_modules(self, modules: Iterable[ModuleKind]) -> "ConfigBuilder":
        """Replace the module list with an explicit ordered set."""
        modules = tuple(modules)
        if not modules:
            raise ConfigurationError("No modules specified")
        for kind in modules:
            if not isinstance(kind, ModuleKind):
                raise ConfigurationError(f"Not a module: {kind!r}")
        self._modules = modules
        return self

    def with_module_names(self, names: Union[str, Iterable[str]]) -> "ConfigBuilder":
        """
        Replace the module list from identifiers.

        Raises:
            UnknownModuleError: If any identifier is not registered
        """
        self._modules = tuple(parse_module_list(names))
        return self

    def parallel(self, enabled: bool) -> "ConfigBuilder":
        self._parallel = _require_bool("parallel", enabled)
        return self

    def values_only(self, enabled: bool) -> "ConfigBuilder":
        self._values_only = _require_bool("values_only", enabled)
        return self

    def color(self, enabled: bool) -> "ConfigBuilder":
        self._color = _require_bool("color", enabled)
        return self

    def without_logo(self) -> "ConfigBuilder":
        self._logo_enabled = False
        return self

    def with_logo(self, enabled: bool = True) -> "ConfigBuilder":
        self._logo_enabled = _require_bool("logo enabled", enabled)
        return self

    def with_logo_name(self, name: Optional[str]) -> "ConfigBuilder":
        """
        Force a built-in logo instead of the detected one.

        Raises:
            ConfigurationError: If no built-in logo has this name
        """
        if name is None:
            self._logo_name = None
            return self
        key = name.strip().lower()
        if key not in LOGOS and key not in ALIASES:
            raise ConfigurationError(
                f"Unknown logo '{name}'. Available: {', '.join(sorted(LOGOS))}"
            )
        self._logo_name = key
        return self

    def with_custom_logo(self, art: Union[str, Iterable[str]]) -> "ConfigBuilder":
        """Use user-supplied ASCII art instead of a distribution logo."""
        if isinstance(art, str):
            art = art.splitlines()
        lines = tuple(line.rstrip("\r\n") for line in art)
        if not any(line.strip() for line in lines):
            raise ConfigurationError("Custom logo is empty")
        self._custom_logo = lines
        return self

    def with_custom_logo_file(self, path: Union[str, Path]) -> "ConfigBuilder":
        """
        Load custom ASCII art from a file.

        Raises:
            ConfigurationError: If the file cannot be read
        """
        try:
            art = Path(path).expanduser().read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigurationError(f"Cannot read logo file {path}: {e}") from e
        return self.with_custom_logo(art)

    def max_workers(self, count: int) -> "ConfigBuilder":
        try:
            count = int(count)
        except (TypeError, ValueError):
            raise ConfigurationError(f"max_workers must be an integer, got {count!r}") from None
        if count < 1:
            raise ConfigurationError("max_workers must be at least 1")
        self._max_workers = count
        return self

    def from_settings(self, settings: Dict[str, Any]) -> "ConfigBuilder":
        """
        Apply a settings dictionary (see ``utils.get_default_settings``).

        Missing sections and keys leave the current values untouched. The
        ``debug`` section is only validated here; ``utils.setup_logging``
        consumes it.

        Raises:
            ConfigurationError: If a section is not a mapping or a value has
                the wrong type
        """
        if not isinstance(settings, dict):
            raise ConfigurationError(
                f"Settings must be a mapping, got {type(settings).__name__}"
            )
        general = _section(settings, "general")
        display = _section(settings, "display")
        logo = _section(settings, "logo")
        debug = _section(settings, "debug")

        modules = general.get("modules")
        if modules:
            if not isinstance(modules, (str, list)):
                raise ConfigurationError(
                    "Setting 'general.modules' must be a comma-separated string or a list, "
                    f"got {modules!r}"
                )
            self.with_module_names(modules)
        if "parallel" in general:
            self.parallel(_flag(general, "general", "parallel"))
        if "values_only" in general:
            self.values_only(_flag(general, "general", "values_only"))
        if general.get("max_workers") is not None:
            self.max_workers(_integer(general, "general", "max_workers"))
        if "color" in display:
            self.color(_flag(display, "display", "color"))
        if "enabled" in logo:
            self.with_logo(_flag(logo, "logo", "enabled"))
        if logo.get("name"):
            self.with_logo_name(_text(logo, "logo", "name"))
        if logo.get("custom_file"):
            self.with_custom_logo_file(_text(logo, "logo", "custom_file"))

        for key in ("verbose", "save_debug_logs"):
            if key in debug:
                _flag(debug, "debug", key)
        for key in ("log_level", "debug_log_file"):
            if debug.get(key) is not None:
                _text(debug, "debug", key)
        level = debug.get("log_level")
        if level is not None and not isinstance(logging.getLevelName(level.upper()), int):
            raise ConfigurationError(f"Setting 'debug.log_level' is not a log level: {level!r}")
        return self

    def build(self) -> Config:
        """Finalize the configuration."""
        return Config(
            modules=self._modules,
            parallel=self._parallel,
            values_only=self._values_only,
            logo_enabled=self._logo_enabled,
            logo_name=self._logo_name,
            custom_logo=self._custom_logo,
            color=self._color,
            max_workers=self._max_workers,
        )


# =============================================================================
# Settings Validation
# =============================================================================

def _section(settings: Dict[str, Any], name: str) -> Dict[str, Any]:
    """Return a settings section, treating a missing or null one as empty."""
    section = settings.get(name)
    if section is None:
        return {}
    if not isinstance(section, dict):
        raise ConfigurationError(
            f"Settings section '{name}' must be a mapping, got {section!r}"
        )
    return section


def _flag(section: Dict[str, Any], section_name: str, key: str) -> bool:
    value = section[key]
    if not isinstance(value, bool):
        raise ConfigurationError(
            f"Setting '{section_name}.{key}' must be true or false, got {value!r}"
        )
    return value


def _integer(section: Dict[str, Any], section_name: str, key: str) -> int:
    value = section[key]
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(
            f"Setting '{section_name}.{key}' must be an integer, got {value!r}"
        )
    return value


def _text(section: Dict[str, Any], section_name: str, key: str) -> str:
    value = section[key]
    if not isinstance(value, str):
        raise ConfigurationError(
            f"Setting '{section_name}.{key}' must be a string, got {value!r}"
        )
    return value


def _require_bool(name: str, value: Any) -> bool:
    if not isinstance(value, bool):
        raise ConfigurationError(f"{name} must be a boolean, got {value!r}")
    return value
