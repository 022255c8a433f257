"""
sysfetch Error Types

Configuration errors are fatal and reported before any detection starts.
Detection failures are local to one module and never abort a run.
"""

from typing import Iterable


class SysfetchError(Exception):
    """Base class for all sysfetch errors."""


class ConfigurationError(SysfetchError):
    """Raised when the requested configuration cannot be built."""


class UnknownModuleError(ConfigurationError):
    """Raised when one or more module identifiers are not registered."""

    def __init__(self, names: Iterable[str]):
        self.names = list(names)
        joined = ", ".join(f"'{name}'" for name in self.names)
        noun = "module" if len(self.names) == 1 else "modules"
        super().__init__(f"Unknown {noun}: {joined}")


class DetectionFailure(SysfetchError):
    """Raised by probes when a fact source exists but cannot be read or parsed."""
