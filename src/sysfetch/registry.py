"""
Module Registry

Maps module identifiers to detector classes. This table is the single place
new modules are wired in; its order is the default display order.
"""

from collections import OrderedDict
from typing import Dict, Iterable, List, Optional, Type, Union

from .detectors import (
    BaseDetector,
    CPUDetector,
    HostDetector,
    KernelDetector,
    MemoryDetector,
    ModuleKind,
    OSDetector,
    ShellDetector,
    UptimeDetector,
)
from .errors import ConfigurationError, UnknownModuleError
from .platform_probes import SystemContext

MODULE_REGISTRY: "OrderedDict[ModuleKind, Type[BaseDetector]]" = OrderedDict([
    (ModuleKind.OS, OSDetector),
    (ModuleKind.HOST, HostDetector),
    (ModuleKind.KERNEL, KernelDetector),
    (ModuleKind.UPTIME, UptimeDetector),
    (ModuleKind.SHELL, ShellDetector),
    (ModuleKind.CPU, CPUDetector),
    (ModuleKind.MEMORY, MemoryDetector),
])

_BY_IDENTIFIER: Dict[str, ModuleKind] = {kind.identifier: kind for kind in MODULE_REGISTRY}


def available_modules() -> List[ModuleKind]:
    """Return every registered module kind in declared order."""
    return list(MODULE_REGISTRY)


def parse_module_name(name: str) -> ModuleKind:
    """
    Resolve a module identifier.

    Args:
        name: Identifier such as ``"cpu"``; case and surrounding whitespace
            are ignored

    Raises:
        UnknownModuleError: If no registered module has this identifier
    """
    kind = _BY_IDENTIFIER.get(name.strip().lower())
    if kind is None:
        raise UnknownModuleError([name.strip()])
    return kind


def parse_module_list(value: Union[str, Iterable[str]]) -> List[ModuleKind]:
    """
    Resolve an ordered module list.

    Args:
        value: Comma-separated string or iterable of identifiers. Empty
            entries are ignored; order and duplicates are preserved.

    Returns:
        Module kinds in the requested order

    Raises:
        UnknownModuleError: Listing every unknown identifier
        ConfigurationError: If the list contains no modules at all
    """
    if isinstance(value, str):
        value = value.split(",")

    kinds = []
    unknown = []
    for raw in value:
        name = str(raw).strip()
        if not name:
            continue
        try:
            kinds.append(parse_module_name(name))
        except UnknownModuleError:
            unknown.append(name)

    if unknown:
        raise UnknownModuleError(unknown)
    if not kinds:
        raise ConfigurationError("No modules specified")
    return kinds


def create_detector(kind: ModuleKind, context: Optional[SystemContext] = None) -> BaseDetector:
    """
    Build a fresh detector for one module.

    Raises:
        ConfigurationError: If ``kind`` has no registered detector
    """
    try:
        detector_cls = MODULE_REGISTRY[kind]
    except KeyError:
        raise ConfigurationError(f"No detector registered for {kind!r}") from None
    return detector_cls(context)
