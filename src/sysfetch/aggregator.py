"""
Result Aggregator

Turns ordered detection outcomes into display rows. Not-applicable modules
are dropped silently; failed modules are dropped from the rows and recorded
as failures for diagnostic output.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List

from .detectors import (
    CpuInfo,
    DetectionStatus,
    HostInfo,
    KernelInfo,
    MemoryInfo,
    ModuleInfo,
    ModuleKind,
    OsInfo,
    ShellInfo,
    UptimeInfo,
)
from .detectors.base_detector import DetectionOutcome
from .utils import format_bytes, format_uptime

logger = logging.getLogger("sysfetch.aggregator")


@dataclass(frozen=True)
class DisplayRow:
    """A labelled value ready for formatting."""
    label: str
    value: str
    kind: ModuleKind


@dataclass(frozen=True)
class ModuleFailure:
    """A module whose detection failed during this run."""
    kind: ModuleKind
    message: str

    def describe(self) -> str:
        return f"{self.kind.label} detection failed: {self.message}"


@dataclass
class AggregateResult:
    rows: List[DisplayRow] = field(default_factory=list)
    failures: List[ModuleFailure] = field(default_factory=list)


def _render_os(info: OsInfo) -> str:
    return f"{info.name} {info.arch}".strip()


def _render_host(info: HostInfo) -> str:
    if info.model:
        return f"{info.model} ({info.hostname})"
    return info.hostname


def _render_kernel(info: KernelInfo) -> str:
    return f"{info.name} {info.release}".strip()


def _render_uptime(info: UptimeInfo) -> str:
    return format_uptime(info.seconds)


def _render_shell(info: ShellInfo) -> str:
    if info.version:
        return f"{info.name} {info.version}"
    return info.name


def _render_cpu(info: CpuInfo) -> str:
    if info.core_count:
        return f"{info.model_name} ({info.core_count})"
    return info.model_name


def _render_memory(info: MemoryInfo) -> str:
    return f"{format_bytes(info.used_bytes)} / {format_bytes(info.total_bytes)}"


_RENDERERS: Dict[ModuleKind, Callable] = {
    ModuleKind.OS: _render_os,
    ModuleKind.HOST: _render_host,
    ModuleKind.KERNEL: _render_kernel,
    ModuleKind.UPTIME: _render_uptime,
    ModuleKind.SHELL: _render_shell,
    ModuleKind.CPU: _render_cpu,
    ModuleKind.MEMORY: _render_memory,
}

_missing = [kind.identifier for kind in ModuleKind if kind not in _RENDERERS]
if _missing:
    raise ImportError(f"No value renderer for modules: {', '.join(_missing)}")


def render_value(info: ModuleInfo) -> str:
    """Render a module payload as its display value."""
    return _RENDERERS[info.kind](info)


def aggregate(outcomes: Iterable[DetectionOutcome]) -> AggregateResult:
    """
    Build display rows from detection outcomes.

    Args:
        outcomes: Outcomes in requested module order

    Returns:
        Rows in the same order (gaps elided) plus recorded failures
    """
    result = AggregateResult()

    for outcome in outcomes:
        if outcome.status is DetectionStatus.PRESENT:
            result.rows.append(DisplayRow(
                label=outcome.kind.label,
                value=render_value(outcome.info),
                kind=outcome.kind,
            ))
        elif outcome.status is DetectionStatus.FAILED:
            failure = ModuleFailure(outcome.kind, outcome.error or "unknown error")
            logger.warning(failure.describe())
            result.failures.append(failure)

    return result
