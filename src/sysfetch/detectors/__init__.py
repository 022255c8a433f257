"""
Module Detectors

One detector per module kind. Contributors add a module by defining a new
ModuleKind member, a payload dataclass, a detector implementing the base
interface, and registering it in ``sysfetch.registry``.

Available Detectors:
    - os_detector: Distribution / operating system identity
    - host_detector: Hostname and product model
    - kernel_detector: Kernel name and release
    - uptime_detector: Time since boot
    - shell_detector: Parent shell and version
    - cpu_detector: Processor model and core count
    - memory_detector: Used and total physical memory
"""

from .base_detector import (
    BaseDetector,
    DetectionOutcome,
    DetectionStatus,
    ModuleInfo,
    ModuleKind,
)
from .os_detector import OSDetector, OsInfo
from .host_detector import HostDetector, HostInfo
from .kernel_detector import KernelDetector, KernelInfo
from .uptime_detector import UptimeDetector, UptimeInfo
from .shell_detector import ShellDetector, ShellInfo
from .cpu_detector import CPUDetector, CpuInfo
from .memory_detector import MemoryDetector, MemoryInfo

__all__ = [
    "BaseDetector",
    "DetectionOutcome",
    "DetectionStatus",
    "ModuleInfo",
    "ModuleKind",
    "OSDetector",
    "OsInfo",
    "HostDetector",
    "HostInfo",
    "KernelDetector",
    "KernelInfo",
    "UptimeDetector",
    "UptimeInfo",
    "ShellDetector",
    "ShellInfo",
    "CPUDetector",
    "CpuInfo",
    "MemoryDetector",
    "MemoryInfo",
]
