"""
Base Detector Interface

All module detectors inherit from BaseDetector and implement ``_probe``.
This keeps the three-way outcome contract (present, not applicable, failed)
identical across every module kind.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Optional

import psutil

from ..errors import DetectionFailure
from ..platform_probes import SystemContext

logger = logging.getLogger("sysfetch.detectors")

# Errors a probe may raise for a genuine I/O or parse problem.
RECOVERABLE_ERRORS = (OSError, ValueError, psutil.Error, DetectionFailure)


class ModuleKind(Enum):
    """Every module sysfetch knows about, in default display order."""

    OS = ("os", "OS")
    HOST = ("host", "Host")
    KERNEL = ("kernel", "Kernel")
    UPTIME = ("uptime", "Uptime")
    SHELL = ("shell", "Shell")
    CPU = ("cpu", "CPU")
    MEMORY = ("memory", "Memory")

    def __init__(self, identifier: str, label: str):
        self.identifier = identifier
        self.label = label

    def __str__(self) -> str:
        return self.identifier


class ModuleInfo:
    """
    Base for module payloads.

    Each concrete payload is a frozen dataclass bound to exactly one
    ModuleKind through its ``kind`` class attribute.
    """

    kind: ClassVar[ModuleKind]


class DetectionStatus(Enum):
    PRESENT = "present"
    NOT_APPLICABLE = "not_applicable"
    FAILED = "failed"


@dataclass(frozen=True)
class DetectionOutcome:
    """Result of running one detector."""
    kind: ModuleKind
    status: DetectionStatus
    info: Optional[ModuleInfo] = None
    error: Optional[str] = None

    @classmethod
    def present(cls, info: ModuleInfo) -> "DetectionOutcome":
        return cls(kind=info.kind, status=DetectionStatus.PRESENT, info=info)

    @classmethod
    def not_applicable(cls, kind: ModuleKind) -> "DetectionOutcome":
        return cls(kind=kind, status=DetectionStatus.NOT_APPLICABLE)

    @classmethod
    def failed(cls, kind: ModuleKind, error: str) -> "DetectionOutcome":
        return cls(kind=kind, status=DetectionStatus.FAILED, error=error)

    @property
    def is_present(self) -> bool:
        return self.status is DetectionStatus.PRESENT

    @property
    def is_failed(self) -> bool:
        return self.status is DetectionStatus.FAILED


def describe_error(error: BaseException) -> str:
    """Render an exception as a one-line diagnostic message."""
    message = str(error).strip()
    return message or error.__class__.__name__


class BaseDetector(ABC):
    """
    Abstract base class for all module detectors.

    Subclasses set ``kind`` and implement ``_probe``, returning a payload or
    None when the fact does not exist on this platform. Probes raise for
    genuine read or parse errors; ``detect`` turns those into a failed
    outcome.

    Example:
        class LoadDetector(BaseDetector):
            kind = ModuleKind.LOAD

            def _probe(self) -> Optional[LoadInfo]:
                text = self.context.read_file("/proc/loadavg")
                return LoadInfo(*map(float, text.split()[:3]))
    """

    kind: ClassVar[ModuleKind]

    def __init__(self, context: Optional[SystemContext] = None):
        """
        Initialize the detector.

        Args:
            context: System access used by probes; the real system if omitted
        """
        self.context = context or SystemContext()

    @property
    def detector_name(self) -> str:
        """Return the name of this detector."""
        return self.__class__.__name__

    @abstractmethod
    def _probe(self) -> Optional[ModuleInfo]:
        """
        Gather this module's facts.

        Returns:
            The module payload, or None if nothing applies on this platform
        """

    def detect(self) -> DetectionOutcome:
        """Run the probe and classify its result."""
        try:
            info = self._probe()
        except RECOVERABLE_ERRORS as e:
            logger.debug(f"{self.detector_name} failed: {e}")
            return DetectionOutcome.failed(self.kind, describe_error(e))

        if info is None:
            logger.debug(f"{self.detector_name}: not applicable")
            return DetectionOutcome.not_applicable(self.kind)
        return DetectionOutcome.present(info)
