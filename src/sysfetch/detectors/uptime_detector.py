"""
Uptime Detector

Reads /proc/uptime on Linux and derives uptime from the boot time
elsewhere.
"""

from dataclasses import dataclass
from typing import Optional

from ..platform_probes import PROC_UPTIME, parse_uptime
from .base_detector import BaseDetector, ModuleInfo, ModuleKind


@dataclass(frozen=True)
class UptimeInfo(ModuleInfo):
    """Time since boot, in whole seconds."""
    kind = ModuleKind.UPTIME

    seconds: int


class UptimeDetector(BaseDetector):
    kind = ModuleKind.UPTIME

    def _probe(self) -> Optional[UptimeInfo]:
        if self.context.platform_name.startswith("linux"):
            seconds = parse_uptime(self.context.read_file(PROC_UPTIME))
        else:
            seconds = self.context.now() - self.context.boot_time()
        return UptimeInfo(seconds=max(int(seconds), 0))
