"""
Memory (RAM) Detector

Reports used and total physical memory. Linux reads /proc/meminfo directly;
other platforms go through psutil.
"""

from dataclasses import dataclass
from typing import Optional

from ..errors import DetectionFailure
from ..platform_probes import PROC_MEMINFO, parse_meminfo
from .base_detector import BaseDetector, ModuleInfo, ModuleKind


@dataclass(frozen=True)
class MemoryInfo(ModuleInfo):
    """Physical memory usage in bytes."""
    kind = ModuleKind.MEMORY

    used_bytes: int
    total_bytes: int

    @property
    def available_bytes(self) -> int:
        return max(self.total_bytes - self.used_bytes, 0)


class MemoryDetector(BaseDetector):
    """
    System memory detector.

    Used memory is total minus available, matching what ``free`` reports
    as in use (buffers and page cache excluded).
    """

    kind = ModuleKind.MEMORY

    def _probe(self) -> Optional[MemoryInfo]:
        if self.context.platform_name.startswith("linux"):
            total, available = self._read_meminfo()
        else:
            total, available = self.context.virtual_memory()

        if total <= 0:
            return None
        used = max(total - available, 0)
        return MemoryInfo(used_bytes=used, total_bytes=total)

    def _read_meminfo(self):
        fields = parse_meminfo(self.context.read_file(PROC_MEMINFO))
        if "MemTotal" not in fields:
            raise DetectionFailure("MemTotal missing from /proc/meminfo")

        total_kb = fields["MemTotal"]
        # Kernels before 3.14 lack MemAvailable
        available_kb = fields.get("MemAvailable")
        if available_kb is None:
            available_kb = (
                fields.get("MemFree", 0) + fields.get("Buffers", 0) + fields.get("Cached", 0)
            )
        return total_kb * 1024, available_kb * 1024
