"""
CPU Detector

Reports the processor model and logical core count. The model comes from
/proc/cpuinfo where available and from py-cpuinfo otherwise.
"""

from dataclasses import dataclass
from typing import Optional

from ..platform_probes import PROC_CPUINFO, parse_cpuinfo
from .base_detector import BaseDetector, ModuleInfo, ModuleKind

# /proc/cpuinfo keys carrying a model string, by architecture.
CPUINFO_MODEL_KEYS = ("model name", "Hardware", "Processor", "cpu model", "cpu")


@dataclass(frozen=True)
class CpuInfo(ModuleInfo):
    """Processor model and core count."""
    kind = ModuleKind.CPU

    model_name: str
    core_count: Optional[int] = None


class CPUDetector(BaseDetector):
    """
    Cross-platform CPU detector.

    Collects:
        - Model name (/proc/cpuinfo, then py-cpuinfo)
        - Logical core count (psutil)
    """

    kind = ModuleKind.CPU

    def _probe(self) -> Optional[CpuInfo]:
        model = None
        if self.context.platform_name.startswith("linux"):
            model = self._model_from_proc()
        if not model:
            model = self.context.cpu_brand()
        if not model:
            return None

        return CpuInfo(model_name=" ".join(model.split()), core_count=self.context.cpu_count())

    def _model_from_proc(self) -> Optional[str]:
        fields = parse_cpuinfo(self.context.read_file(PROC_CPUINFO))
        for key in CPUINFO_MODEL_KEYS:
            value = fields.get(key)
            # ARM kernels report "Processor : 0" style indices under some keys
            if value and not value.isdigit():
                return value
        return None
