"""
Kernel Detector

Reports the kernel name and release as returned by uname.
"""

from dataclasses import dataclass
from typing import Optional

from .base_detector import BaseDetector, ModuleInfo, ModuleKind


@dataclass(frozen=True)
class KernelInfo(ModuleInfo):
    """Kernel name and release."""
    kind = ModuleKind.KERNEL

    name: str
    release: str


class KernelDetector(BaseDetector):
    kind = ModuleKind.KERNEL

    def _probe(self) -> Optional[KernelInfo]:
        uname = self.context.uname()
        if not uname.system:
            return None
        return KernelInfo(name=uname.system, release=uname.release)
