"""
Host Detector

Reports the machine's hostname and, where the firmware exposes it, the
product model from DMI.
"""

from dataclasses import dataclass
from typing import Optional

from ..platform_probes import DMI_PRODUCT_NAME
from .base_detector import BaseDetector, ModuleInfo, ModuleKind

# Vendor placeholders that carry no information.
DMI_PLACEHOLDERS = {
    "to be filled by o.e.m.",
    "default string",
    "system product name",
    "not applicable",
    "none",
}


@dataclass(frozen=True)
class HostInfo(ModuleInfo):
    """Host identity."""
    kind = ModuleKind.HOST

    hostname: str
    model: Optional[str] = None


class HostDetector(BaseDetector):
    """Hostname plus DMI product name (Linux only)."""

    kind = ModuleKind.HOST

    def _probe(self) -> Optional[HostInfo]:
        hostname = self.context.hostname().strip()
        if not hostname:
            return None
        return HostInfo(hostname=hostname, model=self._product_name())

    def _product_name(self) -> Optional[str]:
        if not self.context.platform_name.startswith("linux"):
            return None
        try:
            product = self.context.read_file(DMI_PRODUCT_NAME).strip()
        except OSError:
            # Not every machine (containers, ARM boards) exposes DMI
            return None
        if not product or product.lower() in DMI_PLACEHOLDERS:
            return None
        return product
