"""
Operating System Detector

Identifies the distribution or operating system. On Linux the identity comes
from os-release, which also drives logo selection.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from ..errors import DetectionFailure
from ..platform_probes import OS_RELEASE_PATHS, parse_os_release
from .base_detector import BaseDetector, ModuleInfo, ModuleKind


@dataclass(frozen=True)
class OsInfo(ModuleInfo):
    """Operating system identity."""
    kind = ModuleKind.OS

    name: str
    arch: str
    version: Optional[str] = None
    id: str = "linux"
    id_like: Tuple[str, ...] = ()


class OSDetector(BaseDetector):
    """
    Operating system detector.

    Reads, in order:
        - /etc/os-release
        - /usr/lib/os-release
    and falls back to ``platform`` data on non-Linux systems.
    """

    kind = ModuleKind.OS

    def _probe(self) -> Optional[OsInfo]:
        platform_name = self.context.platform_name
        if platform_name.startswith("linux"):
            return self._probe_linux()
        if platform_name == "darwin":
            return OsInfo(
                name="macOS",
                version=self.context.mac_version() or None,
                arch=self.context.machine(),
                id="macos",
            )

        uname = self.context.uname()
        if not uname.system:
            return None
        return OsInfo(
            name=uname.system,
            version=uname.release or None,
            arch=uname.machine or self.context.machine(),
            id=uname.system.lower(),
        )

    def _probe_linux(self) -> OsInfo:
        text = None
        for path in OS_RELEASE_PATHS:
            try:
                text = self.context.read_file(path)
                break
            except FileNotFoundError:
                continue
        if text is None:
            raise DetectionFailure("No os-release file found")

        fields = parse_os_release(text)
        name = fields.get("PRETTY_NAME") or fields.get("NAME") or "Linux"
        return OsInfo(
            name=name,
            version=fields.get("VERSION_ID") or fields.get("VERSION") or None,
            arch=self.context.machine(),
            id=fields.get("ID", "linux").lower(),
            id_like=tuple(fields.get("ID_LIKE", "").lower().split()),
        )
