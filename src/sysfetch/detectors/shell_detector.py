"""
Shell Detector

Finds the interactive shell that launched sysfetch by walking up the process
tree, falling back to the SHELL environment variable.
"""

import logging
import os
from dataclasses import dataclass
from typing import List, Optional, Tuple

import psutil

from ..platform_probes import parse_version
from .base_detector import BaseDetector, ModuleInfo, ModuleKind

logger = logging.getLogger("sysfetch.detectors")

KNOWN_SHELLS = {
    "sh", "ash", "bash", "dash", "zsh", "fish", "ksh", "mksh", "oksh",
    "tcsh", "csh", "yash", "nu", "elvish", "xonsh", "cmd", "powershell", "pwsh",
}

# Shells whose ``--version`` output carries a dotted version number.
VERSIONED_SHELLS = {"bash", "zsh", "fish", "ksh", "mksh", "tcsh", "nu", "elvish", "xonsh", "pwsh"}


@dataclass(frozen=True)
class ShellInfo(ModuleInfo):
    """Shell name, optional version and executable path."""
    kind = ModuleKind.SHELL

    name: str
    version: Optional[str] = None
    path: str = ""


def normalize_shell_name(name: str) -> str:
    """Strip login-shell dashes, directories and ``.exe`` from a process name."""
    name = os.path.basename(name.strip()).lstrip("-").lower()
    if name.endswith(".exe"):
        name = name[:-4]
    return name


class ShellDetector(BaseDetector):
    """
    Parent-process shell detector.

    Resolution order:
        1. Nearest ancestor process with a known shell name
        2. The SHELL environment variable
    """

    kind = ModuleKind.SHELL

    def _probe(self) -> Optional[ShellInfo]:
        found = self._from_ancestry() or self._from_environment()
        if found is None:
            return None

        name, path = found
        return ShellInfo(name=name, version=self._version(name, path), path=path)

    def _from_ancestry(self) -> Optional[Tuple[str, str]]:
        try:
            ancestry: List[Tuple[str, str]] = self.context.process_ancestry()
        except psutil.Error as e:
            logger.debug(f"Process tree unavailable: {e}")
            return None

        for proc_name, exe in ancestry:
            name = normalize_shell_name(proc_name)
            if name in KNOWN_SHELLS:
                return name, exe
        return None

    def _from_environment(self) -> Optional[Tuple[str, str]]:
        shell_path = (self.context.get_env("SHELL") or "").strip()
        if not shell_path:
            return None
        return normalize_shell_name(shell_path), shell_path

    def _version(self, name: str, path: str) -> Optional[str]:
        if name not in VERSIONED_SHELLS:
            return None
        output = self.context.run_command([path or name, "--version"])
        if output is None:
            return None
        return parse_version(output)
