"""
Platform Probes

Low-level readers for the raw facts consumed by detectors.

``SystemContext`` wraps every call that touches the running system (files,
environment, psutil, py-cpuinfo, subprocesses) so detectors can be handed
canned data in tests. The ``parse_*`` helpers are pure functions over the
contents of kernel interface files.
"""

import os
import re
import sys
import time
import socket
import logging
import platform
import subprocess
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

import psutil
import cpuinfo

from .errors import DetectionFailure

logger = logging.getLogger("sysfetch.probes")


OS_RELEASE_PATHS = ("/etc/os-release", "/usr/lib/os-release")
PROC_MEMINFO = "/proc/meminfo"
PROC_CPUINFO = "/proc/cpuinfo"
PROC_UPTIME = "/proc/uptime"
DMI_PRODUCT_NAME = "/sys/devices/virtual/dmi/id/product_name"

_VERSION_PATTERN = re.compile(r"(\d+(?:\.\d+)+)")


class SystemContext:
    """
    Read-only access to the running system.

    Every method is a short, bounded, synchronous call. Instances hold no
    state and are safe to share between worker threads.
    """

    @property
    def platform_name(self) -> str:
        """``sys.platform`` of the running interpreter."""
        return sys.platform

    def read_file(self, path: str) -> str:
        """Read a small text file, raising ``OSError`` if it is unreadable."""
        return Path(path).read_text(encoding="utf-8", errors="replace")

    def get_env(self, key: str) -> Optional[str]:
        return os.environ.get(key)

    def uname(self) -> platform.uname_result:
        return platform.uname()

    def hostname(self) -> str:
        return socket.gethostname()

    def machine(self) -> str:
        return platform.machine()

    def mac_version(self) -> str:
        return platform.mac_ver()[0]

    def virtual_memory(self) -> Tuple[int, int]:
        """Return ``(total, available)`` physical memory in bytes."""
        mem = psutil.virtual_memory()
        return mem.total, mem.available

    def boot_time(self) -> float:
        return psutil.boot_time()

    def now(self) -> float:
        return time.time()

    def cpu_count(self) -> Optional[int]:
        return psutil.cpu_count(logical=True)

    def cpu_brand(self) -> Optional[str]:
        """CPU brand string from py-cpuinfo, or None if it reports nothing."""
        return cpuinfo.get_cpu_info().get("brand_raw") or None

    def process_ancestry(self) -> List[Tuple[str, str]]:
        """
        Get ``(name, exe)`` for each ancestor of this process, nearest first.

        Processes that vanish or deny access are skipped; an ``exe`` that
        cannot be read is returned as an empty string.
        """
        ancestry = []
        for proc in psutil.Process().parents():
            try:
                name = proc.name()
            except (psutil.NoSuchProcess, psutil.AccessDenied):
                continue
            try:
                exe = proc.exe()
            except (psutil.NoSuchProcess, psutil.AccessDenied, OSError):
                exe = ""
            ancestry.append((name, exe))
        return ancestry

    def run_command(self, args: Sequence[str], timeout: float = 1.0) -> Optional[str]:
        """
        Run a command and return its stdout.

        Returns:
            Decoded stdout, or None if the command is missing, fails,
            or does not finish within ``timeout`` seconds
        """
        try:
            result = subprocess.run(
                list(args),
                capture_output=True,
                text=True,
                timeout=timeout,
                check=False,
            )
        except (OSError, subprocess.SubprocessError) as e:
            logger.debug(f"Command {args[0]} unavailable: {e}")
            return None
        if result.returncode != 0:
            return None
        return result.stdout


# =============================================================================
# Parsers
# =============================================================================

def parse_os_release(text: str) -> Dict[str, str]:
    """
    Parse an os-release file into a dictionary.

    Args:
        text: File contents (``KEY=value`` lines, values optionally quoted)

    Returns:
        Dictionary of keys to unquoted values
    """
    fields = {}
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, _, value = line.partition("=")
        fields[key.strip()] = value.strip().strip("\"'")
    return fields


def parse_meminfo(text: str) -> Dict[str, int]:
    """Parse /proc/meminfo into a mapping of field name to value in kB."""
    fields = {}
    for line in text.splitlines():
        key, sep, value = line.partition(":")
        if not sep:
            continue
        parts = value.split()
        if parts and parts[0].isdigit():
            fields[key.strip()] = int(parts[0])
    return fields


def parse_cpuinfo(text: str) -> Dict[str, str]:
    """Parse /proc/cpuinfo, keeping the first occurrence of every key."""
    fields: Dict[str, str] = {}
    for line in text.splitlines():
        key, sep, value = line.partition(":")
        if not sep:
            continue
        fields.setdefault(key.strip(), value.strip())
    return fields


def parse_uptime(text: str) -> float:
    """
    Parse /proc/uptime.

    Raises:
        DetectionFailure: If the first field is missing or not a number
    """
    parts = text.split()
    if not parts:
        raise DetectionFailure("Invalid /proc/uptime format")
    try:
        return float(parts[0])
    except ValueError:
        raise DetectionFailure(f"Invalid uptime value: {parts[0]!r}") from None


def parse_version(output: str) -> Optional[str]:
    """Extract the first dotted version number from a ``--version`` banner."""
    for line in output.splitlines():
        match = _VERSION_PATTERN.search(line)
        if match:
            return match.group(1)
    return None
