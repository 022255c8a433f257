"""
Pytest Configuration and Fixtures

Provides a stub SystemContext and canned system files so detectors and the
orchestration layer can be tested without touching the real machine.
"""

import sys
from collections import namedtuple
from pathlib import Path

import pytest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from sysfetch.platform_probes import SystemContext
from sysfetch.utils import get_default_settings


UnameStub = namedtuple("UnameStub", "system node release version machine")


OS_RELEASE_UBUNTU = """\
PRETTY_NAME="Ubuntu 22.04.3 LTS"
NAME="Ubuntu"
VERSION_ID="22.04"
VERSION="22.04.3 LTS (Jammy Jellyfish)"
ID=ubuntu
ID_LIKE=debian
HOME_URL="https://www.ubuntu.com/"
"""

OS_RELEASE_POP = """\
NAME="Pop!_OS"
PRETTY_NAME="Pop!_OS 22.04 LTS"
ID=pop
ID_LIKE="ubuntu debian"
VERSION_ID="22.04"
"""

MEMINFO = """\
MemTotal:       16406250 kB
MemFree:         2000000 kB
MemAvailable:    7578125 kB
Buffers:          400000 kB
Cached:          5000000 kB
SwapTotal:       2097148 kB
"""

CPUINFO = """\
processor\t: 0
vendor_id\t: GenuineIntel
model name\t: Intel(R) Core(TM) i7-8550U CPU @ 1.80GHz
cpu cores\t: 4

processor\t: 1
vendor_id\t: GenuineIntel
model name\t: Intel(R) Core(TM) i7-8550U CPU @ 1.80GHz
cpu cores\t: 4
"""

UPTIME = "93784.52 360000.10\n"


class StubContext(SystemContext):
    """
    SystemContext fed from dictionaries.

    ``files`` maps paths to contents; a value that is an exception instance
    is raised on read. Missing paths raise FileNotFoundError. Every read is
    recorded in ``reads``.
    """

    def __init__(
        self,
        files=None,
        env=None,
        platform_name="linux",
        uname=None,
        hostname="testhost",
        machine="x86_64",
        memory=(16 * 1024**3, 8 * 1024**3),
        boot_time=1_000.0,
        now=4_600.0,
        cpu_count=8,
        cpu_brand=None,
        ancestry=None,
        commands=None,
    ):
        self.files = dict(files or {})
        self.env = dict(env or {})
        self._platform_name = platform_name
        self._uname = uname or UnameStub("Linux", hostname, "6.5.0-14-generic", "#14-Ubuntu", machine)
        self._hostname = hostname
        self._machine = machine
        self._memory = memory
        self._boot_time = boot_time
        self._now = now
        self._cpu_count = cpu_count
        self._cpu_brand = cpu_brand
        self._ancestry = list(ancestry or [])
        self.commands = dict(commands or {})
        self.reads = []
        self.commands_run = []

    @property
    def platform_name(self):
        return self._platform_name

    def read_file(self, path):
        self.reads.append(path)
        if path not in self.files:
            raise FileNotFoundError(2, "No such file or directory", path)
        content = self.files[path]
        if isinstance(content, BaseException):
            raise content
        return content

    def get_env(self, key):
        return self.env.get(key)

    def uname(self):
        return self._uname

    def hostname(self):
        return self._hostname

    def machine(self):
        return self._machine

    def mac_version(self):
        return "14.2"

    def virtual_memory(self):
        return self._memory

    def boot_time(self):
        return self._boot_time

    def now(self):
        return self._now

    def cpu_count(self):
        return self._cpu_count

    def cpu_brand(self):
        return self._cpu_brand

    def process_ancestry(self):
        if isinstance(self._ancestry, BaseException):
            raise self._ancestry
        return list(self._ancestry)

    def run_command(self, args, timeout=1.0):
        self.commands_run.append(list(args))
        return self.commands.get(args[0])


def linux_files():
    return {
        "/etc/os-release": OS_RELEASE_UBUNTU,
        "/proc/meminfo": MEMINFO,
        "/proc/cpuinfo": CPUINFO,
        "/proc/uptime": UPTIME,
        "/sys/devices/virtual/dmi/id/product_name": "ThinkPad X1 Carbon 6th\n",
    }


@pytest.fixture
def linux_context():
    """Provide a fully populated Linux system."""
    return StubContext(
        files=linux_files(),
        env={"SHELL": "/bin/bash"},
        ancestry=[("python3", "/usr/bin/python3"), ("bash", "/usr/bin/bash")],
        commands={"/usr/bin/bash": "GNU bash, version 5.1.16(1)-release (x86_64-pc-linux-gnu)\n"},
    )


@pytest.fixture
def empty_context():
    """Provide a Linux system where every file is missing."""
    return StubContext(files={}, env={}, ancestry=[])


@pytest.fixture
def default_settings():
    """Provide default settings."""
    return get_default_settings()
