# SPDX-License-Identifier: MIT
"""Host platform detection.

The host is the machine running the build. It is read once per process
and only used to pick a branch of the target configuration matrix.
"""

from __future__ import annotations

import platform as _platform
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache


class HostOS(Enum):
    """Host operating systems libpng can be built on."""

    MACOS = "macos"
    LINUX = "linux"
    WINDOWS = "windows"


# platform.system() -> normalized OS name
_OS_NAMES: dict[str, str] = {
    "darwin": "macos",
    "linux": "linux",
    "windows": "windows",
}

# platform.machine() -> normalized architecture name
_ARCH_NAMES: dict[str, str] = {
    "x86_64": "x86_64",
    "amd64": "x86_64",
    "x64": "x86_64",
    "aarch64": "aarch64",
    "arm64": "aarch64",
}


@dataclass(frozen=True)
class Platform:
    """Operating system and processor architecture of a build host.

    Attributes:
        os: Normalized OS name ('macos', 'linux', 'windows', or whatever
            else the interpreter reports, lowercased).
        arch: Normalized architecture name ('x86_64', 'aarch64', or the
            raw machine name lowercased).
    """

    os: str
    arch: str

    @property
    def host_os(self) -> HostOS | None:
        """The OS as a HostOS member, or None if it is not supported."""
        try:
            return HostOS(self.os)
        except ValueError:
            return None

    @property
    def is_macos(self) -> bool:
        return self.os == HostOS.MACOS.value

    @property
    def is_linux(self) -> bool:
        return self.os == HostOS.LINUX.value

    @property
    def is_windows(self) -> bool:
        return self.os == HostOS.WINDOWS.value

    def __str__(self) -> str:
        return f"{self.os}/{self.arch}"


def normalize_os(name: str) -> str:
    """Map a platform.system() value to a normalized OS name."""
    lowered = name.lower()
    return _OS_NAMES.get(lowered, lowered)


def normalize_arch(name: str) -> str:
    """Map a platform.machine() value to a normalized architecture name."""
    lowered = name.lower()
    return _ARCH_NAMES.get(lowered, lowered)


@lru_cache(maxsize=1)
def get_platform() -> Platform:
    """Detect the current host platform.

    The result is cached for the lifetime of the process.
    """
    return Platform(
        os=normalize_os(_platform.system()),
        arch=normalize_arch(_platform.machine()),
    )
