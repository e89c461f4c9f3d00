# SPDX-License-Identifier: MIT
"""Target platforms and their CMake configuration.

Maps a (host, target) pair to the list of arguments passed to the CMake
configure step. Cross-compilation is only supported from macOS to iOS;
every other target must match the host OS and architecture.
"""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path

from libpng_src.configure.platform import HostOS, Platform, get_platform
from libpng_src.core.errors import (
    FilesystemError,
    UnsupportedHostError,
    UnsupportedTargetError,
)

logger = logging.getLogger(__name__)

# Directory holding zlib.h, zconf.h and a prebuilt zlib.lib for Windows
# hosts, where zlib is not expected to be installed.
WIN_ZLIB_DIR = Path(__file__).resolve().parent.parent / "win-zlib-include"
WIN_ZLIB_LIBRARY = "zlib.lib"


class TargetPlatform(str, Enum):
    """Target triples libpng can be built for."""

    AARCH64_APPLE_DARWIN = "aarch64-apple-darwin"
    X86_64_APPLE_DARWIN = "x86_64-apple-darwin"
    AARCH64_APPLE_IOS = "aarch64-apple-ios"
    AARCH64_APPLE_IOS_SIM = "aarch64-apple-ios-sim"
    X86_64_APPLE_IOS = "x86_64-apple-ios"
    X86_64_UNKNOWN_LINUX_GNU = "x86_64-unknown-linux-gnu"
    AARCH64_UNKNOWN_LINUX_GNU = "aarch64-unknown-linux-gnu"
    X86_64_PC_WINDOWS_MSVC = "x86_64-pc-windows-msvc"
    AARCH64_PC_WINDOWS_MSVC = "aarch64-pc-windows-msvc"

    def __str__(self) -> str:
        return self.value

    @property
    def arch(self) -> str:
        """Architecture part of the triple ('x86_64' or 'aarch64')."""
        return self.value.split("-", 1)[0]

    @property
    def is_apple(self) -> bool:
        return "-apple-" in self.value

    @property
    def is_apple_mobile(self) -> bool:
        """True for iOS devices and simulators."""
        return "-apple-ios" in self.value

    @property
    def is_simulator(self) -> bool:
        """True for targets that run in the iOS simulator.

        x86_64 iOS only ever existed as a simulator target.
        """
        return self in (
            TargetPlatform.AARCH64_APPLE_IOS_SIM,
            TargetPlatform.X86_64_APPLE_IOS,
        )


# CMAKE_OSX_ARCHITECTURES value for each target architecture
_OSX_ARCHITECTURES: dict[str, str] = {
    "aarch64": "arm64",
    "x86_64": "x86_64",
}

_APPLE_TARGETS = [
    TargetPlatform.AARCH64_APPLE_DARWIN,
    TargetPlatform.X86_64_APPLE_DARWIN,
    TargetPlatform.AARCH64_APPLE_IOS,
    TargetPlatform.AARCH64_APPLE_IOS_SIM,
    TargetPlatform.X86_64_APPLE_IOS,
]

# Keyed by (host OS, host arch); macOS hosts build every Apple target
# regardless of their own architecture.
_NATIVE_TARGETS: dict[tuple[HostOS, str], list[TargetPlatform]] = {
    (HostOS.LINUX, "x86_64"): [TargetPlatform.X86_64_UNKNOWN_LINUX_GNU],
    (HostOS.LINUX, "aarch64"): [TargetPlatform.AARCH64_UNKNOWN_LINUX_GNU],
    (HostOS.WINDOWS, "x86_64"): [TargetPlatform.X86_64_PC_WINDOWS_MSVC],
    (HostOS.WINDOWS, "aarch64"): [TargetPlatform.AARCH64_PC_WINDOWS_MSVC],
}

COMMON_CMAKE_OPTIONS = ["-DPNG_SHARED=OFF", "-DPNG_TESTS=OFF"]


def allowed_targets(host: Platform | None = None) -> list[TargetPlatform]:
    """List the targets buildable on a host.

    Args:
        host: Host platform. Detected if not given.

    Returns:
        Targets in a stable order; empty for unsupported hosts.
    """
    host = host or get_platform()
    host_os = host.host_os
    if host_os is HostOS.MACOS:
        return list(_APPLE_TARGETS)
    if host_os is None:
        return []
    return list(_NATIVE_TARGETS.get((host_os, host.arch), []))


def parse_target(target_id: str, host: Platform | None = None) -> TargetPlatform:
    """Validate a target identifier against the host's allow-list.

    Raises:
        UnsupportedHostError: If the host OS is not supported at all.
        UnsupportedTargetError: If the target cannot be built on this host.
    """
    host = host or get_platform()
    if host.host_os is None:
        raise UnsupportedHostError(host.os)

    for target in allowed_targets(host):
        if target.value == target_id:
            return target
    raise UnsupportedTargetError(str(target_id), host.os, host.arch)


def resolve_configuration(
    target_id: str,
    host: Platform | None = None,
    *,
    zlib_dir: Path | str | None = None,
) -> list[str]:
    """Build the CMake configure arguments for a target.

    Common options come first, followed by the platform-specific ones.

    Args:
        target_id: Target triple, e.g. 'aarch64-apple-ios-sim'.
        host: Host platform. Detected if not given.
        zlib_dir: Windows only: directory with the fallback zlib headers
            and import library. Defaults to the bundled copy.

    Returns:
        List of CMake arguments, without the source directory.

    Raises:
        UnsupportedHostError: If the host OS is not supported.
        UnsupportedTargetError: If the target is not valid for this host.
        FilesystemError: If the Windows zlib fallback cannot be found.
    """
    host = host or get_platform()
    target = parse_target(target_id, host)

    options = list(COMMON_CMAKE_OPTIONS)
    if host.host_os is HostOS.MACOS:
        options.extend(apple_cmake_options(target))
    elif host.host_os is HostOS.WINDOWS:
        options.extend(windows_cmake_options(zlib_dir))

    logger.debug("CMake options for %s on %s: %s", target, host, options)
    return options


def apple_cmake_options(target: TargetPlatform) -> list[str]:
    """CMake options for macOS and iOS targets."""
    if not target.is_apple:
        raise UnsupportedTargetError(target.value, HostOS.MACOS.value, "any")

    options: list[str] = []
    if target.is_apple_mobile:
        options.append("-DCMAKE_SYSTEM_NAME=iOS")
    options.append(f"-DCMAKE_OSX_ARCHITECTURES={_OSX_ARCHITECTURES[target.arch]}")
    if target.is_simulator:
        options.append("-DCMAKE_OSX_SYSROOT=iphonesimulator")

    # A framework bundle is useless to a static library consumer
    options.append("-DPNG_FRAMEWORK=OFF")
    return options


def windows_cmake_options(zlib_dir: Path | str | None = None) -> list[str]:
    """CMake options pointing the build at the fallback zlib.

    Raises:
        FilesystemError: If the include directory or zlib.lib is missing.
    """
    include_dir = Path(zlib_dir) if zlib_dir is not None else WIN_ZLIB_DIR
    library = include_dir / WIN_ZLIB_LIBRARY

    if not include_dir.is_dir():
        raise FilesystemError("zlib include directory not found", include_dir)
    if not library.is_file():
        raise FilesystemError("zlib import library not found", library)

    return [f"-DZLIB_INCLUDE_DIR={include_dir}", f"-DZLIB_LIBRARY={library}"]
