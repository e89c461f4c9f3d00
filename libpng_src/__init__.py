# SPDX-License-Identifier: MIT
"""
libpng-src: build libpng from vendored sources into a static library.

Meant to be used at build time by packages that link against libpng or
generate bindings for it. It does not provide any PNG functionality by
itself.

Expected to work for:
- Linux: x86_64-unknown-linux-gnu, aarch64-unknown-linux-gnu (native only)
- Windows: x86_64-pc-windows-msvc, aarch64-pc-windows-msvc (native only)
- macOS: x86_64-apple-darwin, aarch64-apple-darwin
- iOS, including simulators, cross-compiled from macOS:
  x86_64-apple-ios, aarch64-apple-ios, aarch64-apple-ios-sim
"""

from __future__ import annotations

from libpng_src.build import (
    LIBPNG_VERSION,
    Artifacts,
    build_artifact,
    compile_lib,
    link_name,
    source_path,
)
from libpng_src.configure.platform import Platform, get_platform
from libpng_src.configure.targets import (
    TargetPlatform,
    allowed_targets,
    resolve_configuration,
)
from libpng_src.core.errors import (
    ArtifactNotFoundError,
    FilesystemError,
    LibpngSrcError,
    ToolFailureError,
    UnsupportedHostError,
    UnsupportedTargetError,
)

__version__ = "0.2.3"

__all__ = [
    # Versions
    "__version__",
    "LIBPNG_VERSION",
    # Building
    "Artifacts",
    "build_artifact",
    "compile_lib",
    "link_name",
    "source_path",
    # Platforms
    "Platform",
    "TargetPlatform",
    "allowed_targets",
    "get_platform",
    "resolve_configuration",
    # Errors
    "LibpngSrcError",
    "UnsupportedHostError",
    "UnsupportedTargetError",
    "ToolFailureError",
    "ArtifactNotFoundError",
    "FilesystemError",
]
