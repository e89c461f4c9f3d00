# SPDX-License-Identifier: MIT
"""Compile libpng with CMake and stage the results.

Two entry points are provided:

- compile_lib() runs the CMake configure and build steps in a working
  directory and returns the path of the static library.
- build_artifact() additionally assembles a directory with the public
  headers and the library, ready for a linker and a binding generator.

Example (in another package's build script):

    from libpng_src import build_artifact

    artifacts = build_artifact("x86_64-unknown-linux-gnu", out_dir)
    library_dirs = [str(artifacts.lib_dir)]
    libraries = [artifacts.link_name]
    include_dirs = [str(artifacts.include_dir)]

File structure produced by build_artifact():

    working_dir/
        build/   ... temporary build directory, removed afterwards
        libpng/  ... artifact root directory
            include/  ... png.h, pngconf.h, pnglibconf.h
            lib/      ... the static library
"""

from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass
from pathlib import Path

from libpng_src.configure.platform import Platform, get_platform
from libpng_src.configure.targets import resolve_configuration
from libpng_src.core.errors import ArtifactNotFoundError, LibpngSrcError
from libpng_src.util.commands import copy, execute, make_dir, recreate_dir, remove_tree

logger = logging.getLogger(__name__)

# Version of the vendored libpng sources
LIBPNG_VERSION = "1.6.43"

# Hand-written public headers shipped with the sources
PUBLIC_HEADERS = ("png.h", "pngconf.h")
# Header generated by the configure step
GENERATED_HEADER = "pnglibconf.h"

WINDOWS_ARTIFACT = Path("Release") / "libpng16_static.lib"
UNIX_ARTIFACT = Path("libpng16.a")

BUILD_SUBDIR = "build"
BUNDLE_SUBDIR = "libpng"


@dataclass
class Artifacts:
    """Result of build_artifact().

    Attributes:
        root_dir: Artifact root directory.
        include_dir: C headers; point binding generators here.
        lib_dir: Directory holding the static library; add it to the
            linker search path.
        link_name: Library name to pass to the linker.
        library_path: The static library inside lib_dir.
    """

    root_dir: Path
    include_dir: Path
    lib_dir: Path
    link_name: str
    library_path: Path


def source_path() -> Path:
    """Return the path of the vendored libpng source directory.

    The directory is unmodified upstream source; it does not contain
    pnglibconf.h, which is generated at build time.
    """
    return Path(__file__).resolve().parent / "libpng"


def compile_lib(
    target: str,
    working_dir: Path | str,
    *,
    host: Platform | None = None,
    source_dir: Path | str | None = None,
    cmake: str = "cmake",
    zlib_dir: Path | str | None = None,
) -> Path:
    """Statically compile libpng and return the path of the library.

    Use this when the include headers are not needed. The working
    directory is created if missing and emptied if it already exists.

    Args:
        target: Target triple, e.g. 'x86_64-unknown-linux-gnu'.
        working_dir: Directory to run the build in.
        host: Host platform. Detected if not given.
        source_dir: libpng source tree. Defaults to source_path().
        cmake: CMake executable name or path.
        zlib_dir: Windows only: fallback zlib directory.

    Returns:
        Path to the compiled static library.

    Raises:
        UnsupportedHostError: If the host OS is not supported.
        UnsupportedTargetError: If the target is not valid for this host.
        ToolFailureError: If a CMake step fails.
        ArtifactNotFoundError: If CMake succeeded but no library was produced.
        FilesystemError: If the working directory cannot be prepared.
    """
    host = host or get_platform()
    working_dir = Path(working_dir)
    source_dir = Path(source_dir) if source_dir is not None else source_path()

    cmake_args: list[str | Path] = [
        *resolve_configuration(target, host, zlib_dir=zlib_dir)
    ]
    cmake_args.append(source_dir)

    recreate_dir(working_dir)

    execute(cmake, cmake_args, working_dir)
    execute(cmake, ["--build", ".", "--config", "Release"], working_dir)

    return artifact_path(working_dir, host)


def build_artifact(
    target: str,
    working_dir: Path | str,
    *,
    host: Platform | None = None,
    source_dir: Path | str | None = None,
    cmake: str = "cmake",
    zlib_dir: Path | str | None = None,
) -> Artifacts:
    """Build libpng and collect headers and library in one directory.

    The working directory is created if missing. Previous contents of
    its 'build/' and 'libpng/' subdirectories are removed. Arguments
    are the same as for compile_lib().

    Returns:
        Artifacts describing the staged directory.

    Raises:
        LibpngSrcError: Any error from compile_lib(), or FilesystemError
            if the headers or library cannot be staged.
    """
    host = host or get_platform()
    working_dir = Path(working_dir)
    source_dir = Path(source_dir) if source_dir is not None else source_path()
    build_dir = working_dir / BUILD_SUBDIR

    library_path = compile_lib(
        target,
        build_dir,
        host=host,
        source_dir=source_dir,
        cmake=cmake,
        zlib_dir=zlib_dir,
    )

    root_dir = working_dir / BUNDLE_SUBDIR
    include_dir = root_dir / "include"
    lib_dir = root_dir / "lib"

    recreate_dir(root_dir)
    try:
        make_dir(include_dir)
        for header in PUBLIC_HEADERS:
            copy(source_dir / header, include_dir / header)
        copy(build_dir / GENERATED_HEADER, include_dir / GENERATED_HEADER)

        make_dir(lib_dir)
        staged_library = copy(library_path, lib_dir / library_path.name)
    except LibpngSrcError:
        shutil.rmtree(root_dir, ignore_errors=True)
        raise

    try:
        remove_tree(build_dir)
    except LibpngSrcError as e:
        logger.warning("libpng-src cannot clean build directory: %s", e)

    return Artifacts(
        root_dir=root_dir,
        include_dir=include_dir,
        lib_dir=lib_dir,
        link_name=link_name(library_path.name, host),
        library_path=staged_library,
    )


def artifact_path(working_dir: Path | str, host: Platform | None = None) -> Path:
    """Locate the static library produced in a build directory.

    Raises:
        ArtifactNotFoundError: If the library file does not exist.
    """
    host = host or get_platform()
    relative = WINDOWS_ARTIFACT if host.is_windows else UNIX_ARTIFACT
    path = Path(working_dir) / relative

    if not path.is_file():
        raise ArtifactNotFoundError(path)
    return path


def link_name(file_name: str, host: Platform | None = None) -> str:
    """Derive the linker library name from a library file name.

    Everything from the first '.' on is dropped. On non-Windows hosts a
    leading 'lib' is stripped too, since Unix linkers add it back.

    Examples:
        libpng16.a -> png16
        libpng.16.a -> png
        libpng16_static.lib -> libpng16_static (Windows)
    """
    host = host or get_platform()
    name = file_name.split(".")[0]
    if not host.is_windows:
        name = name.removeprefix("lib")
    return name
