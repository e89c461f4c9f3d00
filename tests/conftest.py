# SPDX-License-Identifier: MIT
"""Shared fixtures for libpng-src tests."""

from __future__ import annotations

import subprocess
from pathlib import Path
from unittest.mock import patch

import pytest


class FakeCMake:
    """Stand-in for subprocess.run that mimics the two CMake steps.

    The configure step writes pnglibconf.h into the working directory,
    the build step writes the static library at ``artifact``.

    Attributes:
        calls: (command list, cwd) for every invocation.
        artifact: Library path relative to cwd, or None to produce nothing.
        fail_step: 'configure' or 'build' to make that step exit nonzero.
    """

    def __init__(self, artifact: Path | None = Path("libpng16.a")) -> None:
        self.calls: list[tuple[list[str], Path]] = []
        self.artifact = artifact
        self.fail_step: str | None = None
        self.returncode = 2
        self.stderr = "CMake Error: something went wrong"

    def __call__(self, cmd: list[str], cwd=None, **kwargs) -> subprocess.CompletedProcess:
        cwd = Path(cwd)
        self.calls.append((list(cmd), cwd))
        step = "build" if "--build" in cmd else "configure"

        if step == self.fail_step:
            return subprocess.CompletedProcess(cmd, self.returncode, "", self.stderr)

        if step == "configure":
            (cwd / "pnglibconf.h").write_text("/* generated */\n")
            (cwd / "CMakeCache.txt").write_text("# cache\n")
            stdout = "-- Configuring done\n-- Generating done\n"
        else:
            if self.artifact is not None:
                library = cwd / self.artifact
                library.parent.mkdir(parents=True, exist_ok=True)
                library.write_bytes(b"!<arch>\n")
            stdout = "[100%] Built target png_static\n"

        return subprocess.CompletedProcess(cmd, 0, stdout, "")


@pytest.fixture
def fake_cmake():
    """Patch subprocess.run with a FakeCMake and return it."""
    fake = FakeCMake()
    with patch("libpng_src.util.commands.subprocess.run", side_effect=fake):
        yield fake


@pytest.fixture
def fake_source(tmp_path: Path) -> Path:
    """A minimal libpng source tree with the two public headers."""
    source = tmp_path / "libpng-source"
    source.mkdir()
    (source / "png.h").write_text("/* png.h */\n")
    (source / "pngconf.h").write_text("/* pngconf.h */\n")
    (source / "CMakeLists.txt").write_text("project(libpng C)\n")
    return source


@pytest.fixture
def fake_zlib(tmp_path: Path) -> Path:
    """A Windows zlib fallback directory."""
    zlib_dir = tmp_path / "win-zlib-include"
    zlib_dir.mkdir()
    (zlib_dir / "zlib.h").write_text("/* zlib.h */\n")
    (zlib_dir / "zconf.h").write_text("/* zconf.h */\n")
    (zlib_dir / "zlib.lib").write_bytes(b"lib")
    return zlib_dir
