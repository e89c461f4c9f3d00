# SPDX-License-Identifier: MIT
"""Tests for libpng-src CLI."""

from __future__ import annotations

import subprocess
import sys
from pathlib import Path
from unittest.mock import patch

import pytest

from libpng_src import __version__
from libpng_src.build import Artifacts
from libpng_src.cli import default_target, main, setup_logging
from libpng_src.configure.platform import Platform
from libpng_src.configure.targets import TargetPlatform
from libpng_src.core.errors import ToolFailureError


class TestSetupLogging:
    """Tests for setup_logging function."""

    def test_setup_logging_normal(self) -> None:
        setup_logging(verbose=False, debug=False)

    def test_setup_logging_verbose(self) -> None:
        setup_logging(verbose=True, debug=False)

    def test_setup_logging_debug(self) -> None:
        setup_logging(verbose=False, debug=True)


class TestDefaultTarget:
    def test_single_native_target(self) -> None:
        with patch(
            "libpng_src.cli.allowed_targets",
            return_value=[TargetPlatform.X86_64_UNKNOWN_LINUX_GNU],
        ):
            assert default_target() == "x86_64-unknown-linux-gnu"

    def test_no_default_on_macos(self) -> None:
        with patch(
            "libpng_src.cli.allowed_targets",
            return_value=[
                TargetPlatform.AARCH64_APPLE_DARWIN,
                TargetPlatform.AARCH64_APPLE_IOS,
            ],
        ):
            assert default_target() is None


class TestCommands:
    """Tests for CLI commands, run in-process."""

    def test_no_command_prints_help(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main([]) == 1
        assert "libpng-src" in capsys.readouterr().out

    def test_targets(self, capsys: pytest.CaptureFixture[str]) -> None:
        with patch(
            "libpng_src.cli.allowed_targets",
            return_value=[TargetPlatform.AARCH64_UNKNOWN_LINUX_GNU],
        ):
            assert main(["targets"]) == 0
        assert capsys.readouterr().out.strip() == "aarch64-unknown-linux-gnu"

    def test_targets_unsupported_host(self) -> None:
        with patch("libpng_src.cli.allowed_targets", return_value=[]):
            assert main(["targets"]) == 1

    def test_info(self, capsys: pytest.CaptureFixture[str]) -> None:
        with patch(
            "libpng_src.cli.get_platform", return_value=Platform("linux", "x86_64")
        ):
            assert main(["info"]) == 0
        out = capsys.readouterr().out
        assert "libpng version: 1.6.43" in out
        assert "Host: linux/x86_64" in out

    def test_compile(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        library = tmp_path / "libpng16.a"
        with patch("libpng_src.cli.compile_lib", return_value=library) as mock:
            rc = main(
                [
                    "compile",
                    "x86_64-unknown-linux-gnu",
                    "-B",
                    str(tmp_path),
                    "--cmake",
                    "cmake3",
                ]
            )
        assert rc == 0
        assert capsys.readouterr().out.strip() == str(library)
        mock.assert_called_once_with(
            "x86_64-unknown-linux-gnu", tmp_path, source_dir=None, cmake="cmake3"
        )

    def test_compile_uses_default_target(self, tmp_path: Path) -> None:
        with (
            patch(
                "libpng_src.cli.allowed_targets",
                return_value=[TargetPlatform.X86_64_UNKNOWN_LINUX_GNU],
            ),
            patch("libpng_src.cli.compile_lib", return_value=tmp_path) as mock,
        ):
            assert main(["compile", "-B", str(tmp_path)]) == 0
        assert mock.call_args[0][0] == "x86_64-unknown-linux-gnu"

    def test_compile_without_default_target(self) -> None:
        with patch("libpng_src.cli.allowed_targets", return_value=[]):
            assert main(["compile"]) == 1

    def test_compile_failure(self, tmp_path: Path) -> None:
        with patch(
            "libpng_src.cli.compile_lib",
            side_effect=ToolFailureError("cmake", 1, "CMake Error"),
        ):
            assert main(["compile", "x86_64-unknown-linux-gnu", "-B", str(tmp_path)]) == 1

    def test_build(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        root = tmp_path / "libpng"
        artifacts = Artifacts(
            root_dir=root,
            include_dir=root / "include",
            lib_dir=root / "lib",
            link_name="png16",
            library_path=root / "lib" / "libpng16.a",
        )
        with patch("libpng_src.cli.build_artifact", return_value=artifacts):
            assert main(["build", "aarch64-apple-ios", "-B", str(tmp_path)]) == 0
        out = capsys.readouterr().out
        assert f"include_dir={root / 'include'}" in out
        assert "link_name=png16" in out


class TestCLIProcess:
    """Tests that run the CLI as a subprocess."""

    def test_help(self) -> None:
        result = subprocess.run(
            [sys.executable, "-m", "libpng_src", "--help"],
            capture_output=True,
            text=True,
        )
        assert result.returncode == 0
        assert "libpng-src" in result.stdout
        assert "targets" in result.stdout
        assert "compile" in result.stdout
        assert "build" in result.stdout

    def test_version(self) -> None:
        result = subprocess.run(
            [sys.executable, "-m", "libpng_src", "--version"],
            capture_output=True,
            text=True,
        )
        assert result.returncode == 0
        assert __version__ in result.stdout

    def test_unsupported_target_exit_code(self, tmp_path: Path) -> None:
        result = subprocess.run(
            [
                sys.executable,
                "-m",
                "libpng_src",
                "compile",
                "wasm32-unknown-unknown",
                "-B",
                str(tmp_path / "work"),
            ],
            capture_output=True,
            text=True,
        )
        assert result.returncode == 1
        assert "Unsupported" in result.stderr
        assert not (tmp_path / "work").exists()
