# SPDX-License-Identifier: MIT
"""Process and filesystem helpers for the build steps.

Every failure is turned into a libpng-src exception at the point it is
detected, so the orchestrator can let them propagate unchanged.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
from collections.abc import Sequence
from pathlib import Path

from libpng_src.core.errors import FilesystemError, ToolFailureError

logger = logging.getLogger(__name__)


def execute(command: str, args: Sequence[str | Path], cwd: Path | str) -> str:
    """Run an external command to completion and check its status.

    Args:
        command: Program name or path.
        args: Arguments passed to the program.
        cwd: Working directory for the process.

    Returns:
        The captured standard output.

    Raises:
        ToolFailureError: If the program exits nonzero or cannot be started.
    """
    cmd = [command, *(str(a) for a in args)]
    cmdline = " ".join(cmd)
    logger.info("Running: %s", cmdline)

    try:
        result = subprocess.run(
            cmd,
            cwd=cwd,
            capture_output=True,
            text=True,
            errors="replace",
        )
    except OSError as e:
        raise ToolFailureError(command, -1, str(e)) from e

    if result.returncode != 0:
        raise ToolFailureError(command, result.returncode, result.stderr or "")

    logger.info("Executed '%s' successfully", cmdline)
    if result.stdout:
        logger.debug("%s", result.stdout)
    return result.stdout or ""


def recreate_dir(path: Path) -> None:
    """Remove a directory tree if present, then create it empty.

    Raises:
        FilesystemError: If removal or creation fails.
    """
    if path.exists():
        logger.debug("Removing %s", path)
        remove_tree(path)
    make_dir(path)


def make_dir(path: Path) -> None:
    """Create a directory and its parents.

    Raises:
        FilesystemError: If creation fails.
    """
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise FilesystemError(f"Cannot create directory ({e})", path) from e


def remove_tree(path: Path) -> None:
    """Recursively remove a directory.

    Raises:
        FilesystemError: If removal fails.
    """
    try:
        shutil.rmtree(path)
    except OSError as e:
        raise FilesystemError(f"Cannot remove directory ({e})", path) from e


def copy(src: Path | str, dest: Path | str) -> Path:
    """Copy a file, creating parent directories as needed.

    Returns:
        The destination path.

    Raises:
        FilesystemError: If the source is missing or the copy fails.
    """
    dest_path = Path(dest)
    make_dir(dest_path.parent)
    try:
        shutil.copy2(src, dest_path)
    except OSError as e:
        raise FilesystemError(f"Cannot copy {src} ({e})", dest_path) from e
    return dest_path
