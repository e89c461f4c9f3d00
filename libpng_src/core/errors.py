# SPDX-License-Identifier: MIT
"""Custom exceptions for libpng-src.

All libpng-src exceptions inherit from LibpngSrcError, so callers can
catch a single type around a build and still tell the failing step
apart by subclass.
"""

from __future__ import annotations

from pathlib import Path


class LibpngSrcError(Exception):
    """Base class for all libpng-src exceptions.

    Attributes:
        message: The error message.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class UnsupportedHostError(LibpngSrcError):
    """The build host's operating system is not supported.

    Attributes:
        host_os: The detected host operating system.
    """

    def __init__(self, host_os: str) -> None:
        self.host_os = host_os
        super().__init__(f"Unsupported host OS: {host_os}")


class UnsupportedTargetError(LibpngSrcError):
    """The requested target cannot be built on this host.

    Attributes:
        target: The requested target identifier.
        host_os: The host operating system.
        host_arch: The host processor architecture.
    """

    def __init__(self, target: str, host_os: str, host_arch: str) -> None:
        self.target = target
        self.host_os = host_os
        self.host_arch = host_arch
        super().__init__(
            f"Unsupported target: {target}, for host OS: {host_os}, arch: {host_arch}"
        )


class ToolFailureError(LibpngSrcError):
    """An external tool exited with a nonzero status.

    Attributes:
        command: The command that failed.
        returncode: Its exit status, or -1 if it could not be obtained.
        stderr: Captured standard error output.
    """

    def __init__(self, command: str, returncode: int, stderr: str) -> None:
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(
            f"Command '{command}' failed with status code {returncode}\n"
            f"Error: {stderr}"
        )


class ArtifactNotFoundError(LibpngSrcError):
    """The build finished but the static library is missing.

    Attributes:
        path: Where the artifact was expected.
    """

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        super().__init__(f"Artifact not found at path: {self.path}")


class FilesystemError(LibpngSrcError):
    """Creating, removing or copying a file or directory failed.

    Attributes:
        path: The path the failed operation was acting on.
    """

    def __init__(self, message: str, path: Path | str) -> None:
        self.path = Path(path)
        super().__init__(f"{message}: {self.path}")
