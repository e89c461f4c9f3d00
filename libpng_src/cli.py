# SPDX-License-Identifier: MIT
"""Command-line interface for libpng-src."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from libpng_src.build import LIBPNG_VERSION, build_artifact, compile_lib, source_path
from libpng_src.configure.platform import get_platform
from libpng_src.configure.targets import allowed_targets
from libpng_src.core.errors import LibpngSrcError

# Set up logging
logger = logging.getLogger("libpng_src")


def setup_logging(verbose: bool = False, debug: bool = False) -> None:
    """Configure logging based on verbosity level."""
    if debug:
        level = logging.DEBUG
        fmt = "%(levelname)s: %(name)s: %(message)s"
    elif verbose:
        level = logging.INFO
        fmt = "%(levelname)s: %(message)s"
    else:
        level = logging.WARNING
        fmt = "%(levelname)s: %(message)s"

    logging.basicConfig(level=level, format=fmt)


def default_target() -> str | None:
    """Return the only target buildable on this host, if there is one.

    macOS hosts can build several Apple targets, so no default is
    picked there.
    """
    targets = allowed_targets()
    if len(targets) == 1:
        return targets[0].value
    return None


def _target_from_args(args: argparse.Namespace) -> str | None:
    target: str | None = args.target or default_target()
    if target is None:
        logger.error("No target given and no single default for %s", get_platform())
        logger.info("Run 'libpng-src targets' to list the available targets")
    return target


def cmd_targets(args: argparse.Namespace) -> int:
    """List the targets that can be built on this host."""
    setup_logging(args.verbose, args.debug)

    targets = allowed_targets()
    if not targets:
        logger.error("No supported targets for host %s", get_platform())
        return 1

    for target in targets:
        print(target)
    return 0


def cmd_compile(args: argparse.Namespace) -> int:
    """Compile the static library and print its path."""
    setup_logging(args.verbose, args.debug)

    target = _target_from_args(args)
    if target is None:
        return 1

    try:
        library = compile_lib(
            target,
            Path(args.build_dir),
            source_dir=args.source_dir,
            cmake=args.cmake,
        )
    except LibpngSrcError as e:
        logger.error("%s", e)
        return 1

    print(library)
    return 0


def cmd_build(args: argparse.Namespace) -> int:
    """Build the artifact directory and print where everything is."""
    setup_logging(args.verbose, args.debug)

    target = _target_from_args(args)
    if target is None:
        return 1

    try:
        artifacts = build_artifact(
            target,
            Path(args.build_dir),
            source_dir=args.source_dir,
            cmake=args.cmake,
        )
    except LibpngSrcError as e:
        logger.error("%s", e)
        return 1

    print(f"root_dir={artifacts.root_dir}")
    print(f"include_dir={artifacts.include_dir}")
    print(f"lib_dir={artifacts.lib_dir}")
    print(f"link_name={artifacts.link_name}")
    return 0


def cmd_info(args: argparse.Namespace) -> int:
    """Show the libpng version, source location and host."""
    setup_logging(args.verbose, args.debug)

    print(f"libpng version: {LIBPNG_VERSION}")
    print(f"Source path: {source_path()}")
    print(f"Host: {get_platform()}")
    return 0


def add_common_args(parser: argparse.ArgumentParser) -> None:
    """Add common arguments to a parser."""
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")
    parser.add_argument("--debug", action="store_true", help="Debug output")


def add_build_args(parser: argparse.ArgumentParser) -> None:
    """Add arguments for commands that run CMake."""
    parser.add_argument(
        "target",
        nargs="?",
        help="Target triple (default: the host's native target)",
    )
    parser.add_argument(
        "-B", "--build-dir", default="build", help="Working directory (default: build)"
    )
    parser.add_argument(
        "--cmake", default="cmake", help="CMake executable (default: cmake)"
    )
    parser.add_argument(
        "--source-dir",
        metavar="DIR",
        help="libpng source tree (default: the vendored copy)",
    )


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the libpng-src CLI."""
    parser = argparse.ArgumentParser(
        prog="libpng-src",
        description="Build libpng from vendored sources into a static library.",
        epilog="Run 'libpng-src <command> --help' for command-specific help.",
    )
    from libpng_src import __version__

    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # libpng-src targets
    targets_parser = subparsers.add_parser(
        "targets", help="List targets buildable on this host"
    )
    add_common_args(targets_parser)
    targets_parser.set_defaults(func=cmd_targets)

    # libpng-src compile
    compile_parser = subparsers.add_parser(
        "compile", help="Compile the static library only"
    )
    add_common_args(compile_parser)
    add_build_args(compile_parser)
    compile_parser.set_defaults(func=cmd_compile)

    # libpng-src build
    build_parser = subparsers.add_parser(
        "build", help="Compile and stage headers and library"
    )
    add_common_args(build_parser)
    add_build_args(build_parser)
    build_parser.set_defaults(func=cmd_build)

    # libpng-src info
    info_parser = subparsers.add_parser("info", help="Show version and host info")
    add_common_args(info_parser)
    info_parser.set_defaults(func=cmd_info)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    result: int = args.func(args)
    return result


if __name__ == "__main__":
    sys.exit(main())
