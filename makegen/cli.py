# SPDX-License-Identifier: MIT
"""Command-line interface for makegen."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from makegen.core.config import DEFAULT_OPT_LEVEL, DEFAULT_TESTS, make_configuration
from makegen.core.errors import MakegenError
from makegen.core.libraries import build_library_table, parse_library_mappings
from makegen.core.project import Project
from makegen.generators.makefile import MakefileGenerator

# Set up logging
logger = logging.getLogger("makegen")


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


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    from makegen import __version__

    parser = argparse.ArgumentParser(
        prog="makegen",
        description="Generate C/C++ makefiles quickly and easily!",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "-e",
        "--extension",
        required=True,
        metavar="EXTENSION",
        help="Extension of the source files to look for: c for C, cpp for C++",
    )
    parser.add_argument(
        "-b",
        "--binary",
        required=True,
        metavar="PROGRAM_NAME",
        help="Name of the generated executable",
    )
    parser.add_argument(
        "-c",
        "--compiler",
        metavar="COMPILER",
        help="Compiler to use (default: gcc for c, g++ for cpp)",
    )
    parser.add_argument(
        "--std",
        metavar="STANDARD",
        help="Language standard (default: c99 for c, c++11 for cpp)",
    )
    parser.add_argument(
        "--opt",
        default=DEFAULT_OPT_LEVEL,
        metavar="OPTIMIZATION_LEVEL",
        help=f"Optimization level for the compiler flags (default: {DEFAULT_OPT_LEVEL})",
    )
    parser.add_argument(
        "-t",
        "--tests",
        nargs="+",
        default=list(DEFAULT_TESTS),
        metavar="TEST_FILE|TEST_DIRECTORY",
        help="Files or directories holding test programs with their own main() "
        "(default: tests)",
    )
    parser.add_argument(
        "--entry",
        metavar="STEM",
        help="Source (path without extension) holding the program's main(), "
        "left out when linking tests (default: main)",
    )
    parser.add_argument(
        "-l",
        "--link",
        action="append",
        default=[],
        metavar="HEADER=LIB",
        help="Extra system header to library mapping, e.g. png.h=png",
    )
    parser.add_argument(
        "-C",
        "--directory",
        default=".",
        help="Project root to scan (default: current directory)",
    )
    parser.add_argument(
        "-o",
        "--output",
        default="Makefile",
        help="Output file, relative to the project root (default: Makefile)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")
    parser.add_argument("--debug", action="store_true", help="Debug output")
    return parser


def run(args: argparse.Namespace) -> int:
    """Resolve the project and write the Makefile.

    Returns:
        Process exit code.
    """
    try:
        config = make_configuration(
            args.extension,
            args.binary,
            compiler=args.compiler,
            standard=args.std,
            opt_level=args.opt,
            tests=args.tests,
            entry_point=args.entry,
        )
        libraries = build_library_table(parse_library_mappings(args.link))
    except (MakegenError, ValueError) as e:
        logger.error("%s", e)
        return 1

    root = Path(args.directory)
    output = root / args.output
    project = Project(root, config, libraries)
    generator = MakefileGenerator(output_filename=output.name)

    try:
        project.resolve()
        project.generate(generator, output.parent)
    except (MakegenError, OSError) as e:
        logger.error("%s", e)
        return 1

    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the makegen CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose, args.debug)
    return run(args)


if __name__ == "__main__":
    sys.exit(main())
