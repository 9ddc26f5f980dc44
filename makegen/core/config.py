# SPDX-License-Identifier: MIT
"""Build configuration for makegen.

The BuildConfiguration is created once from command-line values and is
immutable afterwards. Validation happens here so that the resolver and
the generator can trust every field.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from makegen.core.errors import ConfigureError

SUPPORTED_EXTENSIONS = ("c", "cpp")

DEFAULT_COMPILERS = {"c": "gcc", "cpp": "g++"}
DEFAULT_STANDARDS = {"c": "c99", "cpp": "c++11"}
DEFAULT_OPT_LEVEL = "O0"
DEFAULT_TESTS = ("tests",)
DEFAULT_ENTRY_POINT = "main"


@dataclass(frozen=True)
class BuildConfiguration:
    """Validated settings for one makegen run.

    Attributes:
        compiler: Compiler executable (e.g. 'gcc').
        extension: Source extension without the dot, 'c' or 'cpp'.
        program_name: Name of the main executable.
        standard: Language standard, without '-std=' (e.g. 'c99').
        opt_level: Optimization flag without the dash (e.g. 'O2').
        tests: Paths or path prefixes that identify test sources.
        entry_point: Path stem of the source holding the program's main().
    """

    compiler: str
    extension: str
    program_name: str
    standard: str
    opt_level: str
    tests: frozenset[str] = frozenset(DEFAULT_TESTS)
    entry_point: str = DEFAULT_ENTRY_POINT

    def is_test(self, path: str) -> bool:
        """Check whether a project-relative path is a test source."""
        return any(path == test or path.startswith(test) for test in self.tests)


def _normalize_test(identifier: str) -> str:
    identifier = identifier.strip()
    while identifier.startswith("./"):
        identifier = identifier[2:]
    return identifier


def make_configuration(
    extension: str | None,
    program_name: str | None,
    *,
    compiler: str | None = None,
    standard: str | None = None,
    opt_level: str | None = None,
    tests: Iterable[str] | None = None,
    entry_point: str | None = None,
) -> BuildConfiguration:
    """Create a BuildConfiguration, filling in defaults.

    The compiler and the language standard default according to the
    extension: gcc/c99 for C, g++/c++11 for C++.

    Raises:
        ConfigureError: If a required value is missing or invalid.
    """
    if not program_name:
        raise ConfigureError("You must provide a name for your executable")
    if not extension:
        raise ConfigureError("You must provide a file extension to search for")
    extension = extension.lstrip(".")
    if extension not in SUPPORTED_EXTENSIONS:
        raise ConfigureError(
            "Only C or C++ files are allowed "
            "(extension should be either c or cpp)"
        )

    compiler = compiler or DEFAULT_COMPILERS[extension]

    standard = standard or DEFAULT_STANDARDS[extension]
    if standard.startswith("-std="):
        standard = standard[len("-std=") :]

    opt_level = (opt_level or DEFAULT_OPT_LEVEL).lstrip("-")
    if not opt_level:
        raise ConfigureError("Optimization level must not be empty")

    if tests is None:
        tests = DEFAULT_TESTS
    test_set = frozenset(t for t in (_normalize_test(t) for t in tests) if t)

    return BuildConfiguration(
        compiler=compiler,
        extension=extension,
        program_name=program_name,
        standard=standard,
        opt_level=opt_level,
        tests=test_set,
        entry_point=entry_point or DEFAULT_ENTRY_POINT,
    )
