# SPDX-License-Identifier: MIT
"""System header to link library table.

A system include (``#include <...>``) is never opened. The only thing
makegen learns from it is whether the program must link an extra
library, e.g. ``<math.h>`` needs ``-lm``. Headers missing from the table
are assumed to be satisfied by the C/C++ runtime.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

DEFAULT_LIBRARIES: Mapping[str, str] = MappingProxyType(
    {
        "math.h": "m",
        "pthread.h": "pthread",
        "thread": "pthread",
        "ncurses.h": "ncurses",
        "curses.h": "ncurses",
        "zlib.h": "z",
        "dlfcn.h": "dl",
    }
)


def build_library_table(extra: Mapping[str, str] | None = None) -> Mapping[str, str]:
    """Build a read-only header table.

    Args:
        extra: Additional header -> library entries. These take
            precedence over the defaults.

    Returns:
        An immutable mapping from header name to library name.
    """
    table = dict(DEFAULT_LIBRARIES)
    if extra:
        table.update(extra)
    return MappingProxyType(table)


def parse_library_mappings(specs: list[str]) -> dict[str, str]:
    """Parse HEADER=LIB arguments.

    Args:
        specs: Strings such as ``"png.h=png"``.

    Returns:
        Dict mapping header to library name.

    Raises:
        ValueError: If an entry is not of the form HEADER=LIB.
    """
    mappings: dict[str, str] = {}
    for spec in specs:
        header, sep, library = spec.partition("=")
        header = header.strip()
        library = library.strip()
        if not sep or not header or not library:
            raise ValueError(f"expected HEADER=LIB, got {spec!r}")
        # Accept "-lfoo" as well as "foo"
        if library.startswith("-l"):
            library = library[2:]
        mappings[header] = library
    return mappings
