# SPDX-License-Identifier: MIT
"""
Makegen: generate Makefiles for C/C++ source trees.

Makegen scans a directory for C or C++ sources, follows their local
``#include`` directives to build a dependency graph, and writes a
Makefile with one object rule per source file.
"""

from __future__ import annotations

__version__ = "1.0.0"

from makegen.core.config import BuildConfiguration, make_configuration  # noqa: E402
from makegen.core.graph import DependencyGraph  # noqa: E402
from makegen.core.project import Project  # noqa: E402
from makegen.core.resolver import IncludeResolver  # noqa: E402
from makegen.generators.makefile import MakefileGenerator  # noqa: E402

# Public API exports
__all__ = [
    "__version__",
    "BuildConfiguration",
    "DependencyGraph",
    "IncludeResolver",
    "MakefileGenerator",
    "Project",
    "make_configuration",
]
