# SPDX-License-Identifier: MIT
"""A Project ties a source tree to a build configuration.

The project owns the dependency graph: it is produced once by
resolve() and then handed read-only to generators.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import TYPE_CHECKING

from makegen.core.config import BuildConfiguration
from makegen.core.graph import DependencyGraph
from makegen.core.libraries import DEFAULT_LIBRARIES
from makegen.core.resolver import IncludeResolver

if TYPE_CHECKING:
    from makegen.generators.generator import Generator

logger = logging.getLogger(__name__)


class Project:
    """A C/C++ source tree and its build configuration.

    Example:
        project = Project(Path("."), config)
        project.generate(MakefileGenerator(), Path("."))

    Attributes:
        root_dir: Directory that is scanned for sources.
        config: Validated build configuration.
        libraries: Header -> library table used by the resolver.
    """

    def __init__(
        self,
        root_dir: Path | str,
        config: BuildConfiguration,
        libraries: Mapping[str, str] | None = None,
    ) -> None:
        self.root_dir = Path(root_dir)
        self.config = config
        self.libraries = DEFAULT_LIBRARIES if libraries is None else libraries
        self._graph: DependencyGraph | None = None

    @property
    def graph(self) -> DependencyGraph | None:
        """The resolved graph, or None before resolve() has run."""
        return self._graph

    @property
    def resolved(self) -> bool:
        return self._graph is not None

    def resolve(self) -> DependencyGraph:
        """Scan the source tree and store the dependency graph."""
        resolver = IncludeResolver(self.root_dir, self.config, self.libraries)
        self._graph = resolver.resolve()
        return self._graph

    def generate(self, generator: Generator, output_dir: Path | str) -> Path:
        """Write build files for this project.

        Resolves the project first if that has not happened yet.

        Returns:
            Path of the written file.
        """
        if self._graph is None:
            self.resolve()
        return generator.generate(self, Path(output_dir))

    def __repr__(self) -> str:
        return f"Project({str(self.root_dir)!r}, {self.config.program_name!r})"
