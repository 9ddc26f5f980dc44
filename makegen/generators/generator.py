# SPDX-License-Identifier: MIT
"""Generator protocol for build file generation.

Generators take a resolved Project and produce build system files.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from makegen.core.errors import GenerateError

if TYPE_CHECKING:
    from makegen.core.graph import DependencyGraph
    from makegen.core.project import Project


@runtime_checkable
class Generator(Protocol):
    """Protocol for build file generators."""

    @property
    def name(self) -> str:
        """Generator name (e.g., 'make')."""
        ...

    def generate(self, project: Project, output_dir: Path) -> Path:
        """Generate build files for a project.

        Args:
            project: The resolved project to generate for.
            output_dir: Directory to write output files to.

        Returns:
            Path of the written file.
        """
        ...


class BaseGenerator:
    """Base class for generators with common functionality."""

    def __init__(self, name: str) -> None:
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    def generate(self, project: Project, output_dir: Path) -> Path:
        """Generate build files. Subclasses must implement."""
        raise NotImplementedError

    def _require_graph(self, project: Project) -> DependencyGraph:
        if project.graph is None:
            raise GenerateError(
                f"{self.name}: project has not been resolved; call resolve() first"
            )
        return project.graph

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.name!r})"
