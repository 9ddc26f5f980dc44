# SPDX-License-Identifier: MIT
"""Include dependency graph.

The graph maps every project-relative file path to the local files it
includes directly. Transitive closures are computed on demand, so the
graph itself stays a plain adjacency list. Cycles are allowed.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field


def has_extension(path: str, extension: str) -> bool:
    """Check whether a path ends in '.<extension>'."""
    name = path.rsplit("/", 1)[-1]
    stem, dot, suffix = name.rpartition(".")
    return bool(dot) and bool(stem) and suffix == extension


def strip_extension(path: str) -> str:
    """Remove the extension of the last path component, if any."""
    head, sep, name = path.rpartition("/")
    stem, dot, _ = name.rpartition(".")
    if dot and stem:
        name = stem
    return f"{head}{sep}{name}"


@dataclass
class DependencyGraph:
    """Result of an include resolution run.

    Attributes:
        dependencies: Path -> direct local includes, in the order the
            files were completed by the resolver.
        libraries: Link libraries implied by system includes, in
            discovery order and without duplicates.
    """

    dependencies: dict[str, tuple[str, ...]] = field(default_factory=dict)
    libraries: list[str] = field(default_factory=list)

    @classmethod
    def from_mapping(
        cls,
        dependencies: Mapping[str, list[str] | tuple[str, ...]],
        libraries: list[str] | None = None,
    ) -> DependencyGraph:
        """Build a graph from a plain mapping (mostly useful in tests)."""
        return cls(
            {path: tuple(deps) for path, deps in dependencies.items()},
            list(libraries or []),
        )

    def __contains__(self, path: object) -> bool:
        return path in self.dependencies

    def __iter__(self) -> Iterator[str]:
        return iter(self.dependencies)

    def __len__(self) -> int:
        return len(self.dependencies)

    def dependencies_of(self, path: str) -> tuple[str, ...]:
        """Direct local includes of a file (empty if unknown)."""
        return self.dependencies.get(path, ())

    def sources(self, extension: str) -> list[str]:
        """Sorted list of files whose extension matches."""
        return sorted(p for p in self.dependencies if has_extension(p, extension))

    def closure(self, path: str) -> list[str]:
        """Transitive local includes of a file, the file itself first.

        Files are listed in depth-first preorder, each exactly once,
        even when the graph contains cycles or diamonds.
        """
        order: list[str] = []
        visited: set[str] = set()
        stack = [path]
        while stack:
            current = stack.pop()
            if current in visited:
                continue
            visited.add(current)
            order.append(current)
            # Reversed so that the first include is expanded first
            stack.extend(reversed(self.dependencies_of(current)))
        return order
