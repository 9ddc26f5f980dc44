# SPDX-License-Identifier: MIT
"""Include resolution.

The IncludeResolver walks a source tree and builds the DependencyGraph:

1. Every file with the configured extension is a scan root.
2. Each scanned file is read line by line; ``#include "..."`` lines name
   local dependencies, ``#include <...>`` lines are looked up in the
   header/library table.
3. Local includes are resolved relative to the including file,
   canonicalized and expressed relative to the project root, then
   scanned themselves.

Scanning is purely textual. Preprocessor conditionals are not evaluated,
so a header included under ``#ifdef`` is always a dependency.

The walk uses an explicit stack instead of recursion so that long or
cyclic include chains cannot exhaust the interpreter's call stack.
"""

from __future__ import annotations

import logging
import os
import re
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from makegen.core.config import BuildConfiguration
from makegen.core.errors import (
    IncludeOutsideRootError,
    MissingIncludeError,
    ResolveError,
    SourceReadError,
)
from makegen.core.graph import DependencyGraph, has_extension
from makegen.core.libraries import DEFAULT_LIBRARIES

logger = logging.getLogger(__name__)

INCLUDE_RE = re.compile(
    r'^\s*#include\s*(?:<(?P<system>[^<>]+)>|"(?P<local>[^"]+)")'
)


class IncludeKind(Enum):
    SYSTEM = "system"
    LOCAL = "local"


@dataclass(frozen=True)
class IncludeDirective:
    """One ``#include`` found in a source line."""

    target: str
    kind: IncludeKind


def extract_include(line: str) -> IncludeDirective | None:
    """Extract the include directive from a line, if there is one.

    Returns None for lines that are not includes and for includes
    without a balanced ``<...>`` or ``"..."`` target (such as
    ``#include MACRO``).
    """
    match = INCLUDE_RE.match(line)
    if match is None:
        return None
    if match.group("system") is not None:
        return IncludeDirective(match.group("system").strip(), IncludeKind.SYSTEM)
    return IncludeDirective(match.group("local").strip(), IncludeKind.LOCAL)


def _raise(error: OSError) -> None:
    raise error


@dataclass
class _Frame:
    path: str
    includes: tuple[str, ...]
    index: int = 0


class IncludeResolver:
    """Builds a DependencyGraph for a project tree.

    Example:
        config = make_configuration("c", "app")
        graph = IncludeResolver(Path("."), config).resolve()
        graph.dependencies["main.c"]   # ('util.h',)
        graph.libraries                # ['m']

    Attributes:
        root_dir: Canonical project root.
        config: The build configuration (only the extension is used).
        libraries: Header -> library lookup table.
    """

    def __init__(
        self,
        root_dir: Path | str,
        config: BuildConfiguration,
        libraries: Mapping[str, str] | None = None,
    ) -> None:
        root = Path(root_dir)
        if not root.is_dir():
            raise ResolveError(f"project root is not a directory: {root}")
        self.root_dir = root.resolve()
        self.config = config
        self.libraries = DEFAULT_LIBRARIES if libraries is None else libraries

    def iter_sources(self) -> Iterator[str]:
        """Yield project-relative paths of all scan roots.

        Directories are walked depth-first in sorted order. Hidden files
        and directories are skipped, and symlinks to directories are not
        followed.
        """
        for dirpath, dirnames, filenames in os.walk(self.root_dir, onerror=_raise):
            dirnames[:] = sorted(d for d in dirnames if not d.startswith("."))
            base = Path(dirpath)
            for name in sorted(filenames):
                if name.startswith("."):
                    continue
                path = base / name
                if path.is_symlink() or not path.is_file():
                    continue
                relative = path.relative_to(self.root_dir).as_posix()
                if has_extension(relative, self.config.extension):
                    yield relative

    def resolve(self) -> DependencyGraph:
        """Scan the tree and return the dependency graph.

        Raises:
            ResolveError: If a file cannot be read or a local include
                cannot be resolved. No partial graph is returned.
        """
        graph = DependencyGraph()
        seen: set[str] = set()

        for source in self.iter_sources():
            if source in graph:
                continue
            seen.add(source)
            self._visit(source, graph, seen)

        logger.info(
            "Resolved %d files, libraries: %s",
            len(graph),
            " ".join(graph.libraries) or "(none)",
        )
        return graph

    def _visit(self, path: str, graph: DependencyGraph, seen: set[str]) -> None:
        """Scan a file and everything it includes, depth first.

        A file becomes a graph key only after all of its includes have
        been visited.
        """
        stack = [_Frame(path, self._scan(path, graph))]
        while stack:
            frame = stack[-1]
            if frame.index < len(frame.includes):
                include = frame.includes[frame.index]
                frame.index += 1
                if include not in graph and include not in seen:
                    seen.add(include)
                    stack.append(_Frame(include, self._scan(include, graph)))
                continue

            stack.pop()
            if frame.path not in graph.dependencies:
                graph.dependencies[frame.path] = frame.includes

    def _scan(self, path: str, graph: DependencyGraph) -> tuple[str, ...]:
        """Read a file, record its libraries, return its local includes."""
        logger.debug("Scanning %s", path)
        try:
            text = (self.root_dir / path).read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            raise SourceReadError(path, e.strerror or str(e)) from e

        includes: list[str] = []
        for line in text.splitlines():
            directive = extract_include(line)
            if directive is None:
                continue
            if directive.kind is IncludeKind.SYSTEM:
                library = self.libraries.get(directive.target)
                if library and library not in graph.libraries:
                    logger.debug("%s: <%s> needs -l%s", path, directive.target, library)
                    graph.libraries.append(library)
                continue
            resolved = self._resolve_local(directive.target, path)
            if resolved not in includes:
                includes.append(resolved)
        return tuple(includes)

    def _resolve_local(self, include: str, included_from: str) -> str:
        """Canonicalize a local include relative to the including file."""
        candidate = (self.root_dir / included_from).parent / include
        try:
            canonical = candidate.resolve(strict=True)
        except (OSError, RuntimeError) as e:
            raise MissingIncludeError(include, included_from) from e
        try:
            return canonical.relative_to(self.root_dir).as_posix()
        except ValueError:
            raise IncludeOutsideRootError(include, included_from) from None
