# SPDX-License-Identifier: MIT
"""Makefile generator.

Turns a resolved DependencyGraph into a Makefile:

- toolchain variables (CC, CFLAGS, LFLAGS)
- one <NAME>_DEPS variable per source file, holding the file and every
  local header it reaches
- one object rule per library source, and a 'bin' rule linking them
- one standalone executable per test source, linked against every
  library object except the program's entry point
- a phony 'clean' rule

Example output for main.c and util.c sharing util.h:

    CC := gcc
    CFLAGS := -Wall
    CFLAGS += -std=c99
    CFLAGS += -O0
    LFLAGS := -lm

    ODIR := .OBJ

    MAIN_DEPS := main.c util.h
    UTIL_DEPS := util.c util.h

    all: bin
    ...
"""

from __future__ import annotations

import io
import logging
import re
from pathlib import Path
from typing import TYPE_CHECKING, TextIO

from makegen.core.errors import GenerateError
from makegen.core.graph import strip_extension
from makegen.generators.generator import BaseGenerator

if TYPE_CHECKING:
    from makegen.core.config import BuildConfiguration
    from makegen.core.graph import DependencyGraph
    from makegen.core.project import Project

logger = logging.getLogger(__name__)

OBJECT_DIR = ".OBJ"
WARNING_FLAGS = "-Wall"
RESERVED_TARGETS = ("all", "bin", "tests", "clean", OBJECT_DIR)

_NON_IDENTIFIER = re.compile(r"[^A-Za-z0-9_]")


def deps_var_name(path: str) -> str:
    """Name of the variable holding a file's dependency closure.

    'src/net/socket.c' becomes 'SRC_NET_SOCKET_DEPS'.
    """
    return _NON_IDENTIFIER.sub("_", strip_extension(path)).upper() + "_DEPS"


def flat_name(path: str) -> str:
    """Path without extension, with directories joined by '_'."""
    return strip_extension(path).replace("/", "_")


def object_file(path: str) -> str:
    return f"$(ODIR)/{flat_name(path)}.o"


def program_for_test(path: str) -> str:
    """Executable built from a test source: its path without extension."""
    return strip_extension(path)


class MakefileGenerator(BaseGenerator):
    """Generator that produces a GNU Makefile.

    Usage:
        generator = MakefileGenerator()
        generator.generate(project, Path("."))
        # Creates ./Makefile
    """

    def __init__(self, *, output_filename: str = "Makefile") -> None:
        """Initialize the Makefile generator.

        Args:
            output_filename: Name of the output file.
        """
        super().__init__("make")
        self._output_filename = output_filename

    def generate(self, project: Project, output_dir: Path) -> Path:
        """Write the Makefile for a resolved project.

        Raises:
            GenerateError: If the project has not been resolved, or two
                sources map to the same Makefile name.
            OSError: If the file cannot be written.
        """
        graph = self._require_graph(project)
        output_file = output_dir / self._output_filename

        # Rendered up front so a naming error leaves no partial file behind
        text = self.render(graph, project.config)
        with open(output_file, "w", newline="\n") as f:
            f.write(text)

        logger.info("Generated %s", output_file)
        return output_file

    def render(self, graph: DependencyGraph, config: BuildConfiguration) -> str:
        """Return the Makefile text without writing it."""
        buf = io.StringIO()
        self.write(buf, graph, config)
        return buf.getvalue()

    def write(
        self, f: TextIO, graph: DependencyGraph, config: BuildConfiguration
    ) -> None:
        """Write the whole Makefile to an open text stream."""
        sources = graph.sources(config.extension)
        tests = [s for s in sources if config.is_test(s)]
        bins = [s for s in sources if not config.is_test(s)]
        logger.debug("Program sources: %s", bins)
        logger.debug("Test sources: %s", tests)
        self._check_names(sources, tests, config)

        self._write_toolchain(f, graph, config)
        self._write_file_variables(f, graph, sources)
        self._write_bin_target(f, bins, config)
        self._write_object_targets(f, bins)
        if tests:
            self._write_test_targets(f, tests, config)
        self._write_clean_target(f, tests, config)

    def _check_names(
        self, sources: list[str], tests: list[str], config: BuildConfiguration
    ) -> None:
        """Reject sources whose variable, object or program names clash.

        Raises:
            GenerateError: Naming both offending paths.
        """
        # Equal object names imply equal variable names
        owners: dict[str, str] = {}
        for source in sources:
            name = deps_var_name(source)
            other = owners.setdefault(name, source)
            if other != source:
                raise GenerateError(
                    f"{other} and {source} both map to {name}; rename one of them"
                )

        reserved = set(RESERVED_TARGETS) | {config.program_name}
        for test in tests:
            program = program_for_test(test)
            if program in reserved:
                raise GenerateError(
                    f"test {test} would build {program!r}, which is already a "
                    "target of the generated Makefile"
                )

    def _write_toolchain(
        self, f: TextIO, graph: DependencyGraph, config: BuildConfiguration
    ) -> None:
        lflags = " ".join(f"-l{lib}" for lib in graph.libraries)
        f.write(f"CC := {config.compiler}\n")
        f.write(f"CFLAGS := {WARNING_FLAGS}\n")
        f.write(f"CFLAGS += -std={config.standard}\n")
        f.write(f"CFLAGS += -{config.opt_level}\n")
        f.write(f"LFLAGS := {lflags}".rstrip() + "\n")

    def _write_file_variables(
        self, f: TextIO, graph: DependencyGraph, sources: list[str]
    ) -> None:
        f.write("\n")
        f.write(f"ODIR := {OBJECT_DIR}\n")
        f.write("\n")
        for source in sources:
            closure = " ".join(graph.closure(source))
            f.write(f"{deps_var_name(source)} := {closure}\n")

    def _write_bin_target(
        self, f: TextIO, bins: list[str], config: BuildConfiguration
    ) -> None:
        objects = " ".join(object_file(s) for s in bins)
        f.write("\n")
        f.write("all: bin\n")
        f.write("\n")
        f.write("$(ODIR):\n")
        f.write("\t@mkdir -p $(ODIR)\n")
        f.write("\n")
        f.write(f"BIN_OBJ_FILES := {objects}".rstrip() + "\n")
        f.write("\n")
        f.write("bin: $(ODIR) $(BIN_OBJ_FILES)\n")
        f.write(f"\t$(CC) $(BIN_OBJ_FILES) -o {config.program_name} $(LFLAGS)\n")

    def _write_object_targets(self, f: TextIO, bins: list[str]) -> None:
        for source in bins:
            obj = object_file(source)
            f.write("\n")
            f.write(f"{obj}: $({deps_var_name(source)}) | $(ODIR)\n")
            f.write(f"\t$(CC) -c {source} $(CFLAGS) -o {obj}\n")

    def _write_test_targets(
        self, f: TextIO, tests: list[str], config: BuildConfiguration
    ) -> None:
        entry_object = f"$(ODIR)/{config.entry_point.replace('/', '_')}.o"
        f.write("\n")
        f.write(
            f"ALL_BIN_OBJS_WO_MAIN := $(filter-out {entry_object}, $(BIN_OBJ_FILES))\n"
        )
        f.write("\n")
        f.write(f"tests: {' '.join(program_for_test(t) for t in tests)}\n")
        for test in tests:
            program = program_for_test(test)
            f.write("\n")
            f.write(f"{program}: $({deps_var_name(test)}) $(ALL_BIN_OBJS_WO_MAIN)\n")
            f.write(
                f"\t$(CC) $(CFLAGS) {test} $(ALL_BIN_OBJS_WO_MAIN)"
                f" -o {program} $(LFLAGS)\n"
            )

    def _write_clean_target(
        self, f: TextIO, tests: list[str], config: BuildConfiguration
    ) -> None:
        phony = ["all", "bin", "clean"]
        if tests:
            phony.insert(2, "tests")
        removed = ["$(ODIR)", config.program_name]
        removed.extend(program_for_test(t) for t in tests)
        f.write("\n")
        f.write(f".PHONY: {' '.join(phony)}\n")
        f.write("\n")
        f.write("clean:\n")
        f.write(f"\trm -rf {' '.join(removed)}\n")
