# SPDX-License-Identifier: MIT
"""Tests for makegen.core.project."""

from makegen.core.config import make_configuration
from makegen.core.libraries import build_library_table
from makegen.core.project import Project
from makegen.generators.makefile import MakefileGenerator


class TestProject:
    def test_creation(self, tmp_path):
        config = make_configuration("c", "app")
        project = Project(tmp_path, config)
        assert project.root_dir == tmp_path
        assert project.config is config
        assert project.graph is None
        assert not project.resolved
        assert "app" in repr(project)

    def test_resolve(self, write_tree, tmp_path):
        write_tree({"main.c": '#include "util.h"\n', "util.h": ""})
        project = Project(tmp_path, make_configuration("c", "app"))

        graph = project.resolve()

        assert project.resolved
        assert project.graph is graph
        assert graph.dependencies_of("main.c") == ("util.h",)

    def test_generate_resolves_first(self, write_tree, tmp_path):
        """Test the full configuration -> resolve -> generate flow."""
        write_tree(
            {
                "main.c": '#include "util.h"\n#include <math.h>\n',
                "util.h": "",
                "util.c": '#include "util.h"\n',
                "tests/test_util.c": '#include "../util.h"\n',
            }
        )
        project = Project(tmp_path, make_configuration("c", "app"))

        output = project.generate(MakefileGenerator(), tmp_path)

        text = output.read_text()
        assert project.resolved
        assert "LFLAGS := -lm\n" in text
        assert "BIN_OBJ_FILES := $(ODIR)/main.o $(ODIR)/util.o\n" in text
        assert "tests: tests/test_util\n" in text
        assert "TESTS_TEST_UTIL_DEPS := tests/test_util.c util.h\n" in text

    def test_custom_library_table(self, write_tree, tmp_path):
        write_tree({"main.c": "#include <png.h>\n"})
        project = Project(
            tmp_path,
            make_configuration("c", "app"),
            build_library_table({"png.h": "png"}),
        )
        assert project.resolve().libraries == ["png"]
