# SPDX-License-Identifier: MIT
"""Tests for makegen CLI."""

from __future__ import annotations

import logging
import subprocess
import sys
from pathlib import Path

import pytest

from makegen import __version__
from makegen.cli import build_parser, main, setup_logging


class TestSetupLogging:
    """Tests for setup_logging function."""

    def test_setup_logging_normal(self) -> None:
        """Test normal logging setup."""
        # Just ensure it doesn't crash
        setup_logging(verbose=False, debug=False)

    def test_setup_logging_verbose(self) -> None:
        setup_logging(verbose=True, debug=False)

    def test_setup_logging_debug(self) -> None:
        setup_logging(verbose=False, debug=True)


class TestParser:
    def test_defaults(self) -> None:
        args = build_parser().parse_args(["-e", "c", "-b", "app"])
        assert args.extension == "c"
        assert args.binary == "app"
        assert args.compiler is None
        assert args.std is None
        assert args.opt == "O0"
        assert args.tests == ["tests"]
        assert args.link == []
        assert args.directory == "."
        assert args.output == "Makefile"

    def test_multiple_tests_and_links(self) -> None:
        args = build_parser().parse_args(
            ["-e", "cpp", "-b", "app", "-t", "tests", "bench", "-l", "png.h=png"]
        )
        assert args.tests == ["tests", "bench"]
        assert args.link == ["png.h=png"]

    def test_extension_required(self) -> None:
        with pytest.raises(SystemExit):
            build_parser().parse_args(["-b", "app"])


class TestMain:
    def test_generates_makefile(self, write_tree, tmp_path: Path) -> None:
        write_tree(
            {
                "main.c": '#include "util.h"\n#include <math.h>\n',
                "util.h": "",
                "util.c": '#include "util.h"\n',
            }
        )
        result = main(["-e", "c", "-b", "app", "-C", str(tmp_path)])

        assert result == 0
        text = (tmp_path / "Makefile").read_text()
        assert text.startswith("CC := gcc\n")
        assert "LFLAGS := -lm\n" in text
        assert "\t$(CC) $(BIN_OBJ_FILES) -o app $(LFLAGS)\n" in text

    def test_options_forwarded(self, write_tree, tmp_path: Path) -> None:
        write_tree({"main.cpp": "#include <png.h>\n", "check.cpp": ""})
        result = main(
            [
                "-e",
                "cpp",
                "-b",
                "app",
                "-c",
                "clang++",
                "--std",
                "c++17",
                "--opt",
                "O2",
                "-t",
                "check.cpp",
                "-l",
                "png.h=png",
                "-o",
                "GNUmakefile",
                "-C",
                str(tmp_path),
            ]
        )

        assert result == 0
        text = (tmp_path / "GNUmakefile").read_text()
        assert "CC := clang++\n" in text
        assert "CFLAGS += -std=c++17\n" in text
        assert "CFLAGS += -O2\n" in text
        assert "LFLAGS := -lpng\n" in text
        assert "tests: check\n" in text

    def test_invalid_extension(self, tmp_path: Path, caplog) -> None:
        with caplog.at_level(logging.ERROR):
            result = main(["-e", "rs", "-b", "app", "-C", str(tmp_path)])
        assert result == 1
        assert "Only C or C++" in caplog.text
        assert not (tmp_path / "Makefile").exists()

    def test_invalid_link_mapping(self, tmp_path: Path) -> None:
        result = main(["-e", "c", "-b", "app", "-l", "png.h", "-C", str(tmp_path)])
        assert result == 1

    def test_missing_include(self, write_tree, tmp_path: Path, caplog) -> None:
        write_tree({"main.c": '#include "missing.h"\n'})
        with caplog.at_level(logging.ERROR):
            result = main(["-e", "c", "-b", "app", "-C", str(tmp_path)])
        assert result == 1
        assert "missing.h" in caplog.text
        assert not (tmp_path / "Makefile").exists()

    def test_missing_root(self, tmp_path: Path) -> None:
        result = main(["-e", "c", "-b", "app", "-C", str(tmp_path / "nope")])
        assert result == 1


class TestCLICommands:
    """Tests running the CLI as a module."""

    def test_makegen_help(self) -> None:
        result = subprocess.run(
            [sys.executable, "-m", "makegen.cli", "--help"],
            capture_output=True,
            text=True,
        )
        assert result.returncode == 0
        assert "makegen" in result.stdout
        assert "--extension" in result.stdout
        assert "--binary" in result.stdout

    def test_makegen_version(self) -> None:
        result = subprocess.run(
            [sys.executable, "-m", "makegen.cli", "--version"],
            capture_output=True,
            text=True,
        )
        assert result.returncode == 0
        assert __version__ in result.stdout

    def test_makegen_in_cwd(self, write_tree, tmp_path: Path) -> None:
        """Test the default run writes ./Makefile for the current directory."""
        write_tree({"main.c": "int main(void) { return 0; }\n"})
        result = subprocess.run(
            [sys.executable, "-m", "makegen.cli", "-e", "c", "-b", "hello"],
            capture_output=True,
            text=True,
            cwd=tmp_path,
        )
        assert result.returncode == 0
        assert "MAIN_DEPS := main.c\n" in (tmp_path / "Makefile").read_text()

    def test_makegen_error_exit(self, write_tree, tmp_path: Path) -> None:
        write_tree({"main.c": '#include "missing.h"\n'})
        result = subprocess.run(
            [sys.executable, "-m", "makegen.cli", "-e", "c", "-b", "hello"],
            capture_output=True,
            text=True,
            cwd=tmp_path,
        )
        assert result.returncode != 0
        assert "included file not found" in result.stderr
