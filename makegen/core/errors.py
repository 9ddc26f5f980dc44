# SPDX-License-Identifier: MIT
"""Custom exceptions for makegen.

All makegen exceptions inherit from MakegenError. Errors are fatal to a
run: nothing catches them below the command-line interface.
"""

from __future__ import annotations


class MakegenError(Exception):
    """Base class for all makegen exceptions.

    Attributes:
        message: The error message.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ConfigureError(MakegenError):
    """Invalid build configuration.

    Raised before any scanning starts, e.g. for an unsupported
    source extension or a missing program name.
    """


class GenerateError(MakegenError):
    """Error during the generate phase."""


class ResolveError(MakegenError):
    """Error while resolving include dependencies."""


class MissingIncludeError(ResolveError):
    """A local include does not name an existing file.

    Attributes:
        include: The include target as written in the source.
        included_from: Project-relative path of the including file.
    """

    def __init__(self, include: str, included_from: str) -> None:
        self.include = include
        self.included_from = included_from
        super().__init__(f"{included_from}: included file not found: {include}")


class IncludeOutsideRootError(ResolveError):
    """A local include resolves to a file outside the project root.

    Attributes:
        include: The include target as written in the source.
        included_from: Project-relative path of the including file.
    """

    def __init__(self, include: str, included_from: str) -> None:
        self.include = include
        self.included_from = included_from
        super().__init__(
            f"{included_from}: included file is outside the project root: {include}"
        )


class SourceReadError(ResolveError):
    """A source or header file could not be read.

    Attributes:
        path: Project-relative path of the file.
    """

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        super().__init__(f"cannot read {path}: {reason}")
