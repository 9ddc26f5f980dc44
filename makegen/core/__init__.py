# SPDX-License-Identifier: MIT
"""Core: configuration, include resolution and the dependency graph."""
