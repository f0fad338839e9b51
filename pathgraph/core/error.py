# PathGraph - Planar Path Arithmetic Engine
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later
from __future__ import annotations


class PathGraphError(Exception):
    """Base class for errors raised by the path graph engine."""


class EdgeKindError(PathGraphError):
    """An edge kind change that breaks the Uncategorised -> Interior/Exterior lattice."""

    def __init__(self, current, requested) -> None:
        super().__init__(
            f"cannot change edge kind from {current.name} to {requested.name}"
        )
        self.current = current
        self.requested = requested


class PathFormatError(PathGraphError, ValueError):
    """A path description that cannot be turned into a closed bezier path."""
