"""Visibility levels a rendered control can end up with."""

from __future__ import annotations

import enum


class NodeVisibility(enum.IntEnum):
    """Resolved visibility of a rendered node, ordered from least to most open."""

    DENIED = 0
    VIEW = 1
    EDIT = 2


__all__ = ["NodeVisibility"]
