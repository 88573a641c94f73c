"""Visualization utilities for the volcano plot."""

from .colors import CATEGORY_COLORS, CATEGORY_NAMES

__all__ = [
    "CATEGORY_COLORS",
    "CATEGORY_NAMES",
]
