"""
bashtutor Viewer - Terminal rendering for the tutorial.

This module provides:
- Console: coloured output, boxed headers, catalog listing, line input
"""

from .terminal import (
    Console,
    COLORS,
    RESET,
    HEADER_WIDTH,
)

__all__ = [
    "Console",
    "COLORS",
    "RESET",
    "HEADER_WIDTH",
]
