"""
Character-code placeholder patterns.

These are NOT real symbologies. Renderers that can fall back (svg, html, pdf)
use them only when the symbol source fails, so that a document is still
produced. Every pattern is a pure function of the payload.
"""

from __future__ import annotations

from typing import List

__all__ = [
    "bar_counts",
    "bar_positions",
    "grid_cell_filled",
    "row_cell_filled",
    "fmt_number",
]


def bar_counts(data: str) -> List[int]:
    """One to five bars per character: ``ord(ch) % 5 + 1``."""
    return [ord(ch) % 5 + 1 for ch in data]


def bar_positions(data: str, start: float, bar_width: float) -> List[float]:
    """Left edge of every placeholder bar; each bar advances twice its width."""
    positions: List[float] = []
    x = start
    for count in bar_counts(data):
        for _ in range(count):
            positions.append(x)
            x += bar_width * 2
    return positions


def grid_cell_filled(data: str, index: int) -> bool:
    """Flat-index rule used by the markup grid."""
    return (ord(data[index % len(data)]) + index) % 2 == 0


def row_cell_filled(data: str, row: int, col: int, cells: int) -> bool:
    """Row/column rule used by the document grid."""
    return (ord(data[(row * cells + col) % len(data)]) + row + col) % 2 == 0


def fmt_number(value: float) -> str:
    """Format a coordinate without a trailing ``.0`` for whole numbers."""
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return f"{value:.3f}".rstrip("0").rstrip(".")
