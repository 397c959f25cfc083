"""
Board - The cell graph dice move across.

The board is built once from cell declarations and then only answers
adjacency questions and tracks which die rests where.
"""

from .cell import Cell, Boundary
from .board import Board
from .builder import CellSpec, build_board
from .layouts import band_layout

__all__ = [
    "Cell",
    "Boundary",
    "Board",
    "CellSpec",
    "build_board",
    "band_layout",
]
