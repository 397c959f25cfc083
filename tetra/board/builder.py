"""
Board Builder - Turns declared cells into a linked Board.

Construction is a separate phase from play. Each cell declares the ids
of its neighbors; linking resolves every declaration whose cell exists and
sets the reciprocal link on the other side in the same pass (A's right is
B exactly when B's left is A; likewise for up and down). Declarations
that name a missing cell stay as Boundary markers.
"""

from __future__ import annotations
from dataclasses import dataclass, field

from ..engine_core.faces import Direction, PointingDirection
from .board import Board
from .cell import Boundary, Cell


@dataclass
class CellSpec:
    """Declaration of one cell before linking."""
    cell_id: int
    pointing_direction: PointingDirection | str
    neighbors: dict[Direction | str, int] = field(default_factory=dict)


def build_board(specs: list[CellSpec]) -> Board:
    """
    Build and link a board.

    Raises:
        ValueError: duplicate cell ids
        InvalidNeighborError: a declaration is not reciprocated
        InvalidDirectionError: unknown direction name
    """
    cells: dict[int, Cell] = {}
    for spec in specs:
        if spec.cell_id in cells:
            raise ValueError(f"Duplicate cell id: {spec.cell_id}")
        cells[spec.cell_id] = Cell(
            cell_id=spec.cell_id,
            pointing_direction=PointingDirection(spec.pointing_direction),
            links={
                Direction.parse(direction): Boundary(neighbor_id)
                for direction, neighbor_id in spec.neighbors.items()
            },
        )

    for cell_id in sorted(cells):
        _link_cell(cells[cell_id], cells)

    return Board(cells)


def _link_cell(cell: Cell, cells: dict[int, Cell]):
    for direction, link in list(cell.links.items()):
        if not isinstance(link, Boundary) or link.cell_id not in cells:
            continue
        other = cells[link.cell_id]
        cell.set_neighbor(direction, other)
        other.set_neighbor(direction.inverse, cell)
