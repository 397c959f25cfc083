"""
Cell - One triangular tile of the board.

A cell knows its own pointing direction and its neighbor links. A link is
either the id of a linked neighbor or a `Boundary` marker: the neighbor
was declared but no such cell exists on this board. A direction with no
declared neighbor has no link at all.

Cells never hold dice; occupancy lives on the `Board`.
"""

from __future__ import annotations
from dataclasses import dataclass, field

from ..engine_core.errors import InvalidNeighborError, NeighborAlreadySetError
from ..engine_core.faces import Direction, PointingDirection


@dataclass(frozen=True)
class Boundary:
    """Declared neighbor that is not part of the board."""
    cell_id: int

    @property
    def is_boundary(self) -> bool:
        return True


@dataclass
class Cell:
    """
    A board cell.

    `links` maps a direction to a linked neighbor id or a Boundary.
    """
    cell_id: int
    pointing_direction: PointingDirection
    links: dict[Direction, int | Boundary] = field(default_factory=dict)

    @property
    def is_boundary(self) -> bool:
        return False

    def link(self, direction: Direction) -> int | Boundary | None:
        return self.links.get(direction)

    def set_neighbor(self, direction: Direction, neighbor: Cell):
        """
        Resolve a declared neighbor into a link.

        Raises:
            NeighborAlreadySetError: the direction is already linked
            InvalidNeighborError: the direction was declared for another
                id, or not declared at all
        """
        current = self.links.get(direction)

        if isinstance(current, int):
            raise NeighborAlreadySetError(
                f"Cell [{self.cell_id}] already has a(n) [{direction.value}] "
                f"neighbor: [{current}]."
            )
        if current is None or current.cell_id != neighbor.cell_id:
            expected = None if current is None else current.cell_id
            raise InvalidNeighborError(
                f"Cell [{self.cell_id}] was expecting a [{direction.value}] neighbor "
                f"with id [{expected}], instead got [{neighbor.cell_id}]."
            )

        self.links[direction] = neighbor.cell_id
