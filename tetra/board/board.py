"""
Board - Adjacency lookups and exclusive cell occupancy.

The board owns its cells and is the single place that knows where dice
rest. Occupancy is kept as two plain lookups (cell -> die id and
die id -> cell) that are always updated together.
"""

from __future__ import annotations
import logging

from ..engine_core.errors import (
    CellEmptyError,
    CellOccupiedError,
    DieDoesNotFitError,
    UnknownCellError,
)
from ..engine_core.faces import Direction, PointingDirection
from .cell import Boundary, Cell


logger = logging.getLogger(__name__)


class Board:
    """
    A pre-built cell graph.

    Usage:
        board = build_board(band_layout())
        target = board.neighbor(11, Direction.DOWN)
        board.relocate("10", 21, PointingDirection.DOWN)
    """

    def __init__(self, cells: dict[int, Cell]):
        self._cells = dict(cells)
        self._occupants: dict[int, str] = {}
        self._locations: dict[str, int] = {}

    # -------------------------------------------------------------------------
    # Graph
    # -------------------------------------------------------------------------

    @property
    def cell_ids(self) -> list[int]:
        return sorted(self._cells)

    def __contains__(self, cell_id: int) -> bool:
        return cell_id in self._cells

    def __len__(self) -> int:
        return len(self._cells)

    def cell(self, cell_id: int) -> Cell:
        try:
            return self._cells[cell_id]
        except KeyError:
            raise UnknownCellError(f"Cell [{cell_id}] is not on the board.") from None

    def neighbor(self, cell_id: int, direction: Direction | str) -> Cell | Boundary | None:
        """
        Adjacency lookup.

        Returns:
            The neighboring Cell, a Boundary marker, or None when the cell
            has no neighbor in that direction.
        """
        link = self.cell(cell_id).link(Direction.parse(direction))
        if isinstance(link, int):
            return self._cells[link]
        return link

    def neighbor_ids(self, cell_id: int) -> dict[str, int | None]:
        """Linked neighbor ids by direction name."""
        cell = self.cell(cell_id)
        ids = {}
        for direction in Direction:
            link = cell.link(direction)
            ids[direction.value] = link if isinstance(link, int) else None
        return ids

    def cell_pointing_direction(self, cell_id: int) -> PointingDirection:
        return self.cell(cell_id).pointing_direction

    def fits(self, cell_id: int, pointing_direction: PointingDirection) -> bool:
        return self.cell(cell_id).pointing_direction is pointing_direction

    # -------------------------------------------------------------------------
    # Occupancy
    # -------------------------------------------------------------------------

    def occupant(self, cell_id: int) -> str | None:
        self.cell(cell_id)
        return self._occupants.get(cell_id)

    def location_of(self, die_id: str) -> int | None:
        return self._locations.get(die_id)

    def is_empty(self, cell_id: int) -> bool:
        return self.occupant(cell_id) is None

    @property
    def occupied_cells(self) -> dict[int, str]:
        return dict(self._occupants)

    def relocate(self, die_id: str, cell_id: int, pointing_direction: PointingDirection):
        """
        Move a die onto a cell, vacating the cell it rested on.

        Nothing changes when the move is refused.

        Raises:
            UnknownCellError: no such cell
            CellOccupiedError: another die holds the cell
            DieDoesNotFitError: die and cell point different ways
        """
        cell = self.cell(cell_id)

        occupant = self._occupants.get(cell_id)
        if occupant is not None and occupant != die_id:
            raise CellOccupiedError(
                f"Cell [{cell_id}] already contains the die [{occupant}]."
            )
        if not self.fits(cell_id, pointing_direction):
            raise DieDoesNotFitError(
                f"Die [{die_id}] pointing [{pointing_direction.value}] doesn't fit in "
                f"cell [{cell_id}] pointing [{cell.pointing_direction.value}]."
            )

        previous = self._locations.get(die_id)
        if previous is not None:
            del self._occupants[previous]

        self._occupants[cell_id] = die_id
        self._locations[die_id] = cell_id
        logger.debug("Die %s relocated from %s to %s", die_id, previous, cell_id)

    def remove_die(self, cell_id: int) -> str:
        """
        Take the die off a cell.

        Returns:
            The removed die id.

        Raises:
            CellEmptyError: the cell holds no die
        """
        die_id = self.occupant(cell_id)
        if die_id is None:
            raise CellEmptyError(f"Cell [{cell_id}] is empty.")

        del self._occupants[cell_id]
        del self._locations[die_id]
        logger.debug("Die %s removed from %s", die_id, cell_id)
        return die_id
