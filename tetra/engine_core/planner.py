"""
Movement Planner - Speculative walks for a single die.

A walk is planned on a speculative copy of the die's faces:

    Idle --tentative_move--> Walking --commit / reset_speculation--> Idle

While walking, the committed faces and the board are never touched.
Each step records the cell reached and the direction that undoes it, so
`undo_last_move` can backtrack one step at a time (last in, first out).
`commit` is the only transition that changes the board.

The move counter starts at the committed top face value and must reach
exactly zero before a walk can be committed.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .faces import DieFaces, Direction, PointingDirection
from .errors import (
    DieNotPlacedError,
    InvalidDirectionError,
    MovesExhaustedError,
    MovesRemainingError,
    NoMovesToUndoError,
    NoSuchNeighborError,
)

if TYPE_CHECKING:
    from ..board import Board


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MoveRecord:
    """One tentative step: the cell now occupied and how to undo it."""
    cell_id: int
    undo_direction: Direction


@dataclass
class MovementPlanner:
    """
    Committed faces plus the speculative walk built on top of them.

    The planner knows its die only by id; the board answers where that
    die rests and which cells are adjacent.
    """
    die_id: str
    committed: DieFaces = field(default_factory=DieFaces)

    speculative: DieFaces = field(init=False)
    records: list[MoveRecord] = field(init=False, default_factory=list)
    move_count: int = field(init=False, default=0)

    def __post_init__(self):
        self.committed = self.committed.copy()
        self.reset_speculation()

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    @property
    def is_walking(self) -> bool:
        return bool(self.records)

    @property
    def moves_taken(self) -> int:
        return len(self.records)

    @property
    def can_commit(self) -> bool:
        return self.move_count == 0

    @property
    def committed_pointing_direction(self) -> PointingDirection:
        return self.committed.pointing_direction

    @property
    def speculative_pointing_direction(self) -> PointingDirection:
        return self.speculative.pointing_direction

    def position(self, board: Board) -> int | None:
        """Cell the walk currently stands on (the resting cell when idle)."""
        if self.records:
            return self.records[-1].cell_id
        return board.location_of(self.die_id)

    # -------------------------------------------------------------------------
    # Walk
    # -------------------------------------------------------------------------

    def tentative_move(self, board: Board, direction: Direction | str) -> int:
        """
        Take one speculative step.

        Returns:
            The cell id reached.

        Raises:
            MovesExhaustedError: move counter is zero
            DieNotPlacedError: die rests on no cell and no step was taken
            NoSuchNeighborError: no neighbor in that direction
            InvalidDirectionError: neighbor is a boundary marker, or the
                tip is illegal for the speculative faces
        """
        direction = Direction.parse(direction)

        if self.move_count <= 0:
            raise MovesExhaustedError(
                f"Die [{self.die_id}] cannot move because its move count has reached 0."
            )

        origin = self.position(board)
        if origin is None:
            raise DieNotPlacedError(f"Die [{self.die_id}] is not on a cell.")

        target = board.neighbor(origin, direction)
        if target is None:
            raise NoSuchNeighborError(
                f"Die [{self.die_id}] cannot move [{direction.value}] from "
                f"[{origin}] because there is no cell there."
            )
        if target.is_boundary:
            raise InvalidDirectionError(
                f"Die [{self.die_id}] cannot move [{direction.value}] from "
                f"[{origin}] because [{target.cell_id}] is off the board."
            )

        # Raises before mutating when the tip is illegal
        self.speculative.tip(direction)

        self.records.append(MoveRecord(cell_id=target.cell_id, undo_direction=direction.inverse))
        self.move_count -= 1
        logger.debug(
            "Die %s tentatively moved %s to %s (%d left)",
            self.die_id, direction.value, target.cell_id, self.move_count,
        )
        return target.cell_id

    def undo_last_move(self, board: Board) -> int | None:
        """
        Revert the most recent tentative step.

        Returns:
            The cell the walk now stands on.
        """
        if not self.records:
            raise NoMovesToUndoError(
                f"Die [{self.die_id}] cannot undo moves because it has made none."
            )

        last = self.records[-1]
        self.speculative.tip(last.undo_direction)
        self.records.pop()
        self.move_count += 1
        return self.position(board)

    def commit(self, board: Board) -> int:
        """
        Finalize the walk: relocate the die and adopt the speculative faces.

        Either everything happens or nothing does; a refused relocation
        leaves the walk in place.

        Returns:
            The cell id the die now rests on.

        Raises:
            MovesRemainingError: move counter has not reached zero
            CellOccupiedError, DieDoesNotFitError: refused by the board
        """
        if not self.can_commit:
            raise MovesRemainingError(
                f"Die [{self.die_id}] cannot finish moving because it still has "
                f"{self.move_count} moves left."
            )

        destination = self.records[-1].cell_id
        board.relocate(self.die_id, destination, self.speculative.pointing_direction)

        self.committed = self.speculative.copy()
        self.reset_speculation()
        logger.info("Die %s committed walk to %s with faces [%s]", self.die_id, destination, self.committed)
        return destination

    def reset_speculation(self):
        """Abandon any walk in progress."""
        self.records = []
        self.speculative = self.committed.copy()
        self.move_count = self.committed.top

    def replace_committed(self, faces: DieFaces):
        """Adopt new committed faces (roll, spin) and drop any walk."""
        self.committed = faces.copy()
        self.reset_speculation()
