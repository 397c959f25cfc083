"""
Die - A player's tetrahedral die and its movement planner.

A die is owned by exactly one player, fixed at creation. It does not hold
a reference to the cell it rests on; the board keeps the die -> cell and
cell -> die lookups.
"""

from __future__ import annotations
import logging
import random
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .faces import DieFaces, Direction, PointingDirection, SpinDirection
from .planner import MovementPlanner

if TYPE_CHECKING:
    from ..board import Board


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SimplifiedDie:
    """Read-only snapshot of a die for rendering."""
    left: int
    top: int
    right: int
    up: int
    down: int
    owner_id: int

    @property
    def faces(self) -> tuple[int, int, int, int, int]:
        return self.left, self.top, self.right, self.up, self.down


@dataclass
class Die:
    """
    One die on (or off) the board.

    Planning calls go through `planner`; the helpers below cover the
    whole-die operations that replace the committed faces.
    """
    die_id: str
    owner_id: int
    planner: MovementPlanner = field(init=False)

    def __post_init__(self):
        self.planner = MovementPlanner(die_id=self.die_id)

    @property
    def faces(self) -> DieFaces:
        """Copy of the committed faces."""
        return self.planner.committed.copy()

    @property
    def top_face(self) -> int:
        return self.planner.committed.top

    @property
    def move_count(self) -> int:
        return self.planner.move_count

    @property
    def pointing_direction(self) -> PointingDirection:
        return self.planner.committed_pointing_direction

    @property
    def speculative_pointing_direction(self) -> PointingDirection:
        return self.planner.speculative_pointing_direction

    @property
    def is_walking(self) -> bool:
        return self.planner.is_walking

    def spin(self, direction: SpinDirection | str):
        """Spin in place. Drops any walk in progress."""
        faces = self.faces
        faces.spin(direction)
        self.planner.replace_committed(faces)

    def roll(self, rng: random.Random | None = None):
        faces = self.faces
        faces.roll(rng)
        self.planner.replace_committed(faces)
        logger.debug("Die %s rolled [%s]", self.die_id, faces)

    def simulated_roll(self, count: int, rng: random.Random | None = None):
        faces = self.faces
        faces.simulated_roll(count, rng)
        self.planner.replace_committed(faces)
        logger.debug("Die %s tumbled %d times to [%s]", self.die_id, count, faces)

    def place(self, board: Board, cell_id: int):
        """
        Put the die on `cell_id`, vacating its previous cell.

        Faces are unchanged and any walk is dropped. Occupancy and fit are
        still enforced by the board.
        """
        board.relocate(self.die_id, cell_id, self.pointing_direction)
        self.planner.reset_speculation()

    # Planning shortcuts

    def tentative_move(self, board: Board, direction: Direction | str) -> int:
        return self.planner.tentative_move(board, direction)

    def undo_move(self, board: Board) -> int | None:
        return self.planner.undo_last_move(board)

    def commit_move(self, board: Board) -> int:
        return self.planner.commit(board)

    def reset_moves(self):
        self.planner.reset_speculation()

    def simplified(self) -> SimplifiedDie:
        faces = self.planner.committed
        return SimplifiedDie(
            left=faces.left,
            top=faces.top,
            right=faces.right,
            up=faces.up,
            down=faces.down,
            owner_id=self.owner_id,
        )

    def __str__(self) -> str:
        return str(self.planner.committed)
