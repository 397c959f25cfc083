"""
Die Faces - Orientation state of a tetrahedral die.

The die is described by five slots:

    position:  0      1     2       3        4
    slot:      left   top   right   up       down
               \\____ real faces __/ \\__ null zone _/

The three real faces are always visible and never 0. The null zone holds
the fourth, currently hidden face: exactly one of its two slots is 0 and
the other carries the hidden value. Which slot is empty decides where the
apex points:

- empty `down` slot -> the die points up
- empty `up` slot   -> the die points down

Every transformation is built on `move_number_to_null_zone`, which swaps
a face with the hidden value so the set {1, 2, 3, 4} is always present
exactly once.
"""

from __future__ import annotations
import random
from enum import Enum
from typing import Iterable

from .errors import InvalidDirectionError


class Direction(Enum):
    """Directions a die can tip towards (and board neighbor directions)."""
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

    @classmethod
    def parse(cls, value: Direction | str) -> Direction:
        """Accept an enum member or its string value."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise InvalidDirectionError(f"Unknown direction [{value}].") from None

    @property
    def inverse(self) -> Direction:
        """The direction that undoes a tip towards this one."""
        return _INVERSE_DIRECTION[self]

    @property
    def is_vertical(self) -> bool:
        return self in (Direction.UP, Direction.DOWN)


_INVERSE_DIRECTION = {
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
}


class SpinDirection(Enum):
    """In-place spin directions."""
    LEFT = "left"
    RIGHT = "right"

    @classmethod
    def parse(cls, value: SpinDirection | str) -> SpinDirection:
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise InvalidDirectionError(f"Unknown spin direction [{value}].") from None


class PointingDirection(Enum):
    """Where the apex of a die (or a triangular cell) points."""
    UP = "up"
    DOWN = "down"


FACE_VALUES = (1, 2, 3, 4)
SLOT_NAMES = ("left", "top", "right", "up", "down")
DEFAULT_FACES = (1, 2, 3, 4, 0)

LEFT_SLOT, TOP_SLOT, RIGHT_SLOT, UP_SLOT, DOWN_SLOT = range(5)


def is_valid_arrangement(faces: Iterable[int]) -> bool:
    """
    Check the slot invariants.

    - exactly five slots
    - real faces (0-2) are non-zero
    - exactly one null zone slot (3-4) is 0
    - ignoring the 0, the values are {1, 2, 3, 4} once each
    """
    faces = list(faces)
    if len(faces) != 5:
        return False
    if 0 in faces[:UP_SLOT]:
        return False
    if faces[UP_SLOT:].count(0) != 1:
        return False
    return sorted(v for v in faces if v != 0) == list(FACE_VALUES)


class DieFaces:
    """
    Mutable face arrangement of one die.

    Spins and tips mutate in place. Use `copy()` before exploring moves
    that must not leak into the original arrangement.
    """

    def __init__(self, faces: Iterable[int] | None = None):
        faces = list(DEFAULT_FACES if faces is None else faces)
        if not is_valid_arrangement(faces):
            raise ValueError(f"Invalid face arrangement: {faces}")
        self._faces = faces

    def copy(self) -> DieFaces:
        """Independent copy; mutations never reach the original."""
        return DieFaces(self._faces)

    # -------------------------------------------------------------------------
    # Slots
    # -------------------------------------------------------------------------

    @property
    def faces(self) -> tuple[int, ...]:
        return tuple(self._faces)

    @property
    def left(self) -> int:
        return self._faces[LEFT_SLOT]

    @property
    def top(self) -> int:
        return self._faces[TOP_SLOT]

    @property
    def right(self) -> int:
        return self._faces[RIGHT_SLOT]

    @property
    def up(self) -> int:
        return self._faces[UP_SLOT]

    @property
    def down(self) -> int:
        return self._faces[DOWN_SLOT]

    @property
    def real_faces(self) -> tuple[int, int, int]:
        return self.left, self.top, self.right

    @real_faces.setter
    def real_faces(self, values: tuple[int, int, int]):
        self._faces[LEFT_SLOT:UP_SLOT] = list(values)

    @property
    def null_zone(self) -> tuple[int, int]:
        return self.up, self.down

    @property
    def null_index(self) -> int:
        """Position of the empty null zone slot."""
        return DOWN_SLOT if self._faces[DOWN_SLOT] == 0 else UP_SLOT

    @property
    def hidden_index(self) -> int:
        """Position of the null zone slot carrying the hidden face."""
        return UP_SLOT if self.null_index == DOWN_SLOT else DOWN_SLOT

    @property
    def null_zone_number(self) -> int:
        """The currently hidden face value."""
        return self._faces[self.hidden_index]

    @property
    def pointing_direction(self) -> PointingDirection:
        if self.null_index == DOWN_SLOT:
            return PointingDirection.UP
        return PointingDirection.DOWN

    # A vertical tip is only legal towards the side whose null slot is empty.
    @property
    def can_tip_up(self) -> bool:
        return self._faces[UP_SLOT] == 0

    @property
    def can_tip_down(self) -> bool:
        return self._faces[DOWN_SLOT] == 0

    # -------------------------------------------------------------------------
    # Transformations
    # -------------------------------------------------------------------------

    def move_number_to_null_zone(self, value: int) -> int:
        """
        Swap `value` with the hidden face.

        `value` is located by lookup, takes the place of the hidden face in
        the null zone, and the old hidden face moves to where `value` was.
        The empty null slot is left alone.

        Returns:
            The previously hidden face value.
        """
        if value not in FACE_VALUES:
            raise ValueError(f"Not a face value: {value}")

        hidden_index = self.hidden_index
        source_index = self._faces.index(value)
        displaced = self._faces[hidden_index]

        self._faces[hidden_index] = value
        self._faces[source_index] = displaced
        return displaced

    def spin(self, direction: SpinDirection | str):
        """
        Rotate in place. Never changes cell or pointing direction.

        Only one spin is meaningful per pointing direction (right when
        pointing up, left when pointing down); the other request is
        normalized to it, so spin never fails on a known direction.
        """
        direction = SpinDirection.parse(direction)
        pointing = self.pointing_direction
        if direction is SpinDirection.RIGHT and pointing is PointingDirection.DOWN:
            direction = SpinDirection.LEFT
        elif direction is SpinDirection.LEFT and pointing is PointingDirection.UP:
            direction = SpinDirection.RIGHT

        if direction is SpinDirection.RIGHT:
            hidden = self.move_number_to_null_zone(self.right)
            self.real_faces = (self.left, self.top, hidden)
        else:
            hidden = self.move_number_to_null_zone(self.left)
            self.real_faces = (hidden, self.top, self.right)

    def tip(self, direction: Direction | str):
        """
        Tip the die over one edge onto the neighboring cell.

        Horizontal tips cycle the real faces through the hidden one.
        Vertical tips swap the top face with the hidden one and flip the
        pointing direction.

        Raises:
            InvalidDirectionError: vertical tip towards a side whose null
                slot is occupied (e.g. tipping down twice in a row).
        """
        direction = Direction.parse(direction)

        if direction is Direction.RIGHT:
            hidden = self.move_number_to_null_zone(self.right)
            self.real_faces = (hidden, self.left, self.top)
        elif direction is Direction.LEFT:
            hidden = self.move_number_to_null_zone(self.left)
            self.real_faces = (self.top, self.right, hidden)
        else:
            if direction is Direction.DOWN and not self.can_tip_down:
                raise InvalidDirectionError(f"Can't tip down from faces [{self}].")
            if direction is Direction.UP and not self.can_tip_up:
                raise InvalidDirectionError(f"Can't tip up from faces [{self}].")

            hidden = self.move_number_to_null_zone(self.top)
            self.real_faces = (self.left, hidden, self.right)
            self._flip_null_zone()

    def _flip_null_zone(self):
        self._faces[UP_SLOT], self._faces[DOWN_SLOT] = (
            self._faces[DOWN_SLOT],
            self._faces[UP_SLOT],
        )

    # -------------------------------------------------------------------------
    # Randomization
    # -------------------------------------------------------------------------

    def roll(self, rng: random.Random | None = None):
        """Replace the arrangement with a uniformly random legal one."""
        rng = rng or random.Random()

        null_position = rng.choice((UP_SLOT, DOWN_SLOT))
        positions = [p for p in range(len(SLOT_NAMES)) if p != null_position]
        values = rng.sample(FACE_VALUES, len(FACE_VALUES))

        new_faces = [0] * len(SLOT_NAMES)
        for position, value in zip(positions, values):
            new_faces[position] = value
        self._faces = new_faces

    def simulated_roll(self, count: int, rng: random.Random | None = None):
        """
        Tumble the die with `count` random tips, each optionally followed
        by a spin. Vertical picks go whichever way is legal.
        """
        rng = rng or random.Random()
        for _ in range(count):
            self._random_tip(rng)
            if rng.random() >= 0.5:
                self.spin(rng.choice(list(SpinDirection)))

    def _random_tip(self, rng: random.Random):
        choice = rng.choice(list(Direction))
        if choice.is_vertical:
            choice = Direction.DOWN if self.can_tip_down else Direction.UP
        self.tip(choice)

    # -------------------------------------------------------------------------
    # Dunder
    # -------------------------------------------------------------------------

    def __eq__(self, other):
        if not isinstance(other, DieFaces):
            return NotImplemented
        return self._faces == other._faces

    def __str__(self) -> str:
        return ",".join(str(v) for v in self._faces)

    def __repr__(self) -> str:
        return f"DieFaces({self._faces!r})"
