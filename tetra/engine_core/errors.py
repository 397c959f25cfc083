"""
Rule Errors - Every way a die, a walk or a cell operation can be refused.

All of these are rule violations surfaced to the turn logic, never
recoverable runtime faults. An operation that raises one of them has
not mutated any state.

Each error carries a stable `error_code` that the reducer and the API
pass through unchanged.
"""

from __future__ import annotations


class TetraError(Exception):
    """Base class for rule violations."""

    error_code = "RULE_VIOLATION"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


# Walk planning

class MovesExhaustedError(TetraError):
    """Tentative move attempted with a move counter of zero."""
    error_code = "MOVES_EXHAUSTED"


class NoSuchNeighborError(TetraError):
    """The cell has no neighbor in the requested direction."""
    error_code = "NO_SUCH_NEIGHBOR"


class InvalidDirectionError(TetraError):
    """Direction is unknown, points at a board boundary, or the tip is illegal."""
    error_code = "INVALID_DIRECTION"


class NoMovesToUndoError(TetraError):
    error_code = "NO_MOVES_TO_UNDO"


class MovesRemainingError(TetraError):
    """Commit attempted before the move counter reached zero."""
    error_code = "MOVES_REMAINING"


class DieNotPlacedError(TetraError):
    """The die is not resting on any cell."""
    error_code = "DIE_NOT_PLACED"


# Cells and occupancy

class CellOccupiedError(TetraError):
    error_code = "CELL_OCCUPIED"


class DieDoesNotFitError(TetraError):
    """Die pointing direction differs from the cell's."""
    error_code = "DIE_DOES_NOT_FIT"


class CellEmptyError(TetraError):
    error_code = "CELL_EMPTY"


class UnknownCellError(TetraError):
    error_code = "UNKNOWN_CELL"


# Board construction

class NeighborAlreadySetError(TetraError):
    error_code = "NEIGHBOR_ALREADY_SET"


class InvalidNeighborError(TetraError):
    """Linked cell id does not match the declared neighbor id."""
    error_code = "INVALID_NEIGHBOR"
