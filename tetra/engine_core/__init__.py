"""
Engine Core - Die orientation, walk planning and turn state.

The engine is the runtime that:
1. Tracks each die's face arrangement (DieFaces)
2. Plans speculative walks and commits them (MovementPlanner)
3. Keeps players, dice and the board together (GameState)
4. Applies actions via the reducer
"""

from .errors import (
    TetraError,
    MovesExhaustedError,
    NoSuchNeighborError,
    InvalidDirectionError,
    NoMovesToUndoError,
    MovesRemainingError,
    DieNotPlacedError,
    CellOccupiedError,
    DieDoesNotFitError,
    CellEmptyError,
    UnknownCellError,
    NeighborAlreadySetError,
    InvalidNeighborError,
)
from .faces import DieFaces, Direction, SpinDirection, PointingDirection, is_valid_arrangement
from .planner import MovementPlanner, MoveRecord
from .die import Die, SimplifiedDie
from .player import Player
from .state import GameState, GamePhase
from .action import Action, ActionType, ActionPayload, ActionResult
from .reducer import Reducer, apply_action

__all__ = [
    "TetraError",
    "MovesExhaustedError",
    "NoSuchNeighborError",
    "InvalidDirectionError",
    "NoMovesToUndoError",
    "MovesRemainingError",
    "DieNotPlacedError",
    "CellOccupiedError",
    "DieDoesNotFitError",
    "CellEmptyError",
    "UnknownCellError",
    "NeighborAlreadySetError",
    "InvalidNeighborError",
    "DieFaces",
    "Direction",
    "SpinDirection",
    "PointingDirection",
    "is_valid_arrangement",
    "MovementPlanner",
    "MoveRecord",
    "Die",
    "SimplifiedDie",
    "Player",
    "GameState",
    "GamePhase",
    "Action",
    "ActionType",
    "ActionPayload",
    "ActionResult",
    "Reducer",
    "apply_action",
]
