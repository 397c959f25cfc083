"""
Action System - Actions, payloads, and results.

Actions represent:
1. Setup actions (place, roll)
2. Walk actions (tentative move, undo, commit, reset)
3. Turn actions (spin, remove, end turn)

All state changes flow through actions.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ActionType(Enum):
    """Types of actions in the system."""
    # Setup
    PLACE_DIE = "place_die"
    ROLL_DIE = "roll_die"
    START_GAME = "start_game"

    # Walk planning
    TENTATIVE_MOVE = "tentative_move"
    UNDO_MOVE = "undo_move"
    COMMIT_MOVE = "commit_move"
    RESET_MOVE = "reset_move"

    # In-place and board actions
    SPIN_DIE = "spin_die"
    REMOVE_DIE = "remove_die"

    # Turn flow
    END_TURN = "end_turn"
    END_GAME = "end_game"


@dataclass
class ActionPayload:
    """
    Parameters for an action.

    Different action types use different fields; the reducer validates.
    """
    player_id: int | None = None
    die_id: str | None = None
    cell_id: int | None = None
    direction: str | None = None

    params: dict[str, Any] = field(default_factory=dict)


@dataclass
class Action:
    """
    A complete action to be applied to the game state.

    Actions are:
    - Logged for replay
    - Validated before application
    - Applied atomically by the reducer
    """
    action_type: ActionType
    payload: ActionPayload
    timestamp: float | None = None

    @classmethod
    def place(cls, player_id: int, die_id: str, cell_id: int) -> Action:
        return cls(
            action_type=ActionType.PLACE_DIE,
            payload=ActionPayload(player_id=player_id, die_id=die_id, cell_id=cell_id),
        )

    @classmethod
    def roll(cls, player_id: int, die_id: str, steps: int | None = None) -> Action:
        """Roll a die; with `steps`, tumble it that many times instead."""
        return cls(
            action_type=ActionType.ROLL_DIE,
            payload=ActionPayload(player_id=player_id, die_id=die_id, params={"steps": steps}),
        )

    @classmethod
    def start_game(cls) -> Action:
        return cls(action_type=ActionType.START_GAME, payload=ActionPayload())

    @classmethod
    def move(cls, player_id: int, die_id: str, direction: str) -> Action:
        """Factory for a tentative move."""
        return cls(
            action_type=ActionType.TENTATIVE_MOVE,
            payload=ActionPayload(player_id=player_id, die_id=die_id, direction=direction),
        )

    @classmethod
    def undo(cls, player_id: int, die_id: str) -> Action:
        return cls(
            action_type=ActionType.UNDO_MOVE,
            payload=ActionPayload(player_id=player_id, die_id=die_id),
        )

    @classmethod
    def commit(cls, player_id: int, die_id: str) -> Action:
        return cls(
            action_type=ActionType.COMMIT_MOVE,
            payload=ActionPayload(player_id=player_id, die_id=die_id),
        )

    @classmethod
    def reset(cls, player_id: int, die_id: str) -> Action:
        return cls(
            action_type=ActionType.RESET_MOVE,
            payload=ActionPayload(player_id=player_id, die_id=die_id),
        )

    @classmethod
    def spin(cls, player_id: int, die_id: str, direction: str) -> Action:
        return cls(
            action_type=ActionType.SPIN_DIE,
            payload=ActionPayload(player_id=player_id, die_id=die_id, direction=direction),
        )

    @classmethod
    def remove(cls, player_id: int, cell_id: int) -> Action:
        """Take whatever die rests on `cell_id` off the board."""
        return cls(
            action_type=ActionType.REMOVE_DIE,
            payload=ActionPayload(player_id=player_id, cell_id=cell_id),
        )

    @classmethod
    def end_turn(cls, player_id: int) -> Action:
        return cls(
            action_type=ActionType.END_TURN,
            payload=ActionPayload(player_id=player_id),
        )

    @classmethod
    def end_game(cls) -> Action:
        return cls(action_type=ActionType.END_GAME, payload=ActionPayload())


@dataclass
class ActionResult:
    """
    Result of applying an action.

    Contains:
    - Whether action succeeded
    - The state (if succeeded)
    - Error and error code (if failed)
    - Human-readable changes for the UI
    """
    success: bool
    new_state: Any | None = None  # GameState
    error: str | None = None
    error_code: str | None = None

    state_changes: list[str] = field(default_factory=list)

    # Cell the acted-on die (or its walk) now stands on
    position: int | None = None

    @classmethod
    def failure(cls, error: str, error_code: str | None = None) -> ActionResult:
        """Create a failure result."""
        return cls(success=False, error=error, error_code=error_code)

    @classmethod
    def success_with_state(
        cls,
        state: Any,
        changes: list[str] | None = None,
        position: int | None = None,
    ) -> ActionResult:
        """Create a success result."""
        return cls(
            success=True,
            new_state=state,
            state_changes=changes or [],
            position=position,
        )
