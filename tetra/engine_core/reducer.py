"""
Reducer - Applies actions to game state.

The reducer is the single point of state mutation.
All state changes must go through apply_action().

Design principles:
- Validates turn, phase and ownership before applying
- Rule violations from the engine come back as failed ActionResults
- A failed action leaves the state untouched
"""

from __future__ import annotations
import logging

from .action import Action, ActionResult, ActionType
from .errors import TetraError
from .state import GamePhase, GameState


logger = logging.getLogger(__name__)


SETUP_ACTIONS = {
    ActionType.PLACE_DIE,
    ActionType.ROLL_DIE,
    ActionType.START_GAME,
    ActionType.END_GAME,
}

PLAYING_ACTIONS = {
    ActionType.TENTATIVE_MOVE,
    ActionType.UNDO_MOVE,
    ActionType.COMMIT_MOVE,
    ActionType.RESET_MOVE,
    ActionType.SPIN_DIE,
    ActionType.REMOVE_DIE,
    ActionType.END_TURN,
    ActionType.END_GAME,
}

DIE_ACTIONS = {
    ActionType.PLACE_DIE,
    ActionType.ROLL_DIE,
    ActionType.TENTATIVE_MOVE,
    ActionType.UNDO_MOVE,
    ActionType.COMMIT_MOVE,
    ActionType.RESET_MOVE,
    ActionType.SPIN_DIE,
}

# Actions that would start or disturb a walk of another die
EXCLUSIVE_WALK_ACTIONS = {
    ActionType.PLACE_DIE,
    ActionType.ROLL_DIE,
    ActionType.TENTATIVE_MOVE,
    ActionType.SPIN_DIE,
}


class Reducer:
    """
    Reducer applies actions to game state.

    Stateless - all state is in GameState.
    """

    def apply(self, state: GameState, action: Action) -> ActionResult:
        """
        Apply an action to the game state.

        Returns ActionResult with the state or an error.
        """
        validation_error = self._validate_action(state, action)
        if validation_error:
            message, error_code = validation_error
            logger.debug("Rejected %s: %s", action.action_type.value, message)
            return ActionResult.failure(message, error_code=error_code)

        handler = self._get_handler(action.action_type)
        if not handler:
            return ActionResult.failure(
                f"No handler for action type: {action.action_type}",
                error_code="NO_HANDLER",
            )

        try:
            result = handler(state, action)
        except TetraError as e:
            logger.debug("Rule violation on %s: %s", action.action_type.value, e.message)
            return ActionResult.failure(e.message, error_code=e.error_code)

        if result.success:
            state.action_history.append(action)
        return result

    def _validate_action(self, state: GameState, action: Action) -> tuple[str, str] | None:
        """
        Validate that an action is legal in the current state.

        Returns (message, error_code) if invalid, None if valid.
        """
        if state.phase == GamePhase.GAME_OVER:
            return "Game is over - no actions allowed", "INVALID_ACTION"

        if state.phase == GamePhase.SETUP and action.action_type not in SETUP_ACTIONS:
            return "Game not started - only setup actions allowed", "INVALID_ACTION"

        if state.phase == GamePhase.PLAYING and action.action_type not in PLAYING_ACTIONS:
            return f"{action.action_type.value} is only allowed during setup", "INVALID_ACTION"

        if action.action_type in {ActionType.START_GAME, ActionType.END_GAME}:
            return None

        player_id = action.payload.player_id
        player = state.get_player(player_id)
        if player is None:
            return f"Player {player_id} not found", "PLAYER_NOT_FOUND"

        if state.phase == GamePhase.PLAYING and player_id != state.current_player.player_id:
            return f"Not player {player_id}'s turn", "NOT_YOUR_TURN"

        if action.action_type not in DIE_ACTIONS:
            return None

        die_id = action.payload.die_id
        die = state.get_die(die_id)
        if die is None:
            return f"Die {die_id} not found", "DIE_NOT_FOUND"
        if not player.owns(die_id):
            return f"Die {die_id} does not belong to player {player_id}", "NOT_OWNER"

        if (
            action.action_type in EXCLUSIVE_WALK_ACTIONS
            and state.walking_die_id is not None
            and state.walking_die_id != die_id
        ):
            return f"Die {state.walking_die_id} is already walking", "WALK_IN_PROGRESS"

        return None

    def _get_handler(self, action_type: ActionType):
        """Get the handler function for an action type."""
        handlers = {
            ActionType.PLACE_DIE: self._handle_place,
            ActionType.ROLL_DIE: self._handle_roll,
            ActionType.START_GAME: self._handle_start_game,
            ActionType.TENTATIVE_MOVE: self._handle_move,
            ActionType.UNDO_MOVE: self._handle_undo,
            ActionType.COMMIT_MOVE: self._handle_commit,
            ActionType.RESET_MOVE: self._handle_reset,
            ActionType.SPIN_DIE: self._handle_spin,
            ActionType.REMOVE_DIE: self._handle_remove,
            ActionType.END_TURN: self._handle_end_turn,
            ActionType.END_GAME: self._handle_end_game,
        }
        return handlers.get(action_type)

    # -------------------------------------------------------------------------
    # Setup
    # -------------------------------------------------------------------------

    def _handle_place(self, state: GameState, action: Action) -> ActionResult:
        die = state.get_die(action.payload.die_id)
        cell_id = action.payload.cell_id
        if cell_id is None:
            return ActionResult.failure("No cell given", error_code="VALIDATION_ERROR")

        die.place(state.board, cell_id)
        state.get_player(die.owner_id).place_die(die)

        return ActionResult.success_with_state(
            state,
            changes=[f"Die {die.die_id} placed on cell {cell_id}"],
            position=cell_id,
        )

    def _handle_roll(self, state: GameState, action: Action) -> ActionResult:
        die = state.get_die(action.payload.die_id)
        if state.board.location_of(die.die_id) is not None:
            return ActionResult.failure(
                f"Die {die.die_id} is on the board and cannot be rolled",
                error_code="INVALID_ACTION",
            )

        steps = action.payload.params.get("steps")
        if steps:
            die.simulated_roll(steps, state.rng)
        else:
            die.roll(state.rng)

        return ActionResult.success_with_state(
            state,
            changes=[f"Die {die.die_id} rolled [{die}]"],
        )

    def _handle_start_game(self, state: GameState, action: Action) -> ActionResult:
        if state.num_players < 2:
            return ActionResult.failure("At least two players are needed", error_code="INVALID_ACTION")

        state.phase = GamePhase.PLAYING
        state.turn_number = 1
        state.current_player_idx = 0
        logger.info("Game %s started with %d players", state.game_id, state.num_players)

        return ActionResult.success_with_state(
            state,
            changes=[f"Game started, {state.current_player.name} to play"],
        )

    # -------------------------------------------------------------------------
    # Walk
    # -------------------------------------------------------------------------

    def _handle_move(self, state: GameState, action: Action) -> ActionResult:
        die = state.get_die(action.payload.die_id)
        position = die.tentative_move(state.board, action.payload.direction)
        state.walking_die_id = die.die_id

        return ActionResult.success_with_state(
            state,
            changes=[
                f"Die {die.die_id} tentatively moved {action.payload.direction} "
                f"to cell {position} ({die.move_count} left)"
            ],
            position=position,
        )

    def _handle_undo(self, state: GameState, action: Action) -> ActionResult:
        die = state.get_die(action.payload.die_id)
        position = die.undo_move(state.board)
        if not die.is_walking:
            state.walking_die_id = None

        return ActionResult.success_with_state(
            state,
            changes=[f"Die {die.die_id} stepped back to cell {position}"],
            position=position,
        )

    def _handle_commit(self, state: GameState, action: Action) -> ActionResult:
        die = state.get_die(action.payload.die_id)
        position = die.commit_move(state.board)
        state.walking_die_id = None

        return ActionResult.success_with_state(
            state,
            changes=[f"Die {die.die_id} moved to cell {position}"],
            position=position,
        )

    def _handle_reset(self, state: GameState, action: Action) -> ActionResult:
        die = state.get_die(action.payload.die_id)
        die.reset_moves()
        if state.walking_die_id == die.die_id:
            state.walking_die_id = None

        return ActionResult.success_with_state(
            state,
            changes=[f"Die {die.die_id} walk abandoned"],
            position=state.board.location_of(die.die_id),
        )

    # -------------------------------------------------------------------------
    # In place and board
    # -------------------------------------------------------------------------

    def _handle_spin(self, state: GameState, action: Action) -> ActionResult:
        die = state.get_die(action.payload.die_id)
        die.spin(action.payload.direction)
        if state.walking_die_id == die.die_id:
            state.walking_die_id = None

        return ActionResult.success_with_state(
            state,
            changes=[f"Die {die.die_id} spun to [{die}]"],
            position=state.board.location_of(die.die_id),
        )

    def _handle_remove(self, state: GameState, action: Action) -> ActionResult:
        cell_id = action.payload.cell_id
        if cell_id is None:
            return ActionResult.failure("No cell given", error_code="VALIDATION_ERROR")

        die_id = state.board.remove_die(cell_id)
        die = state.get_die(die_id)
        die.reset_moves()
        state.get_player(die.owner_id).lose_die(die)
        if state.walking_die_id == die_id:
            state.walking_die_id = None

        return ActionResult.success_with_state(
            state,
            changes=[f"Die {die_id} removed from cell {cell_id}"],
        )

    # -------------------------------------------------------------------------
    # Turn flow
    # -------------------------------------------------------------------------

    def _handle_end_turn(self, state: GameState, action: Action) -> ActionResult:
        changes = []
        walking = state.walking_die
        if walking is not None:
            walking.reset_moves()
            state.walking_die_id = None
            changes.append(f"Die {walking.die_id} walk abandoned")

        state.current_player_idx = (state.current_player_idx + 1) % state.num_players
        state.turn_number += 1
        changes.append(f"{state.current_player.name} to play")

        return ActionResult.success_with_state(state, changes=changes)

    def _handle_end_game(self, state: GameState, action: Action) -> ActionResult:
        state.phase = GamePhase.GAME_OVER
        state.walking_die_id = None
        logger.info("Game %s over after %d turns", state.game_id, state.turn_number)
        return ActionResult.success_with_state(state, changes=["Game over"])


def apply_action(state: GameState, action: Action) -> ActionResult:
    """
    Convenience function to apply an action.

    Creates a Reducer and applies the action.
    """
    reducer = Reducer()
    return reducer.apply(state, action)
