"""
Tests for the reducer (state transitions).

Tests:
- Setup actions
- Walk actions and their error codes
- Turn flow
- Validation
"""

import random

import pytest

from ..engine_core.action import Action, ActionType
from ..engine_core.player import Player
from ..engine_core.reducer import Reducer, apply_action
from ..engine_core.state import GamePhase, GameState


@pytest.fixture
def playing_state(two_player_state):
    """Both players' dice placed on the up row and the game started."""
    state = two_player_state
    for player_id, die_id, cell_id in [(1, "10", 11), (1, "11", 13), (2, "20", 15), (2, "21", 16)]:
        assert apply_action(state, Action.place(player_id, die_id, cell_id)).success
    assert apply_action(state, Action.start_game()).success
    return state


class TestSetup:
    """Tests for placing and rolling dice before play."""

    def test_place_die(self, two_player_state):
        state = two_player_state
        result = apply_action(state, Action.place(1, "10", 11))

        assert result.success
        assert result.new_state is state
        assert result.position == 11
        assert state.board.occupant(11) == "10"
        assert "10" in state.get_player(1).dice_on_board
        assert state.action_history[-1].action_type == ActionType.PLACE_DIE

    def test_place_any_player_during_setup(self, two_player_state):
        """Setup has no turn order."""
        result = apply_action(two_player_state, Action.place(2, "20", 12))
        assert result.success

    def test_place_on_mismatched_cell(self, two_player_state):
        result = apply_action(two_player_state, Action.place(1, "10", 21))

        assert not result.success
        assert result.error_code == "DIE_DOES_NOT_FIT"
        assert two_player_state.board.is_empty(21)
        assert not two_player_state.action_history

    def test_place_on_occupied_cell(self, two_player_state):
        apply_action(two_player_state, Action.place(1, "10", 11))
        result = apply_action(two_player_state, Action.place(2, "20", 11))

        assert result.error_code == "CELL_OCCUPIED"
        assert two_player_state.board.occupant(11) == "10"

    def test_place_without_cell(self, two_player_state):
        result = apply_action(two_player_state, Action.place(1, "10", None))
        assert result.error_code == "VALIDATION_ERROR"

    def test_place_unknown_cell(self, two_player_state):
        result = apply_action(two_player_state, Action.place(1, "10", 99))
        assert result.error_code == "UNKNOWN_CELL"

    @pytest.mark.parametrize("player_id,die_id,error_code", [
        (1, "20", "NOT_OWNER"),
        (1, "99", "DIE_NOT_FOUND"),
        (5, "10", "PLAYER_NOT_FOUND"),
    ])
    def test_place_validation(self, two_player_state, player_id, die_id, error_code):
        result = apply_action(two_player_state, Action.place(player_id, die_id, 11))
        assert not result.success
        assert result.error_code == error_code

    def test_roll_die(self, two_player_state):
        result = apply_action(two_player_state, Action.roll(1, "10"))
        die = two_player_state.get_die("10")

        assert result.success
        assert die.move_count == die.top_face

    def test_roll_with_steps(self, two_player_state):
        result = apply_action(two_player_state, Action.roll(1, "10", steps=5))
        assert result.success

    def test_roll_is_reproducible(self, band_board):
        """The state's own generator drives rolls."""
        faces = []
        for _ in range(2):
            state = GameState(
                game_id="g",
                board=band_board,
                players=[Player(1), Player(2)],
                rng=random.Random(42),
            )
            apply_action(state, Action.roll(1, "10"))
            faces.append(state.get_die("10").faces)
        assert faces[0] == faces[1]

    def test_roll_placed_die_refused(self, two_player_state):
        apply_action(two_player_state, Action.place(1, "10", 11))
        before = two_player_state.get_die("10").faces

        result = apply_action(two_player_state, Action.roll(1, "10"))

        assert result.error_code == "INVALID_ACTION"
        assert two_player_state.get_die("10").faces == before

    def test_walk_not_allowed_in_setup(self, two_player_state):
        apply_action(two_player_state, Action.place(1, "10", 11))
        result = apply_action(two_player_state, Action.move(1, "10", "right"))
        assert result.error_code == "INVALID_ACTION"

    def test_start_game(self, two_player_state):
        result = apply_action(two_player_state, Action.start_game())

        assert result.success
        assert two_player_state.phase == GamePhase.PLAYING
        assert two_player_state.turn_number == 1
        assert two_player_state.current_player.player_id == 1

    def test_start_game_needs_two_players(self, band_board):
        state = GameState(game_id="solo", board=band_board, players=[Player(1)])
        result = apply_action(state, Action.start_game())

        assert result.error_code == "INVALID_ACTION"
        assert state.phase == GamePhase.SETUP


class TestWalk:
    """Tests for walk actions during play."""

    def test_tentative_move(self, playing_state):
        result = apply_action(playing_state, Action.move(1, "10", "right"))

        assert result.success
        assert result.position == 12
        assert playing_state.walking_die_id == "10"
        assert playing_state.get_die("10").move_count == 1
        assert playing_state.board.location_of("10") == 11

    def test_move_through_occupied_cell(self, playing_state):
        """Occupancy only matters at commit."""
        apply_action(playing_state, Action.move(1, "10", "right"))
        result = apply_action(playing_state, Action.move(1, "10", "right"))
        assert result.position == 13

    def test_move_exhausted(self, playing_state):
        apply_action(playing_state, Action.move(1, "10", "right"))
        apply_action(playing_state, Action.move(1, "10", "right"))

        result = apply_action(playing_state, Action.move(1, "10", "right"))
        assert result.error_code == "MOVES_EXHAUSTED"

    def test_commit_onto_occupied_cell(self, playing_state):
        apply_action(playing_state, Action.move(1, "10", "right"))
        apply_action(playing_state, Action.move(1, "10", "right"))

        result = apply_action(playing_state, Action.commit(1, "10"))

        assert result.error_code == "CELL_OCCUPIED"
        assert playing_state.walking_die_id == "10"
        assert playing_state.board.location_of("10") == 11

    @pytest.mark.parametrize("direction,error_code", [
        ("up", "NO_SUCH_NEIGHBOR"),
        ("left", "INVALID_DIRECTION"),
        ("forward", "INVALID_DIRECTION"),
    ])
    def test_move_errors(self, playing_state, direction, error_code):
        result = apply_action(playing_state, Action.move(1, "10", direction))

        assert result.error_code == error_code
        assert playing_state.walking_die_id is None
        assert playing_state.get_die("10").move_count == 2

    def test_commit(self, playing_state):
        apply_action(playing_state, Action.move(1, "10", "right"))
        apply_action(playing_state, Action.move(1, "10", "down"))

        result = apply_action(playing_state, Action.commit(1, "10"))

        assert result.success
        assert result.position == 22
        assert playing_state.walking_die_id is None
        assert playing_state.board.location_of("10") == 22
        assert playing_state.board.is_empty(11)
        assert playing_state.get_die("10").faces.faces == (4, 3, 2, 0, 1)

    def test_commit_with_moves_left(self, playing_state):
        apply_action(playing_state, Action.move(1, "10", "right"))
        result = apply_action(playing_state, Action.commit(1, "10"))

        assert result.error_code == "MOVES_REMAINING"
        assert playing_state.walking_die_id == "10"

    def test_undo(self, playing_state):
        apply_action(playing_state, Action.move(1, "10", "right"))
        result = apply_action(playing_state, Action.undo(1, "10"))

        assert result.success
        assert result.position == 11
        assert playing_state.walking_die_id is None

    def test_undo_without_moves(self, playing_state):
        result = apply_action(playing_state, Action.undo(1, "10"))
        assert result.error_code == "NO_MOVES_TO_UNDO"

    def test_reset(self, playing_state):
        apply_action(playing_state, Action.move(1, "10", "right"))
        result = apply_action(playing_state, Action.reset(1, "10"))

        assert result.success
        assert result.position == 11
        assert playing_state.walking_die_id is None
        assert playing_state.get_die("10").move_count == 2

    def test_second_die_blocked_while_walking(self, playing_state):
        apply_action(playing_state, Action.move(1, "10", "right"))
        result = apply_action(playing_state, Action.move(1, "11", "right"))
        assert result.error_code == "WALK_IN_PROGRESS"

    def test_unplaced_die_cannot_walk(self, band_board):
        state = GameState(game_id="g", board=band_board, players=[Player(1), Player(2)])
        apply_action(state, Action.start_game())

        result = apply_action(state, Action.move(1, "10", "right"))
        assert result.error_code == "DIE_NOT_PLACED"

    def test_wrong_turn(self, playing_state):
        result = apply_action(playing_state, Action.move(2, "20", "right"))
        assert result.error_code == "NOT_YOUR_TURN"


class TestInPlace:
    """Tests for spins and removals."""

    def test_spin(self, playing_state):
        result = apply_action(playing_state, Action.spin(1, "10", "right"))

        assert result.success
        assert result.position == 11
        assert playing_state.get_die("10").faces.faces == (1, 2, 4, 3, 0)

    def test_spin_drops_walk(self, playing_state):
        apply_action(playing_state, Action.move(1, "10", "right"))
        apply_action(playing_state, Action.spin(1, "10", "left"))

        assert playing_state.walking_die_id is None
        assert not playing_state.get_die("10").is_walking

    def test_bad_spin_direction(self, playing_state):
        result = apply_action(playing_state, Action.spin(1, "10", "down"))
        assert result.error_code == "INVALID_DIRECTION"

    def test_remove_die(self, playing_state):
        result = apply_action(playing_state, Action.remove(1, 15))

        assert result.success
        assert playing_state.board.is_empty(15)
        assert "20" in playing_state.get_player(2).lost_dice
        assert "20" not in playing_state.get_player(2).dice_on_board

    def test_remove_from_empty_cell(self, playing_state):
        result = apply_action(playing_state, Action.remove(1, 12))
        assert result.error_code == "CELL_EMPTY"


class TestTurnFlow:
    """Tests for ending turns and games."""

    def test_end_turn(self, playing_state):
        result = apply_action(playing_state, Action.end_turn(1))

        assert result.success
        assert playing_state.current_player.player_id == 2
        assert playing_state.turn_number == 2

    def test_end_turn_abandons_walk(self, playing_state):
        apply_action(playing_state, Action.move(1, "10", "right"))
        apply_action(playing_state, Action.end_turn(1))

        die = playing_state.get_die("10")
        assert playing_state.walking_die_id is None
        assert not die.is_walking
        assert die.move_count == 2

    def test_turns_wrap_around(self, playing_state):
        apply_action(playing_state, Action.end_turn(1))
        apply_action(playing_state, Action.end_turn(2))
        assert playing_state.current_player.player_id == 1
        assert playing_state.turn_number == 3

    def test_end_turn_wrong_player(self, playing_state):
        result = apply_action(playing_state, Action.end_turn(2))
        assert result.error_code == "NOT_YOUR_TURN"

    def test_end_game(self, playing_state):
        result = apply_action(playing_state, Action.end_game())

        assert result.success
        assert playing_state.phase == GamePhase.GAME_OVER

        result = apply_action(playing_state, Action.end_turn(1))
        assert result.error_code == "INVALID_ACTION"

    def test_place_refused_during_play(self, playing_state):
        result = apply_action(playing_state, Action.place(1, "10", 12))
        assert result.error_code == "INVALID_ACTION"


class TestReducer:
    """Tests for the reducer object itself."""

    def test_failed_actions_not_recorded(self, playing_state):
        history = len(playing_state.action_history)
        Reducer().apply(playing_state, Action.undo(1, "10"))
        assert len(playing_state.action_history) == history

    def test_successful_actions_recorded(self, playing_state):
        history = len(playing_state.action_history)
        Reducer().apply(playing_state, Action.end_turn(1))
        assert len(playing_state.action_history) == history + 1
