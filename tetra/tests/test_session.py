"""
Tests for session management and settings.
"""

import pytest

from ..config import Settings, load_settings
from ..engine_core.action import Action
from ..engine_core.faces import is_valid_arrangement
from ..engine_core.state import GamePhase
from ..session import SessionManager, SessionState


@pytest.fixture
def manager():
    return SessionManager(settings=Settings(random_seed=21, dice_per_player=3))


class TestSessionManager:
    """Tests for SessionManager."""

    def test_create_session(self, manager):
        session = manager.create_session(player_names=["Ann"])
        state = session.game_state

        assert session.state == SessionState.CREATED
        assert state.phase == GamePhase.SETUP
        assert len(state.board) == 12
        assert [p.name for p in state.players] == ["Ann", "Player 2"]
        assert all(len(p.dice) == 3 for p in state.players)
        assert state.random_seed == 21

    def test_dice_start_tumbled(self, manager):
        session = manager.create_session(num_players=4)
        for die in session.game_state.all_dice():
            assert is_valid_arrangement(die.faces.faces)
            assert die.move_count == die.top_face

    @pytest.mark.parametrize("num_players", [1, 5])
    def test_player_count_limits(self, manager, num_players):
        with pytest.raises(ValueError):
            manager.create_session(num_players=num_players)

    def test_request_seed_overrides_settings(self, manager):
        session = manager.create_session(random_seed=5)
        assert session.game_state.random_seed == 5

    def test_end_session(self, manager):
        session = manager.create_session()

        assert manager.end_session(session.session_id, reason="user_ended")
        assert session.state == SessionState.ABANDONED
        assert manager.get_session(session.session_id) is None
        assert not manager.end_session(session.session_id)

    def test_cleanup_stale_sessions(self, manager):
        finished = manager.create_session()
        finished.state = SessionState.GAME_OVER
        finished.created_at -= 7200
        running = manager.create_session()
        running.created_at -= 7200

        assert manager.cleanup_stale_sessions(max_age_seconds=3600) == 1
        assert manager.get_session(finished.session_id) is None
        assert manager.get_session(running.session_id) is running


class TestSession:
    """Tests for applying actions through a session."""

    def test_apply_stamps_actions(self, manager):
        session = manager.create_session()
        action = Action.start_game()

        result = session.apply(action)

        assert result.success
        assert action.timestamp is not None
        assert session.state == SessionState.ACTIVE

    def test_failed_action_keeps_state(self, manager):
        session = manager.create_session()
        result = session.apply(Action.end_turn(1))

        assert not result.success
        assert session.state == SessionState.CREATED


class TestSettings:
    """Tests for environment settings."""

    def test_defaults(self, monkeypatch):
        for name in ["TETRA_ENV", "TETRA_RANDOM_SEED", "TETRA_DICE_PER_PLAYER", "ALLOWED_ORIGINS"]:
            monkeypatch.delenv(name, raising=False)
        settings = load_settings()

        assert settings.env == "development"
        assert settings.random_seed is None
        assert settings.dice_per_player == 4
        assert settings.allowed_origins == ["*"]

    def test_environment(self, monkeypatch):
        monkeypatch.setenv("TETRA_RANDOM_SEED", "9")
        monkeypatch.setenv("TETRA_SIMULATED_ROLL_STEPS", "3")
        monkeypatch.setenv("ALLOWED_ORIGINS", "http://a,http://b")
        settings = load_settings()

        assert settings.random_seed == 9
        assert settings.simulated_roll_steps == 3
        assert settings.allowed_origins == ["http://a", "http://b"]

    def test_bad_integer(self, monkeypatch):
        monkeypatch.setenv("TETRA_DICE_PER_PLAYER", "many")
        with pytest.raises(ValueError):
            load_settings()
