"""
Session Manager - Creates and manages game sessions.

LIFECYCLE:
1. Create session -> board built from a layout, players and dice created,
   every die tumbled with a simulated roll
2. Setup phase -> players place their dice on matching cells
3. Playing -> actions go through the session's reducer
4. End session -> removed from memory

Sessions are in-memory only. Nothing is persisted.
"""

from __future__ import annotations
import logging
import random
import time
import uuid
from dataclasses import dataclass, field
from enum import Enum

from ..board import CellSpec, band_layout, build_board
from ..config import Settings, load_settings
from ..engine_core.action import Action, ActionResult
from ..engine_core.player import Player
from ..engine_core.reducer import Reducer
from ..engine_core.state import GamePhase, GameState


logger = logging.getLogger(__name__)


class SessionState(Enum):
    """State of a game session."""
    CREATED = "created"  # Dice being placed
    ACTIVE = "active"  # Game in progress
    GAME_OVER = "game_over"
    ABANDONED = "abandoned"


@dataclass
class Session:
    """
    One play-through.

    Wraps the game state with the reducer that is allowed to change it.
    """
    session_id: str
    game_state: GameState
    created_at: float

    state: SessionState = SessionState.CREATED
    reducer: Reducer = field(default_factory=Reducer)

    def is_active(self) -> bool:
        return self.state in {SessionState.CREATED, SessionState.ACTIVE}

    def apply(self, action: Action) -> ActionResult:
        """Apply an action and keep the session state in step with the game phase."""
        action.timestamp = action.timestamp or time.time()
        result = self.reducer.apply(self.game_state, action)

        if result.success:
            if self.game_state.phase == GamePhase.PLAYING:
                self.state = SessionState.ACTIVE
            elif self.game_state.phase == GamePhase.GAME_OVER:
                self.state = SessionState.GAME_OVER
        return result


class SessionManager:
    """
    Manages game sessions.

    Responsibilities:
    - Create sessions with a board, players and rolled dice
    - Track active sessions
    - Clean up ended sessions
    """

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or load_settings()
        self._sessions: dict[str, Session] = {}

    def create_session(
        self,
        num_players: int = 2,
        dice_per_player: int | None = None,
        layout: list[CellSpec] | None = None,
        random_seed: int | None = None,
        player_names: list[str] | None = None,
    ) -> Session:
        """
        Create a new game session.

        Args:
            num_players: Number of players (2-4)
            dice_per_player: Dice per player (defaults to settings)
            layout: Cell declarations (defaults to the band layout)
            random_seed: Seed for all rolls in this session
            player_names: Optional display names, in player order

        Returns:
            New Session in the setup phase
        """
        if num_players < 2 or num_players > 4:
            raise ValueError("Tetra supports 2-4 players")

        seed = random_seed if random_seed is not None else self.settings.random_seed
        rng = random.Random(seed)
        dice_per_player = dice_per_player or self.settings.dice_per_player
        names = player_names or []

        board = build_board(layout if layout is not None else band_layout())

        players = []
        for number in range(1, num_players + 1):
            name = names[number - 1] if number <= len(names) else ""
            player = Player(player_id=number, number_of_dice=dice_per_player, name=name)
            for die in player.dice.values():
                die.simulated_roll(self.settings.simulated_roll_steps, rng)
            players.append(player)

        session_id = str(uuid.uuid4())
        game_state = GameState(
            game_id=session_id,
            board=board,
            players=players,
            random_seed=seed,
            rng=rng,
        )
        session = Session(
            session_id=session_id,
            game_state=game_state,
            created_at=time.time(),
        )

        self._sessions[session_id] = session
        logger.info(
            "Session %s created: %d players, %d dice each, %d cells",
            session_id, num_players, dice_per_player, len(board),
        )
        return session

    def get_session(self, session_id: str) -> Session | None:
        return self._sessions.get(session_id)

    def end_session(self, session_id: str, reason: str = "completed") -> bool:
        """
        End a session and drop it from memory.

        Returns:
            Whether the session existed.
        """
        session = self._sessions.pop(session_id, None)
        if session is None:
            return False

        if reason == "completed":
            session.state = SessionState.GAME_OVER
        else:
            session.state = SessionState.ABANDONED
        logger.info("Session %s ended (%s)", session_id, reason)
        return True

    def list_active_sessions(self) -> list[str]:
        return [
            sid for sid, session in self._sessions.items()
            if session.is_active()
        ]

    def cleanup_stale_sessions(self, max_age_seconds: int = 3600) -> int:
        """
        End sessions older than max_age that are no longer active.

        Returns:
            Number of sessions removed.
        """
        current_time = time.time()
        to_remove = [
            session_id for session_id, session in self._sessions.items()
            if current_time - session.created_at > max_age_seconds and not session.is_active()
        ]
        for session_id in to_remove:
            self.end_session(session_id, reason="stale")
        return len(to_remove)
