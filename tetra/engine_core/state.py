"""
Game State - Everything the turn logic needs at a point in time.

Design principles:
- One mutable container per session; the reducer is the only writer
- Dice belong to players, cells belong to the board
- Only one die walks at a time
- All randomness comes from the state's own generator
"""

from __future__ import annotations
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any

from .die import Die
from .player import Player

if TYPE_CHECKING:
    from ..board import Board


class GamePhase(Enum):
    """High-level game phases."""
    SETUP = "setup"
    PLAYING = "playing"
    GAME_OVER = "game_over"


@dataclass
class GameState:
    """
    Complete game state.

    `walking_die_id` names the die with a walk in progress, if any.
    """
    game_id: str
    board: Board

    phase: GamePhase = GamePhase.SETUP
    turn_number: int = 0
    current_player_idx: int = 0
    walking_die_id: str | None = None

    players: list[Player] = field(default_factory=list)

    # History (for replay and debugging)
    action_history: list[Any] = field(default_factory=list)

    random_seed: int | None = None
    rng: random.Random = field(default_factory=random.Random)

    @property
    def current_player(self) -> Player:
        return self.players[self.current_player_idx]

    @property
    def num_players(self) -> int:
        return len(self.players)

    def get_player(self, player_id: int) -> Player | None:
        for p in self.players:
            if p.player_id == player_id:
                return p
        return None

    def get_die(self, die_id: str) -> Die | None:
        for p in self.players:
            if die_id in p.dice:
                return p.dice[die_id]
        return None

    @property
    def walking_die(self) -> Die | None:
        if self.walking_die_id is None:
            return None
        return self.get_die(self.walking_die_id)

    def all_dice(self) -> list[Die]:
        return [die for p in self.players for die in p.dice.values()]
