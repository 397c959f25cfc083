"""
Pytest fixtures for Tetra tests.
"""

import random

import pytest

from ..board import CellSpec, band_layout, build_board
from ..engine_core.die import Die
from ..engine_core.faces import DieFaces, PointingDirection
from ..engine_core.player import Player
from ..engine_core.state import GameState


@pytest.fixture
def rng() -> random.Random:
    """Seeded random generator."""
    return random.Random(1234)


@pytest.fixture
def band_board():
    """Two-row band: 11..16 point up, 21..26 point down."""
    return build_board(band_layout())


@pytest.fixture
def mismatched_board():
    """Two horizontally linked cells pointing different ways."""
    return build_board([
        CellSpec(1, PointingDirection.UP, {"right": 2}),
        CellSpec(2, PointingDirection.DOWN, {"left": 1}),
    ])


def make_die(faces, die_id: str = "10", owner_id: int = 1) -> Die:
    """A die with the given committed faces."""
    die = Die(die_id=die_id, owner_id=owner_id)
    die.planner.replace_committed(DieFaces(faces))
    return die


@pytest.fixture
def die_factory():
    """Build dice with chosen faces."""
    return make_die


@pytest.fixture
def three_move_die(band_board) -> Die:
    """Die pointing up with top face 3, resting on cell 12."""
    die = make_die([1, 3, 2, 4, 0])
    die.place(band_board, 12)
    return die


@pytest.fixture
def two_player_state(band_board) -> GameState:
    """Setup-phase state with two players of two dice each, all pointing up."""
    players = [Player(player_id=1, number_of_dice=2), Player(player_id=2, number_of_dice=2)]
    for player in players:
        for die in player.dice.values():
            die.planner.replace_committed(DieFaces([1, 2, 3, 4, 0]))

    return GameState(
        game_id="test_game",
        board=band_board,
        players=players,
        random_seed=7,
        rng=random.Random(7),
    )
