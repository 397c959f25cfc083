"""
Player - Owner of a fixed set of dice.

Dice ids are derived from the player number: player 2's dice are
"20", "21", "22", ... so ids stay unique across a roster of up to ten
dice per player.
"""

from __future__ import annotations
from dataclasses import dataclass, field

from .die import Die


DEFAULT_DICE_PER_PLAYER = 4


@dataclass
class Player:
    """A player with their dice, split into on-board and lost."""
    player_id: int
    number_of_dice: int = DEFAULT_DICE_PER_PLAYER
    name: str = ""

    dice: dict[str, Die] = field(init=False, default_factory=dict)
    dice_on_board: dict[str, Die] = field(init=False, default_factory=dict)
    lost_dice: dict[str, Die] = field(init=False, default_factory=dict)

    def __post_init__(self):
        if not 0 < self.number_of_dice <= 10:
            raise ValueError("A player holds between 1 and 10 dice")
        if not self.name:
            self.name = f"Player {self.player_id}"
        for number in range(self.number_of_dice):
            die_id = self.die_id_for(number)
            self.dice[die_id] = Die(die_id=die_id, owner_id=self.player_id)

    def die_id_for(self, number: int) -> str:
        return str(self.player_id * 10 + number)

    def get_die(self, number: int) -> Die | None:
        """Get a die by its number within this player's set."""
        return self.dice.get(self.die_id_for(number))

    def owns(self, die_id: str) -> bool:
        return die_id in self.dice

    def place_die(self, die: Die):
        self._check_owner(die)
        self.lost_dice.pop(die.die_id, None)
        self.dice_on_board[die.die_id] = die

    def lose_die(self, die: Die):
        self._check_owner(die)
        self.dice_on_board.pop(die.die_id, None)
        self.lost_dice[die.die_id] = die

    def _check_owner(self, die: Die):
        if die.owner_id != self.player_id:
            raise ValueError(f"Die {die.die_id} belongs to player {die.owner_id}")
