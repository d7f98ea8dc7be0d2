"""
Dice rolls.
"""

import random
from dataclasses import dataclass


@dataclass(frozen=True)
class DiceRoll:
    """Faces of two six-sided dice."""

    die1: int
    die2: int

    @property
    def total(self) -> int:
        return self.die1 + self.die2

    def __str__(self) -> str:
        return f"{self.die1} + {self.die2} = {self.total}"


def roll_dice(rng: random.Random) -> DiceRoll:
    """Roll two independent uniform 1-6 dice."""
    return DiceRoll(rng.randint(1, 6), rng.randint(1, 6))
