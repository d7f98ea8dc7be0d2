"""Automated players that answer gateway decisions."""

import random
from abc import ABC, abstractmethod
from typing import Any, Optional

from shawapoli.gateway import Decision


class Agent(ABC):
    """
    Abstract base class for automated players.

    All agents must implement the `choose` method to pick the value of one
    of the choices offered by a decision.
    """

    @abstractmethod
    def choose(self, decision: Decision) -> Any:
        """
        Choose one of the decision's offered values.

        Args:
            decision: The pending decision (never a notice).

        Returns:
            The value of the chosen Choice.
        """


class GreedyAgent(Agent):
    """
    Always takes the first offer: buy, upgrade, pay the jail fine.

    Prompts list the acquisitive option first, so this buys everything it
    can afford and upgrades whenever it is offered.
    """

    def choose(self, decision: Decision) -> Any:
        return decision.choices[0].value


class RandomAgent(Agent):
    """Picks uniformly among the offered choices."""

    def __init__(self, seed: Optional[int] = None):
        self.rng = random.Random(seed)

    def choose(self, decision: Decision) -> Any:
        return self.rng.choice(decision.choices).value
