"""
Interfaces to the outside world: the decision gateway and the board renderer.

The engine never blocks on input itself. Whenever a player has to choose
something (buy, upgrade, pay a jail fine) or acknowledge a message, the
pipeline awaits the gateway, and the gateway resumes it exactly once with the
answer. Only one decision can be outstanding at a time.
"""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from collections import deque
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Deque, Iterable, List, Optional, Sequence, Tuple

from shawapoli.exceptions import DecisionError, DecisionPendingError, InvalidChoiceError

if TYPE_CHECKING:
    from shawapoli.agents import Agent
    from shawapoli.player import PlayerState


@dataclass(frozen=True)
class Choice:
    """One button of a prompt."""

    label: str
    value: Any


@dataclass(frozen=True)
class Decision:
    """
    A request put to a human.

    A decision without choices is a notice: it only needs to be acknowledged.
    """

    prompt: str
    choices: Tuple[Choice, ...] = field(default_factory=tuple)

    @property
    def is_notice(self) -> bool:
        return not self.choices

    @property
    def values(self) -> List[Any]:
        return [choice.value for choice in self.choices]


class DecisionGateway(ABC):
    """
    Presents choices to players and hands their answers back to the engine.

    Subclasses implement `choose` and `acknowledge`; this base class enforces
    the one-outstanding-decision contract and validates answers.
    """

    def __init__(self):
        self._pending: Optional[Decision] = None

    @property
    def pending(self) -> Optional[Decision]:
        """The decision currently waiting for an answer, if any."""
        return self._pending

    async def present(self, prompt: str, choices: Sequence[Choice]) -> Any:
        """
        Ask the player to pick one of ``choices``.

        Returns:
            The ``value`` of the chosen Choice
        """
        if not choices:
            raise ValueError("present() needs at least one choice; use notify() for messages")
        decision = Decision(prompt, tuple(choices))
        value = await self._run(decision)
        if value not in decision.values:
            raise InvalidChoiceError(f"{value!r} is not one of {decision.values!r}")
        return value

    async def notify(self, message: str) -> None:
        """Show a message and wait until it is acknowledged."""
        await self._run(Decision(message))

    async def _run(self, decision: Decision) -> Any:
        if self._pending is not None:
            raise DecisionPendingError(
                f"Cannot ask {decision.prompt!r} while {self._pending.prompt!r} is unanswered"
            )
        self._pending = decision
        try:
            if decision.is_notice:
                await self.acknowledge(decision)
                return None
            return await self.choose(decision)
        finally:
            self._pending = None

    @abstractmethod
    async def choose(self, decision: Decision) -> Any:
        """Obtain the player's answer to a decision with choices."""

    @abstractmethod
    async def acknowledge(self, decision: Decision) -> None:
        """Wait until the player has seen a notice."""


class QueuedGateway(DecisionGateway):
    """
    Gateway answered from outside the pipeline.

    The pending decision is exposed through `pending` / `next_decision()` and
    is resumed by calling `resolve()` once. Suitable for event-driven front
    ends where the answer arrives from a button handler.
    """

    def __init__(self):
        super().__init__()
        self._future: Optional[asyncio.Future] = None
        self._arrived = asyncio.Event()

    async def choose(self, decision: Decision) -> Any:
        return await self._wait()

    async def acknowledge(self, decision: Decision) -> None:
        await self._wait()

    async def _wait(self) -> Any:
        self._future = asyncio.get_running_loop().create_future()
        self._arrived.set()
        try:
            return await self._future
        finally:
            self._future = None

    async def next_decision(self) -> Decision:
        """Wait until a decision is pending and return it."""
        await self._arrived.wait()
        assert self._pending is not None
        return self._pending

    def resolve(self, value: Any = None) -> None:
        """
        Answer the pending decision.

        Raises:
            DecisionError: no decision is pending, or it was already answered
            InvalidChoiceError: value is not one of the offered choices
        """
        decision = self._pending
        if decision is None or self._future is None or self._future.done():
            raise DecisionError("No decision is pending")
        if not decision.is_notice and value not in decision.values:
            raise InvalidChoiceError(f"{value!r} is not one of {decision.values!r}")
        self._arrived.clear()
        self._future.set_result(value)


class ScriptedGateway(DecisionGateway):
    """
    Gateway that answers from a fixed script.

    Answers are consumed in order; once the script runs out, ``default`` is
    used, or the first offered choice when no default is given. Every
    decision is recorded in ``history``.
    """

    def __init__(self, answers: Iterable[Any] = (), default: Any = None):
        super().__init__()
        self.answers: Deque[Any] = deque(answers)
        self.default = default
        self.history: List[Decision] = []

    async def choose(self, decision: Decision) -> Any:
        self.history.append(decision)
        if self.answers:
            return self.answers.popleft()
        if self.default is not None:
            return self.default
        return decision.choices[0].value

    async def acknowledge(self, decision: Decision) -> None:
        self.history.append(decision)

    @property
    def prompts(self) -> List[str]:
        """Prompts of decisions with choices, in order."""
        return [d.prompt for d in self.history if not d.is_notice]

    @property
    def notices(self) -> List[str]:
        """Acknowledged messages, in order."""
        return [d.prompt for d in self.history if d.is_notice]


class AgentGateway(DecisionGateway):
    """Gateway that lets an automated agent answer every decision."""

    def __init__(self, agent: "Agent"):
        super().__init__()
        self.agent = agent

    async def choose(self, decision: Decision) -> Any:
        return self.agent.choose(decision)

    async def acknowledge(self, decision: Decision) -> None:
        return None


class BoardRenderer(ABC):
    """
    Display surface driven by the engine.

    All operations are idempotent refreshes; the engine never reads anything back.
    """

    @abstractmethod
    def refresh_positions(self, players: Sequence["PlayerState"]) -> None:
        """Redraw every non-bankrupt player's marker at its position."""

    @abstractmethod
    def refresh_money(self, players: Sequence["PlayerState"]) -> None:
        """Redraw money figures."""

    @abstractmethod
    def mark_owner(self, position: int, player_id: int) -> None:
        """Show a tile as owned by a player."""

    @abstractmethod
    def unmark_owner(self, position: int) -> None:
        """Clear a tile's ownership marking."""

    @abstractmethod
    def highlight(self, player_id: Optional[int], position: Optional[int]) -> None:
        """Highlight the active player and the tile they stand on."""

    @abstractmethod
    def show_message(self, text: str) -> None:
        """Show a transient message that needs no acknowledgement."""


class NullRenderer(BoardRenderer):
    """Renderer for headless play."""

    def refresh_positions(self, players: Sequence["PlayerState"]) -> None:
        pass

    def refresh_money(self, players: Sequence["PlayerState"]) -> None:
        pass

    def mark_owner(self, position: int, player_id: int) -> None:
        pass

    def unmark_owner(self, position: int) -> None:
        pass

    def highlight(self, player_id: Optional[int], position: Optional[int]) -> None:
        pass

    def show_message(self, text: str) -> None:
        pass
