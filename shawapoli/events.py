"""
Game event logging.

Every economic event and turn transition is narrated into a bounded
history window and mirrored to the ``shawapoli.events`` logger.
"""

import logging
from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Deque, Dict, List, Optional

logger = logging.getLogger(__name__)


class EventType(Enum):
    """Types of game events."""

    GAME_START = "game_start"
    GAME_RESET = "game_reset"
    TURN_START = "turn_start"
    DICE_ROLL = "dice_roll"
    PASS_GO = "pass_go"

    PURCHASE = "purchase"
    UPGRADE = "upgrade"
    RENT_PAYMENT = "rent_payment"
    TAX_PAYMENT = "tax_payment"
    FREE_PARKING = "free_parking"

    CARD_DRAW = "card_draw"

    GO_TO_JAIL = "go_to_jail"
    JAIL_STAY = "jail_stay"
    JAIL_RELEASE = "jail_release"

    BANKRUPTCY = "bankruptcy"
    GAME_END = "game_end"


@dataclass
class GameEvent:
    """A logged event in the game."""

    event_type: EventType
    message: str
    player_id: Optional[int] = None
    details: Dict[str, Any] = field(default_factory=dict)

    def __repr__(self) -> str:
        player_str = f"P{self.player_id}" if self.player_id is not None else "System"
        return f"[{player_str}] {self.event_type.value}: {self.message}"


class EventLog:
    """Append-only narration capped to the most recent ``max_events`` entries."""

    def __init__(self, max_events: int = 80):
        self.max_events = max_events
        self.events: Deque[GameEvent] = deque(maxlen=max_events)

    def log(
        self,
        event_type: EventType,
        message: str,
        player_id: Optional[int] = None,
        **details: Any,
    ) -> GameEvent:
        """Log a game event."""
        event = GameEvent(event_type, message, player_id, details)
        self.events.append(event)
        logger.info(message)
        return event

    def get_events(self) -> List[GameEvent]:
        """Get all retained events, oldest first."""
        return list(self.events)

    def get_recent_events(self, count: int = 10) -> List[GameEvent]:
        """Get the most recent N events."""
        if count <= 0:
            return []
        return list(self.events)[-count:]

    def messages(self) -> List[str]:
        """Narration text of all retained events, oldest first."""
        return [event.message for event in self.events]

    def clear(self) -> None:
        """Clear the event log."""
        self.events.clear()
