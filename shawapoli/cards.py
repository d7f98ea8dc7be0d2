"""
Chance and Community Chest card system.
"""

import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

logger = logging.getLogger(__name__)


class CardType(Enum):
    """Types of card effects."""

    PAY = "pay"
    RECEIVE = "receive"
    MOVE_TO = "move_to"
    MOVE_STEPS = "move_steps"
    GO_TO_JAIL = "go_to_jail"


@dataclass(frozen=True)
class Card:
    """Represents a Chance or Community Chest card."""

    text: str
    card_type: CardType
    amount: int = 0
    target_name: Optional[str] = None
    steps: int = 0

    def __repr__(self) -> str:
        return f"Card('{self.text}')"


class Deck:
    """
    A deck of cards with a draw pile and a discard pile.

    The deck is shuffled once when created. Drawn cards go straight to the
    discard pile; once the draw pile runs out the discard pile becomes the
    new draw pile in the order the cards were discarded.
    """

    def __init__(self, name: str, cards: List[Card], rng: random.Random):
        self.name = name
        self.cards = cards.copy()
        self.rng = rng
        self.discard_pile: List[Card] = []
        self.shuffle()

    def shuffle(self) -> None:
        """Shuffle the draw pile."""
        self.rng.shuffle(self.cards)

    def draw(self) -> Optional[Card]:
        """
        Draw the top card.

        Returns None only when both the draw pile and the discard pile are empty.
        """
        if not self.cards:
            if not self.discard_pile:
                return None
            logger.debug("Recycling %d discarded %s cards", len(self.discard_pile), self.name)
            self.cards = self.discard_pile
            self.discard_pile = []

        card = self.cards.pop(0)
        self.discard_pile.append(card)
        return card

    def all_cards(self) -> List[Card]:
        """Every card of the deck, draw pile first."""
        return self.cards + self.discard_pile

    def __len__(self) -> int:
        return len(self.cards) + len(self.discard_pile)


def create_chance_deck(rng: random.Random) -> Deck:
    """Create the standard Chance deck."""
    cards = [
        Card("Advance to GO. Collect salary.", CardType.MOVE_TO, target_name="GO"),
        Card("Pay 50 in school fees.", CardType.PAY, amount=50),
        Card("Bank error in your favor. Collect 100.", CardType.RECEIVE, amount=100),
        Card("Go back 3 spaces.", CardType.MOVE_STEPS, steps=-3),
        Card("Go directly to Jail. Do not pass GO.", CardType.GO_TO_JAIL),
        Card("You won a small lottery. Collect 150.", CardType.RECEIVE, amount=150),
    ]
    return Deck("chance", cards, rng)


def create_community_deck(rng: random.Random) -> Deck:
    """Create the standard Community Chest deck."""
    cards = [
        Card("You received 50 as a gift.", CardType.RECEIVE, amount=50),
        Card("Doctor's fee. Pay 50.", CardType.PAY, amount=50),
        Card("Inheritance. Collect 100.", CardType.RECEIVE, amount=100),
        Card("Advance to GO. Collect salary.", CardType.MOVE_TO, target_name="GO"),
        Card("Pay 100 for services.", CardType.PAY, amount=100),
        Card("Go directly to Jail.", CardType.GO_TO_JAIL),
    ]
    return Deck("community", cards, rng)
