"""
Landing resolution: what happens when a move ends on a space.

Each resolver is a coroutine that returns exactly once when the landing (and
anything it cascades into, such as a card that moves the player again) is
complete. Player decisions are awaited on the game's gateway.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Optional

from shawapoli.board import BOARD_SIZE
from shawapoli.cards import Card, CardType, Deck
from shawapoli.events import EventType
from shawapoli.gateway import Choice
from shawapoli.jail import send_to_jail
from shawapoli.rent import rent_due
from shawapoli.spaces import (
    FreeParkingSpace,
    PropertySpace,
    Space,
    SpaceType,
    TaxSpace,
)

if TYPE_CHECKING:
    from shawapoli.game import GameState
    from shawapoli.player import PlayerState

BUY = "buy"
SKIP = "skip"
UPGRADE = "yes"
NO_UPGRADE = "no"

_UPGRADE_LABELS = {1: "1 House", 2: "2 Houses", 3: "3 Houses", 4: "4 Houses", 5: "Hotel"}


def upgrade_cost(price: int, factor: float, level: int) -> int:
    """
    Cost of raising a property from ``level`` to ``level + 1``.

    Rounded half up: round(price * factor * (level + 1)).
    """
    return int(math.floor(price * factor * (level + 1) + 0.5))


def upgrade_label(level: int) -> str:
    """Display name of an upgrade level ("" for none)."""
    return _UPGRADE_LABELS.get(level, "")


async def resolve_landing(game: "GameState", player: "PlayerState") -> None:
    """Resolve the effects of landing on the player's current space."""
    if game.game_over:
        return

    space = game.board.get_space(player.position)
    space_type = space.space_type

    if space_type in (SpaceType.GO, SpaceType.JAIL):
        # Salary was already paid by the move itself.
        return

    if space_type == SpaceType.FREE_PARKING:
        await _resolve_free_parking(game, player, space)

    elif space.is_purchasable:
        await _resolve_purchasable(game, player, space)

    elif space_type == SpaceType.TAX:
        await _resolve_tax(game, player, space)

    elif space_type == SpaceType.CHANCE:
        await draw_card(game, player, game.chance_deck)

    elif space_type == SpaceType.COMMUNITY:
        await draw_card(game, player, game.community_deck)

    elif space_type == SpaceType.GO_TO_JAIL:
        await send_to_jail(game, player)


async def _resolve_free_parking(game: "GameState", player: "PlayerState", space: FreeParkingSpace) -> None:
    if not game.config.use_free_parking_pot or game.free_parking_pot <= 0:
        return

    pot = game.free_parking_pot
    player.money += pot
    game.free_parking_pot = 0
    game.refresh_money()
    game.event_log.log(
        EventType.FREE_PARKING,
        f"Player {player.player_id} collected ${pot} from Free Parking.",
        player_id=player.player_id,
        amount=pot,
    )
    await game.gateway.notify(f"Free Parking bonus!\nPlayer {player.player_id} collects ${pot}.")


async def _resolve_purchasable(game: "GameState", player: "PlayerState", space: Space) -> None:
    position = space.position
    owner_id = game.ledger.owner_of(position)

    if owner_id is None:
        await offer_purchase(game, player, space)
        return

    if owner_id == player.player_id:
        if isinstance(space, PropertySpace):
            await offer_upgrade(game, player, space)
        return

    owner = game.get_player(owner_id)
    rent = rent_due(space, owner_id, position, game.ledger, game.last_roll, game.board)
    if rent <= 0 or owner is None:
        return

    player.money -= rent
    owner.money += rent
    game.refresh_money()
    message = f"Player {player.player_id} pays ${rent} rent to Player {owner_id} for {space.name}."
    game.event_log.log(
        EventType.RENT_PAYMENT,
        message,
        player_id=player.player_id,
        owner=owner_id,
        position=position,
        amount=rent,
    )
    await game.check_bankruptcy(player)
    if game.game_over:
        return
    await game.gateway.notify(message)


async def offer_purchase(game: "GameState", player: "PlayerState", space: Space) -> None:
    """Offer an unowned space to the player who landed on it."""
    price = getattr(space, "price", 0)
    if price <= 0:
        return

    if player.money < price:
        await game.gateway.notify(f"Player {player.player_id} does not have enough to buy {space.name}.")
        return

    choice = await game.gateway.present(
        f"Player {player.player_id}, buy {space.name} for ${price}?",
        [Choice("Buy", BUY), Choice("Skip", SKIP)],
    )
    if choice != BUY:
        return

    player.money -= price
    game.ledger.set_owner(space.position, player.player_id)
    game.refresh_money()
    game.renderer.mark_owner(space.position, player.player_id)
    game.event_log.log(
        EventType.PURCHASE,
        f"Player {player.player_id} bought {space.name} for ${price}.",
        player_id=player.player_id,
        position=space.position,
        price=price,
    )
    await game.check_bankruptcy(player)
    if game.game_over:
        return
    await game.gateway.notify(f"Player {player.player_id} bought {space.name}!")


async def offer_upgrade(game: "GameState", player: "PlayerState", space: PropertySpace) -> None:
    """
    Offer the owner of a property one more upgrade level.

    Skipped silently at the maximum level or when the player cannot afford it.
    """
    position = space.position
    level = game.ledger.upgrade_level(position)
    if level >= game.config.max_upgrade_level or space.price <= 0:
        return

    cost = upgrade_cost(space.price, game.config.upgrade_cost_factor, level)
    if player.money < cost:
        return

    choice = await game.gateway.present(
        f"You own {space.name}.\nUpgrade level: {level} → {level + 1} for ${cost}?",
        [Choice("Upgrade", UPGRADE), Choice("Skip", NO_UPGRADE)],
    )
    if choice != UPGRADE:
        return

    player.money -= cost
    new_level = game.ledger.upgrade(position)
    game.refresh_money()
    game.event_log.log(
        EventType.UPGRADE,
        f"Player {player.player_id} upgraded {space.name} to level {new_level}.",
        player_id=player.player_id,
        position=position,
        level=new_level,
        cost=cost,
    )
    await game.check_bankruptcy(player)
    if game.game_over:
        return
    await game.gateway.notify(f"{space.name} is now level {new_level}.")


async def _resolve_tax(game: "GameState", player: "PlayerState", space: TaxSpace) -> None:
    amount = space.amount
    if amount <= 0:
        return

    player.money -= amount
    if game.config.use_free_parking_pot:
        game.free_parking_pot += amount
    game.refresh_money()
    message = f"Player {player.player_id} paid ${amount} for {space.name}."
    game.event_log.log(
        EventType.TAX_PAYMENT,
        message,
        player_id=player.player_id,
        amount=amount,
        pot=game.free_parking_pot,
    )
    await game.check_bankruptcy(player)
    if game.game_over:
        return
    await game.gateway.notify(message)


async def draw_card(game: "GameState", player: "PlayerState", deck: Deck) -> Optional[Card]:
    """Draw from a deck and apply the card. Returns the card, or None for an empty deck."""
    card = deck.draw()
    if card is None:
        return None
    await apply_card(game, player, card, deck_name=deck.name)
    return card


async def apply_card(
    game: "GameState", player: "PlayerState", card: Card, deck_name: Optional[str] = None
) -> None:
    """Show a card to the player, then carry out its effect."""
    game.event_log.log(
        EventType.CARD_DRAW,
        f"Player {player.player_id} drew card: {card.text}",
        player_id=player.player_id,
        deck=deck_name,
        card=card.card_type.value,
    )
    await game.gateway.notify(card.text)

    if card.card_type == CardType.PAY:
        player.money -= card.amount
        game.refresh_money()
        await game.check_bankruptcy(player)

    elif card.card_type == CardType.RECEIVE:
        player.money += card.amount
        game.refresh_money()

    elif card.card_type == CardType.GO_TO_JAIL:
        await send_to_jail(game, player)

    elif card.card_type == CardType.MOVE_TO:
        target = game.board.find_position(card.target_name) if card.target_name else None
        if target is None:
            return
        if game.board.get_space(target).space_type == SpaceType.GO:
            game.collect_go_salary(player, "advancing to GO")
        player.position = target
        game.renderer.refresh_positions(game.players)
        await resolve_landing(game, player)

    elif card.card_type == CardType.MOVE_STEPS:
        if card.steps < 0:
            # Straight back, no salary even when wrapping past GO.
            player.position = (player.position + card.steps) % BOARD_SIZE
            game.renderer.refresh_positions(game.players)
        else:
            await game.move_steps(player, card.steps)
        await resolve_landing(game, player)
