"""
Public snapshot serialization of GameState.

Produces a sanitized, UI-friendly view of the current game without
exposing hidden information (e.g., deck order).
"""

from __future__ import annotations

from typing import Any, Dict, List

from shawapoli.game import GameState
from shawapoli.landing import upgrade_label
from shawapoli.spaces import PropertySpace


def serialize_snapshot(game: GameState) -> Dict[str, Any]:
    """Serialize a GameState into a public, stable JSON dict.

    The snapshot includes:
    - phase, turn_number, current_player_id and winner
    - players with public info (money, position, jail, owned tiles with upgrade level)
    - free parking pot and last dice roll
    - deck counts (remaining / discard) only
    """
    players: List[Dict[str, Any]] = []
    for pstate in game.players:
        props: List[Dict[str, Any]] = []
        for pos in game.ledger.owned_by(pstate.player_id):
            space = game.board.get_space(pos)
            level = game.ledger.upgrade_level(pos)
            entry: Dict[str, Any] = {
                "position": pos,
                "name": space.name,
                "type": space.space_type.value,
                "level": level,
                "level_label": upgrade_label(level),
            }
            if isinstance(space, PropertySpace):
                entry["color_group"] = space.color_group
            props.append(entry)

        players.append(
            {
                "player_id": pstate.player_id,
                "name": pstate.name,
                "money": pstate.money,
                "position": pstate.position,
                "position_name": game.board.get_space(pstate.position).name,
                "in_jail": pstate.in_jail,
                "jail_turns": pstate.jail_turns,
                "jail_free_cards": pstate.jail_free_cards,
                "is_bankrupt": pstate.is_bankrupt,
                "properties": props,
            }
        )

    last_roll = None
    if game.last_roll is not None:
        last_roll = {
            "die1": game.last_roll.die1,
            "die2": game.last_roll.die2,
            "total": game.last_roll.total,
        }

    return {
        "phase": game.phase.value,
        "turn_number": game.turn_number,
        "current_player_id": game.get_current_player().player_id,
        "winner_id": game.winner,
        "players": players,
        "free_parking_pot": game.free_parking_pot,
        "last_roll": last_roll,
        "rolls": len(game.dice_history),
        "decks": {
            "chance": {
                "cards_remaining": len(game.chance_deck.cards),
                "discard_count": len(game.chance_deck.discard_pile),
            },
            "community": {
                "cards_remaining": len(game.community_deck.cards),
                "discard_count": len(game.community_deck.discard_pile),
            },
        },
    }
