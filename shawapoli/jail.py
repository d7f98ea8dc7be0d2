"""
Jail rules.

There is no maximum sentence and no doubles escape: at the start of each of
their turns a jailed player either pays the fine and plays normally, or stays
and skips the roll.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from shawapoli.events import EventType
from shawapoli.gateway import Choice

if TYPE_CHECKING:
    from shawapoli.game import GameState
    from shawapoli.player import PlayerState

PAY = "pay"
STAY = "stay"


async def send_to_jail(game: "GameState", player: "PlayerState") -> None:
    """Move a player onto the jail space and lock them in."""
    jail_position = game.board.jail_position()
    if jail_position is None:
        return

    player.position = jail_position
    player.in_jail = True
    player.jail_turns = 0
    game.renderer.refresh_positions(game.players)

    game.event_log.log(
        EventType.GO_TO_JAIL,
        f"Player {player.player_id} was sent to Jail.",
        player_id=player.player_id,
    )
    await game.gateway.notify(f"Player {player.player_id} is sent to Jail!")


async def jail_gate(game: "GameState", player: "PlayerState") -> bool:
    """
    Run the start-of-turn jail check.

    Returns:
        True if the player stays in jail and must skip the roll this turn
    """
    if not player.in_jail:
        return False

    fine = game.config.jail_fine
    if player.money < fine:
        await game.gateway.notify(
            f"Player {player.player_id} is in Jail and cannot afford the fine.\n"
            "They stay in Jail this turn."
        )
        player.jail_turns += 1
        game.event_log.log(
            EventType.JAIL_STAY,
            f"Player {player.player_id} remains in Jail (no money for fine).",
            player_id=player.player_id,
            jail_turns=player.jail_turns,
        )
        return True

    choice = await game.gateway.present(
        f"Player {player.player_id}, you are in Jail.\nPay ${fine} to get out?",
        [Choice("Pay & Get Out", PAY), Choice("Stay This Turn", STAY)],
    )

    if choice == PAY:
        player.money -= fine
        player.in_jail = False
        player.jail_turns = 0
        game.refresh_money()
        game.event_log.log(
            EventType.JAIL_RELEASE,
            f"Player {player.player_id} paid ${fine} to leave Jail.",
            player_id=player.player_id,
            amount=fine,
        )
        await game.check_bankruptcy(player)
        return False

    player.jail_turns += 1
    game.event_log.log(
        EventType.JAIL_STAY,
        f"Player {player.player_id} stayed in Jail this turn.",
        player_id=player.player_id,
        jail_turns=player.jail_turns,
    )
    return True
