"""
Tests for public snapshots and the confirmed reset flow.
"""

import json

import pytest

from shawapoli.game import TurnPhase
from shawapoli.snapshot import serialize_snapshot


@pytest.mark.asyncio
async def test_snapshot_after_purchase(make_game):
    game = make_game(faces=[1, 2])
    await game.start()
    await game.roll()

    snap = serialize_snapshot(game)

    assert snap["phase"] == "waiting_for_roll"
    assert snap["turn_number"] == 1
    assert snap["current_player_id"] == 2
    assert snap["winner_id"] is None
    assert snap["last_roll"] == {"die1": 1, "die2": 2, "total": 3}
    assert snap["rolls"] == 1

    first = snap["players"][0]
    assert first["money"] == 1440
    assert first["position_name"] == "Baltic Avenue"
    assert first["properties"] == [
        {
            "position": 3,
            "name": "Baltic Avenue",
            "type": "property",
            "level": 0,
            "level_label": "",
            "color_group": "brown",
        }
    ]
    assert snap["decks"]["chance"] == {"cards_remaining": 6, "discard_count": 0}
    json.dumps(snap)


def test_snapshot_hides_deck_order(basic_game):
    snap = serialize_snapshot(basic_game)

    assert set(snap["decks"]["community"]) == {"cards_remaining", "discard_count"}
    assert snap["last_roll"] is None


@pytest.mark.asyncio
async def test_reset_after_two_confirmations(make_game):
    game = make_game(faces=[1, 2], answers=["buy", "yes", "yes"])
    await game.start()
    await game.roll()
    game.free_parking_pot = 100

    assert await game.request_reset() is True

    assert game.gateway.prompts[-2:] == [
        "Reset the board, dice, and money?",
        "Are you sure you want to Reset ALL progress?!",
    ]
    assert game.ledger.owners == {}
    assert all(p.money == 1500 and p.position == 0 for p in game.players)
    assert game.free_parking_pot == 0
    assert game.turn_number == 0
    assert game.dice_history == []
    assert game.phase == TurnPhase.WAITING_FOR_ROLL
    assert game.get_current_player().player_id == 1
    assert game.event_log.messages()[:2] == ["Game reset.", "Player 1's turn."]


@pytest.mark.asyncio
async def test_reset_cancelled_at_second_prompt(make_game):
    game = make_game(faces=[1, 2], answers=["buy", "yes", "no"])
    await game.start()
    await game.roll()

    assert await game.request_reset() is False
    assert game.ledger.owner_of(3) == 1


@pytest.mark.asyncio
async def test_reset_declined_at_first_prompt(basic_game):
    basic_game.gateway.answers.append("no")
    await basic_game.start()

    assert await basic_game.request_reset() is False
    assert basic_game.gateway.prompts == ["Reset the board, dice, and money?"]


@pytest.mark.asyncio
async def test_reset_refused_mid_turn(basic_game, renderer):
    await basic_game.start()
    basic_game.phase = TurnPhase.MOVING

    assert await basic_game.request_reset() is False
    assert basic_game.gateway.history == []
    assert renderer.messages == ["You cannot reset while a turn is in progress."]


@pytest.mark.asyncio
async def test_reset_allowed_after_game_over(basic_game):
    basic_game.gateway.answers.extend(["yes", "yes"])
    await basic_game.start()
    await basic_game.end_game(basic_game.players[0])

    assert await basic_game.request_reset() is True
    assert not basic_game.game_over
    assert basic_game.winner is None
