"""
Tests for the turn pipeline: roll, stepwise movement, landing and turn handover.
"""

import pytest

from shawapoli.config import GameConfig
from shawapoli.game import TurnPhase, create_game
from shawapoli.gateway import ScriptedGateway


def test_create_game_initial_state(basic_game):
    assert len(basic_game.players) == 2
    assert [p.player_id for p in basic_game.players] == [1, 2]
    assert all(p.money == 1500 and p.position == 0 for p in basic_game.players)
    assert basic_game.phase == TurnPhase.WAITING_FOR_ROLL
    assert basic_game.free_parking_pot == 0
    assert basic_game.ledger.owners == {}


@pytest.mark.parametrize("num_players", [1, 7])
def test_create_game_rejects_player_count(num_players):
    with pytest.raises(ValueError):
        create_game(GameConfig(), num_players, ScriptedGateway())


@pytest.mark.asyncio
async def test_two_player_buy_then_rent(make_game):
    """A buys Baltic with 200 money, then B lands on it and pays base rent to A."""
    game = make_game(faces=[1, 2, 2, 1], starting_money=200)
    a, b = game.players
    await game.start()

    dice = await game.roll()

    assert dice.total == 3
    assert a.position == 3
    assert a.money == 140
    assert game.ledger.owner_of(3) == a.player_id
    assert game.get_current_player() is b
    assert game.phase == TurnPhase.WAITING_FOR_ROLL

    await game.roll()

    assert b.position == 3
    assert b.money == 196
    assert a.money == 144
    assert a.money + b.money == 140 + 200
    assert "Player 2 pays $4 rent to Player 1 for Baltic Avenue." in game.gateway.notices
    assert game.get_current_player() is a


@pytest.mark.asyncio
async def test_declined_purchase_leaves_space_unowned(make_game):
    game = make_game(faces=[1, 2], answers=["skip"])
    await game.start()

    await game.roll()

    assert game.ledger.owner_of(3) is None
    assert game.players[0].money == 1500


@pytest.mark.asyncio
async def test_unaffordable_purchase_is_announced(make_game):
    game = make_game(faces=[1, 2], starting_money=50)
    await game.start()

    await game.roll()

    assert game.ledger.owner_of(3) is None
    assert game.gateway.prompts == []
    assert "Player 1 does not have enough to buy Baltic Avenue." in game.gateway.notices


@pytest.mark.asyncio
async def test_passing_go_pays_salary_once_per_lap(make_game):
    game = make_game(faces=[2, 3])
    player = game.players[0]
    player.position = 38
    await game.start()

    await game.roll()

    # 38 -> 3 passes GO once, then buys Baltic.
    assert player.position == 3
    assert player.money == 1500 + 200 - 60
    go_events = [e for e in game.event_log.get_events() if e.event_type.value == "pass_go"]
    assert len(go_events) == 1


@pytest.mark.asyncio
async def test_landing_exactly_on_go_pays_salary(make_game):
    game = make_game(faces=[1, 2])
    player = game.players[0]
    player.position = 37
    await game.start()

    await game.roll()

    assert player.position == 0
    assert player.money == 1700


@pytest.mark.asyncio
async def test_movement_is_stepwise(make_game, renderer):
    game = make_game(faces=[4, 6])
    await game.start()
    renderer.calls.clear()

    await game.roll()

    positions = [call[1][0] for call in renderer.calls if call[0] == "positions"]
    assert positions == list(range(1, 11))


@pytest.mark.asyncio
async def test_go_to_jail_space(make_game):
    game = make_game(faces=[2, 3])
    player = game.players[0]
    player.position = 25
    await game.start()

    await game.roll()

    assert player.in_jail
    assert player.position == 10
    assert player.money == 1500
    assert game.get_current_player().player_id == 2


@pytest.mark.asyncio
async def test_roll_rejected_outside_waiting_phase(basic_game, renderer):
    await basic_game.start()
    basic_game.phase = TurnPhase.MOVING

    assert await basic_game.roll() is None
    assert renderer.messages == ["You cannot roll right now."]
    assert basic_game.dice_history == []
    assert basic_game.players[0].position == 0


@pytest.mark.asyncio
async def test_bankrupt_players_are_skipped(make_game):
    game = make_game(num_players=3, faces=[4, 6])
    game.players[1].is_bankrupt = True
    game.players[1].money = 0
    await game.start()

    await game.roll()

    assert game.get_current_player().player_id == 3
    assert game.turn_number == 1


@pytest.mark.asyncio
async def test_time_limit_ends_game_by_net_worth(make_game):
    game = make_game(faces=[4, 6, 4, 6], time_limit_turns=2)
    game.players[1].money = 1600
    await game.start()

    await game.roll()
    assert not game.game_over

    await game.roll()

    assert game.game_over
    assert game.winner == 2
    assert game.event_log.get_events()[-1].details["reason"] == "time_limit"
    assert await game.roll() is None


def test_net_worth_counts_upgrades(basic_game):
    player = basic_game.players[0]
    basic_game.ledger.set_owner(11, player.player_id)
    basic_game.ledger.upgrade(11)
    basic_game.ledger.upgrade(11)

    # 1500 + 140 + 70 + 140
    assert basic_game.calculate_net_worth(player) == 1850


@pytest.mark.asyncio
async def test_greedy_game_runs_to_completion():
    from shawapoli.agents import GreedyAgent
    from shawapoli.gateway import AgentGateway

    game = create_game(GameConfig(seed=7, time_limit_turns=300), 4, AgentGateway(GreedyAgent()))

    await game.run()

    assert game.game_over
    assert game.winner is not None
    for player in game.players:
        assert player.money >= 0
        if player.is_bankrupt:
            assert player.money == 0
            assert game.ledger.owned_by(player.player_id) == []
    assert len(game.event_log.get_events()) <= game.config.log_history_limit
