"""
Main game engine and turn controller.

`GameState` owns every piece of session state (players, ledger, decks, pot,
dice) and drives the turn pipeline:

    begin turn -> jail gate -> roll -> step-by-step move -> resolve landing -> end turn

The pipeline runs as a single asyncio task. It suspends only on the decision
gateway and on the per-step movement delay, so one roll resolves completely,
including cascading card and jail effects, before the next roll is accepted.
"""

import asyncio
import logging
import random
from enum import Enum
from typing import List, Optional

from shawapoli.board import BOARD_SIZE, Board
from shawapoli.cards import create_chance_deck, create_community_deck
from shawapoli.config import GameConfig
from shawapoli.dice import DiceRoll, roll_dice
from shawapoli.events import EventLog, EventType
from shawapoli.gateway import BoardRenderer, Choice, DecisionGateway, NullRenderer
from shawapoli.jail import jail_gate
from shawapoli.landing import resolve_landing, upgrade_cost
from shawapoli.ownership import OwnershipLedger
from shawapoli.player import PlayerState, create_players

logger = logging.getLogger(__name__)


class TurnPhase(Enum):
    """Phases of a turn."""

    WAITING_FOR_ROLL = "waiting_for_roll"
    MOVING = "moving"
    TURN_COMPLETE = "turn_complete"
    GAME_OVER = "game_over"


class GameState:
    """
    Represents the complete state of a Shawapoli game.
    This is the main interface for the game engine.
    """

    def __init__(
        self,
        config: GameConfig,
        num_players: int,
        gateway: DecisionGateway,
        renderer: Optional[BoardRenderer] = None,
        rng: Optional[random.Random] = None,
    ):
        self.config = config
        self.num_players = num_players
        self.board = Board()
        self.gateway = gateway
        self.renderer = renderer if renderer is not None else NullRenderer()
        self.event_log = EventLog(config.log_history_limit)

        # Dice and deck shuffles share one injectable RNG
        self.rng = rng if rng is not None else random.Random(config.seed)

        self.ledger = OwnershipLedger()
        self._initialize()

    def _initialize(self) -> None:
        """(Re)create players, ownership, decks, pot and dice from configuration."""
        self.players: List[PlayerState] = create_players(self.num_players, self.config.starting_money)
        self.ledger.clear()

        self.chance_deck = create_chance_deck(self.rng)
        self.community_deck = create_community_deck(self.rng)
        self.free_parking_pot = 0

        self.current_player_index = 0
        self.turn_number = 0
        self.phase = TurnPhase.WAITING_FOR_ROLL
        self.winner: Optional[int] = None

        self.last_roll: Optional[DiceRoll] = None
        self.dice_history: List[DiceRoll] = []

    # === QUERIES ===

    @property
    def game_over(self) -> bool:
        return self.phase == TurnPhase.GAME_OVER

    def get_current_player(self) -> PlayerState:
        """Get the player whose turn it is."""
        return self.players[self.current_player_index]

    def get_player(self, player_id: int) -> Optional[PlayerState]:
        """Look up a player by id."""
        for player in self.players:
            if player.player_id == player_id:
                return player
        return None

    def get_active_players(self) -> List[PlayerState]:
        """Get all non-bankrupt players."""
        return [p for p in self.players if not p.is_bankrupt]

    def calculate_net_worth(self, player: PlayerState) -> int:
        """Money plus purchase price and upgrade spend of everything the player owns."""
        worth = player.money
        for pos in self.ledger.owned_by(player.player_id):
            price = getattr(self.board.get_space(pos), "price", 0)
            worth += price
            for level in range(self.ledger.upgrade_level(pos)):
                worth += upgrade_cost(price, self.config.upgrade_cost_factor, level)
        return worth

    # === RENDERING ===

    def refresh_money(self) -> None:
        self.renderer.refresh_money(self.players)

    def refresh_all(self) -> None:
        """Push the complete state to the renderer."""
        self.renderer.refresh_positions(self.players)
        self.renderer.refresh_money(self.players)
        for space in self.board.spaces:
            if not space.is_purchasable:
                continue
            owner_id = self.ledger.owner_of(space.position)
            if owner_id is None:
                self.renderer.unmark_owner(space.position)
            else:
                self.renderer.mark_owner(space.position, owner_id)
        self._refresh_highlight()

    def _refresh_highlight(self) -> None:
        current = self.get_current_player()
        if self.game_over or current.is_bankrupt:
            self.renderer.highlight(None, None)
        else:
            self.renderer.highlight(current.player_id, current.position)

    def _reject(self, message: str) -> None:
        logger.debug("Rejected action: %s", message)
        self.renderer.show_message(message)

    # === TURN FLOW ===

    async def start(self) -> None:
        """Announce the game and begin the first turn."""
        self.event_log.log(
            EventType.GAME_START,
            f"Game started with {self.num_players} players.",
            players=self.num_players,
            starting_money=self.config.starting_money,
            seed=self.config.seed,
        )
        self.refresh_all()
        await self.begin_turn()

    async def begin_turn(self) -> None:
        """
        Start the current player's turn.

        Bankrupt players are skipped. A jailed player who stays in jail ends the
        turn straight away and the next player's turn begins. When every
        active player in turn is held in jail without money for the fine,
        nothing can change any more and the game ends by net worth.
        """
        forced_stays = 0
        while not self.game_over:
            if self.get_current_player().is_bankrupt:
                next_index = self._next_active_index()
                if next_index is None:
                    await self.end_game(None)
                    return
                self.current_player_index = next_index

            player = self.get_current_player()
            self.event_log.log(
                EventType.TURN_START,
                f"Player {player.player_id}'s turn.",
                player_id=player.player_id,
                turn=self.turn_number,
            )
            self.refresh_money()
            self._refresh_highlight()

            # No rolling or resetting while the jail gate is undecided.
            self.phase = TurnPhase.TURN_COMPLETE
            skip_roll = await jail_gate(self, player)
            if self.game_over:
                return
            if not skip_roll:
                self.phase = TurnPhase.WAITING_FOR_ROLL
                logger.debug("Waiting for Player %d to roll", player.player_id)
                return

            if player.in_jail and player.money < self.config.jail_fine:
                forced_stays += 1
            else:
                forced_stays = 0
            if forced_stays >= len(self.get_active_players()):
                logger.debug("Every active player is stuck in jail; ending the game")
                await self._end_game_by_net_worth(reason="stalemate")
                return

            if not await self._advance_turn():
                return

    async def roll(self) -> Optional[DiceRoll]:
        """
        Roll for the current player and play out the whole lap.

        Returns:
            The dice rolled, or None if rolling is not allowed right now
        """
        if self.phase != TurnPhase.WAITING_FOR_ROLL:
            self._reject("You cannot roll right now.")
            return None

        player = self.get_current_player()
        if player.is_bankrupt:
            self._reject("This player is bankrupt and cannot play.")
            await self.end_turn()
            return None
        if player.in_jail:
            self._reject("You are in Jail this turn.")
            await self.end_turn()
            return None

        self.phase = TurnPhase.MOVING
        dice = roll_dice(self.rng)
        self.last_roll = dice
        self.dice_history.append(dice)
        self.event_log.log(
            EventType.DICE_ROLL,
            f"Player {player.player_id} rolled {dice}.",
            player_id=player.player_id,
            die1=dice.die1,
            die2=dice.die2,
            total=dice.total,
        )

        await self.move_steps(player, dice.total)
        await resolve_landing(self, player)

        if self.game_over:
            return dice
        self.phase = TurnPhase.TURN_COMPLETE
        await self.end_turn()
        return dice

    async def move_steps(self, player: PlayerState, steps: int) -> None:
        """
        Move a player forward one space at a time.

        Arriving on GO pays the salary, so every lap is paid exactly once
        however far the player travels.
        """
        for _ in range(steps):
            player.position = (player.position + 1) % BOARD_SIZE
            if player.position == 0:
                self.collect_go_salary(player, "passing GO")
            self.renderer.refresh_positions(self.players)
            self._refresh_highlight()
            await asyncio.sleep(self.config.step_delay)

    def collect_go_salary(self, player: PlayerState, reason: str) -> None:
        """Player collects GO salary."""
        salary = self.config.go_salary
        player.money += salary
        self.refresh_money()
        self.event_log.log(
            EventType.PASS_GO,
            f"Player {player.player_id} collected ${salary} for {reason}.",
            player_id=player.player_id,
            amount=salary,
        )

    async def end_turn(self) -> None:
        """End the current player's turn and begin the next player's."""
        if self.game_over:
            return
        if await self._advance_turn():
            await self.begin_turn()

    async def _advance_turn(self) -> bool:
        """Pass the turn to the next non-bankrupt player. Returns False if the game ended."""
        next_index = self._next_active_index()
        if next_index is None:
            await self.end_game(None)
            return False

        self.current_player_index = next_index
        self.turn_number += 1

        if self.config.time_limit_turns and self.turn_number >= self.config.time_limit_turns:
            await self._end_game_by_net_worth(reason="time_limit")
            return False
        return True

    def _next_active_index(self) -> Optional[int]:
        total = len(self.players)
        index = self.current_player_index
        for _ in range(total):
            index = (index + 1) % total
            if not self.players[index].is_bankrupt:
                return index
        return None

    # === BANKRUPTCY AND GAME END ===

    async def check_bankruptcy(self, player: PlayerState) -> bool:
        """
        Settle a player whose money went negative.

        The player is left with exactly 0 money and every position they owned
        returns to the bank. If only one player remains, the game ends at once.

        Returns:
            True if the player went bankrupt
        """
        if player.money >= 0 or player.is_bankrupt:
            return False

        player.money = 0
        player.is_bankrupt = True
        released = self.ledger.release_all(player.player_id)
        for pos in released:
            self.renderer.unmark_owner(pos)
        self.renderer.refresh_positions(self.players)
        self.refresh_money()

        self.event_log.log(
            EventType.BANKRUPTCY,
            f"Player {player.player_id} is bankrupt and out of the game.",
            player_id=player.player_id,
            released=released,
        )
        await self.gateway.notify(f"Player {player.player_id} is bankrupt and out of the game!")

        remaining = self.get_active_players()
        if len(remaining) == 1:
            await self.end_game(remaining[0])
        return True

    async def end_game(self, winner: Optional[PlayerState], reason: Optional[str] = None) -> None:
        """Finish the game. Terminal: nothing can be rolled afterwards."""
        if self.game_over:
            return

        self.phase = TurnPhase.GAME_OVER
        self.winner = winner.player_id if winner is not None else None

        if winner is not None:
            message = f"Game over! Player {winner.player_id} wins with ${winner.money}!"
        else:
            message = "Game over!"
        self.event_log.log(
            EventType.GAME_END,
            message,
            player_id=self.winner,
            reason=reason or ("last_player_standing" if winner is not None else "no_players"),
            turn=self.turn_number,
        )
        self.refresh_all()
        await self.gateway.notify(message)

    async def _end_game_by_net_worth(self, reason: str) -> None:
        """End the game early and determine the winner by net worth."""
        winner: Optional[PlayerState] = None
        max_worth = -1
        for player in self.get_active_players():
            worth = self.calculate_net_worth(player)
            if worth > max_worth:
                max_worth = worth
                winner = player
        await self.end_game(winner, reason=reason)

    # === RESET AND DRIVING ===

    async def reset(self) -> None:
        """Reinitialise the whole session from configuration and begin turn one."""
        self._initialize()
        self.event_log.clear()
        self.event_log.log(EventType.GAME_RESET, "Game reset.")
        self.refresh_all()
        await self.begin_turn()

    async def request_reset(self) -> bool:
        """
        Ask twice for confirmation, then reset.

        Only allowed between turns or after the game is over.

        Returns:
            True if the game was reset
        """
        if self.phase not in (TurnPhase.WAITING_FOR_ROLL, TurnPhase.GAME_OVER):
            self._reject("You cannot reset while a turn is in progress.")
            return False

        first = await self.gateway.present(
            "Reset the board, dice, and money?",
            [Choice("Yes", "yes"), Choice("No", "no")],
        )
        if first != "yes":
            return False

        second = await self.gateway.present(
            "Are you sure you want to Reset ALL progress?!",
            [Choice("Yes, reset", "yes"), Choice("Cancel", "no")],
        )
        if second != "yes":
            return False

        await self.reset()
        return True

    async def run(self, max_rolls: Optional[int] = None) -> Optional[int]:
        """
        Play the game to the end with whatever answers the gateway gives.

        Args:
            max_rolls: Stop after this many rolls even if the game is not over

        Returns:
            Winner's player id, or None
        """
        await self.start()
        rolls = 0
        while not self.game_over and (max_rolls is None or rolls < max_rolls):
            await self.roll()
            rolls += 1
        return self.winner


def create_game(
    config: GameConfig,
    num_players: int,
    gateway: DecisionGateway,
    renderer: Optional[BoardRenderer] = None,
    rng: Optional[random.Random] = None,
) -> GameState:
    """
    Create a new game with the specified configuration and player count.

    Args:
        config: Game configuration
        num_players: Number of players (config.min_players to config.max_players)
        gateway: Where player decisions are obtained
        renderer: Display surface (headless if omitted)
        rng: Random source for dice and shuffles (seeded from config if omitted)

    Returns:
        Initialized GameState
    """
    if not config.min_players <= num_players <= config.max_players:
        raise ValueError(
            f"Game requires {config.min_players}-{config.max_players} players, got {num_players}"
        )

    return GameState(config, num_players, gateway, renderer, rng)
