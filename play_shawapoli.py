#!/usr/bin/env python3
"""
Minimal CLI for playing Shawapoli.

Runs a game in the terminal, either with human players answering prompts on
stdin or with simple automated players.
"""

import argparse
import asyncio
import logging
from typing import Optional, Sequence

from shawapoli.agents import GreedyAgent, RandomAgent
from shawapoli.config import get_game_settings
from shawapoli.game import GameState, create_game
from shawapoli.gateway import AgentGateway, BoardRenderer, Decision, DecisionGateway
from shawapoli.player import PlayerState


class ConsoleGateway(DecisionGateway):
    """Asks the humans at the keyboard."""

    async def choose(self, decision: Decision):
        print("\n" + decision.prompt)
        for number, choice in enumerate(decision.choices, start=1):
            print(f"  {number}) {choice.label}")
        while True:
            answer = (await asyncio.to_thread(input, "> ")).strip()
            if answer.isdigit() and 1 <= int(answer) <= len(decision.choices):
                return decision.choices[int(answer) - 1].value
            print(f"Please enter a number between 1 and {len(decision.choices)}.")

    async def acknowledge(self, decision: Decision) -> None:
        print("\n" + decision.prompt)
        await asyncio.to_thread(input, "[Enter] ")


class PrintingGateway(AgentGateway):
    """Agent gateway that echoes every prompt and answer."""

    async def choose(self, decision: Decision):
        value = await super().choose(decision)
        label = next(c.label for c in decision.choices if c.value == value)
        print(f"  ? {decision.prompt.replace(chr(10), ' ')} -> {label}")
        return value

    async def acknowledge(self, decision: Decision) -> None:
        print(f"  ! {decision.prompt.replace(chr(10), ' ')}")


class ConsoleRenderer(BoardRenderer):
    """Prints the few display updates that matter in a terminal."""

    def refresh_positions(self, players: Sequence[PlayerState]) -> None:
        pass

    def refresh_money(self, players: Sequence[PlayerState]) -> None:
        pass

    def mark_owner(self, position: int, player_id: int) -> None:
        pass

    def unmark_owner(self, position: int) -> None:
        pass

    def highlight(self, player_id: Optional[int], position: Optional[int]) -> None:
        pass

    def show_message(self, text: str) -> None:
        print(f"  * {text}")


def print_game_state(game: GameState) -> None:
    """Print current game state."""
    print("\n" + "=" * 60)
    print(f"TURN {game.turn_number}")
    print("=" * 60)

    for player in game.players:
        if player.is_bankrupt:
            status = "BANKRUPT"
        elif player.in_jail:
            status = f"IN JAIL ({player.jail_turns} turns)"
        else:
            status = f"at {game.board.get_space(player.position).name}"

        owned = len(game.ledger.owned_by(player.player_id))
        print(f"{player.name}: ${player.money} | {owned} properties | {status}")
    print(f"Free Parking pot: ${game.free_parking_pot}")


def print_game_summary(game: GameState) -> None:
    """Print final game summary."""
    print("\n" + "=" * 60)
    print("GAME OVER" if game.game_over else "GAME STOPPED")
    print("=" * 60)

    if game.winner is not None:
        winner = game.get_player(game.winner)
        print(f"\nWinner: {winner.name}")
        print(f"Final Money: ${winner.money}")
        print(f"Properties Owned: {len(game.ledger.owned_by(winner.player_id))}")

    print("\nFinal Standings:")
    for player in game.players:
        status = "BANKRUPT" if player.is_bankrupt else f"${game.calculate_net_worth(player)}"
        print(f"  {player.name}: {status}")

    print(f"\nTotal Turns: {game.turn_number}")
    print(f"Total Rolls: {len(game.dice_history)}")


async def play_game(
    num_players: int = 4,
    agent_type: str = "greedy",
    seed: Optional[int] = None,
    verbose: bool = True,
    max_turns: Optional[int] = None,
    step_delay: Optional[float] = None,
    max_rolls: int = 10000,
) -> GameState:
    """
    Play a complete game of Shawapoli.

    Args:
        num_players: Number of players (2-6)
        agent_type: 'human', 'greedy' or 'random'
        seed: Random seed for reproducibility
        verbose: Whether to print detailed output
        max_turns: Maximum number of turns (time limit variant)
        step_delay: Seconds per movement step
        max_rolls: Safety limit for automated play
    """
    config = get_game_settings().to_config()
    if seed is not None:
        config.seed = seed
    if max_turns is not None:
        config.time_limit_turns = max_turns
    if step_delay is not None:
        config.step_delay = step_delay

    if agent_type == "human":
        gateway: DecisionGateway = ConsoleGateway()
    else:
        agent = RandomAgent(seed) if agent_type == "random" else GreedyAgent()
        gateway = PrintingGateway(agent) if verbose else AgentGateway(agent)

    game = create_game(config, num_players, gateway, ConsoleRenderer())

    if verbose:
        print(f"Starting game with {num_players} players ({agent_type})")
        print(f"Seed: {config.seed}")

    await game.start()
    rolls = 0
    while not game.game_over and rolls < max_rolls:
        if verbose:
            print_game_state(game)
        if agent_type == "human":
            command = (
                await asyncio.to_thread(
                    input, f"\n{game.get_current_player().name}: [Enter] roll, 'reset', 'quit' > "
                )
            ).strip().lower()
            if command == "quit":
                break
            if command == "reset":
                await game.request_reset()
                continue
        await game.roll()
        rolls += 1

    if rolls >= max_rolls and not game.game_over:
        print(f"\n!!! SAFETY LIMIT HIT ({max_rolls} rolls) !!!")

    if verbose:
        print_game_summary(game)
    return game


def main():
    """Main entry point for CLI."""
    parser = argparse.ArgumentParser(description="Play a game of Shawapoli")
    parser.add_argument(
        "--players",
        type=int,
        default=4,
        choices=range(2, 7),
        help="Number of players (2-6)",
    )
    parser.add_argument(
        "--agent",
        type=str,
        default="greedy",
        choices=["human", "random", "greedy"],
        help="Who answers the prompts",
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--quiet", action="store_true", help="Reduce output verbosity")
    parser.add_argument(
        "--max-turns",
        type=int,
        default=None,
        help="Maximum number of turns (time limit variant)",
    )
    parser.add_argument("--step-delay", type=float, default=None, help="Seconds per movement step")
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Engine log level (INFO prints the narration; default INFO for humans, WARNING otherwise)",
    )

    args = parser.parse_args()
    log_level = args.log_level or ("INFO" if args.agent == "human" else "WARNING")
    logging.basicConfig(level=log_level, format="%(message)s")

    asyncio.run(
        play_game(
            num_players=args.players,
            agent_type=args.agent,
            seed=args.seed,
            verbose=not args.quiet,
            max_turns=args.max_turns,
            step_delay=args.step_delay,
        )
    )


if __name__ == "__main__":
    main()
