"""
Player state and management.
"""

from typing import List


class PlayerState:
    """Represents the complete state of a player in the game."""

    def __init__(self, player_id: int, starting_money: int):
        self.player_id = player_id
        self.position = 0
        self.money = starting_money
        self.is_bankrupt = False
        self.in_jail = False
        self.jail_turns = 0
        # Tracked for compatibility; no rule grants or spends these.
        self.jail_free_cards = 0

    @property
    def name(self) -> str:
        return f"Player {self.player_id}"

    def __repr__(self) -> str:
        return (
            f"PlayerState(id={self.player_id}, money={self.money}, "
            f"position={self.position}, bankrupt={self.is_bankrupt})"
        )


def create_players(num_players: int, starting_money: int) -> List[PlayerState]:
    """Create players with ids 1..num_players, all on GO."""
    return [PlayerState(player_id, starting_money) for player_id in range(1, num_players + 1)]
