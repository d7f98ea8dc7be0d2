"""
Ownership ledger: who owns which board position and at what upgrade level.
"""

from typing import Dict, List, Optional

from shawapoli.board import Board
from shawapoli.spaces import SpaceType


class OwnershipLedger:
    """
    Tracks purchased positions and their upgrade levels.

    A position appears in ``owners`` iff it has been purchased. Upgrade levels
    are only stored for owned positions; anything else reads as level 0.
    """

    def __init__(self):
        self.owners: Dict[int, int] = {}
        self.upgrades: Dict[int, int] = {}

    def owner_of(self, position: int) -> Optional[int]:
        """Get the owning player id, or None if unowned."""
        return self.owners.get(position)

    def is_owned(self, position: int) -> bool:
        return position in self.owners

    def set_owner(self, position: int, player_id: int) -> None:
        """Record a purchase."""
        self.owners[position] = player_id

    def upgrade_level(self, position: int) -> int:
        """Get the upgrade level of a position (0 when never upgraded)."""
        if position not in self.owners:
            return 0
        return self.upgrades.get(position, 0)

    def upgrade(self, position: int) -> int:
        """Raise the upgrade level of an owned position by one and return it."""
        if position not in self.owners:
            raise KeyError(f"Position {position} is not owned")
        level = self.upgrade_level(position) + 1
        self.upgrades[position] = level
        return level

    def owned_by(self, player_id: int) -> List[int]:
        """Get all positions owned by a player, in board order."""
        return sorted(pos for pos, owner in self.owners.items() if owner == player_id)

    def count_owned_of_type(self, board: Board, player_id: int, space_type: SpaceType) -> int:
        """Count how many spaces of a type a player owns."""
        return sum(
            1 for pos in board.positions_of_type(space_type) if self.owners.get(pos) == player_id
        )

    def owns_color_group(self, board: Board, player_id: int, color_group: Optional[str]) -> bool:
        """Check if a player owns every property in a color group."""
        if not color_group:
            return False
        group_positions = board.get_color_group(color_group)
        if not group_positions:
            return False
        return all(self.owners.get(pos) == player_id for pos in group_positions)

    def release_all(self, player_id: int) -> List[int]:
        """
        Remove every position owned by a player from both maps.

        Returns:
            The released positions
        """
        released = self.owned_by(player_id)
        for pos in released:
            del self.owners[pos]
            self.upgrades.pop(pos, None)
        return released

    def clear(self) -> None:
        """Forget all ownership (used on reset)."""
        self.owners.clear()
        self.upgrades.clear()
