"""
The static 40-space Shawapoli board.
"""

from typing import Dict, List, Optional

from shawapoli.spaces import (
    Space,
    SpaceType,
    GoSpace,
    PropertySpace,
    RailroadSpace,
    UtilitySpace,
    TaxSpace,
    ChanceSpace,
    CommunitySpace,
    JailSpace,
    GoToJailSpace,
    FreeParkingSpace,
)

BOARD_SIZE = 40


class Board:
    """The game board with 40 spaces."""

    def __init__(self):
        self.spaces: List[Space] = self._create_standard_board()
        self.color_groups: Dict[str, List[int]] = self._build_color_groups()

    def _create_standard_board(self) -> List[Space]:
        """Create the standard 40-space board."""
        return [
            # Bottom row (0-10)
            GoSpace("GO", 0),
            PropertySpace("Mediterranean Avenue", 1, 60, 2, "brown"),
            CommunitySpace("Community Chest", 2),
            PropertySpace("Baltic Avenue", 3, 60, 4, "brown"),
            TaxSpace("Income Tax", 4, 200),
            RailroadSpace("Reading Railroad", 5),
            PropertySpace("Oriental Avenue", 6, 100, 6, "lightblue"),
            ChanceSpace("Chance", 7),
            PropertySpace("Vermont Avenue", 8, 100, 6, "lightblue"),
            PropertySpace("Connecticut Avenue", 9, 120, 8, "lightblue"),
            JailSpace("Jail / Just Visiting", 10),
            # Left side (11-20)
            PropertySpace("St. Charles Place", 11, 140, 10, "pink"),
            UtilitySpace("Electric Company", 12),
            PropertySpace("States Avenue", 13, 140, 10, "pink"),
            PropertySpace("Virginia Avenue", 14, 160, 12, "pink"),
            RailroadSpace("Pennsylvania Railroad", 15),
            PropertySpace("St. James Place", 16, 180, 14, "orange"),
            CommunitySpace("Community Chest", 17),
            PropertySpace("Tennessee Avenue", 18, 180, 14, "orange"),
            PropertySpace("New York Avenue", 19, 200, 16, "orange"),
            FreeParkingSpace("Free Parking", 20),
            # Top row (21-30)
            PropertySpace("Kentucky Avenue", 21, 220, 18, "red"),
            ChanceSpace("Chance", 22),
            PropertySpace("Indiana Avenue", 23, 220, 18, "red"),
            PropertySpace("Illinois Avenue", 24, 240, 20, "red"),
            RailroadSpace("B. & O. Railroad", 25),
            PropertySpace("Atlantic Avenue", 26, 260, 22, "yellow"),
            PropertySpace("Ventnor Avenue", 27, 260, 22, "yellow"),
            UtilitySpace("Water Works", 28),
            PropertySpace("Marvin Gardens", 29, 280, 24, "yellow"),
            GoToJailSpace("Go To Jail", 30),
            # Right side (31-39)
            PropertySpace("Pacific Avenue", 31, 300, 26, "green"),
            PropertySpace("North Carolina Avenue", 32, 300, 26, "green"),
            CommunitySpace("Community Chest", 33),
            PropertySpace("Pennsylvania Avenue", 34, 320, 28, "green"),
            RailroadSpace("Short Line Railroad", 35),
            ChanceSpace("Chance", 36),
            PropertySpace("Park Place", 37, 350, 35, "blue"),
            TaxSpace("Luxury Tax", 38, 100),
            PropertySpace("Boardwalk", 39, 400, 50, "blue"),
        ]

    def _build_color_groups(self) -> Dict[str, List[int]]:
        """Build a mapping of color groups to property positions."""
        groups: Dict[str, List[int]] = {}
        for space in self.spaces:
            if isinstance(space, PropertySpace):
                groups.setdefault(space.color_group, []).append(space.position)
        return groups

    def __len__(self) -> int:
        return len(self.spaces)

    def get_space(self, position: int) -> Space:
        """Get the space at the given position."""
        return self.spaces[position % BOARD_SIZE]

    def get_property_space(self, position: int) -> Optional[PropertySpace]:
        """Get a property space, or None if not a property."""
        space = self.get_space(position)
        return space if isinstance(space, PropertySpace) else None

    def get_color_group(self, color: str) -> List[int]:
        """Get all property positions in a color group."""
        return self.color_groups.get(color, [])

    def positions_of_type(self, space_type: SpaceType) -> List[int]:
        """Get positions of every space of the given type."""
        return [s.position for s in self.spaces if s.space_type == space_type]

    def find_position(self, name: str) -> Optional[int]:
        """Find the first space with the given name, or None."""
        for space in self.spaces:
            if space.name == name:
                return space.position
        return None

    def jail_position(self) -> Optional[int]:
        """Position of the jail space, or None on a board without one."""
        positions = self.positions_of_type(SpaceType.JAIL)
        return positions[0] if positions else None
