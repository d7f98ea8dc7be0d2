"""
Board space definitions and types.
"""

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar


class SpaceType(Enum):
    """Types of spaces on the board."""

    GO = "go"
    PROPERTY = "property"
    RAILROAD = "railroad"
    UTILITY = "utility"
    TAX = "tax"
    CHANCE = "chance"
    COMMUNITY = "community"
    JAIL = "jail"
    FREE_PARKING = "freeparking"
    GO_TO_JAIL = "gotojail"


PURCHASABLE_TYPES = (SpaceType.PROPERTY, SpaceType.RAILROAD, SpaceType.UTILITY)


@dataclass(frozen=True)
class Space:
    """Base class for a board space. Spaces never change after the board is built."""

    name: str
    position: int

    space_type: ClassVar[SpaceType]

    @property
    def is_purchasable(self) -> bool:
        return self.space_type in PURCHASABLE_TYPES

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name='{self.name}', position={self.position})"


@dataclass(frozen=True, repr=False)
class GoSpace(Space):
    """The GO space."""

    space_type: ClassVar[SpaceType] = SpaceType.GO


@dataclass(frozen=True, repr=False)
class PropertySpace(Space):
    """A colour-group property that can be owned and upgraded."""

    price: int
    rent: int
    color_group: str

    space_type: ClassVar[SpaceType] = SpaceType.PROPERTY


@dataclass(frozen=True, repr=False)
class RailroadSpace(Space):
    """A railroad space."""

    price: int = 200
    base_rent: int = 25

    space_type: ClassVar[SpaceType] = SpaceType.RAILROAD


@dataclass(frozen=True, repr=False)
class UtilitySpace(Space):
    """A utility space (Electric Company or Water Works)."""

    price: int = 150

    space_type: ClassVar[SpaceType] = SpaceType.UTILITY


@dataclass(frozen=True, repr=False)
class TaxSpace(Space):
    """A tax space (Income Tax or Luxury Tax)."""

    amount: int = 0

    space_type: ClassVar[SpaceType] = SpaceType.TAX


@dataclass(frozen=True, repr=False)
class ChanceSpace(Space):
    """A Chance card space."""

    space_type: ClassVar[SpaceType] = SpaceType.CHANCE


@dataclass(frozen=True, repr=False)
class CommunitySpace(Space):
    """A Community Chest card space."""

    space_type: ClassVar[SpaceType] = SpaceType.COMMUNITY


@dataclass(frozen=True, repr=False)
class JailSpace(Space):
    """The Jail/Just Visiting space."""

    space_type: ClassVar[SpaceType] = SpaceType.JAIL


@dataclass(frozen=True, repr=False)
class FreeParkingSpace(Space):
    """The Free Parking space."""

    space_type: ClassVar[SpaceType] = SpaceType.FREE_PARKING


@dataclass(frozen=True, repr=False)
class GoToJailSpace(Space):
    """The Go To Jail space."""

    space_type: ClassVar[SpaceType] = SpaceType.GO_TO_JAIL
