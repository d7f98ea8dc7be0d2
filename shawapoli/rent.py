"""
Rent calculation.

Pure functions: nothing here mutates the ledger, the board or any player.
"""

from typing import Optional

from shawapoli.board import Board
from shawapoli.dice import DiceRoll
from shawapoli.ownership import OwnershipLedger
from shawapoli.spaces import PropertySpace, RailroadSpace, Space, SpaceType, UtilitySpace


def property_rent(
    space: PropertySpace, owner_id: int, position: int, ledger: OwnershipLedger, board: Board
) -> int:
    """
    Rent for a colour-group property.

    Base rent is doubled when the owner holds the whole colour group, and the
    result is multiplied by (1 + upgrade level).
    """
    monopoly_mult = 2 if ledger.owns_color_group(board, owner_id, space.color_group) else 1
    upgrade_mult = 1 + ledger.upgrade_level(position)
    return space.rent * monopoly_mult * upgrade_mult


def railroad_rent(space: RailroadSpace, owner_id: int, ledger: OwnershipLedger, board: Board) -> int:
    """Rent for a railroad: base, 2x, 4x, 8x for 1-4 railroads owned."""
    count = ledger.count_owned_of_type(board, owner_id, SpaceType.RAILROAD)
    if count <= 0:
        return 0
    return space.base_rent * (2 ** (min(count, 4) - 1))


def utility_rent(
    owner_id: int, ledger: OwnershipLedger, board: Board, last_roll: Optional[DiceRoll]
) -> int:
    """Rent for a utility: dice total times 4 with one utility, times 10 with both."""
    if last_roll is None:
        return 0
    count = ledger.count_owned_of_type(board, owner_id, SpaceType.UTILITY)
    if count == 1:
        return last_roll.total * 4
    if count >= 2:
        return last_roll.total * 10
    return 0


def rent_due(
    space: Space,
    owner_id: int,
    position: int,
    ledger: OwnershipLedger,
    last_roll: Optional[DiceRoll],
    board: Board,
) -> int:
    """
    Calculate the rent owed for landing on an owned space.

    Args:
        space: Space landed on
        owner_id: Owning player id
        position: Board position of the space
        ledger: Ownership ledger
        last_roll: Most recent dice roll (needed for utilities)
        board: Board the ledger refers to

    Returns:
        Rent amount, never negative
    """
    if isinstance(space, PropertySpace):
        return property_rent(space, owner_id, position, ledger, board)
    if isinstance(space, RailroadSpace):
        return railroad_rent(space, owner_id, ledger, board)
    if isinstance(space, UtilitySpace):
        return utility_rent(owner_id, ledger, board, last_roll)
    return 0
