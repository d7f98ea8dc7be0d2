"""
Tests for the static board, tiles, dice and the ownership ledger.
"""

import random
from dataclasses import FrozenInstanceError

import pytest

from shawapoli.board import BOARD_SIZE, Board
from shawapoli.dice import DiceRoll, roll_dice
from shawapoli.ownership import OwnershipLedger
from shawapoli.spaces import PropertySpace, SpaceType


def test_board_layout():
    board = Board()

    assert len(board) == BOARD_SIZE
    assert all(space.position == index for index, space in enumerate(board.spaces))
    assert board.get_space(0).space_type == SpaceType.GO
    assert board.jail_position() == 10
    assert board.get_space(30).space_type == SpaceType.GO_TO_JAIL
    assert board.get_space(20).space_type == SpaceType.FREE_PARKING


def test_board_counts_by_type():
    board = Board()

    assert board.positions_of_type(SpaceType.RAILROAD) == [5, 15, 25, 35]
    assert board.positions_of_type(SpaceType.UTILITY) == [12, 28]
    assert board.positions_of_type(SpaceType.CHANCE) == [7, 22, 36]
    assert board.positions_of_type(SpaceType.COMMUNITY) == [2, 17, 33]
    assert len(board.positions_of_type(SpaceType.PROPERTY)) == 22


def test_color_groups():
    board = Board()

    assert board.get_color_group("brown") == [1, 3]
    assert board.get_color_group("pink") == [11, 13, 14]
    assert board.get_color_group("blue") == [37, 39]
    assert board.get_color_group("purple") == []


def test_find_position_by_name():
    board = Board()

    assert board.find_position("GO") == 0
    assert board.find_position("Boardwalk") == 39
    assert board.find_position("Nowhere") is None


def test_property_data():
    board = Board()
    boardwalk = board.get_property_space(39)

    assert isinstance(boardwalk, PropertySpace)
    assert boardwalk.price == 400
    assert boardwalk.rent == 50
    assert board.get_property_space(5) is None
    assert board.get_space(5).price == 200
    assert board.get_space(12).price == 150
    assert board.get_space(4).amount == 200
    assert board.get_space(38).amount == 100


def test_tiles_are_immutable():
    board = Board()

    with pytest.raises(FrozenInstanceError):
        board.get_space(1).price = 1


def test_purchasable_flags():
    board = Board()

    assert board.get_space(1).is_purchasable
    assert board.get_space(5).is_purchasable
    assert board.get_space(12).is_purchasable
    assert not board.get_space(4).is_purchasable
    assert not board.get_space(7).is_purchasable


def test_roll_dice_range():
    rng = random.Random(3)
    for _ in range(200):
        dice = roll_dice(rng)
        assert 1 <= dice.die1 <= 6
        assert 1 <= dice.die2 <= 6
        assert dice.total == dice.die1 + dice.die2


def test_dice_roll_text():
    assert str(DiceRoll(2, 5)) == "2 + 5 = 7"


def test_ledger_upgrade_requires_ownership():
    ledger = OwnershipLedger()

    with pytest.raises(KeyError):
        ledger.upgrade(11)

    ledger.set_owner(11, 1)
    assert ledger.upgrade(11) == 1
    assert ledger.upgrade(11) == 2
    assert ledger.upgrade_level(11) == 2
    assert ledger.upgrade_level(13) == 0


def test_ledger_release_all_clears_both_maps():
    ledger = OwnershipLedger()
    ledger.set_owner(11, 1)
    ledger.set_owner(13, 1)
    ledger.set_owner(39, 2)
    ledger.upgrade(11)

    released = ledger.release_all(1)

    assert released == [11, 13]
    assert 11 not in ledger.owners and 13 not in ledger.owners
    assert 11 not in ledger.upgrades
    assert ledger.owner_of(39) == 2
