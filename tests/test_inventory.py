from block_puzzle_rules.game.config import ITEM_BOMB, SOLID_BLUE, SOLID_RED
from block_puzzle_rules.game.engine import RulesEngine
from block_puzzle_rules.game.inventory import (
    NOT_AVAILABLE,
    add_item,
    has_item,
    is_red_piece,
    item_count,
    remove_item,
)


def test_add_item_to_empty_inventory():
    assert add_item({}, ITEM_BOMB, 1) == {ITEM_BOMB: 1}


def test_add_item_increments_without_mutating():
    inventory = {ITEM_BOMB: 1}
    result = add_item(inventory, ITEM_BOMB, 3)
    assert result == {ITEM_BOMB: 4}
    assert inventory == {ITEM_BOMB: 1}
    assert result is not inventory


def test_remove_item_unavailable():
    assert remove_item({}, ITEM_BOMB) is NOT_AVAILABLE
    assert remove_item({ITEM_BOMB: 0}, ITEM_BOMB) is NOT_AVAILABLE
    assert not NOT_AVAILABLE


def test_remove_item_keeps_zero_count():
    inventory = {ITEM_BOMB: 1}
    assert remove_item(inventory, ITEM_BOMB) == {ITEM_BOMB: 0}
    assert inventory == {ITEM_BOMB: 1}


def test_has_item():
    assert has_item({ITEM_BOMB: 2}, ITEM_BOMB)
    assert not has_item({ITEM_BOMB: 0}, ITEM_BOMB)
    assert not has_item({}, ITEM_BOMB)
    assert item_count({}, ITEM_BOMB) == 0


def test_is_red_piece():
    assert is_red_piece({"shape": [[1]], "svg_refs": [SOLID_RED]})
    assert is_red_piece({"shape": [[1, 1]], "svg_refs": [SOLID_BLUE, SOLID_RED]})
    assert not is_red_piece({"shape": [[1]], "svg_refs": [SOLID_BLUE]})
    assert not is_red_piece({"shape": [[1]]})
    assert not is_red_piece({"shape": [[1]], "svg_refs": []})
    engine = RulesEngine()
    assert not is_red_piece(engine.create_rainbow_piece())
    assert not is_red_piece(engine.create_bomb_piece())
