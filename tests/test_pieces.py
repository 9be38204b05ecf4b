import random

import pytest

from block_puzzle_rules.game.config import GameConfig, RAINBOW_SVG_SEQUENCE, SOLID_GREY, SVG_ID_POOL
from block_puzzle_rules.game.engine import RulesEngine
from block_puzzle_rules.game.exceptions import EmptyCollectionError
from block_puzzle_rules.game.pieces import (
    BASE_SHAPES,
    PieceType,
    all_placed,
    build_catalog,
    generate_rotations,
    random_element,
)
from block_puzzle_rules.game.rotation import Shape


@pytest.fixture
def engine():
    return RulesEngine(GameConfig(random_seed=7))


def test_generate_rotations_metadata():
    result = generate_rotations("L_SHAPE_2X2", Shape([[1, 0], [1, 1]]))
    assert [p.id for p in result] == ["L_SHAPE_2X2_0", "L_SHAPE_2X2_90", "L_SHAPE_2X2_180", "L_SHAPE_2X2_270"]
    assert [p.rotation for p in result] == [0, 90, 180, 270]
    assert [p.rotation_index for p in result] == [0, 1, 2, 3]
    assert result[1].shape == [[1, 1], [1, 0]]
    assert result[2].shape == [[1, 1], [0, 1]]
    assert result[3].shape == [[0, 1], [1, 1]]


def test_catalog_size_and_order():
    catalog = build_catalog()
    assert len(catalog) == len(BASE_SHAPES) * 4
    keys = [(p.shape_name, p.rotation) for p in catalog]
    assert keys == sorted(keys)


def test_catalog_is_deterministic():
    first = build_catalog()
    second = build_catalog()
    assert [(p.id, p.shape) for p in first] == [(p.id, p.shape) for p in second]


def test_engine_caches_catalog(engine):
    assert engine.get_catalog() is engine.get_catalog()
    assert engine.catalog == build_catalog()


def test_sample_normal_piece(engine):
    piece = engine.sample_normal_piece()
    assert piece.type == PieceType.NORMAL
    assert piece.is_placed is False
    assert len(piece.svg_refs) == piece.shape.cell_count
    assert len(set(piece.svg_refs)) == 1
    assert piece.color in SVG_ID_POOL
    assert piece.id in {entry.id for entry in engine.catalog}


def test_runtime_ids_increase(engine):
    ids = [engine.sample_normal_piece().runtime_id for _ in range(5)]
    ids.append(engine.create_bomb_piece().runtime_id)
    ids.append(engine.create_rainbow_piece().runtime_id)
    assert ids == sorted(ids)
    assert len(set(ids)) == len(ids)


def test_engines_do_not_share_ids():
    assert RulesEngine().next_runtime_id() == RulesEngine().next_runtime_id() == 0


def test_seeded_engines_deal_identically():
    a = RulesEngine(GameConfig(random_seed=3)).sample_normal_pieces(6)
    b = RulesEngine(GameConfig(random_seed=3)).sample_normal_pieces(6)
    assert [(p.id, p.svg_refs) for p in a] == [(p.id, p.svg_refs) for p in b]


def test_shuffle_mode_wraps_around_catalog(engine):
    n = len(engine.catalog) + 3
    pieces = engine.sample_normal_pieces(n, shuffle=True)
    assert len(pieces) == n
    ids = [p.id for p in pieces]
    assert sorted(ids[: len(engine.catalog)]) == sorted(p.id for p in engine.catalog)
    assert ids[len(engine.catalog):] == ids[:3]
    assert len({p.runtime_id for p in pieces}) == n


def test_bomb_piece(engine):
    bomb = engine.create_bomb_piece()
    assert bomb.type == PieceType.BOMB
    assert bomb.shape_name == "BOMB"
    assert bomb.shape == [[1]]
    assert bomb.svg_refs == (SOLID_GREY,)


def test_rainbow_piece(engine):
    rainbow = engine.create_rainbow_piece()
    assert rainbow.type == PieceType.RAINBOW
    assert rainbow.shape_name == "RAINBOW"
    assert rainbow.shape == [[1, 1, 1, 1, 1]]
    assert rainbow.svg_refs == RAINBOW_SVG_SEQUENCE


def test_initialize_turn_pieces_probability_extremes(engine):
    all_rainbow = engine.initialize_turn_pieces(3, rainbow_probability=1.0)
    assert [p.type for p in all_rainbow] == [PieceType.RAINBOW] * 3
    none_rainbow = engine.initialize_turn_pieces(3, rainbow_probability=0.0)
    assert all(p.type == PieceType.NORMAL for p in none_rainbow)
    assert not any(p.is_placed for p in none_rainbow)


def test_initialize_turn_pieces_uses_config_count(engine):
    assert len(engine.initialize_turn_pieces()) == engine.config.max_pieces_per_turn


def test_empty_palette_is_fatal():
    engine = RulesEngine(palette=())
    with pytest.raises(EmptyCollectionError):
        engine.sample_normal_piece()


def test_empty_catalog_is_fatal():
    engine = RulesEngine(shapes={})
    with pytest.raises(EmptyCollectionError):
        engine.sample_normal_piece()
    with pytest.raises(EmptyCollectionError):
        engine.sample_normal_pieces(2, shuffle=True)


def test_random_element_empty():
    with pytest.raises(EmptyCollectionError):
        random_element(random.Random(0), [])


def test_all_placed(engine):
    pieces = engine.initialize_turn_pieces(2, rainbow_probability=0.0)
    assert all_placed([]) is True
    assert all_placed(pieces) is False
    assert all_placed([p.placed() for p in pieces]) is True
    assert all_placed([pieces[0].placed(), {"shape": [[1]]}]) is False


def test_placed_does_not_mutate(engine):
    piece = engine.sample_normal_piece()
    placed = piece.placed()
    assert piece.is_placed is False
    assert placed.is_placed is True
    assert placed.runtime_id == piece.runtime_id
