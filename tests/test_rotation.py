import numpy as np
import pytest

from block_puzzle_rules.game.exceptions import MalformedShapeError
from block_puzzle_rules.game.rotation import Shape, rotate, rotate_clockwise_90


L_SHAPE = [[1, 0], [1, 1]]


def test_rotate_clockwise_square():
    assert rotate_clockwise_90(L_SHAPE).tolist() == [[1, 1], [1, 0]]


def test_rotate_clockwise_non_square():
    # 2 rows of 3 become 3 rows of 2
    rotated = rotate_clockwise_90([[1, 0, 0], [1, 1, 1]])
    assert rotated.shape == (3, 2)
    assert rotated.tolist() == [[1, 1], [1, 0], [1, 0]]


def test_rotate_by_degrees():
    t_shape = [[0, 1, 0], [1, 1, 1]]
    assert rotate(t_shape, 90).tolist() == [[1, 0], [1, 1], [1, 0]]
    assert rotate(t_shape, 180).tolist() == [[1, 1, 1], [0, 1, 0]]
    assert rotate(t_shape, 270).tolist() == [[0, 1], [1, 1], [0, 1]]


def test_rotate_zero_returns_equal_copy():
    source = np.array(L_SHAPE)
    result = rotate(source, 0)
    assert result.tolist() == L_SHAPE
    result[0, 1] = 1
    assert source.tolist() == L_SHAPE


@pytest.mark.parametrize("rows", [[[1, 1, 1]], [[1], [1]], [[1]], L_SHAPE])
def test_rotations_are_writable_for_every_shape(rows):
    assert rotate_clockwise_90(rows).flags.writeable
    assert rotate(rows, 90).flags.writeable


@pytest.mark.parametrize("shape", [[[1]], [[1, 1, 1, 1, 1]], [[1, 0], [1, 1], [0, 1]], [[0, 0, 1], [1, 1, 1]]])
def test_four_quarter_turns_round_trip(shape):
    result = shape
    for _ in range(4):
        result = rotate(result, 90)
    assert result.tolist() == shape
    assert rotate(shape, 360).tolist() == rotate(shape, 0).tolist() == shape


def test_rotate_rejects_non_right_angles():
    with pytest.raises(MalformedShapeError):
        rotate(L_SHAPE, 45)


@pytest.mark.parametrize("rows", [[], [[]], [[1, 1], [1]], [[1, 2]], [1, 1]])
def test_shape_rejects_malformed_input(rows):
    with pytest.raises(MalformedShapeError):
        Shape(rows)


def test_shape_is_immutable():
    shape = Shape(L_SHAPE)
    with pytest.raises(ValueError):
        shape.array[0, 0] = 0
    rotated = shape.rotated(90)
    assert shape.to_list() == L_SHAPE
    assert rotated != shape


def test_shape_properties():
    shape = Shape([[0, 1, 0], [1, 1, 1]])
    assert (shape.height, shape.width) == (2, 3)
    assert shape.cell_count == 4
    assert shape.cells() == [(0, 1), (1, 0), (1, 1), (1, 2)]
    assert shape == [[0, 1, 0], [1, 1, 1]]
    assert hash(shape) == hash(Shape(shape.to_list()))
