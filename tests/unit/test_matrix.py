import math

import numpy as np
import pytest

from matnet.core.errors import InvalidArgumentError, ShapeMismatchError
from matnet.core.matrix import Matrix


def _random(rows, cols, seed):
    return Matrix(rows, cols, rng=np.random.default_rng(seed))


def test_explicit_values_are_row_major():
    m = Matrix(2, 3, [1, 2, 3, 4, 5, 6])
    assert m.shape == (2, 3)
    assert m.values == [1.0, 2.0, 3.0, 4.0, 5.0, 6.0]
    assert m.get(0, 2) == 3.0
    assert m.get(1, 0) == 4.0


def test_random_initialisation_is_seedable_and_bounded():
    a = _random(4, 5, seed=3)
    b = _random(4, 5, seed=3)
    assert a.values == b.values
    assert len(a.values) == 20
    assert all(-1.0 <= v < 1.0 for v in a.values)
    assert _random(4, 5, seed=4).values != a.values


@pytest.mark.parametrize("rows, cols", [(0, 2), (2, 0), (-1, 3)])
def test_non_positive_dimensions_are_rejected(rows, cols):
    with pytest.raises(InvalidArgumentError):
        Matrix(rows, cols, [])


def test_value_count_must_match_shape():
    with pytest.raises(InvalidArgumentError):
        Matrix(2, 2, [1.0, 2.0, 3.0])


@pytest.mark.parametrize("row, col", [(2, 0), (0, 3), (-1, 0), (0, -1)])
def test_get_out_of_range_raises_index_error(row, col):
    m = Matrix(2, 3, range(6))
    with pytest.raises(IndexError):
        m.get(row, col)


def test_clone_and_to_numpy_do_not_share_storage():
    m = Matrix(2, 2, [1, 2, 3, 4])
    clone = m.clone()
    assert clone == m and clone is not m
    array = m.to_numpy()
    array[0, 0] = 99.0
    assert m.get(0, 0) == 1.0
    source = np.array([[1.0, 2.0]])
    copied = Matrix.from_array(source)
    source[0, 0] = -5.0
    assert copied.values == [1.0, 2.0]


def test_dot_product_values_and_shape():
    a = Matrix.from_rows([[1, 2], [3, 4]])
    b = Matrix.from_rows([[5], [6]])
    result = a.dot(b)
    assert result.shape == (2, 1)
    assert result.values == [17.0, 39.0]


@pytest.mark.parametrize("r, k, c", [(1, 1, 1), (3, 2, 4), (5, 7, 2)])
def test_dot_shape_rule(r, k, c):
    result = _random(r, k, 0).dot(_random(k, c, 1))
    assert result.rows == r
    assert result.cols == c


def test_dot_inner_dimension_mismatch():
    with pytest.raises(ShapeMismatchError):
        _random(2, 3, 0).dot(_random(2, 3, 1))
    # ShapeMismatchError is also a ValueError for callers using builtins
    with pytest.raises(ValueError):
        _random(1, 2, 0).dot(_random(3, 1, 1))


def test_transpose():
    m = Matrix(2, 3, [1, 2, 3, 4, 5, 6])
    t = m.transpose()
    assert t.shape == (3, 2)
    assert t.values == [1.0, 4.0, 2.0, 5.0, 3.0, 6.0]
    for i in range(3):
        for j in range(2):
            assert t.get(i, j) == m.get(j, i)


@pytest.mark.parametrize("shape", [(1, 1), (2, 5), (4, 3)])
def test_double_transpose_is_identity(shape):
    m = _random(*shape, seed=11)
    assert m.transpose().transpose() == m


def test_map_scalar_and_vectorized():
    m = Matrix(1, 3, [-1.0, 0.0, 2.0])
    assert m.map(lambda x: x * 2).values == [-2.0, 0.0, 4.0]
    assert m.map(lambda x: x if x > 0 else 0.0).values == [0.0, 0.0, 2.0]
    assert np.allclose(m.map(math.sin).values, np.sin([-1.0, 0.0, 2.0]))
    assert m.map(np.abs, vectorized=True).values == [1.0, 0.0, 2.0]
    assert m.values == [-1.0, 0.0, 2.0]


def test_add_is_commutative_for_equal_shapes():
    a = _random(3, 4, 1)
    b = _random(3, 4, 2)
    assert a.add(b).values == b.add(a).values


def test_bias_row_broadcast():
    batch = Matrix.from_rows([[1, 2], [3, 4], [5, 6]])
    bias = Matrix(1, 2, [10, 20])
    result = batch.add(bias)
    assert result.shape == (3, 2)
    for i in range(3):
        assert [result.get(i, 0), result.get(i, 1)] == [
            batch.get(i, 0) + 10,
            batch.get(i, 1) + 20,
        ]


def test_scalar_broadcast_from_both_sides():
    m = Matrix.from_rows([[1, 2], [3, 4]])
    scalar = Matrix(1, 1, [2.0])
    assert m.mult(scalar).values == [2.0, 4.0, 6.0, 8.0]
    assert scalar.sub(m).values == [1.0, 0.0, -1.0, -2.0]
    assert m.mult(0.5).values == [0.5, 1.0, 1.5, 2.0]


def test_arithmetic_operations():
    a = Matrix(1, 3, [6, 8, 9])
    b = Matrix(1, 3, [2, 4, 3])
    assert a.add(b).values == [8.0, 12.0, 12.0]
    assert a.sub(b).values == [4.0, 4.0, 6.0]
    assert a.mult(b).values == [12.0, 32.0, 27.0]
    assert a.div(b).values == [3.0, 2.0, 3.0]
    assert a.values == [6.0, 8.0, 9.0]


def test_division_by_zero_follows_ieee():
    result = Matrix(1, 3, [1.0, -1.0, 0.0]).div(0.0)
    assert result.values[0] == math.inf
    assert result.values[1] == -math.inf
    assert math.isnan(result.values[2])


def test_custom_broadcast_operator():
    a = Matrix(2, 1, [1, 2])
    b = Matrix(1, 3, [10, 20, 30])
    result = a.broadcast(b, lambda x, y: max(x, y) - min(x, y))
    assert result.shape == (2, 3)
    assert result.values == [9.0, 19.0, 29.0, 8.0, 18.0, 28.0]


def test_incompatible_broadcast_is_rejected_by_default():
    a = Matrix(3, 1, [1, 2, 3])
    b = Matrix(2, 1, [10, 20])
    with pytest.raises(ShapeMismatchError):
        a.add(b)


def test_non_strict_broadcast_wraps_rows():
    a = Matrix(3, 1, [1, 2, 3])
    b = Matrix(2, 1, [10, 20])
    wrapped = a.add(b, strict=False)
    assert wrapped.shape == (3, 1)
    assert wrapped.values == [11.0, 22.0, 13.0]


def test_reductions():
    m = Matrix.from_rows([[1, 2], [3, 4], [5, 6]])
    assert m.sum() == 21.0
    assert m.sum_rows().shape == (1, 2)
    assert m.sum_rows().values == [9.0, 12.0]


def test_operands_of_non_matrix_type_are_rejected():
    with pytest.raises(TypeError):
        Matrix(1, 1, [1.0]).add("2")
