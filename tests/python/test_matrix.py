"""
Tests for the shared-storage Matrix handle
"""

import copy

import numpy as np
import pytest

import matchain as mc


def test_new_matrix_is_zero_filled():
    m = mc.Matrix(2, 3, "A")
    assert m.shape == (2, 3)
    assert m.name == "A"
    assert m.dtype == np.float32
    assert np.array_equal(m.to_array(), np.zeros((2, 3)))


def test_default_matrix_is_empty():
    m = mc.Matrix()
    assert m.name == "empty"
    assert m.shape == (0, 0)
    assert m.is_empty()


def test_non_positive_dimensions_give_empty_matrix():
    assert mc.Matrix(0, 5, "Z").shape == (0, 0)
    assert mc.Matrix(-2, 3, "N").is_empty()


def test_element_access():
    m = mc.Matrix(2, 2, "A")
    m[0, 1] = 3.5
    m.set_element(1, 0, -1.0)
    assert m[0, 1] == pytest.approx(3.5)
    assert m.element(1, 0) == pytest.approx(-1.0)


def test_element_out_of_range():
    m = mc.Matrix(2, 2, "A")
    with pytest.raises(IndexError):
        m.element(2, 0)
    with pytest.raises(IndexError):
        m[-1, 0] = 1.0


def test_copy_shares_storage():
    original = mc.Matrix(2, 2, "A")
    shared = copy.copy(original)
    shared[1, 1] = 7.0

    assert original[1, 1] == pytest.approx(7.0)
    assert original.shares_storage_with(shared)


def test_share_renames_every_handle():
    original = mc.Matrix(1, 1, "A")
    handle = original.share()
    handle.set_name("B")
    assert original.name == "B"
    original.name = "C"
    assert handle.name == "C"


def test_from_array_wraps_without_copy():
    data = np.arange(6, dtype=np.float32).reshape(2, 3)
    m = mc.Matrix.from_array(data, "D")
    data[0, 0] = 42.0
    assert m[0, 0] == pytest.approx(42.0)
    assert m.to_array() is data


def test_from_array_rejects_bad_input():
    with pytest.raises(ValueError):
        mc.Matrix.from_array(np.zeros(4), "V")
    with pytest.raises(ValueError):
        mc.Matrix.from_array(np.zeros((2, 2), dtype=np.int32), "I")


def test_operators_start_a_chain():
    a, b, c = mc.Matrix(2, 3, "A"), mc.Matrix(3, 4, "B"), mc.Matrix(4, 1, "C")
    acc = a * b @ c
    assert isinstance(acc, mc.ChainAccumulator)
    assert [m.name for m in acc] == ["A", "B", "C"]


def test_multiplying_by_scalar_is_unsupported():
    with pytest.raises(TypeError):
        mc.Matrix(2, 2, "A") * 3


def test_from_product_closes_the_chain():
    a = mc.Matrix.from_array(np.eye(2, dtype=np.float32), "I")
    b = mc.Matrix.from_array(np.array([[1.0, 2.0], [3.0, 4.0]], dtype=np.float32), "B")
    product = mc.Matrix.from_product(a * b)
    assert product.name == "(I*B)"
    assert np.array_equal(product.to_array(), b.to_array())


def test_from_product_raises_on_mismatch():
    with pytest.raises(mc.DimensionMismatchError):
        mc.Matrix.from_product(mc.Matrix(2, 3, "A") * mc.Matrix(4, 5, "B"))


def test_constructor_rejects_integer_dtype():
    with pytest.raises(ValueError):
        mc.Matrix(2, 2, "I", dtype=np.int32)
    assert mc.Matrix(2, 2, "D", dtype=np.float64).dtype == np.float64


def test_from_array_rejects_integer_target_dtype():
    with pytest.raises(ValueError):
        mc.Matrix.from_array(np.eye(2, dtype=np.float32), "I", dtype=np.int32)


def test_from_array_converts_to_floating_target_dtype():
    m = mc.Matrix.from_array(np.eye(2, dtype=np.int64), "I", dtype=np.float64)
    assert m.dtype == np.float64
    assert m[1, 1] == pytest.approx(1.0)
