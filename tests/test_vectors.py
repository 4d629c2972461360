# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

import math

import numpy as np
import pytest

from microla import config
from microla.exceptions import (
    DivisionByZeroError,
    EmptyInputError,
    ShapeMismatchError,
)
from microla.vectors import (
    Vector,
    vec_add,
    vec_ar_mean,
    vec_cross,
    vec_dist,
    vec_dot,
    vec_from_arr,
    vec_get_subset,
    vec_init,
    vec_is_equal,
    vec_is_nonneg,
    vec_magn,
    vec_mean,
    vec_neg,
    vec_norm,
    vec_rev,
    vec_scalar_add,
    vec_scalar_div,
    vec_scalar_mult,
    vec_sub,
    vec_sum,
    vec_sum_of_sqrs,
    vec_to_unit,
)

TEST_ITERATIONS = 50


def test_vector_borrows_buffer():
    buf = np.zeros(8, dtype=config.REAL)
    v = Vector(3, buf)
    v[1] = 4.0
    vec_scalar_add(v, 1.0)
    np.testing.assert_array_equal(buf, [1.0, 5.0, 1.0, 0, 0, 0, 0, 0])
    assert len(v) == 3
    assert list(v) == [1.0, 5.0, 1.0]


def test_vector_length_exceeds_capacity():
    with pytest.raises(ShapeMismatchError):
        Vector(4, np.zeros(3, dtype=config.REAL))


def test_vector_borrows_strided_buffer():
    buf = np.zeros(6, dtype=config.REAL)
    v = Vector(3, buf[::2])
    vec_from_arr(v, [1.0, 2.0, 3.0])
    vec_neg(v)
    np.testing.assert_array_equal(buf, [-1.0, 0.0, -2.0, 0.0, -3.0, 0.0])


def test_vector_rejects_buffer_it_would_copy():
    other = np.float32 if config.REAL is np.float64 else np.float64
    buf = np.ones(3, dtype=other)
    with pytest.raises(TypeError):
        Vector(3, buf)
    np.testing.assert_array_equal(buf, [1.0, 1.0, 1.0])


def test_init_and_from_arr():
    v = Vector(3, [9.0, 9.0, 9.0, 9.0])
    vec_init(v)
    np.testing.assert_array_equal(v.data, [0.0, 0.0, 0.0, 9.0])

    # copy count is the vector's length, not the source's
    vec_from_arr(v, [1.0, 2.0, 3.0, 4.0, 5.0])
    np.testing.assert_array_equal(v.data, [1.0, 2.0, 3.0, 9.0])

    with pytest.raises(ShapeMismatchError):
        vec_from_arr(v, [1.0, 2.0])


def test_add_commutes_and_sub_round_trips():
    rng = np.random.default_rng(0)
    for _ in range(TEST_ITERATIONS):
        n = int(rng.integers(1, 10))
        v = Vector.from_values(rng.normal(size=n))
        w = Vector.from_values(rng.normal(size=n))
        vw = vec_add(v, w, Vector.zeros(n))
        wv = vec_add(w, v, Vector.zeros(n))
        assert vec_is_equal(vw, wv)

        back = vec_sub(vw, w, Vector.zeros(n))
        assert vec_is_equal(back, v, eps=1e-12)


def test_add_sub_reject_mismatched_lengths():
    v = Vector.from_values([1.0, 2.0])
    w = Vector.from_values([1.0, 2.0, 3.0])
    with pytest.raises(ShapeMismatchError):
        vec_add(v, w, Vector.zeros(2))
    with pytest.raises(ShapeMismatchError):
        vec_sub(v, v, Vector.zeros(3))


def test_add_in_place_alias():
    v = Vector.from_values([1.0, 2.0, 3.0])
    vec_add(v, v, v)
    np.testing.assert_array_equal(v.values, [2.0, 4.0, 6.0])


def test_neg_and_scalar_ops():
    v = Vector.from_values([1.0, -2.0, 3.0])
    vec_neg(v)
    np.testing.assert_array_equal(v.values, [-1.0, 2.0, -3.0])
    vec_scalar_mult(v, 2.0)
    np.testing.assert_array_equal(v.values, [-2.0, 4.0, -6.0])
    vec_scalar_div(v, 4.0)
    np.testing.assert_array_equal(v.values, [-0.5, 1.0, -1.5])
    vec_scalar_add(v, 0.5)
    np.testing.assert_array_equal(v.values, [0.0, 1.5, -1.0])


def test_scalar_div_by_zero():
    v = Vector.from_values([1.0, 2.0])
    with pytest.raises(DivisionByZeroError):
        vec_scalar_div(v, 0.0)
    with pytest.raises(ZeroDivisionError):
        vec_scalar_div(v, 0)
    np.testing.assert_array_equal(v.values, [1.0, 2.0])


def test_sum():
    vs = [Vector.from_values([1.0, 2.0]), Vector.from_values([3.0, 4.0])]
    w = Vector(2, [100.0, 100.0, 100.0])  # stale contents are discarded
    vec_sum(vs, w)
    assert w.sz == 2
    np.testing.assert_array_equal(w.values, [4.0, 6.0])


def test_sum_rejects_empty_and_mismatched():
    with pytest.raises(EmptyInputError):
        vec_sum([], Vector.zeros(2))
    with pytest.raises(ShapeMismatchError):
        vec_sum(
            [Vector.from_values([1.0, 2.0]), Vector.from_values([1.0])],
            Vector.zeros(2),
        )
    with pytest.raises(ShapeMismatchError):
        vec_sum([Vector.from_values([1.0, 2.0])], Vector.zeros(1))


def test_norm_concrete():
    v = Vector.from_values([3.0, 4.0])
    assert vec_norm(v) == 5.0
    assert vec_magn(v) == 5.0


def test_dot_norm_sum_of_squares_agree():
    rng = np.random.default_rng(1)
    for _ in range(TEST_ITERATIONS):
        v = Vector.from_values(rng.normal(size=int(rng.integers(1, 10))))
        d = vec_dot(v, v)
        assert math.isclose(d, vec_sum_of_sqrs(v))
        assert math.isclose(d, vec_norm(v) ** 2, rel_tol=1e-12)


def test_dot_mismatch():
    with pytest.raises(ShapeMismatchError):
        vec_dot(Vector.zeros(2), Vector.zeros(3))


def test_dist():
    v = Vector.from_values([1.0, 1.0])
    w = Vector.from_values([4.0, 5.0])
    assert vec_dist(v, w) == 5.0
    assert math.isnan(vec_dist(v, Vector.zeros(3)))


def test_to_unit():
    rng = np.random.default_rng(2)
    for _ in range(TEST_ITERATIONS):
        v = Vector.from_values(rng.normal(size=int(rng.integers(1, 10))))
        vec_to_unit(v)
        assert math.isclose(vec_norm(v), 1.0, rel_tol=1e-12)


def test_to_unit_zero_vector_fallback():
    v = Vector.zeros(3)
    vec_to_unit(v)
    np.testing.assert_array_equal(v.values, [1.0, 0.0, 0.0])


def test_cross_concrete():
    e1 = Vector.from_values([1.0, 0.0, 0.0])
    e2 = Vector.from_values([0.0, 1.0, 0.0])
    c = vec_cross(e1, e2, Vector.zeros(3))
    np.testing.assert_array_equal(c.values, [0.0, 0.0, 1.0])

    c = vec_cross(
        Vector.from_values([2.0, -1.0, 3.0]),
        Vector.from_values([0.0, 4.0, -2.0]),
        Vector.zeros(3),
    )
    np.testing.assert_array_equal(c.values, [-10.0, 4.0, 8.0])


def test_cross_anti_commutative():
    rng = np.random.default_rng(3)
    for _ in range(TEST_ITERATIONS):
        v = Vector.from_values(rng.normal(size=3))
        w = Vector.from_values(rng.normal(size=3))
        vw = vec_cross(v, w, Vector.zeros(3))
        wv = vec_cross(w, v, Vector.zeros(3))
        vec_neg(wv)
        assert vec_is_equal(vw, wv, eps=1e-12)


def test_cross_rejects_non_3_vectors():
    with pytest.raises(ShapeMismatchError):
        vec_cross(Vector.zeros(2), Vector.zeros(3), Vector.zeros(3))
    with pytest.raises(ShapeMismatchError):
        vec_cross(Vector.zeros(4), Vector.zeros(4), Vector.zeros(4))


def test_cross_output_may_alias_input():
    v = Vector.from_values([1.0, 0.0, 0.0])
    w = Vector.from_values([0.0, 1.0, 0.0])
    vec_cross(v, w, v)
    np.testing.assert_array_equal(v.values, [0.0, 0.0, 1.0])


def test_mean_uses_real_division():
    vs = [
        Vector.from_values([1.0, 2.0]),
        Vector.from_values([2.0, 3.0]),
        Vector.from_values([3.0, 5.0]),
    ]
    m = vec_mean(vs, Vector.zeros(2))
    np.testing.assert_allclose(m.values, [2.0, 10.0 / 3.0])


def test_mean_single_precision(monkeypatch):
    monkeypatch.setattr(config, "REAL", np.float32)
    vs = [Vector.from_values([1.0]), Vector.from_values([2.0]), Vector.from_values([4.0])]
    m = vec_mean(vs, Vector.zeros(1))
    assert m.data.dtype == np.float32
    np.testing.assert_array_equal(
        m.values, np.array([7.0], dtype=np.float32) / np.float32(3.0)
    )


def test_mean_rejects_bad_output_and_empty():
    with pytest.raises(ShapeMismatchError):
        vec_mean([Vector.zeros(2)], Vector.zeros(3))
    with pytest.raises(EmptyInputError):
        vec_mean([], Vector.zeros(3))


def test_ar_mean():
    assert vec_ar_mean(Vector.from_values([1.0, 2.0, 3.0, 4.0])) == 2.5
    with pytest.raises(EmptyInputError):
        vec_ar_mean(Vector.zeros(0))


@pytest.mark.parametrize(
    "values",
    [[], [1.0], [1.0, 2.0], [1.0, 2.0, 3.0], [1.0, 2.0, 3.0, 4.0]],
)
def test_rev(values):
    v = Vector.from_values(values)
    vec_rev(v)
    np.testing.assert_array_equal(v.values, values[::-1])


def test_rev_only_touches_logical_length():
    v = Vector(3, [1.0, 2.0, 3.0, 4.0])
    vec_rev(v)
    np.testing.assert_array_equal(v.data, [3.0, 2.0, 1.0, 4.0])


def test_equality_and_nonneg():
    v = Vector.from_values([1.0, 2.0])
    assert vec_is_equal(v, Vector.from_values([1.0, 2.0]))
    assert not vec_is_equal(v, Vector.from_values([1.0, 2.0, 0.0]))
    assert not vec_is_equal(v, Vector.from_values([1.0, 2.1]))
    assert vec_is_equal(v, Vector.from_values([1.0, 2.1]), eps=0.2)
    assert v == Vector.from_values([1.0, 2.0])

    assert vec_is_nonneg(Vector.from_values([0.0, 3.0]))
    assert not vec_is_nonneg(Vector.from_values([0.0, -3.0]))


def test_get_subset():
    v = Vector.from_values([1.0, 2.0, 3.0, 4.0, 5.0])
    sub = Vector.zeros(2)
    vec_get_subset(v, 1, 2, sub)
    np.testing.assert_array_equal(sub.values, [2.0, 3.0])


def test_get_subset_truncates_and_clamps():
    v = Vector.from_values([1.0, 2.0, 3.0, 4.0, 5.0])
    sub = Vector.zeros(5)
    vec_get_subset(v, 4, 10, sub)
    assert sub.sz == 1
    np.testing.assert_array_equal(sub.values, [5.0])

    sub = Vector.zeros(5)
    vec_get_subset(v, 2, 10, sub)
    assert sub.sz == 3
    np.testing.assert_array_equal(sub.values, [3.0, 4.0, 5.0])


def test_get_subset_rejects_bad_offset_and_small_destination():
    v = Vector.from_values([1.0, 2.0, 3.0, 4.0, 5.0])
    with pytest.raises(ShapeMismatchError):
        vec_get_subset(v, 5, 1, Vector.zeros(5))
    with pytest.raises(ShapeMismatchError):
        vec_get_subset(v, 0, 4, Vector.zeros(2))

    sub = Vector.zeros(3)
    with pytest.raises(ShapeMismatchError):
        vec_get_subset(v, 0, -1, sub)
    assert sub.sz == 3


def test_get_subset_without_bounds_checks(monkeypatch):
    monkeypatch.setattr(config, "BOUNDS_CHECKS", False)
    v = Vector.from_values([1.0, 2.0, 3.0, 4.0, 5.0])
    sub = Vector.zeros(4)
    vec_get_subset(v, 1, 2, sub)
    assert sub.sz == 2
    np.testing.assert_array_equal(sub.values, [2.0, 3.0])
