#!/usr/bin/env python
# Created by "Thieu" at 23:58, 03/05/2025 ----------%
#       Email: nguyenthieu2102@gmail.com            %
#       Github: https://github.com/thieu1995        %
# --------------------------------------------------%

import numpy as np
import pytest
from xfis import FuzzyTransform, InvalidArgumentError


def test_partition():
    ft = FuzzyTransform(np.arange(10, dtype=float), n=3)
    assert ft.step == 4
    assert np.array_equal(ft.nodes, [1., 5., 9., 13.])
    assert ft.n_nodes == 4


def test_basis_is_a_partition_of_unity():
    ft = FuzzyTransform(np.random.default_rng(3).normal(size=17), n=4)
    assert np.allclose(ft.basis_matrix().sum(axis=0), 1.0)


def test_constant_series_is_reconstructed():
    ft = FuzzyTransform([2.5] * 12, n=3).run()
    assert np.allclose(ft.time_series_direct, 2.5)
    assert np.allclose(ft.time_series_inverse, 2.5)
    assert np.allclose(ft.time_series_remainder, 0.0)


def test_linear_series_interior_node():
    series = np.arange(10, dtype=float)
    ft = FuzzyTransform(series, n=3)
    direct = ft.direct()
    assert direct[1] == pytest.approx(4.0)
    assert direct[0] == pytest.approx(1.0)
    ft.inverse()
    assert ft.time_series_inverse[4] == pytest.approx(4.0)
    assert np.allclose(ft.time_series_inverse + ft.time_series_remainder, series)


def test_inverse_runs_direct_when_needed():
    ft = FuzzyTransform(np.arange(8, dtype=float), n=2)
    trend = ft.inverse()
    assert ft.time_series_direct is not None
    assert trend.shape == (8,)


def test_short_series():
    ft = FuzzyTransform([1.0, 3.0], n=3).run()
    assert ft.n_nodes == 2
    assert np.all(np.isfinite(ft.time_series_inverse))


def test_invalid_arguments():
    with pytest.raises(InvalidArgumentError):
        FuzzyTransform([1.0])
    with pytest.raises(InvalidArgumentError):
        FuzzyTransform([1.0, 2.0, 3.0], n=0)
