#!/usr/bin/env python
# Created by "Thieu" at 21:30, 03/05/2025 ----------%
#       Email: nguyenthieu2102@gmail.com            %
#       Github: https://github.com/thieu1995        %
# --------------------------------------------------%

import numpy as np
import pytest
from xfis import SubtractiveClustering, InvalidRadiusError, InvalidArgumentError


@pytest.fixture
def two_groups():
    return np.array([[0.0, 0.1, 0.2, 5.0, 5.1, 5.2],
                     [0.0, 0.1, 0.0, 5.0, 5.1, 5.0]])


def test_finds_separated_groups(two_groups):
    result = SubtractiveClustering(radii=0.5).fit(two_groups)
    assert result.n_clusters == 2
    assert result.centers.shape == (2, 2)
    # one center per group, in original units
    firsts = sorted(result.centers[0])
    assert firsts[0] < 1.0 < 4.0 < firsts[1]


def test_centers_are_data_points_and_sigmas(two_groups):
    result = SubtractiveClustering(radii=0.5).fit(two_groups)
    points = {tuple(np.round(col, 10)) for col in two_groups.T}
    for col in result.centers.T:
        assert tuple(np.round(col, 10)) in points
    span = two_groups.max(axis=1) - two_groups.min(axis=1)
    assert np.allclose(result.sigmas, 0.5 * span / np.sqrt(8.0))


def test_deterministic_and_input_unchanged(two_groups):
    copied = two_groups.copy()
    first = SubtractiveClustering(radii=0.4).fit(two_groups)
    second = SubtractiveClustering(radii=0.4).fit(two_groups)
    assert np.array_equal(first.centers, second.centers)
    assert np.array_equal(two_groups, copied)


def test_identical_points_give_one_cluster():
    data = np.full((2, 5), 3.0)
    result = SubtractiveClustering(radii=0.5).fit(data)
    assert result.n_clusters == 1
    assert np.allclose(result.centers[:, 0], [3.0, 3.0])
    assert np.allclose(result.sigmas, 0.0)


def test_single_sample():
    result = SubtractiveClustering().fit([[1.0], [2.0]])
    assert result.n_clusters == 1
    assert np.allclose(result.centers[:, 0], [1.0, 2.0])


def test_radii_per_dimension(two_groups):
    result = SubtractiveClustering(radii=[0.5, 0.3]).fit(two_groups)
    assert result.n_clusters >= 2
    span = two_groups.max(axis=1) - two_groups.min(axis=1)
    assert np.allclose(result.sigmas, np.array([0.5, 0.3]) * span / np.sqrt(8.0))
    with pytest.raises(InvalidArgumentError):
        SubtractiveClustering(radii=[0.5, 0.3, 0.2]).fit(two_groups)


@pytest.mark.parametrize("radii", [0, -0.1, 1.5, [0.5, 0.0], float("nan")])
def test_invalid_radii(radii):
    with pytest.raises(InvalidRadiusError):
        SubtractiveClustering(radii=radii)


def test_invalid_data():
    with pytest.raises(InvalidArgumentError):
        SubtractiveClustering().fit([1.0, 2.0, 3.0])
    with pytest.raises(InvalidArgumentError):
        SubtractiveClustering().fit([[1.0, np.nan], [0.0, 1.0]])


def test_verbose_prints(two_groups, capsys):
    SubtractiveClustering(radii=0.5, verbose=True).fit(two_groups)
    out = capsys.readouterr().out
    assert "Found cluster 1" in out
    assert "Clustering finished: 2 cluster(s)." in out
