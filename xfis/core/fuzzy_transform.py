#!/usr/bin/env python
# Created by "Thieu" at 17:25, 03/05/2025 ----------%
#       Email: nguyenthieu2102@gmail.com            %
#       Github: https://github.com/thieu1995        %
# --------------------------------------------------%

import numpy as np
from xfis.helpers import validator
from xfis.helpers.errors import InvalidArgumentError


class FuzzyTransform:
    """
    F-transform of a time series (Perfilieva).

    Positions ``1..len(time_series)`` are covered by a uniform fuzzy partition of triangular basis
    functions. The direct transform averages the series under every basis function, the inverse
    transform blends these components back into a smooth trend, and the remainder is what the
    trend does not explain.

    Parameters
    ----------
    time_series : array-like
        Values of the series, at least two of them.
    n : int, optional (default=3)
        Number of samples per partition step: the partition starts with ``len(time_series) // n`` nodes
        (at least 2) and is extended until it covers the last position.

    Attributes
    ----------
    nodes : np.ndarray
        Positions of the partition nodes.
    step : int
        Distance between two nodes.
    time_series_direct : np.ndarray or None
        Components ``F_1..F_k`` after `direct`.
    time_series_inverse : np.ndarray or None
        Trend after `inverse`.
    time_series_remainder : np.ndarray or None
        ``time_series - time_series_inverse`` after `inverse`.

    Examples
    --------
    >>> from xfis import FuzzyTransform
    >>> ft = FuzzyTransform([5.0] * 9, n=3).run()
    >>> [float(v) for v in ft.time_series_inverse[:3]]
    [5.0, 5.0, 5.0]
    """

    def __init__(self, time_series, n=3):
        self.time_series = np.array(time_series, dtype=float).ravel()
        self.n = validator.check_int("n", n, [1, float("inf")])
        self.time_series_direct = None
        self.time_series_inverse = None
        self.time_series_remainder = None
        self._split(1, self.time_series.size)

    def _split(self, left, right):
        if left >= right:
            raise InvalidArgumentError(f"Left boundary of the partition ({left}) should be lower than the right one ({right}).")
        self.left, self.right = left, right
        n_nodes = max(self.time_series.size // self.n, 2)
        self.step = (right - left) // (n_nodes - 1)
        while right > left + self.step * (n_nodes - 1):
            n_nodes += 1
        self.nodes = left + self.step * np.arange(n_nodes, dtype=float)

    @property
    def n_nodes(self):
        return self.nodes.size

    def basis(self, idx, position):
        """Degree of the 0-based series ``position`` in the basis function of node ``idx``."""
        x = position + 1.0
        A, step, last = self.nodes, float(self.step), self.n_nodes - 1
        if idx == 0:
            if A[0] <= x < A[1]:
                return 1.0 - (x - A[0]) / step
        elif idx == last:
            if A[idx - 1] <= x <= A[idx]:
                return (x - A[idx - 1]) / step
        else:
            if A[idx] <= x < A[idx + 1]:
                return 1.0 - (x - A[idx]) / step
            if A[idx - 1] <= x < A[idx]:
                return (x - A[idx - 1]) / step
        return 0.0

    def basis_matrix(self):
        """Basis degrees, shape (n_nodes, len(time_series))."""
        return np.array([[self.basis(idx, pos) for pos in range(self.time_series.size)]
                         for idx in range(self.n_nodes)])

    def direct(self):
        """Components ``F_i = sum(ts * A_i) / sum(A_i)``; a node with no support gives NaN."""
        weights = self.basis_matrix()
        with np.errstate(divide="ignore", invalid="ignore"):
            self.time_series_direct = (weights @ self.time_series) / weights.sum(axis=1)
        return self.time_series_direct

    def inverse(self):
        """Trend ``t(x) = sum(F_i * A_i(x))`` and remainder ``ts - t``; runs `direct` first if needed."""
        if self.time_series_direct is None:
            self.direct()
        self.time_series_inverse = self.basis_matrix().T @ self.time_series_direct
        self.time_series_remainder = self.time_series - self.time_series_inverse
        return self.time_series_inverse

    def run(self):
        self.direct()
        self.inverse()
        return self
