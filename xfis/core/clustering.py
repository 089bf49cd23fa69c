#!/usr/bin/env python
# Created by "Thieu" at 11:50, 03/05/2025 ----------%
#       Email: nguyenthieu2102@gmail.com            %
#       Github: https://github.com/thieu1995        %
# --------------------------------------------------%

import numbers
import numpy as np
from xfis.helpers import validator
from xfis.helpers.errors import InvalidArgumentError, InvalidRadiusError


def check_radii(radii):
    """Validate a scalar radius or one radius per dimension, each in (0, 1]."""
    if isinstance(radii, numbers.Number) and not isinstance(radii, bool):
        values = np.array([radii], dtype=float)
    else:
        values = np.asarray(radii, dtype=float).ravel()
    if values.size == 0 or np.any(~np.isfinite(values)) or np.any(values <= 0) or np.any(values > 1):
        raise InvalidRadiusError(f"Every radius should be in range (0, 1], got {radii}.")
    return float(radii) if isinstance(radii, numbers.Number) else values


class ClusterResult:
    """
    Output of `SubtractiveClustering.fit`.

    Attributes
    ----------
    centers : np.ndarray, shape (n_dims, n_clusters)
        Cluster centers in the original data units, one column per cluster in discovery order.
    sigmas : np.ndarray, shape (n_dims,)
        Gaussian spread per dimension: radius * (max - min) / sqrt(8).
    n_clusters : int
    """

    def __init__(self, centers, sigmas):
        self.centers = centers
        self.sigmas = sigmas
        self.n_clusters = centers.shape[1]

    def __repr__(self):
        return f"ClusterResult(n_clusters={self.n_clusters}, n_dims={self.centers.shape[0]})"


class SubtractiveClustering:
    """
    Subtractive (mountain) clustering of Chiu.

    Every sample gets a potential that grows with the density of its neighbourhood. The sample with the
    highest potential becomes a cluster center, the potential around it is reduced and the search goes
    on until no remaining sample is a good enough candidate.

    Parameters
    ----------
    radii : float or array-like, optional (default=0.5)
        Range of influence of a center in each dimension, relative to the data range. A scalar is used for
        every dimension. Each value must be in (0, 1].
    squash_factor : float, optional (default=1.25)
        Multiplies the radii when reducing potentials around an accepted center.
    accept_ratio : float, optional (default=0.5)
        A candidate whose potential is above ``accept_ratio`` times the first center's potential is accepted.
    reject_ratio : float, optional (default=0.15)
        A candidate whose potential is at or below ``reject_ratio`` times the first center's potential ends the search.
        In between, the candidate is accepted only if it is far enough from the existing centers.
    verbose : bool, optional (default=False)
        Print the progress of the clustering.

    Examples
    --------
    >>> import numpy as np
    >>> from xfis import SubtractiveClustering
    >>> x = [[0.0, 0.1, 0.2, 5.0, 5.1, 5.2], [0.0, 0.1, 0.0, 5.0, 5.1, 5.0]]
    >>> result = SubtractiveClustering(radii=0.5).fit(x)
    >>> result.n_clusters
    2
    """

    def __init__(self, radii=0.5, squash_factor=1.25, accept_ratio=0.5, reject_ratio=0.15, verbose=False):
        self.radii = radii
        self.squash_factor = validator.check_float("squash_factor", squash_factor, (0, float("inf")))
        self.accept_ratio = validator.check_float("accept_ratio", accept_ratio)
        self.reject_ratio = validator.check_float("reject_ratio", reject_ratio)
        self.verbose = verbose

    @property
    def radii(self):
        return self._radii

    @radii.setter
    def radii(self, value):
        self._radii = check_radii(value)

    def _get_radii(self, n_dims):
        if isinstance(self.radii, numbers.Number):
            return np.full(n_dims, float(self.radii))
        if self.radii.size != n_dims:
            raise InvalidArgumentError(f"Expected {n_dims} radii (one per dimension), got {self.radii.size}.")
        return self.radii

    def _log(self, message):
        if self.verbose:
            print(message)

    def fit(self, x):
        """
        Find the cluster centers of the samples ``x``.

        Parameters
        ----------
        x : array-like, shape (n_dims, n_samples)
            One row per dimension (variable), one column per sample. The input is not modified.

        Returns
        -------
        ClusterResult
        """
        data = np.array(x, dtype=float)
        if data.ndim != 2 or data.shape[0] < 1 or data.shape[1] < 1:
            raise InvalidArgumentError(f"x should be a non-empty 2-D array (n_dims, n_samples), got shape {data.shape}.")
        if not np.all(np.isfinite(data)):
            raise InvalidArgumentError("x should contain only finite values.")
        n_dims, n_points = data.shape
        radii = self._get_radii(n_dims)
        accum_multp = 1.0 / radii
        sqsh_multp = 1.0 / (radii * self.squash_factor)

        self._log("Normalizing data...")
        min_x = data.min(axis=1)
        max_x = data.max(axis=1)
        span = max_x - min_x
        # A constant dimension normalizes to 0.
        safe_span = np.where(span > 0, span, 1.0)
        norm = np.clip((data - min_x[:, None]) / safe_span[:, None], 0.0, 1.0)
        norm[span == 0, :] = 0.0

        self._log("Computing the potential of every point...")
        scaled = norm * accum_multp[:, None]
        dist_sq = np.sum((scaled[:, :, None] - scaled[:, None, :]) ** 2, axis=0)
        potentials = np.sum(np.exp(-4.0 * dist_sq), axis=1)

        max_idx = int(np.argmax(potentials))
        max_pot = potentials[max_idx]
        ref_pot = max_pot
        centers = []

        self._log("Finding cluster centers...")
        find_more = 1
        while find_more != 0 and max_pot != 0:
            find_more = 0
            max_point = norm[:, max_idx].copy()
            max_pot_ratio = max_pot / ref_pot
            if max_pot_ratio > self.accept_ratio:
                find_more = 1
            elif max_pot_ratio > self.reject_ratio and len(centers) > 0:
                # Accept only when the balance of potential and distance to the closest center is good enough.
                diffs = (np.array(centers) - max_point) * accum_multp
                min_dist = np.sqrt(np.min(np.sum(diffs ** 2, axis=1)))
                find_more = 1 if max_pot_ratio + min_dist >= 1 else 2

            if find_more == 1:
                centers.append(max_point)
                self._log(f"Found cluster {len(centers)}, potential = {max_pot_ratio:.4f}")
                dx = (max_point[:, None] - norm) * sqsh_multp[:, None]
                deduct = max_pot * np.exp(-4.0 * np.sum(dx ** 2, axis=0))
                potentials = np.maximum(potentials - deduct, 0.0)
            elif find_more == 2:
                potentials[max_idx] = 0.0
            max_idx = int(np.argmax(potentials))
            max_pot = potentials[max_idx]

        self._log("Denormalizing cluster centers...")
        if len(centers) > 0:
            centers = np.array(centers).T * span[:, None] + min_x[:, None]
        else:
            centers = np.zeros((n_dims, 0))
        sigmas = radii * span / np.sqrt(8.0)
        self._log(f"Clustering finished: {centers.shape[1]} cluster(s).")
        return ClusterResult(centers, sigmas)
