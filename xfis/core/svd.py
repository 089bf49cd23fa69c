#!/usr/bin/env python
# Created by "Thieu" at 10:02, 02/05/2025 ----------%
#       Email: nguyenthieu2102@gmail.com            %
#       Github: https://github.com/thieu1995        %
# --------------------------------------------------%

import math
import numpy as np
from xfis.helpers.errors import NumericDegeneracyError, InvalidArgumentError


def hypotenuse(a, b):
    """
    Compute sqrt(a^2 + b^2) without destructive underflow or overflow.

    The larger magnitude is factored out before squaring, so the intermediate value is at most 2.
    """
    if abs(a) > abs(b):
        r = b / a
        return abs(a) * math.sqrt(1 + r * r)
    elif b != 0:
        r = a / b
        return abs(b) * math.sqrt(1 + r * r)
    return 0.0


class SingularValueDecomposition:
    """
    Golub-Reinsch singular value decomposition of a real m x n matrix: A = U * diag(s) * V^T.

    The algorithm runs in three phases:
        1. Householder reduction of A to upper bidiagonal form. Column reflectors are kept in U,
           row reflectors in V, the diagonal in ``s`` and the super-diagonal in ``e``.
        2. Explicit accumulation of U and V by back-applying the stored reflectors.
        3. Implicit-shift QR sweeps on the bidiagonal form until every super-diagonal element is negligible.

    Matrices with fewer rows than columns are decomposed through their transpose and the roles of
    U and V are swapped afterwards, so the reduction itself always sees m >= n.

    Parameters
    ----------
    a : array-like of shape (m, n)
        The matrix to decompose. It is copied, never modified.
    compute_u : bool, default=True
        Accumulate the left singular vectors.
    compute_v : bool, default=True
        Accumulate the right singular vectors.
    max_iter : int or None, default=None
        Maximum number of QR sweeps. Defaults to ``75 * max(m, n)``.

    Attributes
    ----------
    U : np.ndarray of shape (m, m)
        Left singular vectors (columns), orthogonal.
    s : np.ndarray of shape (min(m, n),)
        Singular values, non-negative and sorted in descending order.
    V : np.ndarray of shape (n, n)
        Right singular vectors (columns), orthogonal.

    Raises
    ------
    NumericDegeneracyError
        If the matrix has non-finite entries or the QR iteration does not converge within ``max_iter`` sweeps.
    """

    EPS = 2.0 ** -52
    TINY = 2.0 ** -966

    def __init__(self, a, compute_u=True, compute_v=True, max_iter=None):
        a = np.array(a, dtype=float)
        if a.ndim != 2 or a.shape[0] < 1 or a.shape[1] < 1:
            raise InvalidArgumentError(f"SVD needs a non-empty 2-D matrix, got shape {a.shape}.")
        if not np.all(np.isfinite(a)):
            raise NumericDegeneracyError("SVD input contains non-finite values.")
        self.n_rows, self.n_cols = a.shape
        self.compute_u = compute_u
        self.compute_v = compute_v
        self.max_iter = 75 * max(a.shape) if max_iter is None else int(max_iter)
        self.transposed = self.n_rows < self.n_cols
        if self.transposed:
            # Left vectors of A^T are the right vectors of A, so both sides are always accumulated.
            U, s, V = self._decompose(a.T.copy(), True, True)
            self.U, self.s, self.V = V, s, U
        else:
            self.U, self.s, self.V = self._decompose(a, compute_u, compute_v)

    def _decompose(self, a, want_u, want_v):
        m, n = a.shape
        s = np.zeros(min(m + 1, n))
        e = np.zeros(n)
        work = np.zeros(m)
        U = np.zeros((m, m))
        V = np.zeros((n, n))

        nct, nrt = self._bidiagonalize(a, s, e, work, U, V, want_u, want_v)

        # Set up the final bidiagonal matrix of order p.
        p = min(n, m + 1)
        if nct < n:
            s[nct] = a[nct, nct]
        if m < p:
            s[p - 1] = 0.0
        if nrt + 1 < p:
            e[nrt] = a[nrt, p - 1]
        e[p - 1] = 0.0

        if want_u:
            self._accumulate_u(U, s, nct)
        if want_v:
            self._accumulate_v(V, e, nrt)
        self._diagonalize(s, e, U, V, p, want_u, want_v)
        return U, s[:min(m, n)].copy(), V

    @staticmethod
    def _bidiagonalize(a, s, e, work, U, V, want_u, want_v):
        """Reduce ``a`` to bidiagonal form in place, storing the diagonal in ``s`` and the super-diagonal in ``e``."""
        m, n = a.shape
        nct = min(m - 1, n)
        nrt = max(0, min(n - 2, m))
        for k in range(max(nct, nrt)):
            if k < nct:
                # Column transformation, the 2-norm of the k-th column goes to s[k].
                s[k] = 0.0
                for i in range(k, m):
                    s[k] = hypotenuse(s[k], a[i, k])
                if s[k] != 0.0:
                    if a[k, k] < 0.0:
                        s[k] = -s[k]
                    a[k:, k] /= s[k]
                    a[k, k] += 1.0
                s[k] = -s[k]

            for j in range(k + 1, n):
                if k < nct and s[k] != 0.0:
                    t = -np.dot(a[k:, k], a[k:, j]) / a[k, k]
                    a[k:, j] += t * a[k:, k]
                # k-th row of A kept in e for the row transformation
                e[j] = a[k, j]

            if want_u and k < nct:
                U[k:, k] = a[k:, k]

            if k < nrt:
                # Row transformation, the 2-norm of the row goes to e[k].
                e[k] = 0.0
                for i in range(k + 1, n):
                    e[k] = hypotenuse(e[k], e[i])
                if e[k] != 0.0:
                    if e[k + 1] < 0.0:
                        e[k] = -e[k]
                    e[k + 1:] /= e[k]
                    e[k + 1] += 1.0
                e[k] = -e[k]
                if k + 1 < m and e[k] != 0.0:
                    work[k + 1:] = 0.0
                    for j in range(k + 1, n):
                        work[k + 1:] += e[j] * a[k + 1:, j]
                    for j in range(k + 1, n):
                        t = -e[j] / e[k + 1]
                        a[k + 1:, j] += t * work[k + 1:]
                if want_v:
                    V[k + 1:, k] = e[k + 1:]
        return nct, nrt

    @staticmethod
    def _accumulate_u(U, s, nct):
        m = U.shape[0]
        for j in range(nct, m):
            U[:, j] = 0.0
            U[j, j] = 1.0
        for k in range(nct - 1, -1, -1):
            if s[k] != 0.0:
                for j in range(k + 1, m):
                    t = -np.dot(U[k:, k], U[k:, j]) / U[k, k]
                    U[k:, j] += t * U[k:, k]
                U[k:, k] = -U[k:, k]
                U[k, k] = 1.0 + U[k, k]
                U[:k, k] = 0.0
            else:
                U[:, k] = 0.0
                U[k, k] = 1.0

    @staticmethod
    def _accumulate_v(V, e, nrt):
        n = V.shape[0]
        for k in range(n - 1, -1, -1):
            if k < nrt and e[k] != 0.0:
                for j in range(k + 1, n):
                    t = -np.dot(V[k + 1:, k], V[k + 1:, j]) / V[k + 1, k]
                    V[k + 1:, j] += t * V[k + 1:, k]
            V[:, k] = 0.0
            V[k, k] = 1.0

    @staticmethod
    def _rotate(M, i, j, cs, sn):
        """Apply a plane rotation to columns i and j of M."""
        t = cs * M[:, i] + sn * M[:, j]
        M[:, j] = -sn * M[:, i] + cs * M[:, j]
        M[:, i] = t

    def _diagonalize(self, s, e, U, V, p, want_u, want_v):
        m = U.shape[0]
        n = V.shape[0]
        pp = p - 1
        eps, tiny = self.EPS, self.TINY
        n_sweeps = 0
        while p > 0:
            # Inspect for negligible elements in s and e. On completion kase and k are:
            #   kase = 1   s[p-1] and e[k-1] are negligible and k < p
            #   kase = 2   s[k-1] is negligible and k < p
            #   kase = 3   e[k-1] is negligible, k < p, and s[k], ..., s[p-1] are not (QR step)
            #   kase = 4   e[p-2] is negligible (convergence)
            k = p - 2
            while k >= 0:
                if abs(e[k]) <= tiny + eps * (abs(s[k]) + abs(s[k + 1])):
                    e[k] = 0.0
                    break
                k -= 1
            if k == p - 2:
                kase = 4
            else:
                ks = p - 1
                while ks > k:
                    t = (abs(e[ks]) if ks != p else 0.0) + (abs(e[ks - 1]) if ks != k + 1 else 0.0)
                    if abs(s[ks]) <= tiny + eps * t:
                        s[ks] = 0.0
                        break
                    ks -= 1
                if ks == k:
                    kase = 3
                elif ks == p - 1:
                    kase = 1
                else:
                    kase = 2
                    k = ks
            k += 1

            if kase == 1:
                # Deflate negligible s[p-1].
                f = e[p - 2]
                e[p - 2] = 0.0
                for j in range(p - 2, k - 1, -1):
                    t = hypotenuse(s[j], f)
                    cs, sn = s[j] / t, f / t
                    s[j] = t
                    if j != k:
                        f = -sn * e[j - 1]
                        e[j - 1] = cs * e[j - 1]
                    if want_v:
                        self._rotate(V, j, p - 1, cs, sn)

            elif kase == 2:
                # Split at negligible s[k-1].
                f = e[k - 1]
                e[k - 1] = 0.0
                for j in range(k, p):
                    t = hypotenuse(s[j], f)
                    cs, sn = s[j] / t, f / t
                    s[j] = t
                    f = -sn * e[j]
                    e[j] = cs * e[j]
                    if want_u:
                        self._rotate(U, j, k - 1, cs, sn)

            elif kase == 3:
                n_sweeps += 1
                if n_sweeps > self.max_iter:
                    raise NumericDegeneracyError(f"SVD did not converge after {self.max_iter} QR sweeps.")
                # Wilkinson shift from the trailing 2x2 block.
                scale = max(abs(s[p - 1]), abs(s[p - 2]), abs(e[p - 2]), abs(s[k]), abs(e[k]))
                sp = s[p - 1] / scale
                spm1 = s[p - 2] / scale
                epm1 = e[p - 2] / scale
                sk = s[k] / scale
                ek = e[k] / scale
                b = ((spm1 + sp) * (spm1 - sp) + epm1 * epm1) / 2.0
                c = (sp * epm1) * (sp * epm1)
                shift = 0.0
                if b != 0.0 or c != 0.0:
                    shift = math.sqrt(b * b + c)
                    if b < 0.0:
                        shift = -shift
                    shift = c / (b + shift)
                f = (sk + sp) * (sk - sp) + shift
                g = sk * ek

                # Chase zeros.
                for j in range(k, p - 1):
                    t = hypotenuse(f, g)
                    cs, sn = f / t, g / t
                    if j != k:
                        e[j - 1] = t
                    f = cs * s[j] + sn * e[j]
                    e[j] = cs * e[j] - sn * s[j]
                    g = sn * s[j + 1]
                    s[j + 1] = cs * s[j + 1]
                    if want_v:
                        self._rotate(V, j, j + 1, cs, sn)
                    t = hypotenuse(f, g)
                    cs, sn = f / t, g / t
                    s[j] = t
                    f = cs * e[j] + sn * s[j + 1]
                    s[j + 1] = -sn * e[j] + cs * s[j + 1]
                    g = sn * e[j + 1]
                    e[j + 1] = cs * e[j + 1]
                    if want_u and j < m - 1:
                        self._rotate(U, j, j + 1, cs, sn)
                e[p - 2] = f

            else:
                # Convergence: make the singular value positive, then bubble it into descending order.
                if s[k] <= 0.0:
                    s[k] = -s[k] if s[k] < 0.0 else 0.0
                    if want_v:
                        V[:, k] = -V[:, k]
                while k < pp:
                    if s[k] >= s[k + 1]:
                        break
                    s[k], s[k + 1] = s[k + 1], s[k]
                    if want_v and k < n - 1:
                        V[:, [k, k + 1]] = V[:, [k + 1, k]]
                    if want_u and k < m - 1:
                        U[:, [k, k + 1]] = U[:, [k + 1, k]]
                    k += 1
                p -= 1

    def singular_values(self):
        return self.s.copy()

    def norm2(self):
        """Two-norm, the largest singular value."""
        return float(self.s[0])

    def condition_number(self):
        """Ratio of the largest to the smallest singular value (inf for a singular matrix)."""
        smallest = self.s[-1]
        if smallest == 0.0:
            return float("inf")
        return float(self.s[0] / smallest)

    def default_tolerance(self):
        return max(self.n_rows, self.n_cols) * self.EPS * (self.s[0] if self.s.size else 0.0)

    def rank(self, tol=None):
        """Effective numerical rank: number of singular values above ``tol``."""
        if tol is None:
            tol = self.default_tolerance()
        return int(np.sum(self.s > tol))
