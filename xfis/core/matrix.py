#!/usr/bin/env python
# Created by "Thieu" at 11:26, 02/05/2025 ----------%
#       Email: nguyenthieu2102@gmail.com            %
#       Github: https://github.com/thieu1995        %
# --------------------------------------------------%

import numbers
import numpy as np
from xfis.core.svd import SingularValueDecomposition
from xfis.helpers.errors import InvalidArgumentError, DimensionMismatchError, NotSquareError


class SVDResult:
    """
    Result of a singular value decomposition: A = U * S * V^T.

    Attributes
    ----------
    U : Matrix
        Left singular vectors, shape (N, N).
    S : Matrix
        Diagonal matrix of singular values, shape (N, M), non-negative and descending.
    V : Matrix
        Right singular vectors, shape (M, M).
    """

    def __init__(self, U, S, V):
        self.U = U
        self.S = S
        self.V = V

    def original(self):
        """Rebuild the decomposed matrix as U * S * V^T."""
        return self.U * self.S * self.V.transposing()

    def __iter__(self):
        return iter((self.U, self.S, self.V))


class Matrix:
    """
    Dense 2-D matrix of float64 values.

    The matrix can be created with explicit dimensions (zero-filled), from 2-D data, or as a
    diagonal matrix (see `Matrix.diagonal`). Operators and the named arithmetic methods return
    new matrices; only the trailing-underscore methods (`multiply_`, `add_`) mutate the receiver.

    Parameters
    ----------
    rows : int or array-like
        Number of rows, or 2-D data to copy.
    cols : int, optional
        Number of columns. Defaults to ``rows`` (square matrix) when ``rows`` is an int.

    Examples
    --------
    >>> A = Matrix([[1, 2], [3, 4]])
    >>> A.determinant()
    -2.0
    >>> (A * A.inverse()).allclose(Matrix.identity(2))
    True
    """

    def __init__(self, rows, cols=None):
        if isinstance(rows, numbers.Integral) and not isinstance(rows, bool):
            cols = rows if cols is None else cols
            if not isinstance(cols, numbers.Integral) or rows < 1 or cols < 1:
                raise InvalidArgumentError(f"Matrix dimensions must be positive integers, got ({rows}, {cols}).")
            self._data = np.zeros((int(rows), int(cols)), dtype=float)
        else:
            data = rows._data if isinstance(rows, Matrix) else rows
            data = np.array(data, dtype=float)
            if data.ndim != 2 or data.shape[0] < 1 or data.shape[1] < 1:
                raise InvalidArgumentError(f"Matrix data must be a non-empty 2-D array, got shape {data.shape}.")
            self._data = data

    @classmethod
    def diagonal(cls, values):
        """Square matrix with ``values`` on the main diagonal."""
        values = np.asarray(values, dtype=float).ravel()
        if values.size < 1:
            raise InvalidArgumentError("A diagonal matrix needs at least one value.")
        return cls(np.diag(values))

    @classmethod
    def identity(cls, n):
        return cls.diagonal(np.ones(n))

    @classmethod
    def column(cls, values):
        """Column vector (n x 1) from a 1-D sequence."""
        return cls(np.asarray(values, dtype=float).reshape(-1, 1))

    @property
    def n_rows(self):
        return self._data.shape[0]

    @property
    def n_cols(self):
        return self._data.shape[1]

    @property
    def shape(self):
        return self._data.shape

    @property
    def T(self):
        return self.transposing()

    def __getitem__(self, key):
        if isinstance(key, tuple):
            return float(self._data[key])
        # A single index addresses the main diagonal.
        return float(self._data[key, key])

    def __setitem__(self, key, value):
        if isinstance(key, tuple):
            self._data[key] = value
        else:
            self._data[key, key] = value

    def to_numpy(self):
        return self._data.copy()

    def copy(self):
        return Matrix(self._data.copy())

    def diag(self):
        return np.diag(self._data).copy()

    def is_square(self):
        return self.n_rows == self.n_cols

    def is_finite(self):
        return bool(np.all(np.isfinite(self._data)))

    def allclose(self, other, rtol=1e-8, atol=1e-10):
        other = other._data if isinstance(other, Matrix) else np.asarray(other, dtype=float)
        return self.shape == other.shape and bool(np.allclose(self._data, other, rtol=rtol, atol=atol))

    ## Element-wise and matrix arithmetic

    def _check_same_shape(self, other, op_name):
        if self.shape != other.shape:
            raise DimensionMismatchError(f"Cannot {op_name} matrices of shapes {self.shape} and {other.shape}.")

    def __add__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        self._check_same_shape(other, "add")
        return Matrix(self._data + other._data)

    def __sub__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        self._check_same_shape(other, "subtract")
        return Matrix(self._data - other._data)

    def __neg__(self):
        return Matrix(-self._data)

    def __mul__(self, other):
        if isinstance(other, Matrix):
            return self.matmul(other)
        if isinstance(other, numbers.Number):
            return self.multiply(other)
        return NotImplemented

    def __rmul__(self, other):
        if isinstance(other, numbers.Number):
            return self.multiply(other)
        return NotImplemented

    def __matmul__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.matmul(other)

    def __truediv__(self, other):
        if isinstance(other, numbers.Number):
            return self.divide(other)
        return NotImplemented

    def matmul(self, other):
        """Standard matrix product, ``self.n_cols`` must equal ``other.n_rows``."""
        if self.n_cols != other.n_rows:
            raise DimensionMismatchError(f"Cannot multiply matrices of shapes {self.shape} and {other.shape}.")
        return Matrix(self._data @ other._data)

    def _broadcast_operand(self, other):
        if isinstance(other, numbers.Number):
            return float(other)
        if isinstance(other, Matrix):
            if other.shape == self.shape:
                return other._data
            if other.n_rows == 1 and other.n_cols == self.n_cols:
                # A single row is broadcast across all rows.
                return other._data
            raise DimensionMismatchError(f"Cannot multiply element-wise shapes {self.shape} and {other.shape}.")
        raise InvalidArgumentError(f"Unsupported operand type: {type(other)}.")

    def multiply(self, other):
        """
        Element-wise product with a scalar, a matrix of the same shape, or a single row matrix.

        Returns a new matrix, the receiver is unchanged.
        """
        return Matrix(self._data * self._broadcast_operand(other))

    def multiply_(self, other):
        """In-place variant of `multiply`: mutates and returns the receiver."""
        self._data *= self._broadcast_operand(other)
        return self

    def divide(self, value):
        return self.multiply(1.0 / value)

    def add(self, value):
        """Add a scalar to every element, returning a new matrix."""
        return Matrix(self._data + float(value))

    def add_(self, value):
        """In-place variant of `add`: mutates and returns the receiver."""
        self._data += float(value)
        return self

    def transposing(self):
        return Matrix(self._data.T.copy())

    ## Square matrix algebra

    def determinant(self):
        if not self.is_square():
            raise NotSquareError(f"Determinant needs a square matrix, got shape {self.shape}.")
        return Matrix._det(self._data)

    @staticmethod
    def _minor(data, row, col):
        return np.delete(np.delete(data, row, axis=0), col, axis=1)

    @staticmethod
    def _det(data):
        n = data.shape[0]
        if n == 1:
            return float(data[0, 0])
        if n == 2:
            return float(data[0, 0] * data[1, 1] - data[1, 0] * data[0, 1])
        det, sign = 0.0, 1.0
        for col in range(n):
            det += sign * data[0, col] * Matrix._det(Matrix._minor(data, 0, col))
            sign = -sign
        return det

    def inverse(self):
        """
        Inverse through the adjugate: inv(A) = adj(A) / det(A).

        A singular matrix is not rejected; its zero determinant makes the entries non-finite
        and the caller has to check (see `is_finite`).
        """
        if not self.is_square():
            raise NotSquareError(f"Inverse needs a square matrix, got shape {self.shape}.")
        n = self.n_rows
        det = self.determinant()
        if n == 1:
            cofactors = np.ones((1, 1))
        else:
            cofactors = np.zeros((n, n))
            for i in range(n):
                for j in range(n):
                    sign = 1.0 if (i + j) % 2 == 0 else -1.0
                    cofactors[i, j] = sign * Matrix._det(Matrix._minor(self._data, i, j))
        with np.errstate(divide="ignore", invalid="ignore"):
            return Matrix(cofactors.T / det)

    ## Decompositions

    def svd(self, max_iter=None):
        """Singular value decomposition, see `SingularValueDecomposition`."""
        dec = SingularValueDecomposition(self._data, max_iter=max_iter)
        S = np.zeros(self.shape)
        k = dec.s.size
        S[np.arange(k), np.arange(k)] = dec.s
        return SVDResult(Matrix(dec.U), Matrix(S), Matrix(dec.V))

    def pinverse(self, tol=None, max_iter=None):
        """
        Moore-Penrose pseudo-inverse: pinv(A) = V * S^+ * U^T.

        Parameters
        ----------
        tol : float or None
            Singular values at or below ``tol`` are treated as zero and not inverted.
            Defaults to ``max(N, M) * eps * s_max``.
        max_iter : int or None
            QR sweep limit forwarded to the SVD.

        Returns
        -------
        Matrix
            Shape (M, N). If the receiver holds non-finite values the result is filled with NaN.

        Raises
        ------
        NumericDegeneracyError
            If the SVD does not converge.
        """
        if not self.is_finite():
            return Matrix(np.full((self.n_cols, self.n_rows), np.nan))
        dec = SingularValueDecomposition(self._data, max_iter=max_iter)
        if tol is None:
            tol = dec.default_tolerance()
        s_inv = np.zeros(dec.s.size)
        nonzero = dec.s > tol
        s_inv[nonzero] = 1.0 / dec.s[nonzero]
        k = s_inv.size
        # V[:, :k] * diag(s_inv) * U[:, :k]^T
        return Matrix((dec.V[:, :k] * s_inv) @ dec.U[:, :k].T)

    ## Representation

    def to_string(self, newline=True, digits=4):
        sep_row = "\n" if newline else "; "
        rows = [" ".join(str(round(float(v), digits)) for v in row) for row in self._data]
        body = sep_row.join(rows)
        return f"[\n{body}\n]" if newline else f"[{body}]"

    def __str__(self):
        return self.to_string()

    def __repr__(self):
        return f"Matrix({self.to_string(newline=False)})"
