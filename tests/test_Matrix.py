#!/usr/bin/env python
# Created by "Thieu" at 20:10, 03/05/2025 ----------%
#       Email: nguyenthieu2102@gmail.com            %
#       Github: https://github.com/thieu1995        %
# --------------------------------------------------%

import numpy as np
import pytest
from xfis import Matrix, DimensionMismatchError, NotSquareError, InvalidArgumentError


@pytest.fixture
def square():
    return Matrix([[6., 1., 1.], [4., -2., 5.], [2., 8., 7.]])


@pytest.fixture
def tall():
    rng = np.random.default_rng(42)
    return Matrix(rng.normal(size=(5, 3)))


def test_zero_filled_construction():
    A = Matrix(2, 3)
    assert A.shape == (2, 3)
    assert A.n_rows == 2 and A.n_cols == 3
    assert np.all(A.to_numpy() == 0)
    assert Matrix(3).shape == (3, 3)


def test_invalid_construction():
    with pytest.raises(InvalidArgumentError):
        Matrix([1., 2., 3.])
    with pytest.raises(InvalidArgumentError):
        Matrix(0, 2)
    with pytest.raises(ValueError):
        Matrix.diagonal([])


def test_diagonal_and_identity_indexing():
    D = Matrix.diagonal([1., 2., 3.])
    assert D.shape == (3, 3)
    assert D[1] == 2.0
    assert D[0, 1] == 0.0
    D[2] = 5.0
    assert D[2, 2] == 5.0
    assert Matrix.identity(2).allclose([[1., 0.], [0., 1.]])


def test_add_subtract():
    A = Matrix([[1., 2.], [3., 4.]])
    B = Matrix([[4., 3.], [2., 1.]])
    assert (A + B).allclose([[5., 5.], [5., 5.]])
    assert (A - B).allclose([[-3., -1.], [1., 3.]])
    with pytest.raises(DimensionMismatchError):
        A + Matrix(2, 3)
    with pytest.raises(ValueError):
        A - Matrix(3, 2)


def test_matmul():
    A = Matrix([[1., 2.], [3., 4.]])
    B = Matrix([[5., 6.], [7., 8.]])
    assert (A * B).allclose([[19., 22.], [43., 50.]])
    assert (A @ B).allclose((A * B).to_numpy())
    assert (Matrix(2, 3) * Matrix(3, 4)).shape == (2, 4)
    with pytest.raises(DimensionMismatchError):
        Matrix(2, 3) * Matrix(2, 3)


def test_matmul_is_associative_and_transpose_reverses(tall, square):
    C = Matrix(np.arange(6, dtype=float).reshape(3, 2))
    assert ((tall * square) * C).allclose(tall * (square * C))
    assert (tall * square).T.allclose(square.T * tall.T)


def test_multiply_is_pure_and_in_place_variant_mutates():
    A = Matrix([[1., 2.], [3., 4.]])
    B = A.multiply(2)
    assert B.allclose([[2., 4.], [6., 8.]])
    assert A.allclose([[1., 2.], [3., 4.]])
    assert (3 * A).allclose([[3., 6.], [9., 12.]])
    assert (A / 2).allclose([[0.5, 1.], [1.5, 2.]])
    C = A.add(1)
    assert C.allclose([[2., 3.], [4., 5.]])
    assert A[0, 0] == 1.0
    result = A.multiply_(2)
    assert result is A
    assert A.allclose([[2., 4.], [6., 8.]])
    A.add_(-2)
    assert A.allclose([[0., 2.], [4., 6.]])


def test_multiply_elementwise_and_row_broadcast():
    A = Matrix([[1., 2.], [3., 4.]])
    assert A.multiply(Matrix([[2., 0.], [1., 3.]])).allclose([[2., 0.], [3., 12.]])
    assert A.multiply(Matrix([[10., 100.]])).allclose([[10., 200.], [30., 400.]])
    with pytest.raises(DimensionMismatchError):
        A.multiply(Matrix(3, 3))


def test_determinant(square):
    assert square.determinant() == pytest.approx(-306.0)
    assert Matrix([[3.]]).determinant() == 3.0
    assert Matrix([[1., 2.], [3., 4.]]).determinant() == pytest.approx(-2.0)
    with pytest.raises(NotSquareError):
        Matrix(2, 3).determinant()


def test_inverse(square):
    inv = square.inverse()
    assert (square * inv).allclose(Matrix.identity(3), atol=1e-12)
    assert (inv * square).allclose(Matrix.identity(3), atol=1e-12)
    assert Matrix([[4.]]).inverse().allclose([[0.25]])
    with pytest.raises(NotSquareError):
        Matrix(3, 2).inverse()


def test_inverse_of_singular_matrix_is_not_finite():
    A = Matrix([[1., 2.], [2., 4.]])
    assert not A.inverse().is_finite()


def test_pinverse_penrose_identities(tall):
    P = tall.pinverse()
    assert P.shape == (3, 5)
    assert (tall * P * tall).allclose(tall, atol=1e-10)
    assert (P * tall * P).allclose(P, atol=1e-10)
    assert (tall * P).T.allclose(tall * P, atol=1e-10)
    assert (P * tall).T.allclose(P * tall, atol=1e-10)
    assert np.allclose(P.to_numpy(), np.linalg.pinv(tall.to_numpy()), atol=1e-10)


def test_pinverse_of_wide_matrix(tall):
    wide = tall.T
    P = wide.pinverse()
    assert P.shape == (5, 3)
    assert (wide * P * wide).allclose(wide, atol=1e-10)


def test_pinverse_of_rank_deficient_matrix_stays_finite():
    A = Matrix([[1., 2.], [2., 4.], [3., 6.]])
    P = A.pinverse()
    assert P.is_finite()
    assert (A * P * A).allclose(A, atol=1e-10)
    assert np.allclose(P.to_numpy(), np.linalg.pinv(A.to_numpy()), atol=1e-10)


def test_pinverse_of_non_finite_matrix_is_nan():
    A = Matrix([[1., np.nan], [2., 3.], [4., 5.]])
    P = A.pinverse()
    assert P.shape == (2, 3)
    assert np.all(np.isnan(P.to_numpy()))


def test_svd_round_trip(square):
    U, S, V = square.svd()
    assert (U * S * V.T).allclose(square, atol=1e-10)
    assert square.svd().original().allclose(square, atol=1e-10)


def test_transposing_and_string():
    A = Matrix([[1., 2., 3.], [4., 5., 6.]])
    assert A.transposing().shape == (3, 2)
    assert A.T[2, 1] == 6.0
    assert A.to_string(newline=False) == "[1.0 2.0 3.0; 4.0 5.0 6.0]"
    assert "4.0 5.0 6.0" in str(A)
    assert repr(A).startswith("Matrix(")
