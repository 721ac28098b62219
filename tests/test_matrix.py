import pytest

from neuralflows.matrix import TMatrix
from neuralflows.vectors import Vector2


def test_hats_are_columns():
    matrix = TMatrix(1, 2, 3, 4)
    assert matrix.i_hat() == Vector2(1, 3)
    assert matrix.j_hat() == Vector2(2, 4)


def test_identity_transform_keeps_vector():
    identity = TMatrix(1, 0, 0, 1)
    assert identity.transform(Vector2(5, -7)) == Vector2(5, -7)
    assert identity * Vector2(2, 3) == Vector2(2, 3)


def test_transform_worked_example():
    assert TMatrix(1, 2, 3, 4).transform(Vector2(1, 1)) == Vector2(3, 7)


def test_transform_of_unit_vectors_gives_hats():
    matrix = TMatrix(2, -1, 5, 3)
    assert matrix * Vector2(1, 0) == matrix.i_hat()
    assert matrix * Vector2(0, 1) == matrix.j_hat()


def test_scalar_multiplication():
    assert TMatrix(1, 2, 3, 4) * 2 == TMatrix(2, 4, 6, 8)


def test_product_with_identity():
    matrix = TMatrix(1, 2, 3, 4)
    identity = TMatrix(1, 0, 0, 1)
    assert matrix * identity == matrix
    assert identity * matrix == matrix


def test_product_composes_transforms():
    first = TMatrix(0, -1, 1, 0)
    second = TMatrix(2, 1, 1, 3)
    vector = Vector2(4, 5)
    assert (first * second) * vector == first * (second * vector)


def test_unsupported_operand():
    with pytest.raises(TypeError):
        TMatrix(1, 0, 0, 1) * "x"