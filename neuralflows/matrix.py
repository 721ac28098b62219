"""2 x 2 linear transformation matrix for plane coordinates."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from neuralflows.vectors import Vector2


@dataclass(frozen=True)
class TMatrix:
    """Matrix laid out as::

        | a, b |
        | c, d |
    """

    a: float
    b: float
    c: float
    d: float

    def i_hat(self) -> Vector2:
        """Image of the unit x vector (the first column)."""
        return Vector2(self.a, self.c)

    def j_hat(self) -> Vector2:
        """Image of the unit y vector (the second column)."""
        return Vector2(self.b, self.d)

    def transform(self, vector: Vector2) -> Vector2:
        """Apply the matrix to a column vector."""
        return Vector2(
            self.a * vector.x + self.b * vector.y,
            self.c * vector.x + self.d * vector.y,
        )

    def __mul__(self, other: Any) -> Any:
        if isinstance(other, Vector2):
            return self.transform(other)
        if isinstance(other, TMatrix):
            return TMatrix(
                self.a * other.a + self.b * other.c,
                self.a * other.b + self.b * other.d,
                self.c * other.a + self.d * other.c,
                self.c * other.b + self.d * other.d,
            )
        if isinstance(other, (int, float)):
            return TMatrix(self.a * other, self.b * other, self.c * other, self.d * other)
        return NotImplemented