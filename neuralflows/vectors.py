"""Small fixed-size vectors used for sizes, positions and kernel shapes."""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from typing import Any, ClassVar


def _truncating_div(a: Any, b: Any) -> Any:
    """Divide like integer arithmetic does: truncate toward zero for ints."""
    if isinstance(a, int) and isinstance(b, int):
        if b == 0:
            raise ZeroDivisionError("integer division by zero")
        quotient = abs(a) // abs(b)
        return quotient if (a >= 0) == (b > 0) else -quotient
    return a / b


class VectorN:
    """An immutable vector with any number of components."""

    __slots__ = ("_v",)

    def __init__(self, *components: Any) -> None:
        self._v = tuple(components)

    @property
    def v(self) -> tuple:
        return self._v

    def __len__(self) -> int:
        return len(self._v)

    def __iter__(self):
        return iter(self._v)

    def __getitem__(self, index: int) -> Any:
        return self._v[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, VectorN):
            return NotImplemented
        return self._v == other._v

    def __hash__(self) -> int:
        return hash(self._v)

    def __repr__(self) -> str:
        return f"{type(self).__name__}{self._v!r}"

    def _new(self, values) -> "VectorN":
        return type(self)(*values)

    def _check_same_length(self, other: "VectorN") -> None:
        if len(self) != len(other):
            raise ValueError("vectors must have the same number of components")

    def multiply_content(self) -> Any:
        """Product of all components."""
        return math.prod(self._v)

    def json_encode(self) -> Any:
        return list(self._v)

    @classmethod
    def from_json(cls, data: Any) -> "VectorN":
        return cls(*data)

    def __add__(self, other: "VectorN") -> "VectorN":
        if not isinstance(other, VectorN):
            return NotImplemented
        self._check_same_length(other)
        return self._new(a + b for a, b in zip(self._v, other._v))

    def __sub__(self, other: "VectorN") -> "VectorN":
        if not isinstance(other, VectorN):
            return NotImplemented
        self._check_same_length(other)
        return self._new(a - b for a, b in zip(self._v, other._v))

    def __mul__(self, other: Any) -> "VectorN":
        if isinstance(other, VectorN):
            return NotImplemented
        return self._new(a * other for a in self._v)

    def __truediv__(self, scalar: Any) -> "VectorN":
        return self._new(_truncating_div(a, scalar) for a in self._v)


def _named_from_json(cls, data: Any, keys: Sequence[str]):
    if isinstance(data, Mapping):
        return cls(*(data[key] for key in keys))
    return cls(*data)


class Vector2(VectorN):
    """Two-component vector (x, y)."""

    __slots__ = ()
    _keys: ClassVar[tuple[str, ...]] = ("x", "y")

    def __init__(self, x: Any = 0, y: Any = 0) -> None:
        super().__init__(x, y)

    @property
    def x(self) -> Any:
        return self._v[0]

    @property
    def y(self) -> Any:
        return self._v[1]

    def json_encode(self) -> dict:
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_json(cls, data: Any) -> "Vector2":
        return _named_from_json(cls, data, cls._keys)

    def __mul__(self, other: Any) -> "Vector2":
        if all(hasattr(other, name) for name in ("a", "b", "c", "d")):
            coefficients = (other.a, other.b, other.c, other.d)
            if all(isinstance(value, int) for value in self._v):
                coefficients = tuple(int(value) for value in coefficients)
            a, b, c, d = coefficients
            return Vector2(self.x * a + self.y * b, self.x * c + self.y * d)
        return super().__mul__(other)


class Vector3(VectorN):
    """Three-component vector (x, y, z)."""

    __slots__ = ()
    _keys: ClassVar[tuple[str, ...]] = ("x", "y", "z")

    def __init__(self, x: Any = 0, y: Any = 0, z: Any = 0) -> None:
        super().__init__(x, y, z)

    @property
    def x(self) -> Any:
        return self._v[0]

    @property
    def y(self) -> Any:
        return self._v[1]

    @property
    def z(self) -> Any:
        return self._v[2]

    def json_encode(self) -> dict:
        return {"x": self.x, "y": self.y, "z": self.z}

    @classmethod
    def from_json(cls, data: Any) -> "Vector3":
        return _named_from_json(cls, data, cls._keys)


class Vector4(VectorN):
    """Four-component vector (x, y, z, t)."""

    __slots__ = ()
    _keys: ClassVar[tuple[str, ...]] = ("x", "y", "z", "t")

    def __init__(self, x: Any = 0, y: Any = 0, z: Any = 0, t: Any = 0) -> None:
        super().__init__(x, y, z, t)

    @property
    def x(self) -> Any:
        return self._v[0]

    @property
    def y(self) -> Any:
        return self._v[1]

    @property
    def z(self) -> Any:
        return self._v[2]

    @property
    def t(self) -> Any:
        return self._v[3]

    def json_encode(self) -> dict:
        return {"x": self.x, "y": self.y, "z": self.z, "t": self.t}

    @classmethod
    def from_json(cls, data: Any) -> "Vector4":
        return _named_from_json(cls, data, cls._keys)