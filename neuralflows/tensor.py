"""Three-dimensional tensor stored channel by channel, row by row."""

from __future__ import annotations

from typing import Any, Iterable, Sequence

from neuralflows.vectors import Vector3, _truncating_div


def _to_standard(data: Sequence[Any], w: int, h: int, d: int, input_type: int) -> list:
    """Reorder ``data`` into the standard (channel-major) layout.

    Layout 0 keeps every channel contiguous; layout 1 interleaves the
    channels of each pixel, as in RGB images.
    """
    count = w * h * d
    values = list(data)
    if len(values) != count:
        raise ValueError(f"expected {count} values, got {len(values)}")
    if input_type == 0:
        return values
    if input_type == 1:
        return [values[d * i + c] for c in range(d) for i in range(w * h)]
    raise ValueError(f"unknown data layout: {input_type}")


class Tensor:
    """A w x h x d grid of values."""

    __hash__ = None  # type: ignore[assignment]

    def __init__(
        self,
        w: int,
        h: int,
        d: int,
        data: Iterable[Any] | None = None,
        input_type: int = 0,
    ) -> None:
        if w < 1 or h < 1 or d < 1:
            raise ValueError("invalid bitmap size!")
        self._w, self._h, self._d = w, h, d
        if data is None:
            self._data = [0] * (w * h * d)
        else:
            self._data = _to_standard(list(data), w, h, d, input_type)

    @classmethod
    def of_size(cls, size: Vector3, data: Iterable[Any] | None = None, input_type: int = 0) -> "Tensor":
        return cls(size.x, size.y, size.z, data, input_type)

    @classmethod
    def from_json(cls, data: dict) -> "Tensor":
        return cls.of_size(Vector3.from_json(data["size"]), data["data"])

    def json_encode(self) -> dict:
        return {"size": self.size.json_encode(), "data": list(self._data)}

    @property
    def w(self) -> int:
        return self._w

    @property
    def h(self) -> int:
        return self._h

    @property
    def d(self) -> int:
        return self._d

    @property
    def size(self) -> Vector3:
        return Vector3(self._w, self._h, self._d)

    @property
    def data(self) -> list:
        """The underlying flat list in the standard layout."""
        return self._data

    def __len__(self) -> int:
        return len(self._data)

    def __iter__(self):
        return iter(self._data)

    def __repr__(self) -> str:
        return f"Tensor({self._w}, {self._h}, {self._d}, {self._data!r})"

    def get_data_index(self, x: Any, y: int | None = None, z: int | None = None) -> int:
        """Flat index of a cell; ``x`` may also be a 3-component position."""
        if y is None and z is None:
            x, y, z = x
        if not (0 <= x < self._w and 0 <= y < self._h and 0 <= z < self._d):
            raise IndexError("invalid read!")
        return z * self._w * self._h + y * self._w + x

    def get_cell(self, x: Any, y: int | None = None, z: int | None = None) -> Any:
        return self._data[self.get_data_index(x, y, z)]

    def set_cell(self, x: int, y: int, z: int, value: Any) -> None:
        self._data[self.get_data_index(x, y, z)] = value

    def index_to_vector(self, index: int) -> Vector3:
        return Vector3(index % self._w, (index // self._w) % self._h, index // (self._w * self._h))

    def set_data(self, data: Iterable[Any], input_type: int = 0) -> None:
        self._data = _to_standard(list(data), self._w, self._h, self._d, input_type)

    def set_layer(self, layer_id: int, values: Iterable[Any]) -> None:
        """Overwrite channel ``layer_id`` with the first w*h of ``values``."""
        if not 0 <= layer_id < self._d:
            raise IndexError("invalid layer!")
        plane = self._w * self._h
        layer = list(values)[:plane]
        if len(layer) != plane:
            raise ValueError(f"expected {plane} values for a layer")
        start = plane * layer_id
        self._data[start:start + plane] = layer

    def belongs(self, point: Any) -> bool:
        x, y, z = point
        return 0 <= x < self._w and 0 <= y < self._h and 0 <= z < self._d

    def copy(self) -> "Tensor":
        return Tensor(self._w, self._h, self._d, self._data)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Tensor):
            return NotImplemented
        return self.size == other.size and self._data == other._data

    def __mul__(self, scalar: Any) -> "Tensor":
        result = self.copy()
        result *= scalar
        return result

    def __imul__(self, scalar: Any) -> "Tensor":
        self._data = [value * scalar for value in self._data]
        return self

    def __truediv__(self, scalar: Any) -> "Tensor":
        result = self.copy()
        result /= scalar
        return result

    def __itruediv__(self, scalar: Any) -> "Tensor":
        self._data = [_truncating_div(value, scalar) for value in self._data]
        return self