"""Layers that reshape, pool, normalise or terminate the data flow of a network."""

from __future__ import annotations

from neuralflows.layers.base import Layer
from neuralflows.ops import after_max_pool_size
from neuralflows.tensor import Tensor
from neuralflows.vectors import Vector2, Vector3, Vector4

_UNMAPPED = Vector2(-1, -1)


class FlatteningLayer(Layer):
    """Turns any input into a single row vector, keeping the data order."""

    def __init__(self, input_size: Vector3) -> None:
        super().__init__(input_size)
        self.output_size = Vector3(input_size.multiply_content(), 1, 1)

    def run(self, tensor: Tensor) -> None:
        count = self.input_size.multiply_content()
        if tensor.size.multiply_content() != count:
            raise ValueError("invalid input input for flattening layer!")
        self.output.append(Tensor(count, 1, 1, list(tensor)))
        self._add_memo_layer()

    def get_chain(self, input_pos: Vector4) -> float:
        if self.get_memo_state(input_pos):
            return self.get_memo(input_pos)
        index = self.get_input(input_pos.t).get_data_index(input_pos.x, input_pos.y, input_pos.z)
        result = self._next_chain(Vector4(index, 0, 0, input_pos.t))
        self.set_memo(input_pos, result)
        return result

    def json_encode(self) -> dict:
        return {"input_size": self.input_size.json_encode(), "type": "fl"}

    @classmethod
    def from_json(cls, data: dict) -> "FlatteningLayer":
        return cls(Vector3.from_json(data["input_size"]))


class InputLayer(Layer):
    """First layer of a network; remembers every tensor it was fed."""

    def __init__(self, input_size: Vector3) -> None:
        super().__init__(input_size)
        self._inputs: list[Tensor] = []

    def run(self, tensor: Tensor) -> None:
        self._inputs.append(tensor.copy())
        self.output.append(tensor.copy())
        self._add_memo_layer()

    def get_chain(self, input_pos: Vector4) -> float:
        return self._next_chain(input_pos)

    def get_input(self, time: int) -> Tensor:
        self._check_time(time)
        return self._inputs[time]

    def reset_state(self) -> None:
        super().reset_state()
        self._inputs.clear()

    def json_encode(self) -> dict:
        return {"input_size": self.input_size.json_encode(), "type": "il"}

    @classmethod
    def from_json(cls, data: dict) -> "InputLayer":
        return cls(Vector3.from_json(data["input_size"]))


class MaxPoolingLayer(Layer):
    """Keeps the largest value (never below zero) of each kernel-sized block.

    For every feed it records which input cell produced each output value,
    so that the chain flows back only through those cells.
    """

    def __init__(self, input_size: Vector3, kernel_size: Vector2) -> None:
        super().__init__(input_size)
        self.kernel_size = kernel_size
        self.output_size = Vector3(
            after_max_pool_size(kernel_size.x, input_size.x),
            after_max_pool_size(kernel_size.y, input_size.y),
            input_size.z,
        )
        self.mapping: list[Tensor] = []

    def run(self, tensor: Tensor) -> None:
        if tensor.size != self.input_size:
            raise ValueError("invalid output size in max pool!")
        count = self.input_size.multiply_content()
        mapping = Tensor.of_size(self.input_size, [_UNMAPPED] * count)
        result = Tensor.of_size(self.output_size)
        kernel_x, kernel_y = self.kernel_size.x, self.kernel_size.y

        for c in range(tensor.d):
            for y in range(0, tensor.h - kernel_y + 1, kernel_y):
                for x in range(0, tensor.w - kernel_x + 1, kernel_x):
                    best_value, best_cell = 0, None
                    for dy in range(kernel_y):
                        for dx in range(kernel_x):
                            value = tensor.get_cell(x + dx, y + dy, c)
                            if value > best_value:
                                best_value, best_cell = value, (x + dx, y + dy)
                    target = Vector2(x // kernel_x, y // kernel_y)
                    result.set_cell(target.x, target.y, c, best_value)
                    if best_cell is not None:
                        mapping.set_cell(best_cell[0], best_cell[1], c, target)

        self.mapping.append(mapping)
        self.output.append(result)
        self._add_memo_layer()

    def get_chain(self, input_pos: Vector4) -> float:
        if self.get_memo_state(input_pos):
            return self.get_memo(input_pos)
        mapped = self.mapping[input_pos.t].get_cell(input_pos.x, input_pos.y, input_pos.z)
        if mapped == _UNMAPPED:
            result = 0.0
        else:
            result = self._next_chain(Vector4(mapped.x, mapped.y, input_pos.z, input_pos.t))
        self.set_memo(input_pos, result)
        return result

    def reset_state(self) -> None:
        super().reset_state()
        self.mapping.clear()

    def json_encode(self) -> dict:
        return {
            "input_size": self.input_size.json_encode(),
            "type": "mpl",
            "kernel_size": self.kernel_size.json_encode(),
        }

    @classmethod
    def from_json(cls, data: dict) -> "MaxPoolingLayer":
        return cls(Vector3.from_json(data["input_size"]), Vector2.from_json(data["kernel_size"]))


class OutputLayer(FlatteningLayer):
    """Last layer of a network; compares its input with a target."""

    def __init__(self, input_size: Vector3) -> None:
        super().__init__(input_size)
        self._target: Tensor | None = None

    @property
    def target(self) -> Tensor | None:
        return self._target

    def run(self, tensor: Tensor) -> None:
        super().run(tensor)

    def get_chain(self, input_pos: Vector4) -> float:
        if self._target is None:
            raise RuntimeError("no target set for the output layer")
        value = self.get_input(input_pos.t).get_cell(input_pos.x, input_pos.y, input_pos.z)
        return value - self._target.get_cell(input_pos.x, input_pos.y, input_pos.z)

    def set_target(self, target: Tensor) -> None:
        if target.size != self.output_size:
            raise ValueError("target size does not match the output size")
        self._target = target

    def json_encode(self) -> dict:
        return {"input_size": self.input_size.json_encode(), "type": "ol"}

    @classmethod
    def from_json(cls, data: dict) -> "OutputLayer":
        return cls(Vector3.from_json(data["input_size"]))


class BatchNormalizationLayer(Layer):
    """Divides the input by its maximum when that maximum exceeds one."""

    def __init__(self, input_size: Vector3) -> None:
        super().__init__(input_size)
        self.normalization_factor = 1.0

    def run(self, tensor: Tensor) -> None:
        if tensor.size != self.input_size:
            raise ValueError("invalid bitmap input for normalization layer!")
        largest = max([0, *tensor])
        if abs(largest) > 1:
            result = Tensor.of_size(self.output_size, [value / largest for value in tensor])
            self.normalization_factor = largest
        else:
            result = Tensor.of_size(self.output_size, list(tensor))
            self.normalization_factor = 1.0
        self.output.append(result)
        self._add_memo_layer()

    def get_chain(self, input_pos: Vector4) -> float:
        if self.normalization_factor == 0:
            return 0.0
        return (1.0 / self.normalization_factor) * self._next_chain(input_pos)

    def json_encode(self) -> dict:
        return {"input_size": self.input_size.json_encode(), "type": "bnl"}

    @classmethod
    def from_json(cls, data: dict) -> "BatchNormalizationLayer":
        return cls(Vector3.from_json(data["input_size"]))