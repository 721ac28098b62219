"""Element-wise activation layers."""

from __future__ import annotations

import math

from neuralflows.layers.base import Layer
from neuralflows.tensor import Tensor
from neuralflows.vectors import Vector3, Vector4


class ReLU(Layer):
    """Rectified linear unit: negative values become zero."""

    @staticmethod
    def relu(x: float) -> float:
        return x if x > 0 else 0

    @staticmethod
    def diff(x: float) -> float:
        return 1 if x > 0 else 0

    def run(self, tensor: Tensor) -> None:
        self.output.append(Tensor.of_size(tensor.size, [self.relu(v) for v in tensor]))
        self._add_memo_layer()

    def get_chain(self, input_pos: Vector4) -> float:
        value = self.get_input(input_pos.t).get_cell(input_pos.x, input_pos.y, input_pos.z)
        return self.diff(value) * self._next_chain(input_pos)

    def json_encode(self) -> dict:
        return {"input_size": self.input_size.json_encode(), "type": "relu"}

    @classmethod
    def from_json(cls, data: dict) -> "ReLU":
        return cls(Vector3.from_json(data["input_size"]))


class Sigmoid(Layer):
    """Logistic function applied to every value."""

    @staticmethod
    def sigmoid(x: float) -> float:
        if x >= 0:
            return 1.0 / (1.0 + math.exp(-x))
        exp = math.exp(x)
        return exp / (1.0 + exp)

    @staticmethod
    def diff(x: float) -> float:
        sig = Sigmoid.sigmoid(x)
        return sig * (1.0 - sig)

    def run(self, tensor: Tensor) -> None:
        self.output.append(Tensor.of_size(tensor.size, [self.sigmoid(v) for v in tensor]))
        self._add_memo_layer()

    def get_chain(self, input_pos: Vector4) -> float:
        value = self.get_input(input_pos.t).get_cell(input_pos.x, input_pos.y, input_pos.z)
        return self.diff(value) * self._next_chain(input_pos)

    def json_encode(self) -> dict:
        return {"input_size": self.input_size.json_encode(), "type": "sig"}

    @classmethod
    def from_json(cls, data: dict) -> "Sigmoid":
        return cls(Vector3.from_json(data["input_size"]))


class Softmax(Sigmoid):
    """Sigmoid outputs scaled so that they sum to one."""

    def __init__(self, input_size: Vector3) -> None:
        super().__init__(input_size)
        self._dividers: list[float] = []

    def run(self, tensor: Tensor) -> None:
        super().run(tensor)
        total = sum(self.output[-1])
        self.output[-1] /= total
        self._dividers.append(total)

    def get_chain(self, input_pos: Vector4) -> float:
        self._check_time(input_pos.t)
        return super().get_chain(input_pos) * self._dividers[input_pos.t]

    def reset_state(self) -> None:
        super().reset_state()
        self._dividers.clear()