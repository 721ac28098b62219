"""Fully connected layer."""

from __future__ import annotations

import math
import random
from typing import Any

from neuralflows.layers.base import Layer, Learnable
from neuralflows.tensor import Tensor
from neuralflows.vectors import Vector3, Vector4


class FFLayer(Learnable):
    """Every neuron sums the whole input vector, each value with its own weight.

    Weights are stored neuron by neuron: weight ``i * input_size.x + j``
    connects input ``j`` to neuron ``i``.
    """

    def __init__(self, input_size: Vector3, neurons_count: int) -> None:
        super().__init__(input_size)
        if input_size.x < 1 or input_size.y != 1 or input_size.z != 1:
            raise ValueError("There must be a vector output layer before FFLayer!")
        self.neurons_count = neurons_count
        self.weights = [0.0] * (neurons_count * input_size.x)
        self.biases = [0.0] * neurons_count
        self.output_size = Vector3(neurons_count, 1, 1)

    def run(self, tensor: Tensor) -> None:
        if tensor.size != self.input_size:
            raise ValueError("_input bitmap to ff layer must be a normalized vector type!")
        per_neuron = self.input_size.x
        values = list(tensor)
        sums = [
            sum(x * w for x, w in zip(values, self.weights[i * per_neuron:(i + 1) * per_neuron]))
            for i in range(self.neurons_count)
        ]
        self.output.append(Tensor(self.neurons_count, 1, 1, sums))
        self._add_memo_layer()

    def get_chain(self, input_pos: Vector4) -> float:
        if input_pos.x < 0 or input_pos.y != 0 or input_pos.z != 0:
            raise ValueError("wrong chain request!")
        if self.get_memo_state(input_pos):
            return self.get_memo(input_pos)
        per_neuron = self.input_size.x
        result = sum(
            self.weights[i * per_neuron + input_pos.x] * self._next_chain(Vector4(i, 0, 0, input_pos.t))
            for i in range(self.neurons_count)
        )
        self.set_memo(input_pos, result)
        return result

    def random_init(self, rng: Any) -> None:
        scale = math.sqrt(2.0 / self.input_size.x)
        self.weights = [rng.uniform(-10, 10) * scale for _ in self.weights]
        self.biases = [rng.uniform(-10, 10) for _ in self.biases]

    def diff_weight(self, weight_id: int) -> float:
        neuron = weight_id // self.input_size.x
        value = self.get_input(self.time - 1).get_cell(weight_id % self.input_size.x, 0, 0)
        return sum(value * self._next_chain(Vector4(neuron, 0, 0, t)) for t in range(len(self.output)))

    def diff_bias(self, neuron_id: int) -> float:
        return sum(self._next_chain(Vector4(neuron_id, 0, 0, t)) for t in range(len(self.output)))

    def weights_gradient(self) -> list[float]:
        return [self.diff_weight(i) for i in range(self.weights_count())]

    def biases_gradient(self) -> list[float]:
        return [self.diff_bias(i) for i in range(self.neurons_count)]

    def weights_count(self) -> int:
        return len(self.weights)

    def biases_count(self) -> int:
        return self.neurons_count

    def get_weight(self, weight_id: int) -> float:
        return self.weights[weight_id]

    def set_weight(self, weight_id: int, value: float) -> None:
        self.weights[weight_id] = value

    def get_bias(self, bias_id: int) -> float:
        return self.biases[bias_id]

    def set_bias(self, bias_id: int, value: float) -> None:
        self.biases[bias_id] = value

    def json_encode(self) -> dict:
        return {
            "type": "ffl",
            "weights": list(self.weights),
            "input_size": self.input_size.json_encode(),
            "neurons_count": self.neurons_count,
            "biases": list(self.biases),
            "learnable": True,
        }

    @classmethod
    def from_json(cls, data: dict) -> "FFLayer":
        layer = cls(Vector3.from_json(data["input_size"]), data["neurons_count"])
        layer.weights = [float(w) for w in data["weights"]]
        layer.biases = [float(b) for b in data["biases"]]
        return layer

    def reproduce(self, other: Layer, seed: int = 1) -> "FFLayer":
        """Child whose weights each come from this layer or from ``other`` at random."""
        if not isinstance(other, FFLayer):
            raise TypeError("an FFLayer can only reproduce with another FFLayer")
        child = self.copy()
        rng = random.Random(seed)
        for i in range(self.weights_count()):
            if rng.randint(0, 1):
                child.weights[i] = other.weights[i]
        return child