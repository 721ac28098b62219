"""Common behaviour of network layers: outputs over time, chain memoisation, links."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from neuralflows.tensor import Tensor
from neuralflows.vectors import Vector3, Vector4


class Layer(ABC):
    """A layer that maps an input tensor to an output tensor at each time step.

    ``output`` holds one tensor per feed since the last state reset. The
    chain value of an input position (the derivative of the error with
    respect to that input) is memoised per time step.
    """

    def __init__(self, input_size: Vector3) -> None:
        self.input_size = input_size
        self.output_size = input_size
        self.prev_layer: Layer | None = None
        self.next_layer: Layer | None = None
        self.output: list[Tensor] = []
        self._time = 0
        self._memo_states: list[Tensor] = []
        self._memo_table: list[Tensor] = []

    @property
    def time(self) -> int:
        """Number of complete feeds since the last reset."""
        return self._time

    @abstractmethod
    def run(self, tensor: Tensor) -> None:
        """Process ``tensor`` and append the result to ``output``."""

    @abstractmethod
    def get_chain(self, input_pos: Vector4) -> float:
        """Derivative of the error with respect to the input at ``input_pos``."""

    @abstractmethod
    def json_encode(self) -> dict:
        """Structure of the layer as JSON-ready data."""

    def copy(self) -> "Layer":
        """A fresh, unlinked layer with the same structure and parameters."""
        return type(self).from_json(self.json_encode())

    def reproduce(self, other: "Layer", seed: int = 1) -> "Layer":
        """Child of this layer and ``other``; layers without parameters copy themselves."""
        return self.copy()

    def inc_time(self) -> None:
        """Advance the time step; called after each complete feed of a network."""
        self._time += 1

    def reset_state(self) -> None:
        self._time = 0
        self.output.clear()
        self._memo_table.clear()
        self._memo_states.clear()

    def _add_memo_layer(self) -> None:
        count = self.input_size.multiply_content()
        self._memo_states.append(Tensor.of_size(self.input_size, [False] * count))
        self._memo_table.append(Tensor.of_size(self.input_size, [0.0] * count))

    @staticmethod
    def _check_time(time: int) -> None:
        if time < 0:
            raise IndexError(f"invalid time step: {time}")

    def set_memo(self, pos: Vector4, value: float) -> None:
        self._check_time(pos.t)
        self._memo_states[pos.t].set_cell(pos.x, pos.y, pos.z, True)
        self._memo_table[pos.t].set_cell(pos.x, pos.y, pos.z, value)

    def get_memo_state(self, pos: Vector4) -> bool:
        self._check_time(pos.t)
        return bool(self._memo_states[pos.t].get_cell(pos.x, pos.y, pos.z))

    def get_memo(self, pos: Vector4) -> float:
        self._check_time(pos.t)
        return self._memo_table[pos.t].get_cell(pos.x, pos.y, pos.z)

    def get_output(self, time: int) -> Tensor:
        self._check_time(time)
        return self.output[time]

    def get_input(self, time: int) -> Tensor:
        if self.prev_layer is None:
            raise RuntimeError("layer has no previous layer to take input from")
        return self.prev_layer.get_output(time)

    def _next_chain(self, pos: Vector4) -> float:
        if self.next_layer is None:
            raise RuntimeError("layer has no next layer to take the chain from")
        return self.next_layer.get_chain(pos)


class Learnable(Layer):
    """A layer with weights and biases that optimizers can adjust."""

    @abstractmethod
    def weights_count(self) -> int: ...

    @abstractmethod
    def biases_count(self) -> int: ...

    @abstractmethod
    def get_weight(self, weight_id: int) -> float: ...

    @abstractmethod
    def set_weight(self, weight_id: int, value: float) -> None: ...

    @abstractmethod
    def get_bias(self, bias_id: int) -> float: ...

    @abstractmethod
    def set_bias(self, bias_id: int, value: float) -> None: ...

    @abstractmethod
    def random_init(self, rng: Any) -> None:
        """Fill the parameters from the ``random.Random``-like ``rng``."""

    @abstractmethod
    def weights_gradient(self) -> list[float]: ...

    @abstractmethod
    def biases_gradient(self) -> list[float]: ...