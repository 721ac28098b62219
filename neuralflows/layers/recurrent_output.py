"""Closing layer of the internal chain of a recurrent layer."""

from __future__ import annotations

from typing import Protocol

from neuralflows.layers.base import Layer
from neuralflows.tensor import Tensor
from neuralflows.vectors import Vector3, Vector4


class ChainSource(Protocol):
    """The recurrent layer that owns an internal chain of layers."""

    def chain_from_child(self, input_pos: Vector4) -> float: ...


class RecurrentOutputLayer(Layer):
    """Passes its input through and takes the chain from its parent layer."""

    def __init__(self, input_size: Vector3, parent: ChainSource) -> None:
        super().__init__(input_size)
        self.parent = parent

    def run(self, tensor: Tensor) -> None:
        self.output.append(tensor)

    def get_chain(self, input_pos: Vector4) -> float:
        return self.parent.chain_from_child(input_pos)

    def json_encode(self) -> dict:
        return {"input_size": self.input_size.json_encode(), "type": "rcol"}

    def copy(self) -> "RecurrentOutputLayer":
        """A fresh layer of the same size bound to the same parent."""
        return RecurrentOutputLayer(self.input_size, self.parent)