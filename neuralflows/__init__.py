"""Neural network building blocks: tensors, vectors, image operations, layers and a k-d tree."""

__version__ = "0.1.0"