# neuralflows

Building blocks for small neural networks, in pure Python with no dependencies.

- `neuralflows.vectors`: `VectorN`, `Vector2`, `Vector3` and `Vector4`, immutable vectors used for sizes, positions and kernel shapes, with JSON encoding.
- `neuralflows.tensor`: `Tensor`, a width × height × depth grid stored channel by channel, with JSON encoding and scalar arithmetic.
- `neuralflows.matrix`: `TMatrix`, a 2 × 2 transformation matrix.
- `neuralflows.ops`: layout conversion, normalisation, convolution, max pooling, padding, up/down-sampling, resizing, rotation, channel summing, element-wise sum and product, and `PrefixSum2D`.
- `neuralflows.layers`: the `Layer` and `Learnable` interfaces and the layers `InputLayer`, `FFLayer`, `FlatteningLayer`, `MaxPoolingLayer`, `BatchNormalizationLayer`, `OutputLayer`, `ReLU`, `Sigmoid`, `Softmax` and `RecurrentOutputLayer`.
- `neuralflows.kdtree`: `KDTree` and `PointData` for nearest-neighbour lookups in the plane.
- `neuralflows.files`: `CSVReader` and `ImageRepresentation` for delimiter-separated metadata files.

## Installation

```
pip install .
```

## Tensors and image operations

```python
from neuralflows import ops
from neuralflows.tensor import Tensor

image = Tensor(4, 4, 1, [0, 51, 102, 153, 204, 255, 0, 51,
                         102, 153, 204, 255, 0, 51, 102, 153])
scaled = ops.normalize(image)          # values divided by 255
pooled = ops.max_pool(scaled, 2, 2)    # 2 x 2 x 1
bigger = ops.resize(image, 8, 8)       # nearest-neighbour resampling
print(pooled.get_cell(0, 0, 0), bigger.size)
```

`Tensor(w, h, d, data, input_type)` takes flat data either channel by channel (`input_type=0`) or with each pixel's channels next to each other, as in RGB images (`input_type=1`). `json_encode()` and `Tensor.from_json()` round-trip a tensor through JSON-ready data.

## Wiring layers by hand

Each layer keeps one output per time step and links to its neighbours through `prev_layer` and `next_layer`. `get_chain` returns the derivative of the error with respect to an input position, taken from the layers after it and memoised per time step; `OutputLayer` supplies the difference between its input and the target.

```python
import random

from neuralflows.layers.activations import Sigmoid
from neuralflows.layers.feedforward import FFLayer
from neuralflows.layers.structural import InputLayer, OutputLayer
from neuralflows.tensor import Tensor
from neuralflows.vectors import Vector3

layers = [
    InputLayer(Vector3(3, 1, 1)),
    FFLayer(Vector3(3, 1, 1), 2),
    Sigmoid(Vector3(2, 1, 1)),
    OutputLayer(Vector3(2, 1, 1)),
]
for before, after in zip(layers, layers[1:]):
    before.next_layer = after
    after.prev_layer = before

dense = layers[1]
dense.random_init(random.Random(1))

data = Tensor(3, 1, 1, [0.2, 0.5, 0.9])
for layer in layers:
    layer.run(data)
    data = layer.get_output(layer.time)
for layer in layers:
    layer.inc_time()

layers[-1].set_target(Tensor(2, 1, 1, [1.0, 0.0]))
for i, gradient in enumerate(dense.weights_gradient()):
    dense.set_weight(i, dense.get_weight(i) - 0.1 * gradient)

for layer in layers:
    layer.reset_state()
```

Every layer encodes its structure with `json_encode()`, and each layer class rebuilds itself with its own `from_json()`; `copy()` gives a fresh, unlinked layer with the same parameters. `FFLayer.reproduce(other, seed)` makes a child whose weights each come at random from one of the two parents.

`RecurrentOutputLayer` passes its input through and asks its `parent` object, which must provide `chain_from_child(input_pos)`, for the chain.

## Nearest-neighbour search

```python
from neuralflows.kdtree import KDTree, PointData

tree = KDTree([PointData((7, 2)), PointData((5, 4)), PointData((2, 3))])
nearest, distance_squared = tree.find_nearest_neighbour((6, 3))
print(nearest.point, distance_squared)
```

## Reading metadata files

```python
from neuralflows.files import CSVReader, ImageRepresentation

reader = CSVReader("metadata.csv", ";")
reader.read_contents()
images = [ImageRepresentation(path, value) for path, value in reader.contents]
```

A missing file leaves `contents` empty.

## What the package does not do

The layers are the whole of it. There is no container that builds a network from a list of layers, links them, feeds it and saves or loads it as one document; the layers have to be created, linked, run and reset by hand as shown above. There is no convolution layer and no complete recurrent layer (only the closing `RecurrentOutputLayer`), no training optimizer that applies gradients over many steps, and no single function that rebuilds a layer of any kind from its JSON `type` tag. There is no command-line program.

## Running the tests

```
pip install .[test]
pytest
```