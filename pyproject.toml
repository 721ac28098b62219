[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "neuralflows"
version = "0.1.0"
description = "Building blocks for small neural networks: tensors, vectors, image operations, dense, activation and pooling layers with back-propagated chains, and a 2-D k-d tree."
requires-python = ">=3.10"
dependencies = []
keywords = ["neural network", "tensor", "layers", "backpropagation", "image processing", "kd-tree"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Artificial Intelligence",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["neuralflows"]

[tool.pytest.ini_options]
addopts = "-ra"
