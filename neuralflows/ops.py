"""Tensor operations: layouts, normalisation, convolution, pooling, resampling."""

from __future__ import annotations

import math
from typing import Any, Sequence

from neuralflows.matrix import TMatrix
from neuralflows.tensor import Tensor
from neuralflows.vectors import Vector2, Vector3, _truncating_div

_INT32_MAX = 2**31 - 1


def convert(data: Sequence[Any], w: int, h: int, d: int, input_type: int, output_type: int) -> list:
    """Reorder flat data between layouts.

    Layout 0 keeps every channel contiguous; layout 1 interleaves the
    channels of each pixel (RGB-like ordering).
    """
    values = list(data)
    count = w * h * d
    if len(values) != count:
        raise ValueError(f"expected {count} values, got {len(values)}")
    if input_type == output_type:
        return values
    plane = w * h
    if input_type == 1 and output_type == 0:
        return [values[d * i + c] for c in range(d) for i in range(plane)]
    if input_type == 0 and output_type == 1:
        return [values[plane * c + i] for i in range(plane) for c in range(d)]
    raise ValueError(f"unsupported layout conversion: {input_type} -> {output_type}")


def normalize(tensor: Tensor) -> Tensor:
    """Scale byte values into [0, 1] by dividing by 255."""
    return Tensor(tensor.w, tensor.h, tensor.d, [value / 255.0 for value in tensor])


def after_convolution_size(kernel_size: int, input_size: int, padding: int, stride: int) -> int:
    return _truncating_div(input_size + 2 * padding - kernel_size, stride) + 1


def add_padding(tensor: Tensor, padding_x: int, padding_y: int) -> Tensor:
    """Surround every channel with a border of zeros."""
    padded = Tensor(tensor.w + padding_x * 2, tensor.h + padding_y * 2, tensor.d)
    for c in range(tensor.d):
        for y in range(tensor.h):
            for x in range(tensor.w):
                padded.set_cell(x + padding_x, y + padding_y, c, tensor.get_cell(x, y, c))
    return padded


def convolve(
    kernel: Tensor,
    tensor: Tensor,
    padding_x: int = 0,
    padding_y: int = 0,
    stride_x: int = 1,
    stride_y: int = 1,
) -> Tensor:
    """Convolve each channel with the matching kernel channel."""
    if not (kernel.w % 2 and kernel.h % 2 and kernel.d == tensor.d):
        raise ValueError("wrong dimensions of kernel!")
    size_x = after_convolution_size(kernel.w, tensor.w, padding_x, stride_x)
    size_y = after_convolution_size(kernel.h, tensor.h, padding_y, stride_y)
    if size_x <= 0 or size_y <= 0:
        raise ValueError("kernel bigger than input!")

    result = Tensor(size_x, size_y, tensor.d)
    padded = add_padding(tensor, padding_x, padding_y)
    for y in range(size_y):
        for x in range(size_x):
            origin_x, origin_y = x * stride_x, y * stride_y
            for c in range(padded.d):
                total = sum(
                    kernel.get_cell(kx, ky, c) * padded.get_cell(origin_x + kx, origin_y + ky, c)
                    for ky in range(kernel.h)
                    for kx in range(kernel.w)
                )
                result.set_cell(x, y, c, total)
    return result


def after_max_pool_size(kernel_size: int, input_size: int) -> int:
    return input_size // kernel_size


def max_pool(tensor: Tensor, kernel_x: int, kernel_y: int) -> Tensor:
    """Take the maximum (never below zero) of each kernel-sized block."""
    output = Tensor(
        after_max_pool_size(kernel_x, tensor.w),
        after_max_pool_size(kernel_y, tensor.h),
        tensor.d,
    )
    for c in range(tensor.d):
        for y in range(0, tensor.h, kernel_y):
            for x in range(0, tensor.w, kernel_x):
                block = [
                    tensor.get_cell(x + kx, y + ky, c)
                    for ky in range(kernel_y)
                    for kx in range(kernel_x)
                ]
                output.set_cell(x // kernel_x, y // kernel_y, c, max([0, *block]))
    return output


def average_3_layers(tensor: Tensor) -> Tensor:
    """Collapse a three-channel byte image into one channel by integer mean."""
    if tensor.d != 3:
        raise ValueError("image must have 3 layers!")
    values = [
        sum(tensor.get_cell(x, y, c) for c in range(3)) // 3
        for y in range(tensor.h)
        for x in range(tensor.w)
    ]
    return Tensor(tensor.w, tensor.h, 1, values)


def distance_squared(p1: Sequence[float], p2: Sequence[float]) -> float:
    return (p1[0] - p2[0]) ** 2 + (p1[1] - p2[1]) ** 2


def _check_method(method: int) -> None:
    if method != 0:
        raise ValueError(f"unsupported resampling method: {method}")


def downsample(tensor: Tensor, dest_x: int, dest_y: int, method: int = 0) -> Tensor:
    """Shrink by sampling the source cell each destination cell maps to."""
    factor_x = dest_x / tensor.w
    factor_y = dest_y / tensor.h
    if factor_x == 1 and factor_y == 1:
        return tensor.copy()
    _check_method(method)
    output = Tensor(dest_x, dest_y, tensor.d)
    for c in range(output.d):
        for y in range(output.h):
            source_y = int(y / factor_y)
            for x in range(output.w):
                output.set_cell(x, y, c, tensor.get_cell(int(x / factor_x), source_y, c))
    return output


def upsample(tensor: Tensor, dest_x: int, dest_y: int, method: int = 0) -> Tensor:
    """Enlarge by nearest-neighbour sampling."""
    factor_x = dest_x / tensor.w
    factor_y = dest_y / tensor.h
    if factor_x == 1 and factor_y == 1:
        return tensor.copy()
    _check_method(method)
    result = Tensor(dest_x, dest_y, tensor.d)
    for c in range(result.d):
        for y in range(result.h):
            source_y = int(y / factor_y)
            for x in range(result.w):
                result.set_cell(x, y, c, tensor.get_cell(int(x / factor_x), source_y, c))
    return result


def resize(tensor: Tensor, dest_x: int, dest_y: int) -> Tensor:
    """Upsample where the target is larger, then downsample where smaller."""
    sampled = upsample(tensor, max(tensor.w, dest_x), max(tensor.h, dest_y), 0)
    return downsample(sampled, min(sampled.w, dest_x), min(sampled.h, dest_y), 0)


def transform(tensor: Tensor, matrix: TMatrix) -> Tensor:
    """Map every pixel through ``matrix``; the result is sized to fit the corners."""
    max_x = max_y = 0
    min_x = min_y = _INT32_MAX
    corners = (
        Vector2(0, 0),
        Vector2(tensor.w - 1, 0),
        Vector2(tensor.w - 1, tensor.h - 1),
        Vector2(0, tensor.h - 1),
    )
    for corner in corners:
        moved = matrix * corner
        x, y = int(moved.x), int(moved.y)
        max_x, min_x = max(x, max_x), min(x, min_x)
        max_y, min_y = max(y, max_y), min(y, min_y)

    result = Tensor(max_x - min_x + 1, max_y - min_y + 1, tensor.d)
    shift = Vector2(-min_x, -min_y)
    for y in range(tensor.h):
        for x in range(tensor.w):
            target = Vector2(x, y) * matrix + shift
            for c in range(tensor.d):
                result.set_cell(target.x, target.y, c, tensor.get_cell(x, y, c))
    return result


def rotate(tensor: Tensor, rad: float) -> Tensor:
    """Rotate anticlockwise by ``rad`` radians."""
    sin, cos = math.sin(rad), math.cos(rad)
    return transform(tensor, TMatrix(cos, -sin, sin, cos))


def sum_layers(tensor: Tensor) -> Tensor:
    """Add all channels together into a single channel."""
    values = [
        sum(tensor.get_cell(x, y, c) for c in range(tensor.d))
        for y in range(tensor.h)
        for x in range(tensor.w)
    ]
    return Tensor(tensor.w, tensor.h, 1, values)


def _check_same_size(first: Tensor, second: Tensor) -> None:
    if first.size != second.size:
        raise ValueError("incorrect input sizes for element wise multiplication!")


def element_wise_product(first: Tensor, second: Tensor) -> Tensor:
    _check_same_size(first, second)
    return Tensor.of_size(first.size, [a * b for a, b in zip(first, second)])


def element_wise_sum(first: Tensor, second: Tensor) -> Tensor:
    _check_same_size(first, second)
    return Tensor.of_size(first.size, [a + b for a, b in zip(first, second)])


class PrefixSum2D(Tensor):
    """Per-channel two-dimensional running-sum table built from a tensor."""

    def __init__(self, tensor: Tensor) -> None:
        super().__init__(tensor.w, tensor.h, tensor.d)
        for c in range(self.d):
            for x in range(self.w):
                self.set_cell(x, 0, c, tensor.get_cell(x, 0, c))
            for y in range(self.h):
                self.set_cell(0, y, c, tensor.get_cell(0, y, c))
        for z in range(tensor.d):
            for y in range(1, tensor.h):
                for x in range(1, tensor.w):
                    value = (
                        self.get_cell(x - 1, y - 1, z)
                        + self.sum(Vector3(0, y, z), Vector3(x - 1, y, z))
                        + self.sum(Vector3(x, 0, z), Vector3(x, y - 1, z))
                    )
                    self.set_cell(x, y, z, value)

    def sum(self, nw: Sequence[int], se: Sequence[int]) -> Any:
        """Sum of the rectangle between the north-west and south-east corners."""
        nw_x, nw_y, nw_z = nw
        se_x, se_y, se_z = se
        if nw_x == 0 and nw_y == 0:
            return self.get_cell(se_x, se_y, se_z)
        if nw_x == 0:
            return self.get_cell(se_x, se_y, se_z) - self.get_cell(se_x, nw_y - 1, nw_z)
        if nw_y == 0:
            return self.get_cell(se_x, se_y, se_z) - self.get_cell(nw_x - 1, se_y, nw_z)
        return (
            self.get_cell(se_x, se_y, se_z)
            - self.get_cell(se_x - 1, se_y, se_z)
            - self.get_cell(se_x, se_y - 1, se_z)
            + self.get_cell(nw_x - 1, nw_y - 1, nw_z)
        )