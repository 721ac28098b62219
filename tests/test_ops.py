import math

import pytest

from neuralflows import ops
from neuralflows.matrix import TMatrix
from neuralflows.tensor import Tensor


def test_convert_interleaved_to_planar():
    data = ["r0", "g0", "b0", "r1", "g1", "b1"]
    assert ops.convert(data, 2, 1, 3, 1, 0) == ["r0", "r1", "g0", "g1", "b0", "b1"]


def test_convert_round_trip():
    data = list(range(24))
    planar = ops.convert(data, 2, 4, 3, 1, 0)
    assert ops.convert(planar, 2, 4, 3, 0, 1) == data


def test_convert_same_type_copies():
    data = [1, 2, 3]
    result = ops.convert(data, 3, 1, 1, 0, 0)
    assert result == data
    assert result is not data


def test_convert_unknown_layout():
    with pytest.raises(ValueError):
        ops.convert([1], 1, 1, 1, 0, 2)


def test_normalize_bounds():
    result = ops.normalize(Tensor(2, 1, 1, [0, 255]))
    assert result.data == [0.0, 1.0]
    assert result.size == Tensor(2, 1, 1).size


def test_same_padding_keeps_size():
    for kernel in (1, 3, 5):
        assert ops.after_convolution_size(kernel, 9, (kernel - 1) // 2, 1) == 9


def test_convolve_with_scalar_kernel_scales():
    tensor = Tensor(3, 3, 1, list(range(9)))
    kernel = Tensor(1, 1, 1, [2])
    assert ops.convolve(kernel, tensor) == tensor * 2


def test_convolve_output_size_matches_formula():
    tensor = Tensor(7, 5, 2)
    kernel = Tensor(3, 3, 2)
    result = ops.convolve(kernel, tensor, 1, 0, 2, 1)
    assert result.w == ops.after_convolution_size(3, 7, 1, 2)
    assert result.h == ops.after_convolution_size(3, 5, 0, 1)
    assert result.d == 2


def test_convolve_rejects_even_kernel():
    with pytest.raises(ValueError):
        ops.convolve(Tensor(2, 3, 1), Tensor(4, 4, 1))


def test_convolve_rejects_depth_mismatch():
    with pytest.raises(ValueError):
        ops.convolve(Tensor(3, 3, 2), Tensor(4, 4, 1))


def test_convolve_rejects_oversized_kernel():
    with pytest.raises(ValueError):
        ops.convolve(Tensor(5, 5, 1), Tensor(3, 3, 1))


def test_max_pool_blocks():
    tensor = Tensor(4, 4, 1, list(range(16)))
    result = ops.max_pool(tensor, 2, 2)
    assert result.size == Tensor(2, 2, 1).size
    assert result.data == [5, 7, 13, 15]


def test_max_pool_never_below_zero():
    result = ops.max_pool(Tensor(2, 2, 1, [-1, -2, -3, -4]), 2, 2)
    assert result.data == [0]


def test_add_padding():
    tensor = Tensor(2, 2, 1, [1, 2, 3, 4])
    padded = ops.add_padding(tensor, 1, 2)
    assert (padded.w, padded.h) == (4, 6)
    assert sum(padded) == sum(tensor)
    for y in range(2):
        for x in range(2):
            assert padded.get_cell(x + 1, y + 2, 0) == tensor.get_cell(x, y, 0)
    assert padded.get_cell(0, 0, 0) == 0


def test_average_3_layers():
    tensor = Tensor(1, 1, 3, [3, 4, 5])
    assert ops.average_3_layers(tensor).data == [4]


def test_average_3_layers_requires_three_channels():
    with pytest.raises(ValueError):
        ops.average_3_layers(Tensor(1, 1, 2))


def test_distance_squared():
    assert ops.distance_squared((0, 0), (3, 4)) == 25


def test_upsample_replicates():
    result = ops.upsample(Tensor(1, 1, 1, [9]), 2, 3, 0)
    assert result.size == Tensor(2, 3, 1).size
    assert set(result) == {9}


def test_downsample_takes_sampled_cell():
    tensor = Tensor(2, 2, 1, [1, 2, 3, 4])
    assert ops.downsample(tensor, 1, 1, 0).data == [1]


def test_same_size_resampling_is_copy():
    tensor = Tensor(2, 2, 1, [1, 2, 3, 4])
    assert ops.upsample(tensor, 2, 2, 0) == tensor
    assert ops.downsample(tensor, 2, 2, 0) == tensor


def test_unsupported_method():
    with pytest.raises(ValueError):
        ops.upsample(Tensor(1, 1, 1), 2, 2, 1)


def test_resize_size_and_round_trip():
    tensor = Tensor(2, 3, 1, [1, 2, 3, 4, 5, 6])
    bigger = ops.resize(tensor, 4, 6)
    assert bigger.size == Tensor(4, 6, 1).size
    assert ops.resize(bigger, 2, 3) == tensor
    assert ops.resize(tensor, 2, 3) == tensor


def test_transform_identity():
    tensor = Tensor(3, 2, 2, list(range(12)))
    assert ops.transform(tensor, TMatrix(1, 0, 0, 1)) == tensor


def test_rotate_quarter_turn():
    tensor = Tensor(2, 1, 1, [5, 7])
    rotated = ops.rotate(tensor, math.pi / 2)
    assert (rotated.w, rotated.h) == (1, 2)
    assert rotated.data == [5, 7]


def test_sum_layers():
    tensor = Tensor(2, 1, 3, [1, 10, 2, 20, 3, 30])
    result = ops.sum_layers(tensor)
    assert result.d == 1
    assert result.get_cell(0, 0, 0) == sum([1, 2, 3])
    assert result.get_cell(1, 0, 0) == sum([10, 20, 30])


def test_element_wise_neutral_elements():
    tensor = Tensor(2, 2, 1, [1, 2, 3, 4])
    assert ops.element_wise_product(tensor, Tensor(2, 2, 1, [1] * 4)) == tensor
    assert ops.element_wise_sum(tensor, Tensor(2, 2, 1)) == tensor


def test_element_wise_sum_commutes():
    first = Tensor(2, 1, 1, [1, 2])
    second = Tensor(2, 1, 1, [5, 9])
    assert ops.element_wise_sum(first, second) == ops.element_wise_sum(second, first)


def test_element_wise_size_mismatch():
    with pytest.raises(ValueError):
        ops.element_wise_product(Tensor(2, 1, 1), Tensor(1, 2, 1))
    with pytest.raises(ValueError):
        ops.element_wise_sum(Tensor(2, 1, 1), Tensor(1, 2, 1))


def test_prefix_sum_edges_copy_input():
    tensor = Tensor(3, 3, 1, list(range(1, 10)))
    prefix = ops.PrefixSum2D(tensor)
    for x in range(3):
        assert prefix.get_cell(x, 0, 0) == tensor.get_cell(x, 0, 0)
    for y in range(3):
        assert prefix.get_cell(0, y, 0) == tensor.get_cell(0, y, 0)


def test_prefix_sum_from_origin_is_cell():
    prefix = ops.PrefixSum2D(Tensor(3, 3, 1, list(range(1, 10))))
    assert prefix.sum((0, 0, 0), (2, 1, 0)) == prefix.get_cell(2, 1, 0)


def test_prefix_sum_of_zeros():
    prefix = ops.PrefixSum2D(Tensor(3, 3, 2))
    assert set(prefix) == {0}
    assert prefix.sum((1, 1, 1), (2, 2, 1)) == 0