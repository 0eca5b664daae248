import os
os.environ['JAX_PLATFORMS'] = 'cpu'

import itertools

import jax.numpy as jnp
import numpy as np
import pytest

from hilbertax import (
    HilbertPreconditionError,
    axes_to_transpose,
    batch_axes_to_transpose,
    batch_interleave_bits,
    batch_transpose_to_axes,
    batch_uninterleave_bits,
    hilbert_decode,
    hilbert_encode,
    interleave_bits,
)

def scalar_transpose(points, bits):
    out = []
    for p in points:
        x = list(p)
        axes_to_transpose(x, bits, len(x))
        out.append(x)
    return np.array(out)

def test_reference_point():
    codes = hilbert_encode([[5, 10, 20]], bits=5)
    assert codes.dtype == jnp.uint32
    np.testing.assert_array_equal(codes, [7865])
    np.testing.assert_array_equal(batch_axes_to_transpose([[5, 10, 20]], 5), [[10, 14, 27]])
    np.testing.assert_array_equal(hilbert_decode([7865], bits=5, dims=3), [[5, 10, 20]])

@pytest.mark.parametrize("dims,bits", [(1, 3), (2, 3), (3, 3), (4, 2)])
def test_matches_scalar_transforms(dims, bits):
    points = np.array(list(itertools.product(range(1 << bits), repeat=dims)))
    transposed = batch_axes_to_transpose(points, bits)
    np.testing.assert_array_equal(transposed, scalar_transpose(points, bits))

    codes = batch_interleave_bits(transposed, bits)
    expected = [interleave_bits(list(t), bits, dims) for t in np.asarray(transposed).tolist()]
    np.testing.assert_array_equal(codes, expected)

    np.testing.assert_array_equal(batch_uninterleave_bits(codes, bits, dims), transposed)
    np.testing.assert_array_equal(batch_transpose_to_axes(transposed, bits), points)

def test_curve_is_a_bijection():
    dims, bits = 3, 3
    codes = np.arange(1 << (bits * dims))
    points = np.asarray(hilbert_decode(codes, bits, dims))
    assert len({tuple(p) for p in points.tolist()}) == len(codes)
    np.testing.assert_array_equal(hilbert_encode(points, bits), codes)
    # Consecutive indices are neighbours
    steps = np.abs(np.diff(points.astype(np.int64), axis=0)).sum(axis=-1)
    assert np.all(steps == 1)

def test_wide_coordinates_without_index():
    """Transforms alone only need bits <= 32, the index is not formed."""
    rng = np.random.default_rng(0)
    for dims, bits in [(4, 16), (2, 32)]:
        points = rng.integers(0, 1 << bits, size=(64, dims), dtype=np.uint64)
        transposed = batch_axes_to_transpose(points, bits)
        np.testing.assert_array_equal(transposed, scalar_transpose(points.tolist(), bits))
        np.testing.assert_array_equal(batch_transpose_to_axes(transposed, bits), points)

def test_leading_batch_dimensions():
    rng = np.random.default_rng(1)
    points = rng.integers(0, 32, size=(2, 4, 3))
    codes = hilbert_encode(points, bits=5)
    assert codes.shape == (2, 4)
    decoded = hilbert_decode(codes, bits=5, dims=3)
    assert decoded.shape == (2, 4, 3)
    np.testing.assert_array_equal(decoded, points)

def test_empty_batch():
    codes = hilbert_encode(np.zeros((0, 3), dtype=np.int32), bits=5)
    assert codes.shape == (0,)

@pytest.mark.parametrize("call", [
    lambda: hilbert_encode([[1, 2, 3]], bits=11),
    lambda: hilbert_encode([[1, 2, 32]], bits=5),
    lambda: hilbert_encode([[1, -2, 3]], bits=5),
    lambda: hilbert_encode([[1.0, 2.0, 3.0]], bits=5),
    lambda: hilbert_encode(3, bits=5),
    lambda: hilbert_encode([[1, 2, 3]], bits=0),
    lambda: batch_axes_to_transpose([[1, 2]], bits=33),
    lambda: hilbert_decode([1 << 15], bits=5, dims=3),
    lambda: hilbert_decode([1], bits=11, dims=3),
    lambda: batch_uninterleave_bits([1], bits=5, dims=0),
])
def test_precondition_violations_are_rejected(call):
    with pytest.raises(HilbertPreconditionError):
        call()
