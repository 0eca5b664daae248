import os
os.environ['JAX_PLATFORMS'] = 'cpu'

import dataclasses

import jax
import pytest

from hilbertax import AxesCoords, HilbertPreconditionError, TransposeCoords

def test_axes_to_index_and_back():
    axes = AxesCoords.of(5, 10, 20, bits=5)
    assert axes.dims == 3

    transpose = axes.to_transpose()
    assert isinstance(transpose, TransposeCoords)
    assert transpose.values == [10, 14, 27]
    # Same storage, reinterpreted
    assert transpose.values is axes.values
    assert transpose.to_index() == 7865

    restored = TransposeCoords.from_index(7865, bits=5, dims=3).to_axes()
    assert isinstance(restored, AxesCoords)
    assert restored.values == [5, 10, 20]

def test_tags_are_frozen():
    axes = AxesCoords.of(1, 2, bits=2)
    with pytest.raises(dataclasses.FrozenInstanceError):
        axes.bits = 3

def test_bits_are_static_in_the_pytree():
    axes = AxesCoords.of(1, 2, 3, bits=2)
    assert jax.tree_util.tree_leaves(axes) == [1, 2, 3]
    doubled = jax.tree_util.tree_map(lambda v: v * 2, axes)
    assert isinstance(doubled, AxesCoords)
    assert doubled.bits == 2
    assert doubled.values == [2, 4, 6]

def test_invalid_coords_are_rejected():
    with pytest.raises(HilbertPreconditionError):
        AxesCoords.of(1, 4, bits=2).to_transpose()
    with pytest.raises(HilbertPreconditionError):
        TransposeCoords.from_index(1 << 6, bits=2, dims=3)
    with pytest.raises(HilbertPreconditionError):
        TransposeCoords(values=[1, 2, 3], bits=22).to_index()
