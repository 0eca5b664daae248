import math
from typing import Optional, Sequence, Tuple

import einops
import jax.numpy as jnp
import numpy as np

from .batch import BATCH_WORD_BITS, hilbert_encode
from .curve import HilbertCurve
from .logger import logger

# --- Grid ordering ---

def _bits_for(size: int) -> int:
    """Smallest b >= 1 with 2**b >= size."""
    return max(1, (int(size) - 1).bit_length())

def grid_points(shape: Sequence[int]) -> np.ndarray:
    """
    All integer points of a grid, in row-major order.

    Args:
        shape: Grid size along each dimension.

    Returns:
        Array of shape [prod(shape), len(shape)].
    """
    mesh = np.stack(np.meshgrid(*[np.arange(s) for s in shape], indexing='ij'))
    return einops.rearrange(mesh, 'n ... -> (...) n')

def hilbert_indices(shape: Sequence[int]) -> jnp.ndarray:
    """
    Generate Hilbert curve order for an n-dimensional grid.

    Every cell is placed on the curve of the smallest enclosing 2**b cube
    and the cells are sorted by their index on it, so grids whose sides are
    not powers of two keep the curve's order with the outside cells skipped.
    Cost grows with the number of cells, not with the enclosing cube.

    Args:
        shape: Grid size along each dimension.

    Returns:
        1D JAX array where result[i] is the row-major index of the i-th cell
        in the Hilbert curve sequence.
    """
    shape = tuple(int(s) for s in shape)
    total = math.prod(shape)
    if total == 0:
        return jnp.array([], dtype=jnp.int32)

    dims = len(shape)
    bits = _bits_for(max(shape))
    logger.debug(f"Ordering grid {shape} along a {dims}-D Hilbert curve of order {bits}")

    # grid_points is row-major, so the argsort is the row-major index of each cell
    indices = hilbert_sort(grid_points(shape), bits=bits)
    return jnp.asarray(indices, dtype=jnp.int32)

def inverse_permutation(idx: jnp.ndarray, total_size: int) -> jnp.ndarray:
    """
    Compute the inverse permutation of the given indices.
    Maps target index (e.g., row-major) back to source index (e.g., Hilbert sequence).

    Args:
        idx: Array where idx[i] is the target index for source index i.
        total_size: The total number of possible target indices.

    Returns:
        Array `inv` of size `total_size` such that inv[k] = h if idx[h] = k,
        and inv[k] = -1 if target index k is not present in `idx`.
    """
    inv = jnp.full((total_size,), -1, dtype=jnp.int32)
    source_indices = jnp.arange(idx.shape[0], dtype=jnp.int32)
    return inv.at[idx].set(source_indices)

# --- Point sorting ---

def hilbert_sort(points, bits: Optional[int] = None) -> np.ndarray:
    """
    Sort integer points along the Hilbert curve.

    Args:
        points: Integer array-like of shape [N, n].
        bits: Bits per coordinate. Inferred from the largest coordinate when None.

    Returns:
        argsort indices, points[result[0]] has the smallest Hilbert index.
    """
    points = np.asarray(points)
    if points.ndim != 2:
        raise ValueError(f"Points must have shape [N, n], got {points.shape}")
    if points.shape[0] == 0:
        return np.array([], dtype=np.int64)
    dims = points.shape[1]
    if bits is None:
        bits = _bits_for(int(points.max()) + 1)

    if bits * dims <= BATCH_WORD_BITS:
        codes = np.asarray(hilbert_encode(points, bits))
    else:
        logger.debug(f"Index of {bits * dims} bits exceeds the batch word, sorting with scalar transforms")
        codes = HilbertCurve.create(bits=bits, dims=dims, code_bits=bits * dims).encode_many(points)
    return np.argsort(codes, kind='stable')

# --- Sequence reordering ---

def hilbert_reorder(x: jnp.ndarray, grid_shape: Sequence[int]) -> Tuple[jnp.ndarray, jnp.ndarray]:
    """
    Reorder the sequence axis of `x` from row-major to Hilbert curve order.

    Args:
        x: Tensor of shape [B, N, ...] whose N items are the cells of
           `grid_shape` in row-major order (e.g. image or video patches).
        grid_shape: Grid the sequence is laid out on, prod(grid_shape) == N.

    Returns:
        Tuple of:
        - x_hilbert: Reordered tensor [B, N, ...].
        - inv_idx: Inverse permutation [N] (row-major index -> Hilbert sequence index).
    """
    total = math.prod(grid_shape)
    if x.shape[1] != total:
        raise ValueError(f"Sequence length {x.shape[1]} does not match grid {tuple(grid_shape)} ({total} cells)")
    idx = hilbert_indices(grid_shape)
    inv_idx = inverse_permutation(idx, total)
    return x[:, idx], inv_idx

def hilbert_restore(x: jnp.ndarray, inv_idx: jnp.ndarray) -> jnp.ndarray:
    """Inverse of `hilbert_reorder`: Hilbert-ordered [B, N, ...] back to row-major order."""
    if x.shape[1] != inv_idx.shape[0]:
        raise ValueError(f"Sequence length {x.shape[1]} does not match inverse index size {inv_idx.shape[0]}")
    return x[:, inv_idx]
