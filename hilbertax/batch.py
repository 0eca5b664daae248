"""
Vectorised versions of the transforms in `transform.py`, operating on whole
arrays of points with jax.

Points are arrays of shape [..., n] and are processed as uint32, so the
index of a point (bits * n bits) must fit in 32 bits. jax arrays are
immutable: every function returns a new array instead of working in place.

The public functions are host-side boundaries: they validate concrete
inputs with numpy, then hand off to jit-compiled kernels with `bits` static.
"""
from functools import partial

import jax
import jax.numpy as jnp
import numpy as np

from .errors import HilbertPreconditionError
from .logger import logger
from .transform import check_shape

BATCH_WORD_BITS = 32

# --- Kernels ---

def _invert_or_exchange(cols, i, Q):
    """
    One step of the bit-plane Q rotation, shared by both transforms.

    Args:
        cols: Per-dimension uint32 columns, updated in place (as a list).
        i: Dimension being compared against dimension 0.
        Q: Bit-plane value, a power of two >= 2.
    """
    # Lanes where X[i] has bit Q set invert the low bits of X[0],
    # the others swap the low bits of X[0] and X[i]
    P = jnp.uint32(Q - 1)
    c0, ci = cols[0], cols[i]
    hit = (ci & jnp.uint32(Q)) != 0
    t = (c0 ^ ci) & P
    cols[0] = jnp.where(hit, c0 ^ P, c0 ^ t)
    if i != 0:
        cols[i] = jnp.where(hit, ci, ci ^ t)

@partial(jax.jit, static_argnums=(1,))
def _axes_to_transpose(x: jnp.ndarray, bits: int) -> jnp.ndarray:
    """
    Vectorised `transform.axes_to_transpose`.

    Args:
        x: uint32 axes coordinates [..., n].
        bits: Bits per coordinate (static).

    Returns:
        uint32 Hilbert transpose [..., n].
    """
    n = x.shape[-1]
    # One uint32 column per dimension, bit-planes are unrolled at trace time
    cols = [x[..., i] for i in range(n)]
    M = 1 << (bits - 1)

    # Inverse undo, coarsest bit-plane first
    Q = M
    while Q > 1:
        for i in range(n):
            _invert_or_exchange(cols, i, Q)
        Q >>= 1

    # Gray encode
    for i in range(1, n):
        cols[i] = cols[i] ^ cols[i - 1]
    t = jnp.zeros_like(cols[0])
    Q = M
    while Q > 1:
        t = jnp.where((cols[n - 1] & jnp.uint32(Q)) != 0, t ^ jnp.uint32(Q - 1), t)
        Q >>= 1
    return jnp.stack([c ^ t for c in cols], axis=-1)

@partial(jax.jit, static_argnums=(1,))
def _transpose_to_axes(x: jnp.ndarray, bits: int) -> jnp.ndarray:
    """
    Vectorised `transform.transpose_to_axes`.

    Args:
        x: uint32 Hilbert transpose [..., n].
        bits: Bits per coordinate (static).

    Returns:
        uint32 axes coordinates [..., n].
    """
    n = x.shape[-1]
    cols = [x[..., i] for i in range(n)]
    N = 2 << (bits - 1)

    # Gray decode by H ^ (H/2)
    t = cols[n - 1] >> 1
    for i in range(n - 1, 0, -1):
        cols[i] = cols[i] ^ cols[i - 1]
    cols[0] = cols[0] ^ t

    # Undo excess work, finest bit-plane first, highest dimension first
    Q = 2
    while Q != N:
        for i in range(n - 1, -1, -1):
            _invert_or_exchange(cols, i, Q)
        Q <<= 1
    return jnp.stack(cols, axis=-1)

@partial(jax.jit, static_argnums=(1,))
def _interleave_bits(x: jnp.ndarray, bits: int) -> jnp.ndarray:
    """
    Vectorised `transform.interleave_bits`.

    Args:
        x: uint32 Hilbert transpose [..., n], bits * n <= 32.
        bits: Bits per coordinate (static).

    Returns:
        uint32 Hilbert indices [...].
    """
    n = x.shape[-1]
    code = jnp.zeros(x.shape[:-1], dtype=jnp.uint32)
    for k in range(bits):
        # Bit k of X[j] lands on bit k*n + (n-1-j)
        for j in range(n):
            bit = (x[..., j] >> jnp.uint32(k)) & jnp.uint32(1)
            code = code | (bit << jnp.uint32(k * n + (n - 1 - j)))
    return code

@partial(jax.jit, static_argnums=(1, 2))
def _uninterleave_bits(code: jnp.ndarray, bits: int, dims: int) -> jnp.ndarray:
    """
    Vectorised `transform.uninterleave_bits`.

    Args:
        code: uint32 Hilbert indices [...].
        bits: Bits per coordinate (static).
        dims: Number of dimensions (static).

    Returns:
        uint32 Hilbert transpose [..., dims].
    """
    cols = [jnp.zeros_like(code) for _ in range(dims)]
    for i in range(bits):
        # Bit dims*i + j of the index is bit i of X[dims-1-j]
        for j in range(dims):
            bit = (code >> jnp.uint32(dims * i + j)) & jnp.uint32(1)
            cols[dims - 1 - j] = cols[dims - 1 - j] | (bit << jnp.uint32(i))
    return jnp.stack(cols, axis=-1)

# --- Boundary validation ---

def _reject(message: str):
    logger.debug(f"Rejecting batch call: {message}")
    raise HilbertPreconditionError(message)

def _as_integer_array(values, what: str) -> np.ndarray:
    arr = np.asarray(values)
    if arr.dtype == np.bool_ or not np.issubdtype(arr.dtype, np.integer):
        _reject(f"{what} must be an integer array, got dtype {arr.dtype}")
    return arr

def _prepare_points(points, bits: int, with_index: bool) -> jnp.ndarray:
    arr = _as_integer_array(points, "Points")
    if arr.ndim < 1:
        _reject("Points must have shape [..., n], got a scalar")
    dims = arr.shape[-1]
    check_shape(bits, dims, BATCH_WORD_BITS, BATCH_WORD_BITS if with_index else None)
    if arr.size and (arr.min() < 0 or arr.max() >= (1 << bits)):
        _reject(f"Coordinates out of range [0, {(1 << bits) - 1}] for bits={bits}")
    return jnp.asarray(arr.astype(np.uint32))

def _prepare_codes(codes, bits: int, dims: int) -> jnp.ndarray:
    arr = _as_integer_array(codes, "Hilbert indices")
    check_shape(bits, dims, BATCH_WORD_BITS, BATCH_WORD_BITS)
    if arr.size and (arr.min() < 0 or arr.max() >= (1 << (bits * dims))):
        _reject(f"Hilbert indices out of range [0, {(1 << (bits * dims)) - 1}] for bits={bits}, dims={dims}")
    return jnp.asarray(arr.astype(np.uint32))

# --- Public API ---

def batch_axes_to_transpose(points, bits: int) -> jnp.ndarray:
    """
    Axes coordinates [..., n] -> Hilbert transpose [..., n].

    Args:
        points: Integer array-like of shape [..., n], values in [0, 2**bits - 1].
        bits: Bits per coordinate (at most 32).
    """
    return _axes_to_transpose(_prepare_points(points, bits, with_index=False), bits)

def batch_transpose_to_axes(transposed, bits: int) -> jnp.ndarray:
    """Hilbert transpose [..., n] -> axes coordinates [..., n]."""
    return _transpose_to_axes(_prepare_points(transposed, bits, with_index=False), bits)

def batch_interleave_bits(transposed, bits: int) -> jnp.ndarray:
    """Hilbert transpose [..., n] -> uint32 Hilbert indices [...]. Requires bits * n <= 32."""
    return _interleave_bits(_prepare_points(transposed, bits, with_index=True), bits)

def batch_uninterleave_bits(codes, bits: int, dims: int) -> jnp.ndarray:
    """uint32 Hilbert indices [...] -> Hilbert transpose [..., dims]."""
    return _uninterleave_bits(_prepare_codes(codes, bits, dims), bits, dims)

def hilbert_encode(points, bits: int) -> jnp.ndarray:
    """
    Axes coordinates [..., n] -> Hilbert indices [...].

    Example:
        >>> hilbert_encode([[5, 10, 20]], bits=5)
        Array([7865], dtype=uint32)
    """
    x = _prepare_points(points, bits, with_index=True)
    return _interleave_bits(_axes_to_transpose(x, bits), bits)

def hilbert_decode(codes, bits: int, dims: int) -> jnp.ndarray:
    """Hilbert indices [...] -> axes coordinates [..., dims]."""
    x = _prepare_codes(codes, bits, dims)
    return _transpose_to_axes(_uninterleave_bits(x, bits, dims), bits)
