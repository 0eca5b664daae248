"""
Skilling's transform between n-dimensional axes coordinates and the Hilbert
curve "transpose", plus the bit interleaving that packs the transpose into
a single Hilbert index.

Example, b=5 bits for each of n=3 coordinates. The 15-bit Hilbert index
A B C D E F G H I J K L M N O is stored as its transpose

    X[0] = A D G J M
    X[1] = B E H K N
    X[2] = C F I L O
           high  low

Reference: J. Skilling, "Programming the Hilbert curve",
AIP Conf. Proc. 707, 381 (2004).
"""
import numbers
from typing import List, MutableSequence, Optional, Sequence

from .errors import HilbertPreconditionError
from .logger import logger

# Widths of the native words the coordinates and the scalar index live in
DEFAULT_COORD_BITS = 32
DEFAULT_CODE_BITS = 64

# --- Precondition checks ---

def _reject(message: str):
    logger.debug(f"Rejecting call: {message}")
    raise HilbertPreconditionError(message)

def check_shape(bits: int, dims: int, coord_bits: int = DEFAULT_COORD_BITS, code_bits: Optional[int] = None):
    """
    Validate the scalar parameters of a transform.

    Args:
        bits: Bits per coordinate (b).
        dims: Number of dimensions (n).
        coord_bits: Width of the coordinate word.
        code_bits: Width of the scalar index word, or None when no index is formed.
    """
    for name, value in (("bits", bits), ("dims", dims)):
        if isinstance(value, bool) or not isinstance(value, numbers.Integral):
            _reject(f"{name} must be an integer, got {value!r}")
        if value < 1:
            _reject(f"{name} must be >= 1, got {value}")
    if bits > coord_bits:
        _reject(f"bits={bits} does not fit a {coord_bits}-bit coordinate word")
    if code_bits is not None and bits * dims > code_bits:
        _reject(f"bits*dims={bits * dims} does not fit a {code_bits}-bit index")

def check_coords(x: Sequence[int], bits: int, dims: int):
    """Check that `x` holds exactly `dims` unsigned values of at most `bits` bits."""
    if len(x) != dims:
        _reject(f"Expected {dims} coordinates, got {len(x)}")
    limit = 1 << bits
    for i, value in enumerate(x):
        if isinstance(value, bool) or not isinstance(value, numbers.Integral):
            _reject(f"Coordinate {i} must be an integer, got {value!r}")
        if not 0 <= value < limit:
            _reject(f"Coordinate {i}={value} out of range [0, {limit - 1}] for bits={bits}")

def check_code(code: int, bits: int, dims: int):
    if isinstance(code, bool) or not isinstance(code, numbers.Integral):
        _reject(f"Hilbert index must be an integer, got {code!r}")
    limit = 1 << (bits * dims)
    if not 0 <= code < limit:
        _reject(f"Hilbert index {code} out of range [0, {limit - 1}] for bits={bits}, dims={dims}")

# --- Core transforms ---

def axes_to_transpose(x: MutableSequence[int], bits: int, dims: int, coord_bits: int = DEFAULT_COORD_BITS):
    """
    Transform axes coordinates into the Hilbert transpose, in place.

    Args:
        x: Mutable sequence of `dims` coordinates, each in [0, 2**bits - 1].
        bits: Bits per coordinate.
        dims: Number of dimensions.
        coord_bits: Width of the coordinate word, `bits` must fit in it.

    Raises:
        HilbertPreconditionError: before touching `x`, if any precondition fails.
    """
    check_shape(bits, dims, coord_bits)
    check_coords(x, bits, dims)

    M = 1 << (bits - 1)
    # Inverse undo, coarsest bit-plane first
    Q = M
    while Q > 1:
        P = Q - 1
        for i in range(dims):
            if x[i] & Q:
                # Invert
                x[0] ^= P
            else:
                # Exchange
                t = (x[0] ^ x[i]) & P
                x[0] ^= t
                x[i] ^= t
        Q >>= 1

    # Gray encode
    for i in range(1, dims):
        x[i] ^= x[i - 1]
    t = 0
    Q = M
    while Q > 1:
        if x[dims - 1] & Q:
            t ^= Q - 1
        Q >>= 1
    # Correct every coordinate by the accumulated parity mask
    for i in range(dims):
        x[i] ^= t

def transpose_to_axes(x: MutableSequence[int], bits: int, dims: int, coord_bits: int = DEFAULT_COORD_BITS):
    """
    Transform a Hilbert transpose back into axes coordinates, in place.
    Exact inverse of `axes_to_transpose`.
    """
    check_shape(bits, dims, coord_bits)
    check_coords(x, bits, dims)

    N = 2 << (bits - 1)
    # Gray decode by H ^ (H/2). Index 0 is handled through t, the loop
    # stops at 1.
    t = x[dims - 1] >> 1
    for i in range(dims - 1, 0, -1):
        x[i] ^= x[i - 1]
    x[0] ^= t

    # Undo excess work, finest bit-plane first, highest dimension first
    Q = 2
    while Q != N:
        P = Q - 1
        for i in range(dims - 1, -1, -1):
            if x[i] & Q:
                # Invert
                x[0] ^= P
            else:
                # Exchange
                t = (x[0] ^ x[i]) & P
                x[0] ^= t
                x[i] ^= t
        Q <<= 1

# --- Interleaving ---

def interleave_bits(x: Sequence[int], bits: int, dims: int,
                    coord_bits: int = DEFAULT_COORD_BITS, code_bits: int = DEFAULT_CODE_BITS) -> int:
    """
    Pack a transpose into one Hilbert index.

    Bit k of x[j] lands on bit k*dims + (dims-1-j) of the index, so the most
    significant bit-plane comes first and, within each group of `dims` bits,
    dimension 0 is the most significant.

    Requires bits * dims <= code_bits.
    """
    check_shape(bits, dims, coord_bits, code_bits)
    check_coords(x, bits, dims)

    code = 0
    for k in range(bits):
        # One group of `dims` bits per bit-plane, X[0] on top
        for j in range(dims):
            code |= ((x[j] >> k) & 1) << (k * dims + (dims - 1 - j))
    return code

def uninterleave_bits(code: int, bits: int, dims: int, out: Optional[MutableSequence[int]] = None,
                      coord_bits: int = DEFAULT_COORD_BITS, code_bits: int = DEFAULT_CODE_BITS) -> List[int]:
    """
    Unpack a Hilbert index into its transpose. Exact inverse of `interleave_bits`.

    Args:
        code: Hilbert index in [0, 2**(bits*dims) - 1].
        bits: Bits per coordinate.
        dims: Number of dimensions.
        out: Optional sequence of length `dims` to fill in place.

    Returns:
        The filled sequence (`out` when given, a new list otherwise).
    """
    check_shape(bits, dims, coord_bits, code_bits)
    check_code(code, bits, dims)
    if out is None:
        out = [0] * dims
    elif len(out) != dims:
        _reject(f"Expected an output buffer of {dims} coordinates, got {len(out)}")

    for i in range(dims):
        out[i] = 0
    # Bit dims*i + j of the index is bit i of X[dims-1-j]
    for i in range(bits):
        for j in range(dims):
            out[dims - 1 - j] |= ((code >> (dims * i + j)) & 1) << i
    return out
