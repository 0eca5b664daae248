from typing import List, Sequence

import numpy as np

from .batch import hilbert_decode, hilbert_encode
from .config import CurveConfig
from .transform import axes_to_transpose, interleave_bits, transpose_to_axes, uninterleave_bits

class HilbertCurve:
    """
    Maps points of a [0, 2**bits)^dims cube to their position along the
    Hilbert curve and back.

    Example:
        >>> curve = HilbertCurve.create(bits=5, dims=3)
        >>> curve.encode([5, 10, 20])
        7865
        >>> curve.decode(7865)
        [5, 10, 20]
    """
    def __init__(self, config: CurveConfig):
        self.config = config

    @classmethod
    def create(cls, bits: int, dims: int, **kwargs) -> "HilbertCurve":
        return cls(CurveConfig(bits=bits, dims=dims, **kwargs))

    @property
    def bits(self) -> int:
        return self.config.bits

    @property
    def dims(self) -> int:
        return self.config.dims

    @property
    def side(self) -> int:
        return 1 << self.bits

    @property
    def max_index(self) -> int:
        return (1 << (self.bits * self.dims)) - 1

    def encode(self, point: Sequence[int]) -> int:
        """Axes coordinates -> Hilbert index. `point` is left untouched."""
        x = list(point)
        axes_to_transpose(x, self.bits, self.dims, coord_bits=self.config.coord_bits)
        return interleave_bits(x, self.bits, self.dims, coord_bits=self.config.coord_bits, code_bits=self.config.code_bits)

    def decode(self, index: int) -> List[int]:
        """Hilbert index -> axes coordinates."""
        x = uninterleave_bits(index, self.bits, self.dims, coord_bits=self.config.coord_bits, code_bits=self.config.code_bits)
        transpose_to_axes(x, self.bits, self.dims, coord_bits=self.config.coord_bits)
        return x

    def encode_many(self, points) -> np.ndarray:
        """Points [N, dims] -> Hilbert indices [N]."""
        if self.config.backend == 'jax':
            return np.asarray(hilbert_encode(points, self.bits))
        # Indices wider than 64 bits stay Python ints
        dtype = np.uint64 if self.bits * self.dims <= 64 else object
        return np.array([self.encode(p) for p in np.asarray(points).tolist()], dtype=dtype)

    def decode_many(self, indices) -> np.ndarray:
        """Hilbert indices [N] -> points [N, dims]."""
        if self.config.backend == 'jax':
            return np.asarray(hilbert_decode(indices, self.bits, self.dims))
        decoded = [self.decode(i) for i in np.asarray(indices).tolist()]
        return np.array(decoded, dtype=np.int64).reshape(-1, self.dims)

    def __repr__(self):
        return f"HilbertCurve(bits={self.bits}, dims={self.dims}, backend={self.config.backend!r})"
