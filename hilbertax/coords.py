from typing import List

import flax.struct as struct

from .transform import (
    DEFAULT_CODE_BITS,
    axes_to_transpose,
    interleave_bits,
    transpose_to_axes,
    uninterleave_bits,
)

# Both wrappers tag the same underlying storage. The tag is frozen, the list
# it wraps is mutated in place by the conversions, so a converted object and
# its source share one buffer and only the newer tag should be used.

@struct.dataclass
class AxesCoords:
    """A point in n-dimensional axis space, each coordinate a `bits`-bit integer."""
    values: List[int]
    bits: int = struct.field(pytree_node=False)

    @classmethod
    def of(cls, *values, bits: int) -> "AxesCoords":
        return cls(values=list(values), bits=bits)

    @property
    def dims(self) -> int:
        return len(self.values)

    def to_transpose(self) -> "TransposeCoords":
        axes_to_transpose(self.values, self.bits, self.dims)
        return TransposeCoords(values=self.values, bits=self.bits)

@struct.dataclass
class TransposeCoords:
    """The Hilbert transpose of a point; interleaving it gives the Hilbert index."""
    values: List[int]
    bits: int = struct.field(pytree_node=False)

    @classmethod
    def from_index(cls, code: int, bits: int, dims: int, code_bits: int = DEFAULT_CODE_BITS) -> "TransposeCoords":
        return cls(values=uninterleave_bits(code, bits, dims, code_bits=code_bits), bits=bits)

    @property
    def dims(self) -> int:
        return len(self.values)

    def to_axes(self) -> AxesCoords:
        transpose_to_axes(self.values, self.bits, self.dims)
        return AxesCoords(values=self.values, bits=self.bits)

    def to_index(self, code_bits: int = DEFAULT_CODE_BITS) -> int:
        return interleave_bits(self.values, self.bits, self.dims, code_bits=code_bits)
