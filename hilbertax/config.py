import argparse
from dataclasses import dataclass, fields

from .logger import logger
from .transform import DEFAULT_CODE_BITS, DEFAULT_COORD_BITS, check_shape
from .batch import BATCH_WORD_BITS

BACKENDS = ('python', 'jax')

@dataclass(frozen=True)
class CurveConfig:
    """
    Parameters of one Hilbert curve.

    Attributes:
        bits: Bits per coordinate, the curve covers a cube of side 2**bits.
        dims: Number of dimensions.
        coord_bits: Width of the coordinate word.
        code_bits: Width of the scalar index word.
        backend: 'python' for the scalar transforms, 'jax' for the batch kernels.
    """
    bits: int
    dims: int
    coord_bits: int = DEFAULT_COORD_BITS
    code_bits: int = DEFAULT_CODE_BITS
    backend: str = 'python'

    def __post_init__(self):
        if self.backend not in BACKENDS:
            raise ValueError(f"Unknown backend {self.backend!r}, expected one of {BACKENDS}")
        if self.backend == 'jax':
            check_shape(self.bits, self.dims, min(self.coord_bits, BATCH_WORD_BITS), min(self.code_bits, BATCH_WORD_BITS))
        else:
            check_shape(self.bits, self.dims, self.coord_bits, self.code_bits)

    @classmethod
    def from_dict(cls, config: dict) -> "CurveConfig":
        """
        Build a config from a (possibly string-valued) dictionary, e.g. one
        loaded from a json file or collected from the command line.
        Unknown keys are ignored.
        """
        known = {f.name for f in fields(cls)}
        kwargs = {}
        for key, value in config.items():
            if key not in known:
                logger.warning(f"Ignoring unknown curve config key {key} with value {value}")
                continue
            if isinstance(value, str) and key != 'backend':
                value = int(value)
            kwargs[key] = value
        return cls(**kwargs)

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "CurveConfig":
        return cls(
            bits=args.bits,
            dims=args.dims,
            coord_bits=args.coord_bits,
            code_bits=args.code_bits,
            backend=args.backend,
        )

    def to_dict(self) -> dict:
        return {f.name: getattr(self, f.name) for f in fields(self)}

def add_curve_args(parser: argparse.ArgumentParser, bits: int = 5, dims: int = 3) -> argparse.ArgumentParser:
    """Register the curve parameters on an argparse parser."""
    parser.add_argument('--bits', type=int, default=bits, help='Bits per coordinate')
    parser.add_argument('--dims', type=int, default=dims, help='Number of dimensions')
    parser.add_argument('--coord_bits', type=int, default=DEFAULT_COORD_BITS, help='Width of the coordinate word')
    parser.add_argument('--code_bits', type=int, default=DEFAULT_CODE_BITS, help='Width of the Hilbert index word')
    parser.add_argument('--backend', type=str, default='python', choices=BACKENDS, help='Transform backend')
    return parser
