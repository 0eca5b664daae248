from .errors import HilbertPreconditionError
from .transform import axes_to_transpose, transpose_to_axes, interleave_bits, uninterleave_bits
from .coords import AxesCoords, TransposeCoords
from .batch import batch_axes_to_transpose, batch_transpose_to_axes, batch_interleave_bits, batch_uninterleave_bits, hilbert_encode, hilbert_decode
from .config import CurveConfig, add_curve_args
from .curve import HilbertCurve
from .ordering import grid_points, hilbert_indices, inverse_permutation, hilbert_sort, hilbert_reorder, hilbert_restore
