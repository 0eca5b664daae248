#!/usr/bin/env python3
"""
Demo script for the Hilbert transpose transforms.

This script demonstrates:
1. Axes coordinates -> Hilbert transpose -> Hilbert index
2. The index split into its bit groups, one group per bit-plane
3. Index -> transpose -> the original axes coordinates

Usage:
    python demo_hilbert_transform.py [--coords X0 X1 ...] [--bits BITS] [--plot PATH]

Options:
    --coords: Point to transform (default: 5 10 20, a point of a 32x32x32 cube)
    --bits: Bits per coordinate (default: 5)
    --plot: Save a plot of the 2-D or 3-D curve of order --bits to PATH
"""
import os
os.environ["JAX_PLATFORMS"] = "cpu"
import argparse
import logging

from hilbertax import (
    CurveConfig,
    axes_to_transpose,
    transpose_to_axes,
    interleave_bits,
    uninterleave_bits,
)
from hilbertax.logger import logger, set_verbosity

def grouped_bits(transpose, bits):
    """'001 111 ...': for each bit-plane, most significant first, the bit of X[0], X[1], ..."""
    groups = []
    for k in range(bits - 1, -1, -1):
        groups.append(''.join(str((x >> k) & 1) for x in transpose))
    return ' '.join(groups)

def main():
    parser = argparse.ArgumentParser(description='Transform a point to its Hilbert index and back')
    parser.add_argument('--coords', type=int, nargs='+', default=[5, 10, 20], help='Axes coordinates')
    parser.add_argument('--bits', type=int, default=5, help='Bits per coordinate')
    parser.add_argument('--code_bits', type=int, default=64, help='Width of the Hilbert index word')
    parser.add_argument('--plot', type=str, default=None, help='Save a plot of the curve to this path')
    parser.add_argument('--verbose', action='store_true', help='Log at DEBUG level')
    args = parser.parse_args()
    if args.verbose:
        set_verbosity(logging.DEBUG)

    config = CurveConfig(bits=args.bits, dims=len(args.coords), code_bits=args.code_bits)
    X = list(args.coords)
    print(f"Input coords = {','.join(map(str, X))}")

    axes_to_transpose(X, config.bits, config.dims)
    print(f"Hilbert coords = {','.join(map(str, X))}")

    code = interleave_bits(X, config.bits, config.dims, code_bits=config.code_bits)
    print(f"Hilbert integer = {code} = {grouped_bits(X, config.bits)}")

    X = uninterleave_bits(code, config.bits, config.dims, code_bits=config.code_bits)
    print(f"Reconstructed Hilbert coords = {','.join(map(str, X))}")

    transpose_to_axes(X, config.bits, config.dims)
    print(f"Orig coords = {','.join(map(str, X))}")

    if args.plot:
        from hilbertax.visualize import plot_curve_2d, plot_curve_3d
        if config.dims == 2:
            fig = plot_curve_2d(config.bits)
        elif config.dims == 3:
            fig = plot_curve_3d(config.bits)
        else:
            logger.warning(f"Can only plot 2-D or 3-D curves, got {config.dims} dimensions")
            return
        fig.savefig(args.plot)
        logger.info(f"Saved curve plot to {args.plot}")

if __name__ == "__main__":
    main()
