from typing import Sequence

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.colors import LinearSegmentedColormap

from .batch import hilbert_decode
from .logger import logger
from .ordering import hilbert_indices

# Blue -> Green -> Yellow -> Red along the curve
HILBERT_CMAP = LinearSegmentedColormap.from_list('hilbert', ['#0000FF', '#00FF00', '#FFFF00', '#FF0000'])

def curve_path(bits: int, dims: int) -> np.ndarray:
    """Every point of the [0, 2**bits)^dims cube in Hilbert order, shape [2**(bits*dims), dims]."""
    codes = np.arange(1 << (bits * dims), dtype=np.int64)
    return np.asarray(hilbert_decode(codes, bits, dims))

def plot_curve_2d(bits: int, figsize=(6, 6), annotate: bool = False):
    """
    Draw the 2-D Hilbert curve of order `bits`.

    Args:
        bits: Curve order, the curve visits a 2**bits x 2**bits grid.
        figsize: Figure size for the plot.
        annotate: Label each vertex with its Hilbert index.

    Returns:
        The matplotlib Figure object.
    """
    path = curve_path(bits, 2)
    side = 1 << bits
    fig, ax = plt.subplots(1, 1, figsize=figsize)
    colors = HILBERT_CMAP(np.linspace(0, 1, max(1, len(path) - 1)))
    for i in range(len(path) - 1):
        ax.plot(path[i:i + 2, 0], path[i:i + 2, 1], color=colors[i], linewidth=2)
    ax.plot(path[0, 0], path[0, 1], 'go', markersize=8, label='Start (Idx 0)')
    ax.plot(path[-1, 0], path[-1, 1], 'mo', markersize=8, label=f'End (Idx {len(path) - 1})')
    if annotate:
        for i, (x, y) in enumerate(path):
            ax.text(x, y, f'{i}', ha='center', va='bottom', fontsize=7)
    ax.set_xlim(-0.5, side - 0.5)
    ax.set_ylim(-0.5, side - 0.5)
    ax.set_aspect('equal')
    ax.set_xlabel("X[0]")
    ax.set_ylabel("X[1]")
    ax.set_title(f"2-D Hilbert Curve (order {bits}, {len(path)} points)")
    ax.legend(fontsize='small')
    plt.tight_layout()
    return fig

def plot_curve_3d(bits: int, figsize=(7, 7)):
    """Draw the 3-D Hilbert curve of order `bits`. Returns the matplotlib Figure object."""
    path = curve_path(bits, 3)
    fig = plt.figure(figsize=figsize)
    ax = fig.add_subplot(111, projection='3d')
    colors = HILBERT_CMAP(np.linspace(0, 1, max(1, len(path) - 1)))
    for i in range(len(path) - 1):
        ax.plot(path[i:i + 2, 0], path[i:i + 2, 1], path[i:i + 2, 2], color=colors[i], linewidth=1.5)
    ax.scatter(*path[0], color='green', s=40, label='Start (Idx 0)')
    ax.scatter(*path[-1], color='magenta', s=40, label=f'End (Idx {len(path) - 1})')
    ax.set_xlabel("X[0]")
    ax.set_ylabel("X[1]")
    ax.set_zlabel("X[2]")
    ax.set_title(f"3-D Hilbert Curve (order {bits}, {len(path)} points)")
    ax.legend(fontsize='small')
    plt.tight_layout()
    return fig

def visualize_grid_ordering(shape: Sequence[int], figsize=(12, 5)):
    """
    Compare row-major and Hilbert ordering of a 2-D grid.

    Args:
        shape: (rows, cols) of the grid.
        figsize: Figure size for the plot.

    Returns:
        The matplotlib Figure object, or None for an empty grid.
    """
    rows, cols = shape
    if rows * cols == 0:
        logger.warning("Grid dimensions are zero, cannot visualize.")
        return None

    idx = np.array(hilbert_indices((rows, cols)))

    # grid[row, col] = Hilbert sequence index
    grid = np.full((rows, cols), -1.0)
    for i, idx_val in enumerate(idx):
        grid[idx_val // cols, idx_val % cols] = i

    fig, axes = plt.subplots(1, 2, figsize=figsize)

    # --- Plot 1: Row-Major Order ---
    orig_grid = np.arange(rows * cols).reshape((rows, cols))
    im0 = axes[0].imshow(orig_grid, cmap='viridis', aspect='auto')
    axes[0].set_title(f"Original Grid ({rows}x{cols})\n(Row-Major Order)")
    for r in range(rows):
        for c in range(cols):
            axes[0].text(c, r, f'{orig_grid[r, c]}', ha='center', va='center',
                         color='white' if orig_grid[r, c] < (rows * cols) / 2 else 'black', fontsize=8)
    plt.colorbar(im0, ax=axes[0], fraction=0.046, pad=0.04, label="Row-Major Index")

    # --- Plot 2: Hilbert Curve Ordering ---
    im1 = axes[1].imshow(grid, cmap=HILBERT_CMAP, aspect='auto', vmin=0, vmax=max(0, len(idx) - 1))
    axes[1].set_title(f"Hilbert Curve Ordering ({len(idx)} points)")
    for r in range(rows):
        for c in range(cols):
            axes[1].text(c, r, f'{int(grid[r, c])}', ha='center', va='center', color='black', fontsize=8)
    plt.colorbar(im1, ax=axes[1], fraction=0.046, pad=0.04, label="Hilbert Sequence Index")

    if len(idx) > 1:
        y_coords = idx // cols
        x_coords = idx % cols
        axes[1].plot(x_coords, y_coords, color='black', linestyle='-', linewidth=1.5, alpha=0.8)
        axes[1].plot(x_coords[0], y_coords[0], 'go', markersize=8, label='Start (Idx 0)')
        axes[1].plot(x_coords[-1], y_coords[-1], 'mo', markersize=8, label=f'End (Idx {len(idx) - 1})')
        axes[1].legend(fontsize='small')

    for ax in axes:
        ax.set_xticks(np.arange(cols))
        ax.set_yticks(np.arange(rows))

    plt.tight_layout()
    return fig
