"""
Debug PNG export for the occupancy grid and anchor scores.

Uses matplotlib; files are written for inspection only and never read back.
"""

from typing import List, Optional

import matplotlib.pyplot as plt
import matplotlib.patches as patches
import numpy as np
from matplotlib.colors import LinearSegmentedColormap

from .geometry import Footprint
from .grid import OccupancyGrid
from .schema import ScoringWeights
from .scoring import score_map
from .spawner import PlacementRecord

# Red = poor anchor, Yellow = neutral, Green = good anchor
SCORE_CMAP = LinearSegmentedColormap.from_list('RdYlGn', ['#d73027', '#fee08b', '#1a9850'])

ITEM_COLORS = ['#3498db', '#e74c3c', '#2ecc71', '#9b59b6', '#1abc9c', '#f39c12', '#95a5a6']


def _draw_tile_lines(ax, grid: OccupancyGrid) -> None:
    for x in range(grid.width + 1):
        ax.axvline(x, color='gray', alpha=0.3, linewidth=0.5)
    for z in range(grid.depth + 1):
        ax.axhline(z, color='gray', alpha=0.3, linewidth=0.5)


def export_score_heatmap(
    grid: OccupancyGrid,
    footprint: Footprint,
    weights: ScoringWeights,
    path: str,
    title: Optional[str] = None,
) -> str:
    """
    Export the jitter-free score of every anchor for footprint.

    Invalid anchors (out of bounds or colliding) are left blank.

    Returns:
        path
    """
    scores = score_map(grid, footprint, weights)

    fig, ax = plt.subplots(figsize=(max(4, grid.width * 0.6), max(3, grid.depth * 0.6)))
    # Rows of the image are z, columns are x.
    im = ax.imshow(
        np.ma.masked_invalid(scores.T),
        cmap=SCORE_CMAP,
        origin='lower',
        extent=[0, grid.width, 0, grid.depth],
        aspect='equal',
    )
    _draw_tile_lines(ax, grid)

    ax.set_xlabel('x (tiles)')
    ax.set_ylabel('z (tiles)')
    ax.set_title(title or f"Anchor scores for {footprint.width}x{footprint.depth}")
    cbar = fig.colorbar(im, ax=ax, orientation='vertical', shrink=0.8)
    cbar.set_label('Score')

    plt.tight_layout()
    plt.savefig(path, dpi=150, bbox_inches='tight')
    plt.close(fig)
    return path


def export_placement_diagram(
    grid: OccupancyGrid,
    records: List[PlacementRecord],
    path: str,
    title: str = 'Room Layout',
) -> str:
    """
    Export placed footprints as labelled rectangles over the tile grid.

    Returns:
        path
    """
    fig, ax = plt.subplots(figsize=(max(4, grid.width * 0.6), max(3, grid.depth * 0.6)))
    ax.set_xlim(0, grid.width)
    ax.set_ylim(0, grid.depth)
    ax.set_aspect('equal')
    ax.set_xlabel('x (tiles)')
    ax.set_ylabel('z (tiles)')
    ax.set_title(title)

    names = sorted({record.name for record in records})
    colors = {name: ITEM_COLORS[i % len(ITEM_COLORS)] for i, name in enumerate(names)}

    for record in records:
        anchor = record.result.anchor
        footprint = record.result.footprint
        rect = patches.Rectangle(
            (anchor.x, anchor.z), footprint.cells_x, footprint.cells_z,
            linewidth=2,
            edgecolor='black',
            facecolor=colors[record.name],
            alpha=0.8,
        )
        ax.add_patch(rect)
        ax.text(anchor.x + footprint.cells_x / 2, anchor.z + footprint.cells_z / 2,
                record.name[:10], ha='center', va='center', fontsize=8, fontweight='bold')

    _draw_tile_lines(ax, grid)

    plt.tight_layout()
    plt.savefig(path, dpi=150, bbox_inches='tight')
    plt.close(fig)
    return path
