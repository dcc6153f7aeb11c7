"""
Placement scoring for a footprint anchored at a grid cell.

Every cell under the footprint earns one contribution per axis:
- wall_bonus    if the cell sits in the first or last column (row) of the grid
- cluster_bonus else, if a neighbour along that axis is occupied
- spread_bonus  otherwise

The sum over all cells, plus a uniform jitter draw, is the anchor's score.
"""

from dataclasses import dataclass
from typing import Optional

import numpy as np
from numpy.lib.stride_tricks import sliding_window_view

from .geometry import Footprint, GridAnchor
from .grid import OccupancyGrid
from .schema import ScoringWeights

INVALID_SCORE = -1.0


@dataclass(frozen=True)
class PlacementScore:
    """Outcome of evaluating one anchor."""
    valid: bool
    score: float


REJECTED = PlacementScore(valid=False, score=INVALID_SCORE)


def _axis_contributions(occupied: np.ndarray, axis: int, weights: ScoringWeights) -> np.ndarray:
    """Per-cell contribution along one axis (0 = x, 1 = z)."""
    n = occupied.shape[axis]
    index = np.arange(n)
    on_wall = (index == 0) | (index == n - 1)
    on_wall = on_wall[:, None] if axis == 0 else on_wall[None, :]

    # Edge cells are always walls, so only interior cells need neighbours.
    neighbour = np.zeros_like(occupied)
    if n > 2:
        if axis == 0:
            neighbour[1:-1, :] = occupied[:-2, :] | occupied[2:, :]
        else:
            neighbour[:, 1:-1] = occupied[:, :-2] | occupied[:, 2:]

    return np.where(
        on_wall,
        weights.wall_bonus,
        np.where(neighbour, weights.cluster_bonus, weights.spread_bonus),
    ).astype(np.float64)


def contribution_map(grid: OccupancyGrid, weights: ScoringWeights) -> np.ndarray:
    """
    Sum of x and z contributions for every cell of the grid.

    Values under occupied cells are meaningless since an occupied cell never
    belongs to a valid placement.
    """
    occupied = grid.occupied
    return (_axis_contributions(occupied, 0, weights)
            + _axis_contributions(occupied, 1, weights))


def evaluate(
    grid: OccupancyGrid,
    anchor: GridAnchor,
    footprint: Footprint,
    weights: ScoringWeights,
    rng: np.random.Generator,
    contributions: Optional[np.ndarray] = None,
) -> PlacementScore:
    """
    Check and score a footprint anchored at a grid cell.

    Args:
        grid: Occupancy state (read only)
        anchor: Lower corner cell of the candidate region
        footprint: Extent to place
        weights: Scoring configuration
        rng: Source for the jitter draw
        contributions: Precomputed contribution_map(grid, weights)

    Returns:
        PlacementScore; invalid on bounds or collision failure
    """
    cells_x = footprint.cells_x
    cells_z = footprint.cells_z
    if anchor.x < 0 or anchor.z < 0:
        return REJECTED
    if anchor.x + cells_x > grid.width or anchor.z + cells_z > grid.depth:
        return REJECTED

    region = (slice(anchor.x, anchor.x + cells_x), slice(anchor.z, anchor.z + cells_z))
    if grid.occupied[region].any():
        return REJECTED

    if contributions is None:
        contributions = contribution_map(grid, weights)
    score = float(contributions[region].sum())

    return PlacementScore(valid=True, score=score + rng.uniform(-weights.jitter, weights.jitter))


def score_map(grid: OccupancyGrid, footprint: Footprint, weights: ScoringWeights) -> np.ndarray:
    """
    Jitter-free score of every anchor for footprint.

    Uses a sliding window over the contribution map, the 2D analogue of
    convolving with a ones kernel.

    Returns:
        (width, depth) float array, NaN where the anchor is invalid
    """
    scores = np.full((grid.width, grid.depth), np.nan)
    cells_x = footprint.cells_x
    cells_z = footprint.cells_z
    if cells_x > grid.width or cells_z > grid.depth:
        return scores

    window = (cells_x, cells_z)
    sums = sliding_window_view(contribution_map(grid, weights), window).sum(axis=(2, 3))
    blocked = sliding_window_view(grid.occupied, window).any(axis=(2, 3))

    valid = np.where(blocked, np.nan, sums)
    scores[:valid.shape[0], :valid.shape[1]] = valid
    return scores
