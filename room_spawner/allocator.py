"""Placement allocator - select, reserve and convert to world space."""

import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np

from .errors import NoSpaceAvailable
from .geometry import Footprint, GridAnchor, WorldPoint
from .grid import OccupancyGrid
from .schema import ScoringWeights
from .selector import select_best


log = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlacementResult:
    """Reserved anchor and the world-space centre of the reserved region."""
    anchor: GridAnchor
    footprint: Footprint
    position: WorldPoint
    score: float


def to_world(grid: OccupancyGrid, anchor: GridAnchor, footprint: Footprint, origin: WorldPoint) -> WorldPoint:
    """Centre of footprint at anchor; grid units divided by tile_scale, y kept at origin."""
    return WorldPoint(
        x=origin.x + (anchor.x + footprint.width / 2.0) / grid.tile_scale,
        y=origin.y,
        z=origin.z + (anchor.z + footprint.depth / 2.0) / grid.tile_scale,
    )


def place(
    grid: OccupancyGrid,
    footprint: Footprint,
    weights: ScoringWeights,
    origin: WorldPoint,
    rng: np.random.Generator,
) -> PlacementResult:
    """
    Find, score and reserve a region for footprint.

    The grid lock is held from enumeration through reservation, so two
    callers sharing a grid can never both claim the same free region.

    Raises:
        InvalidConfiguration: footprint has a non-positive extent
        NoSpaceAvailable: no anchor fits; the grid is left untouched
    """
    footprint.validate()

    with grid.lock:
        best = select_best(grid, footprint, weights, rng)
        if best is None:
            log.debug("No anchor fits %sx%s on %dx%d grid (%d cells free)",
                      footprint.width, footprint.depth, grid.width, grid.depth, grid.free_count())
            raise NoSpaceAvailable(footprint)
        grid.reserve(best.anchor, footprint)

    position = to_world(grid, best.anchor, footprint, origin)
    log.debug("Reserved %sx%s at (%d, %d) score=%.3f",
              footprint.width, footprint.depth, best.anchor.x, best.anchor.z, best.score)
    return PlacementResult(best.anchor, footprint, position, best.score)


class PlacementAllocator:
    """
    Owns a grid handle, a world origin and a random source.

    Pass either rng or seed; with neither, a fresh unseeded generator is used.
    """

    def __init__(
        self,
        grid: OccupancyGrid,
        origin: WorldPoint = WorldPoint(0.0, 0.0, 0.0),
        rng: Optional[np.random.Generator] = None,
        seed: Optional[int] = None,
    ):
        self.grid = grid
        self.origin = origin
        self.rng = rng if rng is not None else np.random.default_rng(seed)

    def place(self, footprint: Footprint, weights: ScoringWeights) -> PlacementResult:
        return place(self.grid, footprint, weights, self.origin, self.rng)
