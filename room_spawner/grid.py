"""
OccupancyGrid - 2D floor occupancy for tile-based placement.

Occupied cells are True. Cells are only ever set, never cleared, so the
occupied set grows monotonically over the lifetime of a grid.
"""

import math
import threading
from numbers import Integral

import numpy as np

from .errors import InvalidConfiguration, OutOfBoundsError
from .geometry import Footprint, GridAnchor


class OccupancyGrid:
    """
    Boolean occupancy table of shape (width, depth).

    - width, depth: tile counts along x and z, fixed at construction
    - tile_scale: grid units per world unit
    - lock: held by the allocator for a whole select/reserve sequence
    """

    def __init__(self, width: int, depth: int, tile_scale: float = 1.0):
        if not isinstance(width, Integral) or not isinstance(depth, Integral):
            raise InvalidConfiguration(f"Grid extents must be integers, got {width}x{depth}")
        if width <= 0 or depth <= 0:
            raise InvalidConfiguration(f"Grid extents must be positive, got {width}x{depth}")
        if not (tile_scale > 0 and math.isfinite(tile_scale)):
            raise InvalidConfiguration(f"Tile scale must be positive and finite, got {tile_scale}")

        self._width = int(width)
        self._depth = int(depth)
        self._tile_scale = float(tile_scale)
        self._occupied = np.zeros((self._width, self._depth), dtype=bool)
        self.lock = threading.RLock()

    @property
    def width(self) -> int:
        return self._width

    @property
    def depth(self) -> int:
        return self._depth

    @property
    def tile_scale(self) -> float:
        return self._tile_scale

    @property
    def occupied(self) -> np.ndarray:
        """Read-only view of the occupancy table."""
        view = self._occupied.view()
        view.flags.writeable = False
        return view

    def in_bounds(self, x: int, z: int) -> bool:
        return 0 <= x < self._width and 0 <= z < self._depth

    def is_free(self, x: int, z: int) -> bool:
        """
        Check whether a single cell is unoccupied.

        Raises:
            OutOfBoundsError: if (x, z) lies outside the grid
        """
        if not self.in_bounds(x, z):
            raise OutOfBoundsError(x, z, self._width, self._depth)
        return not self._occupied[x, z]

    def reserve(self, anchor: GridAnchor, footprint: Footprint) -> None:
        """
        Mark every cell under footprint, anchored at anchor, as occupied.

        No validation happens here. The rectangle must already be known to
        lie inside the grid and to be entirely free (scoring.evaluate checks
        both). numpy slicing clips silently, so an unchecked rectangle would
        be partially reserved instead of failing. Only the allocator calls
        this.
        """
        self._occupied[
            anchor.x:anchor.x + footprint.cells_x,
            anchor.z:anchor.z + footprint.cells_z,
        ] = True

    def occupied_count(self) -> int:
        return int(np.count_nonzero(self._occupied))

    def free_count(self) -> int:
        return self._occupied.size - self.occupied_count()

    def snapshot(self) -> np.ndarray:
        """Copy of the occupancy table."""
        return self._occupied.copy()
