"""
Exception hierarchy for the spawner.

OutOfBoundsError      - a cell accessor was handed an index outside the grid (caller bug)
NoSpaceAvailable      - no anchor fits the footprint (expected, recoverable)
InvalidConfiguration  - degenerate grid, footprint, weights or plan
"""


class SpawnerError(Exception):
    """Base class for every error raised by room_spawner."""


class OutOfBoundsError(SpawnerError, IndexError):
    """Raised when a grid cell outside [0, width) x [0, depth) is accessed."""

    def __init__(self, x: int, z: int, width: int, depth: int) -> None:
        self.x = x
        self.z = z
        super().__init__(f"Cell ({x}, {z}) is outside the {width}x{depth} grid")


class NoSpaceAvailable(SpawnerError):
    """Raised when no free region can hold the requested footprint."""

    def __init__(self, footprint) -> None:
        self.footprint = footprint
        super().__init__(
            f"No free region for footprint {footprint.width}x{footprint.depth}"
        )


class InvalidConfiguration(SpawnerError, ValueError):
    """Raised for non-positive extents, negative jitter or a malformed plan."""
