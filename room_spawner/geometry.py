import math
from dataclasses import dataclass
from typing import Sequence

from .errors import InvalidConfiguration


@dataclass(frozen=True)
class GridAnchor:
    """Lower corner cell (x, z) of a placed footprint."""
    x: int
    z: int


@dataclass(frozen=True)
class WorldPoint:
    x: float
    y: float
    z: float

    @classmethod
    def from_sequence(cls, values: Sequence[float]) -> 'WorldPoint':
        if len(values) != 3:
            raise InvalidConfiguration(f"Expected [x, y, z], got {list(values)}")
        return cls(float(values[0]), float(values[1]), float(values[2]))

    def as_list(self):
        return [self.x, self.y, self.z]


@dataclass(frozen=True)
class Footprint:
    """
    Width x depth extent of an object, in grid units.

    Extents may be fractional. A fractional extent covers ceil(extent) cells
    on its axis, so a 1.5 wide footprint occupies 2 columns.
    """
    width: float
    depth: float

    def validate(self) -> 'Footprint':
        if not all(0 < extent < math.inf for extent in (self.width, self.depth)):
            raise InvalidConfiguration(
                f"Footprint extents must be positive and finite, got {self.width}x{self.depth}"
            )
        return self

    @property
    def cells_x(self) -> int:
        return cell_span(self.width)

    @property
    def cells_z(self) -> int:
        return cell_span(self.depth)

    def as_list(self):
        return [self.width, self.depth]


def cell_span(extent: float) -> int:
    """Number of grid cells covered by a real-valued extent."""
    return int(math.ceil(extent))
