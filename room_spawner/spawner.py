"""
SpawnSession - places every item of a spawn plan into one room.

Items are placed in plan order, each `count` times. An item that no longer
fits is logged and skipped; the remaining items are still attempted.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import numpy as np

from .allocator import PlacementAllocator, PlacementResult
from .errors import NoSpaceAvailable
from .schema import ScoringWeights, SpawnPlan, load_presets, resolve_weights


log = logging.getLogger(__name__)


@dataclass
class PlacementRecord:
    """A placed instance of a plan item."""
    name: str
    index: int
    result: PlacementResult

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'index': self.index,
            'anchor': [self.result.anchor.x, self.result.anchor.z],
            'footprint': self.result.footprint.as_list(),
            'position': self.result.position.as_list(),
            'score': self.result.score,
        }


@dataclass
class SpawnReport:
    placed: List[PlacementRecord] = field(default_factory=list)
    skipped: List[Dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'placed': [record.to_dict() for record in self.placed],
            'skipped': list(self.skipped),
        }


class SpawnSession:
    """Grid, allocator and presets for one room."""

    def __init__(
        self,
        plan: SpawnPlan,
        presets: Optional[Dict[str, ScoringWeights]] = None,
        rng: Optional[np.random.Generator] = None,
    ):
        self.plan = plan
        self.presets = presets if presets is not None else load_presets()
        self.grid = plan.room.create_grid()
        self.allocator = PlacementAllocator(
            self.grid,
            origin=plan.room.origin_point(),
            rng=rng,
            seed=plan.seed,
        )

    def run(self) -> SpawnReport:
        report = SpawnReport()
        room = self.plan.room
        log.info("Room: %dx%d tiles, tile scale %s", room.width, room.depth, room.tile_scale)

        for item in self.plan.items:
            weights = resolve_weights(item, self.presets)
            footprint = item.footprint
            for index in range(item.count):
                try:
                    result = self.allocator.place(footprint, weights)
                except NoSpaceAvailable:
                    remaining = item.count - index
                    log.warning("No spots left for '%s' (%sx%s), skipping %d",
                                item.name, item.width, item.depth, remaining)
                    report.skipped.append({'name': item.name, 'count': remaining})
                    break
                report.placed.append(PlacementRecord(item.name, index, result))
                log.info("Placed %s #%d at anchor (%d, %d)",
                         item.name, index, result.anchor.x, result.anchor.z)

        log.info("Placed %d objects, %d cells occupied of %d",
                 len(report.placed), self.grid.occupied_count(), self.grid.width * self.grid.depth)
        return report
