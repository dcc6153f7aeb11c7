"""
Tile grid object placement.

Scores every free anchor for a footprint (wall, cluster and spread bonuses
plus jitter), picks the best with a random tie-break and reserves it.
"""

from .errors import SpawnerError, OutOfBoundsError, NoSpaceAvailable, InvalidConfiguration
from .geometry import Footprint, GridAnchor, WorldPoint, cell_span
from .grid import OccupancyGrid
from .schema import (
    ScoringWeights,
    RoomConfig,
    SpawnItem,
    SpawnPlan,
    load_presets,
    load_plan,
    parse_plan,
    resolve_weights,
)
from .scoring import PlacementScore, evaluate, contribution_map, score_map
from .selector import Candidate, enumerate_candidates, select_best
from .allocator import PlacementResult, PlacementAllocator, place, to_world
from .spawner import SpawnSession, SpawnReport, PlacementRecord

__all__ = [
    'SpawnerError',
    'OutOfBoundsError',
    'NoSpaceAvailable',
    'InvalidConfiguration',
    'Footprint',
    'GridAnchor',
    'WorldPoint',
    'cell_span',
    'OccupancyGrid',
    'ScoringWeights',
    'RoomConfig',
    'SpawnItem',
    'SpawnPlan',
    'load_presets',
    'load_plan',
    'parse_plan',
    'resolve_weights',
    'PlacementScore',
    'evaluate',
    'contribution_map',
    'score_map',
    'Candidate',
    'enumerate_candidates',
    'select_best',
    'PlacementResult',
    'PlacementAllocator',
    'place',
    'to_world',
    'SpawnSession',
    'SpawnReport',
    'PlacementRecord',
]
