import json
import os
from typing import Dict, List, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import InvalidConfiguration
from .geometry import Footprint, WorldPoint
from .grid import OccupancyGrid

PRESETS_PATH = os.path.join(os.path.dirname(__file__), 'presets.yaml')
DEFAULT_PRESET = 'balanced'


class ScoringWeights(BaseModel):
    """
    Placement heuristic. Bonuses may take any sign; jitter bounds a symmetric
    random perturbation added to every valid score.
    """
    model_config = ConfigDict(frozen=True, extra='forbid', allow_inf_nan=False)

    wall_bonus: float = 0.0
    cluster_bonus: float = 0.0
    spread_bonus: float = 0.0
    jitter: float = Field(default=0.0, ge=0.0)


class RoomConfig(BaseModel):
    model_config = ConfigDict(extra='forbid', allow_inf_nan=False)

    width: int = Field(gt=0)
    depth: int = Field(gt=0)
    tile_scale: float = Field(default=1.0, gt=0.0)
    origin: List[float] = Field(default_factory=lambda: [0.0, 0.0, 0.0])

    @field_validator('origin')
    @classmethod
    def _three_components(cls, value: List[float]) -> List[float]:
        if len(value) != 3:
            raise ValueError(f"origin must be [x, y, z], got {value}")
        return value

    def create_grid(self) -> OccupancyGrid:
        return OccupancyGrid(self.width, self.depth, self.tile_scale)

    def origin_point(self) -> WorldPoint:
        return WorldPoint.from_sequence(self.origin)


class SpawnItem(BaseModel):
    """One requested object; placed count times with the same footprint."""
    model_config = ConfigDict(extra='forbid', allow_inf_nan=False)

    name: str
    width: float = Field(gt=0.0)
    depth: float = Field(gt=0.0)
    count: int = Field(default=1, ge=1)
    preset: Optional[str] = None
    weights: Optional[ScoringWeights] = None

    @property
    def footprint(self) -> Footprint:
        return Footprint(self.width, self.depth)


class SpawnPlan(BaseModel):
    model_config = ConfigDict(extra='forbid')

    room: RoomConfig
    items: List[SpawnItem] = Field(default_factory=list)
    seed: Optional[int] = None


def _parse(model, data, source: str):
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise InvalidConfiguration(f"Invalid {source}: {e}") from e


def load_presets(file_path: str = PRESETS_PATH) -> Dict[str, ScoringWeights]:
    """Load named ScoringWeights from a YAML file with a top-level 'presets' mapping."""
    with open(file_path, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f)

    presets = {}
    if data and 'presets' in data:
        for name, values in data['presets'].items():
            presets[name] = _parse(ScoringWeights, values or {}, f"preset '{name}'")
    return presets


def resolve_weights(item: SpawnItem, presets: Dict[str, ScoringWeights]) -> ScoringWeights:
    """Inline weights win over a preset; neither means the default preset."""
    if item.weights is not None:
        return item.weights
    name = item.preset or DEFAULT_PRESET
    if name not in presets:
        raise InvalidConfiguration(
            f"Unknown preset '{name}' for item '{item.name}', expected one of {sorted(presets)}"
        )
    return presets[name]


def parse_plan(data: dict) -> SpawnPlan:
    return _parse(SpawnPlan, data, 'spawn plan')


def load_plan(file_path: str) -> SpawnPlan:
    """Read a spawn plan from JSON (.json) or YAML (anything else)."""
    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            if file_path.lower().endswith('.json'):
                data = json.load(f)
            else:
                data = yaml.safe_load(f)
    except (OSError, json.JSONDecodeError, yaml.YAMLError) as e:
        raise InvalidConfiguration(f"Cannot read spawn plan {file_path}: {e}") from e
    if not isinstance(data, dict):
        raise InvalidConfiguration(f"Spawn plan {file_path} must be a mapping")
    return parse_plan(data)
