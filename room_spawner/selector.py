"""
CandidateSelector - exhaustive anchor search with random tie-break.

Every cell of the grid is tried as an anchor; anchors that cannot fit are
rejected by the scoring bounds check rather than skipped up front.
"""

from dataclasses import dataclass
from typing import List, Optional

import numpy as np

from .geometry import Footprint, GridAnchor
from .grid import OccupancyGrid
from .schema import ScoringWeights
from .scoring import contribution_map, evaluate


@dataclass(frozen=True)
class Candidate:
    """A valid anchor and its (jittered) score."""
    anchor: GridAnchor
    score: float


def enumerate_candidates(
    grid: OccupancyGrid,
    footprint: Footprint,
    weights: ScoringWeights,
    rng: np.random.Generator,
) -> List[Candidate]:
    """All valid anchors for footprint, x-major order."""
    contributions = contribution_map(grid, weights)
    candidates = []
    for x in range(grid.width):
        for z in range(grid.depth):
            anchor = GridAnchor(x, z)
            result = evaluate(grid, anchor, footprint, weights, rng, contributions)
            if result.valid:
                candidates.append(Candidate(anchor, result.score))
    return candidates


def select_best(
    grid: OccupancyGrid,
    footprint: Footprint,
    weights: ScoringWeights,
    rng: np.random.Generator,
) -> Optional[Candidate]:
    """
    Pick the highest-scoring anchor for footprint.

    Candidates tied exactly at the maximum are chosen between uniformly at
    random, so equal spots carry no bias toward the first anchor scanned.

    Returns:
        Winning Candidate, or None if no anchor is valid
    """
    candidates = enumerate_candidates(grid, footprint, weights, rng)
    if not candidates:
        return None

    highest = max(c.score for c in candidates)
    best = [c for c in candidates if c.score == highest]
    return best[int(rng.integers(len(best)))]
