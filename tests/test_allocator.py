"""
Integration tests for PlacementAllocator: reservation, world coordinates
and grid invariants across placement sequences.
"""

import threading

import numpy as np
import pytest

from room_spawner.allocator import PlacementAllocator, place, to_world
from room_spawner.errors import InvalidConfiguration, NoSpaceAvailable
from room_spawner.geometry import Footprint, GridAnchor, WorldPoint
from room_spawner.grid import OccupancyGrid
from room_spawner.schema import ScoringWeights

WEIGHTS = ScoringWeights(wall_bonus=1.0, cluster_bonus=0.5, spread_bonus=0.0, jitter=0.0)
JITTERY = ScoringWeights(wall_bonus=1.0, cluster_bonus=0.5, spread_bonus=0.0, jitter=0.4)
ORIGIN = WorldPoint(0.0, 0.0, 0.0)
UNIT = Footprint(1, 1)


def reserved_cells(result):
    a, f = result.anchor, result.footprint
    return {(x, z) for x in range(a.x, a.x + f.cells_x) for z in range(a.z, a.z + f.cells_z)}


class TestPlace:

    def test_reserves_winning_region(self):
        grid = OccupancyGrid(3, 3)
        result = place(grid, UNIT, WEIGHTS, ORIGIN, np.random.default_rng(0))

        assert result.anchor in {GridAnchor(0, 0), GridAnchor(0, 2), GridAnchor(2, 0), GridAnchor(2, 2)}
        assert not grid.is_free(result.anchor.x, result.anchor.z)
        assert grid.occupied_count() == 1

    def test_second_placement_takes_another_corner(self):
        grid = OccupancyGrid(3, 3)
        rng = np.random.default_rng(5)
        first = place(grid, UNIT, WEIGHTS, ORIGIN, rng)
        second = place(grid, UNIT, WEIGHTS, ORIGIN, rng)

        assert second.anchor != first.anchor
        assert second.score == 2.0

    def test_footprint_too_large_for_gap(self):
        grid = OccupancyGrid(3, 3)
        rng = np.random.default_rng(0)
        for _ in range(8):
            place(grid, UNIT, WEIGHTS, ORIGIN, rng)
        assert grid.free_count() == 1

        before = grid.snapshot()
        with pytest.raises(NoSpaceAvailable) as exc:
            place(grid, Footprint(2, 2), WEIGHTS, ORIGIN, rng)
        assert exc.value.footprint == Footprint(2, 2)
        np.testing.assert_array_equal(grid.snapshot(), before)

    def test_footprint_larger_than_grid(self):
        grid = OccupancyGrid(3, 3)
        with pytest.raises(NoSpaceAvailable):
            place(grid, Footprint(4, 4), WEIGHTS, ORIGIN, np.random.default_rng(0))
        assert grid.occupied_count() == 0

    def test_full_grid_raises(self):
        grid = OccupancyGrid(2, 2)
        place(grid, Footprint(2, 2), WEIGHTS, ORIGIN, np.random.default_rng(0))
        with pytest.raises(NoSpaceAvailable):
            place(grid, UNIT, WEIGHTS, ORIGIN, np.random.default_rng(0))

    @pytest.mark.parametrize("footprint", [Footprint(0, 1), Footprint(1, -2)])
    def test_invalid_footprint(self, footprint):
        grid = OccupancyGrid(3, 3)
        with pytest.raises(InvalidConfiguration):
            place(grid, footprint, WEIGHTS, ORIGIN, np.random.default_rng(0))
        assert grid.occupied_count() == 0

    def test_fractional_footprint_reserves_ceiling(self):
        grid = OccupancyGrid(2, 1)
        result = place(grid, Footprint(1.5, 1), WEIGHTS, ORIGIN, np.random.default_rng(0))
        assert result.anchor == GridAnchor(0, 0)
        assert grid.occupied_count() == 2


class TestWorldCoordinates:

    def test_centre_of_region_scaled_by_tile_scale(self):
        grid = OccupancyGrid(2, 1, tile_scale=2.0)
        origin = WorldPoint(10.0, 1.0, -5.0)
        result = place(grid, Footprint(2, 1), WEIGHTS, origin, np.random.default_rng(0))

        assert result.anchor == GridAnchor(0, 0)
        assert result.position.x == pytest.approx(10.5)
        assert result.position.y == pytest.approx(1.0)
        assert result.position.z == pytest.approx(-4.75)

    def test_to_world_offsets_by_anchor(self):
        grid = OccupancyGrid(8, 8, tile_scale=4.0)
        point = to_world(grid, GridAnchor(4, 2), Footprint(1, 3), WorldPoint(0.0, 0.0, 0.0))
        assert point.x == pytest.approx((4 + 0.5) / 4.0)
        assert point.z == pytest.approx((2 + 1.5) / 4.0)


class TestInvariants:

    def test_no_overlap_and_bounds_respected(self):
        grid = OccupancyGrid(9, 7)
        rng = np.random.default_rng(11)
        footprints = [Footprint(2, 1), Footprint(1, 3), Footprint(2, 2), Footprint(1.5, 1), Footprint(1, 1)]

        taken = set()
        placed = 0
        for i in range(40):
            footprint = footprints[i % len(footprints)]
            try:
                result = place(grid, footprint, JITTERY, ORIGIN, rng)
            except NoSpaceAvailable:
                continue
            cells = reserved_cells(result)
            assert taken.isdisjoint(cells)
            assert all(0 <= x < grid.width and 0 <= z < grid.depth for x, z in cells)
            taken |= cells
            placed += 1

        assert placed > 0
        assert grid.occupied_count() == len(taken)

    def test_occupancy_is_monotonic(self):
        grid = OccupancyGrid(6, 6)
        rng = np.random.default_rng(3)
        previous = grid.snapshot()
        for _ in range(15):
            try:
                place(grid, Footprint(2, 1), JITTERY, ORIGIN, rng)
            except NoSpaceAvailable:
                pass
            current = grid.snapshot()
            assert np.all(current[previous])
            previous = current

    def test_fixed_seed_reproducible(self):
        def run(seed):
            grid = OccupancyGrid(8, 6)
            rng = np.random.default_rng(seed)
            return [place(grid, Footprint(2, 1), JITTERY, ORIGIN, rng).anchor for _ in range(6)]

        assert run(123) == run(123)


class TestPlacementAllocator:

    def test_seeded_allocators_agree(self):
        first = PlacementAllocator(OccupancyGrid(5, 5), seed=7)
        second = PlacementAllocator(OccupancyGrid(5, 5), seed=7)
        for _ in range(5):
            assert first.place(UNIT, JITTERY) == second.place(UNIT, JITTERY)

    def test_shared_grid_across_threads(self):
        grid = OccupancyGrid(6, 6)
        results = []
        errors = []
        lock = threading.Lock()

        def worker(seed):
            allocator = PlacementAllocator(grid, seed=seed)
            for _ in range(9):
                try:
                    result = allocator.place(UNIT, JITTERY)
                except NoSpaceAvailable as e:
                    with lock:
                        errors.append(e)
                    return
                with lock:
                    results.append(result.anchor)

        threads = [threading.Thread(target=worker, args=(seed,)) for seed in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert not errors
        assert len(results) == 36
        assert len(set(results)) == 36
        assert grid.free_count() == 0
