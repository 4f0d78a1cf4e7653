"""
Tests for clustering, ramp validation and choke candidate detection.
"""

import pytest

from rts_pathfinder.clustering import chebyshev_adjacent, cluster_within, connected_components
from rts_pathfinder.grid import TerrainGrid
from rts_pathfinder.models import ChokePoint, Ramp, RampCluster
from rts_pathfinder.ramps import MapAnalysis, RampDetector, RampParams


def _column(heights):
    return RampCluster([(5, y) for y in range(len(heights))], list(heights))


# region Clustering
def test_gap_of_two_is_bridged():
    cells = [(0, 0), (2, 2), (4, 4), (10, 10)]
    comps = cluster_within(cells, 2)
    assert [sorted(c) for c in comps] == [[(0, 0), (2, 2), (4, 4)], [(10, 10)]]


def test_gap_of_three_splits():
    comps = cluster_within([(0, 0), (3, 0)], 2)
    assert len(comps) == 2


def test_windowed_matches_predicate_form():
    cells = [(1, 1), (2, 3), (4, 5), (9, 9), (11, 9), (20, 1), (22, 3), (25, 3)]
    a = {frozenset(c) for c in cluster_within(cells, 2)}
    b = {frozenset(c) for c in connected_components(cells, chebyshev_adjacent(2))}
    assert a == b
    assert len(a) == 4
# endregion


# region Validation
def test_four_level_column_is_accepted():
    det = RampDetector(TerrainGrid(1, 1, b"", b"", b""))
    assert det.is_valid_ramp(_column([0, 4, 8, 12, 12]))
    assert det.is_valid_ramp(_column([0, 4, 8, 12]))


@pytest.mark.parametrize("heights, expected", [
    ([0, 4, 8], "too small"),
    ([7, 7, 7, 7, 7], "height difference too small"),
    ([0, 2, 4, 6], "height difference too small"),
    ([0, 0, 120, 120], "height difference too large"),
    ([0, 0, 20, 20, 20, 20], "not enough height levels"),
    ([0, 0, 0, 0, 1, 39, 40, 40, 40, 40], "no progressive slope"),
])
def test_rejections(heights, expected):
    det = RampDetector(TerrainGrid(1, 1, b"", b"", b""))
    assert det.rejection_reason(_column(heights)).startswith(expected)


def test_params_are_overridable():
    cluster = _column([0, 2, 4, 6])
    assert not RampDetector(TerrainGrid(1, 1, b"", b"", b"")).is_valid_ramp(cluster)
    loose = RampDetector(TerrainGrid(1, 1, b"", b"", b""), RampParams(min_height_diff=4))
    assert loose.is_valid_ramp(cluster)
# endregion


# region Detection
def test_end_to_end_single_ramp(ramp_grid):
    ramps = RampDetector(ramp_grid).detect_ramps()
    assert len(ramps) == 1
    assert ramps[0].x == pytest.approx(5.0)
    assert ramps[0].y == pytest.approx(4.5)
    assert (ramps[0].min_height, ramps[0].max_height) == (0, 12)


def test_flat_cluster_is_not_a_ramp(masks):
    walk, build, hgt = masks(10, 10)
    build[2:7, 5] = False
    assert RampDetector(TerrainGrid.from_masks(walk, build, hgt)).detect_ramps() == []


def test_border_cells_are_not_candidates(masks):
    walk, build, hgt = masks(10, 10)
    build[:, 0] = False
    hgt[:, 0] = range(0, 100, 10)
    det = RampDetector(TerrainGrid.from_masks(walk, build, hgt))
    assert det.candidate_cells() == []


def test_plateau_ramp_and_choke(plateau_grid):
    analysis = RampDetector(plateau_grid).analyze(start_locations=[(15.5, 3.5)])
    assert len(analysis.ramps) == 1
    assert analysis.ramps[0].position == pytest.approx((15.0, 11.5))
    assert analysis.ramps[0].cells == 12
    assert analysis.choke_points == [ChokePoint(14, 10, 32)]
    assert analysis.rejected_clusters == 0
    assert analysis.start_locations == [(15.5, 3.5)]


def test_passage_width(plateau_grid):
    det = RampDetector(plateau_grid)
    assert det.passage_width(15, 11) == 3
    assert det.passage_width(0, 10) == 0
    assert det.passage_width(15, 20) > 3


def test_failures_are_contained(ramp_grid, monkeypatch):
    det = RampDetector(ramp_grid)

    def boom(*args, **kwargs):
        raise RuntimeError("bad cluster")

    monkeypatch.setattr(det, "clusters", boom)
    monkeypatch.setattr(det, "passage_width", boom)
    assert det.detect_ramps() == []
    assert det.detect_choke_candidates() == []
    analysis = det.analyze()
    assert analysis.ramps == [] and analysis.choke_points == []
# endregion


# region Queries
def test_nearest_and_facing_queries():
    analysis = MapAnalysis(
        ramps=[Ramp(10, 10), Ramp(30, 30)],
        choke_points=[ChokePoint(20, 0, 0), ChokePoint(0, 12, 0), ChokePoint(3, 3, 0)],
    )
    assert analysis.nearest_ramp((28, 28)) == Ramp(30, 30)
    assert analysis.nearest_ramp((0, 0), max_distance=5) is None
    assert analysis.nearest_choke_point((0, 0)) == ChokePoint(3, 3, 0)
    # facing +y: the choke straight "up" wins over the closer diagonal one
    assert analysis.facing_choke_point((0.5, 0.5), (0.5, 50)) == ChokePoint(0, 12, 0)
    assert analysis.facing_choke_point((0.5, 0.5), (50, 0.5)) == ChokePoint(20, 0, 0)
    assert analysis.facing_choke_point((0.5, 0.5), (0.5, 0.5)) == ChokePoint(3, 3, 0)
    assert analysis.facing_choke_point((100, 100), (0, 0)) is None


def test_choke_distance_uses_cell_coordinate():
    analysis = MapAnalysis(choke_points=[ChokePoint(10, 0, 0)])
    # exactly 10 from the cell coordinate, ~10.5 from its centre
    assert analysis.nearest_choke_point((0, 0), max_distance=10) == ChokePoint(10, 0, 0)
    assert analysis.facing_choke_point((0, 0), (1, 0), max_distance=10) == ChokePoint(10, 0, 0)
# endregion
