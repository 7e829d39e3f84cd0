"""Tests for Point, AdjacentPairDistance and LinkageResult."""

import numpy as np
import pytest

from clusterphobia.core.types import AdjacentPairDistance, LinkageResult, Point


class TestPoint:
    def test_coordinates_become_int_tuple(self):
        point = Point(7, [1, 2, 3])
        assert point.coordinates == (1, 2, 3)
        assert point.dimensions == 3

    def test_negative_coordinate_rejected(self):
        with pytest.raises(ValueError):
            Point(1, (3, -1))

    @pytest.mark.parametrize("coordinates", [(1.7, 2), (1.0, 2), ("3", 2)])
    def test_non_integer_coordinate_rejected(self, coordinates):
        with pytest.raises(ValueError, match="must be integers"):
            Point(0, coordinates)

    def test_numpy_integers_accepted(self):
        point = Point(0, tuple(np.array([4, 5], dtype=np.int64)))
        assert point.coordinates == (4, 5)
        assert all(type(c) is int for c in point.coordinates)

    def test_square_distance_is_exact(self):
        big = 2 ** 40 - 1
        assert Point(0, (0, 0, 0)).square_distance(Point(1, (big, 0, 0))) == big * big

    def test_square_distance_needs_same_dimensions(self):
        with pytest.raises(ValueError):
            Point(0, (0, 0)).square_distance(Point(1, (0, 0, 0)))


class TestAdjacentPairDistance:
    def test_ordering_by_distance_first(self):
        pair1 = AdjacentPairDistance(100, 1, 2, 1, 2)
        pair2 = AdjacentPairDistance(50, 2, 3, 2, 3)
        assert pair1 > pair2

    def test_ties_broken_by_index(self):
        a = AdjacentPairDistance(50, 4, 5, 40, 50)
        b = AdjacentPairDistance(50, 2, 3, 20, 30)
        assert sorted([a, b]) == [b, a]

    def test_equality_ignores_ids(self):
        assert AdjacentPairDistance(9, 0, 1, 10, 11) == AdjacentPairDistance(9, 0, 1, 99, 98)

    @pytest.mark.parametrize("count", [0, 1])
    def test_all_pairs_empty_for_fewer_than_two_points(self, count):
        points = [Point(i, (i, i)) for i in range(count)]
        assert AdjacentPairDistance.all_pairs(points) == []

    def test_all_pairs_in_given_order(self):
        points = [Point(10, (0, 0)), Point(11, (3, 4)), Point(12, (3, 5))]
        pairs = AdjacentPairDistance.all_pairs(points)

        assert [p.square_distance for p in pairs] == [25, 1]
        assert [(p.first_index, p.second_index) for p in pairs] == [(0, 1), (1, 2)]
        assert [(p.first_id, p.second_id) for p in pairs] == [(10, 11), (11, 12)]

    def test_all_pairs_exact_beyond_int64(self):
        big = 2 ** 40 - 1
        points = [Point(0, (0, 0, 0)), Point(1, (big, big, big))]
        (pair,) = AdjacentPairDistance.all_pairs(points)
        assert pair.square_distance == 3 * big * big
        assert isinstance(pair.square_distance, int)

    def test_all_pairs_matches_point_distance(self, separated_points):
        pairs = AdjacentPairDistance.all_pairs(separated_points)
        assert len(pairs) == len(separated_points) - 1
        for pair in pairs:
            p1 = separated_points[pair.first_index]
            p2 = separated_points[pair.second_index]
            assert pair.square_distance == p1.square_distance(p2)


class TestLinkageResult:
    def test_to_dict(self):
        result = LinkageResult(900, 11, 12, 0, 0)
        assert result.to_dict() == {
            "linkage_square_distance": 900,
            "count_of_too_large_distances": 11,
            "large_cluster_count": 12,
            "outlier_cluster_count": 0,
            "outlier_count": 0,
        }
