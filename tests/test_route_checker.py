"""Tests for the shapely-based route checker."""
import unittest

from drone_delivery.domain.coordinate import Coordinate, Region
from drone_delivery.validation.route_checker import RouteChecker

ZONE = Region.from_points("zone", [(0, 0), (1, 0), (1, 1), (0, 1)])
CENTRAL = Region.from_points("central", [(2, 0), (4, 0), (4, 2), (2, 2)])


class TestRouteChecker(unittest.TestCase):
    """Test RouteChecker.check_path."""

    def setUp(self):
        self.checker = RouteChecker()

    def test_empty_path(self):
        self.assertEqual(self.checker.check_path([], [ZONE]), [])

    def test_clear_path(self):
        """Test a path that stays away from the zone."""
        path = [Coordinate(-1, -1), Coordinate(-1, 2), Coordinate(2, 2)]
        self.assertEqual(self.checker.check_path(path, [ZONE]), [])

    def test_waypoint_inside_zone(self):
        path = [Coordinate(-1, 0.5), Coordinate(0.5, 0.5)]

        violations = self.checker.check_path(path, [ZONE])

        waypoint = [v for v in violations if v["message"].startswith("Waypoint")]
        self.assertEqual([v["waypoint_index"] for v in waypoint], [1])
        self.assertTrue(all(v["type"] == "no_fly_zone" for v in violations))

    def test_segment_crossing_zone(self):
        """Test a segment crossing the zone between outside waypoints."""
        path = [Coordinate(-1, 0.5), Coordinate(2, 0.5)]

        violations = self.checker.check_path(path, [ZONE])

        self.assertEqual(len(violations), 1)
        self.assertIn("segment 0-1", violations[0]["message"])

    def test_degenerate_zone_ignored(self):
        line = Region.from_points("line", [(0, 0), (1, 1)])
        path = [Coordinate(0, 1), Coordinate(1, 0)]
        self.assertEqual(self.checker.check_path(path, [line]), [])

    def test_return_path_leaving_central(self):
        """Test leaving the central area after entering it on a return trip."""
        path = [Coordinate(5, 1), Coordinate(3, 1), Coordinate(5, 1.5)]

        violations = self.checker.check_path(path, [], CENTRAL, is_return_path=True)

        self.assertEqual(len(violations), 1)
        self.assertEqual(violations[0]["type"], "central_area")
        self.assertEqual(violations[0]["waypoint_index"], 2)

    def test_outbound_path_may_leave_central(self):
        path = [Coordinate(3, 1), Coordinate(5, 1)]
        self.assertEqual(self.checker.check_path(path, [], CENTRAL, is_return_path=False), [])

    def test_return_path_entering_central(self):
        path = [Coordinate(5, 1), Coordinate(3, 1), Coordinate(3, 1.5)]
        self.assertEqual(self.checker.check_path(path, [], CENTRAL, is_return_path=True), [])

    def test_return_path_grazing_central_corner(self):
        """Test a waypoint just past a corner of the central area still counts as inside."""
        path = [Coordinate(5, 1), Coordinate(3, 1), Coordinate(4.0001, 2.0001), Coordinate(3, 1.5)]
        self.assertEqual(self.checker.check_path(path, [], CENTRAL, is_return_path=True), [])

    def test_return_path_just_past_central_edge(self):
        """Test a waypoint just outside an edge midpoint still leaves the central area."""
        path = [Coordinate(5, 1), Coordinate(3, 1), Coordinate(4.0001, 1)]

        violations = self.checker.check_path(path, [], CENTRAL, is_return_path=True)

        self.assertEqual([v["waypoint_index"] for v in violations], [2])
        self.assertEqual(violations[0]["type"], "central_area")


if __name__ == '__main__':
    unittest.main()
