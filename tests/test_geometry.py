"""Tests for geometry primitives."""
import math
import unittest

from drone_delivery.constants import CLOSE_TOLERANCE, COMPASS_HEADINGS, STEP_DISTANCE
from drone_delivery.domain.coordinate import Coordinate, Region
from drone_delivery.planning.geometry import (
    InvalidRegionError,
    calculate_angle,
    distance,
    distance_to_boundary,
    distance_to_segment,
    is_close,
    is_in_central_area,
    is_in_region,
    next_position,
    region_boundary_intersects,
    segments_intersect,
)

UNIT_SQUARE = Region.from_points("square", [(0, 0), (1, 0), (1, 1), (0, 1)])

# L-shaped (concave) polygon
L_SHAPE_POINTS = [(0, 0), (2, 0), (2, 1), (1, 1), (1, 2), (0, 2)]


class TestDistance(unittest.TestCase):
    """Test distance and proximity."""

    def test_distance_is_euclidean(self):
        """Test 3-4-5 triangle distance."""
        self.assertAlmostEqual(distance(Coordinate(0, 0), Coordinate(3, 4)), 5.0)

    def test_point_is_close_to_itself(self):
        """Test a point is close to itself with zero distance."""
        p = Coordinate(-3.186874, 55.944494)
        self.assertEqual(distance(p, p), 0.0)
        self.assertTrue(is_close(p, p))

    def test_close_threshold_is_strict(self):
        """Test points just inside and outside the tolerance."""
        p = Coordinate(-3.186874, 55.944494)
        self.assertTrue(is_close(p, Coordinate(p.lng + CLOSE_TOLERANCE * 0.9, p.lat)))
        self.assertFalse(is_close(p, Coordinate(p.lng + CLOSE_TOLERANCE * 1.1, p.lat)))


class TestIsInRegion(unittest.TestCase):
    """Test point-in-polygon containment."""

    def test_interior_and_exterior_points(self):
        """Test points clearly inside and outside a square."""
        self.assertTrue(is_in_region(Coordinate(0.5, 0.5), UNIT_SQUARE))
        self.assertFalse(is_in_region(Coordinate(1.5, 0.5), UNIT_SQUARE))
        self.assertFalse(is_in_region(Coordinate(-0.5, 0.5), UNIT_SQUARE))
        self.assertFalse(is_in_region(Coordinate(0.5, 1.5), UNIT_SQUARE))

    def test_vertices_count_as_inside(self):
        """Test every vertex is inside its region."""
        for vertex in UNIT_SQUARE.vertices:
            self.assertTrue(is_in_region(vertex, UNIT_SQUARE), f"Vertex {vertex} should be inside")

    def test_point_near_vertex_counts_as_inside(self):
        """Test a point within tolerance of a vertex but outside the outline."""
        self.assertTrue(is_in_region(Coordinate(1.0001, 1.0001), UNIT_SQUARE))

    def test_edge_points_count_as_inside(self):
        """Test points on each edge are inside."""
        for point in [Coordinate(0.5, 0), Coordinate(1, 0.5), Coordinate(0.5, 1), Coordinate(0, 0.5)]:
            self.assertTrue(is_in_region(point, UNIT_SQUARE), f"Edge point {point} should be inside")

    def test_degenerate_region_contains_nothing(self):
        """Test regions with fewer than three vertices."""
        line = Region.from_points("line", [(0, 0), (1, 1)])
        empty = Region("empty", ())
        self.assertFalse(is_in_region(Coordinate(0, 0), line))
        self.assertFalse(is_in_region(Coordinate(0.5, 0.5), line))
        self.assertFalse(is_in_region(Coordinate(0, 0), empty))

    def test_concave_polygon(self):
        """Test containment in an L-shaped polygon."""
        region = Region.from_points("L", L_SHAPE_POINTS)
        self.assertTrue(is_in_region(Coordinate(0.5, 0.5), region))
        self.assertTrue(is_in_region(Coordinate(1.5, 0.5), region))
        self.assertTrue(is_in_region(Coordinate(0.5, 1.5), region))
        self.assertFalse(is_in_region(Coordinate(1.5, 1.5), region))
        self.assertTrue(is_in_region(Coordinate(1.5, 1.0), region))

    def test_rotation_invariance(self):
        """Test the result does not depend on the first vertex."""
        points = [
            Coordinate(0.5, 0.5), Coordinate(1.5, 0.5), Coordinate(0.5, 1.5),
            Coordinate(1.5, 1.5), Coordinate(3, 3), Coordinate(1, 1),
            Coordinate(1.5, 1.0), Coordinate(-1, 0.5), Coordinate(0.25, 1.75),
        ]
        base = Region.from_points("L", L_SHAPE_POINTS)
        expected = [is_in_region(p, base) for p in points]

        for shift in range(1, len(L_SHAPE_POINTS)):
            rotated = Region.from_points("L", L_SHAPE_POINTS[shift:] + L_SHAPE_POINTS[:shift])
            self.assertEqual([is_in_region(p, rotated) for p in points], expected,
                             f"Rotation by {shift} changed containment")

    def test_central_area_requires_central_name(self):
        """Test central area check rejects missing or misnamed regions."""
        with self.assertRaises(InvalidRegionError):
            is_in_central_area(Coordinate(0.5, 0.5), UNIT_SQUARE)
        with self.assertRaises(InvalidRegionError):
            is_in_central_area(Coordinate(0.5, 0.5), None)

        central = Region("central", UNIT_SQUARE.vertices)
        self.assertTrue(is_in_central_area(Coordinate(0.5, 0.5), central))
        self.assertFalse(is_in_central_area(Coordinate(2, 2), central))

    def test_invalid_region_error_is_value_error(self):
        """Test contract violations surface as ValueError."""
        self.assertTrue(issubclass(InvalidRegionError, ValueError))


class TestMovement(unittest.TestCase):
    """Test single-step movement and heading snapping."""

    def setUp(self):
        self.origin = Coordinate(-3.186874, 55.944494)

    def test_every_heading_moves_one_step(self):
        """Test every compass heading moves exactly the step distance."""
        for heading in COMPASS_HEADINGS:
            moved = next_position(self.origin, heading)
            self.assertLess(abs(distance(self.origin, moved) - STEP_DISTANCE), 1e-10,
                            f"Heading {heading} moved the wrong distance")

    def test_cardinal_directions(self):
        """Test 0 is east, 90 north, 180 west, 270 south."""
        east = next_position(self.origin, 0)
        north = next_position(self.origin, 90)
        west = next_position(self.origin, 180)
        south = next_position(self.origin, 270)

        self.assertAlmostEqual(east.lng - self.origin.lng, STEP_DISTANCE, places=12)
        self.assertAlmostEqual(east.lat, self.origin.lat, places=12)
        self.assertAlmostEqual(north.lat - self.origin.lat, STEP_DISTANCE, places=12)
        self.assertAlmostEqual(north.lng, self.origin.lng, places=12)
        self.assertAlmostEqual(west.lng - self.origin.lng, -STEP_DISTANCE, places=12)
        self.assertAlmostEqual(south.lat - self.origin.lat, -STEP_DISTANCE, places=12)

    def test_angle_of_each_heading(self):
        """Test calculate_angle recovers the heading of a single move."""
        for heading in COMPASS_HEADINGS:
            moved = next_position(self.origin, heading)
            self.assertAlmostEqual(calculate_angle(self.origin, moved), heading, places=9)

    def test_angle_snaps_to_nearest_multiple(self):
        """Test arbitrary vectors snap to the nearest 22.5 degrees."""
        origin = Coordinate(0, 0)
        self.assertEqual(calculate_angle(origin, Coordinate(1, 0.01)), 0.0)
        self.assertEqual(calculate_angle(origin, Coordinate(1, 0.3)), 22.5)
        self.assertEqual(calculate_angle(origin, Coordinate(-1, -1)), 225.0)
        # Just below 360 folds back onto 0
        self.assertEqual(calculate_angle(origin, Coordinate(1, -0.01)), 0.0)

    def test_angle_is_in_range(self):
        """Test snapped angles stay within [0, 360)."""
        origin = Coordinate(0, 0)
        for i in range(72):
            theta = math.radians(i * 5)
            angle = calculate_angle(origin, Coordinate(math.cos(theta), math.sin(theta)))
            self.assertGreaterEqual(angle, 0.0)
            self.assertLess(angle, 360.0)
            self.assertEqual(angle % 22.5, 0.0)


class TestSegmentIntersection(unittest.TestCase):
    """Test segment intersection predicates."""

    def test_crossing_segments(self):
        """Test an X crossing."""
        self.assertTrue(segments_intersect(Coordinate(0, 0), Coordinate(1, 1),
                                           Coordinate(0, 1), Coordinate(1, 0)))

    def test_parallel_segments(self):
        """Test parallel segments do not intersect."""
        self.assertFalse(segments_intersect(Coordinate(0, 0), Coordinate(1, 0),
                                            Coordinate(0, 1), Coordinate(1, 1)))

    def test_touching_at_endpoint(self):
        """Test segments sharing an endpoint intersect."""
        self.assertTrue(segments_intersect(Coordinate(0, 0), Coordinate(1, 1),
                                           Coordinate(1, 1), Coordinate(2, 0)))

    def test_collinear_overlap(self):
        """Test collinear overlapping segments intersect."""
        self.assertTrue(segments_intersect(Coordinate(0, 0), Coordinate(2, 0),
                                           Coordinate(1, 0), Coordinate(3, 0)))

    def test_collinear_disjoint(self):
        """Test collinear separate segments do not intersect."""
        self.assertFalse(segments_intersect(Coordinate(0, 0), Coordinate(1, 0),
                                            Coordinate(2, 0), Coordinate(3, 0)))

    def test_segment_ending_on_other_segment(self):
        """Test a T junction counts as intersecting."""
        self.assertTrue(segments_intersect(Coordinate(0.5, 1), Coordinate(0.5, 0),
                                           Coordinate(0, 0), Coordinate(1, 0)))

    def test_region_boundary(self):
        """Test segments against a square outline."""
        self.assertTrue(region_boundary_intersects(Coordinate(0.5, 0.5), Coordinate(1.5, 0.5), UNIT_SQUARE))
        self.assertTrue(region_boundary_intersects(Coordinate(-1, 0.5), Coordinate(2, 0.5), UNIT_SQUARE))
        self.assertFalse(region_boundary_intersects(Coordinate(2, 2), Coordinate(3, 3), UNIT_SQUARE))
        self.assertFalse(region_boundary_intersects(Coordinate(0.2, 0.2), Coordinate(0.8, 0.8), UNIT_SQUARE))

    def test_closing_edge_is_checked(self):
        """Test the edge from the last vertex back to the first."""
        # Crosses only the left edge (0,1)-(0,0)
        self.assertTrue(region_boundary_intersects(Coordinate(-0.5, 0.5), Coordinate(0.5, 0.5), UNIT_SQUARE))


class TestDistanceToSegment(unittest.TestCase):
    """Test point to segment distance."""

    def test_projection_inside_segment(self):
        self.assertAlmostEqual(distance_to_segment(Coordinate(0, 1), Coordinate(-1, 0), Coordinate(1, 0)), 1.0)

    def test_projection_beyond_end(self):
        self.assertAlmostEqual(distance_to_segment(Coordinate(2, 0), Coordinate(-1, 0), Coordinate(1, 0)), 1.0)

    def test_degenerate_segment(self):
        self.assertAlmostEqual(distance_to_segment(Coordinate(3, 4), Coordinate(0, 0), Coordinate(0, 0)), 5.0)

    def test_distance_to_boundary(self):
        self.assertAlmostEqual(distance_to_boundary(Coordinate(0.5, 0.25), UNIT_SQUARE), 0.25)
        self.assertAlmostEqual(distance_to_boundary(Coordinate(2, 0.5), UNIT_SQUARE), 1.0)


if __name__ == '__main__':
    unittest.main()
