"""Planar geometry primitives used by the route planner.

Coordinates are treated as points on a flat plane: distances are plain
Euclidean distances in degrees and a move adds its offset directly to the
longitude/latitude. Region boundaries count as part of the region, and
collinear overlapping segments count as intersecting.
"""
import math
from typing import List, Optional

from shapely.geometry import Polygon
from shapely.geometry.base import BaseGeometry
from shapely.validation import make_valid

from drone_delivery.constants import (
    CENTRAL_REGION_NAME,
    CLOSE_TOLERANCE,
    EDGE_EPSILON,
    HEADING_INCREMENT,
    STEP_DISTANCE,
)
from drone_delivery.domain.coordinate import Coordinate, Region


class InvalidRegionError(ValueError):
    """Raised when a region is used for a purpose it does not qualify for."""


def distance(a: Coordinate, b: Coordinate) -> float:
    """Euclidean distance between two coordinates."""
    return math.sqrt((a.lng - b.lng) ** 2 + (a.lat - b.lat) ** 2)


def is_close(a: Coordinate, b: Coordinate) -> bool:
    """Check if two coordinates are within the closeness tolerance."""
    return distance(a, b) < CLOSE_TOLERANCE


def is_in_region(point: Coordinate, region: Region) -> bool:
    """Check if a point lies inside a region, boundary included.

    A point close to a vertex or lying on an edge is inside. Any other point
    is classified with the even-odd ray casting rule. Regions with fewer
    than three vertices contain nothing.

    Args:
        point: Coordinate to test
        region: Polygon to test against

    Returns:
        True if the point is inside or on the boundary
    """
    vertices = region.vertices
    if vertices is None or len(vertices) < 3:
        return False

    count = len(vertices)
    for i in range(count):
        if is_close(point, vertices[i]):
            return True
        if _is_on_edge(point, vertices[i], vertices[(i + 1) % count]):
            return True

    inside = False
    j = count - 1
    for i in range(count):
        vi = vertices[i]
        vj = vertices[j]
        if (vi.lat > point.lat) != (vj.lat > point.lat):
            crossing_lng = (vj.lng - vi.lng) * (point.lat - vi.lat) / (vj.lat - vi.lat) + vi.lng
            if point.lng < crossing_lng:
                inside = not inside
        j = i

    return inside


def _is_on_edge(point: Coordinate, start: Coordinate, end: Coordinate) -> bool:
    """Check if a point lies on the segment start-end."""
    if (point.lat < min(start.lat, end.lat) or point.lat > max(start.lat, end.lat) or
            point.lng < min(start.lng, end.lng) or point.lng > max(start.lng, end.lng)):
        return False

    cross = abs((point.lat - start.lat) * (end.lng - start.lng) -
                (point.lng - start.lng) * (end.lat - start.lat))
    return cross < EDGE_EPSILON


def is_in_central_area(point: Coordinate, region: Optional[Region]) -> bool:
    """Check if a point lies inside the central area.

    Raises:
        InvalidRegionError: If the region is missing or not the central area
    """
    if region is None:
        raise InvalidRegionError("the central region is missing")
    if region.name != CENTRAL_REGION_NAME:
        raise InvalidRegionError(
            f"the region '{region.name}' is not valid - must be: {CENTRAL_REGION_NAME}"
        )
    return is_in_region(point, region)


def next_position(point: Coordinate, heading: float) -> Coordinate:
    """Position reached by one step from a point along a heading in degrees."""
    radians = math.radians(heading)
    return Coordinate(
        point.lng + STEP_DISTANCE * math.cos(radians),
        point.lat + STEP_DISTANCE * math.sin(radians)
    )


def calculate_angle(start: Coordinate, end: Coordinate) -> float:
    """Heading of the move start -> end snapped to a multiple of 22.5 degrees."""
    angle = math.degrees(math.atan2(end.lat - start.lat, end.lng - start.lng))
    if angle < 0:
        angle += 360.0

    # Round half up, then fold 360 back onto 0
    snapped = math.floor(angle / HEADING_INCREMENT + 0.5) * HEADING_INCREMENT
    return snapped % 360.0


def _orientation(p: Coordinate, q: Coordinate, r: Coordinate) -> int:
    """Orientation of the ordered triplet: 0 collinear, 1 or 2 for the two turn directions."""
    value = (q.lat - p.lat) * (r.lng - q.lng) - (q.lng - p.lng) * (r.lat - q.lat)
    if value == 0:
        return 0
    return 1 if value > 0 else 2


def _on_segment(p: Coordinate, q: Coordinate, r: Coordinate) -> bool:
    """For collinear p, q, r: check if q lies within the bounding box of p-r."""
    return (min(p.lat, r.lat) <= q.lat <= max(p.lat, r.lat) and
            min(p.lng, r.lng) <= q.lng <= max(p.lng, r.lng))


def segments_intersect(p1: Coordinate, p2: Coordinate, q1: Coordinate, q2: Coordinate) -> bool:
    """Check if segment p1-p2 intersects segment q1-q2 (touching counts)."""
    o1 = _orientation(p1, p2, q1)
    o2 = _orientation(p1, p2, q2)
    o3 = _orientation(q1, q2, p1)
    o4 = _orientation(q1, q2, p2)

    if o1 != o2 and o3 != o4:
        return True

    if o1 == 0 and _on_segment(p1, q1, p2):
        return True
    if o2 == 0 and _on_segment(p1, q2, p2):
        return True
    if o3 == 0 and _on_segment(q1, p1, q2):
        return True
    if o4 == 0 and _on_segment(q1, p2, q2):
        return True

    return False


def region_boundary_intersects(p1: Coordinate, p2: Coordinate, region: Region) -> bool:
    """Check if segment p1-p2 intersects any edge of a region."""
    vertices = region.vertices
    count = len(vertices)
    for i in range(count):
        if segments_intersect(p1, p2, vertices[i], vertices[(i + 1) % count]):
            return True
    return False


def distance_to_segment(point: Coordinate, start: Coordinate, end: Coordinate) -> float:
    """Shortest distance from a point to the segment start-end."""
    dx = end.lng - start.lng
    dy = end.lat - start.lat
    length_sq = dx * dx + dy * dy
    if length_sq == 0:
        return distance(point, start)

    t = ((point.lng - start.lng) * dx + (point.lat - start.lat) * dy) / length_sq
    t = max(0.0, min(1.0, t))
    projection = Coordinate(start.lng + t * dx, start.lat + t * dy)
    return distance(point, projection)


def distance_to_boundary(point: Coordinate, region: Region) -> float:
    """Shortest distance from a point to any edge of a region."""
    vertices = region.vertices
    count = len(vertices)
    if count == 0:
        return math.inf
    return min(
        distance_to_segment(point, vertices[i], vertices[(i + 1) % count])
        for i in range(count)
    )


def polygon_parts(geometry: BaseGeometry) -> List[Polygon]:
    """Non-empty polygons contained in a shapely geometry.

    Invalid geometries are repaired first. Multi-part geometries and
    collections are flattened; points and lines are left out.
    """
    if geometry is None or geometry.is_empty:
        return []
    if not geometry.is_valid:
        geometry = make_valid(geometry)

    if geometry.geom_type == "Polygon":
        return [geometry]
    if hasattr(geometry, "geoms"):
        parts = []
        for part in geometry.geoms:
            parts.extend(polygon_parts(part))
        return parts
    return []
