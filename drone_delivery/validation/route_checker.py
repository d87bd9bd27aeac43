"""Independent flight path checks against no-fly zones and the central area."""
from typing import Dict, List, Optional, Sequence

from shapely.geometry import LineString, Point

from drone_delivery.domain.coordinate import Coordinate, Region
from drone_delivery.planning.geometry import is_close


class RouteChecker:
    """Checks planned flight paths with shapely geometry."""

    def check_path(self, path: Sequence[Coordinate], no_fly_regions: Sequence[Region],
                   central_region: Optional[Region] = None,
                   is_return_path: bool = False) -> List[Dict]:
        """Check a flight path for constraint violations.

        Args:
            path: Planned coordinates
            no_fly_regions: Regions the path must avoid
            central_region: Central area (checked on return paths only)
            is_return_path: Whether the path must stay in the central area once inside

        Returns:
            List of violation dictionaries
        """
        violations = []

        if not path:
            return violations

        zones = [(region.name or "unnamed", region.to_polygon())
                 for region in no_fly_regions if len(region.vertices) >= 3]

        # Check each waypoint
        for idx, coordinate in enumerate(path):
            point = Point(coordinate.lng, coordinate.lat)
            for zone_name, polygon in zones:
                if polygon.contains(point) or polygon.touches(point):
                    violations.append({
                        "type": "no_fly_zone",
                        "message": f"Waypoint {idx} is in no-fly zone: {zone_name}",
                        "waypoint_index": idx
                    })

        # Check path segments
        for idx in range(len(path) - 1):
            segment = LineString([
                (path[idx].lng, path[idx].lat),
                (path[idx + 1].lng, path[idx + 1].lat)
            ])
            for zone_name, polygon in zones:
                if polygon.intersects(segment):
                    violations.append({
                        "type": "no_fly_zone",
                        "message": f"Path segment {idx}-{idx + 1} intersects no-fly zone: {zone_name}",
                        "waypoint_index": idx
                    })

        if is_return_path and central_region is not None:
            central = central_region.to_polygon()
            entered = False
            for idx, coordinate in enumerate(path):
                # Points near a corner count as inside, as they do for the planner
                inside = (central.covers(Point(coordinate.lng, coordinate.lat)) or
                          any(is_close(coordinate, vertex) for vertex in central_region.vertices))
                if inside:
                    entered = True
                elif entered:
                    violations.append({
                        "type": "central_area",
                        "message": f"Waypoint {idx} leaves the central area after entering it",
                        "waypoint_index": idx
                    })

        return violations
