"""Constrained A* route planner over sixteen fixed compass headings."""
import heapq
import itertools
import logging
from typing import Iterable, List, Optional, Sequence

from shapely.geometry import Point, Polygon
from shapely.ops import unary_union

from drone_delivery.constants import (
    CENTRAL_REGION_NAME,
    CLOSE_TOLERANCE,
    COMPASS_HEADINGS,
    DEFAULT_MAX_EXPANSIONS,
)
from drone_delivery.domain.coordinate import Coordinate, Region
from drone_delivery.planning.geometry import (
    InvalidRegionError,
    distance,
    distance_to_boundary,
    is_close,
    is_in_central_area,
    is_in_region,
    next_position,
    polygon_parts,
    region_boundary_intersects,
)
from drone_delivery.planning.path_cache import PathCache
from drone_delivery.planning.search_node import NodeArena

logger = logging.getLogger(__name__)


class PathPlanner:
    """Plans drone paths that avoid no-fly zones.

    Every move is one fixed-length step along one of the sixteen compass
    headings. A move is rejected if it ends inside a no-fly region or
    crosses a no-fly boundary. On return trips, once the path has entered
    the central region it may not leave it again; this lock is tracked per
    node, so it follows whichever predecessor gives the cheaper path.

    Results are memoized per planner instance; ``find_path`` is safe to call
    from several threads at once.
    """

    def __init__(self, no_fly_regions: Iterable[Region], central_region: Region,
                 cache: Optional[PathCache] = None,
                 max_expansions: Optional[int] = DEFAULT_MAX_EXPANSIONS):
        """Initialize planner.

        Args:
            no_fly_regions: Regions the drone must never enter or cross
            central_region: Region named "central"
            cache: Path cache to use (default: a new cache owned by this planner)
            max_expansions: Give up after settling this many nodes (None: unbounded)

        Raises:
            InvalidRegionError: If the central region is missing or misnamed
        """
        if central_region is None or central_region.name != CENTRAL_REGION_NAME:
            name = central_region.name if central_region is not None else None
            raise InvalidRegionError(
                f"the planner needs a region named '{CENTRAL_REGION_NAME}', got {name!r}"
            )
        self.no_fly_regions: Sequence[Region] = tuple(no_fly_regions)
        self.central_region = central_region
        self.cache = cache if cache is not None else PathCache()
        self.max_expansions = max_expansions

        # Merged no-fly area and the pockets (holes) it encloses
        self._no_fly_area = unary_union([
            part for region in self.no_fly_regions if len(region.vertices) >= 3
            for part in polygon_parts(region.to_polygon())
        ])
        self._pockets: List[Polygon] = [
            Polygon(interior)
            for part in polygon_parts(self._no_fly_area)
            for interior in part.interiors
        ]
        self._all_pockets = unary_union(self._pockets)

    def find_path(self, start: Coordinate, end: Coordinate,
                  is_return_path: bool = False) -> List[Coordinate]:
        """Find a path from start to end.

        Args:
            start: Start coordinate
            end: Destination coordinate
            is_return_path: If True, the path may not leave the central region once inside

        Returns:
            List of coordinates from start to (within tolerance of) end,
            or an empty list if no path exists
        """
        start = Coordinate(*start)
        end = Coordinate(*end)

        cached = self.cache.get(start, end, is_return_path)
        if cached is not None:
            logger.debug(f"Path cache hit for {start} -> {end} (return={is_return_path})")
            return cached

        path = self._search(start, end, is_return_path)
        self.cache.put(start, end, is_return_path, path)
        return list(path)

    def reset_state(self):
        """Clear all cached paths."""
        self.cache.clear()

    def is_valid_move(self, current: Coordinate, candidate: Coordinate,
                      locked_in_central: bool) -> bool:
        """Check if a single move is allowed.

        Args:
            current: Position before the move
            candidate: Position after the move
            locked_in_central: Whether the path has already entered the central region
                on a return trip

        Returns:
            True if the move may be taken
        """
        if locked_in_central and not is_in_central_area(candidate, self.central_region):
            return False

        for region in self.no_fly_regions:
            if is_in_region(candidate, region):
                return False

        for region in self.no_fly_regions:
            if region_boundary_intersects(current, candidate, region):
                return False

        return True

    def _search(self, start: Coordinate, end: Coordinate, is_return_path: bool) -> List[Coordinate]:
        """Run the A* search (uncached)."""
        if is_close(start, end):
            return [start]

        starts_locked = is_return_path and is_in_central_area(start, self.central_region)

        if self._goal_unreachable(start, end, starts_locked):
            logger.warning(f"Target {end} cannot be reached from {start} (return={is_return_path})")
            return []

        arena = NodeArena()
        root_index = arena.get_or_create(start)
        root = arena[root_index]
        root.g = 0.0
        root.h = distance(start, end)
        root.entered_central = starts_locked

        # Priority queue: (f_score, insertion order, arena index)
        counter = itertools.count()
        open_set = [(root.f, next(counter), root_index)]
        expansions = 0

        while open_set:
            _, _, index = heapq.heappop(open_set)
            current = arena[index]

            if current.settled:
                continue
            current.settled = True

            if is_close(current.coordinate, end):
                path = arena.path_to(index)
                logger.debug(
                    f"Found path {start} -> {end} with {len(path)} points "
                    f"after {expansions} expansions ({len(arena)} nodes)"
                )
                return path

            if self.max_expansions is not None and expansions >= self.max_expansions:
                logger.warning(
                    f"Search {start} -> {end} gave up after {expansions} expansions"
                )
                return []
            expansions += 1

            for heading in COMPASS_HEADINGS:
                candidate = next_position(current.coordinate, heading)

                existing = arena.lookup(candidate)
                if existing is not None and arena[existing].settled:
                    continue

                if not self.is_valid_move(current.coordinate, candidate, current.entered_central):
                    continue

                tentative_g = current.g + distance(current.coordinate, candidate)
                neighbor_index = existing if existing is not None else arena.get_or_create(candidate)
                neighbor = arena[neighbor_index]

                if tentative_g < neighbor.g:
                    neighbor.g = tentative_g
                    neighbor.h = distance(candidate, end)
                    neighbor.parent = index
                    neighbor.entered_central = is_return_path and (
                        current.entered_central
                        or is_in_central_area(candidate, self.central_region)
                    )
                    heapq.heappush(open_set, (neighbor.f, next(counter), neighbor_index))

        logger.info(f"No path from {start} to {end} after {expansions} expansions")
        return []

    def _goal_unreachable(self, start: Coordinate, end: Coordinate, starts_locked: bool) -> bool:
        """Detect targets that no accepted coordinate can ever be close to.

        A search can only finish at a coordinate closer than the tolerance to
        the target. It is hopeless when the free part of that disc is empty,
        or lies only in pockets walled off from the start by no-fly zones, or
        (for a search locked into the central region from the start) lies well
        outside the central region.
        """
        free_goal = Point(end).buffer(CLOSE_TOLERANCE)
        if not self._no_fly_area.is_empty:
            free_goal = free_goal.difference(self._no_fly_area)
        if free_goal.is_empty:
            return True

        start_pocket = self._pocket_containing(start)
        if start_pocket is not None:
            if not free_goal.intersects(start_pocket):
                return True
        elif self._pockets and free_goal.difference(self._all_pockets).is_empty:
            return True

        if starts_locked:
            outside = not is_in_region(end, self.central_region)
            if outside and distance_to_boundary(end, self.central_region) >= 2 * CLOSE_TOLERANCE:
                return True

        return False

    def _pocket_containing(self, point: Coordinate) -> Optional[Polygon]:
        """Smallest enclosed pocket around a point, or None if it is in open space."""
        location = Point(point.lng, point.lat)
        around = [pocket for pocket in self._pockets if pocket.contains(location)]
        if not around:
            return None
        return min(around, key=lambda pocket: pocket.area)
