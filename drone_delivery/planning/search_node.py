"""Search records for the route planner.

Nodes live in a per-search arena and refer to their predecessor by index,
so the search tree is a flat list rather than a web of object references.
"""
from dataclasses import dataclass
from typing import Dict, List, Optional

from drone_delivery.domain.coordinate import Coordinate


@dataclass
class SearchNode:
    """One coordinate visited during a search."""
    coordinate: Coordinate
    g: float = float('inf')  # cost from the start
    h: float = 0.0  # estimated cost to the goal
    parent: Optional[int] = None  # arena index of the predecessor
    entered_central: bool = False  # path to this node is locked inside central
    settled: bool = False

    @property
    def f(self) -> float:
        """Total estimated cost through this node."""
        return self.g + self.h


class NodeArena:
    """Stores at most one SearchNode per coordinate for a single search."""

    def __init__(self):
        self._nodes: List[SearchNode] = []
        self._index: Dict[Coordinate, int] = {}

    def __len__(self) -> int:
        return len(self._nodes)

    def __getitem__(self, index: int) -> SearchNode:
        return self._nodes[index]

    def lookup(self, coordinate: Coordinate) -> Optional[int]:
        """Index of the node for a coordinate, or None if not seen yet."""
        return self._index.get(coordinate)

    def get_or_create(self, coordinate: Coordinate) -> int:
        """Index of the node for a coordinate, creating it if needed."""
        index = self._index.get(coordinate)
        if index is None:
            index = len(self._nodes)
            self._nodes.append(SearchNode(coordinate))
            self._index[coordinate] = index
        return index

    def path_to(self, index: int) -> List[Coordinate]:
        """Coordinates from the root of the search tree to the given node."""
        path = []
        current: Optional[int] = index
        while current is not None:
            node = self._nodes[current]
            path.append(node.coordinate)
            current = node.parent
        path.reverse()
        return path
