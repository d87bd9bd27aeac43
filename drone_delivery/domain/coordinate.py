"""Coordinate and region domain models."""
from dataclasses import dataclass
from typing import NamedTuple, Sequence, Tuple

from shapely.geometry import Polygon


class Coordinate(NamedTuple):
    """A (longitude, latitude) pair in planar space.

    Equality and hashing are exact float comparisons, so two coordinates
    only match when they are the same values.
    """
    lng: float
    lat: float

    def to_dict(self) -> dict:
        """Convert coordinate to dictionary."""
        return {"lng": self.lng, "lat": self.lat}

    @classmethod
    def from_dict(cls, data: dict) -> "Coordinate":
        """Create coordinate from dictionary."""
        return cls(lng=float(data["lng"]), lat=float(data["lat"]))


@dataclass(frozen=True)
class Region:
    """A named simple polygon; the last vertex connects back to the first."""
    name: str
    vertices: Tuple[Coordinate, ...]

    def __post_init__(self):
        """Normalise vertices into an immutable tuple of coordinates."""
        object.__setattr__(
            self, "vertices",
            tuple(v if isinstance(v, Coordinate) else Coordinate(*v) for v in self.vertices)
        )

    @classmethod
    def from_points(cls, name: str, points: Sequence[Tuple[float, float]]) -> "Region":
        """Create region from a sequence of (lng, lat) pairs."""
        return cls(name=name, vertices=tuple(Coordinate(lng, lat) for lng, lat in points))

    def to_polygon(self) -> Polygon:
        """Shapely polygon with the same outline."""
        return Polygon([(v.lng, v.lat) for v in self.vertices])

    def to_dict(self) -> dict:
        """Convert region to dictionary."""
        return {
            "name": self.name,
            "vertices": [v.to_dict() for v in self.vertices]
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Region":
        """Create region from dictionary."""
        return cls(
            name=data.get("name", ""),
            vertices=tuple(Coordinate.from_dict(v) for v in data.get("vertices") or [])
        )
