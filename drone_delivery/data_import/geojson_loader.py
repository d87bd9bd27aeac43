"""GeoJSON loader for no-fly zones and the central area."""
import json
import logging
from typing import List

from shapely.geometry import shape

from drone_delivery.domain.coordinate import Coordinate, Region
from drone_delivery.planning.geometry import polygon_parts

logger = logging.getLogger(__name__)


def load_regions_from_geojson(file_path: str) -> List[Region]:
    """Load named regions from GeoJSON file.

    Every Polygon feature becomes one region (only its exterior ring is
    used); each part of a MultiPolygon becomes a region of the same name.
    Self-intersecting rings are repaired first and any polygon parts of the
    repaired shape are kept. Features without polygon area are skipped with
    a warning.

    Args:
        file_path: Path to GeoJSON file

    Returns:
        List of Region objects
    """
    with open(file_path, 'r', encoding='utf-8') as f:
        geojson_data = json.load(f)

    # Handle FeatureCollection
    if geojson_data.get("type") == "FeatureCollection":
        features = geojson_data.get("features", [])
    # Handle single Feature
    elif geojson_data.get("type") == "Feature":
        features = [geojson_data]
    # Handle raw geometry
    elif geojson_data.get("type") in ["Polygon", "MultiPolygon"]:
        features = [{"geometry": geojson_data, "properties": {}}]
    else:
        raise ValueError(f"Unsupported GeoJSON type: {geojson_data.get('type')}")

    regions = []
    for idx, feature in enumerate(features):
        geometry_data = feature.get("geometry")
        if not geometry_data:
            logger.warning(f"Feature {idx + 1}: no geometry, skipped")
            continue

        properties = feature.get("properties") or {}
        name = properties.get("name") or f"Zone_{idx + 1}"

        try:
            geometry = shape(geometry_data)
        except (ValueError, TypeError, AttributeError) as e:
            raise ValueError(f"Feature {idx + 1}: invalid geometry: {e}") from e
        polygons = polygon_parts(geometry)
        if not polygons:
            logger.warning(f"Feature {idx + 1} ({name}): {geometry.geom_type} has no polygon area, skipped")
            continue

        for polygon in polygons:
            # GeoJSON rings repeat the first vertex at the end; regions close implicitly
            ring = list(polygon.exterior.coords)[:-1]
            regions.append(Region(
                name=name,
                vertices=tuple(Coordinate(x, y) for x, y, *_ in ring)
            ))

    return regions
