"""Map renderer for visualizing flight paths and regions."""
from typing import Optional, Sequence

import folium

from drone_delivery.domain.coordinate import Coordinate, Region


class MapRenderer:
    """Renders flight paths, no-fly zones and the central area on interactive maps."""

    def __init__(self, center_lat: float = 55.944494, center_lon: float = -3.186874,
                 zoom_start: int = 16):
        """Initialize map renderer.

        Args:
            center_lat: Center latitude used when there is nothing to draw
            center_lon: Center longitude used when there is nothing to draw
            zoom_start: Initial zoom level
        """
        self.center_lat = center_lat
        self.center_lon = center_lon
        self.zoom_start = zoom_start

    def render_flight_path(self, path: Sequence[Coordinate],
                           no_fly_regions: Sequence[Region] = (),
                           central_region: Optional[Region] = None,
                           color: str = "blue") -> folium.Map:
        """Render a flight path with its surrounding regions.

        Args:
            path: Coordinates of the flight path
            no_fly_regions: No-fly zones to outline in red
            central_region: Central area to outline in green
            color: Color for the path

        Returns:
            Folium Map object
        """
        if path:
            center_lat = sum(c.lat for c in path) / len(path)
            center_lon = sum(c.lng for c in path) / len(path)
        else:
            center_lat, center_lon = self.center_lat, self.center_lon

        m = folium.Map(location=[center_lat, center_lon], zoom_start=self.zoom_start)

        if central_region is not None:
            self._add_region(m, central_region, color="green", fill_opacity=0.05)
        for region in no_fly_regions:
            self._add_region(m, region, color="red", fill_opacity=0.3)

        if len(path) > 1:
            folium.PolyLine(
                [[c.lat, c.lng] for c in path],
                color=color,
                weight=3,
                opacity=0.8,
                popup=f"Flight path ({len(path) - 1} moves)"
            ).add_to(m)

        if path:
            folium.Marker(
                [path[0].lat, path[0].lng],
                popup="Start",
                icon=folium.Icon(color="green", icon="play")
            ).add_to(m)
            folium.Marker(
                [path[-1].lat, path[-1].lng],
                popup="Finish",
                icon=folium.Icon(color="red", icon="stop")
            ).add_to(m)

        return m

    @staticmethod
    def _add_region(m: folium.Map, region: Region, color: str, fill_opacity: float):
        if len(region.vertices) < 3:
            return
        folium.Polygon(
            locations=[[v.lat, v.lng] for v in region.vertices],
            color=color,
            weight=2,
            fill=True,
            fill_opacity=fill_opacity,
            popup=region.name
        ).add_to(m)
