"""Visualization API endpoints."""
from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse

from drone_delivery.api.dependencies import get_planner
from drone_delivery.api.planning import PathRequest
from drone_delivery.planning.path_planner import PathPlanner
from drone_delivery.visualization.map_renderer import MapRenderer

router = APIRouter(prefix="/api/visualization", tags=["visualization"])


@router.post("/path", response_class=HTMLResponse)
def visualize_path(request: PathRequest, planner: PathPlanner = Depends(get_planner)):
    """Get HTML map visualization of a planned path."""
    path = planner.find_path(
        request.start.to_coordinate(),
        request.end.to_coordinate(),
        request.is_return_path
    )
    renderer = MapRenderer()
    map_obj = renderer.render_flight_path(path, planner.no_fly_regions, planner.central_region)

    return map_obj._repr_html_()
