"""Planning API endpoints."""
from fastapi import APIRouter, Depends
from pydantic import BaseModel

from drone_delivery.api.dependencies import get_planner
from drone_delivery.domain.coordinate import Coordinate
from drone_delivery.planning.geometry import calculate_angle
from drone_delivery.planning.path_planner import PathPlanner

router = APIRouter(prefix="/api/planning", tags=["planning"])


class CoordinateDTO(BaseModel):
    lng: float
    lat: float

    def to_coordinate(self) -> Coordinate:
        return Coordinate(self.lng, self.lat)


class PathRequest(BaseModel):
    start: CoordinateDTO
    end: CoordinateDTO
    is_return_path: bool = False


@router.post("/path", response_model=dict)
def plan_path(request: PathRequest, planner: PathPlanner = Depends(get_planner)):
    """Plan a path between two coordinates."""
    path = planner.find_path(
        request.start.to_coordinate(),
        request.end.to_coordinate(),
        request.is_return_path
    )
    return {
        "found": bool(path),
        "path": [c.to_dict() for c in path],
        "headings": [calculate_angle(a, b) for a, b in zip(path, path[1:])],
        "moves": max(len(path) - 1, 0)
    }


@router.post("/reset", response_model=dict)
def reset_planner(planner: PathPlanner = Depends(get_planner)):
    """Clear cached paths."""
    planner.reset_state()
    return {"message": "Path cache cleared"}
