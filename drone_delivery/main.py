"""FastAPI application serving the route planner and the delivery pipeline."""
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from drone_delivery import settings
from drone_delivery.api import deliveries, planning, visualization

API_VERSION = "1.0.0"

logger = logging.getLogger(__name__)


def region_source() -> str:
    """Where the planner takes its no-fly zones and central area from."""
    if settings.REGIONS_GEOJSON:
        return f"file:{settings.REGIONS_GEOJSON}"
    return f"rest:{settings.ILP_REST_URL}"


def create_application() -> FastAPI:
    """Build the API with the planning, delivery and map routes."""
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="[%(asctime)s] [%(levelname)s] %(name)s - %(message)s"
    )

    api = FastAPI(
        title="Drone Delivery Route Planner",
        description="Plans no-fly-zone-avoiding drone routes for pizza deliveries",
        version=API_VERSION
    )
    api.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    api.include_router(planning.router)
    api.include_router(deliveries.router)
    api.include_router(visualization.router)

    @api.get("/")
    async def root():
        """Service description and the planner's region source."""
        return {
            "service": "drone-delivery-planner",
            "version": API_VERSION,
            "regions": region_source(),
            "max_expansions": settings.PLANNER_MAX_EXPANSIONS,
            "docs": "/docs"
        }

    @api.get("/health")
    async def health():
        return {"status": "healthy"}

    logger.info(f"Route planner API ready (regions from {region_source()})")
    return api


app = create_application()
