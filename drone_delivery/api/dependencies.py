"""Shared dependencies for the API endpoints."""
from functools import lru_cache

from fastapi import Depends, HTTPException

from drone_delivery import settings
from drone_delivery.data_import.importer import DataImporter
from drone_delivery.data_import.rest_client import RestServiceClient, RestServiceError
from drone_delivery.orchestrator.delivery_orchestrator import DeliveryOrchestrator
from drone_delivery.planning.path_planner import PathPlanner


@lru_cache()
def get_client() -> RestServiceClient:
    """REST client for the configured service (one per process)."""
    return RestServiceClient(settings.ILP_REST_URL)


@lru_cache()
def _build_planner() -> PathPlanner:
    client = None if settings.REGIONS_GEOJSON else get_client()
    return DataImporter.build_planner(
        regions_file=settings.REGIONS_GEOJSON,
        client=client,
        max_expansions=settings.PLANNER_MAX_EXPANSIONS
    )


def get_planner() -> PathPlanner:
    """Process-wide planner; its cache is shared by all requests."""
    try:
        return _build_planner()
    except RestServiceError as e:
        raise HTTPException(status_code=502, detail=f"Could not load regions: {e}")


def get_orchestrator(client: RestServiceClient = Depends(get_client),
                     planner: PathPlanner = Depends(get_planner)) -> DeliveryOrchestrator:
    """Orchestrator bound to the shared client and planner."""
    return DeliveryOrchestrator(client, planner, max_workers=settings.PLANNER_WORKERS)
