"""Delivery API endpoints."""
from fastapi import APIRouter, Depends, HTTPException

from drone_delivery import settings
from drone_delivery.api.dependencies import get_orchestrator
from drone_delivery.data_import.rest_client import RestServiceError, validate_date
from drone_delivery.orchestrator.delivery_orchestrator import DeliveryOrchestrator

router = APIRouter(prefix="/api/deliveries", tags=["deliveries"])


@router.post("/{order_date}", response_model=dict)
def process_deliveries(order_date: str,
                       orchestrator: DeliveryOrchestrator = Depends(get_orchestrator)):
    """Process all orders for a day and write the result files."""
    try:
        validate_date(order_date)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    try:
        result = orchestrator.run(order_date, settings.RESULT_DIR)
    except RestServiceError as e:
        raise HTTPException(status_code=502, detail=str(e))

    return result.to_dict()
