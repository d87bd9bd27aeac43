"""Client for the REST service providing orders, restaurants and regions."""
import logging
import re
from datetime import date
from typing import Any, List, Optional
from urllib.parse import urlparse

import requests

from drone_delivery.constants import CENTRAL_REGION_NAME
from drone_delivery.domain.coordinate import Region
from drone_delivery.domain.order import Order, Restaurant

logger = logging.getLogger(__name__)

ALLOWED_DOMAIN = "ilp-rest-2024.azurewebsites.net"
DATE_PATTERN = re.compile(r"^\d{4}-(0[1-9]|1[0-2])-(0[1-9]|[12]\d|3[01])$")


class RestServiceError(RuntimeError):
    """Raised when the REST service cannot be reached or returns unusable data."""


def validate_date(value: Optional[str]) -> date:
    """Parse a YYYY-MM-DD date string.

    Raises:
        ValueError: If the string is empty or malformed
    """
    if value is None or not value.strip():
        raise ValueError("Date cannot be empty")
    value = value.strip()
    if not DATE_PATTERN.match(value):
        raise ValueError(f"Invalid date format: {value}")
    return date.fromisoformat(value)


class RestServiceClient:
    """Fetches delivery data from the REST service."""

    def __init__(self, base_url: str, timeout: float = 10.0,
                 session: Optional[requests.Session] = None):
        """Initialize client.

        Args:
            base_url: Service URL; only https on the allowed domain or localhost is accepted
            timeout: Request timeout in seconds
            session: Requests session to use (default: module-level requests)
        """
        self.base_url = self._validate_base_url(base_url)
        self.timeout = timeout
        self.session = session

    @staticmethod
    def _validate_base_url(url: Optional[str]) -> str:
        if url is None or not url.strip():
            raise ValueError("Base URL cannot be empty")

        processed = url.strip()
        if processed.startswith("http://"):
            raise ValueError("HTTP protocol not allowed")
        if not processed.startswith("https://"):
            processed = "https://" + processed

        parsed = urlparse(processed)
        host = (parsed.hostname or "").lower()
        if host == "localhost":
            return processed.rstrip("/")
        if host != ALLOWED_DOMAIN:
            raise ValueError(
                f"Invalid domain. Only {ALLOWED_DOMAIN} or localhost is allowed, but got: {host}"
            )
        return f"https://{ALLOWED_DOMAIN}"

    def _get_json(self, endpoint: str) -> Any:
        url = self.base_url + endpoint
        getter = self.session.get if self.session is not None else requests.get
        try:
            response = getter(url, timeout=self.timeout)
            response.raise_for_status()
            return response.json()
        except (requests.RequestException, ValueError) as e:
            raise RestServiceError(f"Error requesting {url}: {e}") from e

    def get_restaurants(self) -> List[Restaurant]:
        """Fetch all restaurants."""
        data = self._get_json("/restaurants")
        try:
            return [Restaurant.from_dict(item) for item in data]
        except (KeyError, TypeError, ValueError) as e:
            raise RestServiceError(f"Malformed restaurant data: {e}") from e

    def get_orders(self, order_date: str) -> List[Order]:
        """Fetch the orders placed on a given day.

        Args:
            order_date: Day in YYYY-MM-DD format

        Raises:
            ValueError: If the date is malformed
            RestServiceError: If the service fails
        """
        target = validate_date(order_date)
        data = self._get_json("/orders")
        try:
            orders = [Order.from_dict(item) for item in data]
        except (KeyError, TypeError, ValueError) as e:
            raise RestServiceError(f"Malformed order data: {e}") from e

        selected = [order for order in orders if order.order_date == target]
        logger.info(f"Fetched {len(selected)} of {len(orders)} orders for {target.isoformat()}")
        return selected

    def get_central_area(self) -> Region:
        """Fetch the central area, always named "central"."""
        data = self._get_json("/centralArea")
        try:
            region = Region.from_dict(data)
        except (KeyError, TypeError, ValueError) as e:
            raise RestServiceError(f"Malformed central area data: {e}") from e
        return Region(name=CENTRAL_REGION_NAME, vertices=region.vertices)

    def get_no_fly_zones(self) -> List[Region]:
        """Fetch all no-fly zones."""
        data = self._get_json("/noFlyZones")
        try:
            return [Region.from_dict(item) for item in data]
        except (KeyError, TypeError, ValueError) as e:
            raise RestServiceError(f"Malformed no-fly zone data: {e}") from e
