"""Delivery orchestrator for processing a day's orders end to end."""
import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

from drone_delivery.constants import APPLETON_TOWER
from drone_delivery.data_import.rest_client import RestServiceClient
from drone_delivery.domain.coordinate import Coordinate
from drone_delivery.domain.order import Order, OrderStatus, OrderValidationCode, Restaurant
from drone_delivery.export.json_exporter import (
    JSONExporter,
    delivery_record,
    hover_move,
    path_to_moves,
)
from drone_delivery.planning.path_planner import PathPlanner
from drone_delivery.validation.order_validator import OrderValidator, find_restaurant
from drone_delivery.validation.route_checker import RouteChecker

logger = logging.getLogger(__name__)

Legs = Tuple[List[Coordinate], List[Coordinate]]


@dataclass
class DeliveryDayResult:
    """Everything produced by processing one day of orders."""
    order_date: str
    orders: List[Order] = field(default_factory=list)
    moves: List[dict] = field(default_factory=list)
    deliveries: List[dict] = field(default_factory=list)
    flight_path: List[Coordinate] = field(default_factory=list)

    @property
    def delivered_count(self) -> int:
        return sum(1 for order in self.orders if order.order_status == OrderStatus.DELIVERED)

    def to_dict(self) -> dict:
        """Convert result summary to dictionary."""
        return {
            "order_date": self.order_date,
            "orders": len(self.orders),
            "delivered": self.delivered_count,
            "moves": len(self.moves),
            "deliveries": self.deliveries
        }


class DeliveryOrchestrator:
    """Validates orders, plans both legs of each delivery and assembles the results."""

    def __init__(self, client: RestServiceClient, planner: PathPlanner,
                 validator: Optional[OrderValidator] = None,
                 base: Tuple[float, float] = APPLETON_TOWER,
                 max_workers: int = 1):
        """Initialize orchestrator.

        Args:
            client: Source of orders and restaurants
            planner: Path planner (shared between worker threads)
            validator: Order validator (default: OrderValidator())
            base: Coordinate the drone departs from and returns to
            max_workers: Number of threads planning routes in parallel
        """
        self.client = client
        self.planner = planner
        self.validator = validator or OrderValidator()
        self.base = Coordinate(*base)
        self.max_workers = max(1, max_workers)
        self.checker = RouteChecker()

    def process_day(self, order_date: str) -> DeliveryDayResult:
        """Process all orders placed on a day.

        Args:
            order_date: Day in YYYY-MM-DD format

        Returns:
            DeliveryDayResult with moves, delivery records and the flight path
        """
        logger.info(f"Processing orders for {order_date}")
        result = DeliveryDayResult(order_date=order_date)

        orders = self.client.get_orders(order_date)
        if not orders:
            logger.info(f"No orders for {order_date}")
            return result
        restaurants = self.client.get_restaurants()

        for order in orders:
            self.validator.validate_order(order, restaurants)
        valid_orders = [o for o in orders if o.order_validation_code == OrderValidationCode.NO_ERROR]
        logger.info(f"{len(valid_orders)} of {len(orders)} orders passed validation")

        legs = self._plan_orders(valid_orders, restaurants)

        for order in orders:
            if order.order_no in legs:
                self._record_delivery(order, legs[order.order_no], result)
            result.orders.append(order)
            result.deliveries.append(delivery_record(order))

        logger.info(f"Delivered {result.delivered_count} orders on {order_date}")
        return result

    def run(self, order_date: str, output_dir: str) -> DeliveryDayResult:
        """Process a day and write its result files."""
        result = self.process_day(order_date)
        JSONExporter.save_results(
            order_date, result.moves, result.deliveries, result.flight_path, str(Path(output_dir))
        )
        return result

    def _plan_orders(self, orders: Sequence[Order],
                     restaurants: Sequence[Restaurant]) -> Dict[str, Legs]:
        """Plan both legs for each order, keyed by order number.

        Orders whose restaurant cannot be found are marked invalid and left out.
        """
        legs: Dict[str, Legs] = {}
        if self.max_workers == 1 or len(orders) <= 1:
            for order in orders:
                try:
                    legs[order.order_no] = self._plan_order(order, restaurants)
                except LookupError as e:
                    self._mark_failed(order, e)
            return legs

        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            futures = [(order, executor.submit(self._plan_order, order, restaurants))
                       for order in orders]
            for order, future in futures:
                try:
                    legs[order.order_no] = future.result()
                except LookupError as e:
                    self._mark_failed(order, e)
        return legs

    def _plan_order(self, order: Order, restaurants: Sequence[Restaurant]) -> Legs:
        restaurant = find_restaurant(order, restaurants)
        if restaurant is None:
            raise LookupError(f"Restaurant not found for order: {order.order_no}")

        logger.debug(f"Planning order {order.order_no} to {restaurant.name}")
        outbound = self.planner.find_path(self.base, restaurant.location, False)
        inbound = self.planner.find_path(restaurant.location, self.base, True)

        for path, is_return in ((outbound, False), (inbound, True)):
            for violation in self.checker.check_path(
                    path, self.planner.no_fly_regions, self.planner.central_region, is_return):
                logger.warning(f"Order {order.order_no}: {violation['message']}")

        return outbound, inbound

    def _record_delivery(self, order: Order, legs: Legs, result: DeliveryDayResult):
        outbound, inbound = legs
        for path in (outbound, inbound):
            if not path:
                continue
            result.flight_path.extend(path)
            result.moves.extend(path_to_moves(path, order.order_no))
            result.moves.append(hover_move(path[-1], order.order_no))

        if outbound and inbound:
            order.order_status = OrderStatus.DELIVERED
        else:
            logger.warning(f"Order {order.order_no} is valid but no route was found")
            order.order_status = OrderStatus.VALID_BUT_NOT_DELIVERED

    @staticmethod
    def _mark_failed(order: Order, error: Exception):
        logger.error(f"Error processing order {order.order_no}: {error}")
        order.order_status = OrderStatus.INVALID
