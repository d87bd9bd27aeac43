"""JSON and GeoJSON exporters for moves, deliveries and flight paths."""
import json
import logging
from pathlib import Path
from typing import List, Sequence

from drone_delivery.constants import HOVER_ANGLE
from drone_delivery.domain.coordinate import Coordinate
from drone_delivery.domain.order import Order
from drone_delivery.planning.geometry import calculate_angle

logger = logging.getLogger(__name__)


def path_to_moves(path: Sequence[Coordinate], order_no: str) -> List[dict]:
    """One move record per consecutive pair of path coordinates."""
    moves = []
    for i in range(len(path) - 1):
        start = path[i]
        end = path[i + 1]
        moves.append({
            "orderNo": order_no,
            "fromLongitude": start.lng,
            "fromLatitude": start.lat,
            "angle": calculate_angle(start, end),
            "toLongitude": end.lng,
            "toLatitude": end.lat
        })
    return moves


def hover_move(location: Coordinate, order_no: str) -> dict:
    """Move record for hovering in place at a location."""
    return {
        "orderNo": order_no,
        "fromLongitude": location.lng,
        "fromLatitude": location.lat,
        "angle": HOVER_ANGLE,
        "toLongitude": location.lng,
        "toLatitude": location.lat
    }


def delivery_record(order: Order) -> dict:
    """Delivery outcome record for an order."""
    return {
        "orderNo": order.order_no,
        "orderStatus": order.order_status.value,
        "orderValidationCode": order.order_validation_code.value,
        "costInPence": order.price_total_in_pence
    }


def flight_path_to_geojson(path: Sequence[Coordinate]) -> dict:
    """GeoJSON LineString feature of a flight path."""
    return {
        "type": "Feature",
        "properties": {},
        "geometry": {
            "type": "LineString",
            "coordinates": [[c.lng, c.lat] for c in path]
        }
    }


class JSONExporter:
    """Exports delivery results to JSON files."""

    @staticmethod
    def export_json(data, file_path: str):
        """Write data to a JSON file, creating parent directories.

        Args:
            data: JSON-serialisable data
            file_path: Output file path
        """
        path = Path(file_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2, ensure_ascii=False)

    @staticmethod
    def save_results(order_date: str, moves: List[dict], deliveries: List[dict],
                     flight_path: Sequence[Coordinate], output_dir: str) -> List[Path]:
        """Write the three result files for a day.

        Args:
            order_date: Day in YYYY-MM-DD format
            moves: Move records
            deliveries: Delivery records
            flight_path: Every coordinate flown that day
            output_dir: Directory for the result files

        Returns:
            Paths of the written files
        """
        directory = Path(output_dir)
        files = [
            (directory / f"deliveries-{order_date}.json", deliveries),
            (directory / f"flightpath-{order_date}.json", moves),
            (directory / f"drone-{order_date}.geojson", flight_path_to_geojson(flight_path)),
        ]
        for file_path, data in files:
            JSONExporter.export_json(data, str(file_path))
        logger.info(f"Saved results for {order_date} to {directory}")
        return [file_path for file_path, _ in files]
