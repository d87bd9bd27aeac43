"""Main importer interface."""
import logging
from pathlib import Path
from typing import List, Optional, Tuple

from drone_delivery.constants import CENTRAL_REGION_NAME, DEFAULT_MAX_EXPANSIONS
from drone_delivery.data_import.geojson_loader import load_regions_from_geojson
from drone_delivery.data_import.rest_client import RestServiceClient
from drone_delivery.domain.coordinate import Region
from drone_delivery.planning.path_planner import PathPlanner

logger = logging.getLogger(__name__)


class DataImporter:
    """Main interface for loading planner regions."""

    @staticmethod
    def import_regions(file_path: str) -> Tuple[List[Region], Region]:
        """Import no-fly zones and the central area from a GeoJSON file.

        The feature named "central" is the central area; every other polygon
        is a no-fly zone.

        Args:
            file_path: Path to GeoJSON file

        Returns:
            Tuple of (no-fly regions, central region)
        """
        suffix = Path(file_path).suffix.lower()
        if suffix not in ['.geojson', '.json']:
            raise ValueError(f"Unsupported file format: {suffix}. Supported: .geojson, .json")

        regions = load_regions_from_geojson(file_path)
        central = [r for r in regions if r.name == CENTRAL_REGION_NAME]
        if len(central) != 1:
            raise ValueError(
                f"Expected exactly one region named '{CENTRAL_REGION_NAME}' in {file_path}, "
                f"found {len(central)}"
            )
        no_fly = [r for r in regions if r.name != CENTRAL_REGION_NAME]
        return no_fly, central[0]

    @staticmethod
    def build_planner(regions_file: Optional[str] = None,
                      client: Optional[RestServiceClient] = None,
                      max_expansions: Optional[int] = DEFAULT_MAX_EXPANSIONS) -> PathPlanner:
        """Build a path planner from a region file or the REST service.

        Args:
            regions_file: GeoJSON file with the regions (takes precedence)
            client: REST client used when no file is given
            max_expansions: Search budget passed to the planner

        Returns:
            PathPlanner instance
        """
        if regions_file:
            no_fly, central = DataImporter.import_regions(regions_file)
            logger.info(f"Loaded {len(no_fly)} no-fly zones from {regions_file}")
        elif client is not None:
            no_fly = client.get_no_fly_zones()
            central = client.get_central_area()
            logger.info(f"Fetched {len(no_fly)} no-fly zones from {client.base_url}")
        else:
            raise ValueError("Either a regions file or a REST client is required")

        return PathPlanner(no_fly, central, max_expansions=max_expansions)
