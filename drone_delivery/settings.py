"""Runtime settings read from the environment (and an optional .env file)."""
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from drone_delivery.constants import DEFAULT_MAX_EXPANSIONS

env_path = Path(__file__).parent.parent / '.env'
if env_path.exists():
    load_dotenv(dotenv_path=env_path)


def _optional_int(name: str) -> Optional[int]:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return None
    return int(value)


# REST service serving orders, restaurants, no-fly zones and the central area
ILP_REST_URL = os.getenv("ILP_REST_URL", "https://ilp-rest-2024.azurewebsites.net")

# Optional GeoJSON file with no-fly zones and the central area (offline mode)
REGIONS_GEOJSON = os.getenv("REGIONS_GEOJSON")

RESULT_DIR = os.getenv("RESULT_DIR", "resultfiles")

# Upper bound on settled nodes per search
PLANNER_MAX_EXPANSIONS = _optional_int("PLANNER_MAX_EXPANSIONS") or DEFAULT_MAX_EXPANSIONS

PLANNER_WORKERS = _optional_int("PLANNER_WORKERS") or 1

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Comma-separated origins allowed to call the API from a browser
CORS_ORIGINS = [origin.strip() for origin in os.getenv("CORS_ORIGINS", "*").split(",") if origin.strip()]
