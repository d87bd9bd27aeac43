"""Main entry point for the Drone Delivery Route Planner.

Process a day's orders and write the result files:
    python main.py deliver 2025-01-23 https://ilp-rest-2024.azurewebsites.net

Run FastAPI server:
    python main.py serve
    uvicorn drone_delivery.main:app --reload
"""
import argparse
import logging
import sys

from drone_delivery import settings


def deliver(order_date: str, base_url: str, output_dir: str, workers: int) -> int:
    """Run the delivery pipeline for one day."""
    from drone_delivery.data_import.importer import DataImporter
    from drone_delivery.data_import.rest_client import RestServiceClient, RestServiceError
    from drone_delivery.orchestrator.delivery_orchestrator import DeliveryOrchestrator

    try:
        client = RestServiceClient(base_url)
        planner = DataImporter.build_planner(
            regions_file=settings.REGIONS_GEOJSON,
            client=client,
            max_expansions=settings.PLANNER_MAX_EXPANSIONS
        )
        orchestrator = DeliveryOrchestrator(client, planner, max_workers=workers)
        result = orchestrator.run(order_date, output_dir)
    except (ValueError, RestServiceError) as e:
        logging.getLogger(__name__).error(f"Delivery processing failed: {e}")
        return 1

    print(f"Processed {len(result.orders)} orders, delivered {result.delivered_count}")
    return 0


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Drone delivery route planner")
    subparsers = parser.add_subparsers(dest="command", required=True)

    deliver_parser = subparsers.add_parser("deliver", help="Process the orders of one day")
    deliver_parser.add_argument("order_date", help="Day in YYYY-MM-DD format")
    deliver_parser.add_argument("base_url", nargs="?", default=settings.ILP_REST_URL,
                                help="REST service URL")
    deliver_parser.add_argument("--output-dir", default=settings.RESULT_DIR)
    deliver_parser.add_argument("--workers", type=int, default=settings.PLANNER_WORKERS)

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", default="0.0.0.0")
    serve_parser.add_argument("--port", type=int, default=8000)
    serve_parser.add_argument("--reload", action="store_true")

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="[%(asctime)s] [%(levelname)s] %(name)s - %(message)s"
    )

    if args.command == "deliver":
        return deliver(args.order_date, args.base_url, args.output_dir, args.workers)

    import uvicorn
    uvicorn.run("drone_delivery.main:app", host=args.host, port=args.port, reload=args.reload)
    return 0


if __name__ == '__main__':
    sys.exit(main())
