"""
Command-line entry point: assess the bundled sample routes.

Run with:
    python -m floodroute                  # all sample routes, settings seed
    python -m floodroute --seed 7 --route route2
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import List, Optional

from floodroute.api.service import RiskEngineService
from floodroute.core.config import settings
from floodroute.core.logging_config import assessment_context, setup_logging
from floodroute.engine.weather_simulator import WeatherSimulator
from floodroute.sample_routes import sample_routes

logger = logging.getLogger("floodroute")


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="floodroute",
        description="Score the sample Seattle delivery routes for flood risk.",
    )
    parser.add_argument(
        "--seed", type=int, default=None,
        help="Simulator seed (default: SIMULATOR_SEED setting)",
    )
    parser.add_argument(
        "--route", action="append", dest="routes", metavar="ROUTE_ID",
        help="Only assess this route; repeatable",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = create_parser().parse_args(argv)

    setup_logging()
    logger.info(
        "Starting %s v%s [%s]",
        settings.APP_NAME, settings.APP_VERSION, settings.ENVIRONMENT,
    )

    routes = sample_routes()
    if args.routes:
        known = {route.route_id for route in routes}
        unknown = sorted(set(args.routes) - known)
        if unknown:
            logger.error("Unknown route id(s): %s", ", ".join(unknown))
            return 2
        routes = [route for route in routes if route.route_id in args.routes]

    service = RiskEngineService(WeatherSimulator(seed=args.seed))
    with assessment_context(caller="cli"):
        assessments = service.assess_routes(routes)

    report = [
        {"route_id": route.route_id, "name": route.name, **assessment.to_dict()}
        for route, assessment in zip(routes, assessments)
    ]
    json.dump(report, sys.stdout, indent=2)
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
