#!/usr/bin/env python3
"""
Delivery Route Optimizer - Main Entry Point

Compute shortest distances from a start location under the chosen criterion,
then again under delivery window cutoffs when windows are supplied.

Usage:
    python scripts/run.py [--input INPUT] [--output OUTPUT_FILE]
                          [--start ID] [--criterion {plain,cost,time}]
                          [--no-traffic] [--window-mode {literal,corrected}]

INPUT is an Excel workbook or a directory of CSV files with the sheets
locations, paths and (optionally) delivery_windows and run_settings.
Command-line options override values from run_settings.

Example:
    python scripts/run.py --input data/sample --output outputs/sample_routes.xlsx
"""
import argparse
import logging
import sys
import time
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from route_optimizer.config import (
    DEFAULT_INPUT_FILE, DEFAULT_OUTPUT_FILE, Criterion, WindowMode, location_name
)
from route_optimizer.engine import RouteResult, ShortestPathEngine
from route_optimizer.errors import RouteOptimizerError
from route_optimizer.graph import build_graph
from route_optimizer.io_loader import InputLoader
from route_optimizer.reporting import build_all_reports
from route_optimizer.utils import format_distance, setup_logging
from route_optimizer.validators import validate_inputs
from route_optimizer.write_outputs import write_outputs


def log_distances(logger: logging.Logger, title: str, result: RouteResult, locations: dict) -> None:
    logger.info(title)
    for location_id, distance in sorted(result.distances.items()):
        name = location_name(locations, location_id) or str(location_id)
        logger.info(f"  To {name}: {format_distance(distance)} units")
    if result.window_warnings:
        logger.warning(f"  {len(result.window_warnings)} delivery window(s) ignored, see window_warnings sheet")


def apply_overrides(run_settings, args):
    if args.start is not None:
        run_settings.start_location = args.start
    if args.criterion is not None:
        run_settings.criterion = Criterion.parse(
            args.criterion, strict=args.strict_criterion or run_settings.strict_criterion
        )
    if args.strict_criterion:
        run_settings.strict_criterion = True
    if args.no_traffic:
        run_settings.apply_traffic = False
    if args.window_mode is not None:
        run_settings.window_mode = WindowMode(args.window_mode)
    return run_settings


def main():
    parser = argparse.ArgumentParser(
        description="Delivery Route Optimizer - shortest distances with cost policies and delivery windows"
    )
    parser.add_argument(
        "--input", "-i",
        default=DEFAULT_INPUT_FILE,
        help=f"Input Excel file or CSV directory (default: {DEFAULT_INPUT_FILE})"
    )
    parser.add_argument(
        "--output", "-o",
        default=DEFAULT_OUTPUT_FILE,
        help=f"Output Excel file (default: {DEFAULT_OUTPUT_FILE})"
    )
    parser.add_argument(
        "--start",
        type=int,
        default=None,
        help="Start location id (default: run_settings or 1)"
    )
    parser.add_argument(
        "--criterion",
        default=None,
        help="Optimization criterion: plain, cost or time (unknown values behave as plain)"
    )
    parser.add_argument(
        "--strict-criterion",
        action="store_true",
        help="Reject unknown criterion names instead of falling back to plain"
    )
    parser.add_argument(
        "--no-traffic",
        action="store_true",
        help="Ignore traffic factors and use base distances"
    )
    parser.add_argument(
        "--window-mode",
        choices=[m.value for m in WindowMode],
        default=None,
        help="Delivery window parsing mode (default: literal)"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging"
    )

    args = parser.parse_args()

    log_level = logging.DEBUG if args.verbose else logging.INFO
    logger = setup_logging(log_level)

    start_time = time.time()
    logger.info("=" * 60)
    logger.info("Delivery Route Optimizer - Starting")
    logger.info("=" * 60)

    try:
        # Step 1: Load inputs
        logger.info("Step 1: Loading inputs...")
        loader = InputLoader(args.input, strict_criterion=args.strict_criterion)
        data = loader.load_all()
        run_settings = apply_overrides(data["run_settings"], args)
        locations = data["locations"]

        logger.info("Locations:")
        for location_id, location in sorted(locations.items()):
            logger.info(f"  {location_id}: {location.name}")

        # Step 2: Validate inputs
        logger.info("Step 2: Validating inputs...")
        validate_inputs(data)

        # Step 3: Build graph
        logger.info("Step 3: Building graph...")
        graph = build_graph(data["edges"], run_settings.apply_traffic, locations.values())
        engine = ShortestPathEngine(graph)

        start = run_settings.start_location
        start_name = location_name(locations, start) or str(start)

        # Step 4: Criterion search
        logger.info(f"Step 4: Shortest distances ({run_settings.criterion.value})...")
        results = {
            run_settings.criterion.value: engine.run(start, run_settings.criterion)
        }
        log_distances(
            logger,
            f"Shortest paths from {start_name} based on {run_settings.criterion.value} optimization:",
            results[run_settings.criterion.value],
            locations
        )

        # Step 5: Delivery window search
        windows = data["delivery_windows"]
        if windows:
            logger.info("Step 5: Delivery window optimization...")
            windowed = engine.run(
                start,
                Criterion.PLAIN,
                delivery_windows=windows,
                window_mode=run_settings.window_mode
            )
            results["delivery_windows"] = windowed
            log_distances(logger, f"Delivery optimized paths from {start_name}:", windowed, locations)
        else:
            logger.info("Step 5: No delivery windows, skipping window optimization")

        # Step 6: Reports
        logger.info("Step 6: Writing outputs...")
        reports = build_all_reports(locations, results)
        write_outputs(reports, args.output)

        elapsed = time.time() - start_time
        logger.info("=" * 60)
        logger.info(f"Delivery Route Optimizer - Complete ({elapsed:.1f}s)")
        logger.info(f"Output written to: {args.output}")
        logger.info("=" * 60)

        return 0

    except FileNotFoundError as e:
        logger.error(f"File not found: {e}")
        return 1
    except (RouteOptimizerError, ValueError) as e:
        logger.error(f"Input error: {e}")
        return 1
    except Exception as e:
        logger.exception(f"Unexpected error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
