"""
polyarea CLI - Main entry point.

Estimates the area of a polygon read from a vertex file by concurrent
Monte Carlo sampling.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from polyarea_geometry import InvalidPolygon
from polyarea_sampling import (
    RunConfig,
    SamplingDomain,
    SamplingEngine,
    InvalidConfig,
    ConsoleProgress,
    estimate_area,
)
from polyarea_sampling.logging import LogEvent, create_logger

from .loader import load_polygon, IOFailure


def setup_logging(level: str) -> int:
    """
    Configure plain logging (stderr) and return the numeric level.

    Structured loggers get the same level from main().
    """
    numeric_level = getattr(logging, level.upper())
    logging.basicConfig(
        level=numeric_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        stream=sys.stderr,
    )
    return numeric_level


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="polyarea",
        description="Estimate the area of a polygon by Monte Carlo sampling",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # 4 workers, one million samples over the default [0,2]x[0,2] domain
  polyarea polygon.txt 4 1000000

  # Reproducible run, domain fitted to the polygon
  polyarea polygon.txt 8 1000000 --seed 42 --fit-domain

  # Remaining settings from YAML (positional counts still win)
  polyarea polygon.txt 4 1000000 --config config/run.yaml

Polygon file: one vertex per line, "x y", in boundary order.
"""
    )

    parser.add_argument('polygon', type=Path, help='Path to polygon vertex file')
    parser.add_argument('workers', type=int, help='Number of worker threads (> 0)')
    parser.add_argument('points', type=int, help='Number of random samples (> 0)')

    parser.add_argument(
        '--config',
        type=Path,
        default=None,
        help='Run configuration YAML (domain, seed, batch size, ...)'
    )
    parser.add_argument(
        '--seed',
        type=int,
        default=None,
        help='Seed for reproducible random streams'
    )
    parser.add_argument(
        '--fit-domain',
        action='store_true',
        help='Sample over the polygon bounding box instead of the configured domain'
    )
    parser.add_argument(
        '--progress-interval',
        type=float,
        default=None,
        help='Seconds between progress updates (default: 1.0)'
    )
    parser.add_argument(
        '--no-progress',
        action='store_true',
        help='Do not print progress updates'
    )
    parser.add_argument(
        '--log-level',
        default='WARNING',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        help='Log level for stderr diagnostics (default: WARNING)'
    )

    return parser


def build_config(args: argparse.Namespace, polygon=None) -> RunConfig:
    """
    Build the run configuration from CLI arguments (and optional YAML).

    Raises:
        InvalidConfig: If any value is rejected
    """
    overrides = {
        'total_points': args.points,
        'worker_count': args.workers,
        'seed': args.seed,
        'progress_interval': args.progress_interval,
    }
    if args.fit_domain and polygon is not None:
        overrides['domain'] = SamplingDomain.from_polygon(polygon)

    if args.config is not None:
        return RunConfig.from_yaml(args.config, **overrides)

    return RunConfig(**{k: v for k, v in overrides.items() if v is not None})


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Main CLI entry point.

    Workflow:
    1. Parse arguments and validate counts (fail fast)
    2. Load polygon
    3. Run sampling engine with progress on stdout
    4. Print the estimate

    Returns:
        Process exit status (0 on success, 1 on any reported error)
    """
    args = build_parser().parse_args(argv)
    level = setup_logging(args.log_level)
    logger = create_logger("cli", level=level)

    try:
        # Counts are checked before the polygon file is touched
        build_config(args)

        polygon = load_polygon(args.polygon)
        logger.info(
            event=LogEvent.POLYGON_LOADED,
            message="Polygon loaded",
            metadata={'path': str(args.polygon), 'vertices': len(polygon)}
        )

        config = build_config(args, polygon)
    except InvalidConfig as e:
        logger.error(event=LogEvent.INVALID_CONFIG, message="Invalid configuration", exc_info=e)
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except InvalidPolygon as e:
        logger.error(event=LogEvent.INVALID_POLYGON, message="Invalid polygon", exc_info=e)
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except IOFailure as e:
        logger.error(event=LogEvent.IO_FAILURE, message="Cannot read polygon", exc_info=e)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    engine = SamplingEngine(
        config,
        on_progress=ConsoleProgress(sys.stdout),
        report_progress=not args.no_progress,
        logger=create_logger("engine", level=level),
    )

    try:
        snapshot = engine.run(polygon)
    except InvalidConfig as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nInterrupted", file=sys.stderr)
        return 130

    result = estimate_area(snapshot, config)
    if not args.no_progress:
        print()
    print(result)
    return 0


if __name__ == '__main__':
    sys.exit(main())
