"""
Rotation vector demo command line entry point.

Usage:
  rotation-vector-demo [--config PATH] [--sensor {simulated,replay,serial,none}]
                       [--latency-us N] [--width W] [--height H] [--fps N]
                       [--headless-frames N] [--verbose]

Notes:
  - Precedence is CLI flag > RVD_* environment variable > YAML config > built-in default.
  - --headless-frames renders without a window (no GL context needed) and exits.
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Sequence

from common.logging import setup_default_logging
from engine.core.errors import RotationDemoError
from engine.sensors.manager import SENSOR_SOURCES
from util.utils import config_section, load_config

from .demo_runner.utils import resolve_log_level


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rotation-vector-demo",
        description="Render a colored cube that follows the device rotation vector sensor.",
    )
    parser.add_argument("--config", type=Path, default=None, help="Extra YAML config file")
    parser.add_argument("--sensor", choices=SENSOR_SOURCES, default=None, help="Sensor source")
    parser.add_argument("--latency-us", type=int, default=None, help="Max sensor latency in µs")
    parser.add_argument("--width", type=int, default=None, help="Window width in px")
    parser.add_argument("--height", type=int, default=None, help="Window height in px")
    parser.add_argument("--fps", type=int, default=None, help="Frame rate")
    parser.add_argument(
        "--headless-frames",
        type=int,
        default=None,
        metavar="N",
        help="Render N frames without a window, then exit",
    )
    parser.add_argument("--verbose", action="store_true", help="Verbose logging")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    logger = logging.getLogger(__name__)
    cfg = load_config(args.config)
    log_cfg = config_section(cfg, "logging")
    log_file = log_cfg.get("file")
    setup_default_logging(
        resolve_log_level(args.verbose, cfg),
        Path(log_file) if log_file else None,
    )

    from .demo import run_demo

    try:
        run_demo(
            config_path=args.config,
            sensor=args.sensor,
            latency_us=args.latency_us,
            width=args.width,
            height=args.height,
            fps=args.fps,
            headless_frames=args.headless_frames,
        )
    except (RotationDemoError, ValueError) as e:
        logger.error("demo failed: %s", e)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
