from __future__ import annotations

from pathlib import Path

import pytest

from api.cli import build_parser, main


def test_parser_accepts_all_flags() -> None:
    args = build_parser().parse_args(
        [
            "--config",
            "x.yaml",
            "--sensor",
            "replay",
            "--latency-us",
            "2000",
            "--width",
            "320",
            "--height",
            "200",
            "--fps",
            "15",
            "--headless-frames",
            "4",
            "--verbose",
        ]
    )
    assert args.config == Path("x.yaml")
    assert (args.sensor, args.latency_us, args.width, args.height, args.fps) == (
        "replay",
        2000,
        320,
        200,
        15,
    )
    assert args.headless_frames == 4 and args.verbose


def test_parser_rejects_unknown_sensor() -> None:
    with pytest.raises(SystemExit):
        build_parser().parse_args(["--sensor", "gps"])


def test_main_headless_run_returns_zero() -> None:
    assert main(["--sensor", "none", "--fps", "1000", "--headless-frames", "2"]) == 0


def test_main_reports_invalid_arguments() -> None:
    assert main(["--sensor", "none", "--width", "0", "--headless-frames", "1"]) == 1
