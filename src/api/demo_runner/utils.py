"""
どこで: `api.demo_runner.utils`（純粋関数）。
何を: FPS/ウィンドウ寸法/センサレイテンシ/クリア色/ログレベルを「引数 > 環境変数 > YAML > 既定」で解決。
なぜ: `api.demo` を薄く保ち、優先順位の規則をテストしやすくするため。
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from common.settings import get as get_settings
from common.types import RGBA
from util.color import normalize_color
from util.constants import (
    DEFAULT_CLEAR_COLOR,
    DEFAULT_FPS,
    DEFAULT_SENSOR_LATENCY_US,
    DEFAULT_WINDOW_SIZE,
)
from util.utils import config_section

logger = logging.getLogger(__name__)


def _positive_int(value: Any, fallback: int, *, minimum: int = 1) -> int:
    try:
        v = int(value)
    except (TypeError, ValueError):
        return fallback
    return max(minimum, v)


def resolve_fps(requested_fps: int | None, cfg: Mapping[str, Any]) -> int:
    """FPS を解決して 1 以上の int を返す。"""
    if requested_fps is not None:
        return _positive_int(requested_fps, DEFAULT_FPS)
    env_fps = get_settings().FPS
    if env_fps is not None:
        return env_fps
    window = config_section(dict(cfg), "window")
    return _positive_int(window.get("fps", DEFAULT_FPS), DEFAULT_FPS)


def resolve_window_size(
    width: int | None, height: int | None, cfg: Mapping[str, Any]
) -> tuple[int, int]:
    """ウィンドウ寸法 [px] を解決する。明示指定の非正値は `ValueError`。"""
    window = config_section(dict(cfg), "window")
    default_w, default_h = DEFAULT_WINDOW_SIZE
    w = _positive_int(window.get("width", default_w), default_w)
    h = _positive_int(window.get("height", default_h), default_h)
    if width is not None:
        if int(width) <= 0:
            raise ValueError(f"width must be > 0, got {width}")
        w = int(width)
    if height is not None:
        if int(height) <= 0:
            raise ValueError(f"height must be > 0, got {height}")
        h = int(height)
    return w, h


def resolve_latency_us(requested: int | None, cfg: Mapping[str, Any]) -> int:
    """センサの最大レイテンシ要求 [µs] を解決する（0 以上）。"""
    if requested is not None:
        return _positive_int(requested, DEFAULT_SENSOR_LATENCY_US, minimum=0)
    env_latency = get_settings().SENSOR_LATENCY_US
    if env_latency is not None:
        return env_latency
    sensor = config_section(dict(cfg), "sensor")
    return _positive_int(
        sensor.get("max_latency_us", DEFAULT_SENSOR_LATENCY_US),
        DEFAULT_SENSOR_LATENCY_US,
        minimum=0,
    )


def resolve_sensor_source(requested: str | None, cfg: Mapping[str, Any]) -> str:
    if requested:
        return requested.strip().lower()
    env_source = get_settings().SENSOR_SOURCE
    if env_source:
        return env_source
    sensor = config_section(dict(cfg), "sensor")
    return str(sensor.get("source", "simulated")).strip().lower()


def resolve_clear_color(requested: Any, cfg: Mapping[str, Any]) -> RGBA:
    """クリア色を RGBA(0–1) で返す。設定値が不正なら warning を出して既定（白）。"""
    if requested is not None:
        return normalize_color(requested)
    render = config_section(dict(cfg), "render")
    raw = render.get("clear_color")
    if raw is None:
        return DEFAULT_CLEAR_COLOR
    try:
        return normalize_color(raw)
    except ValueError as e:
        logger.warning("invalid render.clear_color %r: %s; using white", raw, e)
        return DEFAULT_CLEAR_COLOR


def resolve_log_level(verbose: bool, cfg: Mapping[str, Any]) -> str:
    if verbose:
        return "DEBUG"
    env_level = get_settings().LOG_LEVEL
    if env_level:
        return env_level
    section = config_section(dict(cfg), "logging")
    return str(section.get("level", "INFO"))


__all__ = [
    "resolve_fps",
    "resolve_window_size",
    "resolve_latency_us",
    "resolve_sensor_source",
    "resolve_clear_color",
    "resolve_log_level",
]
