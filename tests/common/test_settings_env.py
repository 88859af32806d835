from __future__ import annotations

import logging

import pytest

from common import settings
from common.env import env_bool, env_int, env_str
from common.logging import resolve_level


def test_defaults_when_env_unset() -> None:
    s = settings.get()
    assert s.LOG_LEVEL is None
    assert s.SENSOR_SOURCE is None
    assert s.SENSOR_LATENCY_US is None
    assert s.STRICT_SENSOR_TYPE is False
    assert s.FPS is None


def test_reload_reads_and_clamps(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RVD_LOG_LEVEL", "debug")
    monkeypatch.setenv("RVD_SENSOR_SOURCE", " Replay ")
    monkeypatch.setenv("RVD_SENSOR_LATENCY_US", "-5")
    monkeypatch.setenv("RVD_STRICT_SENSOR_TYPE", "yes")
    monkeypatch.setenv("RVD_FPS", "0")
    settings.reload_from_env()
    s = settings.get()
    assert s.LOG_LEVEL == "debug"
    assert s.SENSOR_SOURCE == "replay"
    assert s.SENSOR_LATENCY_US == 0
    assert s.STRICT_SENSOR_TYPE is True
    assert s.FPS == 1


def test_invalid_numbers_fall_back(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RVD_FPS", "fast")
    monkeypatch.setenv("RVD_SENSOR_LATENCY_US", "")
    settings.reload_from_env()
    assert settings.get().FPS is None
    assert settings.get().SENSOR_LATENCY_US is None


def test_env_helpers(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("X_INT", "7")
    monkeypatch.setenv("X_BOOL", "off")
    monkeypatch.setenv("X_STR", "   ")
    assert env_int("X_INT", 0, min_value=10) == 10
    assert env_bool("X_BOOL", True) is False
    assert env_bool("X_MISSING", True) is True
    assert env_str("X_STR", "fallback") == "fallback"


@pytest.mark.parametrize(
    "level, expected",
    [("debug", logging.DEBUG), ("WARNING", logging.WARNING), (10, 10), (None, logging.INFO), ("nope", logging.INFO)],
)
def test_resolve_level(level, expected) -> None:
    assert resolve_level(level) == expected
