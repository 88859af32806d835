from __future__ import annotations

import logging
import math

import numpy as np
import pytest

from common import settings
from engine.core.orientation_state import OrientationState
from engine.core.rotation import rotation_matrix_from_vector
from engine.sensors import RotationVectorListener, Sensor, SensorAccuracy, SensorEvent, SensorType

_ROT = Sensor(SensorType.ROTATION_VECTOR, "rot")
_ACC = Sensor(SensorType.ACCELEROMETER, "acc")


def test_rotation_event_publishes_matrix(state: OrientationState) -> None:
    listener = RotationVectorListener(state)
    s = math.sin(math.pi / 4)
    listener.on_sensor_changed(SensorEvent(_ROT, (0.0, 0.0, s, s), timestamp_ns=77))
    np.testing.assert_array_equal(state.snapshot(), rotation_matrix_from_vector((0.0, 0.0, s, s)))
    assert state.updated_ns == 77
    assert listener.accepted_count == 1


def test_other_sensor_types_are_ignored(state: OrientationState, caplog) -> None:  # noqa: ANN001
    listener = RotationVectorListener(state, strict=False)
    with caplog.at_level(logging.DEBUG, logger="engine.sensors.orientation_source"):
        listener.on_sensor_changed(SensorEvent(_ACC, (0.0, 0.0, 9.8)))
    assert state.version() == 0
    assert listener.ignored_count == 1
    assert not [r for r in caplog.records if r.levelno >= logging.WARNING]


def test_strict_mode_warns_on_other_sensor_types(state: OrientationState, caplog) -> None:  # noqa: ANN001
    listener = RotationVectorListener(state, strict=True)
    with caplog.at_level(logging.WARNING, logger="engine.sensors.orientation_source"):
        listener.on_sensor_changed(SensorEvent(_ACC, (0.0, 0.0, 9.8)))
    assert state.version() == 0
    assert any("ACCELEROMETER" in r.getMessage() for r in caplog.records)


def test_strict_mode_defaults_from_env(state: OrientationState, monkeypatch) -> None:  # noqa: ANN001
    monkeypatch.setenv("RVD_STRICT_SENSOR_TYPE", "1")
    settings.reload_from_env()
    assert RotationVectorListener(state).strict is True


@pytest.mark.parametrize("values", [(0.1,), (float("nan"), 0.0, 0.0), (0.0, 0.0, 0.0, 0.0)])
def test_malformed_sample_keeps_previous_matrix(state: OrientationState, values) -> None:
    listener = RotationVectorListener(state)
    listener.on_sensor_changed(SensorEvent(_ROT, (0.0, 0.0, 0.5)))
    before = state.snapshot()
    listener.on_sensor_changed(SensorEvent(_ROT, values))
    assert state.snapshot() is before
    assert listener.malformed_count == 1
    assert listener.accepted_count == 1


def test_accuracy_changes_are_recorded(state: OrientationState) -> None:
    listener = RotationVectorListener(state)
    listener.on_accuracy_changed(_ROT, SensorAccuracy.MEDIUM)
    assert listener.accuracy == SensorAccuracy.MEDIUM
    listener.on_accuracy_changed(_ROT, 42)
    assert listener.accuracy == 42
    assert state.version() == 0
