from __future__ import annotations

import io
import math
import threading
import time
from pathlib import Path

import numpy as np
import pytest

from engine.sensors import SensorEvent, SensorType
from engine.sensors.drivers.replay import ReplayRotationVectorDriver, load_recording
from engine.sensors.drivers.serial_imu import SerialRotationVectorDriver, parse_line
from engine.sensors.drivers.simulated import SimulatedRotationVectorDriver


class _Collector:
    def __init__(self, want: int) -> None:
        self.events: list[SensorEvent] = []
        self.want = want
        self.done = threading.Event()

    def __call__(self, event: SensorEvent) -> None:
        self.events.append(event)
        if len(self.events) >= self.want:
            self.done.set()


def _wait_stopped(driver, timeout: float = 2.0) -> None:  # noqa: ANN001
    deadline = time.monotonic() + timeout
    while driver.is_running and time.monotonic() < deadline:
        time.sleep(0.005)
    assert not driver.is_running


def _write_csv(path: Path, rows: list[str]) -> Path:
    path.write_text("timestamp_ns,x,y,z,w\n" + "\n".join(rows) + "\n", encoding="utf-8")
    return path


# ---- simulated -------------------------------------------------------


def test_simulated_sample_at_known_angles() -> None:
    drv = SimulatedRotationVectorDriver(axis=(0.0, 0.0, 2.0), angular_speed_deg=30.0)
    assert drv.sensor.type == SensorType.ROTATION_VECTOR
    np.testing.assert_allclose(drv.sample_at(0.0), (0.0, 0.0, 0.0, 1.0, 0.0), atol=1e-12)
    s = math.sin(math.pi / 4)
    np.testing.assert_allclose(drv.sample_at(3.0), (0.0, 0.0, s, s, 0.0), atol=1e-12)


def test_simulated_rejects_zero_axis() -> None:
    with pytest.raises(ValueError):
        SimulatedRotationVectorDriver(axis=(0.0, 0.0, 0.0))


def test_simulated_thread_emits_until_stopped() -> None:
    drv = SimulatedRotationVectorDriver()
    sink = _Collector(3)
    drv.start(sink, period_s=0.002)
    try:
        assert sink.done.wait(2.0)
    finally:
        drv.stop()
    assert not drv.is_running
    assert all(len(e.values) == 5 for e in sink.events)
    stamps = [e.timestamp_ns for e in sink.events]
    assert stamps == sorted(stamps)
    # stop は冪等
    drv.stop()


# ---- replay ----------------------------------------------------------


def test_load_recording_accepts_three_and_four_components(tmp_path: Path) -> None:
    p3 = tmp_path / "three.csv"
    p3.write_text("timestamp_ns,x,y,z\n0,0,0,0\n10,0,0,0.1\n", encoding="utf-8")
    ts, values = load_recording(p3)
    assert ts.dtype == np.int64 and values.shape == (2, 3)

    p4 = _write_csv(tmp_path / "four.csv", ["0,0,0,0,1", "# comment", "5,0,0,1,0"])
    ts, values = load_recording(p4)
    np.testing.assert_array_equal(ts, [0, 5])
    assert values.shape == (2, 4)


def test_load_recording_rejects_bad_files(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_recording(tmp_path / "missing.csv")
    bad_cols = tmp_path / "cols.csv"
    bad_cols.write_text("a,b,c\n0,1,2\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_recording(bad_cols)
    with pytest.raises(ValueError):
        load_recording(_write_csv(tmp_path / "back.csv", ["10,0,0,0,1", "5,0,0,0,1"]))


@pytest.mark.filterwarnings("ignore")
def test_load_recording_rejects_empty(tmp_path: Path) -> None:
    empty = tmp_path / "empty.csv"
    empty.write_text("timestamp_ns,x,y,z,w\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_recording(empty)


def test_replay_plays_samples_in_order_once(tmp_path: Path) -> None:
    rows = [f"{i * 1_000_000},0,0,{i / 10:.1f},1" for i in range(5)]
    drv = ReplayRotationVectorDriver(_write_csv(tmp_path / "r.csv", rows), loop=False, speed=10.0)
    assert drv.sample_count == 5
    sink = _Collector(5)
    drv.start(sink)
    _wait_stopped(drv)
    assert [e.values[2] for e in sink.events] == pytest.approx([0.0, 0.1, 0.2, 0.3, 0.4])


def test_replay_loops_until_stopped(tmp_path: Path) -> None:
    drv = ReplayRotationVectorDriver(
        _write_csv(tmp_path / "r.csv", ["0,0,0,0,1", "1000,0,0,0.5,0.5"]), loop=True
    )
    sink = _Collector(6)
    drv.start(sink, period_s=0.001)
    try:
        assert sink.done.wait(2.0)
    finally:
        drv.stop()


def test_replay_rejects_non_positive_speed(tmp_path: Path) -> None:
    with pytest.raises(ValueError):
        ReplayRotationVectorDriver(_write_csv(tmp_path / "r.csv", ["0,0,0,0,1"]), speed=0.0)


# ---- serial ----------------------------------------------------------


@pytest.mark.parametrize(
    "line, expected",
    [
        ("0.1,0.2,0.3\n", (0.1, 0.2, 0.3)),
        ("0.1 0.2 0.3 0.9\r\n", (0.1, 0.2, 0.3, 0.9)),
        ("0.1, 0.2, 0.3, 0.9, 0.05", (0.1, 0.2, 0.3, 0.9, 0.05)),
        ("", None),
        ("   \n", None),
        ("# header", None),
        ("quat: a b c", None),
    ],
)
def test_parse_line(line, expected) -> None:
    assert parse_line(line) == expected


def test_serial_driver_reads_stream_until_eof() -> None:
    stream = io.BytesIO(b"0,0,0,1\nnoise\n# boot\n0 0 0.5 0.866\n")
    drv = SerialRotationVectorDriver("/dev/null", stream=stream)
    sink = _Collector(2)
    drv.start(sink)
    _wait_stopped(drv)
    assert [e.values for e in sink.events] == [(0.0, 0.0, 0.0, 1.0), (0.0, 0.0, 0.5, 0.866)]
    assert drv.skipped_lines == 2
    drv.close()
    assert stream.closed


class _GatedStream:
    """`gate` が開くまで readline がブロックする疑似シリアルポート。"""

    timeout = 1.0

    def __init__(self) -> None:
        self.gate = threading.Event()

    def readline(self) -> bytes:
        self.gate.wait(5.0)
        time.sleep(0.005)
        return b"0,0,0,1\n"


def test_serial_restart_after_join_timeout_keeps_single_emitter() -> None:
    stream = _GatedStream()
    drv = SerialRotationVectorDriver("/dev/null", stream=stream, name="gated")
    emitters: list[threading.Thread] = []
    sink = _Collector(5)

    def emit(event: SensorEvent) -> None:
        emitters.append(threading.current_thread())
        sink(event)

    drv.start(emit)
    old_thread = drv._thread
    drv.stop(timeout=0.05)
    assert old_thread is not None and old_thread.is_alive()

    drv.start(emit)
    new_thread = drv._thread
    assert new_thread is not old_thread
    try:
        stream.gate.set()
        assert sink.done.wait(2.0)
        old_thread.join(2.0)
        assert not old_thread.is_alive()
        alive = [t for t in threading.enumerate() if t.name == "sensor-gated"]
        assert alive == [new_thread]
        assert set(emitters) == {new_thread}
    finally:
        drv.stop()
