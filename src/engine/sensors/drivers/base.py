"""
どこで: `engine.sensors.drivers.base`
何を: バックグラウンドスレッドでサンプルを生成し、コールバックへ流すドライバ基底 `SensorDriver`。
なぜ: スレッド起動/停止・周期ヒント・停止イベント待ちをドライバ間で共通化するため。

スレッド/安全性:
- `emit` はドライバのスレッドから呼ばれる（描画スレッドではない）。
- 停止は `threading.Event` で通知し、`stop()` は join までを行う（冪等）。
- 停止イベントはスレッドごとに作る。join がタイムアウトした旧スレッドは
  再 `start()` 後も自分のイベントで終了し、新スレッドと並んで配送しない。
"""

from __future__ import annotations

import logging
import threading
import time
from abc import ABC, abstractmethod
from typing import Callable, Sequence

from util.constants import DEFAULT_SENSOR_LATENCY_US

from ..types import Sensor, SensorAccuracy, SensorEvent

Emit = Callable[[SensorEvent], None]
AccuracyCallback = Callable[[Sensor, int], None]

# 周期 0（最速要求）でもスピンしないための下限
MIN_PERIOD_S = 0.001


class SensorDriver(ABC):
    """1 つのセンサを担当するドライバ。"""

    def __init__(self, sensor: Sensor) -> None:
        self.sensor = sensor
        self._period_s = DEFAULT_SENSOR_LATENCY_US / 1_000_000
        self._stop_event = threading.Event()
        self._local = threading.local()
        self._thread: threading.Thread | None = None
        self._emit: Emit | None = None
        self._on_accuracy: AccuracyCallback | None = None
        self._accuracy: int = SensorAccuracy.HIGH
        self._logger = logging.getLogger(type(self).__module__)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(sensor={self.sensor.name!r}, running={self.is_running})"

    # ---- 制御 ----
    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    @property
    def period_s(self) -> float:
        return self._period_s

    def set_period(self, period_s: float) -> None:
        """サンプリング周期のヒントを更新する（実際の配送レートは保証しない）。"""
        self._period_s = max(MIN_PERIOD_S, float(period_s))

    def start(
        self,
        emit: Emit,
        *,
        period_s: float | None = None,
        on_accuracy: AccuracyCallback | None = None,
    ) -> None:
        """スレッドを起動する。起動済みなら周期とコールバックだけ更新する。"""
        if period_s is not None:
            self.set_period(period_s)
        self._emit = emit
        self._on_accuracy = on_accuracy
        if self.is_running:
            return
        stop_event = threading.Event()
        self._stop_event = stop_event
        self._thread = threading.Thread(
            target=self._run,
            args=(stop_event,),
            name=f"sensor-{self.sensor.name}",
            daemon=True,
        )
        self._thread.start()
        self._logger.debug("driver started: %s (period=%.4fs)", self.sensor.name, self._period_s)

    def stop(self, timeout: float = 1.0) -> None:
        """停止を通知してスレッドの終了を待つ（冪等）。"""
        self._stop_event.set()
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)
            if thread.is_alive():
                self._logger.warning("driver thread did not stop in %.1fs: %s", timeout, self.sensor.name)
        self._thread = None

    def close(self) -> None:
        """停止し、デバイス資源を解放する。"""
        self.stop()

    # ---- サブクラス向け ----
    @abstractmethod
    def run_loop(self) -> None:
        """停止要求まで（または入力が尽きるまで）サンプルを生成する。"""

    def _current_stop_event(self) -> threading.Event:
        # ドライバのスレッド内では、そのスレッドを起動したときのイベント
        event = getattr(self._local, "stop_event", None)
        return self._stop_event if event is None else event

    def stop_requested(self) -> bool:
        return self._current_stop_event().is_set()

    def wait(self, seconds: float) -> bool:
        """`seconds` 待つ。停止要求があれば True を返す。"""
        return self._current_stop_event().wait(max(0.0, float(seconds)))

    def publish(
        self,
        values: Sequence[float],
        *,
        timestamp_ns: int | None = None,
        accuracy: int | None = None,
    ) -> None:
        """1 サンプルを配送する。精度が変わった場合は先に精度コールバックを呼ぶ。

        停止済みスレッドからの呼び出し（ブロッキング読み取り明けの 1 件など）は捨てる。
        """
        own = getattr(self._local, "stop_event", None)
        if own is not None and own.is_set():
            return
        if accuracy is not None and int(accuracy) != self._accuracy:
            self._accuracy = int(accuracy)
            if self._on_accuracy is not None:
                self._on_accuracy(self.sensor, self._accuracy)
        emit = self._emit
        if emit is None:
            return
        event = SensorEvent(
            sensor=self.sensor,
            values=tuple(float(v) for v in values),
            timestamp_ns=time.monotonic_ns() if timestamp_ns is None else int(timestamp_ns),
            accuracy=self._accuracy,
        )
        emit(event)

    def _run(self, stop_event: threading.Event) -> None:
        self._local.stop_event = stop_event
        try:
            self.run_loop()
        except Exception:
            self._logger.exception("sensor driver failed: %s", self.sensor.name)
        finally:
            self._logger.debug("driver loop finished: %s", self.sensor.name)


__all__ = ["SensorDriver", "Emit", "AccuracyCallback", "MIN_PERIOD_S"]
