"""
どこで: `engine.sensors` の管理層。
何を: ドライバの登録・センサ検索・リスナー登録/解除とイベント配送、設定からの構築 `connect_sensors()`。
なぜ: 「最初のリスナーで起動/最後のリスナーで停止」「要求レイテンシの集約」を一元化するため。

配送はドライバのスレッド上で行う。リスナーは描画スレッドと共有する状態を
`OrientationState` 経由でのみ更新すること。
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Any, Iterable, Mapping

from util.constants import DEFAULT_SENSOR_LATENCY_US
from util.utils import config_section, find_project_root

from ..core.errors import UnsupportedSensor
from .drivers.base import SensorDriver
from .listener import SensorEventListener
from .types import Sensor, SensorEvent

logger = logging.getLogger(__name__)

SENSOR_SOURCES = ("simulated", "replay", "serial", "none")


class SensorManager:
    """センサ（ドライバ）とリスナーを名前無しで束ねる。"""

    def __init__(self, drivers: Iterable[SensorDriver] = ()) -> None:
        self._lock = threading.RLock()
        self._drivers: dict[Sensor, SensorDriver] = {}
        self._listeners: dict[Sensor, dict[SensorEventListener, int]] = {}
        for driver in drivers:
            self.add_driver(driver)

    def __repr__(self) -> str:
        names = ", ".join(s.name for s in self._drivers)
        return f"SensorManager([{names}])"

    # ---- センサ検索 ----
    def add_driver(self, driver: SensorDriver) -> None:
        with self._lock:
            if driver.sensor in self._drivers:
                raise ValueError(f"sensor already registered: {driver.sensor.name}")
            self._drivers[driver.sensor] = driver

    def get_sensor_list(self, sensor_type: int | None = None) -> list[Sensor]:
        with self._lock:
            sensors = list(self._drivers)
        if sensor_type is None:
            return sensors
        return [s for s in sensors if s.type == int(sensor_type)]

    def get_default_sensor(self, sensor_type: int) -> Sensor | None:
        """指定種別の最初のセンサ。無ければ None。"""
        sensors = self.get_sensor_list(sensor_type)
        return sensors[0] if sensors else None

    def driver_for(self, sensor: Sensor) -> SensorDriver | None:
        with self._lock:
            return self._drivers.get(sensor)

    # ---- 登録/解除 ----
    def register_listener(
        self,
        listener: SensorEventListener,
        sensor: Sensor | None,
        max_latency_us: int = DEFAULT_SENSOR_LATENCY_US,
    ) -> None:
        """`sensor` のイベントを `listener` へ配送する。

        - `sensor` が None/未登録なら `UnsupportedSensor`。
        - `max_latency_us` は最大レイテンシの要求（ヒント）。複数リスナーでは最小値を採用。
        """
        if sensor is None:
            raise UnsupportedSensor("requested sensor is not available on this device")
        if max_latency_us < 0:
            raise ValueError(f"max_latency_us must be >= 0, got {max_latency_us}")
        with self._lock:
            driver = self._drivers.get(sensor)
            if driver is None:
                raise UnsupportedSensor(f"no driver for sensor: {sensor.name} ({sensor.type_name})")
            listeners = self._listeners.setdefault(sensor, {})
            listeners[listener] = int(max_latency_us)
            period_s = min(listeners.values()) / 1_000_000
            if driver.is_running:
                driver.set_period(period_s)
            else:
                driver.start(
                    lambda event, _s=sensor: self._dispatch(_s, event),
                    period_s=period_s,
                    on_accuracy=self._dispatch_accuracy,
                )
        logger.info(
            "listener registered: %s -> %s (max latency %d us)",
            type(listener).__name__,
            sensor.name,
            max_latency_us,
        )

    def unregister_listener(
        self, listener: SensorEventListener, sensor: Sensor | None = None
    ) -> None:
        """`listener` の登録を解除する（`sensor` 省略時は全センサから）。未登録なら何もしない。"""
        stopped: list[SensorDriver] = []
        with self._lock:
            targets = [sensor] if sensor is not None else list(self._listeners)
            for s in targets:
                listeners = self._listeners.get(s)
                if not listeners or listener not in listeners:
                    continue
                del listeners[listener]
                driver = self._drivers.get(s)
                if driver is None:
                    continue
                if listeners:
                    driver.set_period(min(listeners.values()) / 1_000_000)
                else:
                    stopped.append(driver)
        # join はロック外で行う（配送中のスレッドがロックを待つため）
        for driver in stopped:
            driver.stop()
            logger.info("sensor stopped: %s", driver.sensor.name)

    def listener_count(self, sensor: Sensor) -> int:
        with self._lock:
            return len(self._listeners.get(sensor, {}))

    def close(self) -> None:
        """全ドライバを停止・解放し、リスナーを破棄する。"""
        with self._lock:
            drivers = list(self._drivers.values())
            self._listeners.clear()
        for driver in drivers:
            driver.close()

    # ---- 配送 ----
    def _dispatch(self, sensor: Sensor, event: SensorEvent) -> None:
        with self._lock:
            targets = list(self._listeners.get(sensor, {}))
        for listener in targets:
            try:
                listener.on_sensor_changed(event)
            except Exception:
                logger.exception("listener failed on %s event", sensor.name)

    def _dispatch_accuracy(self, sensor: Sensor, accuracy: int) -> None:
        with self._lock:
            targets = list(self._listeners.get(sensor, {}))
        for listener in targets:
            try:
                listener.on_accuracy_changed(sensor, accuracy)
            except Exception:
                logger.exception("listener failed on %s accuracy change", sensor.name)


def _resolve_path(raw: Any) -> Path:
    p = Path(str(raw)).expanduser()
    if not p.is_absolute():
        p = find_project_root(Path(__file__).parent) / p
    return p


def connect_sensors(
    sensor_cfg: Mapping[str, Any] | None = None, source: str | None = None
) -> SensorManager:
    """設定（`sensor` セクション）からドライバを作り、SensorManager に格納して返す。

    - `source` 引数が設定値より優先される。`none` は空のマネージャを返す。
    - ドライバ生成の失敗（ファイル無し/ポートを開けない/pyserial 未導入）はそのまま伝搬する。
    """
    cfg: Mapping[str, Any] = sensor_cfg or {}
    name = str(source or cfg.get("source") or "simulated").strip().lower()
    if name not in SENSOR_SOURCES:
        allowed = ", ".join(SENSOR_SOURCES)
        raise ValueError(f"unknown sensor source: {name}; allowed={allowed}")

    if name == "none":
        return SensorManager()

    section = config_section(dict(cfg), name)
    driver: SensorDriver
    if name == "simulated":
        from .drivers.simulated import SimulatedRotationVectorDriver

        axis = section.get("axis", (0.0, 0.0, 1.0))
        driver = SimulatedRotationVectorDriver(
            axis=tuple(float(a) for a in axis),
            angular_speed_deg=float(section.get("angular_speed_deg", 30.0)),
        )
    elif name == "replay":
        from .drivers.replay import ReplayRotationVectorDriver

        if "path" not in section:
            raise ValueError("sensor.replay.path is required for the replay source")
        driver = ReplayRotationVectorDriver(
            _resolve_path(section["path"]),
            loop=bool(section.get("loop", True)),
            speed=float(section.get("speed", 1.0)),
        )
    else:
        from .drivers.serial_imu import SerialRotationVectorDriver

        driver = SerialRotationVectorDriver(
            str(section.get("port", "/dev/ttyUSB0")),
            baudrate=int(section.get("baudrate", 115200)),
            timeout=float(section.get("timeout", 1.0)),
        )
    logger.info("sensor source '%s' connected: %s", name, driver.sensor.name)
    return SensorManager([driver])


__all__ = ["SensorManager", "connect_sensors", "SENSOR_SOURCES"]
