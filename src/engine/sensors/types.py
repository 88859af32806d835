"""
どこで: `engine.sensors.types`
何を: センサ種別タグ・精度・センサ記述子・センサイベントの軽量データ型。
なぜ: ドライバ/マネージャ/リスナー間の契約を型で固定し、duck-typing を避けるため。

種別番号は Android の `Sensor.TYPE_*` と同じ値を使う（記録データとの互換のため）。
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import IntEnum


class SensorType(IntEnum):
    ACCELEROMETER = 1
    MAGNETIC_FIELD = 2
    GYROSCOPE = 4
    ROTATION_VECTOR = 11
    GAME_ROTATION_VECTOR = 15
    GEOMAGNETIC_ROTATION_VECTOR = 20


class SensorAccuracy(IntEnum):
    NO_CONTACT = -1
    UNRELIABLE = 0
    LOW = 1
    MEDIUM = 2
    HIGH = 3


@dataclass(frozen=True)
class Sensor:
    """センサ記述子（種別 + 名前）。"""

    type: int
    name: str
    vendor: str = ""

    @property
    def type_name(self) -> str:
        try:
            return SensorType(self.type).name
        except ValueError:
            return f"UNKNOWN({self.type})"


@dataclass(frozen=True)
class SensorEvent:
    """1 サンプル分の入力。受け取ったらすぐ変換して捨てる前提。"""

    sensor: Sensor
    values: tuple[float, ...]
    timestamp_ns: int = field(default_factory=time.monotonic_ns)
    accuracy: int = SensorAccuracy.HIGH


__all__ = ["SensorType", "SensorAccuracy", "Sensor", "SensorEvent"]
