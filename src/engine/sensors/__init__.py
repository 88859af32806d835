"""
どこで: `engine.sensors` サブパッケージ。
何を: センサ型/イベント・リスナープロトコル・SensorManager・各ドライバ・回転ベクトルリスナー。
なぜ: ハードウェア（または代替ソース）からの入力境界を描画から切り離し、差し替え可能にするため。
"""

from .listener import SensorEventListener
from .manager import SensorManager
from .orientation_source import RotationVectorListener
from .types import Sensor, SensorAccuracy, SensorEvent, SensorType

__all__ = [
    "Sensor",
    "SensorAccuracy",
    "SensorEvent",
    "SensorEventListener",
    "SensorManager",
    "SensorType",
    "RotationVectorListener",
]
