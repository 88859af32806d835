"""
どこで: `engine.sensors.listener`
何を: センサイベントを受け取る `SensorEventListener` Protocol。
なぜ: SensorManager が具体クラスを知らずにイベントを配送できるようにするため。
"""

from typing import Protocol

from .types import Sensor, SensorEvent


class SensorEventListener(Protocol):
    """ドライバのスレッドから呼ばれるコールバック。"""

    def on_sensor_changed(self, event: SensorEvent) -> None:
        """新しいサンプルを受け取る。"""

    def on_accuracy_changed(self, sensor: Sensor, accuracy: int) -> None:
        """センサの精度が変化した。"""
