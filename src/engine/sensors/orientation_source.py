"""
どこで: `engine.sensors.orientation_source`
何を: 回転ベクトルイベントを 4x4 回転行列へ変換し、`OrientationState` へ公開するリスナー。
なぜ: センサ入力と描画の間の唯一の橋渡しを、検証/スキップ方針込みで 1 クラスに閉じるため。

方針:
- 受理する種別（既定: ROTATION_VECTOR）以外のイベントは黙って無視（計数のみ）。
  `RVD_STRICT_SENSOR_TYPE=1` のときは warning を出す（いずれも例外にはしない）。
- 成分数/値が不正なサンプルは warning を出してスキップ。行列は前回値のまま。
"""

from __future__ import annotations

import logging

from common.settings import get as get_settings

from ..core.errors import MalformedSample
from ..core.orientation_state import OrientationState
from ..core.rotation import rotation_matrix_from_vector
from .types import Sensor, SensorAccuracy, SensorEvent, SensorType


class RotationVectorListener:
    """SensorEventListener 実装。コールバックはドライバのスレッドから呼ばれる。"""

    def __init__(
        self,
        state: OrientationState,
        *,
        sensor_type: int = SensorType.ROTATION_VECTOR,
        strict: bool | None = None,
    ) -> None:
        self.state = state
        self.sensor_type = int(sensor_type)
        self.strict = get_settings().STRICT_SENSOR_TYPE if strict is None else bool(strict)
        self.accuracy: int | None = None
        # 診断用カウンタ
        self.accepted_count = 0
        self.ignored_count = 0
        self.malformed_count = 0
        self._logger = logging.getLogger(__name__)

    def on_sensor_changed(self, event: SensorEvent) -> None:
        if event.sensor.type != self.sensor_type:
            self.ignored_count += 1
            level = logging.WARNING if self.strict else logging.DEBUG
            self._logger.log(
                level,
                "ignoring %s event (listening for type %d)",
                event.sensor.type_name,
                self.sensor_type,
            )
            return
        try:
            matrix = rotation_matrix_from_vector(event.values)
        except MalformedSample as e:
            self.malformed_count += 1
            self._logger.warning("skipping malformed sample from %s: %s", event.sensor.name, e)
            return
        self.state.publish(matrix, event.timestamp_ns)
        self.accepted_count += 1

    def on_accuracy_changed(self, sensor: Sensor, accuracy: int) -> None:
        self.accuracy = int(accuracy)
        try:
            label = SensorAccuracy(self.accuracy).name
        except ValueError:
            label = str(self.accuracy)
        self._logger.info("accuracy of %s changed: %s", sensor.name, label)


__all__ = ["RotationVectorListener"]
