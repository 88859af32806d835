"""
どこで: `engine.sensors.drivers.simulated`
何を: 一定角速度で任意軸まわりに回る端末を模擬し、5 成分の回転ベクトルを周期的に出す。
なぜ: 実機の無い環境でデモ/結合テストを動かすため。
"""

from __future__ import annotations

import math
import time
from typing import Callable, Sequence

from common.types import Vec3
from engine.core.rotation import rotation_vector_from_axis_angle

from ..types import Sensor, SensorType
from .base import SensorDriver


class SimulatedRotationVectorDriver(SensorDriver):
    """`axis` まわりに `angular_speed_deg` [deg/s] で回転し続ける仮想センサ。"""

    def __init__(
        self,
        axis: Sequence[float] = (0.0, 0.0, 1.0),
        angular_speed_deg: float = 30.0,
        *,
        heading_accuracy_rad: float = 0.0,
        name: str = "Simulated Rotation Vector",
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        super().__init__(Sensor(SensorType.ROTATION_VECTOR, name, vendor="simulated"))
        # ゼロ軸はここで ValueError にする
        rotation_vector_from_axis_angle(axis, 0.0)
        self.axis: Vec3 = (float(axis[0]), float(axis[1]), float(axis[2]))
        self.angular_speed_deg = float(angular_speed_deg)
        self.heading_accuracy_rad = float(heading_accuracy_rad)
        self._clock = clock

    def sample_at(self, t_s: float) -> tuple[float, float, float, float, float]:
        """経過時間 `t_s` [sec] における (x, y, z, w, heading_accuracy)。"""
        angle = math.radians(self.angular_speed_deg) * float(t_s)
        x, y, z, w = rotation_vector_from_axis_angle(self.axis, angle)
        return (x, y, z, w, self.heading_accuracy_rad)

    def run_loop(self) -> None:
        t0 = self._clock()
        while not self.stop_requested():
            self.publish(self.sample_at(self._clock() - t0))
            if self.wait(self.period_s):
                break


__all__ = ["SimulatedRotationVectorDriver"]
