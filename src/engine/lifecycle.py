"""
どこで: `engine.lifecycle`
何を: ホスト（ウィンドウ）からのイベントを受ける状態機械 Uninitialized → Active ⇄ Paused → Destroyed。
なぜ: センサ登録/解除をホストのオーバーライド地点に散らさず、遷移ごとに 1 か所で行うため。

遷移:
- resume:  Uninitialized/Paused → Active（リスナー登録）。Active では no-op。
- pause:   Active → Paused（登録解除）。Uninitialized/Paused では no-op。
- destroy: 任意 → Destroyed（登録中なら解除）。冪等。
- Destroyed 後の resume/pause は `LifecycleError`。

センサが無い/ドライバが無い場合（UnsupportedSensor）は warning を出して Active のまま続行する。
回転行列は最後の値（初期値なら単位行列）で止まる。
"""

from __future__ import annotations

import logging
from enum import Enum

from util.constants import DEFAULT_SENSOR_LATENCY_US

from .core.errors import LifecycleError, UnsupportedSensor
from .sensors.listener import SensorEventListener
from .sensors.manager import SensorManager
from .sensors.types import SensorType

logger = logging.getLogger(__name__)


class LifecycleState(Enum):
    UNINITIALIZED = "uninitialized"
    ACTIVE = "active"
    PAUSED = "paused"
    DESTROYED = "destroyed"


class DemoLifecycle:
    """センサ購読の寿命をビューの可視状態に合わせる。"""

    def __init__(
        self,
        sensor_manager: SensorManager,
        listener: SensorEventListener,
        *,
        sensor_type: int = SensorType.ROTATION_VECTOR,
        max_latency_us: int = DEFAULT_SENSOR_LATENCY_US,
    ) -> None:
        self.sensor_manager = sensor_manager
        self.listener = listener
        self.sensor_type = int(sensor_type)
        self.max_latency_us = int(max_latency_us)
        self._state = LifecycleState.UNINITIALIZED
        self._registered = False

    @property
    def state(self) -> LifecycleState:
        return self._state

    @property
    def registered(self) -> bool:
        """リスナーが SensorManager に登録済みか。"""
        return self._registered

    def resume(self) -> None:
        self._ensure_alive("resume")
        if self._state is LifecycleState.ACTIVE:
            return
        sensor = self.sensor_manager.get_default_sensor(self.sensor_type)
        try:
            self.sensor_manager.register_listener(self.listener, sensor, self.max_latency_us)
            self._registered = True
        except UnsupportedSensor as e:
            logger.warning("orientation updates unavailable: %s", e)
        self._transition(LifecycleState.ACTIVE)

    def pause(self) -> None:
        self._ensure_alive("pause")
        if self._state is not LifecycleState.ACTIVE:
            return
        self._unregister()
        self._transition(LifecycleState.PAUSED)

    def destroy(self) -> None:
        if self._state is LifecycleState.DESTROYED:
            return
        self._unregister()
        self._transition(LifecycleState.DESTROYED)

    # ---- internal ----
    def _ensure_alive(self, event: str) -> None:
        if self._state is LifecycleState.DESTROYED:
            raise LifecycleError(f"cannot {event}: lifecycle already destroyed")

    def _unregister(self) -> None:
        if self._registered:
            self.sensor_manager.unregister_listener(self.listener)
            self._registered = False

    def _transition(self, new_state: LifecycleState) -> None:
        logger.debug("lifecycle: %s -> %s", self._state.value, new_state.value)
        self._state = new_state


__all__ = ["DemoLifecycle", "LifecycleState"]
