"""
どこで: `engine.sensors.drivers.replay`
何を: CSV 記録（`timestamp_ns,x,y,z[,w]`）の回転ベクトルを記録時の間隔で再生する。
なぜ: 実機で取ったデータを再現可能な入力としてデモ/デバッグに使うため。

CSV 形式:
- 1 行目はヘッダ（読み飛ばす）。`#` 以降はコメント。
- 列: timestamp_ns, x, y, z[, w]。タイムスタンプは単調非減少であること。
"""

from __future__ import annotations

import time
from pathlib import Path

import numpy as np

from ..types import Sensor, SensorType
from .base import SensorDriver


def load_recording(path: Path | str) -> tuple[np.ndarray, np.ndarray]:
    """記録を読み込み `(timestamps_ns: int64 (N,), values: float64 (N, 3|4))` を返す。

    列数不正/空/時刻の逆行は `ValueError`。ファイルが無ければ `FileNotFoundError`。
    """
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"recording not found: {p}")
    data = np.loadtxt(p, delimiter=",", skiprows=1, ndmin=2, dtype=np.float64)
    if data.size == 0:
        raise ValueError(f"recording is empty: {p}")
    if data.shape[1] not in (4, 5):
        raise ValueError(f"recording must have 4 or 5 columns (timestamp_ns,x,y,z[,w]): {p}")
    timestamps = data[:, 0].astype(np.int64)
    if np.any(np.diff(timestamps) < 0):
        raise ValueError(f"recording timestamps must be non-decreasing: {p}")
    return timestamps, np.ascontiguousarray(data[:, 1:])


class ReplayRotationVectorDriver(SensorDriver):
    """記録済みサンプルを順に配送する。`loop=True` なら末尾で先頭へ戻る。"""

    def __init__(
        self,
        path: Path | str,
        *,
        loop: bool = True,
        speed: float = 1.0,
        name: str | None = None,
    ) -> None:
        self.path = Path(path)
        super().__init__(
            Sensor(SensorType.ROTATION_VECTOR, name or f"Replay {self.path.name}", vendor="replay")
        )
        if speed <= 0.0:
            raise ValueError(f"speed must be > 0, got {speed}")
        self.timestamps, self.values = load_recording(self.path)
        self.loop = bool(loop)
        self.speed = float(speed)

    @property
    def sample_count(self) -> int:
        return int(self.timestamps.shape[0])

    def run_loop(self) -> None:
        while not self.stop_requested():
            prev_ts: int | None = None
            for ts, row in zip(self.timestamps, self.values):
                if prev_ts is not None:
                    delay = (int(ts) - prev_ts) / 1e9 / self.speed
                    if self.wait(delay):
                        return
                # 配送時刻は再生側の単調時計で付け直す
                self.publish(row.tolist(), timestamp_ns=time.monotonic_ns())
                prev_ts = int(ts)
            if not self.loop:
                self._logger.info("replay finished: %s (%d samples)", self.path, self.sample_count)
                return
            if self.wait(self.period_s):
                return


__all__ = ["ReplayRotationVectorDriver", "load_recording"]
