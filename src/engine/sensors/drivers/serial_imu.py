"""
どこで: `engine.sensors.drivers.serial_imu`
何を: シリアル接続の IMU（BNO08x 等）が送る `x,y,z[,w]` テキスト行を回転ベクトルとして配送する。
なぜ: 実機の姿勢をそのままデモへ流し込むため。

注意:
- `pyserial` は遅延 import（未導入時は ImportError がそのまま伝搬し、ランナーが Null へフォールバック）。
- ポートはコンストラクタで開く（開けなければ例外）。テストでは `stream` を注入できる。
"""

from __future__ import annotations

import re
from typing import Any

from ..types import Sensor, SensorType
from .base import SensorDriver

_SEPARATOR = re.compile(r"[,\s]+")


def parse_line(line: str) -> tuple[float, ...] | None:
    """1 行を float タプルへ。空行/コメント（`#`）/数値化できない行は None。"""
    text = line.strip()
    if not text or text.startswith("#"):
        return None
    parts = [p for p in _SEPARATOR.split(text) if p]
    try:
        return tuple(float(p) for p in parts)
    except ValueError:
        return None


class SerialRotationVectorDriver(SensorDriver):
    """シリアルポートから 1 行 1 サンプルで読み取る。"""

    def __init__(
        self,
        port: str,
        baudrate: int = 115200,
        timeout: float = 1.0,
        *,
        name: str | None = None,
        stream: Any | None = None,
    ) -> None:
        super().__init__(
            Sensor(SensorType.ROTATION_VECTOR, name or f"Serial IMU {port}", vendor="serial")
        )
        self.port = port
        self.baudrate = int(baudrate)
        self.timeout = float(timeout)
        self._stream = stream if stream is not None else self._open_port()
        self.skipped_lines = 0

    def _open_port(self) -> Any:
        import serial  # type: ignore  # 遅延 import

        return serial.Serial(self.port, self.baudrate, timeout=self.timeout)

    def run_loop(self) -> None:
        while not self.stop_requested():
            raw = self._stream.readline()
            if not raw:
                # タイムアウト、または入力終端
                if getattr(self._stream, "timeout", None) is None:
                    return
                continue
            line = raw.decode("ascii", errors="replace") if isinstance(raw, bytes) else str(raw)
            values = parse_line(line)
            if values is None:
                self.skipped_lines += 1
                self._logger.debug("skipping unparsable serial line: %r", line)
                continue
            self.publish(values)

    def close(self) -> None:
        super().close()
        close = getattr(self._stream, "close", None)
        if close is not None:
            close()


__all__ = ["SerialRotationVectorDriver", "parse_line"]
