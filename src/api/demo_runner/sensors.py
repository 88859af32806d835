"""
どこで: `api.demo_runner.sensors`
何を: SensorManager の初期化（空マネージャへのフォールバック含む）。
なぜ: `api.demo` から初期化責務を分離し、デバイス未接続でもデモを起動し続けるため。
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from engine.sensors.manager import SensorManager

logger = logging.getLogger(__name__)


def setup_sensors(sensor_cfg: Mapping[str, Any], source: str) -> SensorManager:
    """`source` のドライバで SensorManager を作って返す。

    - ドライバ生成に失敗した場合（ファイル無し/ポート無し/pyserial 未導入など）は
      warning を出して空の SensorManager を返す。キューブは単位行列の姿勢のまま表示される。
    - 未知の `source` は設定ミスとして `ValueError` をそのまま送出する。
    """
    # 遅延インポート（ドライバ依存の読み込みを実行時まで遅らせる）
    from engine.sensors.manager import SENSOR_SOURCES, connect_sensors

    if source not in SENSOR_SOURCES:
        allowed = ", ".join(SENSOR_SOURCES)
        raise ValueError(f"unknown sensor source: {source}; allowed={allowed}")
    try:
        return connect_sensors(sensor_cfg, source=source)
    except (ImportError, OSError, ValueError) as e:
        logger.warning("sensor source '%s' unavailable; continuing without sensors: %s", source, e)
        return SensorManager()


__all__ = ["setup_sensors"]
