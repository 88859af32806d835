"""
どこで: `common.settings`
何を: デモの環境変数（`RVD_*`）を型付きで一元管理し、起動時に読み込む。
なぜ: 設定ファイル（YAML）より優先される上書き値を 1 か所に集約し、テストで差し替えやすくするため。

優先順位は「CLI 引数 > 環境変数 > YAML 設定 > 既定値」。
本モジュールが扱うのは環境変数の層のみで、未設定の項目は `None` のまま残す。
"""

from __future__ import annotations

from dataclasses import dataclass

from .env import env_bool, env_int, env_str


@dataclass
class _Settings:
    # ロギング
    LOG_LEVEL: str | None = None

    # センサ
    SENSOR_SOURCE: str | None = None
    SENSOR_LATENCY_US: int | None = None
    STRICT_SENSOR_TYPE: bool = False

    # 描画
    FPS: int | None = None


_settings = _Settings()


def reload_from_env() -> None:
    """環境変数から設定を再読込。

    - `RVD_SENSOR_LATENCY_US` は 0 未満を 0 に丸める。
    - `RVD_FPS` は 1 未満を 1 に丸める。
    """
    _settings.LOG_LEVEL = env_str("RVD_LOG_LEVEL")

    source = env_str("RVD_SENSOR_SOURCE")
    _settings.SENSOR_SOURCE = source.lower() if source is not None else None
    _settings.SENSOR_LATENCY_US = env_int("RVD_SENSOR_LATENCY_US", None, min_value=0)
    _settings.STRICT_SENSOR_TYPE = env_bool("RVD_STRICT_SENSOR_TYPE", False)

    _settings.FPS = env_int("RVD_FPS", None, min_value=1)


def get() -> _Settings:
    """現在の設定スナップショットを返す。"""
    return _settings


# 初期ロード
reload_from_env()


__all__ = ["get", "reload_from_env", "_Settings"]
