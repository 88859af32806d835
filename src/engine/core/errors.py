"""
どこで: `engine.core.errors`
何を: センサ入力/描画面/ライフサイクルの例外階層。
なぜ: 検出地点で送出し、コールバック境界で「ログ + 今回の更新をスキップ」に統一するため。
"""

from __future__ import annotations


class RotationDemoError(Exception):
    """本プロジェクトの例外基底。"""


class UnsupportedSensor(RotationDemoError):
    """要求したセンサが存在しない、またはドライバが無い場合に送出される。"""


class InvalidSurfaceDimensions(RotationDemoError):
    """描画面の幅/高さが正の整数でない場合に送出される。"""


class MalformedSample(RotationDemoError):
    """回転ベクトルの成分数/値が不正な場合に送出される。"""


class LifecycleError(RotationDemoError):
    """破棄済みライフサイクルへのイベントなど、許されない遷移で送出される。"""


__all__ = [
    "RotationDemoError",
    "UnsupportedSensor",
    "InvalidSurfaceDimensions",
    "MalformedSample",
    "LifecycleError",
]
