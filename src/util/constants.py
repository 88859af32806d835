"""
どこで: `util.constants`
何を: センサ/描画で共有する定数（既定レイテンシ・視錐台・カメラ距離・GL 列挙値）。
なぜ: マジックナンバーを 1 か所に集約し、設定ファイル未指定時の既定値として使うため。
"""

from __future__ import annotations

# センサ登録時に要求する最大レイテンシ（マイクロ秒）
DEFAULT_SENSOR_LATENCY_US = 10_000

# 透視投影（近平面での半高 1.0）
FRUSTUM_NEAR = 1.0
FRUSTUM_FAR = 10.0
FRUSTUM_HALF_HEIGHT = 1.0

# カメラ軸方向（-Z）へのキューブ平行移動量
CAMERA_DISTANCE = 3.0

# 既定のクリア色（不透明な白）
DEFAULT_CLEAR_COLOR = (1.0, 1.0, 1.0, 1.0)

DEFAULT_WINDOW_SIZE = (800, 600)
DEFAULT_FPS = 60

# moderngl が定数を公開していない GL ステート
GL_DITHER = 0x0BD0


__all__ = [
    "DEFAULT_SENSOR_LATENCY_US",
    "FRUSTUM_NEAR",
    "FRUSTUM_FAR",
    "FRUSTUM_HALF_HEIGHT",
    "CAMERA_DISTANCE",
    "DEFAULT_CLEAR_COLOR",
    "DEFAULT_WINDOW_SIZE",
    "DEFAULT_FPS",
    "GL_DITHER",
]
