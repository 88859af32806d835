"""
どこで: `engine.core.rotation`
何を: 回転ベクトル（axis·sin(θ/2)[, cos(θ/2)[, heading accuracy]]）→ 単位クォータニオン → 4x4 回転行列。
なぜ: センサ入力を描画用の行列へ変換する唯一の経路を純関数として持ち、単体テスト可能にするため。

行列レイアウト:
- 返す (4, 4) 配列はセンサ API 準拠の行優先（デバイス座標 → 世界座標）。
- グラフィクス側はこの 16 要素を列優先として読むため、結果は転置 = 逆回転になる。
  画面上のキューブがデバイスと逆向きに回り、窓越しに静止物体を見ているように見える。
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

from common.types import Vec4

from .errors import MalformedSample

# 回転ベクトルとして受理する成分数（x, y, z[, w[, heading accuracy]]）
ACCEPTED_COMPONENTS = (3, 4, 5)

_NORM_EPS = 1e-12


def quaternion_from_vector(values: Sequence[float] | np.ndarray) -> np.ndarray:
    """回転ベクトルから正規化済みクォータニオン `(w, x, y, z)` を返す。

    - 3 成分のとき `w = sqrt(max(0, 1 - x² - y² - z²))`。
    - 5 成分目（方位精度）は無視する。
    - 成分数/非有限値/ゼロクォータニオンは `MalformedSample`。
    """
    try:
        arr = np.asarray(values, dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise MalformedSample(f"rotation vector is not numeric: {values!r}") from e
    if arr.ndim != 1 or arr.shape[0] not in ACCEPTED_COMPONENTS:
        raise MalformedSample(
            f"rotation vector must have 3, 4 or 5 components, got shape {arr.shape}"
        )
    if not np.all(np.isfinite(arr)):
        raise MalformedSample(f"rotation vector has non-finite components: {arr.tolist()}")

    x, y, z = float(arr[0]), float(arr[1]), float(arr[2])
    if arr.shape[0] >= 4:
        w = float(arr[3])
    else:
        w2 = 1.0 - (x * x + y * y + z * z)
        w = float(np.sqrt(w2)) if w2 > 0.0 else 0.0

    q = np.array([w, x, y, z], dtype=np.float64)
    norm = float(np.linalg.norm(q))
    if norm < _NORM_EPS:
        raise MalformedSample("rotation vector encodes a zero quaternion")
    return q / norm


def rotation_matrix_from_quaternion(q: np.ndarray) -> np.ndarray:
    """単位クォータニオン `(w, x, y, z)` から (4, 4) float32 の同次回転行列を返す。"""
    q0, q1, q2, q3 = (float(c) for c in q)

    sq_q1 = 2.0 * q1 * q1
    sq_q2 = 2.0 * q2 * q2
    sq_q3 = 2.0 * q3 * q3
    q1_q2 = 2.0 * q1 * q2
    q3_q0 = 2.0 * q3 * q0
    q1_q3 = 2.0 * q1 * q3
    q2_q0 = 2.0 * q2 * q0
    q2_q3 = 2.0 * q2 * q3
    q1_q0 = 2.0 * q1 * q0

    return np.array(
        [
            [1.0 - sq_q2 - sq_q3, q1_q2 - q3_q0, q1_q3 + q2_q0, 0.0],
            [q1_q2 + q3_q0, 1.0 - sq_q1 - sq_q3, q2_q3 - q1_q0, 0.0],
            [q1_q3 - q2_q0, q2_q3 + q1_q0, 1.0 - sq_q1 - sq_q2, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ],
        dtype=np.float32,
    )


def rotation_matrix_from_vector(values: Sequence[float] | np.ndarray) -> np.ndarray:
    """回転ベクトルを (4, 4) float32 の回転行列（行優先）へ変換する。"""
    return rotation_matrix_from_quaternion(quaternion_from_vector(values))


def rotation_vector_from_axis_angle(
    axis: Sequence[float], angle_rad: float
) -> Vec4:
    """軸と角度から 4 成分の回転ベクトル `(x, y, z, w)` を作る。

    軸はゼロベクトル不可（`ValueError`）。シミュレータとテストの入力生成に使う。
    """
    a = np.asarray(axis, dtype=np.float64)
    n = float(np.linalg.norm(a))
    if a.shape != (3,) or n < _NORM_EPS:
        raise ValueError(f"axis must be a non-zero 3-vector, got {axis!r}")
    a = a / n
    s = float(np.sin(angle_rad / 2.0))
    c = float(np.cos(angle_rad / 2.0))
    return (float(a[0] * s), float(a[1] * s), float(a[2] * s), c)


__all__ = [
    "ACCEPTED_COMPONENTS",
    "quaternion_from_vector",
    "rotation_matrix_from_quaternion",
    "rotation_matrix_from_vector",
    "rotation_vector_from_axis_angle",
]
