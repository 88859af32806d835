"""
どこで: `engine.core.transforms`
何を: 4x4 行列ユーティリティ（単位行列・平行移動・視錐台・列優先の解釈/書き出し）。
なぜ: 固定機能パイプライン（glTranslate/glMultMatrix/glFrustum）相当の計算を純関数に分離するため。

規約:
- 関数が返す (4, 4) 配列は数学的な行列（列ベクトル右掛け: p' = M @ p）。
- GL へ渡す 16 要素は列優先。`from_gl_array` / `to_gl_bytes` が境界で変換する。
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np


def identity() -> np.ndarray:
    return np.eye(4, dtype=np.float32)


def translation(dx: float, dy: float, dz: float) -> np.ndarray:
    """平行移動行列（glTranslatef 相当）。"""
    m = np.eye(4, dtype=np.float32)
    m[0, 3] = dx
    m[1, 3] = dy
    m[2, 3] = dz
    return m


def frustum_matrix(
    left: float, right: float, bottom: float, top: float, near: float, far: float
) -> np.ndarray:
    """透視投影行列（glFrustumf 相当）。

    `near > 0`、`far > near`、`left != right`、`bottom != top` でなければ `ValueError`。
    """
    if near <= 0.0 or far <= near:
        raise ValueError(f"invalid depth range: near={near}, far={far}")
    if right == left or top == bottom:
        raise ValueError(f"degenerate frustum bounds: l={left} r={right} b={bottom} t={top}")
    rl = right - left
    tb = top - bottom
    fn = far - near
    return np.array(
        [
            [2.0 * near / rl, 0.0, (right + left) / rl, 0.0],
            [0.0, 2.0 * near / tb, (top + bottom) / tb, 0.0],
            [0.0, 0.0, -(far + near) / fn, -2.0 * far * near / fn],
            [0.0, 0.0, -1.0, 0.0],
        ],
        dtype=np.float32,
    )


@dataclass(frozen=True)
class Frustum:
    """近平面での境界と深度範囲。"""

    left: float
    right: float
    bottom: float
    top: float
    near: float
    far: float

    @classmethod
    def symmetric(
        cls, aspect: float, *, near: float, far: float, half_height: float = 1.0
    ) -> "Frustum":
        """縦横比 `aspect` の左右対称な視錐台（左右 = ±aspect·half_height）。"""
        half_width = float(aspect) * float(half_height)
        return cls(
            left=-half_width,
            right=half_width,
            bottom=-float(half_height),
            top=float(half_height),
            near=float(near),
            far=float(far),
        )

    def matrix(self) -> np.ndarray:
        return frustum_matrix(self.left, self.right, self.bottom, self.top, self.near, self.far)


def from_gl_array(values: Sequence[float] | np.ndarray) -> np.ndarray:
    """16 要素を列優先として読み、数学的な (4, 4) 行列を返す（glMultMatrixf の解釈）。"""
    arr = np.asarray(values, dtype=np.float32).reshape(16)
    return np.ascontiguousarray(arr.reshape(4, 4).T)


def to_gl_bytes(matrix: np.ndarray) -> bytes:
    """(4, 4) 行列を列優先 float32 のバイト列にする（ModernGL の uniform 書き込み用）。"""
    return np.asarray(matrix, dtype="f4").T.tobytes()


def model_view(rotation: np.ndarray, distance: float) -> np.ndarray:
    """identity → translate(0, 0, -distance) → 回転行列（列優先解釈）を右から掛ける。"""
    return translation(0.0, 0.0, -float(distance)) @ from_gl_array(rotation)


__all__ = [
    "identity",
    "translation",
    "frustum_matrix",
    "Frustum",
    "from_gl_array",
    "to_gl_bytes",
    "model_view",
]
