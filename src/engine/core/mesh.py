"""
どこで: `engine.core.mesh`
何を: 不変なインデックス付き三角形メッシュ `CubeMesh`（8 頂点・8 頂点色・36 インデックス）。
なぜ: 起動時に 1 度だけ作り、描画バックエンドへはこの型だけを渡して GPU 転送の前提を固定するため。

データモデル（不変条件）:
- `positions: float32 ndarray (V, 3)`
- `colors: float32 ndarray (V, 4)`: RGBA 0–1、頂点と 1 対 1。
- `indices: uint8 ndarray (3T,)`: すべて `[0, V)`。
- 配列はいずれも書き込み不可（`writeable=False`）。

立方体の面（頂点番号）:

       7 ------ 6
      /|       /|
     3 ------ 2 |        y
     | 4 -----|-5        |
     |/       |/         +-- x
     0 ------ 1         /
                       z
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

_CUBE_POSITIONS = (
    (-1.0, -1.0, -1.0),
    (1.0, -1.0, -1.0),
    (1.0, 1.0, -1.0),
    (-1.0, 1.0, -1.0),
    (-1.0, -1.0, 1.0),
    (1.0, -1.0, 1.0),
    (1.0, 1.0, 1.0),
    (-1.0, 1.0, 1.0),
)

_CUBE_COLORS = (
    (0.0, 0.0, 0.0, 1.0),
    (1.0, 0.0, 0.0, 1.0),
    (1.0, 1.0, 0.0, 1.0),
    (0.0, 1.0, 0.0, 1.0),
    (0.0, 0.0, 1.0, 1.0),
    (1.0, 0.0, 1.0, 1.0),
    (1.0, 1.0, 1.0, 1.0),
    (0.0, 1.0, 1.0, 1.0),
)

# 時計回りを表面とする 6 面 × 2 三角形
_CUBE_INDICES = (
    0, 4, 5, 0, 5, 1,
    1, 5, 6, 1, 6, 2,
    2, 6, 7, 2, 7, 3,
    3, 7, 4, 3, 4, 0,
    4, 7, 6, 4, 6, 5,
    3, 0, 1, 3, 1, 2,
)  # fmt: skip


def _frozen(arr: np.ndarray) -> np.ndarray:
    out = np.ascontiguousarray(arr)
    out.setflags(write=False)
    return out


@dataclass(frozen=True, eq=False)
class CubeMesh:
    """頂点位置/頂点色/三角形インデックスの不変コンテナ。"""

    positions: np.ndarray
    colors: np.ndarray
    indices: np.ndarray

    def __post_init__(self) -> None:
        positions = np.asarray(self.positions, dtype=np.float32)
        colors = np.asarray(self.colors, dtype=np.float32)
        indices = np.asarray(self.indices, dtype=np.uint8)
        if positions.ndim != 2 or positions.shape[1] != 3:
            raise ValueError("positions は形状 (V, 3) の配列である必要があります。")
        if colors.shape != (positions.shape[0], 4):
            raise ValueError("colors は形状 (V, 4) で頂点数と一致する必要があります。")
        if indices.ndim != 1 or indices.size % 3 != 0:
            raise ValueError("indices は長さが 3 の倍数の 1 次元配列である必要があります。")
        if indices.size and int(indices.max()) >= positions.shape[0]:
            raise ValueError("indices に頂点数を超える番号が含まれています。")
        # frozen dataclass のため object.__setattr__ で正規化済み配列へ差し替える
        object.__setattr__(self, "positions", _frozen(positions))
        object.__setattr__(self, "colors", _frozen(colors))
        object.__setattr__(self, "indices", _frozen(indices))

    @classmethod
    def cube(cls) -> "CubeMesh":
        """[-1, 1]^3 の頂点色付き立方体。"""
        return cls(
            positions=np.array(_CUBE_POSITIONS, dtype=np.float32),
            colors=np.array(_CUBE_COLORS, dtype=np.float32),
            indices=np.array(_CUBE_INDICES, dtype=np.uint8),
        )

    @property
    def vertex_count(self) -> int:
        return int(self.positions.shape[0])

    @property
    def index_count(self) -> int:
        return int(self.indices.size)

    @property
    def triangle_count(self) -> int:
        return self.index_count // 3

    def triangles(self) -> np.ndarray:
        """(T, 3, 3) の三角形頂点座標（インデックス順）。"""
        return self.positions[self.indices.reshape(-1, 3)]


__all__ = ["CubeMesh"]
