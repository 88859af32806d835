"""
どこで: `engine.render.backend`
何を: 描画バックエンドの最小インターフェース（Mesh + Transform）`RenderBackend` Protocol。
なぜ: 固定機能パイプライン相当の呼び出し列を抽象化し、ModernGL/記録用などを差し替え可能にするため。

呼び出し契約:
- 状態変更（クリア色・ビューポート・投影・モデルビュー・属性ストリーム）は、
  それに依存する `draw_mesh` より前に呼ぶ（左から右へ）。
- `upload_mesh` は `draw_mesh` より前に 1 度呼ぶ。
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Protocol

import numpy as np

from common.types import RGBA
from engine.core.mesh import CubeMesh

FrontFace = Literal["cw", "ccw"]


@dataclass(frozen=True)
class DrawState:
    """描画時のラスタライズ状態。"""

    cull_back_faces: bool = True
    front_face: FrontFace = "cw"
    smooth_shading: bool = True


class RenderBackend(Protocol):
    def disable_dither(self) -> None: ...

    def set_clear_color(self, rgba: RGBA) -> None: ...

    def set_viewport(self, x: int, y: int, width: int, height: int) -> None: ...

    def set_projection(self, matrix: np.ndarray) -> None: ...

    def clear(self) -> None: ...

    def set_model_view(self, matrix: np.ndarray) -> None: ...

    def enable_vertex_streams(self, *, positions: bool = True, colors: bool = True) -> None: ...

    def upload_mesh(self, mesh: CubeMesh) -> None: ...

    def draw_mesh(self, mesh: CubeMesh, state: DrawState) -> None: ...

    def release(self) -> None: ...


__all__ = ["RenderBackend", "DrawState", "FrontFace"]
