"""
どこで: `engine.render` の高レベル描画。
何を: 描画面の生成/リサイズ/毎フレーム描画（クリア → モデルビュー構築 → 属性有効化 → 立方体描画）。
なぜ: OrientationState の最新行列と不変メッシュから 1 フレームを組み立てる手順を一箇所に集約するため。

状態:
- 未構成（生成直後）→ `on_surface_created()` で構成済み。
- `on_surface_resized()` を 1 度も受けていない間は投影が無いため描画しない。
"""

from __future__ import annotations

import logging

import numpy as np

from common.types import RGBA
from engine.core.errors import InvalidSurfaceDimensions
from engine.core.mesh import CubeMesh
from engine.core.orientation_state import OrientationState
from engine.core.transforms import Frustum, model_view
from util.constants import (
    CAMERA_DISTANCE,
    DEFAULT_CLEAR_COLOR,
    FRUSTUM_FAR,
    FRUSTUM_HALF_HEIGHT,
    FRUSTUM_NEAR,
)

from .backend import DrawState, RenderBackend

# 立方体の描画状態: 裏面カリング・時計回りが表・スムーズシェーディング
CUBE_DRAW_STATE = DrawState(cull_back_faces=True, front_face="cw", smooth_shading=True)


def _validate_dimensions(width: object, height: object) -> tuple[int, int]:
    if isinstance(width, bool) or isinstance(height, bool):
        raise InvalidSurfaceDimensions(f"surface size must be integers, got {width!r}x{height!r}")
    try:
        w, h = int(width), int(height)  # type: ignore[call-overload]
    except (TypeError, ValueError) as e:
        raise InvalidSurfaceDimensions(f"surface size must be integers, got {width!r}x{height!r}") from e
    if w != width or h != height:
        raise InvalidSurfaceDimensions(f"surface size must be integers, got {width!r}x{height!r}")
    if w <= 0 or h <= 0:
        raise InvalidSurfaceDimensions(f"surface size must be positive, got {w}x{h}")
    return w, h


class CubeRenderer:
    """
    OrientationState から行列を読み、RenderBackend へ描画コマンドを発行する。
    行列は読むだけで書き換えない。
    """

    def __init__(
        self,
        backend: RenderBackend,
        state: OrientationState,
        mesh: CubeMesh | None = None,
        *,
        clear_color: RGBA = DEFAULT_CLEAR_COLOR,
        camera_distance: float = CAMERA_DISTANCE,
        near: float = FRUSTUM_NEAR,
        far: float = FRUSTUM_FAR,
    ) -> None:
        if near <= 0.0 or far <= near:
            raise ValueError(f"invalid depth range: near={near}, far={far}")
        self.backend = backend
        self.state = state
        self.mesh = mesh if mesh is not None else CubeMesh.cube()
        self.clear_color = clear_color
        self.camera_distance = float(camera_distance)
        self.near = float(near)
        self.far = float(far)
        self._logger = logging.getLogger(__name__)

        self._configured = False
        self._frustum: Frustum | None = None
        self._projection: np.ndarray | None = None
        self._surface_size: tuple[int, int] | None = None
        self._last_model_view: np.ndarray | None = None
        self._frames = 0

    # ---- 状態参照 ----
    @property
    def configured(self) -> bool:
        return self._configured

    @property
    def frustum(self) -> Frustum | None:
        return self._frustum

    @property
    def projection(self) -> np.ndarray | None:
        return self._projection

    @property
    def surface_size(self) -> tuple[int, int] | None:
        return self._surface_size

    @property
    def last_model_view(self) -> np.ndarray | None:
        """直近フレームで使ったモデルビュー行列。"""
        return self._last_model_view

    @property
    def frame_count(self) -> int:
        return self._frames

    # ---- 描画面コールバック ----
    def on_surface_created(self) -> None:
        """ディザ無効化・クリア色設定・メッシュ転送（描画面ごとに 1 度）。"""
        self.backend.disable_dither()
        self.backend.set_clear_color(self.clear_color)
        self.backend.upload_mesh(self.mesh)
        self._configured = True
        self._logger.debug("surface created (clear=%s)", self.clear_color)

    def on_surface_resized(self, width: int, height: int) -> None:
        """ビューポートと透視投影（縦横比 = width/height）を更新する。

        不正な寸法は warning を出して無視し、前回の投影を維持する。
        """
        try:
            w, h = _validate_dimensions(width, height)
        except InvalidSurfaceDimensions as e:
            self._logger.warning("ignoring resize: %s", e)
            return

        prev = self._surface_size
        self.backend.set_viewport(0, 0, w, h)
        self._frustum = Frustum.symmetric(
            w / h, near=self.near, far=self.far, half_height=FRUSTUM_HALF_HEIGHT
        )
        self._projection = self._frustum.matrix()
        self.backend.set_projection(self._projection)
        self._surface_size = (w, h)

        orientation = "landscape" if w >= h else "portrait"
        if prev is None or (prev[0] >= prev[1]) != (w >= h):
            self._logger.info("surface orientation: %s (%dx%d)", orientation, w, h)
        else:
            self._logger.debug("surface resized: %dx%d", w, h)

    def on_draw_frame(self) -> None:
        """1 フレームを描く。"""
        if not self._configured or self._projection is None:
            self._logger.debug("draw skipped: surface not configured yet")
            return

        # ① 画面クリア
        self.backend.clear()

        # ② モデルビュー（identity → translate(0,0,-d) → 回転行列）
        mv = model_view(self.state.snapshot(), self.camera_distance)
        self.backend.set_model_view(mv)
        self._last_model_view = mv

        # ③ 頂点/色ストリーム有効化
        self.backend.enable_vertex_streams(positions=True, colors=True)

        # ④ 立方体
        self.backend.draw_mesh(self.mesh, CUBE_DRAW_STATE)
        self._frames += 1

    def release(self) -> None:
        """バックエンド資源を解放し、未構成に戻す。"""
        self.backend.release()
        self._configured = False


__all__ = ["CubeRenderer", "CUBE_DRAW_STATE"]
