"""
どこで: `engine.render.gl_backend`
何を: ModernGL による RenderBackend 実装（VBO/IBO/VAO の確保・更新・解放と三角形描画）。
なぜ: 固定機能 API 相当の呼び出し列を、コアプロファイルのシェーダ描画へ写像するため。

写像:
- glDisable(GL_DITHER)            → `ctx.disable_direct(GL_DITHER)`
- glClearColor / glClear          → 保持した色で `ctx.clear()`
- glViewport                      → `ctx.viewport`
- glFrustum / glMultMatrix        → uniform `projection` / `model_view`
- glEnableClientState(VERTEX/COLOR) → VAO の属性構成（色無効時は白一色）
- glCullFace / glFrontFace / glShadeModel → `ctx.cull_face` / `ctx.front_face` / smooth|flat プログラム
- glDrawElements(GL_TRIANGLES, UNSIGNED_BYTE) → `vao.render(TRIANGLES)`（index_element_size=1）
"""

from __future__ import annotations

import logging
from typing import Any

import moderngl as mgl
import numpy as np

from common.types import RGBA
from engine.core.mesh import CubeMesh
from engine.core.transforms import identity, to_gl_bytes
from util.constants import GL_DITHER

from .backend import DrawState
from .shader import create_program


class ModernGLBackend:
    """ModernGL コンテキスト上で CubeMesh を描く。"""

    def __init__(self, ctx: Any) -> None:
        """
        ctx: moderngl.Context（ウィンドウのコンテキスト、またはスタンドアロン）
        """
        self.ctx = ctx
        self._logger = logging.getLogger(__name__)
        self._clear_color: RGBA = (0.0, 0.0, 0.0, 1.0)
        self._projection = identity()
        self._model_view = identity()
        self._positions_enabled = False
        self._colors_enabled = False

        self._programs: dict[bool, Any] = {}
        self._vaos: dict[tuple[bool, bool], Any] = {}
        self._mesh: CubeMesh | None = None
        self.vbo_positions: Any = None
        self.vbo_colors: Any = None
        self.vbo_white: Any = None
        self.ibo: Any = None

    # ---------- 状態 ----------
    def disable_dither(self) -> None:
        self.ctx.disable_direct(GL_DITHER)

    def set_clear_color(self, rgba: RGBA) -> None:
        self._clear_color = (float(rgba[0]), float(rgba[1]), float(rgba[2]), float(rgba[3]))

    def set_viewport(self, x: int, y: int, width: int, height: int) -> None:
        self.ctx.viewport = (int(x), int(y), int(width), int(height))

    def set_projection(self, matrix: np.ndarray) -> None:
        self._projection = np.asarray(matrix, dtype=np.float32)

    def clear(self) -> None:
        r, g, b, a = self._clear_color
        self.ctx.clear(r, g, b, a)

    def set_model_view(self, matrix: np.ndarray) -> None:
        self._model_view = np.asarray(matrix, dtype=np.float32)

    def enable_vertex_streams(self, *, positions: bool = True, colors: bool = True) -> None:
        self._positions_enabled = bool(positions)
        self._colors_enabled = bool(colors)

    # ---------- バッファ ----------
    def upload_mesh(self, mesh: CubeMesh) -> None:
        """メッシュを GPU へ転送する（既存バッファは解放して張り直す）。"""
        self._release_buffers()
        self.vbo_positions = self.ctx.buffer(mesh.positions.tobytes())
        self.vbo_colors = self.ctx.buffer(mesh.colors.tobytes())
        white = np.ones((mesh.vertex_count, 4), dtype=np.float32)
        self.vbo_white = self.ctx.buffer(white.tobytes())
        self.ibo = self.ctx.buffer(mesh.indices.tobytes())
        self._mesh = mesh
        self._logger.debug(
            "mesh uploaded: verts=%d, inds=%d", mesh.vertex_count, mesh.index_count
        )

    def _program(self, smooth: bool) -> Any:
        prog = self._programs.get(smooth)
        if prog is None:
            prog = create_program(self.ctx, smooth=smooth)
            self._programs[smooth] = prog
        return prog

    def _vao(self, smooth: bool, colors: bool) -> Any:
        key = (smooth, colors)
        vao = self._vaos.get(key)
        if vao is None:
            color_buffer = self.vbo_colors if colors else self.vbo_white
            vao = self.ctx.vertex_array(
                self._program(smooth),
                [
                    (self.vbo_positions, "3f", "in_position"),
                    (color_buffer, "4f", "in_color"),
                ],
                index_buffer=self.ibo,
                index_element_size=1,
            )
            self._vaos[key] = vao
        return vao

    # ---------- 描画 ----------
    def draw_mesh(self, mesh: CubeMesh, state: DrawState) -> None:
        if mesh is not self._mesh:
            self.upload_mesh(mesh)
        if not self._positions_enabled:
            self._logger.debug("position stream disabled; skipping draw")
            return

        if state.cull_back_faces:
            self.ctx.enable(mgl.CULL_FACE)
            self.ctx.cull_face = "back"
            self.ctx.front_face = state.front_face
        else:
            self.ctx.disable(mgl.CULL_FACE)

        program = self._program(state.smooth_shading)
        program["projection"].write(to_gl_bytes(self._projection))
        program["model_view"].write(to_gl_bytes(self._model_view))
        vao = self._vao(state.smooth_shading, self._colors_enabled)
        vao.render(mgl.TRIANGLES, vertices=mesh.index_count)

    def _release_buffers(self) -> None:
        for vao in self._vaos.values():
            vao.release()
        self._vaos.clear()
        for name in ("vbo_positions", "vbo_colors", "vbo_white", "ibo"):
            buf = getattr(self, name)
            if buf is not None:
                buf.release()
                setattr(self, name, None)
        self._mesh = None

    def release(self) -> None:
        """GPU のメモリを解放する（終了時に使う）"""
        self._release_buffers()
        for prog in self._programs.values():
            prog.release()
        self._programs.clear()


__all__ = ["ModernGLBackend"]
