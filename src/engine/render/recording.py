"""
どこで: `engine.render.recording`
何を: GPU を使わず、受け取った描画コマンドと現在の描画状態を記録するバックエンド。
なぜ: ウィンドウ無しの実行（`--headless-frames`）と、呼び出し順序/行列のテストに使うため。
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import numpy as np

from common.types import RGBA
from engine.core.mesh import CubeMesh

from .backend import DrawState


@dataclass(frozen=True)
class DrawCommand:
    name: str
    args: tuple[Any, ...] = field(default_factory=tuple)


class RecordingBackend:
    """RenderBackend 実装。`commands` に呼び出し列を溜める。"""

    def __init__(self, *, max_commands: int | None = None) -> None:
        self.commands: list[DrawCommand] = []
        self.max_commands = max_commands
        # 現在の状態
        self.dither_enabled = True
        self.clear_color: RGBA | None = None
        self.viewport: tuple[int, int, int, int] | None = None
        self.projection: np.ndarray | None = None
        self.model_view: np.ndarray | None = None
        self.positions_enabled = False
        self.colors_enabled = False
        self.uploaded: CubeMesh | None = None
        self.frames_drawn = 0
        self.released = False

    def _record(self, name: str, *args: Any) -> None:
        self.commands.append(DrawCommand(name, args))
        if self.max_commands is not None and len(self.commands) > self.max_commands:
            del self.commands[: len(self.commands) - self.max_commands]

    def command_names(self) -> list[str]:
        return [c.name for c in self.commands]

    # ---- RenderBackend ----
    def disable_dither(self) -> None:
        self.dither_enabled = False
        self._record("disable_dither")

    def set_clear_color(self, rgba: RGBA) -> None:
        self.clear_color = (float(rgba[0]), float(rgba[1]), float(rgba[2]), float(rgba[3]))
        self._record("set_clear_color", self.clear_color)

    def set_viewport(self, x: int, y: int, width: int, height: int) -> None:
        self.viewport = (int(x), int(y), int(width), int(height))
        self._record("set_viewport", self.viewport)

    def set_projection(self, matrix: np.ndarray) -> None:
        self.projection = np.array(matrix, dtype=np.float32, copy=True)
        self._record("set_projection", self.projection)

    def clear(self) -> None:
        self._record("clear", self.clear_color)

    def set_model_view(self, matrix: np.ndarray) -> None:
        self.model_view = np.array(matrix, dtype=np.float32, copy=True)
        self._record("set_model_view", self.model_view)

    def enable_vertex_streams(self, *, positions: bool = True, colors: bool = True) -> None:
        self.positions_enabled = bool(positions)
        self.colors_enabled = bool(colors)
        self._record("enable_vertex_streams", self.positions_enabled, self.colors_enabled)

    def upload_mesh(self, mesh: CubeMesh) -> None:
        self.uploaded = mesh
        self._record("upload_mesh", mesh.vertex_count, mesh.index_count)

    def draw_mesh(self, mesh: CubeMesh, state: DrawState) -> None:
        if self.uploaded is not mesh:
            raise RuntimeError("draw_mesh called before upload_mesh")
        if not self.positions_enabled:
            raise RuntimeError("draw_mesh called with the position stream disabled")
        self.frames_drawn += 1
        self._record("draw_mesh", mesh.index_count, state)

    def release(self) -> None:
        self.released = True
        self.uploaded = None
        self._record("release")


__all__ = ["RecordingBackend", "DrawCommand"]
