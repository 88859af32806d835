"""
どこで: `api.demo_runner.render`
何を: RenderWindow/ModernGL/CubeRenderer の初期化と接続。
なぜ: `api.demo` を薄くし、描画初期化の責務を分離するため。
"""

from __future__ import annotations

from typing import Any, Mapping

from common.types import RGBA
from engine.core.orientation_state import OrientationState
from util.constants import CAMERA_DISTANCE, FRUSTUM_FAR, FRUSTUM_NEAR
from util.utils import config_section


def renderer_options(cfg: Mapping[str, Any]) -> dict[str, float]:
    """`render` セクションから CubeRenderer のキーワード引数を作る。"""
    render = config_section(dict(cfg), "render")
    return {
        "camera_distance": float(render.get("camera_distance", CAMERA_DISTANCE)),
        "near": float(render.get("near", FRUSTUM_NEAR)),
        "far": float(render.get("far", FRUSTUM_FAR)),
    }


def create_window_and_renderer(
    window_width: int,
    window_height: int,
    *,
    state: OrientationState,
    clear_color: RGBA,
    cfg: Mapping[str, Any],
):
    """ウィンドウ/ModernGL/CubeRenderer を生成して返す。

    Returns
    -------
    (rendering_window, mgl_ctx, renderer)
    """
    # 遅延インポート（ヘッドレス環境でのウィンドウ生成を避ける）
    import moderngl

    from engine.core.render_window import RenderWindow
    from engine.render.gl_backend import ModernGLBackend
    from engine.render.renderer import CubeRenderer

    window = config_section(dict(cfg), "window")
    rendering_window = RenderWindow(
        window_width,
        window_height,
        caption=str(window.get("caption", "Rotation Vector Demo")),
        vsync=bool(window.get("vsync", True)),
    )

    # ModernGL コンテキスト（pyglet が作った現在のコンテキストを共有）
    mgl_ctx: moderngl.Context = moderngl.create_context()
    backend = ModernGLBackend(mgl_ctx)
    renderer = CubeRenderer(backend, state, clear_color=clear_color, **renderer_options(cfg))

    return rendering_window, mgl_ctx, renderer


__all__ = ["create_window_and_renderer", "renderer_options"]
