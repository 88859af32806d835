"""
どこで: `engine.core` の描画ウィンドウ薄ラッパ。
何を: Pyglet Window のイベント（resize/draw/show/hide/close）を描画面コールバックとライフサイクルへ届ける。
なぜ: レンダラ/センサ層から GUI 依存を切り離し、ホスト側はイベントの配送だけを担うようにするため。

使用例:
    win = RenderWindow(800, 600)
    win.attach(renderer, lifecycle)
    pyglet.app.run(1 / 60)
"""

from __future__ import annotations

import logging
from typing import Callable

import pyglet
from pyglet.gl import Config

from engine.lifecycle import DemoLifecycle
from engine.render.renderer import CubeRenderer


class RenderWindow(pyglet.window.Window):
    def __init__(
        self,
        width: int,
        height: int,
        *,
        caption: str = "Rotation Vector Demo",
        vsync: bool = True,
        resizable: bool = True,
    ):
        """ウィンドウを生成する。

        引数:
            width: ウィンドウ幅（ピクセル）。
            height: ウィンドウ高さ（ピクセル）。
            caption: タイトル。
            vsync: 垂直同期。
        """
        # ModernGL の #version 330 シェーダ用にコアプロファイルを要求
        config = Config(
            double_buffer=True,
            major_version=3,
            minor_version=3,
            forward_compatible=True,
            vsync=vsync,
        )
        super().__init__(
            width=width, height=height, caption=caption, config=config, resizable=resizable
        )
        self._logger = logging.getLogger(__name__)
        self._renderer: CubeRenderer | None = None
        self._lifecycle: DemoLifecycle | None = None
        self._close_callbacks: list[Callable[[], None]] = []

    def attach(self, renderer: CubeRenderer, lifecycle: DemoLifecycle) -> None:
        """レンダラとライフサイクルを接続し、描画面生成と初回の可視化を通知する。"""
        self._renderer = renderer
        self._lifecycle = lifecycle
        renderer.on_surface_created()
        renderer.on_surface_resized(*self.get_framebuffer_size())
        lifecycle.resume()

    def add_close_callback(self, func: Callable[[], None]) -> None:
        """`on_close` の最後に呼ぶ後片付け関数を登録する（登録順）。"""
        self._close_callbacks.append(func)

    # ---- pyglet イベント ----
    def on_resize(self, width, height):  # noqa: ANN001
        # HiDPI ではウィンドウ座標とフレームバッファ寸法が異なる
        if self._renderer is not None:
            fb_w, fb_h = self.get_framebuffer_size()
            self._renderer.on_surface_resized(fb_w, fb_h)

    def on_draw(self):  # Pyglet 既定のイベント名
        if self._renderer is not None:
            self._renderer.on_draw_frame()

    def on_show(self):
        if self._lifecycle is not None:
            self._lifecycle.resume()

    def on_hide(self):
        if self._lifecycle is not None:
            self._lifecycle.pause()

    def on_key_press(self, symbol, modifiers):  # noqa: ANN001
        if symbol == pyglet.window.key.ESCAPE:
            self.dispatch_event("on_close")

    def on_close(self):
        # 閉じた後に届く show/hide/draw は無視する
        lifecycle, self._lifecycle = self._lifecycle, None
        self._renderer = None
        if lifecycle is not None:
            lifecycle.destroy()
        callbacks, self._close_callbacks = self._close_callbacks, []
        for cb in callbacks:
            cb()
        super().on_close()
