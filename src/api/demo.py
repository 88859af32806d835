"""
どこで: `api.demo`（実行ランナー）。
何を: センサ → OrientationState → CubeRenderer を結線し、pyglet ウィンドウまたはヘッドレスでフレームを駆動する。
なぜ: 少ない記述で「端末の姿勢どおりに回る立方体」を起動・検証できるようにするため（センサ未接続時は自動フォールバック）。

主エントリポイント:
- `run_demo(*, config_path=None, sensor=None, latency_us=None, width=None, height=None, fps=None, ...)`

実行フロー（概要）:
1) 設定解決: YAML（`util.utils.load_config`）→ 環境変数（`common.settings`）→ 引数の順に上書き。
2) センサ: `sensor.source` のドライバを生成。失敗時は空の SensorManager で継続（立方体は単位行列の姿勢）。
3) 共有状態: `OrientationState` と `RotationVectorListener`、`DemoLifecycle` を生成。
4) `init_only=True` ならここで構成物を返す（ウィンドウ/GL を作らない）。
5) `headless_frames=N` なら RecordingBackend で N フレームを描画して返す（GL 不要）。
6) 通常時は `RenderWindow` + ModernGL を生成し `pyglet.app.run(1 / fps)` で駆動。
   `ESC`/ウィンドウを閉じるとライフサイクル破棄 → GL 解放 → ドライバ停止。

スレッド:
- センサのコールバックはドライバのスレッド、描画は主スレッド。
  両者は `OrientationState` の参照差し替えだけを介して行列を受け渡す。
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from engine.core.orientation_state import OrientationState
from engine.lifecycle import DemoLifecycle
from engine.render.renderer import CubeRenderer
from engine.sensors.manager import SensorManager
from engine.sensors.orientation_source import RotationVectorListener
from util.utils import config_section, load_config

from .demo_runner.sensors import setup_sensors
from .demo_runner.utils import (
    resolve_clear_color,
    resolve_fps,
    resolve_latency_us,
    resolve_sensor_source,
    resolve_window_size,
)

logger = logging.getLogger(__name__)


@dataclass
class DemoComponents:
    """`run_demo` が組み立てた構成物。`init_only`/ヘッドレス実行で検証に使う。"""

    config: dict[str, Any]
    sensor_manager: SensorManager
    state: OrientationState
    listener: RotationVectorListener
    lifecycle: DemoLifecycle
    fps: int
    window_size: tuple[int, int]
    renderer: CubeRenderer | None = None
    extras: dict[str, Any] = field(default_factory=dict)


def _run_headless(components: DemoComponents, frames: int, clear_color: Any) -> None:
    from engine.render.recording import RecordingBackend

    from .demo_runner.render import renderer_options

    backend = RecordingBackend(max_commands=64)
    renderer = CubeRenderer(
        backend,
        components.state,
        clear_color=clear_color,
        **renderer_options(components.config),
    )
    components.renderer = renderer
    components.extras["backend"] = backend

    width, height = components.window_size
    renderer.on_surface_created()
    renderer.on_surface_resized(width, height)
    components.lifecycle.resume()
    interval = 1.0 / components.fps
    try:
        for _ in range(frames):
            renderer.on_draw_frame()
            time.sleep(interval)
    finally:
        components.lifecycle.destroy()
        renderer.release()
        components.sensor_manager.close()

    listener = components.listener
    logger.info(
        "headless run finished: frames=%d samples=%d ignored=%d malformed=%d",
        renderer.frame_count,
        listener.accepted_count,
        listener.ignored_count,
        listener.malformed_count,
    )


def run_demo(
    *,
    config_path: str | Path | None = None,
    sensor: str | None = None,
    latency_us: int | None = None,
    width: int | None = None,
    height: int | None = None,
    fps: int | None = None,
    clear_color: Any = None,
    init_only: bool = False,
    headless_frames: int | None = None,
) -> DemoComponents:
    """回転ベクトルセンサで姿勢を追う立方体デモを実行する。

    Parameters
    ----------
    config_path : str | Path | None
        追加の YAML 設定。None で `configs/default.yaml` と `config.yaml` のみ。
    sensor : str | None
        センサ源（"simulated" / "replay" / "serial" / "none"）。None で環境変数/設定から解決。
    latency_us : int | None
        センサへ要求する最大レイテンシ [µs]。
    width, height : int | None
        ウィンドウ（ヘッドレス時は仮想描画面）の寸法 [px]。
    fps : int | None
        描画更新レート。1 以上にクランプ。
    clear_color : tuple | str | None
        背景色（RGBA 0–1 または #RRGGBB/#RRGGBBAA）。None で設定/白。
    init_only : bool, default False
        True でウィンドウ/GL を作らず構成物だけを返す。センサは起動しない。
    headless_frames : int | None
        指定時は GL を使わず記録バックエンドで N フレーム描画して終了する。

    Returns
    -------
    DemoComponents
        組み立てた構成物（ウィンドウ実行時はループ終了後の状態）。
    """
    cfg = load_config(config_path)

    # ---- ① 設定解決 -----------------------------------------------
    fps_value = resolve_fps(fps, cfg)
    window_size = resolve_window_size(width, height, cfg)
    latency = resolve_latency_us(latency_us, cfg)
    source = resolve_sensor_source(sensor, cfg)
    bg = resolve_clear_color(clear_color, cfg)

    # ---- ② センサ --------------------------------------------------
    sensor_manager = setup_sensors(config_section(cfg, "sensor"), source)

    # ---- ③ 共有状態/リスナー/ライフサイクル -------------------------
    state = OrientationState()
    listener = RotationVectorListener(state)
    lifecycle = DemoLifecycle(sensor_manager, listener, max_latency_us=latency)
    components = DemoComponents(
        config=cfg,
        sensor_manager=sensor_manager,
        state=state,
        listener=listener,
        lifecycle=lifecycle,
        fps=fps_value,
        window_size=window_size,
    )
    logger.info(
        "demo configured: source=%s latency_us=%d fps=%d size=%dx%d",
        source,
        latency,
        fps_value,
        window_size[0],
        window_size[1],
    )

    if init_only:
        return components

    if headless_frames is not None:
        if int(headless_frames) < 0:
            raise ValueError(f"headless_frames must be >= 0, got {headless_frames}")
        _run_headless(components, int(headless_frames), bg)
        return components

    # 遅延インポート（ヘッドレス環境でのウィンドウ生成を避ける）
    import pyglet

    from .demo_runner.render import create_window_and_renderer

    # ---- ④ Window & ModernGL --------------------------------------
    rendering_window, mgl_ctx, renderer = create_window_and_renderer(
        window_size[0],
        window_size[1],
        state=state,
        clear_color=bg,
        cfg=cfg,
    )
    components.renderer = renderer
    components.extras["mgl_ctx"] = mgl_ctx

    def _cleanup() -> None:
        renderer.release()
        sensor_manager.close()
        pyglet.app.exit()

    rendering_window.add_close_callback(_cleanup)
    rendering_window.attach(renderer, lifecycle)

    # ---- ⑤ フレーム駆動 ---------------------------------------------
    pyglet.app.run(1 / fps_value)
    return components


__all__ = ["run_demo", "DemoComponents"]
