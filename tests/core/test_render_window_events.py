"""RenderWindow のイベント配送（GL ウィンドウは作らない）。"""

from __future__ import annotations

import logging

import pytest

from engine.core.orientation_state import OrientationState
from engine.lifecycle import DemoLifecycle, LifecycleState
from engine.render.recording import RecordingBackend
from engine.render.renderer import CubeRenderer
from engine.sensors import RotationVectorListener, SensorManager
from engine.sensors.drivers.simulated import SimulatedRotationVectorDriver

render_window = pytest.importorskip("engine.core.render_window")
pyglet = pytest.importorskip("pyglet")


class _FramebufferSize:
    def __init__(self, width: int, height: int) -> None:
        self.size = (width, height)

    def __call__(self) -> tuple[int, int]:
        return self.size


def _bare_window(fb: _FramebufferSize):
    win = render_window.RenderWindow.__new__(render_window.RenderWindow)
    win._logger = logging.getLogger(render_window.__name__)
    win._renderer = None
    win._lifecycle = None
    win._close_callbacks = []
    win.get_framebuffer_size = fb
    return win


@pytest.fixture()
def driver():
    d = SimulatedRotationVectorDriver()
    yield d
    d.stop()


@pytest.fixture()
def wired(state: OrientationState, backend: RecordingBackend, driver):  # noqa: ANN001
    fb = _FramebufferSize(400, 200)
    win = _bare_window(fb)
    renderer = CubeRenderer(backend, state)
    lifecycle = DemoLifecycle(SensorManager([driver]), RotationVectorListener(state))
    win.attach(renderer, lifecycle)
    yield win, fb, renderer, lifecycle
    lifecycle.destroy()


def test_attach_creates_surface_at_framebuffer_size_and_resumes(wired, backend, driver) -> None:  # noqa: ANN001
    _, _, renderer, lifecycle = wired
    assert renderer.configured
    assert backend.command_names()[:3] == ["disable_dither", "set_clear_color", "upload_mesh"]
    assert backend.viewport == (0, 0, 400, 200)
    assert lifecycle.state is LifecycleState.ACTIVE and lifecycle.registered
    assert driver.is_running


def test_resize_uses_framebuffer_not_window_coordinates(wired, backend) -> None:  # noqa: ANN001
    win, fb, renderer, _ = wired
    fb.size = (800, 300)
    win.on_resize(400, 150)
    assert backend.viewport == (0, 0, 800, 300)
    assert renderer.surface_size == (800, 300)


def test_draw_renders_a_frame_per_event(wired) -> None:  # noqa: ANN001
    win, _, renderer, _ = wired
    win.on_draw()
    win.on_draw()
    assert renderer.frame_count == 2


def test_hide_pauses_and_show_resumes(wired, driver) -> None:  # noqa: ANN001
    win, _, _, lifecycle = wired
    win.on_hide()
    assert lifecycle.state is LifecycleState.PAUSED and not lifecycle.registered
    assert not driver.is_running
    win.on_show()
    assert lifecycle.state is LifecycleState.ACTIVE and lifecycle.registered
    assert driver.is_running


def test_close_destroys_then_runs_callbacks_once(wired, driver) -> None:  # noqa: ANN001
    win, _, renderer, lifecycle = wired
    seen: list[LifecycleState] = []
    win.add_close_callback(lambda: seen.append(lifecycle.state))
    win.add_close_callback(renderer.release)

    win.on_close()
    assert seen == [LifecycleState.DESTROYED]
    assert not driver.is_running
    assert not renderer.configured

    win.on_close()
    assert seen == [LifecycleState.DESTROYED]


def test_events_after_close_are_ignored(wired) -> None:  # noqa: ANN001
    win, _, renderer, lifecycle = wired
    win.on_draw()
    win.on_close()

    win.on_show()
    win.on_hide()
    win.on_resize(10, 10)
    win.on_draw()
    assert lifecycle.state is LifecycleState.DESTROYED
    assert renderer.frame_count == 1


def test_escape_dispatches_close(wired) -> None:  # noqa: ANN001
    win, _, _, _ = wired
    dispatched: list[str] = []
    win.dispatch_event = dispatched.append
    win.on_key_press(pyglet.window.key.ESCAPE, 0)
    win.on_key_press(pyglet.window.key.A, 0)
    assert dispatched == ["on_close"]
