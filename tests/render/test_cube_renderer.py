from __future__ import annotations

import numpy as np
import pytest

from engine.core.orientation_state import OrientationState
from engine.core.rotation import rotation_matrix_from_vector, rotation_vector_from_axis_angle
from engine.core.transforms import translation
from engine.render.recording import RecordingBackend
from engine.render.renderer import CUBE_DRAW_STATE, CubeRenderer


def test_surface_created_configures_state(backend: RecordingBackend, state: OrientationState) -> None:
    r = CubeRenderer(backend, state)
    assert not r.configured
    r.on_surface_created()
    assert r.configured
    assert backend.dither_enabled is False
    assert backend.clear_color == (1.0, 1.0, 1.0, 1.0)
    assert backend.uploaded is r.mesh
    assert backend.command_names() == ["disable_dither", "set_clear_color", "upload_mesh"]


def test_resize_sets_viewport_and_aspect_frustum(renderer: CubeRenderer, backend: RecordingBackend) -> None:
    assert backend.viewport == (0, 0, 200, 100)
    f = renderer.frustum
    assert (f.left, f.right, f.bottom, f.top, f.near, f.far) == (-2.0, 2.0, -1.0, 1.0, 1.0, 10.0)
    np.testing.assert_array_equal(backend.projection, f.matrix())
    assert renderer.surface_size == (200, 100)


def test_resize_to_square_changes_only_horizontal_bounds(renderer: CubeRenderer) -> None:
    before = renderer.frustum
    renderer.on_surface_resized(100, 100)
    after = renderer.frustum
    assert (after.left, after.right) == (-1.0, 1.0)
    assert (after.bottom, after.top, after.near, after.far) == (
        before.bottom,
        before.top,
        before.near,
        before.far,
    )


@pytest.mark.parametrize("w, h", [(0, 100), (100, 0), (-5, 10), (1.5, 10), ("a", 10), (True, 10)])
def test_invalid_resize_keeps_previous_projection(
    renderer: CubeRenderer, backend: RecordingBackend, w, h
) -> None:
    before = renderer.projection.copy()
    n = len(backend.commands)
    renderer.on_surface_resized(w, h)
    np.testing.assert_array_equal(renderer.projection, before)
    assert renderer.surface_size == (200, 100)
    assert len(backend.commands) == n


def test_draw_skipped_until_configured(backend: RecordingBackend, state: OrientationState) -> None:
    r = CubeRenderer(backend, state)
    r.on_draw_frame()
    r.on_surface_created()
    r.on_draw_frame()
    assert backend.frames_drawn == 0
    assert r.frame_count == 0


def test_draw_frame_issues_commands_in_order(renderer: CubeRenderer, backend: RecordingBackend) -> None:
    backend.commands.clear()
    renderer.on_draw_frame()
    assert backend.command_names() == [
        "clear",
        "set_model_view",
        "enable_vertex_streams",
        "draw_mesh",
    ]
    assert backend.positions_enabled and backend.colors_enabled
    assert backend.commands[-1].args == (36, CUBE_DRAW_STATE)
    assert CUBE_DRAW_STATE.cull_back_faces and CUBE_DRAW_STATE.front_face == "cw"
    assert CUBE_DRAW_STATE.smooth_shading


def test_identity_orientation_draws_cube_three_units_away(renderer: CubeRenderer) -> None:
    renderer.on_draw_frame()
    np.testing.assert_allclose(renderer.last_model_view, translation(0.0, 0.0, -3.0))


def test_model_view_follows_published_rotation(
    renderer: CubeRenderer, state: OrientationState
) -> None:
    r = rotation_matrix_from_vector(rotation_vector_from_axis_angle((0.0, 1.0, 0.0), 0.6))
    state.publish(r)
    renderer.on_draw_frame()
    np.testing.assert_allclose(
        renderer.last_model_view, translation(0.0, 0.0, -3.0) @ r.T, atol=1e-6
    )


def test_consecutive_frames_without_updates_are_identical(
    renderer: CubeRenderer, backend: RecordingBackend, state: OrientationState
) -> None:
    state.publish(rotation_matrix_from_vector((0.1, 0.2, 0.3)))
    renderer.on_draw_frame()
    first = backend.model_view.tobytes()
    renderer.on_draw_frame()
    assert backend.model_view.tobytes() == first
    assert renderer.frame_count == 2


def test_renderer_never_writes_shared_state(renderer: CubeRenderer, state: OrientationState) -> None:
    for _ in range(3):
        renderer.on_draw_frame()
    assert state.version() == 0


def test_custom_clear_color_and_depth_range(backend: RecordingBackend, state: OrientationState) -> None:
    r = CubeRenderer(backend, state, clear_color=(0.0, 0.0, 0.0, 1.0), near=2.0, far=20.0)
    r.on_surface_created()
    r.on_surface_resized(100, 50)
    assert backend.clear_color == (0.0, 0.0, 0.0, 1.0)
    assert (r.frustum.near, r.frustum.far) == (2.0, 20.0)
    with pytest.raises(ValueError):
        CubeRenderer(backend, state, near=0.0)


def test_release_unconfigures(renderer: CubeRenderer, backend: RecordingBackend) -> None:
    renderer.release()
    assert backend.released
    assert not renderer.configured
    renderer.on_draw_frame()
    assert backend.frames_drawn == 0
