"""共通フィクスチャ。

- 乱数シード固定
- 環境変数（RVD_*）の隔離
- 共有状態/記録バックエンド/構成済みレンダラ
"""

from __future__ import annotations

from typing import Iterator

import numpy as np
import pytest

from common import settings
from engine.core.orientation_state import OrientationState
from engine.render.recording import RecordingBackend
from engine.render.renderer import CubeRenderer

_RVD_ENV = (
    "RVD_LOG_LEVEL",
    "RVD_SENSOR_SOURCE",
    "RVD_SENSOR_LATENCY_US",
    "RVD_STRICT_SENSOR_TYPE",
    "RVD_FPS",
)


@pytest.fixture(scope="session", autouse=True)
def np_seed() -> None:
    """NumPy の乱数を固定。"""
    np.random.seed(12345)


@pytest.fixture(autouse=True)
def clean_rvd_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """各テストを RVD_* 未設定の状態で始め、終了時に設定を読み直す。"""
    for name in _RVD_ENV:
        monkeypatch.delenv(name, raising=False)
    settings.reload_from_env()
    yield
    monkeypatch.undo()
    settings.reload_from_env()


@pytest.fixture()
def state() -> OrientationState:
    return OrientationState()


@pytest.fixture()
def backend() -> RecordingBackend:
    return RecordingBackend()


@pytest.fixture()
def renderer(backend: RecordingBackend, state: OrientationState) -> CubeRenderer:
    """描画面生成 + 200x100 へのリサイズまで済ませたレンダラ。"""
    r = CubeRenderer(backend, state)
    r.on_surface_created()
    r.on_surface_resized(200, 100)
    return r
