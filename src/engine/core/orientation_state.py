"""
どこで: `engine.core.orientation_state`
何を: センサスレッドが書き、描画スレッドが読む回転行列のダブルバッファ（参照のアトミック差し替え）。
なぜ: 共有メモリへの上書きによる読み取りの千切れ（古い/新しい要素の混在）を起こさず、
      書き手/読み手の関係を明示的な契約にするため。

契約:
- `publish()` は 16 要素すべてを持つ新しい読み取り専用配列を作り、ロック下で参照を差し替える。
- `snapshot()` は現時点の参照を返す。返された配列は以後も変化しない。
- 初期値は単位行列。非アクティブ中も最後の値を保持し、リセットしない。
"""

from __future__ import annotations

import threading
import time
from typing import Sequence

import numpy as np


def _readonly_matrix(values: Sequence[float] | np.ndarray) -> np.ndarray:
    m = np.array(values, dtype=np.float32, copy=True).reshape(4, 4)
    m.setflags(write=False)
    return m


class OrientationState:
    """最新の回転行列 1 枚を保持する単一書き手/複数読み手バッファ。"""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._front: np.ndarray = _readonly_matrix(np.eye(4, dtype=np.float32))
        self._version = 0
        self._updated_ns: int | None = None

    def publish(self, matrix: Sequence[float] | np.ndarray, timestamp_ns: int | None = None) -> int:
        """新しい行列を公開し、更新後のバージョン番号を返す。

        `matrix` は 16 要素（(4, 4) でも平坦でも可）。要素数が違えば `ValueError`。
        """
        back = _readonly_matrix(matrix)
        stamp = time.monotonic_ns() if timestamp_ns is None else int(timestamp_ns)
        with self._lock:
            self._front = back
            self._version += 1
            self._updated_ns = stamp
            return self._version

    def snapshot(self) -> np.ndarray:
        """現在の (4, 4) 行列（読み取り専用）。"""
        with self._lock:
            return self._front

    def version(self) -> int:
        with self._lock:
            return self._version

    @property
    def updated_ns(self) -> int | None:
        """最後に公開されたサンプルの時刻（未更新なら None）。"""
        with self._lock:
            return self._updated_ns


__all__ = ["OrientationState"]
