"""
プロジェクト向けの軽量ロギングユーティリティ。

要点:
- 各モジュールは `logging.getLogger(__name__)` でロガーを取得する。
- ランナー/CLI が `setup_default_logging()` を 1 度だけ呼び、最小構成を適用する。
- `log_file` を渡すとコンソールに加えてファイルにも出力する。
"""

from __future__ import annotations

import logging
from pathlib import Path

_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def resolve_level(level: int | str | None, default: int = logging.INFO) -> int:
    """レベル指定（"debug" / 10 / None）を logging の数値レベルへ変換する。"""
    if level is None:
        return default
    if isinstance(level, str):
        lvl = logging.getLevelName(level.strip().upper())
        return lvl if isinstance(lvl, int) else default
    return int(level)


def setup_default_logging(level: int | str | None = "INFO", log_file: Path | None = None) -> None:
    """最小限のロギング設定を 1 度だけ適用する。

    - ルートロガーにハンドラが既にあれば何もしない（no-op）
    - 上位のランナー/CLI から呼び出す想定
    """
    root = logging.getLogger()
    if root.handlers:
        # アプリ側で設定済み
        return

    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    logging.basicConfig(level=resolve_level(level), format=_FORMAT, handlers=handlers)


__all__ = ["setup_default_logging", "resolve_level"]
