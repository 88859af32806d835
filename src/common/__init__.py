"""
どこで: `common` パッケージ。
何を: 環境変数設定・ロギング・型エイリアスなど、engine/api 双方で使う軽量基盤。
なぜ: 描画やセンサに依存しない共通部品を分離し、依存の向きを単純化するため。
"""

from .logging import setup_default_logging
from .settings import get as get_settings

__all__ = [
    "get_settings",
    "setup_default_logging",
]
