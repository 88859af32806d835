"""
内部ヘルパ群（API 非公開）。

どこで: `api.demo_runner`
何を: `api.demo` の補助（設定解決の純粋関数/センサ初期化/ウィンドウ初期化）を分離。
なぜ: `run_demo` 本体を薄く保ち、GL 無しでテストできる部分を切り出すため。
"""

from __future__ import annotations

__all__: list[str] = []
