"""
どこで: `api` 入口（高レベル公開 API）。
何を: デモランナー `run_demo` と構成物 `DemoComponents` を再輸出。
なぜ: 利用者が単一名前空間からデモを起動/検証できるようにするため。

Usage:
    from api import run_demo

    run_demo(sensor="simulated", fps=60)
    run_demo(sensor="replay", headless_frames=120)
"""

from .demo import DemoComponents, run_demo
from .demo import run_demo as run

__all__ = ["run_demo", "run", "DemoComponents"]
