"""
どこで: `engine.sensors.drivers`
何を: 回転ベクトルを生成するドライバ群（シミュレーション/記録再生/シリアル IMU）。
なぜ: 実機センサの無いデスクトップ環境でも同じ経路でデモを動かすため。
"""

from .base import SensorDriver

__all__ = ["SensorDriver"]
