"""
どこで: `engine.render` サブパッケージ。
何を: 描画バックエンド Protocol・ModernGL/記録バックエンド・CubeRenderer を提供。
なぜ: 姿勢計算と描画を分離し、描画 API を差し替えても OrientationSource 側に影響させないため。
"""
