"""
どこで: `engine.core` サブパッケージ。
何を: 回転ベクトル→行列変換・4x4 行列ユーティリティ・立方体メッシュ・共有姿勢状態・描画ウィンドウ・例外階層を提供。
なぜ: 計算と描画の基盤を構成し、上位層（Sensors/Render/API）から再利用可能にするため。
"""
