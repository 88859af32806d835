"""
どこで: `util.color`。
何を: 色指定（Hex 文字列, RGBA 0–1, RGBA 0–255）を RGBA(0–1) へ正規化する。
なぜ: 設定ファイル/CLI のクリア色を同一の受理仕様で解釈するため。
"""

from __future__ import annotations

from typing import Sequence


def _clamp01(x: float) -> float:
    return 0.0 if x < 0.0 else 1.0 if x > 1.0 else float(x)


def parse_hex_color_str(s: str) -> tuple[float, float, float, float]:
    """Hex 文字列から RGBA(0–1) を返す。

    受理形式: "#RRGGBB", "#RRGGBBAA", "0xRRGGBB", "0xRRGGBBAA", "RRGGBB", "RRGGBBAA"。
    """
    t = s.strip()
    if t.startswith("#"):
        t = t[1:]
    elif t.lower().startswith("0x"):
        t = t[2:]
    if len(t) not in (6, 8):
        raise ValueError(f"invalid hex color length: '{s}' (expected RRGGBB or RRGGBBAA)")
    try:
        channels = [int(t[i : i + 2], 16) for i in range(0, len(t), 2)]
    except ValueError as e:
        raise ValueError(f"invalid hex color: '{s}'") from e
    if len(channels) == 3:
        channels.append(255)
    r, g, b, a = (c / 255.0 for c in channels)
    return (r, g, b, a)


def normalize_color(value: object) -> tuple[float, float, float, float]:
    """色を RGBA(0–1) へ正規化する。

    - 受理: Hex 文字列, (r,g,b[,a]) （全要素 0–1 ならそのまま、それ以外は 0–255 とみなす）
    - 不正入力は `ValueError`
    """
    if isinstance(value, str):
        return parse_hex_color_str(value)
    if not isinstance(value, (list, tuple)):
        raise ValueError(f"unsupported color type: {type(value)!r}")
    seq: Sequence[object] = value
    if len(seq) not in (3, 4):
        raise ValueError("color tuple/list must be length 3 or 4")
    try:
        fseq = [float(v) for v in seq]  # type: ignore[arg-type]
    except (TypeError, ValueError) as e:
        raise ValueError(f"invalid color tuple/list: {value!r}") from e
    if len(fseq) == 3:
        fseq.append(1.0 if all(0.0 <= x <= 1.0 for x in fseq) else 255.0)
    if all(0.0 <= x <= 1.0 for x in fseq):
        r, g, b, a = (_clamp01(x) for x in fseq)
        return (r, g, b, a)
    r, g, b, a = (max(0, min(255, int(round(x)))) / 255.0 for x in fseq)
    return (r, g, b, a)


__all__ = ["parse_hex_color_str", "normalize_color"]
