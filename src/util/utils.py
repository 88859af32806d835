"""
どこで: `util.utils`
何を: YAML 設定の読み込み（`configs/default.yaml` → ルート `config.yaml` → 明示パス）とセクション取得。
なぜ: ウィンドウ/描画/センサ設定をコード外に置き、読み込み失敗時も既定値で起動できるようにするため。
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict

import yaml

logger = logging.getLogger(__name__)


def _safe_load_yaml(path: Path) -> Dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        logger.warning("failed to read config %s: %s", path, e)
        return {}
    return data if isinstance(data, dict) else {}


def find_project_root(start: Path) -> Path:
    """プロジェクトルートを推定して返す。

    - 上位に `pyproject.toml` か `configs/` があるもっとも近いディレクトリ。
    - 見つからない場合は `start.parent.parent`（典型: <repo>/src/util -> <repo>）。
    """
    cur = start.resolve()
    for parent in [cur] + list(cur.parents):
        if (parent / "pyproject.toml").exists() or (parent / "configs").exists():
            return parent
    return cur.parent.parent


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """セクション（トップレベルの辞書）単位で 1 段だけマージする。"""
    out = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(out.get(key), dict):
            merged = dict(out[key])
            merged.update(value)
            out[key] = merged
        else:
            out[key] = value
    return out


def load_config(path: Path | str | None = None) -> Dict[str, Any]:
    """構成を読み込んで辞書で返す（フェイルソフト）。

    優先順:
    1) `configs/default.yaml`（ベース）
    2) ルート `config.yaml`（ベースに上書き）
    3) 引数 `path`（CLI の `--config`）

    - いずれも存在しない/不正な場合は空辞書を返す。
    - 上書きはセクション内のキー単位（それより深いネストは置き換え）。
    """
    project_root = find_project_root(Path(__file__).parent)
    cfg: Dict[str, Any] = {}

    candidates = [project_root / "configs" / "default.yaml", project_root / "config.yaml"]
    if path is not None:
        candidates.append(Path(path))

    for candidate in candidates:
        if candidate.exists():
            cfg = _merge(cfg, _safe_load_yaml(candidate))
        elif path is not None and candidate == Path(path):
            logger.warning("config file not found: %s", candidate)
    return cfg


def config_section(cfg: Dict[str, Any], name: str) -> Dict[str, Any]:
    """`cfg[name]` を辞書として返す（欠落/型不一致は空辞書）。"""
    section = cfg.get(name) if isinstance(cfg, dict) else None
    return section if isinstance(section, dict) else {}


__all__ = ["load_config", "config_section", "find_project_root"]
