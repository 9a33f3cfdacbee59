from __future__ import annotations

import codecs
import json
import os
from pathlib import Path

DEFAULT_CONFIG_PATH = Path.home() / ".md2slack" / "config.json"

DEFAULTS = {
    "encoding": "utf-8",
}


def config_path() -> Path:
    """環境変数 MD2SLACK_CONFIG > ~/.md2slack/config.json の優先順で解決。"""
    env_path = os.environ.get("MD2SLACK_CONFIG")
    return Path(env_path) if env_path else DEFAULT_CONFIG_PATH


def load_config(path: Path | None = None) -> dict:
    """設定ファイルを読み込み、デフォルト値にマージして返す。

    ファイルがなければデフォルト値のみ。JSON が壊れている・オブジェクトでない場合は
    ValueError を raise する。
    """
    path = path or config_path()
    config = dict(DEFAULTS)
    try:
        with open(path) as f:
            data = json.load(f)
    except FileNotFoundError:
        return config

    if not isinstance(data, dict):
        raise ValueError(f"Config must be a JSON object: {path}")
    config.update(data)
    try:
        codecs.lookup(config["encoding"])
    except (LookupError, TypeError) as e:
        raise ValueError(f"Unknown encoding in {path}: {config['encoding']!r}") from e
    return config
