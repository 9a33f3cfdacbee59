"""tests/test_config.py — md2slack/lib/config.py のテスト"""
from __future__ import annotations

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent / "md2slack"))

from lib.config import DEFAULT_CONFIG_PATH, DEFAULTS, config_path, load_config  # noqa: E402


class TestConfigPath:
    def test_env_overrides_default(self, monkeypatch, tmp_path):
        monkeypatch.setenv("MD2SLACK_CONFIG", str(tmp_path / "c.json"))
        assert config_path() == tmp_path / "c.json"

    def test_default(self, monkeypatch):
        monkeypatch.delenv("MD2SLACK_CONFIG", raising=False)
        assert config_path() == DEFAULT_CONFIG_PATH


class TestLoadConfig:
    def test_missing_file_returns_defaults(self, tmp_path):
        assert load_config(tmp_path / "missing.json") == DEFAULTS

    def test_values_merged_over_defaults(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text('{"encoding": "cp1252", "extra": 1}')
        config = load_config(path)
        assert config["encoding"] == "cp1252"
        assert config["extra"] == 1

    def test_defaults_not_mutated(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text('{"encoding": "latin-1"}')
        load_config(path)
        assert DEFAULTS["encoding"] == "utf-8"

    def test_invalid_json_raises(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("{")
        with pytest.raises(ValueError):
            load_config(path)

    def test_non_object_raises(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("[1, 2]")
        with pytest.raises(ValueError, match="JSON object"):
            load_config(path)

    @pytest.mark.parametrize("encoding", ['"no-such-codec"', "null"])
    def test_unknown_encoding_raises(self, tmp_path, encoding):
        path = tmp_path / "config.json"
        path.write_text(f'{{"encoding": {encoding}}}')
        with pytest.raises(ValueError, match="Unknown encoding"):
            load_config(path)
