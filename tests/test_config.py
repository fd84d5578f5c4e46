"""Tests for loading and saving the user configuration."""

from __future__ import annotations

import json
from unittest.mock import patch

import pytest

from tissuebox.config import (
    _config_to_dict,
    _dict_to_config,
    _safe_get,
    get_config_path,
    load_config,
    save_config,
)
from tissuebox.models import DEFAULT_STORE_FILENAME, UserConfig


class TestSafeGet:
    def test_present_with_right_type(self):
        assert _safe_get({"a": 3}, "a", 0, int) == 3

    def test_missing_key(self):
        assert _safe_get({}, "a", 7, int) == 7

    def test_wrong_type(self):
        assert _safe_get({"a": "3"}, "a", 0, int) == 0


class TestDictToConfig:
    def test_empty_dict_gives_defaults(self):
        assert _dict_to_config({}) == UserConfig()

    def test_full_dict(self):
        config = _dict_to_config(
            {
                "theme_name": "solarized-dark",
                "default_input": "notes.toml",
                "clipboard_enabled": False,
                "git_command": "/usr/bin/git",
                "gh_command": "gh2",
                "version": 1,
            }
        )
        assert config.theme_name == "solarized-dark"
        assert config.default_input == "notes.toml"
        assert config.clipboard_enabled is False
        assert config.git_command == "/usr/bin/git"
        assert config.gh_command == "gh2"

    def test_unknown_theme_falls_back(self):
        assert _dict_to_config({"theme_name": "neon"}).theme_name == "monokai"

    @pytest.mark.parametrize("key", ["default_input", "git_command", "gh_command"])
    def test_blank_strings_fall_back(self, key):
        config = _dict_to_config({key: "   "})
        assert getattr(config, key) == getattr(UserConfig(), key)

    def test_wrong_types_fall_back(self):
        config = _dict_to_config({"clipboard_enabled": "yes", "default_input": 3})
        assert config.clipboard_enabled is True
        assert config.default_input == DEFAULT_STORE_FILENAME

    def test_non_object_raises(self):
        with pytest.raises(TypeError):
            _dict_to_config(["not", "a", "dict"])


class TestLoadConfig:
    def test_missing_file(self, tmp_path):
        config = load_config(tmp_path / "config.json")
        assert config == UserConfig()
        assert not config.config_defaulted

    def test_invalid_json_is_flagged(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("{not json", encoding="utf-8")
        config = load_config(path)
        assert config.config_defaulted
        assert config.theme_name == "monokai"

    def test_top_level_list_is_flagged(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("[1, 2]", encoding="utf-8")
        assert load_config(path).config_defaulted

    def test_valid_file(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"theme_name": "catppuccin-mocha"}), encoding="utf-8")
        config = load_config(path)
        assert config.theme_name == "catppuccin-mocha"
        assert not config.config_defaulted

    def test_default_path_is_platform_dir(self):
        path = get_config_path()
        assert path.name == "config.json"
        assert "tissuebox" in str(path)


class TestSaveConfig:
    def test_round_trip(self, tmp_path, sample_config):
        path = tmp_path / "nested" / "config.json"
        config = sample_config(theme_name="solarized-dark", clipboard_enabled=False)
        assert save_config(config, path)
        assert load_config(path) == config

    def test_runtime_flag_not_written(self, tmp_path):
        path = tmp_path / "config.json"
        save_config(UserConfig(config_defaulted=True), path)
        data = json.loads(path.read_text(encoding="utf-8"))
        assert "config_defaulted" not in data
        assert data == _config_to_dict(UserConfig())

    def test_write_failure_returns_false(self, tmp_path):
        path = tmp_path / "config.json"
        with patch("tissuebox.config.os.replace", side_effect=OSError("read-only")):
            assert not save_config(UserConfig(), path)
        assert not path.exists()
        assert list(tmp_path.iterdir()) == []
