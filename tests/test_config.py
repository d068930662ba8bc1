# Copyright © 2025 Ed Nutting
# SPDX-License-Identifier: MIT
# See LICENSE file for details

"""
Tests for configuration management.
"""

import tempfile
from pathlib import Path

import yaml

from twistscore.config import (
    DEFAULT_CONFIG,
    Config,
    get_config_path,
    get_output_settings,
    load_config,
    save_config,
    update_config_output,
)


def test_default_config_output_settings():
    """Verify output settings are in default config."""
    assert DEFAULT_CONFIG["output"]["format"] == "text"
    assert DEFAULT_CONFIG["output"]["show_words"] is True
    assert DEFAULT_CONFIG["log_level"] == "WARNING"


def test_get_config_path_uses_cwd(monkeypatch, tmp_path):
    """Config file lives in the current working directory."""
    monkeypatch.chdir(tmp_path)
    assert get_config_path() == tmp_path / ".twistscore.yaml"


def test_load_config_missing_file_uses_defaults():
    """A missing config file yields the defaults."""
    with tempfile.TemporaryDirectory() as tmpdir:
        config = load_config(Path(tmpdir) / ".twistscore.yaml")
        assert config == DEFAULT_CONFIG


def test_load_config_merges_with_defaults():
    """Values from the file override defaults, other defaults remain."""
    with tempfile.TemporaryDirectory() as tmpdir:
        config_path = Path(tmpdir) / ".twistscore.yaml"
        with open(config_path, "w", encoding="utf-8") as f:
            yaml.dump({"output": {"format": "json"}}, f)

        config = load_config(config_path)
        assert config["output"]["format"] == "json"
        assert config["output"]["show_words"] is True
        assert config["log_level"] == "WARNING"


def test_load_config_unknown_format_falls_back(capsys):
    """An unknown output format is replaced with the default."""
    with tempfile.TemporaryDirectory() as tmpdir:
        config_path = Path(tmpdir) / ".twistscore.yaml"
        with open(config_path, "w", encoding="utf-8") as f:
            yaml.dump({"output": {"format": "xml"}}, f)

        config = load_config(config_path)
        assert config["output"]["format"] == "text"
        assert "Unknown output format" in capsys.readouterr().out


def test_load_config_unknown_log_level_falls_back():
    """An unknown log level is replaced with the default."""
    with tempfile.TemporaryDirectory() as tmpdir:
        config_path = Path(tmpdir) / ".twistscore.yaml"
        with open(config_path, "w", encoding="utf-8") as f:
            yaml.dump({"log_level": "chatty"}, f)

        assert load_config(config_path)["log_level"] == "WARNING"


def test_load_config_malformed_yaml(capsys):
    """Malformed YAML warns and yields defaults."""
    with tempfile.TemporaryDirectory() as tmpdir:
        config_path = Path(tmpdir) / ".twistscore.yaml"
        config_path.write_text("output: [unclosed\n", encoding="utf-8")

        config = load_config(config_path)
        assert config == DEFAULT_CONFIG
        assert "Could not load config" in capsys.readouterr().out


def test_load_config_non_mapping():
    """A YAML file that isn't a mapping is ignored."""
    with tempfile.TemporaryDirectory() as tmpdir:
        config_path = Path(tmpdir) / ".twistscore.yaml"
        config_path.write_text("- just\n- a list\n", encoding="utf-8")

        assert load_config(config_path) == DEFAULT_CONFIG


def test_save_and_reload_config():
    """Saved config can be loaded back."""
    with tempfile.TemporaryDirectory() as tmpdir:
        config_path = Path(tmpdir) / ".twistscore.yaml"
        config: Config = update_config_output(DEFAULT_CONFIG, {"show_similarity": True})

        assert save_config(config, config_path)
        reloaded = load_config(config_path)
        assert reloaded["output"]["show_similarity"] is True


def test_save_config_failure_returns_false():
    """Saving into a missing directory reports failure."""
    with tempfile.TemporaryDirectory() as tmpdir:
        config_path = Path(tmpdir) / "missing" / ".twistscore.yaml"
        assert save_config(DEFAULT_CONFIG, config_path) is False


def test_update_config_output_does_not_mutate():
    """update_config_output returns a new config."""
    new_config = update_config_output(DEFAULT_CONFIG, {"format": "json"})
    assert new_config["output"]["format"] == "json"
    assert DEFAULT_CONFIG["output"]["format"] == "text"


def test_get_output_settings_returns_copy():
    """Changing the extracted settings leaves the config untouched."""
    settings = get_output_settings(DEFAULT_CONFIG)
    settings["format"] = "json"
    assert DEFAULT_CONFIG["output"]["format"] == "text"
