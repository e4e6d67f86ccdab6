"""Tests for config.toml loading."""

import tomllib

import pytest

from galaxy_devices.config import CONFIG_ENV_VAR, load_config


def test_missing_file_uses_defaults(tmp_path):
    config = load_config(tmp_path / "absent.toml")
    assert config["device"] == {
        "host": "192.168.0.100", "port": 25003, "handler": "galaxy", "num_outputs": 16,
    }
    assert config["ui"]["page_title"] == "Galaxy Array Designer"


def test_partial_file_merges_with_defaults(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text('[device]\nhost = "10.1.2.3"\nnum_outputs = 32\n', encoding="utf-8")
    config = load_config(path)
    assert config["device"]["host"] == "10.1.2.3"
    assert config["device"]["num_outputs"] == 32
    assert config["device"]["port"] == 25003


def test_relative_catalog_path_resolved_against_config_dir(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text('[catalog]\nstarting_points = "data/sp.json"\n', encoding="utf-8")
    config = load_config(path)
    assert config["catalog"]["starting_points"] == str(tmp_path / "data" / "sp.json")


def test_env_var_overrides_path(tmp_path, monkeypatch):
    path = tmp_path / "other.toml"
    path.write_text('[device]\nhandler = "dry-run"\n', encoding="utf-8")
    monkeypatch.setenv(CONFIG_ENV_VAR, str(path))
    assert load_config()["device"]["handler"] == "dry-run"


def test_malformed_file_raises(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text("[device\n", encoding="utf-8")
    with pytest.raises(tomllib.TOMLDecodeError):
        load_config(path)
