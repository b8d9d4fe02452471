"""
tests/test_config.py - Configuration loading and precedence
"""
from decimal import Decimal

import pytest

from pricetracker.config import (
    LogLevel,
    PriceTrackerConfig,
    deep_merge,
    env_to_config_dict,
    load_config,
    load_toml_config,
)
from pricetracker.errors import ConfigError


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text(
        'log_level = "warning"\n'
        "\n"
        "[server]\n"
        'host = "0.0.0.0"\n'
        "port = 9000\n"
        "\n"
        "[seed_items]\n"
        'hats = "12.50"\n'
        "gloves = 8\n"
    )
    return path


def test_defaults(tmp_path):
    config = load_config(config_file=tmp_path / "missing.toml", environ={})

    assert config.server.host == "localhost"
    assert config.server.port == 8000
    assert config.log_level == LogLevel.INFO
    assert config.seed_items == {"shoes": Decimal("50"), "socks": Decimal("5")}


def test_file_values(config_file):
    config = load_config(config_file=config_file, environ={})

    assert config.server.host == "0.0.0.0"
    assert config.server.port == 9000
    assert config.log_level == LogLevel.WARNING
    assert config.seed_items == {"hats": Decimal("12.50"), "gloves": Decimal("8")}


def test_precedence_overrides_env_file(config_file):
    environ = {
        "PRICETRACK_SERVER__PORT": "9100",
        "PRICETRACK_LOG_LEVEL": "DEBUG",
        "PRICETRACK_DEBUG": "1",
        "UNRELATED": "x",
    }

    config = load_config(
        config_file=config_file,
        overrides={"server": {"port": 9200}},
        environ=environ,
    )

    assert config.server.port == 9200
    assert config.server.host == "0.0.0.0"
    assert config.log_level == LogLevel.DEBUG


def test_env_to_config_dict_nests_keys():
    environ = {"PRICETRACK_SERVER__HOST": "example", "PRICETRACK_COLOR_OUTPUT": "false"}

    assert env_to_config_dict(environ) == {
        "server": {"host": "example"},
        "color_output": "false",
    }


def test_unknown_key_is_rejected(tmp_path):
    with pytest.raises(ConfigError) as exc_info:
        load_config(config_file=tmp_path / "missing.toml", overrides={"colour": True}, environ={})
    assert exc_info.value.error_code == "PRCTRK-CFG-ERR"


def test_invalid_port_is_rejected(tmp_path):
    with pytest.raises(ConfigError):
        load_config(
            config_file=tmp_path / "missing.toml",
            environ={"PRICETRACK_SERVER__PORT": "70000"},
        )


def test_malformed_toml_is_a_config_error(tmp_path):
    path = tmp_path / "bad.toml"
    path.write_text("server = [unterminated\n")

    with pytest.raises(ConfigError):
        load_toml_config(path)


def test_deep_merge_keeps_nested_values():
    merged = deep_merge({"server": {"host": "a", "port": 1}}, {"server": {"port": 2}})

    assert merged == {"server": {"host": "a", "port": 2}}


def test_model_ignores_process_environment(monkeypatch):
    monkeypatch.setenv("PRICETRACK_SERVER__PORT", "9999")

    assert PriceTrackerConfig().server.port == 8000
