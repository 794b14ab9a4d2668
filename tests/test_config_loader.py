from pathlib import Path

import pytest

from hw_wallet.config import ConfigurationError, EngineConfig, load_engine_config


def test_load_engine_config_prefers_environment_over_yaml(tmp_path: Path) -> None:
    config_path = tmp_path / "config.yaml"
    config_path.write_text(
        """
        rpc:
          user: file_user
          password: file_pass
          host: filehost
          port: 1111
          use_https: false
          timeout: 5
        """
    )

    env_map = {
        "HW_RPC_USER": "env_user",
        "HW_RPC_PASSWORD": "env_pass",
        "HW_RPC_ENDPOINT": "https://envhost:3333",
    }

    config = load_engine_config(config_path=config_path, env=env_map)

    assert isinstance(config, EngineConfig)
    assert config.auth == ("env_user", "env_pass")
    assert config.host == "envhost"
    assert config.port == 3333
    assert config.use_https is True
    assert config.timeout == 5.0
    assert config.base_url == "https://envhost:3333"


def test_load_engine_config_reads_default_yaml(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    config_path = tmp_path / "config.yaml"
    monkeypatch.setattr("hw_wallet.config.DEFAULT_CONFIG_PATH", config_path)
    config_path.write_text(
        """
        rpc:
          host: yamlhost
          port: 4545
        """
    )

    config = load_engine_config(env={})

    assert config.base_url == "http://yamlhost:4545"
    assert config.auth is None


def test_defaults_apply_without_any_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("hw_wallet.config.DEFAULT_CONFIG_PATH", tmp_path / "missing.yaml")

    config = load_engine_config(env={})

    assert config == EngineConfig()
    assert config.base_url == "http://127.0.0.1:8555"


def test_hw_config_variable_selects_file(tmp_path: Path) -> None:
    config_path = tmp_path / "other.yaml"
    config_path.write_text("rpc:\n  port: 9999\n")

    config = load_engine_config(env={"HW_CONFIG": str(config_path)})

    assert config.port == 9999


def test_overrides_win(tmp_path: Path) -> None:
    config = load_engine_config(
        config_path=_empty_config(tmp_path),
        env={"HW_RPC_HOST": "envhost"},
        overrides={"host": "override", "port": "1234"},
    )

    assert (config.host, config.port) == ("override", 1234)


def test_explicit_missing_file_is_an_error(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError):
        load_engine_config(config_path=tmp_path / "nope.yaml", env={})


@pytest.mark.parametrize(
    "env_map",
    [
        {"HW_RPC_PORT": "eighty"},
        {"HW_RPC_PORT": "70000"},
        {"HW_RPC_TIMEOUT": "0"},
        {"HW_RPC_ENDPOINT": "not a url"},
        {"HW_RPC_USER": "only-user"},
    ],
)
def test_malformed_values_raise(tmp_path: Path, env_map: dict[str, str]) -> None:
    with pytest.raises(ConfigurationError):
        load_engine_config(config_path=_empty_config(tmp_path), env=env_map)


def _empty_config(tmp_path: Path) -> Path:
    path = tmp_path / "empty.yaml"
    path.write_text("rpc: {}\n")
    return path
