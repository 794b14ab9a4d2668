"""Connection settings for the wallet engine daemon."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping
from urllib.parse import urlparse

import yaml


class ConfigurationError(RuntimeError):
    """Raised when configuration is invalid."""


DEFAULT_CONFIG_DIR = Path.home() / ".hw"
DEFAULT_CONFIG_PATH = DEFAULT_CONFIG_DIR / "config.yaml"
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8555
DEFAULT_TIMEOUT = 30.0


@dataclass
class EngineConfig:
    """Where and how to reach the wallet engine's JSON-RPC endpoint."""

    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    use_https: bool = False
    user: str | None = None
    password: str | None = None
    timeout: float = DEFAULT_TIMEOUT

    @property
    def base_url(self) -> str:
        scheme = "https" if self.use_https else "http"
        return f"{scheme}://{self.host}:{self.port}"

    @property
    def auth(self) -> tuple[str, str] | None:
        if self.user and self.password:
            return (self.user, self.password)
        return None


def _load_config_file(path: Path, *, required: bool) -> dict[str, Any]:
    if not path.exists():
        if required:
            raise ConfigurationError(f"Config file not found: {path}")
        return {}

    try:
        loaded = yaml.safe_load(path.read_text()) or {}
    except yaml.YAMLError as exc:  # pragma: no cover - delegated to PyYAML
        raise ConfigurationError(f"Invalid YAML in config file {path}: {exc}") from exc

    if not isinstance(loaded, dict):
        raise ConfigurationError(f"Expected {path} to contain a YAML object with an 'rpc' section")
    return loaded


def _coerce_bool(value: Any) -> bool | None:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        normalized = value.strip().lower()
        if normalized in {"1", "true", "yes", "y", "on"}:
            return True
        if normalized in {"0", "false", "no", "n", "off"}:
            return False
    return None


def _coerce_port(raw: Any, *, source: str) -> int | None:
    if raw is None:
        return None
    try:
        port = int(raw)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"Invalid port in {source}: {raw}") from exc
    if not 0 < port < 65536:
        raise ConfigurationError(f"Port out of range in {source}: {raw}")
    return port


def _coerce_timeout(raw: Any, *, source: str) -> float | None:
    if raw is None:
        return None
    try:
        timeout = float(raw)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"Invalid timeout in {source}: {raw}") from exc
    if timeout <= 0:
        raise ConfigurationError(f"Timeout must be positive in {source}: {raw}")
    return timeout


def _first_value(*values: Any, default: Any = None) -> Any:
    for value in values:
        if value is not None:
            return value
    return default


def _parse_endpoint(raw: str | None) -> tuple[str | None, int | None, bool | None]:
    if not raw:
        return None, None, None
    parsed = urlparse(raw)
    if not parsed.scheme or not parsed.hostname:
        raise ConfigurationError(f"Invalid RPC endpoint URL: {raw}")
    try:
        port = parsed.port
    except ValueError as exc:
        raise ConfigurationError(f"Invalid port in RPC endpoint URL: {raw}") from exc
    return parsed.hostname, port, parsed.scheme.lower() == "https"


def load_engine_config(
    *,
    config_path: str | Path | None = None,
    env: Mapping[str, str] | None = None,
    overrides: Mapping[str, Any] | None = None,
) -> EngineConfig:
    """Resolve engine settings from overrides, environment, then YAML file."""

    env_map = os.environ if env is None else env
    if config_path is None and env_map.get("HW_CONFIG"):
        config_path = env_map["HW_CONFIG"]
    path = Path(config_path).expanduser() if config_path is not None else DEFAULT_CONFIG_PATH

    file_config = _load_config_file(path, required=config_path is not None)
    rpc_section = file_config.get("rpc") or {}
    if not isinstance(rpc_section, dict):
        raise ConfigurationError(f"Expected 'rpc' to be a mapping in {path}")

    override_map = dict(overrides or {})

    endpoint_host, endpoint_port, endpoint_use_https = _parse_endpoint(
        _first_value(
            override_map.get("endpoint"),
            env_map.get("HW_RPC_ENDPOINT"),
            rpc_section.get("endpoint"),
        )
    )

    host = _first_value(
        override_map.get("host"),
        endpoint_host,
        env_map.get("HW_RPC_HOST"),
        rpc_section.get("host"),
        default=DEFAULT_HOST,
    )
    port = _first_value(
        _coerce_port(override_map.get("port"), source="overrides"),
        endpoint_port,
        _coerce_port(env_map.get("HW_RPC_PORT"), source="environment"),
        _coerce_port(rpc_section.get("port"), source=f"{path} rpc.port"),
        default=DEFAULT_PORT,
    )
    use_https = _first_value(
        _coerce_bool(override_map.get("use_https")),
        endpoint_use_https,
        _coerce_bool(env_map.get("HW_RPC_USE_HTTPS")),
        _coerce_bool(rpc_section.get("use_https")),
        default=False,
    )
    timeout = _first_value(
        _coerce_timeout(override_map.get("timeout"), source="overrides"),
        _coerce_timeout(env_map.get("HW_RPC_TIMEOUT"), source="environment"),
        _coerce_timeout(rpc_section.get("timeout"), source=f"{path} rpc.timeout"),
        default=DEFAULT_TIMEOUT,
    )
    user = _first_value(override_map.get("user"), env_map.get("HW_RPC_USER"), rpc_section.get("user"))
    password = _first_value(
        override_map.get("password"), env_map.get("HW_RPC_PASSWORD"), rpc_section.get("password")
    )
    if bool(user) != bool(password):
        raise ConfigurationError("RPC user and password must be provided together")

    return EngineConfig(
        host=host,
        port=port,
        use_https=bool(use_https),
        user=user,
        password=password,
        timeout=timeout,
    )
