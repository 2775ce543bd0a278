"""Client connection settings drawn from CLI values, environment and file."""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import platformdirs

__all__ = [
    "ClientConfigError",
    "ClientConfig",
    "default_config_path",
    "expand_tilde",
]

ENV_SERVER = "ROUTER_HOSTS_SERVER"
ENV_CERT = "ROUTER_HOSTS_CERT"
ENV_KEY = "ROUTER_HOSTS_KEY"
ENV_CA = "ROUTER_HOSTS_CA"

PathLike = str | os.PathLike[str]


class ClientConfigError(Exception):
    """Raised when the client configuration is missing or malformed."""


def default_config_path() -> Path:
    """Return the default location of the client configuration file."""
    try:
        base = Path(platformdirs.user_config_dir())
    except Exception:  # noqa: BLE001 - no usable config directory
        base = Path(".")
    return base / "router-hosts" / "client.toml"


def expand_tilde(path: PathLike) -> Path:
    """Replace a leading "~/" with the user's home directory."""
    text = os.fspath(path)
    if text.startswith("~/"):
        try:
            home = Path.home()
        except RuntimeError:
            return Path(text)
        return home / text[2:]
    return Path(text)


def _section(data: dict[str, Any], name: str) -> dict[str, Any]:
    value = data.get(name)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ClientConfigError(f"invalid type for [{name}]: expected a table")
    return value


def _string_field(section: dict[str, Any], section_name: str, key: str) -> str | None:
    value = section.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ClientConfigError(
            f"invalid type for {section_name}.{key}: expected a string"
        )
    return value


@dataclass(frozen=True)
class _FileSettings:
    address: str | None = None
    cert_path: str | None = None
    key_path: str | None = None
    ca_cert_path: str | None = None


def _load_from_file(path: PathLike | None) -> _FileSettings:
    if path is None:
        config_path = default_config_path()
        if not config_path.exists():
            return _FileSettings()
    else:
        config_path = Path(path)
        if not config_path.exists():
            raise ClientConfigError(f'Config file not found: "{config_path}"')

    try:
        content = config_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ClientConfigError(f"Failed to read config file: {exc}") from exc
    try:
        data = tomllib.loads(content)
    except tomllib.TOMLDecodeError as exc:
        raise ClientConfigError(f"Failed to parse config file: {exc}") from exc

    server = _section(data, "server")
    tls = _section(data, "tls")
    return _FileSettings(
        address=_string_field(server, "server", "address"),
        cert_path=_string_field(tls, "tls", "cert_path"),
        key_path=_string_field(tls, "tls", "key_path"),
        ca_cert_path=_string_field(tls, "tls", "ca_cert_path"),
    )


def _first(*candidates: Any) -> Any:
    return next((c for c in candidates if c is not None), None)


@dataclass(frozen=True)
class ClientConfig:
    """Resolved client connection settings."""

    server_address: str
    cert_path: Path
    key_path: Path
    ca_cert_path: Path

    @classmethod
    def load(
        cls,
        config_path: PathLike | None = None,
        cli_server: str | None = None,
        cli_cert: PathLike | None = None,
        cli_key: PathLike | None = None,
        cli_ca: PathLike | None = None,
    ) -> "ClientConfig":
        """Resolve settings with precedence: CLI, then environment, then file."""
        file = _load_from_file(config_path)
        env = os.environ

        server_address = _first(cli_server, env.get(ENV_SERVER), file.address)
        if server_address is None:
            raise ClientConfigError(
                "Server address required: use --server, ROUTER_HOSTS_SERVER, "
                "or config file"
            )

        def resolve_path(cli: PathLike | None, env_name: str, from_file: str | None,
                         message: str) -> Path:
            value = _first(cli, env.get(env_name), from_file)
            if value is None:
                raise ClientConfigError(message)
            return expand_tilde(value)

        cert_path = resolve_path(
            cli_cert, ENV_CERT, file.cert_path,
            "Client certificate required: use --cert, ROUTER_HOSTS_CERT, "
            "or config file",
        )
        key_path = resolve_path(
            cli_key, ENV_KEY, file.key_path,
            "Client key required: use --key, ROUTER_HOSTS_KEY, or config file",
        )
        ca_cert_path = resolve_path(
            cli_ca, ENV_CA, file.ca_cert_path,
            "CA certificate required: use --ca, ROUTER_HOSTS_CA, or config file",
        )

        return cls(
            server_address=server_address,
            cert_path=cert_path,
            key_path=key_path,
            ca_cert_path=ca_cert_path,
        )