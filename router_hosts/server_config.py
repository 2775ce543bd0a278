"""Server configuration loaded from a TOML file."""

from __future__ import annotations

import logging
import os
import stat
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

__all__ = [
    "ConfigError",
    "MissingHostsFilePathError",
    "MissingBindAddressError",
    "InsecureConfigError",
    "ServerConfig",
    "DatabaseConfig",
    "TlsConfig",
    "RetentionConfig",
    "HooksConfig",
    "Config",
    "check_config_permissions",
]

logger = logging.getLogger(__name__)

DEFAULT_MAX_SNAPSHOTS = 50
DEFAULT_MAX_AGE_DAYS = 30


class ConfigError(Exception):
    """Raised when the server configuration cannot be loaded."""


class MissingHostsFilePathError(ConfigError):
    """Raised when server.hosts_file_path is empty."""

    def __init__(self) -> None:
        super().__init__("hosts_file_path is required but not provided")


class MissingBindAddressError(ConfigError):
    """Raised when server.bind_address is empty."""

    def __init__(self) -> None:
        super().__init__("bind_address is required but not provided")


class InsecureConfigError(ConfigError):
    """Raised when the config file has unsafe permissions."""

    def __init__(self, detail: str) -> None:
        super().__init__(f"Config file security: {detail}")
        self.detail = detail


def _parse_error(detail: str) -> ConfigError:
    return ConfigError(f"Failed to parse config: {detail}")


def _table(data: dict[str, Any], name: str, *, required: bool) -> dict[str, Any]:
    value = data.get(name)
    if value is None:
        if required:
            raise _parse_error(f"missing section [{name}]")
        return {}
    if not isinstance(value, dict):
        raise _parse_error(f"invalid type for [{name}]: expected a table")
    return value


def _string(section: dict[str, Any], section_name: str, key: str) -> str:
    if key not in section:
        raise _parse_error(f"missing field `{key}` in [{section_name}]")
    value = section[key]
    if not isinstance(value, str):
        raise _parse_error(f"invalid type for {section_name}.{key}: expected a string")
    return value


def _non_negative_int(
    section: dict[str, Any], section_name: str, key: str, default: int
) -> int:
    value = section.get(key, default)
    if isinstance(value, bool) or not isinstance(value, int):
        raise _parse_error(f"invalid type for {section_name}.{key}: expected an integer")
    if value < 0:
        raise _parse_error(f"invalid value for {section_name}.{key}: must not be negative")
    return value


def _string_list(section: dict[str, Any], section_name: str, key: str) -> list[str]:
    value = section.get(key, [])
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise _parse_error(
            f"invalid type for {section_name}.{key}: expected a list of strings"
        )
    return list(value)


@dataclass(frozen=True)
class ServerConfig:
    """Listening address and the hosts file to generate."""

    bind_address: str
    hosts_file_path: str


@dataclass(frozen=True)
class DatabaseConfig:
    """Location of the database."""

    path: Path


@dataclass(frozen=True)
class TlsConfig:
    """Server certificate, key and the CA that signs client certificates."""

    cert_path: Path
    key_path: Path
    ca_cert_path: Path


@dataclass(frozen=True)
class RetentionConfig:
    """Snapshot retention policy."""

    max_snapshots: int = DEFAULT_MAX_SNAPSHOTS
    max_age_days: int = DEFAULT_MAX_AGE_DAYS


@dataclass(frozen=True)
class HooksConfig:
    """Shell commands run after the hosts file is regenerated.

    These run with the server's privileges, so the config file must not be
    writable by untrusted users. Context is passed through the environment
    variables ROUTER_HOSTS_EVENT, ROUTER_HOSTS_ENTRY_COUNT and
    ROUTER_HOSTS_ERROR, never interpolated into the command.
    """

    on_success: list[str] = field(default_factory=list)
    on_failure: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class Config:
    """Complete server configuration."""

    server: ServerConfig
    database: DatabaseConfig
    tls: TlsConfig
    retention: RetentionConfig = field(default_factory=RetentionConfig)
    hooks: HooksConfig = field(default_factory=HooksConfig)

    @classmethod
    def from_toml(cls, text: str) -> "Config":
        """Parse configuration text without checking for empty fields."""
        try:
            data = tomllib.loads(text)
        except tomllib.TOMLDecodeError as exc:
            raise _parse_error(str(exc)) from exc

        server = _table(data, "server", required=True)
        database = _table(data, "database", required=True)
        tls = _table(data, "tls", required=True)
        retention = _table(data, "retention", required=False)
        hooks = _table(data, "hooks", required=False)

        return cls(
            server=ServerConfig(
                bind_address=_string(server, "server", "bind_address"),
                hosts_file_path=_string(server, "server", "hosts_file_path"),
            ),
            database=DatabaseConfig(path=Path(_string(database, "database", "path"))),
            tls=TlsConfig(
                cert_path=Path(_string(tls, "tls", "cert_path")),
                key_path=Path(_string(tls, "tls", "key_path")),
                ca_cert_path=Path(_string(tls, "tls", "ca_cert_path")),
            ),
            retention=RetentionConfig(
                max_snapshots=_non_negative_int(
                    retention, "retention", "max_snapshots", DEFAULT_MAX_SNAPSHOTS
                ),
                max_age_days=_non_negative_int(
                    retention, "retention", "max_age_days", DEFAULT_MAX_AGE_DAYS
                ),
            ),
            hooks=HooksConfig(
                on_success=_string_list(hooks, "hooks", "on_success"),
                on_failure=_string_list(hooks, "hooks", "on_failure"),
            ),
        )

    @classmethod
    def from_file(cls, path: str | os.PathLike[str]) -> "Config":
        """Load and validate a configuration file, refusing unsafe permissions."""
        check_config_permissions(path)
        try:
            text = Path(path).read_text(encoding="utf-8")
        except OSError as exc:
            raise ConfigError(f"Failed to read config file: {exc}") from exc

        config = cls.from_toml(text)
        if not config.server.bind_address:
            raise MissingBindAddressError()
        if not config.server.hosts_file_path:
            raise MissingHostsFilePathError()
        return config


def check_config_permissions(path: str | os.PathLike[str]) -> None:
    """Reject a world-writable config file and warn about a group-writable one.

    Only POSIX permissions are checked; elsewhere this does nothing.
    """
    if os.name != "posix":
        return
    name = os.fspath(path)
    try:
        mode = os.stat(name).st_mode
    except FileNotFoundError as exc:
        raise ConfigError(f"Failed to read config file: {exc}") from exc
    except OSError:
        logger.warning(
            "Unable to check config file permissions - ensure file is not "
            "world-writable (path=%s)",
            name,
        )
        return

    if mode & stat.S_IWOTH:
        raise InsecureConfigError(
            f"Config file '{name}' is world-writable (mode {mode:o}). "
            "This is a security risk as the config contains hook commands. "
            f"Fix with: chmod o-w {name}"
        )

    if mode & stat.S_IWGRP:
        logger.warning(
            "Config file is group-writable (mode %o) - consider restricting "
            "with: chmod g-w %s",
            mode,
            name,
        )