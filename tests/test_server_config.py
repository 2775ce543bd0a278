import os
from pathlib import Path

import pytest

from router_hosts.server_config import (
    Config,
    ConfigError,
    InsecureConfigError,
    MissingBindAddressError,
    MissingHostsFilePathError,
    check_config_permissions,
)

BASE = """
[server]
bind_address = "{bind}"
hosts_file_path = "{hosts}"

[database]
path = "/var/lib/router-hosts/hosts.db"

[tls]
cert_path = "/etc/router-hosts/server.crt"
key_path = "/etc/router-hosts/server.key"
ca_cert_path = "/etc/router-hosts/ca.crt"
"""


def _text(bind="0.0.0.0:50051", hosts="/etc/hosts", extra=""):
    return BASE.format(bind=bind, hosts=hosts) + extra


def _write(tmp_path, text, mode=0o600):
    path = tmp_path / "server.toml"
    path.write_text(text, encoding="utf-8")
    os.chmod(path, mode)
    return path


def test_config_parse_minimal():
    config = Config.from_toml(_text())
    assert config.server.bind_address == "0.0.0.0:50051"
    assert config.server.hosts_file_path == "/etc/hosts"
    assert config.retention.max_snapshots == 50
    assert config.retention.max_age_days == 30
    assert config.database.path == Path("/var/lib/router-hosts/hosts.db")
    assert config.tls.ca_cert_path == Path("/etc/router-hosts/ca.crt")


def test_config_hooks_default_empty():
    config = Config.from_toml(_text())
    assert config.hooks.on_success == []
    assert config.hooks.on_failure == []


def test_config_hooks_parsed():
    extra = """
[hooks]
on_success = ["systemctl reload dnsmasq"]
on_failure = ["/usr/local/bin/alert-failure"]
"""
    config = Config.from_toml(_text(extra=extra))
    assert config.hooks.on_success == ["systemctl reload dnsmasq"]
    assert config.hooks.on_failure == ["/usr/local/bin/alert-failure"]


def test_config_missing_hosts_file_path(tmp_path):
    path = _write(tmp_path, _text(hosts=""))
    with pytest.raises(MissingHostsFilePathError):
        Config.from_file(path)


def test_config_missing_bind_address(tmp_path):
    path = _write(tmp_path, _text(bind=""))
    with pytest.raises(MissingBindAddressError):
        Config.from_file(str(path))


def test_config_custom_retention():
    extra = """
[retention]
max_snapshots = 100
max_age_days = 60
"""
    config = Config.from_toml(_text(extra=extra))
    assert config.retention.max_snapshots == 100
    assert config.retention.max_age_days == 60
    assert config.server.bind_address == "0.0.0.0:50051"
    assert config.server.hosts_file_path == "/etc/hosts"


def test_config_world_writable_rejected(tmp_path):
    path = _write(tmp_path, _text(), mode=0o666)
    with pytest.raises(InsecureConfigError) as info:
        Config.from_file(path)
    assert "world-writable" in str(info.value)


def test_config_secure_permissions_accepted(tmp_path):
    path = _write(tmp_path, _text(), mode=0o600)
    config = Config.from_file(path)
    assert config.server.bind_address == "0.0.0.0:50051"


def test_config_group_writable_loads(tmp_path):
    path = _write(tmp_path, _text(), mode=0o620)
    config = Config.from_file(path)
    assert config.server.hosts_file_path == "/etc/hosts"


def test_missing_file_is_config_error(tmp_path):
    with pytest.raises(ConfigError) as info:
        Config.from_file(tmp_path / "absent.toml")
    assert "Failed to read config file" in str(info.value)


def test_check_permissions_missing_file(tmp_path):
    with pytest.raises(ConfigError):
        check_config_permissions(tmp_path / "absent.toml")


def test_missing_section_rejected():
    text = '[server]\nbind_address = "a:1"\nhosts_file_path = "/etc/hosts"\n'
    with pytest.raises(ConfigError) as info:
        Config.from_toml(text)
    assert "Failed to parse config" in str(info.value)


def test_invalid_toml_rejected():
    with pytest.raises(ConfigError) as info:
        Config.from_toml("[server\n")
    assert "Failed to parse config" in str(info.value)


def test_wrong_type_rejected():
    extra = '\n[retention]\nmax_snapshots = "many"\n'
    with pytest.raises(ConfigError):
        Config.from_toml(_text(extra=extra))