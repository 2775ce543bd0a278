import ipaddress

import pytest

from router_hosts.validation import (
    InvalidHostnameError,
    InvalidIpAddressError,
    ValidationError,
    validate_hostname,
    validate_ip_address,
)


@pytest.mark.parametrize(
    "ip", ["192.168.1.1", "10.0.0.1", "127.0.0.1", "255.255.255.255"]
)
def test_valid_ipv4_addresses(ip):
    assert validate_ip_address(ip) == ipaddress.IPv4Address(ip)


@pytest.mark.parametrize(
    "ip", ["256.1.1.1", "192.168.1", "192.168.1.1.1", "not-an-ip", ""]
)
def test_invalid_ipv4_addresses(ip):
    with pytest.raises(InvalidIpAddressError):
        validate_ip_address(ip)


@pytest.mark.parametrize(
    "ip", ["::1", "fe80::1", "2001:0db8:85a3::8a2e:0370:7334", "::ffff:192.168.1.1"]
)
def test_valid_ipv6_addresses(ip):
    assert validate_ip_address(ip) == ipaddress.IPv6Address(ip)


@pytest.mark.parametrize("ip", ["gggg::1", "::::::", "fe80::1%eth0"])
def test_invalid_ipv6_addresses(ip):
    with pytest.raises(InvalidIpAddressError):
        validate_ip_address(ip)


def test_invalid_ip_message():
    with pytest.raises(ValidationError) as info:
        validate_ip_address("not-an-ip")
    assert str(info.value) == "Invalid IP address: not-an-ip"


@pytest.mark.parametrize(
    "name",
    ["localhost", "server.local", "my-server", "server123", "sub.domain.example.com"],
)
def test_valid_hostnames(name):
    assert validate_hostname(name) == name


@pytest.mark.parametrize(
    "name",
    ["", "-invalid", "invalid-", "in..valid", "invalid_host", ".invalid", "invalid."],
)
def test_invalid_hostnames(name):
    with pytest.raises(InvalidHostnameError):
        validate_hostname(name)


def test_hostname_error_messages():
    with pytest.raises(InvalidHostnameError) as info:
        validate_hostname("in..valid")
    assert str(info.value) == "Invalid hostname: hostname cannot contain consecutive dots"
    with pytest.raises(InvalidHostnameError) as info:
        validate_hostname("bad_host.local")
    assert info.value.detail == "invalid label 'bad_host' in hostname"


@pytest.mark.parametrize("name", ["a", "1", "123", "123.456"])
def test_hostname_short_and_numeric(name):
    assert validate_hostname(name) == name


def test_label_length_limits():
    assert validate_hostname("a" * 63) == "a" * 63
    with pytest.raises(InvalidHostnameError):
        validate_hostname("a" * 64)


def test_hostname_length_limits():
    label = "a" * 63
    max_hostname = f"{label}.{label}.{label}.{label[:61]}"
    assert len(max_hostname) == 253
    assert validate_hostname(max_hostname) == max_hostname

    too_long = f"{label}.{label}.{label}.{label[:62]}"
    assert len(too_long) == 254
    with pytest.raises(InvalidHostnameError):
        validate_hostname(too_long)


def test_hostname_rejects_trailing_newline():
    with pytest.raises(InvalidHostnameError):
        validate_hostname("host\n")