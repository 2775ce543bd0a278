"""Validation of IP addresses and DNS hostnames."""

from __future__ import annotations

import ipaddress
import re

__all__ = [
    "ValidationError",
    "InvalidIpAddressError",
    "InvalidHostnameError",
    "validate_ip_address",
    "validate_hostname",
]

MAX_HOSTNAME_LENGTH = 253

# DNS label: alphanumerics and hyphens, 1-63 chars, no leading/trailing hyphen.
_LABEL_RE = re.compile(r"[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?", re.ASCII)


class ValidationError(ValueError):
    """Base class for input validation failures."""

    prefix = "Validation failed"

    def __init__(self, detail: str) -> None:
        super().__init__(f"{self.prefix}: {detail}")
        self.detail = detail


class InvalidIpAddressError(ValidationError):
    """Raised when a string is not a valid IPv4 or IPv6 address."""

    prefix = "Invalid IP address"


class InvalidHostnameError(ValidationError):
    """Raised when a string is not a valid DNS hostname."""

    prefix = "Invalid hostname"


def validate_ip_address(ip: str) -> ipaddress.IPv4Address | ipaddress.IPv6Address:
    """Parse an IPv4 or IPv6 address, raising InvalidIpAddressError if invalid."""
    if not isinstance(ip, str) or "%" in ip:
        raise InvalidIpAddressError(str(ip))
    try:
        return ipaddress.ip_address(ip)
    except ValueError:
        raise InvalidIpAddressError(ip) from None


def validate_hostname(hostname: str) -> str:
    """Check a DNS hostname and return it unchanged.

    The total length is limited to 253 bytes; labels are separated by dots,
    are 1-63 alphanumeric or hyphen characters and cannot start or end
    with a hyphen.
    """
    if not hostname:
        raise InvalidHostnameError("hostname cannot be empty")

    if len(hostname.encode("utf-8")) > MAX_HOSTNAME_LENGTH:
        raise InvalidHostnameError(
            f"hostname exceeds maximum length of {MAX_HOSTNAME_LENGTH} characters"
        )

    if hostname.startswith(".") or hostname.endswith("."):
        raise InvalidHostnameError("hostname cannot start or end with dot")

    if hostname.startswith("-") or hostname.endswith("-"):
        raise InvalidHostnameError("hostname cannot start or end with hyphen")

    for label in hostname.split("."):
        if not label:
            raise InvalidHostnameError("hostname cannot contain consecutive dots")
        if not _LABEL_RE.fullmatch(label):
            raise InvalidHostnameError(f"invalid label '{label}' in hostname")

    return hostname