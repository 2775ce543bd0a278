"""Mapping of RPC status codes to user-facing messages and exit codes."""

from __future__ import annotations

import enum

__all__ = [
    "EXIT_ERROR",
    "EXIT_USAGE",
    "EXIT_CONFLICT",
    "StatusCode",
    "RpcStatus",
    "format_grpc_error",
    "exit_code_for_status",
]

EXIT_ERROR = 1
EXIT_USAGE = 2
EXIT_CONFLICT = 3


class StatusCode(enum.IntEnum):
    """gRPC status codes."""

    OK = 0
    CANCELLED = 1
    UNKNOWN = 2
    INVALID_ARGUMENT = 3
    DEADLINE_EXCEEDED = 4
    NOT_FOUND = 5
    ALREADY_EXISTS = 6
    PERMISSION_DENIED = 7
    RESOURCE_EXHAUSTED = 8
    FAILED_PRECONDITION = 9
    ABORTED = 10
    OUT_OF_RANGE = 11
    UNIMPLEMENTED = 12
    INTERNAL = 13
    UNAVAILABLE = 14
    DATA_LOSS = 15
    UNAUTHENTICATED = 16


class RpcStatus(Exception):
    """An RPC failure carrying a status code and a message."""

    def __init__(self, code: StatusCode, message: str = "") -> None:
        super().__init__(f"{code.name}: {message}")
        self.code = code
        self.message = message


def format_grpc_error(status: RpcStatus) -> str:
    """Turn an RPC status into a user-friendly message."""
    match status.code:
        case StatusCode.INVALID_ARGUMENT:
            return f"Invalid input: {status.message}"
        case StatusCode.NOT_FOUND:
            return f"Not found: {status.message}"
        case StatusCode.ALREADY_EXISTS:
            return f"Already exists: {status.message}"
        case StatusCode.ABORTED:
            return "Version conflict: entry was modified. Re-fetch and try again."
        case StatusCode.PERMISSION_DENIED:
            return "Permission denied: check TLS certificates"
        case StatusCode.UNAVAILABLE:
            return "Server unavailable: check address and connectivity"
        case StatusCode.UNAUTHENTICATED:
            return "Authentication failed: check TLS certificates"
        case _:
            return f"Server error: {status.message}"


def exit_code_for_status(status: RpcStatus) -> int:
    """Return the process exit code for an RPC status."""
    match status.code:
        case StatusCode.INVALID_ARGUMENT:
            return EXIT_USAGE
        case StatusCode.ABORTED:
            return EXIT_CONFLICT
        case _:
            return EXIT_ERROR