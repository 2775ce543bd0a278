"""Command-line parsing for the router-hosts client."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import IO, Sequence

from router_hosts.client_config import ClientConfig, ClientConfigError
from router_hosts.errors import EXIT_USAGE
from router_hosts.output import OutputFormat

__all__ = ["build_parser", "parse_args", "show_config"]


def _output_format(value: str) -> OutputFormat:
    try:
        return OutputFormat(value.lower())
    except ValueError:
        choices = ", ".join(f.value for f in OutputFormat)
        raise argparse.ArgumentTypeError(
            f"invalid format '{value}' (choose from {choices})"
        ) from None


def _add_global_options(
    parser: argparse.ArgumentParser, *, top: bool, with_format: bool = True
) -> None:
    """Options accepted before or after any subcommand."""
    kw = {} if top else {"default": argparse.SUPPRESS}
    group = parser.add_argument_group("global options")
    group.add_argument("-c", "--config", type=Path, help="Path to config file", **kw)
    group.add_argument("-s", "--server", help="Server address (host:port)", **kw)
    group.add_argument("--cert", type=Path, help="Client certificate path", **kw)
    group.add_argument("--key", type=Path, help="Client key path", **kw)
    group.add_argument("--ca", type=Path, help="CA certificate path", **kw)
    group.add_argument("-v", "--verbose", action="store_true", help="Verbose output", **kw)
    group.add_argument(
        "-q", "--quiet", action="store_true", help="Suppress non-error output", **kw
    )
    if with_format:
        group.add_argument(
            "--format",
            type=_output_format,
            metavar="{table,json,csv}",
            help="Output format",
            default=OutputFormat.TABLE if top else argparse.SUPPRESS,
        )


def _leaf(subparsers, name: str, help_text: str, *, with_format: bool = True):
    parser = subparsers.add_parser(name, help=help_text, description=help_text)
    _add_global_options(parser, top=False, with_format=with_format)
    return parser


def _add_host_commands(host: argparse.ArgumentParser) -> None:
    commands = host.add_subparsers(dest="host_command", metavar="COMMAND", required=True)

    add = _leaf(commands, "add", "Add a new host entry")
    add.add_argument("--ip", required=True, help="IP address (IPv4 or IPv6)")
    add.add_argument("--hostname", required=True, help="Hostname")
    add.add_argument("--comment", help="Optional comment")
    add.add_argument(
        "--tag", dest="tags", action="append", help="Tag (may be repeated)"
    )

    get = _leaf(commands, "get", "Get a host entry by ID")
    get.add_argument("id", help="Host entry ID")

    update = _leaf(commands, "update", "Update an existing host entry")
    update.add_argument("id", help="Host entry ID")
    update.add_argument("--ip", help="New IP address")
    update.add_argument("--hostname", help="New hostname")
    update.add_argument("--comment", help="New comment (empty string to clear)")
    update.add_argument(
        "--tag", dest="tags", action="append", help="Replace all tags (may be repeated)"
    )
    update.add_argument("--version", help="Expected version for optimistic concurrency")

    delete = _leaf(commands, "delete", "Delete a host entry")
    delete.add_argument("id", help="Host entry ID")

    listing = _leaf(commands, "list", "List all host entries")
    listing.add_argument("--filter", help="Filter expression")
    listing.add_argument("--limit", type=int, help="Maximum entries to return")
    listing.add_argument("--offset", type=int, help="Number of entries to skip")

    search = _leaf(commands, "search", "Search host entries")
    search.add_argument("query", help="Search query")

    imp = _leaf(commands, "import", "Import hosts from file", with_format=False)
    imp.add_argument("file", type=Path, help="Path to import file")
    imp.add_argument(
        "--format",
        dest="import_format",
        default="hosts",
        help="Import format: hosts, json, csv",
    )
    imp.add_argument(
        "--conflict-mode",
        dest="conflict_mode",
        default="skip",
        help="Conflict mode: skip, replace, strict",
    )

    export = _leaf(commands, "export", "Export hosts to stdout", with_format=False)
    export.add_argument(
        "--format",
        dest="export_format",
        default="hosts",
        help="Export format: hosts, json, csv",
    )


def _add_snapshot_commands(snapshot: argparse.ArgumentParser) -> None:
    commands = snapshot.add_subparsers(
        dest="snapshot_command", metavar="COMMAND", required=True
    )
    _leaf(commands, "create", "Create a new snapshot")
    _leaf(commands, "list", "List all snapshots")
    rollback = _leaf(commands, "rollback", "Rollback to a snapshot")
    rollback.add_argument("snapshot_id", help="Snapshot ID to restore")
    delete = _leaf(commands, "delete", "Delete a snapshot")
    delete.add_argument("snapshot_id", help="Snapshot ID to delete")


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the client."""
    parser = argparse.ArgumentParser(
        prog="router-hosts", description="Router hosts file management CLI"
    )
    _add_global_options(parser, top=True)
    commands = parser.add_subparsers(dest="command", metavar="COMMAND", required=True)

    host = _leaf(commands, "host", "Manage host entries")
    _add_host_commands(host)

    snapshot = _leaf(commands, "snapshot", "Manage snapshots")
    _add_snapshot_commands(snapshot)

    _leaf(commands, "config", "Show effective configuration")
    return parser


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments; exits with status 2 on a usage error."""
    args = build_parser().parse_args(argv)
    if args.command == "host" and args.host_command == "add" and args.tags is None:
        args.tags = []
    return args


def show_config(
    args: argparse.Namespace,
    out: IO[str] | None = None,
    err: IO[str] | None = None,
) -> int:
    """Print the effective client configuration and return an exit code."""
    out = out if out is not None else sys.stdout
    err = err if err is not None else sys.stderr
    try:
        config = ClientConfig.load(args.config, args.server, args.cert, args.key, args.ca)
    except ClientConfigError as exc:
        print(f"Configuration error: {exc}", file=err)
        return EXIT_USAGE
    print(f"Server: {config.server_address}", file=out)
    print(f'Certificate: "{config.cert_path}"', file=out)
    print(f'Key: "{config.key_path}"', file=out)
    print(f'CA: "{config.ca_cert_path}"', file=out)
    return 0