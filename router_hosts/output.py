"""Rendering host entries and snapshots as table, JSON or CSV."""

from __future__ import annotations

import csv
import enum
import json
import sys
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import IO, Any, Iterable, Sequence

__all__ = [
    "OutputFormat",
    "Timestamp",
    "HostEntry",
    "Snapshot",
    "print_items",
    "print_item",
]

_ID_DISPLAY_LENGTH = 12


class OutputFormat(enum.Enum):
    """Output formats for listing commands."""

    TABLE = "table"
    JSON = "json"
    CSV = "csv"


@dataclass(frozen=True)
class Timestamp:
    """A point in time as seconds and nanoseconds since the Unix epoch."""

    seconds: int
    nanos: int = 0


def _short_id(value: str) -> str:
    if len(value) > _ID_DISPLAY_LENGTH:
        return f"{value[:_ID_DISPLAY_LENGTH]}..."
    return value


def _format_created(ts: Timestamp | None) -> str:
    if ts is None:
        return ""
    if not 0 <= ts.nanos < 2_000_000_000:
        return "invalid"
    try:
        dt = datetime.fromtimestamp(ts.seconds, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        return "invalid"
    return f"{dt:%Y-%m-%d %H:%M} UTC"


@dataclass
class HostEntry:
    """A host entry as returned by the server."""

    id: str
    ip_address: str
    hostname: str
    comment: str | None = None
    tags: list[str] = field(default_factory=list)
    created_at: Timestamp | None = None
    updated_at: Timestamp | None = None
    version: str = ""

    @classmethod
    def headers(cls) -> list[str]:
        return ["ID", "IP", "HOSTNAME", "COMMENT", "TAGS"]

    def row(self) -> list[str]:
        return [
            _short_id(self.id),
            self.ip_address,
            self.hostname,
            self.comment or "",
            ",".join(self.tags),
        ]

    def to_dict(self) -> dict[str, Any]:
        """Serializable form; timestamps are left out."""
        return {
            "id": self.id,
            "ip_address": self.ip_address,
            "hostname": self.hostname,
            "comment": self.comment,
            "tags": list(self.tags),
            "version": self.version,
        }


@dataclass
class Snapshot:
    """A snapshot of the host database."""

    snapshot_id: str
    created_at: Timestamp | None = None
    entry_count: int = 0
    trigger: str = ""

    @classmethod
    def headers(cls) -> list[str]:
        return ["ID", "CREATED", "ENTRIES", "TRIGGER"]

    def row(self) -> list[str]:
        return [
            _short_id(self.snapshot_id),
            _format_created(self.created_at),
            str(self.entry_count),
            self.trigger,
        ]

    def to_dict(self) -> dict[str, Any]:
        """Serializable form; the creation time is left out."""
        return {
            "snapshot_id": self.snapshot_id,
            "entry_count": self.entry_count,
            "trigger": self.trigger,
        }


Displayable = HostEntry | Snapshot


def _print_table(items: Sequence[Displayable], out: IO[str]) -> None:
    if not items:
        return
    headers = type(items[0]).headers()
    rows = [item.row() for item in items]
    widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row[: len(widths)]):
            widths[i] = max(widths[i], len(cell))

    def render(cells: Iterable[str]) -> str:
        return "  ".join(
            cell.ljust(widths[i] if i < len(widths) else 0)
            for i, cell in enumerate(cells)
        )

    print(render(headers), file=out)
    for row in rows:
        print(render(row), file=out)


def _print_json(items: Sequence[Displayable], out: IO[str]) -> None:
    print(
        json.dumps([item.to_dict() for item in items], indent=2, ensure_ascii=False),
        file=out,
    )


def _print_csv(
    items: Sequence[Displayable], headers: list[str], out: IO[str]
) -> None:
    writer = csv.writer(out, lineterminator="\n")
    writer.writerow(headers)
    writer.writerows(item.row() for item in items)
    out.flush()


def print_items(
    items: Sequence[Displayable],
    format: OutputFormat = OutputFormat.TABLE,
    stream: IO[str] | None = None,
) -> None:
    """Print items in the given format (to stdout by default).

    CSV output always has a header line; with no items it defaults to the
    host entry headers.
    """
    out = stream if stream is not None else sys.stdout
    match format:
        case OutputFormat.TABLE:
            _print_table(items, out)
        case OutputFormat.JSON:
            _print_json(items, out)
        case OutputFormat.CSV:
            headers = type(items[0]).headers() if items else HostEntry.headers()
            _print_csv(items, headers, out)


def print_item(
    item: Displayable,
    format: OutputFormat = OutputFormat.TABLE,
    stream: IO[str] | None = None,
) -> None:
    """Print a single item in the given format."""
    print_items([item], format, stream)