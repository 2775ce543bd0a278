"""Splitting an import file into chunks for streaming upload."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

__all__ = ["CHUNK_SIZE", "ImportChunk", "ImportFileError", "read_file_chunks"]

CHUNK_SIZE = 64 * 1024


class ImportFileError(Exception):
    """Raised when an import file cannot be used."""


@dataclass(frozen=True)
class ImportChunk:
    """One piece of an import stream; only the first carries format and mode."""

    chunk: bytes
    last_chunk: bool
    format: str | None = None
    conflict_mode: str | None = None


def read_file_chunks(
    path: str | os.PathLike[str], format: str, conflict_mode: str
) -> list[ImportChunk]:
    """Read a regular file and split it into chunks of at most CHUNK_SIZE bytes.

    Symlinks are followed; the resolved path must be a regular, non-empty file.
    """
    original = Path(path)
    try:
        resolved = original.resolve(strict=True)
    except (OSError, RuntimeError) as exc:
        raise ImportFileError(f"Cannot resolve path: {original}") from exc

    if not resolved.is_file():
        raise ImportFileError(f"Not a regular file: {resolved}")

    try:
        data = resolved.read_bytes()
    except OSError as exc:
        raise ImportFileError(f"Failed to read file: {resolved}") from exc

    if not data:
        raise ImportFileError(f"Import file is empty: {resolved}")

    starts = range(0, len(data), CHUNK_SIZE)
    last_start = starts[-1]
    return [
        ImportChunk(
            chunk=data[start : start + CHUNK_SIZE],
            last_chunk=start == last_start,
            format=format if start == 0 else None,
            conflict_mode=conflict_mode if start == 0 else None,
        )
        for start in starts
    ]