"""
Byte sources and chunked streaming reads.

open_source(name) → context manager yielding a binary file object
    ``-`` selects standard input (left open on exit); any other name is
    opened as a file and closed on every exit path.

read_chunks(reader, chunk_size) → Iterator[bytes]
    Memory-efficient generator over a binary reader. Yields nothing for an
    empty source.

open_manifest(name) → context manager yielding a text file object
    Same stdin / path selection, for manifest lines.
"""

from __future__ import annotations

import io
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import BinaryIO, Iterator, TextIO

from .config import CHUNK_SIZE, STDIN_NAME
from .errors import ReadError


@contextmanager
def open_source(name: str) -> Iterator[BinaryIO]:
    if name == STDIN_NAME:
        yield sys.stdin.buffer
        return

    try:
        fh = open(Path(name), "rb")
    except OSError as exc:
        raise ReadError(name, exc) from exc
    with fh:
        yield fh


@contextmanager
def open_manifest(name: str) -> Iterator[TextIO]:
    if name == STDIN_NAME:
        yield sys.stdin
        return

    try:
        fh = open(Path(name), "r", encoding="utf-8", newline=None)
    except OSError as exc:
        raise ReadError(name, exc) from exc
    with fh:
        yield fh


def read_chunks(reader: BinaryIO | io.RawIOBase, chunk_size: int = CHUNK_SIZE) -> Iterator[bytes]:
    """Yield raw chunks of *reader* up to *chunk_size* bytes each."""
    while True:
        block = reader.read(chunk_size)
        if not block:
            break
        yield block


def source_size(reader: BinaryIO) -> int | None:
    """Size in bytes of a regular file, or None for pipes and terminals."""
    try:
        if not reader.seekable():
            return None
        pos = reader.tell()
        end = reader.seek(0, io.SEEK_END)
        reader.seek(pos)
        return end - pos
    except (OSError, ValueError):
        return None
