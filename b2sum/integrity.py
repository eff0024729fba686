"""
Integrity helpers — BLAKE2b hashing (RFC 7693).

hash_bytes(data, length)    → str   (lowercase hex, 2*length chars)
hash_reader(reader, length) → str   (streams the reader to exhaustion)
hash_file(name, length)     → str   (``-`` hashes standard input)

The only BLAKE2b parameter used is the output length; no key, salt or
personalization.
"""

from __future__ import annotations

import hashlib
import logging
from typing import BinaryIO

from .config import CHUNK_SIZE, MAX_DIGEST_BYTES, STDIN_NAME
from .errors import FormatError, ReadError
from .progress import NullProgress, ProgressTracker
from .transfer import open_source, read_chunks, source_size

log = logging.getLogger("b2sum.integrity")


def _new_state(length: int):
    if not 1 <= length <= MAX_DIGEST_BYTES:
        raise FormatError(f"invalid digest length: {length} bytes (must be 1-{MAX_DIGEST_BYTES})")
    return hashlib.blake2b(digest_size=length)


def hash_bytes(data: bytes, length: int = MAX_DIGEST_BYTES) -> str:
    """Return the BLAKE2b hex digest of *data* with a *length*-byte output."""
    state = _new_state(length)
    state.update(data)
    return state.hexdigest()


def hash_reader(
    reader: BinaryIO,
    length: int = MAX_DIGEST_BYTES,
    *,
    name: str = STDIN_NAME,
    chunk_size: int = CHUNK_SIZE,
    progress: ProgressTracker | NullProgress | None = None,
) -> str:
    """
    Fold every chunk of *reader* into a BLAKE2b state and return its hex digest.

    A failing read raises ReadError for *name*; the computation is not retried.
    """
    state = _new_state(length)
    progress = progress or NullProgress()
    total = 0
    with progress.file(name, source_size(reader)) as fp:
        try:
            for chunk in read_chunks(reader, chunk_size):
                state.update(chunk)
                total += len(chunk)
                fp.advance(len(chunk))
        except OSError as exc:
            raise ReadError(name, exc) from exc
    log.debug("Hashed %s (%d bytes, %d-byte digest)", name, total, length)
    return state.hexdigest()


def hash_file(
    name: str,
    length: int = MAX_DIGEST_BYTES,
    *,
    chunk_size: int = CHUNK_SIZE,
    progress: ProgressTracker | NullProgress | None = None,
) -> str:
    """Hash the file *name*, or standard input when *name* is ``-``."""
    with open_source(name) as reader:
        return hash_reader(reader, length, name=name, chunk_size=chunk_size, progress=progress)
