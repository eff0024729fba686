"""
Error kinds raised by the digest engine and the manifest parser.

ReadError   — an I/O failure opening or reading a byte source.
FormatError — a malformed manifest line or an invalid digest length.

Callers tell the two apart with ``except ReadError`` / ``except FormatError``.
"""

from __future__ import annotations

import errno


class ChecksumError(Exception):
    """Base class for every error b2sum reports to the user."""


class ReadError(ChecksumError):
    """Raised when a file (or standard input) cannot be opened or read."""

    def __init__(self, filename: str, cause: OSError) -> None:
        self.filename = filename
        self.cause = cause
        super().__init__(f"{filename}: {self.reason}")

    @property
    def reason(self) -> str:
        return self.cause.strerror or str(self.cause)

    @property
    def missing(self) -> bool:
        """True when the file does not exist."""
        return isinstance(self.cause, FileNotFoundError) or self.cause.errno == errno.ENOENT


class FormatError(ChecksumError, ValueError):
    """Raised for a malformed checksum line or an invalid digest length."""
