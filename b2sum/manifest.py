"""
Checksum manifest lines — parse and render.

Line layout:
  <hex digest><2-char separator><filename>        e.g. "ab12...  file.txt"

BSD-tag layout (render only):
  BLAKE2b[-<bits>] (<filename>) = <hex digest>
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, Iterator

from .config import MAX_BITS, MAX_DIGEST_BYTES, Policy
from .errors import FormatError

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

HEX_PREFIX_RE = re.compile(r"[0-9a-fA-F]*")
MIN_HASH_CHARS: int = 2
MAX_HASH_CHARS: int = MAX_DIGEST_BYTES * 2
SEPARATOR_CHARS: int = 2
COMMENT_PREFIX: str = "#"
ALGORITHM: str = "BLAKE2b"


@dataclass(frozen=True)
class ManifestEntry:
    digest: str
    filename: str

    @property
    def length(self) -> int:
        """Digest length in bytes implied by the hex string."""
        return len(self.digest) // 2


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------

def split_check_line(line: str) -> ManifestEntry:
    """
    Split one manifest line into its digest and filename.

    Raises FormatError("Invalid hash length: N") when the leading hex run is
    shorter than 2, odd, or longer than 128 characters, and
    FormatError("Malformed line") when no filename follows the separator.
    """
    hash_length = HEX_PREFIX_RE.match(line).end()
    if (
        hash_length < MIN_HASH_CHARS
        or hash_length % 2 != 0
        or hash_length > MAX_HASH_CHARS
    ):
        raise FormatError(f"Invalid hash length: {hash_length}")

    rest = line[hash_length:]
    if len(rest) < SEPARATOR_CHARS + 1:
        raise FormatError("Malformed line")

    return ManifestEntry(digest=line[:hash_length], filename=rest[SEPARATOR_CHARS:])


def iter_check_lines(lines: Iterable[str]) -> Iterator[tuple[int, str]]:
    """Yield ``(line_number, text)`` for every non-comment line, trimmed."""
    for number, raw in enumerate(lines, start=1):
        text = raw.strip()
        if text.startswith(COMMENT_PREFIX):
            continue
        yield number, text


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------

def format_line(digest: str, filename: str) -> str:
    return f"{digest}{' ' * SEPARATOR_CHARS}{filename}"


def format_tag_line(digest: str, filename: str, bits: int = MAX_BITS) -> str:
    suffix = "" if bits == MAX_BITS else f"-{bits}"
    return f"{ALGORITHM}{suffix} ({filename}) = {digest}"


def format_entry(policy: Policy, digest: str, filename: str) -> str:
    """Render a hash-mode output line in the format *policy* selects."""
    if policy.tag:
        return format_tag_line(digest, filename, policy.bits)
    return format_line(digest, filename)
