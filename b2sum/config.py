"""
Runtime configuration: constants and the per-invocation Policy.

Policy is built once from the command line and passed explicitly to the
check controller and the formatter; nothing reads it from module state.
"""

from __future__ import annotations

from dataclasses import dataclass

from .errors import FormatError

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

PROG: str = "b2sum"
CHUNK_SIZE: int = 64 * 1024          # bytes per read() while hashing
MAX_DIGEST_BYTES: int = 64           # BLAKE2b maximum output size
MAX_BITS: int = MAX_DIGEST_BYTES * 8
DEFAULT_BITS: int = MAX_BITS
STDIN_NAME: str = "-"


# ---------------------------------------------------------------------------
# Policy
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Policy:
    ignore_missing: bool = False
    quiet: bool = False
    status: bool = False
    strict: bool = False
    warn: bool = False
    tag: bool = False
    bits: int = DEFAULT_BITS

    @property
    def length(self) -> int:
        """Requested digest length in bytes."""
        return bits_to_length(self.bits)

    @property
    def print_result(self) -> bool:
        return not (self.quiet or self.status)


def bits_to_length(bits: int) -> int:
    """Convert a digest width in bits to bytes, rejecting invalid widths."""
    if bits <= 0 or bits > MAX_BITS:
        raise FormatError(f"invalid length: {bits} (must be between 8 and {MAX_BITS})")
    if bits % 8 != 0:
        raise FormatError(f"invalid length: {bits} (must be a multiple of 8)")
    return bits // 8

