"""b2sum — print or check BLAKE2b (RFC 7693) checksums."""

from .check import Outcome, check_entry, verify_manifest
from .errors import ChecksumError, FormatError, ReadError
from .integrity import hash_bytes, hash_file, hash_reader
from .manifest import ManifestEntry, format_line, format_tag_line, split_check_line

__version__ = "0.1.0"

__all__ = [
    "ChecksumError",
    "FormatError",
    "ManifestEntry",
    "Outcome",
    "ReadError",
    "__version__",
    "check_entry",
    "format_line",
    "format_tag_line",
    "hash_bytes",
    "hash_file",
    "hash_reader",
    "split_check_line",
    "verify_manifest",
]
