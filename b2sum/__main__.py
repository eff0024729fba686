"""
b2sum — BLAKE2b checksums  CLI entry point.

Usage:
    python -m b2sum [options] [FILE...]
    python -m b2sum --check [options] [FILE]
"""

from __future__ import annotations

import argparse
import logging
import sys

from . import __version__
from .check import verify_manifest
from .config import DEFAULT_BITS, PROG, STDIN_NAME, Policy, bits_to_length
from .errors import FormatError, ReadError
from .integrity import hash_file
from .manifest import format_entry
from .progress import NullProgress, ProgressTracker
from .transfer import open_manifest

log = logging.getLogger("b2sum.cli")

DESCRIPTION = """\
Print or check BLAKE2 (512-bit) checksums.
With no FILE, or when FILE is -, read standard input."""

EPILOG = """\
The sums are computed as described in RFC 7693.  When checking, the input
should be a former output of this program.  The default mode is to print
a line with checksum and name for each FILE."""


# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------

def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        format="%(asctime)s %(levelname)-7s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        level=level,
        stream=sys.stderr,
    )


# ---------------------------------------------------------------------------
# Modes
# ---------------------------------------------------------------------------

def cmd_hash(policy: Policy, filenames: list[str], progress: ProgressTracker | NullProgress) -> int:
    """Print a checksum line for every file; the first read error is fatal."""
    for filename in filenames:
        try:
            digest = hash_file(filename, policy.length, progress=progress)
        except ReadError as exc:
            print(f"{PROG}: {exc}", file=sys.stderr)
            return 1
        print(format_entry(policy, digest, filename))
    return 0


def cmd_check(policy: Policy, manifest_name: str, progress: ProgressTracker | NullProgress) -> int:
    """Verify the manifest *manifest_name*; exit status 1 if anything failed."""
    try:
        with open_manifest(manifest_name) as lines:
            errors = verify_manifest(policy, lines, manifest_name, progress=progress)
    except ReadError as exc:
        print(f"{PROG}: {exc}", file=sys.stderr)
        return 1
    except (OSError, UnicodeDecodeError) as exc:
        print(f"{PROG}: {manifest_name}: {exc}", file=sys.stderr)
        return 1
    return 1 if errors else 0


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=PROG,
        description=DESCRIPTION,
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("filenames", nargs="*", metavar="FILE")
    parser.add_argument("-c", "--check", action="store_true",
                        help="read BLAKE2 sums from the FILEs and check them")
    parser.add_argument("-l", "--length", type=int, default=DEFAULT_BITS, metavar="BITS",
                        help="digest length in bits; must not exceed the maximum for the "
                             "blake2 algorithm and must be a multiple of 8 (default %(default)s)")
    parser.add_argument("--tag", action="store_true", help="create a BSD-style checksum")
    parser.add_argument("--version", action="version", version=f"{PROG} {__version__}",
                        help="output version information and exit")
    parser.add_argument("--verbose", action="store_true", help="enable debug logging on stderr")
    parser.add_argument("--progress", action="store_true",
                        help="show a progress bar on stderr while hashing")

    verify = parser.add_argument_group(
        "verification",
        "The following five options are useful only when verifying checksums:",
    )
    verify.add_argument("--ignore-missing", action="store_true",
                        help="don't fail or report status for missing files")
    verify.add_argument("--quiet", action="store_true",
                        help="don't print OK for each successfully verified file")
    verify.add_argument("--status", action="store_true",
                        help="don't output anything, status code shows success")
    verify.add_argument("--strict", action="store_true",
                        help="exit non-zero for improperly formatted checksum lines")
    verify.add_argument("-w", "--warn", action="store_true",
                        help="warn about improperly formatted checksum lines")

    return parser


def _policy(args: argparse.Namespace) -> Policy:
    return Policy(
        ignore_missing=args.ignore_missing,
        quiet=args.quiet,
        status=args.status,
        strict=args.strict,
        warn=args.warn,
        tag=args.tag,
        bits=args.length,
    )


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    _setup_logging(args.verbose)

    try:
        bits_to_length(args.length)
    except FormatError as exc:
        parser.error(str(exc))

    policy = _policy(args)
    filenames = args.filenames or [STDIN_NAME]
    log.debug("Policy: %s", policy)

    progress: ProgressTracker | NullProgress
    if args.progress:
        progress = ProgressTracker(total_files=None if args.check else len(filenames))
        progress.start()
    else:
        progress = NullProgress()

    try:
        if args.check:
            return cmd_check(policy, filenames[0], progress)
        return cmd_hash(policy, filenames, progress)
    finally:
        progress.stop()


if __name__ == "__main__":
    sys.exit(main())
