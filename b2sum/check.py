"""
Checksum verification: re-hash every file a manifest names and compare.

verify_manifest(policy, lines, manifest_name) → bool
    Walks the manifest in order and returns True if any error was observed
    (mismatch, unreadable file, or a malformed line under --strict).
    Per-line failures are reported and recorded, never raised.

check_entry(policy, entry) → Outcome
    Classifies a single parsed entry.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, TextIO

from .config import Policy
from .errors import FormatError, ReadError
from .integrity import hash_file
from .manifest import ManifestEntry, iter_check_lines, split_check_line
from .progress import NullProgress, ProgressTracker

log = logging.getLogger("b2sum.check")


class Outcome(Enum):
    MATCHED = "matched"
    MISMATCHED = "mismatched"
    MISSING = "missing"
    READ_ERROR = "read_error"
    MALFORMED = "malformed"
    SKIPPED = "skipped"        # missing file under --ignore-missing


@dataclass
class CheckSummary:
    errors: bool = False
    counts: dict[Outcome, int] = field(default_factory=dict)

    def record(self, outcome: Outcome) -> None:
        self.counts[outcome] = self.counts.get(outcome, 0) + 1


def check_entry(
    policy: Policy,
    entry: ManifestEntry,
    out: TextIO | None = None,
    progress: ProgressTracker | NullProgress | None = None,
) -> Outcome:
    """Recompute *entry*'s digest and report the result on *out*."""
    out = out or sys.stdout
    try:
        calculated = hash_file(entry.filename, entry.length, progress=progress)
    except ReadError as exc:
        if exc.missing and policy.ignore_missing:
            log.debug("Skipping missing file %s", entry.filename)
            return Outcome.SKIPPED
        if not policy.status:
            print(f"{entry.filename}: FAILED {exc.reason}", file=out)
        return Outcome.MISSING if exc.missing else Outcome.READ_ERROR

    # Exact comparison: an uppercase digest in the manifest never matches.
    matched = entry.digest == calculated
    if policy.print_result:
        print(f"{entry.filename}: {'OK' if matched else 'FAILED'}", file=out)
    return Outcome.MATCHED if matched else Outcome.MISMATCHED


def check_lines(
    policy: Policy,
    lines: Iterable[str],
    manifest_name: str = "-",
    out: TextIO | None = None,
    progress: ProgressTracker | NullProgress | None = None,
) -> CheckSummary:
    """Verify every manifest line and collect per-outcome counts."""
    out = out or sys.stdout
    summary = CheckSummary()

    for number, text in iter_check_lines(lines):
        try:
            entry = split_check_line(text)
        except FormatError as exc:
            summary.record(Outcome.MALFORMED)
            log.debug("%s:%d: malformed line %r", manifest_name, number, text)
            if policy.strict:
                summary.errors = True
            if policy.warn:
                print(f"{manifest_name}:{number}: {exc}", file=out)
            continue

        outcome = check_entry(policy, entry, out=out, progress=progress)
        summary.record(outcome)
        if outcome not in (Outcome.MATCHED, Outcome.SKIPPED):
            summary.errors = True

    log.info(
        "Checked %s: %s",
        manifest_name,
        ", ".join(f"{o.value}={n}" for o, n in summary.counts.items()) or "no entries",
    )
    return summary


def verify_manifest(
    policy: Policy,
    lines: Iterable[str],
    manifest_name: str = "-",
    out: TextIO | None = None,
    progress: ProgressTracker | NullProgress | None = None,
) -> bool:
    """Return True if verifying *lines* observed any error."""
    return check_lines(policy, lines, manifest_name, out=out, progress=progress).errors
