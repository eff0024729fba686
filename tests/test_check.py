import io
import sys
import tempfile
import unittest
from pathlib import Path


ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from b2sum.check import Outcome, check_entry, check_lines, verify_manifest  # noqa: E402
from b2sum.config import Policy  # noqa: E402
from b2sum.integrity import hash_bytes  # noqa: E402
from b2sum.manifest import ManifestEntry, format_line  # noqa: E402


class VerifyManifestTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)
        self.good = self.tmp / "good.txt"
        self.good.write_bytes(b"hi\n")
        self.missing = str(self.tmp / "missing.txt")

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def _run(self, policy: Policy, lines: list[str]) -> tuple[bool, str]:
        out = io.StringIO()
        errors = verify_manifest(policy, lines, "SUMS", out=out)
        return errors, out.getvalue()

    def _line(self, path: Path | str, length: int = 64, data: bytes = b"hi\n") -> str:
        return format_line(hash_bytes(data, length), str(path)) + "\n"

    def test_matching_entry(self) -> None:
        errors, output = self._run(Policy(), [self._line(self.good)])
        self.assertFalse(errors)
        self.assertEqual(f"{self.good}: OK\n", output)

    def test_round_trip_every_width(self) -> None:
        for bits in range(8, 513, 8):
            errors, _ = self._run(Policy(bits=bits), [self._line(self.good, bits // 8)])
            self.assertFalse(errors, bits)

    def test_mismatch(self) -> None:
        errors, output = self._run(Policy(), [self._line(self.good, data=b"other")])
        self.assertTrue(errors)
        self.assertEqual(f"{self.good}: FAILED\n", output)

    def test_uppercase_digest_never_matches(self) -> None:
        line = format_line(hash_bytes(b"hi\n", 64).upper(), str(self.good))
        errors, output = self._run(Policy(), [line])
        self.assertTrue(errors)
        self.assertEqual(f"{self.good}: FAILED\n", output)

    def test_malformed_line_ignored_by_default(self) -> None:
        lines = [self._line(self.good), "not a checksum line\n"]
        errors, output = self._run(Policy(), lines)
        self.assertFalse(errors)
        self.assertEqual(f"{self.good}: OK\n", output)

    def test_malformed_line_fails_under_strict(self) -> None:
        lines = [self._line(self.good), "not a checksum line\n"]
        errors, _ = self._run(Policy(strict=True), lines)
        self.assertTrue(errors)

    def test_warn_reports_line_number(self) -> None:
        lines = ["# comment\n", "c0ae0  test\n", self._line(self.good)]
        errors, output = self._run(Policy(warn=True), lines)
        self.assertFalse(errors)
        self.assertEqual(
            f"SUMS:2: Invalid hash length: 5\n{self.good}: OK\n",
            output,
        )

    def test_comments_are_never_malformed(self) -> None:
        lines = ["# only a comment\n", "   #another\n"]
        errors, output = self._run(Policy(strict=True, warn=True), lines)
        self.assertFalse(errors)
        self.assertEqual("", output)

    def test_missing_file_fails(self) -> None:
        errors, output = self._run(Policy(), [self._line(self.missing)])
        self.assertTrue(errors)
        self.assertEqual(f"{self.missing}: FAILED No such file or directory\n", output)

    def test_ignore_missing_skips_silently(self) -> None:
        lines = [self._line(self.missing), self._line(self.good)]
        errors, output = self._run(Policy(ignore_missing=True), lines)
        self.assertFalse(errors)
        self.assertEqual(f"{self.good}: OK\n", output)

    def test_ignore_missing_does_not_hide_other_read_errors(self) -> None:
        errors, output = self._run(Policy(ignore_missing=True), [self._line(self.tmp)])
        self.assertTrue(errors)
        self.assertTrue(output.startswith(f"{self.tmp}: FAILED "))

    def test_quiet_hides_verdicts_but_not_read_failures(self) -> None:
        lines = [self._line(self.good), self._line(self.good, data=b"x"), self._line(self.missing)]
        errors, output = self._run(Policy(quiet=True), lines)
        self.assertTrue(errors)
        self.assertEqual(
            f"{self.missing}: FAILED No such file or directory\n",
            output,
        )

    def test_status_prints_nothing(self) -> None:
        for lines, expected in (
            ([self._line(self.good)], False),
            ([self._line(self.good, data=b"x")], True),
            ([self._line(self.missing)], True),
        ):
            errors, output = self._run(Policy(status=True), lines)
            self.assertEqual(expected, errors)
            self.assertEqual("", output)


class CheckEntryTests(unittest.TestCase):
    def test_outcomes(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "f"
            path.write_bytes(b"data")
            digest = hash_bytes(b"data", 16)
            out = io.StringIO()
            policy = Policy(status=True)

            self.assertEqual(Outcome.MATCHED, check_entry(policy, ManifestEntry(digest, str(path)), out))
            self.assertEqual(
                Outcome.MISMATCHED,
                check_entry(policy, ManifestEntry("00" * 16, str(path)), out),
            )
            self.assertEqual(
                Outcome.MISSING,
                check_entry(policy, ManifestEntry(digest, str(path) + ".gone"), out),
            )
            self.assertEqual(Outcome.READ_ERROR, check_entry(policy, ManifestEntry(digest, tmp), out))
            self.assertEqual(
                Outcome.SKIPPED,
                check_entry(Policy(ignore_missing=True), ManifestEntry(digest, str(path) + ".gone"), out),
            )
            self.assertEqual("", out.getvalue())

    def test_summary_counts(self) -> None:
        summary = check_lines(Policy(status=True), ["zz\n", "# c\n", "\n"], out=io.StringIO())
        self.assertFalse(summary.errors)
        self.assertEqual({Outcome.MALFORMED: 2}, summary.counts)


if __name__ == "__main__":
    unittest.main()
