"""Unit tests for strict and fallback blame-line parsing."""

from __future__ import annotations

import pytest

from git_intent.miner import parse_blame_fallback, parse_blame_output, parse_blame_strict
from git_intent.models import BlameRecord

CANONICAL = "abc1234 (Jane Doe 2024-03-01 10:00:00 -0700 42) return x + 1;"
EXPECTED = BlameRecord(
    commit_hash="abc1234",
    author="Jane Doe",
    date="2024-03-01",
    line_content="return x + 1;",
)


class TestStrictParser:
    def test_canonical_line(self):
        assert parse_blame_strict(CANONICAL) == EXPECTED

    def test_boundary_commit_caret_is_dropped(self):
        record = parse_blame_strict("^bd4de55 (Jane Doe 2024-03-01 10:00:00 -0700 2)   return x + 1;")
        assert record.commit_hash == "bd4de55"
        assert record.line_content == "return x + 1;"

    def test_padded_author_is_trimmed(self):
        record = parse_blame_strict("abc1234 (Jane Doe      2024-03-01 10:00:00 -0700 42) return x + 1;")
        assert record.author == "Jane Doe"

    def test_blank_source_line(self):
        record = parse_blame_strict("abc1234 (Jane Doe 2024-03-01 10:00:00 -0700 7)")
        assert record is not None
        assert record.line_content == ""

    def test_filename_column_from_renames(self):
        line = "^bd4de55 src/index.ts (Jane Doe 2024-03-01 10:00:00 -0700 2)   return x + 1;"
        record = parse_blame_strict(line)
        assert record == BlameRecord("bd4de55", "Jane Doe", "2024-03-01", "return x + 1;")

    def test_filename_column_keeps_calls_in_content(self):
        line = "^bd4de55 a.ts (Jane Doe 2024-03-01 10:00:00 -0700 2)   return inc(x);"
        assert parse_blame_strict(line).line_content == "return inc(x);"
        assert parse_blame_output(line).line_content == "return inc(x);"

    def test_author_with_parentheses(self):
        record = parse_blame_strict("abc1234 (Jane (JD) Doe 2024-03-01 10:00:00 -0700 42) return x + 1;")
        assert record.author == "Jane (JD) Doe"
        assert record.line_content == "return x + 1;"

    def test_short_date_format_is_rejected(self):
        assert parse_blame_strict("abc1234 (Jane Doe 2024-03-01 42) return x + 1;") is None


class TestFallbackParser:
    def test_agrees_with_strict_on_canonical_line(self):
        assert parse_blame_fallback(CANONICAL) == parse_blame_strict(CANONICAL) == EXPECTED

    def test_agrees_with_strict_on_boundary_commit(self):
        line = "^bd4de55 (Jane Doe 2024-03-01 10:00:00 -0700 2)   return x + 1;"
        assert parse_blame_fallback(line) == parse_blame_strict(line)

    def test_renamed_file_column(self):
        line = "^bd4de55 src/index.ts (Jane Doe      2024-03-01 10:00:00 -0700 2)   return x + 1;"
        record = parse_blame_fallback(line)
        assert record == BlameRecord("bd4de55", "Jane Doe", "2024-03-01", "return x + 1;")

    def test_author_with_parentheses(self):
        line = "bc652242 src/main.ts  (Bob (B) Smith 2026-10-18 19:09:34 +0000 4) x"
        record = parse_blame_fallback(line)
        assert record.author == "Bob (B) Smith"
        assert record.date == "2026-10-18"
        assert record.line_content == "x"

    @pytest.mark.parametrize(
        "line",
        [
            "abc1234 Jane Doe 2024-03-01 10:00:00 -0700 42 return x + 1;",
            "abc1234 (Jane Doe 2024-03-01 10:00:00 -0700 42 return x + 1;",
            "abc1234 Jane Doe 2024-03-01 42) return x + 1;",
        ],
    )
    def test_missing_parenthesis_is_unrecoverable(self, line):
        assert parse_blame_fallback(line) is None

    def test_missing_date_is_unrecoverable(self):
        assert parse_blame_fallback("abc1234 (Jane Doe yesterday 42) return x;") is None

    def test_missing_author_is_unrecoverable(self):
        assert parse_blame_fallback("abc1234 (2024-03-01 10:00:00 -0700 42) return x;") is None


class TestParseBlameOutput:
    def test_trailing_newline_is_ignored(self):
        assert parse_blame_output(CANONICAL + "\n") == EXPECTED

    def test_uses_fallback_when_strict_fails(self):
        line = "abc1234 (Jane Doe 2024-03-01 42) return x + 1;"
        assert parse_blame_strict(line) is None
        assert parse_blame_output(line) == EXPECTED

    @pytest.mark.parametrize("output", ["", "   \n", None])
    def test_empty_output(self, output):
        assert parse_blame_output(output) is None

    def test_garbage_output(self):
        assert parse_blame_output("not blame output at all") is None
