"""Tests for the line-oriented record format."""

import pytest

from semnote.domain import AnnotatedEntry, Classification, SemanticVersion, VersionedEntry
from semnote.exit_codes import FormatError
from semnote.wire import format_record, parse_record, read_annotated, read_versioned


class TestReadAnnotated:
    """Tests for read_annotated."""

    def test_reads_records(self):
        lines = ["c1 PATCH\n", "c2 MAJOR\n"]
        assert list(read_annotated(lines)) == [
            AnnotatedEntry("c1", Classification.PATCH),
            AnnotatedEntry("c2", Classification.MAJOR),
        ]

    def test_skips_blank_lines(self):
        lines = ["\n", "c1 MINOR\n", "   \n"]
        assert list(read_annotated(lines)) == [AnnotatedEntry("c1", Classification.MINOR)]

    def test_rejects_unknown_classification(self):
        with pytest.raises(FormatError) as exc_info:
            list(read_annotated(["c1 PATCH\n", "c2 minor\n"]))
        assert "Line 2" in str(exc_info.value)

    @pytest.mark.parametrize("line", [
        "c1\n",
        "c1 PATCH extra\n",
        "PATCH\n",
        "c1\tPATCH\n",
        "c1  PATCH\n",
        " c1 PATCH\n",
        "c1 PATCH \n",
    ])
    def test_rejects_malformed_record(self, line):
        with pytest.raises(FormatError):
            list(read_annotated([line]))

    def test_is_lazy(self):
        """Test records before a bad line are produced first."""
        reader = read_annotated(["c1 PATCH\n", "broken\n"])
        assert next(reader) == AnnotatedEntry("c1", Classification.PATCH)
        with pytest.raises(FormatError):
            next(reader)


class TestReadVersioned:
    """Tests for read_versioned."""

    def test_reads_records(self):
        assert list(read_versioned(["c1 1.2.4\n"])) == [VersionedEntry("c1", SemanticVersion(1, 2, 4))]

    def test_rejects_bad_version(self):
        with pytest.raises(FormatError):
            list(read_versioned(["c1 1.2\n"]))


class TestFormat:
    """Tests for format_record and parse_record."""

    def test_format_annotated(self):
        assert format_record(AnnotatedEntry("abc", Classification.MAJOR)) == "abc MAJOR"

    def test_format_versioned(self):
        assert format_record(VersionedEntry("abc", SemanticVersion(0, 1, 0))) == "abc 0.1.0"

    def test_parse_record(self):
        assert parse_record("abc 2.0.0", SemanticVersion.parse) == ("abc", SemanticVersion(2, 0, 0))

    def test_parse_record_accepts_crlf(self):
        assert parse_record("abc MINOR\r\n", Classification.parse) == ("abc", Classification.MINOR)

    def test_parse_record_reports_line(self):
        with pytest.raises(FormatError) as exc_info:
            parse_record("abc\tMINOR\n", Classification.parse, lineno=3)
        assert str(exc_info.value).startswith("Line 3:")
