"""
Tests for the snapshot parser (Layer 1: Raw Dump → Snapshot).

We need to:
1. Split NAME=value lines, keeping everything after the first '='
2. Drop lines that are not identifier assignments
3. Extract the path-list variable into Snapshot.search_path
4. Decode UTF-8 / UTF-16 dumps and normalize CRLF
"""

import pytest
from vs2sh.parser import (
    parse_snapshot_string,
    parse_snapshot_file,
    read_snapshot_text,
    normalize_line_endings,
    SnapshotEncodingError,
)
from vs2sh.model import Snapshot, Variable


class TestAssignments:
    """Test parsing of plain assignments."""

    def test_single_assignment(self):
        snapshot = parse_snapshot_string("A=1\nPATH=/bin\n")
        assert snapshot.variables == [Variable("A", "1")]

    def test_value_keeps_everything_after_first_equals(self):
        snapshot = parse_snapshot_string("OPTS=a=b=c\nPATH=/bin\n")
        assert snapshot.get_value("OPTS") == "a=b=c"

    def test_empty_value(self):
        snapshot = parse_snapshot_string("EMPTY=\nPATH=/bin\n")
        assert snapshot.get_value("EMPTY") == ""

    def test_source_order_preserved(self):
        snapshot = parse_snapshot_string("C=3\nA=1\nB=2\n")
        assert snapshot.names() == ["C", "A", "B"]

    def test_single_letter_names_are_valid(self):
        snapshot = parse_snapshot_string("A=1\n_=x\n")
        assert snapshot.names() == ["A", "_"]

    def test_duplicate_name_keeps_first(self):
        snapshot = parse_snapshot_string("A=1\nA=2\n")
        assert snapshot.variables == [Variable("A", "1")]

    def test_empty_text(self):
        snapshot = parse_snapshot_string("")
        assert isinstance(snapshot, Snapshot)
        assert snapshot.variables == []
        assert snapshot.search_path is None


class TestMalformedLines:
    """Malformed lines are silently dropped, never fatal."""

    @pytest.mark.parametrize("line", [
        "1ABC=x",
        "ProgramFiles(x86)=C:\\Program Files (x86)",
        "=C:=C:\\",
        "no equals sign here",
        "  A=1",
        "A-B=1",
    ])
    def test_line_dropped(self, line):
        snapshot = parse_snapshot_string(f"GOOD=1\n{line}\nPATH=/bin\n")
        assert snapshot.names() == ["GOOD"]

    def test_continuation_of_multiline_value_dropped(self):
        text = "MSG=first line\nsecond line\nB=2\n"
        snapshot = parse_snapshot_string(text)
        assert snapshot.names() == ["MSG", "B"]
        assert snapshot.get_value("MSG") == "first line"


class TestSearchPath:
    """Test extraction of the path-list variable."""

    def test_path_extracted_in_order(self):
        snapshot = parse_snapshot_string("PATH=/usr/bin:/opt/tool/bin:/bin\n")
        assert snapshot.search_path == ["/usr/bin", "/opt/tool/bin", "/bin"]

    def test_path_removed_from_variables(self):
        snapshot = parse_snapshot_string("A=1\nPATH=/bin\nB=2\n")
        assert "PATH" not in snapshot.names()
        assert snapshot.get_variable("PATH") is None

    def test_missing_path_is_none(self):
        snapshot = parse_snapshot_string("A=1\n")
        assert snapshot.search_path is None

    def test_empty_path_is_empty_list(self):
        snapshot = parse_snapshot_string("PATH=\n")
        assert snapshot.search_path == []

    def test_empty_entries_dropped(self):
        snapshot = parse_snapshot_string("PATH=/a::/b:\n")
        assert snapshot.search_path == ["/a", "/b"]

    def test_custom_variable_and_separator(self):
        text = "Path=C:\\Windows;C:\\Tools\nPATH_LIKE=x\n"
        snapshot = parse_snapshot_string(text, path_variable="Path", path_separator=";")
        assert snapshot.search_path == ["C:\\Windows", "C:\\Tools"]
        assert snapshot.names() == ["PATH_LIKE"]

    def test_path_name_is_case_sensitive(self):
        snapshot = parse_snapshot_string("Path=/x\n")
        assert snapshot.search_path is None
        assert snapshot.names() == ["Path"]


class TestLineEndings:

    def test_crlf(self):
        assert normalize_line_endings("A=1\r\nB=2\r\n") == "A=1\nB=2\n"

    def test_lone_cr(self):
        assert normalize_line_endings("A=1\rB=2") == "A=1\nB=2"


class TestFiles:
    """Test reading dump files in the encodings cmd and PowerShell produce."""

    CONTENT = "A=1\r\nPATH=/usr/bin:/bin\r\nB=2\r\n"

    @pytest.mark.parametrize("encoding", ["utf-8", "utf-8-sig", "utf-16", "utf-16-le", "utf-16-be"])
    def test_encodings(self, tmp_path, encoding):
        f = tmp_path / "env.txt"
        f.write_bytes(self.CONTENT.encode(encoding))

        snapshot = parse_snapshot_file(str(f))
        assert snapshot.names() == ["A", "B"]
        assert snapshot.search_path == ["/usr/bin", "/bin"]

    def test_text_is_lf_terminated(self, tmp_path):
        f = tmp_path / "env.txt"
        f.write_bytes(self.CONTENT.encode("utf-8"))
        assert "\r" not in read_snapshot_text(str(f))

    def test_file_without_path_cannot_be_decoded(self, tmp_path):
        f = tmp_path / "env.txt"
        f.write_bytes(b"A=1\nB=2\n")
        with pytest.raises(SnapshotEncodingError):
            read_snapshot_text(str(f))

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            parse_snapshot_file(str(tmp_path / "nope.txt"))
