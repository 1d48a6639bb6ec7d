"""
License file parser tests.

Invariants Tested:
------------------
- Entries come back in file order
- Blank lines are skipped wherever they appear
- A zero-byte file is a valid empty store
- Input ending mid-line is corruption, reported with the partial line
- Only "\\n" terminates a line
- A missing file is an open error, not an empty store
"""

import io

import pytest

from soupnazi.errors import CorruptFileError, OpenError, ReadError
from soupnazi.license_parser import ParseState, next_state, parse_licenses, parse_stream


def _write(path, data: bytes):
    path.write_bytes(data)
    return str(path)


# =============================================================================
# State machine
# =============================================================================

class TestNextState:
    """Parser transitions."""

    def test_eof_before_any_line_is_empty_file(self):
        assert next_state(ParseState.READING, "") is ParseState.EMPTY_FILE

    def test_eof_after_line_is_clean(self):
        assert next_state(ParseState.LINE_COMPLETE, "") is ParseState.CLEAN_EOF

    def test_terminated_line_completes(self):
        assert next_state(ParseState.READING, "abc\n") is ParseState.LINE_COMPLETE
        assert next_state(ParseState.LINE_COMPLETE, "\n") is ParseState.LINE_COMPLETE

    def test_unterminated_line_is_dirty(self):
        assert next_state(ParseState.READING, "abc") is ParseState.DIRTY_EOF
        assert next_state(ParseState.LINE_COMPLETE, "abc") is ParseState.DIRTY_EOF

    @pytest.mark.parametrize(
        "state", [ParseState.EMPTY_FILE, ParseState.CLEAN_EOF, ParseState.DIRTY_EOF]
    )
    def test_terminal_states_have_no_transition(self, state):
        with pytest.raises(ValueError, match="terminal state"):
            next_state(state, "abc\n")


# =============================================================================
# Stream parsing
# =============================================================================

class TestParseStream:
    """Parsing from an open text stream."""

    def test_entries_in_order(self):
        stream = io.StringIO("a\nb\nc\n", newline="\n")
        assert parse_stream(stream) == ["a", "b", "c"]

    def test_blank_lines_skipped(self):
        stream = io.StringIO("\na\n\n\nb\n\n", newline="\n")
        assert parse_stream(stream) == ["a", "b"]

    def test_empty_stream(self):
        assert parse_stream(io.StringIO("", newline="\n")) == []

    def test_only_blank_lines(self):
        assert parse_stream(io.StringIO("\n\n", newline="\n")) == []

    def test_partial_last_line_is_corrupt(self):
        stream = io.StringIO("a\nb\npart", newline="\n")
        with pytest.raises(CorruptFileError) as exc_info:
            parse_stream(stream, "mem")
        assert exc_info.value.line == "part"
        assert exc_info.value.path == "mem"

    def test_single_unterminated_line_is_corrupt(self):
        with pytest.raises(CorruptFileError):
            parse_stream(io.StringIO("abc.def.ghi", newline="\n"))

    def test_duplicates_are_kept(self):
        """The parser reports the file as-is; dedup is an add concern."""
        stream = io.StringIO("a\na\n", newline="\n")
        assert parse_stream(stream) == ["a", "a"]


# =============================================================================
# File parsing
# =============================================================================

class TestParseLicenses:
    """Parsing from a license file on disk."""

    def test_zero_byte_file_is_empty_store(self, tmp_path):
        path = _write(tmp_path / "licenses", b"")
        assert parse_licenses(path) == []

    def test_entries_in_order(self, tmp_path):
        path = _write(tmp_path / "licenses", b"e1\ne2\ne3\n")
        assert parse_licenses(path) == ["e1", "e2", "e3"]

    def test_interleaved_blank_lines(self, tmp_path):
        path = _write(tmp_path / "licenses", b"\ne1\n\ne2\n\n\ne3\n")
        assert parse_licenses(path) == ["e1", "e2", "e3"]

    def test_missing_final_newline_is_corrupt(self, tmp_path):
        path = _write(tmp_path / "licenses", b"e1\ne2")
        with pytest.raises(CorruptFileError, match="corrupted") as exc_info:
            parse_licenses(path)
        assert exc_info.value.line == "e2"

    def test_crlf_keeps_carriage_return(self, tmp_path):
        """Only \\n terminates a line; \\r belongs to the token."""
        path = _write(tmp_path / "licenses", b"e1\r\ne2\r\n")
        assert parse_licenses(path) == ["e1\r", "e2\r"]

    def test_lone_carriage_return_is_not_a_terminator(self, tmp_path):
        path = _write(tmp_path / "licenses", b"a\rb\nc\n")
        assert parse_licenses(path) == ["a\rb", "c"]

    def test_utf8_tokens(self, tmp_path):
        path = _write(tmp_path / "licenses", "café\n".encode("utf-8"))
        assert parse_licenses(path) == ["café"]

    def test_missing_file_is_open_error(self, tmp_path):
        path = str(tmp_path / "nope" / "licenses")
        with pytest.raises(OpenError) as exc_info:
            parse_licenses(path)
        assert exc_info.value.path == path
        assert isinstance(exc_info.value.cause, FileNotFoundError)

    def test_directory_is_open_error(self, tmp_path):
        with pytest.raises(OpenError):
            parse_licenses(str(tmp_path))

    def test_invalid_utf8_is_read_error(self, tmp_path):
        path = _write(tmp_path / "licenses", b"ok\n\xff\xfe\n")
        with pytest.raises(ReadError) as exc_info:
            parse_licenses(path)
        assert isinstance(exc_info.value.cause, UnicodeDecodeError)

    def test_trace_is_logged(self, tmp_path, caplog):
        path = _write(tmp_path / "licenses", b"e1\n")
        with caplog.at_level("INFO", logger="soupnazi.license_parser"):
            parse_licenses(path)
        assert f"Extracting licenses from {path}" in caplog.text
