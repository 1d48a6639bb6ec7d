"""
Soupnazi Licensing - License File Parser

Strict line-oriented reader for the license file.

FILE FORMAT:
------------
- UTF-8 text
- One token per line
- Every line ends with "\\n", the last one included
- Blank lines are ignored
- No header, no footer, no checksum

PARSER STATES:
--------------
READING -> LINE_COMPLETE -> LINE_COMPLETE ... -> CLEAN_EOF | DIRTY_EOF
READING -> DIRTY_EOF (single unterminated line)
READING -> EMPTY_FILE (zero-byte file)

EMPTY_FILE and CLEAN_EOF are successful endings.
DIRTY_EOF (input ended mid-line) means the file is corrupt.
Corruption = loud failure (no healing).
"""

import logging
from enum import Enum
from typing import IO, List

from .errors import CorruptFileError, OpenError, ReadError


logger = logging.getLogger(__name__)

LINE_TERMINATOR = "\n"


class ParseState(str, Enum):
    """Parser state after consuming one read from the stream."""
    READING = "reading"
    LINE_COMPLETE = "line_complete"
    EMPTY_FILE = "empty_file"
    CLEAN_EOF = "clean_eof"
    DIRTY_EOF = "dirty_eof"


TERMINAL_STATES = frozenset(
    {ParseState.EMPTY_FILE, ParseState.CLEAN_EOF, ParseState.DIRTY_EOF}
)


def next_state(state: ParseState, raw: str) -> ParseState:
    """
    Compute the parser transition for one raw read.

    Args:
        state: Current state (must not be terminal)
        raw: Result of stream.readline(), "" at end of input

    Returns:
        The next state
    """
    if state in TERMINAL_STATES:
        raise ValueError(f"No transition out of terminal state {state.value}")
    if raw == "":
        # Nothing was read before end of input: zero-byte file
        if state is ParseState.READING:
            return ParseState.EMPTY_FILE
        return ParseState.CLEAN_EOF
    if raw.endswith(LINE_TERMINATOR):
        return ParseState.LINE_COMPLETE
    return ParseState.DIRTY_EOF


def parse_stream(stream: IO[str], path: str = "<stream>", log: logging.Logger = logger) -> List[str]:
    """
    Parse license entries from an open text stream.

    The stream must be opened with newline="\\n" so that only "\\n" splits
    lines; any "\\r" stays part of the token.

    Args:
        stream: Text stream positioned at the start of the file
        path: Name used in errors and log messages
        log: Logger receiving a trace of every line read

    Returns:
        Non-blank entries in file order

    Raises:
        CorruptFileError: Input ended without a final line terminator
    """
    entries: List[str] = []
    state = ParseState.READING

    while True:
        raw = stream.readline()
        state = next_state(state, raw)

        if state is ParseState.EMPTY_FILE:
            log.info(f"License file {path} is empty")
            return entries
        if state is ParseState.CLEAN_EOF:
            return entries
        if state is ParseState.DIRTY_EOF:
            raise CorruptFileError(path, raw)

        log.info(f"  Raw line: {raw!r}")
        line = raw[: -len(LINE_TERMINATOR)]
        if not line:
            log.debug("  Skipping blank line")
        else:
            log.info(f"  License: {line!r}")
            entries.append(line)


def parse_licenses(path: str, log: logging.Logger = logger) -> List[str]:
    """
    Read every license entry from a license file.

    A missing file is an error, not an empty store. Callers that want the
    file created must go through LicenseStore.add_license().

    Args:
        path: License file path
        log: Logger receiving a trace of the parse

    Returns:
        Non-blank entries in file order

    Raises:
        OpenError: File could not be opened
        ReadError: I/O or decoding failure while reading
        CorruptFileError: File does not end on a line boundary
    """
    try:
        f = open(path, "r", encoding="utf-8", newline="\n")
    except OSError as e:
        raise OpenError(path, e) from e

    with f:
        log.info(f"Extracting licenses from {path}")
        try:
            return parse_stream(f, path, log)
        except (OSError, UnicodeDecodeError) as e:
            raise ReadError(path, e) from e
