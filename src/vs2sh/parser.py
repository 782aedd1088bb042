"""
Snapshot Parser for vs2sh (Layer 1: Raw Dump → Snapshot).

Converts the output of `set`/`env` captured in a shell into a Snapshot.

Dump Format:
    NAME=value
    NAME=value
    ...

Notes:
    - The value is everything after the first '='
    - Lines that are not identifier assignments are dropped
    - The path-list variable is split into Snapshot.search_path
    - Dumps written by cmd or PowerShell may be UTF-16 and use CRLF;
      read_snapshot_text() takes care of both
"""

import logging
import os
import re
from typing import List, Optional, Set

from vs2sh.model import Snapshot, Variable

logger = logging.getLogger(__name__)


class SnapshotEncodingError(Exception):
    """Raised when a dump file cannot be decoded with any supported encoding."""
    pass


_ASSIGNMENT_RE = re.compile(r'^([A-Za-z_][A-Za-z0-9_]*)=(.*)$')

# Tried in this order; the first decoding that contains the path-list
# variable is accepted.
_ENCODINGS = ('utf-8', 'utf-16', 'utf-16-le', 'utf-16-be')


def normalize_line_endings(text: str) -> str:
    """Convert CRLF and lone CR line endings to LF."""
    return text.replace('\r\n', '\n').replace('\r', '\n')


def _decode(data: bytes, path_variable: str) -> str:
    """Decode dump bytes, probing the supported encodings."""
    marker = re.compile(r'^' + re.escape(path_variable) + '=', re.MULTILINE)

    for encoding in _ENCODINGS:
        try:
            text = data.decode(encoding)
        except UnicodeDecodeError:
            continue
        text = text.lstrip('\ufeff')
        if marker.search(text):
            logger.debug(f"Decoded dump as {encoding}")
            return text

    raise SnapshotEncodingError(
        f"failed to decode dump with any of {', '.join(_ENCODINGS)}"
    )


def read_snapshot_text(filepath: str, path_variable: str = "PATH") -> str:
    """
    Read a dump file and return normalized, LF-terminated text.

    Args:
        filepath: Path to the dump file
        path_variable: Variable whose presence confirms a correct decoding

    Returns:
        Decoded text with LF line endings

    Raises:
        FileNotFoundError: If file doesn't exist
        SnapshotEncodingError: If no supported encoding fits
    """
    try:
        with open(filepath, 'rb') as f:
            data = f.read()
    except FileNotFoundError:
        raise FileNotFoundError(f"Environment file not found: {filepath}")

    try:
        text = _decode(data, path_variable)
    except SnapshotEncodingError as e:
        raise SnapshotEncodingError(f"{filepath}: {e}")

    return normalize_line_endings(text)


def _split_search_path(value: str, separator: str) -> List[str]:
    return [entry for entry in value.split(separator) if entry]


def parse_snapshot_string(
    text: str,
    path_variable: str = "PATH",
    path_separator: str = ":",
) -> Snapshot:
    """
    Parse dump text into a Snapshot.

    Parsing never fails: malformed lines are dropped.

    Args:
        text: Normalized dump text, one assignment per line
        path_variable: Name of the path-list variable
        path_separator: Separator between path-list entries

    Returns:
        Snapshot with variables in source order
    """
    variables: List[Variable] = []
    seen: Set[str] = set()
    search_path: Optional[List[str]] = None
    dropped = 0

    for line in text.split('\n'):
        if not line:
            continue

        match = _ASSIGNMENT_RE.match(line)
        if match is None:
            dropped += 1
            continue

        name, value = match.group(1), match.group(2)

        if name == path_variable:
            if search_path is None:
                search_path = _split_search_path(value, path_separator)
            continue

        if name in seen:
            logger.debug(f"Ignoring duplicate assignment of {name}")
            continue

        seen.add(name)
        variables.append(Variable(name=name, value=value))

    if dropped:
        logger.debug(f"Dropped {dropped} malformed dump line(s)")

    return Snapshot(variables=variables, search_path=search_path)


def parse_snapshot_file(
    filepath: str,
    path_variable: str = "PATH",
    path_separator: str = ":",
) -> Snapshot:
    """
    Parse a dump file into a Snapshot.

    Args:
        filepath: Path to the dump file
        path_variable: Name of the path-list variable
        path_separator: Separator between path-list entries

    Returns:
        Snapshot object

    Raises:
        FileNotFoundError: If file doesn't exist
        SnapshotEncodingError: If the file cannot be decoded
    """
    text = read_snapshot_text(filepath, path_variable=path_variable)
    snapshot = parse_snapshot_string(
        text, path_variable=path_variable, path_separator=path_separator
    )
    logger.info(
        f"Read {len(snapshot.variables)} variables from {os.path.basename(filepath)}"
    )
    return snapshot


__all__ = [
    "parse_snapshot_string",
    "parse_snapshot_file",
    "read_snapshot_text",
    "normalize_line_endings",
    "SnapshotEncodingError",
]
