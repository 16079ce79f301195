"""Parsers for the plain text tables printed by pivpn."""

import re
from typing import List, Pattern

from .exceptions import PiVPNParseError
from .models import BackupResult, ConnectionRecord, UserRecord

HEADER_LINES = 2

# pivpn pads columns with spaces; a single space can occur inside a value
FIELD_DELIMITER = re.compile(r" {2,}")

CONNECTION_FIELDS = 6
USER_FIELDS = 3


def parse_table(
        output: str,
        field_count: int,
        header_lines: int = HEADER_LINES,
        delimiter: Pattern[str] = FIELD_DELIMITER,
) -> List[List[str]]:
    """
    Split tabular pivpn output into rows of fields.

    The first `header_lines` lines and the final line are dropped, blank
    lines are skipped and every other line is split on `delimiter`.

    Args:
        output: Captured stdout
        field_count: Number of fields each row must have
        header_lines: Number of leading lines to skip
        delimiter: Compiled pattern separating fields

    Returns:
        List of rows, each a list of `field_count` strings

    Raises:
        PiVPNParseError: if a row does not have `field_count` fields
    """
    lines = output.split("\n")
    rows = []
    for line in lines[header_lines:-1]:
        if not line.strip():
            continue
        fields = delimiter.split(line.strip())
        if len(fields) != field_count:
            raise PiVPNParseError(
                f"Expected {field_count} fields, got {len(fields)} in line: {line!r}"
            )
        rows.append(fields)
    return rows


def parse_connections(output: str, header_lines: int = HEADER_LINES) -> List[ConnectionRecord]:
    """Parse `pivpn -c` output."""
    return [
        ConnectionRecord(*fields)
        for fields in parse_table(output, CONNECTION_FIELDS, header_lines)
    ]


def parse_users(output: str, header_lines: int = HEADER_LINES) -> List[UserRecord]:
    """Parse `pivpn -l` output."""
    return [
        UserRecord(*fields)
        for fields in parse_table(output, USER_FIELDS, header_lines)
    ]


def parse_backup(output: str) -> BackupResult:
    """Line 1 is the archive path and line 3 the restore instructions URL."""
    lines = output.split("\n")
    if len(lines) < 3:
        raise PiVPNParseError(f"Unexpected backup output: {output!r}")
    return BackupResult(backup_path=lines[0], instructions_url=lines[2])
