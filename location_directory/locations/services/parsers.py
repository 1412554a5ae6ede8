"""
Parser utilities for delimited location exports.

This module detects the delimiter of a spreadsheet export (tab, semicolon
or comma), splits lines while honouring quoted fields, and turns the file
into a list of import rows keyed by normalized header.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List

from .fields import normalize_header
from .normalizers import split_lines

logger = logging.getLogger(__name__)

# Checked in preference order; earlier candidates win ties
DELIMITER_CANDIDATES = ("\t", ";", ",")
DEFAULT_DELIMITER = ","
QUOTE = '"'


@dataclass
class DelimitedTable:
    """
    A parsed delimited file.
    """

    delimiter: str = DEFAULT_DELIMITER
    headers: List[str] = field(default_factory=list)
    rows: List[Dict[str, str]] = field(default_factory=list)


def detect_delimiter(sample_line: str) -> str:
    """
    Pick the delimiter that splits the header line into the most fields.

    Args:
        sample_line: First non-blank line of the file

    Returns:
        One of tab, ';' or ','
    """
    best = DELIMITER_CANDIDATES[0]
    best_count = -1

    for candidate in DELIMITER_CANDIDATES:
        count = len(sample_line.split(candidate))
        if count > best_count:
            best = candidate
            best_count = count

    return best


def split_delimited_line(line: str, delimiter: str) -> List[str]:
    """
    Split one line into fields, honouring double-quoted spans.

    A delimiter inside quotes does not end a field, and two consecutive
    quotes inside a quoted span decode to one literal quote.

    Args:
        line: A single line of the file
        delimiter: Single-character delimiter

    Returns:
        Raw field strings with the quoting removed
    """
    fields = []
    current = []
    in_quotes = False
    i = 0

    while i < len(line):
        ch = line[i]

        if ch == QUOTE:
            if in_quotes and line[i + 1 : i + 2] == QUOTE:
                current.append(QUOTE)
                i += 2
                continue
            in_quotes = not in_quotes
        elif ch == delimiter and not in_quotes:
            fields.append("".join(current))
            current = []
        else:
            current.append(ch)

        i += 1

    fields.append("".join(current))
    return fields


def build_row(headers: List[str], values: List[str]) -> Dict[str, str]:
    """
    Pair header keys with a row's values.

    Columns without a usable header, and extra values beyond the header
    width, get synthetic "col<index>" keys. Missing values default to "".
    """
    row = {}
    width = max(len(headers), len(values))

    for index in range(width):
        key = headers[index] if index < len(headers) else ""
        row[key or f"col{index}"] = values[index] if index < len(values) else ""

    return row


def parse_delimited(text: str) -> DelimitedTable:
    """
    Parse decoded file content into header keys and import rows.

    Args:
        text: Decoded file content with the BOM already removed

    Returns:
        DelimitedTable with the detected delimiter, the normalized header
        keys and one row mapping per non-blank data line
    """
    lines = split_lines(text)
    if not lines:
        logger.warning("Import file has no non-blank lines")
        return DelimitedTable()

    delimiter = detect_delimiter(lines[0])
    raw_headers = split_delimited_line(lines[0], delimiter)
    normalized = [normalize_header(header) for header in raw_headers]
    headers = [key or f"col{index}" for index, key in enumerate(normalized)]

    rows = [
        build_row(normalized, split_delimited_line(line, delimiter))
        for line in lines[1:]
    ]

    logger.debug(
        f"Parsed {len(rows)} rows with delimiter {delimiter!r} and headers {headers}"
    )

    return DelimitedTable(delimiter=delimiter, headers=headers, rows=rows)
