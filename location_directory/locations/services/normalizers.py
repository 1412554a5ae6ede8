"""
Normalization utilities for location import data.

This module provides utilities to decode uploaded text, split it into
lines, and coerce raw spreadsheet cells into clean strings and numbers.
"""

import logging
import math
import re
from typing import List, Optional, Union

from .exceptions import ImportFileError

logger = logging.getLogger(__name__)

BOM = "\ufeff"
QUOTE_CHARS = ('"', "'")

# Everything except digits and the characters a number may be written with
_NON_NUMERIC = re.compile(r"[^\d.,+-]")


def strip_bom(value: str) -> str:
    """
    Remove a single leading byte-order mark.
    """
    if value.startswith(BOM):
        return value[1:]
    return value


def decode_upload(raw: Union[bytes, str]) -> str:
    """
    Decode uploaded file content as UTF-8 text.

    Args:
        raw: File content as received from the transport

    Returns:
        Decoded text with any leading BOM removed

    Raises:
        ImportFileError: If the bytes are not valid UTF-8
    """
    if isinstance(raw, bytes):
        try:
            text = raw.decode("utf-8")
        except UnicodeDecodeError as e:
            logger.error(f"Upload is not valid UTF-8 at byte {e.start}: {e.reason}")
            raise ImportFileError(
                f"File is not valid UTF-8 text (byte {e.start}: {e.reason})"
            ) from e
    else:
        text = raw

    return strip_bom(text)


def split_lines(text: str) -> List[str]:
    """
    Split text into lines, normalizing line endings and dropping blank lines.

    Args:
        text: Decoded file content

    Returns:
        Non-blank lines, untrimmed, in file order
    """
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    return [line for line in text.split("\n") if line.strip()]


def clean_string(value: Optional[str]) -> str:
    """
    Clean a raw cell value into a plain string.

    Strips a BOM and surrounding whitespace, removes one matching pair of
    outer quotes (double or single), and unescapes doubled double-quotes.

    Args:
        value: Raw cell value or None

    Returns:
        Cleaned string, empty when the cell is absent or blank
    """
    if value is None:
        return ""

    cleaned = strip_bom(str(value)).strip()

    for quote in QUOTE_CHARS:
        if cleaned.startswith(quote) and cleaned.endswith(quote):
            cleaned = cleaned[1:-1].strip()
            break

    # Spreadsheet escaping: "" -> "
    return cleaned.replace('""', '"')


def to_number(value: Optional[str]) -> Optional[float]:
    """
    Coerce a raw cell value to a finite float.

    When both ',' and '.' appear, commas are thousands separators
    ("1,234.56" -> 1234.56). When only ',' appears it is the decimal
    separator ("51,901" -> 51.901).

    Args:
        value: Raw cell value or None

    Returns:
        Float value, or None if the cell is empty or not a finite number
    """
    cleaned = clean_string(value)
    if not cleaned:
        return None

    cleaned = _NON_NUMERIC.sub("", cleaned)
    if not cleaned:
        return None

    if "," in cleaned and "." in cleaned:
        cleaned = cleaned.replace(",", "")
    elif "," in cleaned:
        cleaned = cleaned.replace(",", ".")

    try:
        number = float(cleaned)
    except ValueError:
        logger.debug(f"Could not coerce '{value}' to a number")
        return None

    if not math.isfinite(number):
        logger.debug(f"Discarding non-finite number parsed from '{value}'")
        return None

    return number
