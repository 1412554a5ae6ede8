"""
Services package for location data processing.

This package contains utilities for parsing, normalizing, validating and
upserting location records from delimited spreadsheet exports, and for
geocoding addresses.
"""

from .exceptions import ImportFileError, RowSkipped
from .fields import LocationField, map_row, normalize_header
from .importer import run_import
from .normalizers import clean_string, decode_upload, split_lines, to_number
from .parsers import detect_delimiter, parse_delimited, split_delimited_line
from .report import ImportResult, SkipReason
from .schemas import LocationPayload
from .store import DjangoLocationStore, DryRunLocationStore, LocationStore
from .upsert import upsert_location
from .validation import validate_row

__all__ = [
    "ImportFileError",
    "RowSkipped",
    "LocationField",
    "map_row",
    "normalize_header",
    "run_import",
    "clean_string",
    "decode_upload",
    "split_lines",
    "to_number",
    "detect_delimiter",
    "parse_delimited",
    "split_delimited_line",
    "ImportResult",
    "SkipReason",
    "LocationPayload",
    "DjangoLocationStore",
    "DryRunLocationStore",
    "LocationStore",
    "upsert_location",
    "validate_row",
]
