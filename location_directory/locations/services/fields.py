"""
Header normalization and canonical field mapping.

Spreadsheet exports name the same column in different ways ("Lat",
"latitude", "Source Id", "source_id"). Headers are normalized once and
every row is turned into an explicit mapping from LocationField to the
raw cell value.
"""

import re
from enum import Enum
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Tuple

from .normalizers import strip_bom

_WHITESPACE = re.compile(r"\s+")
_SEPARATORS = re.compile(r"[_-]+")


class LocationField(str, Enum):
    """Canonical location fields an import file can carry."""

    NAME = "name"
    TYPE = "type"
    EIRCODE = "eircode"
    ADDRESS = "address"
    LAT = "lat"
    LNG = "lng"
    EMAIL = "email"
    PHONE = "phone"
    CONTACT1 = "contact1"
    CONTACT2 = "contact2"
    CONTACT3 = "contact3"
    LINK = "link"
    SOURCE = "source"
    SOURCE_ID = "sourceid"


# Normalized header names accepted for each field, in preference order
HEADER_ALIASES: Mapping[LocationField, Tuple[str, ...]] = MappingProxyType(
    {
        LocationField.NAME: ("name",),
        LocationField.TYPE: ("type",),
        LocationField.EIRCODE: ("eircode",),
        LocationField.ADDRESS: ("address",),
        LocationField.LAT: ("lat", "latitude"),
        LocationField.LNG: ("lng", "lon", "long", "longitude"),
        LocationField.EMAIL: ("email",),
        LocationField.PHONE: ("phone",),
        LocationField.CONTACT1: ("contact1",),
        LocationField.CONTACT2: ("contact2",),
        LocationField.CONTACT3: ("contact3",),
        LocationField.LINK: ("link", "website", "url"),
        LocationField.SOURCE: ("source",),
        LocationField.SOURCE_ID: ("sourceid",),
    }
)


def normalize_header(header: str) -> str:
    """
    Normalize a header cell to its lookup key.

    "Source Id", "source_id" and "SOURCE-ID" all become "sourceid".
    """
    key = strip_bom(str(header)).strip().lower()
    key = _WHITESPACE.sub("", key)
    return _SEPARATORS.sub("", key)


def map_row(row: Mapping[str, str]) -> Dict[LocationField, Optional[str]]:
    """
    Resolve an import row to canonical fields.

    Args:
        row: Mapping of normalized header key to raw cell value

    Returns:
        Mapping of every LocationField to the raw value of the first alias
        present in the row, or None when the file has no such column
    """
    mapped: Dict[LocationField, Optional[str]] = {}
    for field, aliases in HEADER_ALIASES.items():
        mapped[field] = None
        for alias in aliases:
            if alias in row:
                mapped[field] = row[alias]
                break
    return mapped
