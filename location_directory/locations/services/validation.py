"""
Per-row validation for location imports.
"""

from typing import Mapping, Optional

from .exceptions import RowSkipped
from .fields import LocationField
from .normalizers import clean_string, to_number
from .schemas import DEFAULT_SOURCE, LocationPayload

MISSING_NAME = "missing name"
MISSING_TYPE = "missing type"
INVALID_COORDS = "invalid coords after parse"

OPTIONAL_FIELDS = (
    LocationField.EIRCODE,
    LocationField.ADDRESS,
    LocationField.EMAIL,
    LocationField.PHONE,
    LocationField.CONTACT1,
    LocationField.CONTACT2,
    LocationField.CONTACT3,
    LocationField.LINK,
)


def _optional(value: Optional[str]) -> Optional[str]:
    cleaned = clean_string(value)
    return cleaned or None


def validate_row(fields: Mapping[LocationField, Optional[str]]) -> LocationPayload:
    """
    Validate one mapped import row.

    Checks run in order (name, type, coordinates) and the first failure
    decides the skip reason.

    Args:
        fields: Raw values keyed by canonical field

    Returns:
        LocationPayload for the row

    Raises:
        RowSkipped: If a required field is missing or the coordinates
            do not parse to finite numbers
    """
    name = clean_string(fields.get(LocationField.NAME))
    if not name:
        raise RowSkipped(MISSING_NAME)

    location_type = clean_string(fields.get(LocationField.TYPE))
    if not location_type:
        raise RowSkipped(MISSING_TYPE)

    lat = to_number(fields.get(LocationField.LAT))
    lng = to_number(fields.get(LocationField.LNG))
    if lat is None or lng is None:
        raise RowSkipped(INVALID_COORDS)

    optional = {
        field.value: _optional(fields.get(field)) for field in OPTIONAL_FIELDS
    }

    return LocationPayload(
        name=name,
        type=location_type,
        lat=lat,
        lng=lng,
        source=clean_string(fields.get(LocationField.SOURCE)) or DEFAULT_SOURCE,
        source_id=_optional(fields.get(LocationField.SOURCE_ID)),
        **optional,
    )
