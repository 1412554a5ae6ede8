"""
Pydantic schemas for location data validation.

This module defines the canonical field set written to the store for each
imported row.
"""

import logging
from typing import Any, Dict, Optional, Tuple

from pydantic import BaseModel, Field
from pydantic.types import confloat, constr

logger = logging.getLogger(__name__)

DEFAULT_SOURCE = "import"

Coordinate = confloat(allow_inf_nan=False)


class LocationPayload(BaseModel):
    """
    Validated location fields, ready to be created or updated in the store.

    Imports never write inactive records, so is_active is always True.
    """

    name: constr(strip_whitespace=True, min_length=1) = Field(
        ..., description="Display name of the location"
    )

    type: constr(strip_whitespace=True, min_length=1) = Field(
        ..., description="Classification used for icons and filtering"
    )

    lat: Coordinate = Field(..., description="Latitude in WGS84 degrees")

    lng: Coordinate = Field(..., description="Longitude in WGS84 degrees")

    eircode: Optional[str] = None
    address: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    contact1: Optional[str] = None
    contact2: Optional[str] = None
    contact3: Optional[str] = None
    link: Optional[str] = None

    source: constr(min_length=1) = Field(
        default=DEFAULT_SOURCE, description="Data provider or batch identifier"
    )

    source_id: Optional[str] = Field(
        default=None, description="The provider's own identifier for the record"
    )

    is_active: bool = Field(default=True, frozen=True)

    @property
    def natural_key(self) -> Optional[Tuple[str, str]]:
        """
        The (source, source_id) pair, or None when the row has no provider id.
        """
        if not self.source_id:
            return None
        return self.source, self.source_id

    def to_fields(self) -> Dict[str, Any]:
        """
        Model field values for the store.
        """
        return self.model_dump()
