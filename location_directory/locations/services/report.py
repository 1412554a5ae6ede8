"""
Result objects returned by a location import.
"""

from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

from .fields import LocationField
from .normalizers import clean_string, to_number

MAX_REASONS = 5


class SkipReason(BaseModel):
    """
    Diagnostic for one skipped row.
    """

    idx: int = Field(..., description="0-based data row index")
    reason: str
    name: str = ""
    type: str = ""
    lat: Optional[str] = None
    lng: Optional[str] = None
    sourceid: Optional[str] = None


class FirstRowDebug(BaseModel):
    """
    How the coordinates of the first data row were read.
    """

    model_config = ConfigDict(populate_by_name=True)

    lat_raw: Optional[str] = Field(default=None, serialization_alias="latRaw")
    lng_raw: Optional[str] = Field(default=None, serialization_alias="lngRaw")
    lat_parsed: Optional[float] = Field(default=None, serialization_alias="latParsed")
    lng_parsed: Optional[float] = Field(default=None, serialization_alias="lngParsed")

    @property
    def has_coords(self) -> bool:
        return self.lat_parsed is not None and self.lng_parsed is not None

    @classmethod
    def from_fields(
        cls, fields: Mapping[LocationField, Optional[str]]
    ) -> "FirstRowDebug":
        lat_raw = fields.get(LocationField.LAT)
        lng_raw = fields.get(LocationField.LNG)
        return cls(
            lat_raw=lat_raw,
            lng_raw=lng_raw,
            lat_parsed=to_number(lat_raw),
            lng_parsed=to_number(lng_raw),
        )

    def to_response(self) -> Dict[str, Any]:
        data = self.model_dump(by_alias=True)
        data["hasCoords"] = self.has_coords
        return data


class ImportResult(BaseModel):
    """
    Summary of an import run.

    skipped is exact; reasons keeps only the first MAX_REASONS diagnostics.
    """

    rows: int = 0
    inserted: int = 0
    updated: int = 0
    skipped: int = 0
    delimiter: str = ","
    first_row_keys: List[str] = Field(default_factory=list)
    first_row_sample: Dict[str, str] = Field(default_factory=dict)
    first_row_debug: FirstRowDebug = Field(default_factory=FirstRowDebug)
    reasons: List[SkipReason] = Field(default_factory=list)

    def record_skip(
        self, idx: int, reason: str, fields: Mapping[LocationField, Optional[str]]
    ) -> None:
        """
        Count a skipped row and keep its diagnostic if there is room.
        """
        self.skipped += 1
        if len(self.reasons) >= MAX_REASONS:
            return

        self.reasons.append(
            SkipReason(
                idx=idx,
                reason=reason,
                name=clean_string(fields.get(LocationField.NAME)),
                type=clean_string(fields.get(LocationField.TYPE)),
                lat=fields.get(LocationField.LAT),
                lng=fields.get(LocationField.LNG),
                sourceid=fields.get(LocationField.SOURCE_ID),
            )
        )

    def to_response(self) -> Dict[str, Any]:
        """
        The result as returned to API and CLI callers.
        """
        return {
            "rows": self.rows,
            "inserted": self.inserted,
            "updated": self.updated,
            "skipped": self.skipped,
            "delimiter": self.delimiter,
            "firstRowKeys": list(self.first_row_keys),
            "firstRowSample": dict(self.first_row_sample),
            "debugFirst": self.first_row_debug.to_response(),
            "reasons": [reason.model_dump() for reason in self.reasons],
        }
