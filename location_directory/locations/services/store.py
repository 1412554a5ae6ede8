"""
Record store used by the import pipeline.

The upsert logic only depends on three operations: look a record up by its
natural key, create a record, and update the record behind a natural key.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Tuple

from django.db import transaction

from ..models import Location

logger = logging.getLogger(__name__)

NaturalKey = Tuple[str, str]


class LocationStore(ABC):
    """
    Persistence operations the importer needs.
    """

    @abstractmethod
    def find_by_natural_key(self, source: str, source_id: str) -> Optional[Location]:
        """Return the record stored under (source, source_id), if any."""

    @abstractmethod
    def create(self, fields: Dict[str, Any]) -> Location:
        """Create a record from model field values."""

    @abstractmethod
    def update(self, natural_key: NaturalKey, fields: Dict[str, Any]) -> Location:
        """Write field values to the record stored under natural_key."""


class DjangoLocationStore(LocationStore):
    """
    Store backed by the Location model.

    Keyed writes go through update_or_create inside a transaction, so two
    writers racing on one natural key end with a single record.
    """

    def find_by_natural_key(self, source: str, source_id: str) -> Optional[Location]:
        return Location.objects.filter(source=source, source_id=source_id).first()

    def create(self, fields: Dict[str, Any]) -> Location:
        with transaction.atomic():
            if fields.get("source_id"):
                location, _ = Location.objects.update_or_create(
                    source=fields["source"],
                    source_id=fields["source_id"],
                    defaults=fields,
                )
                return location
            return Location.objects.create(**fields)

    def update(self, natural_key: NaturalKey, fields: Dict[str, Any]) -> Location:
        source, source_id = natural_key
        with transaction.atomic():
            location, _ = Location.objects.update_or_create(
                source=source, source_id=source_id, defaults=fields
            )
        return location


class DryRunLocationStore(DjangoLocationStore):
    """
    Store that reads existing records and validates writes without saving.

    Records it would have written are remembered by natural key, so a key
    repeated within one run is counted as an update, as it is on a real run.
    """

    def __init__(self):
        self.pending: Dict[NaturalKey, Location] = {}

    def find_by_natural_key(self, source: str, source_id: str) -> Optional[Location]:
        pending = self.pending.get((source, source_id))
        if pending is not None:
            return pending
        return super().find_by_natural_key(source, source_id)

    def create(self, fields: Dict[str, Any]) -> Location:
        location = Location(**fields)
        location.full_clean()
        if location.natural_key is not None:
            self.pending[location.natural_key] = location
        logger.debug(f"Dry run: would create {location}")
        return location

    def update(self, natural_key: NaturalKey, fields: Dict[str, Any]) -> Location:
        location = self.find_by_natural_key(*natural_key)
        if location is None:
            return self.create(fields)

        for name, value in fields.items():
            setattr(location, name, value)
        location.full_clean()
        self.pending[natural_key] = location
        logger.debug(f"Dry run: would update {location.id}")
        return location
