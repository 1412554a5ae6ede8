"""
Upsert utilities for location data.

This module provides functionality to create or update Location records
based on their (source, source_id) natural key.
"""

import logging
from typing import Tuple

from ..models import Location
from .schemas import LocationPayload
from .store import LocationStore

logger = logging.getLogger(__name__)


def upsert_location(
    payload: LocationPayload, store: LocationStore
) -> Tuple[Location, bool]:
    """
    Create or update a Location record.

    Rows with a source_id update the record stored under (source, source_id)
    when one exists. Rows without a source_id have no identity to match on
    and always create a new record.

    Args:
        payload: Validated location fields
        store: Record store to write to

    Returns:
        Tuple of (Location instance, created: bool)
    """
    fields = payload.to_fields()
    natural_key = payload.natural_key

    if natural_key is None:
        location = store.create(fields)
        logger.debug(f"Created location {location.id} without source id")
        return location, True

    existing = store.find_by_natural_key(*natural_key)
    if existing is not None:
        location = store.update(natural_key, fields)
        logger.debug(
            f"Updated location {location.id} ({payload.source}/{payload.source_id})"
        )
        return location, False

    location = store.create(fields)
    logger.debug(
        f"Created location {location.id} ({payload.source}/{payload.source_id})"
    )
    return location, True


def describe_store_error(error: Exception) -> str:
    """
    Build the skip reason for a row the store refused to write.
    """
    signal = getattr(error, "code", None) or error.__class__.__name__
    return f"store error: {signal}"
