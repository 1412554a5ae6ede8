"""
Geocoding of free-text addresses and Eircodes.

Lookups go through the GeocodeCache table first; misses call the Google
Geocoding API and store the first successful answer.
"""

import logging
from typing import List, Literal, Optional, Union

import requests
from django.conf import settings
from django.db.models import F
from django.utils import timezone
from pydantic import BaseModel, Field

from ..models import GeocodeCache
from .exceptions import GeocodingConfigurationError, GeocodingProviderError

logger = logging.getLogger(__name__)

PROVIDER = "google"


class GeocodeSuccess(BaseModel):
    """A provider answer with coordinates."""

    kind: Literal["success"] = "success"
    lat: float
    lng: float
    provider: str = PROVIDER


class GeocodeFailure(BaseModel):
    """A provider answer without a usable result."""

    kind: Literal["failure"] = "failure"
    status: str
    message: Optional[str] = None
    query: str


GeocodeResult = Union[GeocodeSuccess, GeocodeFailure]


class GeocodeLookup(BaseModel):
    """Outcome of a cached geocode lookup."""

    result: GeocodeResult = Field(..., discriminator="kind")
    cached: bool = False
    attempted: List[str] = Field(default_factory=list)


def normalize_query(query: str) -> str:
    """
    Normalize a query for cache lookups: trimmed, upper case, no whitespace.
    """
    return "".join(query.strip().upper().split())


def google_geocode(
    query: str, session: Optional[requests.Session] = None
) -> GeocodeResult:
    """
    Resolve one query with the Google Geocoding API.

    Args:
        query: Address or Eircode text
        session: Optional requests session

    Returns:
        GeocodeSuccess with the first result, or GeocodeFailure carrying the
        provider status when the provider found nothing usable

    Raises:
        GeocodingConfigurationError: If no API key is configured
        GeocodingProviderError: If the request fails or returns an HTTP error
    """
    api_key = settings.LOCATIONS_GEOCODE_API_KEY
    if not api_key:
        raise GeocodingConfigurationError("Missing geocoding API key")

    http = session or requests
    try:
        response = http.get(
            settings.LOCATIONS_GEOCODE_URL,
            params={"address": query, "key": api_key},
            timeout=settings.LOCATIONS_GEOCODE_TIMEOUT,
        )
    except requests.RequestException as e:
        logger.error(f"Geocode request for '{query}' failed: {e}")
        raise GeocodingProviderError(f"Geocode request failed: {e}") from e

    if not response.ok:
        logger.error(f"Geocode HTTP {response.status_code} for '{query}'")
        raise GeocodingProviderError(f"Geocode HTTP {response.status_code}")

    try:
        data = response.json()
    except ValueError as e:
        logger.error(f"Geocode response for '{query}' is not JSON: {e}")
        raise GeocodingProviderError("Geocode response is not valid JSON") from e

    results = data.get("results") or []
    if data.get("status") != "OK" or not results:
        logger.warning(f"Geocode for '{query}' returned status {data.get('status')}")
        return GeocodeFailure(
            status=str(data.get("status") or "UNKNOWN"),
            message=data.get("error_message"),
            query=query,
        )

    location = results[0]["geometry"]["location"]
    return GeocodeSuccess(lat=location["lat"], lng=location["lng"])


def geocode(query: str, session: Optional[requests.Session] = None) -> GeocodeLookup:
    """
    Resolve a query to coordinates, using and filling the cache.

    On a cache miss the query is tried as-is and then with each configured
    suffix appended, stopping at the first success.

    Args:
        query: Address or Eircode text, already trimmed and non-empty
        session: Optional requests session

    Returns:
        GeocodeLookup with either a success (cached or fresh) or the last
        provider failure and the list of attempted queries
    """
    normalized = normalize_query(query)

    cached = GeocodeCache.objects.filter(normalized_query=normalized).first()
    if cached is not None:
        GeocodeCache.objects.filter(pk=cached.pk).update(
            hit_count=F("hit_count") + 1, last_used_at=timezone.now()
        )
        logger.info(f"Geocode cache hit for {normalized}")
        return GeocodeLookup(
            result=GeocodeSuccess(
                lat=cached.lat, lng=cached.lng, provider=cached.provider or PROVIDER
            ),
            cached=True,
        )

    suffixes = settings.LOCATIONS_GEOCODE_QUERY_SUFFIXES or [""]
    attempts = [f"{query}{suffix}" for suffix in suffixes]

    result = None
    attempted = []
    for attempt in attempts:
        attempted.append(attempt)
        result = google_geocode(attempt, session=session)
        if isinstance(result, GeocodeSuccess):
            break

    if not isinstance(result, GeocodeSuccess):
        return GeocodeLookup(result=result, attempted=attempted)

    # A concurrent miss on the same query may have written the row already
    _, created = GeocodeCache.objects.get_or_create(
        normalized_query=normalized,
        defaults={
            "display_query": query,
            "lat": result.lat,
            "lng": result.lng,
            "provider": result.provider,
            "hit_count": 1,
            "last_used_at": timezone.now(),
        },
    )
    if created:
        logger.info(f"Cached geocode for {normalized}: ({result.lat}, {result.lng})")
    else:
        logger.info(f"Geocode for {normalized} was cached by another request")

    return GeocodeLookup(result=result, attempted=attempted)
