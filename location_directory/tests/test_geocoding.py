"""
Tests for cached geocoding.
"""

from unittest.mock import Mock, patch

import requests
from django.test import TestCase, override_settings

from locations.models import GeocodeCache
from locations.services.exceptions import (
    GeocodingConfigurationError,
    GeocodingProviderError,
)
from locations.services.geocoding import (
    GeocodeFailure,
    GeocodeSuccess,
    geocode,
    google_geocode,
    normalize_query,
)
from tests.factories import GeocodeCacheFactory


def _response(payload, status_code=200):
    return Mock(
        ok=status_code < 400,
        status_code=status_code,
        json=Mock(return_value=payload),
    )


def _found(lat, lng):
    result = {"geometry": {"location": {"lat": lat, "lng": lng}}}
    return _response({"status": "OK", "results": [result]})


ZERO_RESULTS = {"status": "ZERO_RESULTS", "results": []}


class TestNormalizeQuery(TestCase):
    """Test cache key normalization."""

    def test_normalize_query(self):
        self.assertEqual(normalize_query(" d02 x285 "), "D02X285")
        self.assertEqual(normalize_query("Main St,\tDublin"), "MAINST,DUBLIN")


@patch("locations.services.geocoding.requests.get")
class TestGoogleGeocode(TestCase):
    """Test the provider call."""

    def test_success(self, mock_get):
        mock_get.return_value = _found(53.34, -6.26)

        result = google_geocode("D02 X285")

        self.assertIsInstance(result, GeocodeSuccess)
        self.assertEqual((result.lat, result.lng), (53.34, -6.26))
        _, kwargs = mock_get.call_args
        self.assertEqual(
            kwargs["params"], {"address": "D02 X285", "key": "test-geocode-key"}
        )
        self.assertEqual(kwargs["timeout"], 10)

    def test_provider_status_is_a_failure_result(self, mock_get):
        mock_get.return_value = _response(
            {"status": "REQUEST_DENIED", "error_message": "bad key", "results": []}
        )

        result = google_geocode("D02 X285")

        self.assertIsInstance(result, GeocodeFailure)
        self.assertEqual(result.status, "REQUEST_DENIED")
        self.assertEqual(result.message, "bad key")
        self.assertEqual(result.query, "D02 X285")

    def test_http_error_raises(self, mock_get):
        mock_get.return_value = _response({}, status_code=500)

        with self.assertRaises(GeocodingProviderError):
            google_geocode("D02 X285")

    def test_network_error_raises(self, mock_get):
        mock_get.side_effect = requests.ConnectionError("unreachable")

        with self.assertRaises(GeocodingProviderError):
            google_geocode("D02 X285")

    def test_non_json_body_raises(self, mock_get):
        response = _response(None)
        response.json.side_effect = ValueError("Expecting value")
        mock_get.return_value = response

        with self.assertRaises(GeocodingProviderError):
            google_geocode("D02 X285")

    @override_settings(LOCATIONS_GEOCODE_API_KEY="")
    def test_missing_key_raises(self, mock_get):
        with self.assertRaises(GeocodingConfigurationError):
            google_geocode("D02 X285")
        mock_get.assert_not_called()


@patch("locations.services.geocoding.requests.get")
class TestCachedGeocode(TestCase):
    """Test the read-through cache and query suffixes."""

    def test_miss_calls_provider_and_caches(self, mock_get):
        mock_get.return_value = _found(53.34, -6.26)

        lookup = geocode("d02 x285")

        self.assertFalse(lookup.cached)
        self.assertEqual(lookup.result.lat, 53.34)
        self.assertEqual(lookup.attempted, ["d02 x285"])

        entry = GeocodeCache.objects.get(normalized_query="D02X285")
        self.assertEqual(entry.display_query, "d02 x285")
        self.assertEqual(entry.hit_count, 1)
        self.assertEqual(entry.provider, "google")
        self.assertIsNotNone(entry.last_used_at)

    def test_hit_skips_provider(self, mock_get):
        entry = GeocodeCacheFactory(
            normalized_query="D02X285", lat=53.1, lng=-6.1, hit_count=1
        )

        lookup = geocode(" D02 X285")

        self.assertTrue(lookup.cached)
        self.assertEqual((lookup.result.lat, lookup.result.lng), (53.1, -6.1))
        mock_get.assert_not_called()
        entry.refresh_from_db()
        self.assertEqual(entry.hit_count, 2)

    def test_suffixes_are_tried_in_order(self, mock_get):
        mock_get.side_effect = [_response(ZERO_RESULTS), _found(53.2, -6.2)]

        lookup = geocode("Main Street")

        self.assertIsInstance(lookup.result, GeocodeSuccess)
        self.assertEqual(lookup.attempted, ["Main Street", "Main Street Ireland"])
        self.assertEqual(mock_get.call_count, 2)
        self.assertTrue(
            GeocodeCache.objects.filter(normalized_query="MAINSTREET").exists()
        )

    def test_failure_is_not_cached(self, mock_get):
        mock_get.return_value = _response(ZERO_RESULTS)

        lookup = geocode("Nowhere")

        self.assertIsInstance(lookup.result, GeocodeFailure)
        self.assertEqual(lookup.result.status, "ZERO_RESULTS")
        self.assertEqual(
            lookup.attempted, ["Nowhere", "Nowhere Ireland", "Nowhere Dublin Ireland"]
        )
        self.assertEqual(mock_get.call_count, 3)
        self.assertEqual(GeocodeCache.objects.count(), 0)

    @override_settings(LOCATIONS_GEOCODE_QUERY_SUFFIXES=[])
    def test_empty_suffix_list_tries_query_once(self, mock_get):
        mock_get.return_value = _response(ZERO_RESULTS)

        lookup = geocode("Nowhere")

        self.assertEqual(lookup.attempted, ["Nowhere"])
        self.assertEqual(mock_get.call_count, 1)

    def test_non_json_body_surfaces_as_provider_error(self, mock_get):
        response = _response(None)
        response.json.side_effect = ValueError("Expecting value")
        mock_get.return_value = response

        with self.assertRaises(GeocodingProviderError):
            geocode("D02 X285")
        self.assertEqual(GeocodeCache.objects.count(), 0)

    def test_entry_written_by_concurrent_request_is_kept(self, mock_get):
        def answer_after_other_request_cached(*args, **kwargs):
            GeocodeCacheFactory(normalized_query="D02X285", lat=53.1, lng=-6.1)
            return _found(53.34, -6.26)

        mock_get.side_effect = answer_after_other_request_cached

        lookup = geocode("D02 X285")

        self.assertIsInstance(lookup.result, GeocodeSuccess)
        self.assertEqual(lookup.result.lat, 53.34)
        entry = GeocodeCache.objects.get(normalized_query="D02X285")
        self.assertEqual(entry.lat, 53.1)
