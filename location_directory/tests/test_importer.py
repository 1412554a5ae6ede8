"""
Tests for the end-to-end location import pipeline.
"""

from django.db import DatabaseError
from django.test import TestCase

from locations.models import Location
from locations.services.exceptions import ImportFileError
from locations.services.importer import run_import
from locations.services.report import MAX_REASONS
from locations.services.store import DjangoLocationStore, DryRunLocationStore
from tests.factories import InactiveLocationFactory, LocationFactory


class FailingStore(DjangoLocationStore):
    """Database store that refuses to create one named location."""

    def __init__(self, failing_name):
        self.failing_name = failing_name

    def create(self, fields):
        if fields["name"] == self.failing_name:
            raise DatabaseError("disk I/O error")
        return super().create(fields)


class TestRunImport(TestCase):
    """Test importing delimited files into the database."""

    def test_insert_then_update_by_source_id(self):
        """Test that a re-import with a known sourceid updates in place."""
        result = run_import(
            b"name,type,lat,lng,sourceid\nClinic A,PHA,53.35,-6.26,abc123\n"
        )

        self.assertEqual(result.rows, 1)
        self.assertEqual(result.inserted, 1)
        self.assertEqual(result.updated, 0)
        self.assertEqual(result.skipped, 0)
        self.assertEqual(result.delimiter, ",")

        location = Location.objects.get(source="import", source_id="abc123")
        self.assertEqual(location.name, "Clinic A")
        self.assertEqual(location.type, "PHA")
        self.assertTrue(location.is_active)

        result = run_import(
            b"name,type,lat,lng,sourceid\nClinic A,PHA,53.40,-6.26,abc123\n"
        )

        self.assertEqual(result.inserted, 0)
        self.assertEqual(result.updated, 1)
        self.assertEqual(Location.objects.count(), 1)
        location.refresh_from_db()
        self.assertEqual(location.lat, 53.40)

    def test_reimport_is_idempotent(self):
        content = (
            b"name,type,lat,lng,sourceid\n"
            b"Clinic A,PHA,53.35,-6.26,a1\n"
            b"Clinic B,HOSP,53.10,-6.10,b1\n"
        )
        run_import(content)
        result = run_import(content)

        self.assertEqual(result.inserted, 0)
        self.assertEqual(result.updated, 2)
        self.assertEqual(Location.objects.count(), 2)

    def test_rows_without_source_id_always_insert(self):
        content = b"name,type,lat,lng\nClinic A,PHA,53.35,-6.26\n"
        run_import(content)
        result = run_import(content)

        self.assertEqual(result.inserted, 1)
        self.assertEqual(result.updated, 0)
        self.assertEqual(Location.objects.filter(name="Clinic A").count(), 2)

    def test_same_source_id_under_other_source_is_distinct(self):
        result = run_import(
            b"name,type,lat,lng,source,sourceid\n"
            b"Clinic A,PHA,53.35,-6.26,hse,x1\n"
            b"Clinic A,PHA,53.35,-6.26,garda,x1\n"
        )

        self.assertEqual(result.inserted, 2)
        self.assertEqual(Location.objects.filter(source_id="x1").count(), 2)

    def test_update_reactivates_soft_deleted_location(self):
        location = InactiveLocationFactory(source="import", source_id="gone1")

        result = run_import(b"name,type,lat,lng,sourceid\nBack,PHA,53.1,-6.1,gone1\n")

        self.assertEqual(result.updated, 1)
        location.refresh_from_db()
        self.assertTrue(location.is_active)
        self.assertEqual(location.name, "Back")

    def test_missing_name_is_skipped(self):
        """Test that invalid rows are reported and the rest still import."""
        result = run_import(
            b"name,type,lat,lng,sourceid\n"
            b",PHA,53.35,-6.26,s1\n"
            b"Clinic B,PHA,53.10,-6.10,s2\n"
        )

        self.assertEqual(result.rows, 2)
        self.assertEqual(result.inserted, 1)
        self.assertEqual(result.skipped, 1)
        self.assertEqual(len(result.reasons), 1)

        reason = result.reasons[0]
        self.assertEqual(reason.idx, 0)
        self.assertEqual(reason.reason, "missing name")
        self.assertEqual(reason.name, "")
        self.assertEqual(reason.type, "PHA")
        self.assertEqual(reason.lat, "53.35")
        self.assertEqual(reason.sourceid, "s1")

    def test_invalid_coordinates_are_skipped(self):
        result = run_import(b"name,type,lat,lng\nClinic,PHA,north,-6.26\n")

        self.assertEqual(result.skipped, 1)
        self.assertEqual(result.reasons[0].reason, "invalid coords after parse")
        self.assertEqual(Location.objects.count(), 0)

    def test_reasons_are_capped(self):
        """Test that skipped stays exact while diagnostics are truncated."""
        lines = ["name,type,lat,lng"] + [f",PHA,53.{i},-6.2" for i in range(8)]
        result = run_import("\n".join(lines).encode("utf-8"))

        self.assertEqual(result.skipped, 8)
        self.assertEqual(len(result.reasons), MAX_REASONS)
        self.assertEqual([r.idx for r in result.reasons], [0, 1, 2, 3, 4])

    def test_out_of_range_coordinates_are_refused_by_store(self):
        result = run_import(b"name,type,lat,lng\nClinic,PHA,95,-6.26\n")

        self.assertEqual(result.inserted, 0)
        self.assertEqual(result.skipped, 1)
        self.assertEqual(result.reasons[0].reason, "store error: ValidationError")

    def test_store_failure_skips_row_and_continues(self):
        result = run_import(
            b"name,type,lat,lng\n"
            b"Broken,PHA,53.1,-6.1\n"
            b"Fine,PHA,53.2,-6.2\n",
            store=FailingStore("Broken"),
        )

        self.assertEqual(result.inserted, 1)
        self.assertEqual(result.skipped, 1)
        self.assertEqual(result.reasons[0].idx, 0)
        self.assertEqual(result.reasons[0].reason, "store error: DatabaseError")
        self.assertTrue(Location.objects.filter(name="Fine").exists())

    def test_semicolon_file_with_decimal_commas(self):
        result = run_import(
            "Name;Type;Latitude;Longitude\nClinic;PHA;53,35;-6,26\n".encode("utf-8")
        )

        self.assertEqual(result.delimiter, ";")
        self.assertEqual(result.inserted, 1)
        location = Location.objects.get(name="Clinic")
        self.assertEqual(location.lat, 53.35)
        self.assertEqual(location.lng, -6.26)

    def test_tab_file_with_bom_crlf_and_quotes(self):
        content = (
            b"\xef\xbb\xbfName\tType\tLatitude\tLongitude\tWebsite\r\n"
            b'"Clinic, Main St"\tHOSP\t53.1\t-6.1\thttps://example.ie\r\n'
            b"\r\n"
        )
        result = run_import(content)

        self.assertEqual(result.delimiter, "\t")
        self.assertEqual(result.rows, 1)
        self.assertEqual(result.first_row_keys[0], "name")
        location = Location.objects.get()
        self.assertEqual(location.name, "Clinic, Main St")
        self.assertEqual(location.link, "https://example.ie")

    def test_first_row_diagnostics(self):
        result = run_import(b"Name,Type,Lat,Long,Extra\nA,PHA,53.3,x,1,2\n")

        self.assertEqual(
            result.first_row_keys, ["name", "type", "lat", "long", "extra"]
        )
        self.assertEqual(result.first_row_sample["col5"], "2")

        debug = result.to_response()["debugFirst"]
        self.assertEqual(debug["latRaw"], "53.3")
        self.assertEqual(debug["lngRaw"], "x")
        self.assertEqual(debug["latParsed"], 53.3)
        self.assertIsNone(debug["lngParsed"])
        self.assertFalse(debug["hasCoords"])

    def test_header_only_and_empty_files(self):
        result = run_import(b"name,type,lat,lng\n")
        self.assertEqual(result.rows, 0)
        self.assertEqual(result.first_row_keys, ["name", "type", "lat", "lng"])
        self.assertEqual(result.first_row_sample, {})

        result = run_import(b"")
        self.assertEqual(result.rows, 0)
        self.assertEqual(result.delimiter, ",")
        self.assertEqual(result.first_row_keys, [])

    def test_undecodable_file_raises(self):
        with self.assertRaises(ImportFileError):
            run_import(b"name,type\n\xff\xfe,PHA\n")

    def test_response_shape(self):
        response = run_import(b"name,type,lat,lng\n,PHA,1,2\n").to_response()

        self.assertEqual(
            set(response),
            {
                "rows",
                "inserted",
                "updated",
                "skipped",
                "delimiter",
                "firstRowKeys",
                "firstRowSample",
                "debugFirst",
                "reasons",
            },
        )
        self.assertEqual(
            set(response["reasons"][0]),
            {"idx", "reason", "name", "type", "lat", "lng", "sourceid"},
        )


class TestDryRunStore(TestCase):
    """Test imports that validate without writing."""

    def test_dry_run_counts_without_saving(self):
        existing = LocationFactory(source="import", source_id="keep1", name="Old")

        result = run_import(
            b"name,type,lat,lng,sourceid\n"
            b"New,PHA,53.1,-6.1,new1\n"
            b"Renamed,PHA,53.2,-6.2,keep1\n",
            store=DryRunLocationStore(),
        )

        self.assertEqual(result.inserted, 1)
        self.assertEqual(result.updated, 1)
        self.assertEqual(Location.objects.count(), 1)
        existing.refresh_from_db()
        self.assertEqual(existing.name, "Old")

    def test_dry_run_still_validates(self):
        result = run_import(
            b"name,type,lat,lng\nClinic,PHA,53.1,-200\n", store=DryRunLocationStore()
        )

        self.assertEqual(result.skipped, 1)
        self.assertEqual(result.reasons[0].reason, "store error: ValidationError")

    def test_dry_run_counts_repeated_key_as_update(self):
        """Test that a key seen twice in one dry run matches a real run."""
        content = (
            b"name,type,lat,lng,sourceid\n"
            b"Clinic A,PHA,53.1,-6.1,dup1\n"
            b"Clinic A2,PHA,53.2,-6.2,dup1\n"
        )

        dry = run_import(content, store=DryRunLocationStore())
        self.assertEqual(Location.objects.count(), 0)

        real = run_import(content)

        self.assertEqual((dry.inserted, dry.updated), (1, 1))
        self.assertEqual((dry.inserted, dry.updated), (real.inserted, real.updated))
        self.assertEqual(Location.objects.get(source_id="dup1").name, "Clinic A2")

    def test_dry_run_store_remembers_updates_to_existing_records(self):
        LocationFactory(source="import", source_id="keep1", name="Old")
        store = DryRunLocationStore()

        run_import(
            b"name,type,lat,lng,sourceid\nRenamed,PHA,53.2,-6.2,keep1\n", store=store
        )

        self.assertEqual(store.find_by_natural_key("import", "keep1").name, "Renamed")
        self.assertEqual(Location.objects.get(source_id="keep1").name, "Old")
