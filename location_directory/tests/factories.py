"""
Factory classes for creating test data.
"""

import factory
from factory.django import DjangoModelFactory

from locations.models import GeocodeCache, Location


class LocationFactory(DjangoModelFactory):
    """
    Factory for creating Location test instances.
    """

    class Meta:
        model = Location

    name = factory.Faker("company")
    type = factory.Iterator(["PHA", "HOSP", "Garda", "NURSE", "MABS"])
    eircode = factory.Sequence(lambda n: f"D{n % 24 + 1:02d} X{n:03d}")
    address = factory.Faker("street_address")
    lat = factory.Faker("pyfloat", min_value=51.4, max_value=55.4)
    lng = factory.Faker("pyfloat", min_value=-10.5, max_value=-6.0)
    email = factory.Faker("email")
    phone = factory.Faker("phone_number")
    link = factory.Faker("url")
    is_active = True
    source = "import"
    source_id = factory.Sequence(lambda n: f"src_{n}")


class InactiveLocationFactory(LocationFactory):
    """
    Factory for soft-deleted locations.
    """

    is_active = False


class GeocodeCacheFactory(DjangoModelFactory):
    """
    Factory for cached geocode answers.
    """

    class Meta:
        model = GeocodeCache

    normalized_query = factory.Sequence(lambda n: f"D02X{n:03d}")
    display_query = factory.LazyAttribute(lambda obj: obj.normalized_query)
    lat = 53.3498
    lng = -6.2603
    provider = "google"
    hit_count = 1
