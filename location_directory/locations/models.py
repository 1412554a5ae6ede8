"""
Models for the locations app.
"""

import uuid
from typing import Optional, Tuple

from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models


class Location(models.Model):
    """
    A point of interest shown on the map, keyed naturally by (source, source_id).
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255)
    type = models.CharField(max_length=64, db_index=True)
    eircode = models.CharField(max_length=16, null=True, blank=True, db_index=True)
    address = models.TextField(null=True, blank=True)
    lat = models.FloatField(
        validators=[MinValueValidator(-90.0), MaxValueValidator(90.0)]
    )
    lng = models.FloatField(
        validators=[MinValueValidator(-180.0), MaxValueValidator(180.0)]
    )
    email = models.CharField(max_length=255, null=True, blank=True)
    phone = models.CharField(max_length=64, null=True, blank=True)
    contact1 = models.CharField(max_length=255, null=True, blank=True)
    contact2 = models.CharField(max_length=255, null=True, blank=True)
    contact3 = models.CharField(max_length=255, null=True, blank=True)
    link = models.CharField(max_length=500, null=True, blank=True)
    is_active = models.BooleanField(default=True, db_index=True)
    source = models.CharField(max_length=64, db_index=True)
    source_id = models.CharField(max_length=128, null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(
                fields=["source", "source_id"], name="unique_source_source_id"
            ),
        ]
        indexes = [
            models.Index(fields=["is_active", "type"], name="location_active_type_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.name} ({self.type})"

    def save(self, *args, **kwargs) -> None:
        """
        Custom save method with validation.
        """
        self.full_clean()
        super().save(*args, **kwargs)

    @property
    def natural_key(self) -> Optional[Tuple[str, str]]:
        """
        The (source, source_id) pair, or None for records without a provider id.
        """
        if not self.source_id:
            return None
        return self.source, self.source_id


class GeocodeCache(models.Model):
    """
    Resolved coordinates for a normalized geocoding query.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    normalized_query = models.CharField(max_length=255, unique=True)
    display_query = models.CharField(max_length=255, blank=True, default="")
    eircode = models.CharField(max_length=16, null=True, blank=True)
    lat = models.FloatField()
    lng = models.FloatField()
    provider = models.CharField(max_length=32, blank=True, default="")
    hit_count = models.PositiveIntegerField(default=0)
    last_used_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "geocode cache entry"
        verbose_name_plural = "geocode cache entries"

    def __str__(self) -> str:
        return f"{self.normalized_query} -> ({self.lat}, {self.lng})"
