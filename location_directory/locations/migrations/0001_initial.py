import uuid

import django.core.validators
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="GeocodeCache",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4,
                        editable=False,
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                ("normalized_query", models.CharField(max_length=255, unique=True)),
                (
                    "display_query",
                    models.CharField(blank=True, default="", max_length=255),
                ),
                ("eircode", models.CharField(blank=True, max_length=16, null=True)),
                ("lat", models.FloatField()),
                ("lng", models.FloatField()),
                ("provider", models.CharField(blank=True, default="", max_length=32)),
                ("hit_count", models.PositiveIntegerField(default=0)),
                ("last_used_at", models.DateTimeField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name": "geocode cache entry",
                "verbose_name_plural": "geocode cache entries",
            },
        ),
        migrations.CreateModel(
            name="Location",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4,
                        editable=False,
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                ("name", models.CharField(max_length=255)),
                ("type", models.CharField(db_index=True, max_length=64)),
                (
                    "eircode",
                    models.CharField(
                        blank=True, db_index=True, max_length=16, null=True
                    ),
                ),
                ("address", models.TextField(blank=True, null=True)),
                (
                    "lat",
                    models.FloatField(
                        validators=[
                            django.core.validators.MinValueValidator(-90.0),
                            django.core.validators.MaxValueValidator(90.0),
                        ]
                    ),
                ),
                (
                    "lng",
                    models.FloatField(
                        validators=[
                            django.core.validators.MinValueValidator(-180.0),
                            django.core.validators.MaxValueValidator(180.0),
                        ]
                    ),
                ),
                ("email", models.CharField(blank=True, max_length=255, null=True)),
                ("phone", models.CharField(blank=True, max_length=64, null=True)),
                ("contact1", models.CharField(blank=True, max_length=255, null=True)),
                ("contact2", models.CharField(blank=True, max_length=255, null=True)),
                ("contact3", models.CharField(blank=True, max_length=255, null=True)),
                ("link", models.CharField(blank=True, max_length=500, null=True)),
                ("is_active", models.BooleanField(db_index=True, default=True)),
                ("source", models.CharField(db_index=True, max_length=64)),
                ("source_id", models.CharField(blank=True, max_length=128, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "indexes": [
                    models.Index(
                        fields=["is_active", "type"],
                        name="location_active_type_idx",
                    )
                ],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("source", "source_id"), name="unique_source_source_id"
                    )
                ],
            },
        ),
    ]
