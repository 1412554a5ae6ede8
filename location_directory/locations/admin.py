"""
Admin configuration for the locations app.
"""

import logging
from typing import Any

from django.contrib import admin, messages
from django.db.models import QuerySet
from django.http import HttpRequest

from .models import GeocodeCache, Location

logger = logging.getLogger(__name__)


@admin.register(Location)
class LocationAdmin(admin.ModelAdmin):
    """
    Admin interface for Location model.

    Search functionality:
    - Internal ID: Use the exact UUID
    - Source ID: Use the provider's exact identifier (e.g., "abc123")
    - Name / Eircode: Use partial text search (e.g., "clinic", "D02")

    Filters available:
    - Type: Filter by location type
    - Source: Filter by data provider / import batch
    - Active: Filter visible or soft-deleted locations
    """

    list_display = (
        "name",
        "type",
        "eircode",
        "source",
        "source_id",
        "is_active",
        "coordinates_display",
        "updated_at",
    )
    search_fields = ("=id", "=source_id", "name", "eircode")
    list_filter = ("type", "source", "is_active")
    ordering = ("name",)
    list_per_page = 50
    readonly_fields = ("id", "created_at", "updated_at")

    search_help_text = (
        "Search by: Internal ID (exact match), Source ID (exact match), "
        "or Name / Eircode (partial match)."
    )

    preserve_filters = True
    show_full_result_count = True

    list_display_links = ("name",)

    fieldsets = (
        ("Basic Information", {"fields": ("id", "name", "type", "is_active")}),
        ("Location", {"fields": ("eircode", "address", "lat", "lng")}),
        (
            "Contact",
            {
                "fields": (
                    "email",
                    "phone",
                    "contact1",
                    "contact2",
                    "contact3",
                    "link",
                ),
            },
        ),
        (
            "Provenance",
            {
                "fields": ("source", "source_id", "created_at", "updated_at"),
                "classes": ("collapse",),
            },
        ),
    )

    actions = ["mark_active", "mark_inactive"]

    @admin.action(description="Mark selected locations active")
    def mark_active(self, request: HttpRequest, queryset: QuerySet[Location]) -> None:
        """
        Admin action to make locations visible on the map again.
        """
        updated_count = queryset.filter(is_active=False).update(is_active=True)
        logger.info(f"Reactivated {updated_count} locations via admin")
        self.message_user(request, f"Marked {updated_count} location(s) active.")

    @admin.action(description="Mark selected locations inactive")
    def mark_inactive(
        self, request: HttpRequest, queryset: QuerySet[Location]
    ) -> None:
        """
        Admin action to hide locations from the map without deleting them.
        """
        updated_count = queryset.filter(is_active=True).update(is_active=False)
        logger.info(f"Deactivated {updated_count} locations via admin")
        self.message_user(
            request,
            f"Marked {updated_count} location(s) inactive.",
            level=messages.WARNING if updated_count == 0 else messages.SUCCESS,
        )

    @admin.display(description="Coordinates")
    def coordinates_display(self, obj: Location) -> str:
        """
        Display lat/lng as a single column in the admin list.
        """
        return f"{obj.lat:.5f}, {obj.lng:.5f}"

    def save_model(
        self, request: HttpRequest, obj: Location, form: Any, change: bool
    ) -> None:
        super().save_model(request, obj, form, change)

        if change:
            logger.info(f"Updated location {obj.id} ({obj.name}) via admin interface")
        else:
            logger.info(f"Created location {obj.id} ({obj.name}) via admin interface")


@admin.register(GeocodeCache)
class GeocodeCacheAdmin(admin.ModelAdmin):
    list_display = (
        "normalized_query",
        "lat",
        "lng",
        "provider",
        "hit_count",
        "last_used_at",
    )
    search_fields = ("normalized_query", "display_query", "eircode")
    list_filter = ("provider",)
    ordering = ("-last_used_at",)
    readonly_fields = ("hit_count", "last_used_at", "created_at", "updated_at")
