"""
DRF serializers for the locations app.
"""

from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework import serializers

from .models import Location


class LocationSerializer(serializers.ModelSerializer):
    """
    Serializer for Location records as consumed by the map front end.

    Multi-word fields are exposed in camelCase.
    """

    isActive = serializers.BooleanField(source="is_active", required=False)
    sourceId = serializers.CharField(
        source="source_id", required=False, allow_null=True, allow_blank=True
    )
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = Location
        fields = [
            "id",
            "name",
            "type",
            "eircode",
            "address",
            "lat",
            "lng",
            "email",
            "phone",
            "contact1",
            "contact2",
            "contact3",
            "link",
            "isActive",
            "source",
            "sourceId",
            "createdAt",
            "updatedAt",
        ]
        read_only_fields = ["id"]
        # Uniqueness of (source, source_id) is enforced by Location.save()
        validators = []

    def validate_sourceId(self, value):
        return value or None

    def create(self, validated_data):
        try:
            return super().create(validated_data)
        except DjangoValidationError as e:
            raise serializers.ValidationError(serializers.as_serializer_error(e))

    def update(self, instance, validated_data):
        try:
            return super().update(instance, validated_data)
        except DjangoValidationError as e:
            raise serializers.ValidationError(serializers.as_serializer_error(e))


class GeocodeRequestSerializer(serializers.Serializer):
    """
    Body of a geocode request.
    """

    query = serializers.CharField(trim_whitespace=True, allow_blank=True, default="")
