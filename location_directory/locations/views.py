"""
DRF views for the locations app.
"""

import logging

from django.conf import settings
from django.db.models import Count, QuerySet
from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.parsers import FormParser, MultiPartParser
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from .models import Location
from .serializers import GeocodeRequestSerializer, LocationSerializer
from .services.exceptions import GeocodingError, ImportFileError
from .services.geocoding import GeocodeFailure, geocode
from .services.importer import run_import

logger = logging.getLogger(__name__)


class LocationViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.CreateModelMixin,
    mixins.UpdateModelMixin,
    viewsets.GenericViewSet,
):
    """
    ViewSet for Location records.

    The list returns active locations only, most recently updated first,
    without pagination since the map renders every marker. Supports
    filtering by:
    - type: Exact match by location type (?type=PHA)
    - source: Exact match by data source (?source=import)
    """

    serializer_class = LocationSerializer
    pagination_class = None

    def get_queryset(self) -> QuerySet[Location]:
        """
        Get the queryset; only list and types hide inactive locations.
        """
        queryset = Location.objects.all()

        if self.action in ("list", "types"):
            queryset = queryset.filter(is_active=True).order_by("-updated_at")
            queryset = self._apply_filters(queryset)

        return queryset

    def _apply_filters(self, queryset: QuerySet[Location]) -> QuerySet[Location]:
        """
        Apply custom filters based on query parameters.
        """
        type_param = self.request.query_params.get("type")
        if type_param:
            queryset = queryset.filter(type=type_param)

        source_param = self.request.query_params.get("source")
        if source_param:
            queryset = queryset.filter(source=source_param)

        return queryset

    def perform_create(self, serializer: LocationSerializer) -> None:
        location = serializer.save()
        logger.info(f"Created location {location.id} ({location.name}) via API")

    def perform_update(self, serializer: LocationSerializer) -> None:
        location = serializer.save()
        logger.info(f"Updated location {location.id} ({location.name}) via API")

    @action(detail=False, methods=["get"])
    def types(self, request: Request) -> Response:
        """
        Get the active location types with their marker counts.
        """
        type_counts = list(
            self.get_queryset()
            .order_by()
            .values("type")
            .annotate(count=Count("id"))
            .order_by("type")
        )

        return Response({"types": type_counts, "count": len(type_counts)})


class ImportUploadView(APIView):
    """
    Import a delimited spreadsheet export uploaded as the "file" form field.
    """

    parser_classes = [MultiPartParser, FormParser]

    def post(self, request: Request) -> Response:
        upload = request.FILES.get("file")
        if upload is None:
            return Response(
                {"ok": False, "error": "No file uploaded"},
                status=status.HTTP_400_BAD_REQUEST,
            )

        max_bytes = settings.LOCATIONS_IMPORT_MAX_UPLOAD_BYTES
        if upload.size > max_bytes:
            logger.warning(
                f"Rejected upload {upload.name}: "
                f"{upload.size} bytes exceeds {max_bytes}"
            )
            return Response(
                {"ok": False, "error": f"File exceeds the {max_bytes} byte limit"},
                status=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            )

        logger.info(f"Importing upload {upload.name} ({upload.size} bytes)")

        try:
            result = run_import(upload.read())
        except ImportFileError as e:
            logger.error(f"Import of {upload.name} failed: {e}")
            return Response(
                {"ok": False, "file": upload.name, "error": str(e)},
                status=status.HTTP_400_BAD_REQUEST,
            )

        return Response({"ok": True, "file": upload.name, **result.to_response()})


class GeocodeView(APIView):
    """
    Resolve an address or Eircode to coordinates.
    """

    def post(self, request: Request) -> Response:
        serializer = GeocodeRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        query = serializer.validated_data["query"]
        if not query:
            return Response(
                {"error": "Missing query"}, status=status.HTTP_400_BAD_REQUEST
            )

        try:
            lookup = geocode(query)
        except GeocodingError as e:
            logger.error(f"Geocoding unavailable for '{query}': {e}")
            return Response(
                {"error": str(e)}, status=status.HTTP_503_SERVICE_UNAVAILABLE
            )

        if isinstance(lookup.result, GeocodeFailure):
            return Response(
                {
                    "error": "Geocode failed",
                    "status": lookup.result.status,
                    "message": lookup.result.message,
                    "attempted": lookup.attempted,
                },
                status=status.HTTP_502_BAD_GATEWAY,
            )

        return Response(
            {
                "lat": lookup.result.lat,
                "lng": lookup.result.lng,
                "cached": lookup.cached,
            }
        )
