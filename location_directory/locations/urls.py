"""
URL configuration for locations app API endpoints.
"""

from django.http import JsonResponse
from django.urls import include, path
from rest_framework.routers import DefaultRouter

from .views import GeocodeView, ImportUploadView, LocationViewSet

# Create router and register viewsets
router = DefaultRouter()
router.register(r"locations", LocationViewSet, basename="location")

app_name = "locations"


def api_health(request):
    """Health check under the API prefix."""
    return JsonResponse({"ok": True})


urlpatterns = [
    path("health/", api_health, name="health"),
    path("import/excel", ImportUploadView.as_view(), name="import-excel"),
    path("geocode", GeocodeView.as_view(), name="geocode"),
    path("", include(router.urls)),
]
