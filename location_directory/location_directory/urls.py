"""
URL configuration for location_directory project.

The `urlpatterns` list routes URLs to views. For more information please see:
    https://docs.djangoproject.com/en/5.2/topics/http/urls/
"""

from django.conf import settings
from django.contrib import admin
from django.http import JsonResponse
from django.shortcuts import redirect
from django.urls import include, path


def health_check(request):
    """Simple health check endpoint."""
    return JsonResponse({"status": "ok"})


def home_redirect(request):
    """Redirect root URL to the locations API."""
    return redirect("/api/locations/")


urlpatterns = [
    path("", home_redirect, name="home"),
    path("admin/", admin.site.urls),
    path("health/", health_check, name="health"),
    path("api/", include("locations.urls")),
    path("api/auth/", include("rest_framework.urls", namespace="rest_framework")),
]

# Add debug toolbar URLs in development
if settings.DEBUG and "debug_toolbar" in settings.INSTALLED_APPS:
    import debug_toolbar

    urlpatterns = [
        path("__debug__/", include(debug_toolbar.urls)),
    ] + urlpatterns
