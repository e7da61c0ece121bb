"""
URL configuration for core_backend project.
"""

from django.http import JsonResponse
from django.urls import include, path


def health_check(request):
    """Simple health check endpoint that doesn't require authentication"""
    return JsonResponse({"status": "ok", "message": "Backend is running"})


urlpatterns = [
    path("api/health/", health_check, name="health_check"),
    path("api/splits/", include("splits.urls")),
    path("api/seats/", include("seating.urls")),
]
