"""
URL configuration for MyFood.
"""

from django.contrib import admin
from django.urls import include, path

urlpatterns = [
    path("admin/", admin.site.urls),
    # Public API endpoints
    path("api/v1/", include("apps.web.restaurant.urls")),
]
