"""
URL configuration for Delivery Catalog.
"""

from django.contrib import admin
from django.urls import include, path

urlpatterns = [
    path("admin/", admin.site.urls),
    # Catalog API endpoints
    path("", include("apps.web.kitchen.urls")),
    path("", include("apps.web.restaurant.urls")),
]
