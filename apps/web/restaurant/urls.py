"""
URL routing for restaurant API endpoints.

Fixed paths are listed before ``<str:code>`` so they are never read as codes.
"""

from django.urls import path

from apps.web.restaurant import views

app_name = "restaurant"

urlpatterns = [
    path("restaurants", views.restaurant_collection, name="restaurant_collection"),
    path("restaurants/by-name", views.by_name, name="restaurant_by_name"),
    path("restaurants/free-delivery", views.free_delivery, name="free_delivery"),
    path(
        "restaurants/active-multiples",
        views.restaurant_active_multiples,
        name="active_multiples",
    ),
    # Single restaurant
    path("restaurants/<str:code>", views.restaurant_detail, name="restaurant_detail"),
    path(
        "restaurants/<str:code>/active",
        views.restaurant_active,
        name="restaurant_active",
    ),
    path("restaurants/<str:code>/open", views.restaurant_open, name="restaurant_open"),
    path(
        "restaurants/<str:code>/update-address",
        views.update_address,
        name="update_address",
    ),
    # Products
    path(
        "restaurants/<str:code>/products",
        views.product_collection,
        name="product_collection",
    ),
    path(
        "restaurants/<str:code>/products/<int:product_id>",
        views.product_detail,
        name="product_detail",
    ),
    path(
        "restaurants/<str:code>/products/<int:product_id>/photo",
        views.product_photo,
        name="product_photo",
    ),
]
