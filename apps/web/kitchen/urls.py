"""
URL routing for kitchen API endpoints.
"""

from django.urls import path

from apps.web.kitchen import views

app_name = "kitchen"

urlpatterns = [
    path("kitchens", views.kitchen_collection, name="kitchen_collection"),
    path("kitchens/<int:kitchen_id>", views.kitchen_detail, name="kitchen_detail"),
    path(
        "kitchens/<int:kitchen_id>/restaurants",
        views.kitchen_restaurants,
        name="kitchen_restaurants",
    ),
]
