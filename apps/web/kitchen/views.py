"""
Kitchen API views.

Kitchen CRUD is not capability-gated; listing a kitchen's restaurants is a
restaurant read and requires the consult capability.
"""

from django.http import HttpRequest, HttpResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_http_methods

from apps.web.core.api import json_response, no_content, parse_body
from apps.web.core.decorators import check_security
from apps.web.core.pagination import PageRequest
from apps.web.kitchen import services
from apps.web.kitchen.models import Kitchen
from apps.web.kitchen.serializers import KitchenInput, KitchenSchema
from apps.web.restaurant import services as restaurant_services
from apps.web.restaurant.serializers import to_restaurant_summary


def _dump(kitchen: Kitchen) -> dict:
    return KitchenSchema.model_validate(kitchen).model_dump(mode="json")


@csrf_exempt
@require_http_methods(["GET", "POST"])
def kitchen_collection(request: HttpRequest) -> HttpResponse:
    """
    GET /kitchens - paged list of kitchens
    POST /kitchens - create a kitchen (201)
    """
    if request.method == "POST":
        kitchen = services.create(parse_body(KitchenInput, request))
        return json_response(_dump(kitchen), status=201)

    page = services.find_all(PageRequest.from_request(request))
    return json_response(page.map(_dump).to_dict())


@csrf_exempt
@require_http_methods(["GET", "PUT", "DELETE"])
def kitchen_detail(request: HttpRequest, kitchen_id: int) -> HttpResponse:
    """
    GET /kitchens/{id}
    PUT /kitchens/{id}
    DELETE /kitchens/{id} (204)
    """
    if request.method == "PUT":
        kitchen = services.update(kitchen_id, parse_body(KitchenInput, request))
        return json_response(_dump(kitchen))

    if request.method == "DELETE":
        services.delete_by_id(kitchen_id)
        return no_content()

    return json_response(_dump(services.find_by_id(kitchen_id)))


@require_GET
@check_security("restaurant.by_kitchen")
def kitchen_restaurants(request: HttpRequest, kitchen_id: int) -> HttpResponse:
    """
    GET /kitchens/{id}/restaurants

    Paged restaurants belonging to a kitchen.
    """
    services.find_by_id(kitchen_id)
    page = restaurant_services.restaurants_by_kitchen(
        kitchen_id, PageRequest.from_request(request)
    )
    return json_response(page.map(to_restaurant_summary).to_dict())
