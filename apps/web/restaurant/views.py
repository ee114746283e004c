"""
Restaurant API views - lifecycle, search and product endpoints.

Every view is tagged with its operation in OPERATION_POLICY; the gate runs
before the body, so a denied request has no side effects. Domain errors
raised by the services are turned into responses by ApiErrorMiddleware.
Writes rely on the session cookie, so CsrfViewMiddleware checks them.
"""

from django.http import HttpRequest, HttpResponse
from django.http.multipartparser import MultiPartParser, MultiPartParserError
from django.views.decorators.http import require_GET, require_http_methods

from apps.web.core.api import json_response, no_content, parse_body, parse_body_as
from apps.web.core.decorators import check_security
from apps.web.core.exceptions import RequestValidationError
from apps.web.core.pagination import PageRequest
from apps.web.restaurant import products, services
from apps.web.restaurant.serializers import (
    AddressInput,
    ProductInput,
    RestaurantInput,
    to_photo,
    to_product,
    to_restaurant_detail,
    to_restaurant_summary,
)

# =============================================================================
# Restaurant queries
# =============================================================================


@check_security("restaurant.find_all")
def find_all(request: HttpRequest) -> HttpResponse:
    """GET /restaurants - paged list ordered by name."""
    page = services.find_all(PageRequest.from_request(request))
    return json_response(page.map(to_restaurant_summary).to_dict())


@check_security("restaurant.find_by_like_name")
def find_by_like_name(request: HttpRequest, fragment: str) -> HttpResponse:
    """GET /restaurants?by-name=fragment - case-insensitive name search."""
    page = services.find_by_like_name(fragment, PageRequest.from_request(request))
    return json_response(page.map(to_restaurant_summary).to_dict())


@check_security("restaurant.find_by_code")
def find_by_code(request: HttpRequest, code: str) -> HttpResponse:
    """GET /restaurants/{code} - restaurant with kitchen and address."""
    return json_response(to_restaurant_detail(services.find_by_code(code)))


@require_GET
def by_name(request: HttpRequest) -> HttpResponse:
    """
    GET /restaurants/by-name?name=fragment

    Case-insensitive name search.
    """
    return find_by_like_name(request, request.GET.get("name", ""))


@require_GET
@check_security("restaurant.free_delivery")
def free_delivery(request: HttpRequest) -> HttpResponse:
    """
    GET /restaurants/free-delivery

    Restaurants with a zero shipping fee.
    """
    page = services.restaurants_with_free_delivery(PageRequest.from_request(request))
    return json_response(page.map(to_restaurant_summary).to_dict())


# =============================================================================
# Restaurant mutations
# =============================================================================


@check_security("restaurant.create")
def create(request: HttpRequest) -> HttpResponse:
    """
    POST /restaurants

    Creates an inactive, closed restaurant (201).
    """
    restaurant = services.create(parse_body(RestaurantInput, request))
    return json_response(to_restaurant_summary(restaurant), status=201)


@check_security("restaurant.update")
def update(request: HttpRequest, code: str) -> HttpResponse:
    """
    PUT /restaurants/{code}

    Overwrites name, shipping fee, kitchen and address.
    """
    restaurant = services.update(code, parse_body(RestaurantInput, request))
    return json_response(to_restaurant_summary(restaurant))


@check_security("restaurant.delete")
def delete(_request: HttpRequest, code: str) -> HttpResponse:
    """DELETE /restaurants/{code} (204)."""
    services.delete_by_code(code)
    return no_content()


@check_security("restaurant.activate")
def activate(_request: HttpRequest, code: str) -> HttpResponse:
    """PUT /restaurants/{code}/active (204)."""
    services.activate(code)
    return no_content()


@check_security("restaurant.inactivate")
def inactivate(_request: HttpRequest, code: str) -> HttpResponse:
    """DELETE /restaurants/{code}/active - also closes the restaurant (204)."""
    services.inactivate(code)
    return no_content()


@check_security("restaurant.activate_multiples")
def activate_multiples(request: HttpRequest) -> HttpResponse:
    """PUT /restaurants/active-multiples with a JSON list of codes (204)."""
    services.activate_multiples(parse_body_as(list[str], request))
    return no_content()


@check_security("restaurant.inactivate_multiples")
def inactivate_multiples(request: HttpRequest) -> HttpResponse:
    """DELETE /restaurants/active-multiples with a JSON list of codes (204)."""
    services.inactivate_multiples(parse_body_as(list[str], request))
    return no_content()


@check_security("restaurant.open")
def open_restaurant(_request: HttpRequest, code: str) -> HttpResponse:
    """PUT /restaurants/{code}/open - requires an active restaurant (204)."""
    services.open_restaurant(code)
    return no_content()


@check_security("restaurant.close")
def close_restaurant(_request: HttpRequest, code: str) -> HttpResponse:
    """DELETE /restaurants/{code}/open (204)."""
    services.close_restaurant(code)
    return no_content()


@require_http_methods(["PUT"])
@check_security("restaurant.update_address")
def update_address(request: HttpRequest, code: str) -> HttpResponse:
    """
    PUT /restaurants/{code}/update-address

    Replaces the whole address and returns the restaurant.
    """
    restaurant = services.update_address(code, parse_body(AddressInput, request))
    return json_response(to_restaurant_detail(restaurant))


# =============================================================================
# Method dispatch
# =============================================================================


@require_http_methods(["GET", "POST"])
def restaurant_collection(request: HttpRequest) -> HttpResponse:
    """
    GET /restaurants[?by-name=fragment] - paged list or name search
    POST /restaurants - create (201)
    """
    if request.method == "POST":
        return create(request)
    if "by-name" in request.GET:
        return find_by_like_name(request, request.GET["by-name"])
    return find_all(request)


@require_http_methods(["GET", "PUT", "DELETE"])
def restaurant_detail(request: HttpRequest, code: str) -> HttpResponse:
    """
    GET /restaurants/{code}
    PUT /restaurants/{code}
    DELETE /restaurants/{code} (204)
    """
    if request.method == "PUT":
        return update(request, code)
    if request.method == "DELETE":
        return delete(request, code)
    return find_by_code(request, code)


@require_http_methods(["PUT", "DELETE"])
def restaurant_active(request: HttpRequest, code: str) -> HttpResponse:
    """PUT activates, DELETE inactivates (204)."""
    if request.method == "PUT":
        return activate(request, code)
    return inactivate(request, code)


@require_http_methods(["PUT", "DELETE"])
def restaurant_active_multiples(request: HttpRequest) -> HttpResponse:
    """PUT activates, DELETE inactivates every listed code, or none (204)."""
    if request.method == "PUT":
        return activate_multiples(request)
    return inactivate_multiples(request)


@require_http_methods(["PUT", "DELETE"])
def restaurant_open(request: HttpRequest, code: str) -> HttpResponse:
    """PUT opens, DELETE closes (204)."""
    if request.method == "PUT":
        return open_restaurant(request, code)
    return close_restaurant(request, code)


# =============================================================================
# Products
# =============================================================================


def _include_inactive(request: HttpRequest) -> bool:
    return request.GET.get("include-inactive", "").lower() in {"1", "true", "yes"}


@check_security("product.find_all")
def find_products(request: HttpRequest, code: str) -> HttpResponse:
    """GET /restaurants/{code}/products[?include-inactive=true]"""
    page = products.find_products(
        code,
        PageRequest.from_request(request),
        include_inactive=_include_inactive(request),
    )
    return json_response(page.map(to_product).to_dict())


@check_security("product.create")
def create_product(request: HttpRequest, code: str) -> HttpResponse:
    """POST /restaurants/{code}/products (201)."""
    product = products.create_product(code, parse_body(ProductInput, request))
    return json_response(to_product(product), status=201)


@check_security("product.find")
def find_product(_request: HttpRequest, code: str, product_id: int) -> HttpResponse:
    """GET /restaurants/{code}/products/{id}"""
    return json_response(to_product(products.find_product(code, product_id)))


@check_security("product.update")
def update_product(request: HttpRequest, code: str, product_id: int) -> HttpResponse:
    """PUT /restaurants/{code}/products/{id}"""
    product = products.update_product(
        code, product_id, parse_body(ProductInput, request)
    )
    return json_response(to_product(product))


@check_security("product.photo.find")
def find_photo(_request: HttpRequest, code: str, product_id: int) -> HttpResponse:
    """GET /restaurants/{code}/products/{id}/photo - metadata only."""
    return json_response(to_photo(products.find_photo(code, product_id)))


@check_security("product.photo.save")
def save_photo(request: HttpRequest, code: str, product_id: int) -> HttpResponse:
    """
    PUT /restaurants/{code}/products/{id}/photo

    Multipart body with ``file`` and optional ``description``.
    """
    try:
        data, files = MultiPartParser(
            request.META, request, request.upload_handlers
        ).parse()
    except MultiPartParserError as exc:
        raise RequestValidationError(
            [{"field": "body", "message": "Expected a multipart/form-data body"}]
        ) from exc

    photo = products.save_photo(
        code,
        product_id,
        files.get("file"),
        description=data.get("description", ""),
    )
    return json_response(to_photo(photo))


@check_security("product.photo.delete")
def delete_photo(_request: HttpRequest, code: str, product_id: int) -> HttpResponse:
    """DELETE /restaurants/{code}/products/{id}/photo (204)."""
    products.delete_photo(code, product_id)
    return no_content()


@require_http_methods(["GET", "POST"])
def product_collection(request: HttpRequest, code: str) -> HttpResponse:
    """
    GET /restaurants/{code}/products[?include-inactive=true]
    POST /restaurants/{code}/products (201)
    """
    if request.method == "POST":
        return create_product(request, code)
    return find_products(request, code)


@require_http_methods(["GET", "PUT"])
def product_detail(request: HttpRequest, code: str, product_id: int) -> HttpResponse:
    """
    GET /restaurants/{code}/products/{id}
    PUT /restaurants/{code}/products/{id}
    """
    if request.method == "PUT":
        return update_product(request, code, product_id)
    return find_product(request, code, product_id)


@require_http_methods(["GET", "PUT", "DELETE"])
def product_photo(request: HttpRequest, code: str, product_id: int) -> HttpResponse:
    """
    GET /restaurants/{code}/products/{id}/photo - metadata
    PUT /restaurants/{code}/products/{id}/photo - multipart upload
    DELETE /restaurants/{code}/products/{id}/photo (204)
    """
    if request.method == "PUT":
        return save_photo(request, code, product_id)
    if request.method == "DELETE":
        return delete_photo(request, code, product_id)
    return find_photo(request, code, product_id)
