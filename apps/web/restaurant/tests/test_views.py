"""
Integration tests for restaurant API views.
"""

import json
from decimal import Decimal

from django.conf import settings
from django.test import Client as DjangoClient

import pytest

from apps.web.geo.tests.factories import CityFactory
from apps.web.kitchen.tests.factories import KitchenFactory
from apps.web.restaurant.models import Restaurant

from .factories import ProductFactory, RestaurantFactory


def _put_json(client: DjangoClient, url: str, data) -> object:
    return client.put(url, data=json.dumps(data), content_type="application/json")


@pytest.fixture
def restaurant_payload(db) -> dict:
    """A valid create/update body."""
    kitchen = KitchenFactory(name="Italian")
    city = CityFactory(name="Sao Paulo")
    return {
        "name": "Bella Napoli",
        "shipping_fee": "0.00",
        "kitchen": {"id": kitchen.pk},
        "address": {
            "zip_code": "01310-100",
            "street": "Avenida Paulista",
            "number": "1000",
            "district": "Bela Vista",
            "city": {"id": city.pk},
        },
    }


@pytest.mark.django_db
class TestAuthorizationGate:
    """Tests that every endpoint is gated before it runs."""

    def test_anonymous_gets_401(self, api_client: DjangoClient) -> None:
        """Test anonymous reads are rejected with a challenge."""
        response = api_client.get("/restaurants")

        assert response.status_code == 401
        assert response.json()["error"] == "unauthorized"
        assert "WWW-Authenticate" in response

    def test_anonymous_invalid_body_still_401(self, api_client: DjangoClient) -> None:
        """Test the gate runs before the body is validated."""
        response = api_client.post(
            "/restaurants", data="not json", content_type="application/json"
        )

        assert response.status_code == 401

    def test_consultant_cannot_activate(
        self, consultant_client: DjangoClient
    ) -> None:
        """Test a consultant is forbidden from mutations and nothing changes."""
        restaurant = RestaurantFactory(is_active=False)

        response = consultant_client.put(f"/restaurants/{restaurant.code}/active")

        assert response.status_code == 403
        assert response.json()["error"] == "forbidden"
        restaurant.refresh_from_db()
        assert restaurant.is_active is False

    def test_no_role_cannot_read(self, outsider) -> None:
        """Test a user without a role is forbidden from reads."""
        http_client = DjangoClient()
        http_client.force_login(outsider)

        response = http_client.get("/restaurants")

        assert response.status_code == 403

    def test_consultant_can_read(self, consultant_client: DjangoClient) -> None:
        """Test a consultant can list restaurants."""
        RestaurantFactory()

        response = consultant_client.get("/restaurants")

        assert response.status_code == 200

    def test_consultant_forbidden_before_not_found(
        self, consultant_client: DjangoClient
    ) -> None:
        """Test authorization is decided before the restaurant is looked up."""
        response = consultant_client.delete("/restaurants/missing")

        assert response.status_code == 403


@pytest.mark.django_db
class TestRestaurantCrudAPI:
    """Tests for create, read, update and delete."""

    def test_create(
        self, manager_client: DjangoClient, restaurant_payload: dict
    ) -> None:
        """Test POST /restaurants returns 201 with a closed, inactive summary."""
        response = manager_client.post(
            "/restaurants",
            data=json.dumps(restaurant_payload),
            content_type="application/json",
        )

        assert response.status_code == 201
        data = response.json()
        assert data["name"] == "Bella Napoli"
        assert data["kitchen_name"] == "Italian"
        assert data["is_active"] is False
        assert data["is_open"] is False
        assert "id" not in data
        assert Restaurant.objects.filter(code=data["code"]).exists()

    def test_create_validation_error(self, manager_client: DjangoClient) -> None:
        """Test a malformed body is a validation error."""
        response = manager_client.post(
            "/restaurants",
            data=json.dumps({"name": ""}),
            content_type="application/json",
        )

        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"

    def test_create_unknown_kitchen(
        self, manager_client: DjangoClient, restaurant_payload: dict
    ) -> None:
        """Test a missing kitchen is a business rule violation."""
        restaurant_payload["kitchen"] = {"id": 999}

        response = manager_client.post(
            "/restaurants",
            data=json.dumps(restaurant_payload),
            content_type="application/json",
        )

        assert response.status_code == 400
        assert response.json()["error"] == "business_rule_violation"
        assert not Restaurant.objects.exists()

    def test_get_detail(self, consultant_client: DjangoClient) -> None:
        """Test GET /restaurants/{code} includes kitchen and address."""
        restaurant = RestaurantFactory(
            name="Bella Napoli", address_city__state__abbreviation="SP"
        )

        response = consultant_client.get(f"/restaurants/{restaurant.code}")

        assert response.status_code == 200
        data = response.json()
        assert data["code"] == restaurant.code
        assert data["kitchen"]["id"] == restaurant.kitchen_id
        assert data["address"]["city"]["state"] == "SP"

    def test_get_missing(self, consultant_client: DjangoClient) -> None:
        """Test an unknown code is 404."""
        response = consultant_client.get("/restaurants/missing")

        assert response.status_code == 404
        assert response.json()["error"] == "not_found"

    def test_update(
        self, manager_client: DjangoClient, restaurant_payload: dict
    ) -> None:
        """Test PUT /restaurants/{code} overwrites the data."""
        restaurant = RestaurantFactory(name="Old Name")
        restaurant_payload["name"] = "New Name"

        response = _put_json(
            manager_client, f"/restaurants/{restaurant.code}", restaurant_payload
        )

        assert response.status_code == 200
        assert response.json()["name"] == "New Name"
        assert response.json()["code"] == restaurant.code

    def test_delete(self, manager_client: DjangoClient) -> None:
        """Test DELETE /restaurants/{code} returns 204."""
        restaurant = RestaurantFactory()

        response = manager_client.delete(f"/restaurants/{restaurant.code}")

        assert response.status_code == 204
        assert not Restaurant.objects.filter(code=restaurant.code).exists()

    def test_delete_with_products_conflicts(
        self, manager_client: DjangoClient
    ) -> None:
        """Test deleting a restaurant with products returns 409."""
        product = ProductFactory()

        response = manager_client.delete(f"/restaurants/{product.restaurant.code}")

        assert response.status_code == 409

    def test_method_not_allowed(self, manager_client: DjangoClient) -> None:
        """Test unsupported methods are rejected."""
        response = manager_client.patch("/restaurants")

        assert response.status_code == 405


@pytest.mark.django_db
class TestLifecycleAPI:
    """Tests for activation and opening endpoints."""

    def test_activate_and_open(self, manager_client: DjangoClient) -> None:
        """Test PUT active then PUT open."""
        restaurant = RestaurantFactory()

        activated = manager_client.put(f"/restaurants/{restaurant.code}/active")
        opened = manager_client.put(f"/restaurants/{restaurant.code}/open")

        assert activated.status_code == 204
        assert opened.status_code == 204

        restaurant.refresh_from_db()
        assert restaurant.is_active is True
        assert restaurant.is_open is True

    def test_open_inactive_is_business_violation(
        self, manager_client: DjangoClient
    ) -> None:
        """Test opening an inactive restaurant returns 400."""
        restaurant = RestaurantFactory(is_active=False)

        response = manager_client.put(f"/restaurants/{restaurant.code}/open")

        assert response.status_code == 400
        assert response.json()["error"] == "business_rule_violation"
        restaurant.refresh_from_db()
        assert restaurant.is_open is False

    def test_inactivate_closes(self, manager_client: DjangoClient) -> None:
        """Test DELETE active closes an open restaurant."""
        restaurant = RestaurantFactory(is_active=True, is_open=True)

        response = manager_client.delete(f"/restaurants/{restaurant.code}/active")

        assert response.status_code == 204
        restaurant.refresh_from_db()
        assert (restaurant.is_active, restaurant.is_open) == (False, False)

    def test_close(self, manager_client: DjangoClient) -> None:
        """Test DELETE open closes the restaurant."""
        restaurant = RestaurantFactory(is_active=True, is_open=True)

        response = manager_client.delete(f"/restaurants/{restaurant.code}/open")

        assert response.status_code == 204
        restaurant.refresh_from_db()
        assert restaurant.is_open is False

    def test_activate_unknown(self, manager_client: DjangoClient) -> None:
        """Test activating a missing restaurant returns 404."""
        response = manager_client.put("/restaurants/missing/active")

        assert response.status_code == 404

    def test_activate_multiples(self, manager_client: DjangoClient) -> None:
        """Test batch activation."""
        first, second = RestaurantFactory.create_batch(2)

        response = _put_json(
            manager_client, "/restaurants/active-multiples", [first.code, second.code]
        )

        assert response.status_code == 204
        assert Restaurant.objects.filter(is_active=True).count() == 2

    def test_activate_multiples_rejects_unknown(
        self, manager_client: DjangoClient
    ) -> None:
        """Test one unknown code fails the whole batch."""
        restaurant = RestaurantFactory()

        response = _put_json(
            manager_client, "/restaurants/active-multiples", [restaurant.code, "nope"]
        )

        assert response.status_code == 400
        assert response.json()["error"] == "business_rule_violation"
        restaurant.refresh_from_db()
        assert restaurant.is_active is False

    def test_inactivate_multiples(self, manager_client: DjangoClient) -> None:
        """Test batch inactivation."""
        restaurant = RestaurantFactory(is_active=True, is_open=True)

        response = manager_client.delete(
            "/restaurants/active-multiples",
            data=json.dumps([restaurant.code]),
            content_type="application/json",
        )

        assert response.status_code == 204
        restaurant.refresh_from_db()
        assert restaurant.is_active is False

    def test_batch_body_must_be_list(self, manager_client: DjangoClient) -> None:
        """Test a non-list body is a validation error."""
        response = _put_json(
            manager_client, "/restaurants/active-multiples", {"codes": []}
        )

        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"


@pytest.mark.django_db
class TestAddressAPI:
    """Tests for PUT /restaurants/{code}/update-address."""

    def test_update_address(self, manager_client: DjangoClient) -> None:
        """Test the address is replaced and returned."""
        restaurant = RestaurantFactory()
        city = CityFactory(name="Campinas")

        response = _put_json(
            manager_client,
            f"/restaurants/{restaurant.code}/update-address",
            {
                "zip_code": "13010-000",
                "street": "Rua Barao de Jaguara",
                "number": "10",
                "district": "Centro",
                "city": {"id": city.pk},
            },
        )

        assert response.status_code == 200
        assert response.json()["address"]["city"]["name"] == "Campinas"

    def test_update_address_unknown_city(self, manager_client: DjangoClient) -> None:
        """Test an unknown city is a business rule violation."""
        restaurant = RestaurantFactory()

        response = _put_json(
            manager_client,
            f"/restaurants/{restaurant.code}/update-address",
            {
                "zip_code": "13010-000",
                "street": "Rua",
                "number": "10",
                "district": "Centro",
                "city": {"id": 999},
            },
        )

        assert response.status_code == 400
        assert response.json()["error"] == "business_rule_violation"


@pytest.mark.django_db
class TestSearchAPI:
    """Tests for listing and searching."""

    def test_list_shape(self, consultant_client: DjangoClient) -> None:
        """Test the paged response shape."""
        RestaurantFactory.create_batch(3)

        response = consultant_client.get("/restaurants", {"page": 2, "size": 2})

        data = response.json()
        assert set(data) == {
            "content",
            "page",
            "size",
            "total_elements",
            "total_pages",
        }
        assert len(data["content"]) == 1
        assert data["total_pages"] == 2

    def test_invalid_page(self, consultant_client: DjangoClient) -> None:
        """Test a non-positive page is a validation error."""
        response = consultant_client.get("/restaurants", {"page": 0})

        assert response.status_code == 400

    def test_by_name_query_param(self, consultant_client: DjangoClient) -> None:
        """Test GET /restaurants?by-name= filters by name."""
        RestaurantFactory(name="Bella Napoli")
        RestaurantFactory(name="Sushi Bar")

        response = consultant_client.get("/restaurants", {"by-name": "NAPOLI"})

        names = [r["name"] for r in response.json()["content"]]
        assert names == ["Bella Napoli"]

    def test_by_name_route(self, consultant_client: DjangoClient) -> None:
        """Test GET /restaurants/by-name?name= filters by name."""
        RestaurantFactory(name="Bella Napoli")
        RestaurantFactory(name="Sushi Bar")

        response = consultant_client.get("/restaurants/by-name", {"name": "sushi"})

        assert [r["name"] for r in response.json()["content"]] == ["Sushi Bar"]

    def test_free_delivery(self, consultant_client: DjangoClient) -> None:
        """Test only zero-fee restaurants are listed."""
        RestaurantFactory(name="Free", shipping_fee=Decimal("0"))
        RestaurantFactory(name="Paid", shipping_fee=Decimal("4.99"))

        response = consultant_client.get("/restaurants/free-delivery")

        assert response.status_code == 200
        content = response.json()["content"]
        assert [r["name"] for r in content] == ["Free"]
        assert content[0]["shipping_fee"] == "0.00"


@pytest.mark.django_db
class TestCsrfProtection:
    """Tests that session-authenticated writes need a CSRF token."""

    TOKEN = "a" * 32

    @pytest.fixture
    def csrf_client(self, manager) -> DjangoClient:
        """Manager session on a client that enforces CSRF checks."""
        http_client = DjangoClient(enforce_csrf_checks=True)
        http_client.force_login(manager)
        return http_client

    def test_write_without_token_is_rejected(
        self, csrf_client: DjangoClient
    ) -> None:
        """Test a write with only the session cookie is refused."""
        restaurant = RestaurantFactory(is_active=False)

        response = csrf_client.put(f"/restaurants/{restaurant.code}/active")

        assert response.status_code == 403
        restaurant.refresh_from_db()
        assert restaurant.is_active is False

    def test_write_with_token_succeeds(self, csrf_client: DjangoClient) -> None:
        """Test a write carrying the CSRF cookie and header goes through."""
        restaurant = RestaurantFactory(is_active=False)
        csrf_client.cookies[settings.CSRF_COOKIE_NAME] = self.TOKEN

        response = csrf_client.put(
            f"/restaurants/{restaurant.code}/active", HTTP_X_CSRFTOKEN=self.TOKEN
        )

        assert response.status_code == 204
        restaurant.refresh_from_db()
        assert restaurant.is_active is True

    def test_reads_need_no_token(self, csrf_client: DjangoClient) -> None:
        """Test safe methods are not CSRF checked."""
        restaurant = RestaurantFactory()

        response = csrf_client.get(f"/restaurants/{restaurant.code}")

        assert response.status_code == 200
