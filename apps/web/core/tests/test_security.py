"""Tests for the authorization gate."""

from django.contrib.auth.models import AnonymousUser
from django.core.exceptions import PermissionDenied
from django.urls import resolve, reverse

import pytest

from apps.web.core.decorators import check_security
from apps.web.core.exceptions import NotAuthenticated
from apps.web.core.security import (
    OPERATION_POLICY,
    Capability,
    authorize,
    capabilities_for,
    required_capability,
)
from apps.web.kitchen import views as kitchen_views
from apps.web.restaurant import views as restaurant_views


@pytest.mark.django_db
class TestCapabilities:
    """Tests for role to capability mapping."""

    def test_manager_holds_both(self, manager) -> None:
        """Test managers can consult and manage."""
        assert capabilities_for(manager) == {Capability.CONSULT, Capability.MANAGE}

    def test_consultant_holds_consult(self, consultant) -> None:
        """Test consultants can only consult."""
        assert capabilities_for(consultant) == {Capability.CONSULT}

    def test_no_role_holds_nothing(self, outsider) -> None:
        """Test users without a role hold no capability."""
        assert capabilities_for(outsider) == frozenset()

    def test_superuser_holds_everything(self, outsider) -> None:
        """Test superusers bypass the role table."""
        outsider.is_superuser = True

        assert capabilities_for(outsider) == frozenset(Capability)


class TestPolicyTable:
    """Tests for OPERATION_POLICY."""

    def test_reads_require_consult(self) -> None:
        """Test lookups are consult operations."""
        for operation in [
            "restaurant.find_by_code",
            "restaurant.find_by_like_name",
            "restaurant.find_all",
            "restaurant.free_delivery",
        ]:
            assert OPERATION_POLICY[operation] == Capability.CONSULT

    def test_mutations_require_manage(self) -> None:
        """Test every state change is a manage operation."""
        for operation in [
            "restaurant.create",
            "restaurant.update",
            "restaurant.activate",
            "restaurant.inactivate",
            "restaurant.activate_multiples",
            "restaurant.inactivate_multiples",
            "restaurant.open",
            "restaurant.close",
            "restaurant.update_address",
        ]:
            assert OPERATION_POLICY[operation] == Capability.MANAGE

    def test_unknown_operation_raises(self) -> None:
        """Test an unlisted operation is rejected up front."""
        with pytest.raises(KeyError, match="OPERATION_POLICY"):
            required_capability("restaurant.teleport")

    def test_decorator_rejects_unknown_operation(self) -> None:
        """Test tagging a view with an unlisted operation fails at import."""
        with pytest.raises(KeyError):
            check_security("restaurant.teleport")

    def test_every_policy_entry_is_used_by_a_view(self) -> None:
        """Test no policy entry is orphaned."""
        tagged = {
            getattr(view, "operation", None)
            for module in (restaurant_views, kitchen_views)
            for view in vars(module).values()
        }

        assert set(OPERATION_POLICY) <= tagged

    def test_fixed_paths_are_not_codes(self) -> None:
        """Test fixed restaurant paths win over the code route."""
        assert resolve("/restaurants/free-delivery").url_name == "free_delivery"
        assert resolve("/restaurants/by-name").url_name == "restaurant_by_name"
        assert reverse("restaurant:restaurant_open", kwargs={"code": "abc"}) == (
            "/restaurants/abc/open"
        )


@pytest.mark.django_db
class TestAuthorize:
    """Tests for the authorize gate."""

    def test_manager_may_manage(self, manager) -> None:
        """Test a manager passes a manage operation."""
        authorize(manager, "restaurant.activate")

    def test_consultant_may_consult(self, consultant) -> None:
        """Test a consultant passes a consult operation."""
        authorize(consultant, "restaurant.find_all")

    def test_consultant_may_not_manage(self, consultant) -> None:
        """Test a consultant is denied a manage operation."""
        with pytest.raises(PermissionDenied):
            authorize(consultant, "restaurant.open")

    def test_no_role_may_not_consult(self, outsider) -> None:
        """Test a user without a role is denied reads."""
        with pytest.raises(PermissionDenied):
            authorize(outsider, "restaurant.find_by_code")

    def test_anonymous_is_not_authenticated(self) -> None:
        """Test the anonymous user is rejected as unauthenticated."""
        with pytest.raises(NotAuthenticated):
            authorize(AnonymousUser(), "restaurant.find_all")

    def test_missing_user_is_not_authenticated(self) -> None:
        """Test an absent principal is rejected as unauthenticated."""
        with pytest.raises(NotAuthenticated):
            authorize(None, "restaurant.find_all")

    def test_inactive_user_is_not_authenticated(self, manager) -> None:
        """Test a deactivated account is rejected even with a role."""
        manager.is_active = False

        with pytest.raises(NotAuthenticated):
            authorize(manager, "restaurant.find_all")
