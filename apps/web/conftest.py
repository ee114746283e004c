"""
Pytest configuration for Django app tests.
"""

from django.contrib.auth import get_user_model
from django.test import Client as DjangoClient

import pytest

from apps.web.core.models import User


def _create_user(username: str, role: str) -> User:
    return get_user_model().objects.create_user(
        username=username,
        email=f"{username}@example.com",
        password="testpass123",
        role=role,
    )


@pytest.fixture
def manager(db) -> User:
    """A user holding the consult and manage capabilities."""
    return _create_user("manager", User.Role.MANAGER)


@pytest.fixture
def consultant(db) -> User:
    """A user holding only the consult capability."""
    return _create_user("consultant", User.Role.CONSULTANT)


@pytest.fixture
def outsider(db) -> User:
    """An authenticated user without catalog capabilities."""
    return _create_user("outsider", User.Role.NONE)


@pytest.fixture
def api_client() -> DjangoClient:
    """Anonymous Django test client."""
    return DjangoClient()


@pytest.fixture
def manager_client(manager: User) -> DjangoClient:
    """Test client logged in as a manager."""
    http_client = DjangoClient()
    http_client.force_login(manager)
    return http_client


@pytest.fixture
def consultant_client(consultant: User) -> DjangoClient:
    """Test client logged in as a consultant."""
    http_client = DjangoClient()
    http_client.force_login(consultant)
    return http_client
