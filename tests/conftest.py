"""Pytest configuration and shared fixtures."""

from __future__ import annotations

from typing import Any

import pytest

from records import Address, Person, User


@pytest.fixture
def simple_data() -> list[dict[str, Any]]:
    """Simple test data with basic fields."""
    return [
        {"id": 1, "name": "Alice", "role": "admin"},
        {"id": 2, "name": "Bob", "role": "user"},
        {"id": 3, "name": "Charlie", "role": "user"},
    ]


@pytest.fixture
def nested_data() -> dict[str, Any]:
    """Test data with a nested object."""
    return {
        "company": "ACME",
        "address": {
            "street": "123 Main St",
            "city": "Seattle",
        },
    }


@pytest.fixture
def users() -> list[User]:
    """Typed rows where only the first user has an email."""
    return [
        User(id=1, name="Alice", email="alice@example.com", is_active=True),
        User(id=2, name="Bob", is_active=False),
    ]


@pytest.fixture
def people() -> list[Person]:
    """Typed rows with a nested, sometimes missing, record."""
    return [
        Person(id=1, name="Alice", address=Address(name="Home", city="NYC")),
        Person(id=2, name="Bob", address=None),
    ]
