"""Pytest configuration and fixtures for Lay-Z Spa tests."""

from datetime import UTC, datetime
from typing import Any

import pytest

from custom_components.layz_spa.models import GizwitsSession, SpaDevice
from helpers import TEST_DEVICE_ID, TEST_TOKEN


@pytest.fixture
def sample_user_session() -> GizwitsSession:
    """Fixture providing a logged-in user session."""
    return GizwitsSession(
        token=TEST_TOKEN,
        uid="uid123",
        expire_at=datetime(2030, 1, 1, tzinfo=UTC),
    )


@pytest.fixture
def sample_device() -> SpaDevice:
    """Fixture providing the bound spa."""
    return SpaDevice(id=TEST_DEVICE_ID, name="Garden Spa")


@pytest.fixture
def sample_login_response() -> dict[str, Any]:
    """Fixture providing a sample login API response."""
    return {"token": TEST_TOKEN, "uid": "uid123", "expire_at": 1893456000}


@pytest.fixture
def sample_bindings_response() -> dict[str, Any]:
    """Fixture providing a sample bindings API response.

    Returns:
        A dictionary representing a bindings response with one spa.

    """
    return {
        "devices": [
            {
                "did": TEST_DEVICE_ID,
                "dev_alias": "Garden Spa",
                "product_name": "Airjet",
                "is_online": True,
            },
        ],
    }


@pytest.fixture
def sample_attributes() -> dict[str, Any]:
    """Fixture providing a full raw attribute set of a heating spa."""
    return {
        "power": True,
        "temp_now": 31,
        "temp_set": 37,
        "heat_power": True,
        "filter_power": True,
        "wave_power": False,
    }


@pytest.fixture
def sample_status_response(sample_attributes: dict[str, Any]) -> dict[str, Any]:
    """Fixture providing a sample devdata/latest API response."""
    return {
        "did": TEST_DEVICE_ID,
        "updated_at": 1700000000,
        "attr": sample_attributes,
    }
