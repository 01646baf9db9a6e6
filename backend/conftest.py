"""
Root conftest.py for all backend tests.

This file makes fixtures available to all test files across all apps.
"""
from decimal import Decimal

import pytest
from django.core.cache import cache
from rest_framework.test import APIClient


# ============================================================================
# AUTO-USE FIXTURES (Run automatically for every test)
# ============================================================================

@pytest.fixture(autouse=True)
def reset_app_settings():
    """
    Drop the cached shop configuration around each test.

    app_settings is a process-wide singleton; without this a test would see
    the shop settings and printers of whichever test loaded them first.
    """
    from shop_settings.config import app_settings

    app_settings.__dict__.clear()
    yield
    app_settings.__dict__.clear()


@pytest.fixture(autouse=True)
def reset_customer_display():
    from display.services import reset_display_controller

    reset_display_controller()
    yield
    reset_display_controller()


@pytest.fixture(autouse=True)
def clear_cache_after_test():
    yield  # Run the test
    cache.clear()


# ============================================================================
# API CLIENTS
# ============================================================================

@pytest.fixture
def api_client():
    """Unauthenticated DRF client."""
    return APIClient()


@pytest.fixture
def cashier_user(django_user_model):
    return django_user_model.objects.create_user(username="cashier", password="password123")


@pytest.fixture
def cashier_client(cashier_user):
    client = APIClient()
    client.force_authenticate(user=cashier_user)
    return client


@pytest.fixture
def admin_api_client(admin_user):
    client = APIClient()
    client.force_authenticate(user=admin_user)
    return client


# ============================================================================
# SHOP CONFIGURATION
# ============================================================================

@pytest.fixture
def shop(db):
    """Shop with a 10% tax rate and no printers (documents go to simulated output)."""
    from shop_settings.models import ShopSettings

    return ShopSettings.objects.create(
        shop_name="Corner Grill",
        address="1 High Street",
        phone="0123 456",
        tax_rate=Decimal("10.00"),
        currency="USD",
        currency_symbol="$",
    )
