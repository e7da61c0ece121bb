"""
Root conftest.py for all backend tests.

This file makes fixtures available to all test files across all apps.
Nothing in the billing engines touches the database, so none of these
fixtures need the ``django_db`` mark.
"""
import pytest
from datetime import datetime, timedelta, timezone as dt_timezone
from decimal import Decimal

from orders.records import ModifierRecord, OrderItemRecord
from payments.records import PaymentRecord, PaymentStatus
from settings.config import TaxPolicy, app_settings


# ============================================================================
# AUTO-USE FIXTURES (Run automatically for every test)
# ============================================================================

@pytest.fixture(autouse=True)
def reset_app_settings():
    """
    Reload the settings singleton after each test.

    Tests that use override_settings reload inside the override; this puts
    the real values back once the override has been undone.
    """
    yield
    app_settings.reload()


# ============================================================================
# TIME FIXTURES
# ============================================================================

@pytest.fixture
def now():
    """Fixed reference time for seat status tests."""
    return datetime(2025, 6, 1, 19, 30, tzinfo=dt_timezone.utc)


@pytest.fixture
def minutes_ago(now):
    """
    Timestamp factory relative to ``now``.

    Usage:
        item = make_item(updated_at=minutes_ago(2))
    """
    def _minutes_ago(minutes):
        return now - timedelta(minutes=minutes)
    return _minutes_ago


# ============================================================================
# RECORD FACTORIES
# ============================================================================

@pytest.fixture
def make_item():
    """
    Factory for OrderItemRecord.

    Usage:
        item = make_item("i1", "10.00", seat_number=1, quantity=2)
    """
    def _make_item(item_id="i1", price="10.00", name=None, modifiers=(), **kwargs):
        return OrderItemRecord(
            id=item_id,
            name=name or f"Item {item_id}",
            unit_price=Decimal(price),
            modifiers=tuple(
                ModifierRecord(name=modifier_name, price=Decimal(modifier_price))
                for modifier_name, modifier_price in modifiers
            ),
            **kwargs,
        )
    return _make_item


@pytest.fixture
def make_payment():
    """Factory for PaymentRecord; completed and tied to a seat by default."""
    def _make_payment(seat_number=1, status=PaymentStatus.COMPLETED, metadata=None):
        if metadata is None:
            metadata = {"seatNumber": seat_number}
        return PaymentRecord(status=status, metadata=metadata)
    return _make_payment


@pytest.fixture
def scenario_items(make_item):
    """
    Two-seat order plus a shared appetizer:
    seat 1 burger + beer, seat 2 salad, unseated nachos.
    """
    return [
        make_item("i1", "12.00", name="Burger", seat_number=1, category_type="food"),
        make_item("i2", "6.00", name="Beer", seat_number=1, category_type="liquor"),
        make_item("i3", "3.00", name="Salad", seat_number=2, category_type="food"),
        make_item("i4", "4.00", name="Nachos", category_type="food"),
    ]


@pytest.fixture
def tax_policy():
    """8% tax in USD."""
    return TaxPolicy(rate=Decimal("0.08"), currency="USD")


# ============================================================================
# API CLIENT FIXTURES
# ============================================================================

@pytest.fixture
def api_client():
    """
    Provide DRF API client for API tests.

    Usage:
        def test_my_api(api_client):
            response = api_client.post('/api/splits/preview/', payload, format='json')
            assert response.status_code == 200
    """
    from rest_framework.test import APIClient
    return APIClient()
