"""
Shared fixtures for billing tests.

Provides the reference services and a factory for customer snapshots used
across the core calculator tests.
"""

from datetime import date
from decimal import Decimal

import pytest

from billing.core.types import Discount, PricingCustomer, Service, ServiceUsage


@pytest.fixture
def service_a():
    """Service A: $0.20/day, weekdays only."""
    return Service(
        service_id=1,
        name="Service A",
        base_price_per_day=Decimal("0.2"),
        charges_on_weekends=False,
    )


@pytest.fixture
def service_b():
    """Service B: $0.24/day, weekdays only."""
    return Service(
        service_id=2,
        name="Service B",
        base_price_per_day=Decimal("0.24"),
        charges_on_weekends=False,
    )


@pytest.fixture
def service_c():
    """Service C: $0.40/day, every day."""
    return Service(
        service_id=3,
        name="Service C",
        base_price_per_day=Decimal("0.4"),
        charges_on_weekends=True,
    )


@pytest.fixture
def usage_factory():
    """Factory fixture for usages of a resolved service."""

    def _create_usage(
        service: Service,
        start_date: date = date(2024, 1, 1),
        customer_price_per_day: Decimal | None = None,
    ) -> ServiceUsage:
        return ServiceUsage(
            service_id=service.service_id,
            start_date=start_date,
            service=service,
            customer_price_per_day=customer_price_per_day,
        )

    return _create_usage


@pytest.fixture
def discount_factory():
    """Factory fixture for discounts on a service."""

    def _create_discount(
        service: Service,
        percentage: str,
        start_date: date,
        end_date: date,
    ) -> Discount:
        return Discount(
            service_id=service.service_id,
            percentage=Decimal(percentage),
            start_date=start_date,
            end_date=end_date,
        )

    return _create_discount


@pytest.fixture
def customer_factory():
    """Factory fixture for customer snapshots.

    Usages and discounts may be passed as lists; they are stored as tuples.
    """

    def _create_customer(
        usages: list[ServiceUsage] | None = None,
        discounts: list[Discount] | None = None,
        global_free_days: int = 0,
    ) -> PricingCustomer:
        return PricingCustomer(
            customer_id=1,
            name="Test Customer",
            global_free_days=global_free_days,
            usages=tuple(usages or ()),
            discounts=tuple(discounts or ()),
        )

    return _create_customer
