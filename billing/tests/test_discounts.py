"""
Unit tests for discount resolution.

Tests select_discount(), discount_multiplier() and resolve_discount_multipliers().
"""

from datetime import date
from decimal import Decimal

import pytest

from billing.core.discounts import (
    discount_multiplier,
    resolve_discount_multipliers,
    select_discount,
)
from billing.core.util import _build_calendar


@pytest.fixture
def overlapping_discounts(discount_factory, service_c):
    """20% for Jan 1-10 and 60% for Jan 5-15 on Service C."""
    return (
        discount_factory(service_c, "0.20", date(2024, 1, 1), date(2024, 1, 10)),
        discount_factory(service_c, "0.60", date(2024, 1, 5), date(2024, 1, 15)),
    )


def test_no_discounts_means_full_price(service_c):
    assert select_discount(date(2024, 1, 1), service_c.service_id, ()) is None
    assert discount_multiplier(date(2024, 1, 1), service_c.service_id, ()) == Decimal("1")


@pytest.mark.parametrize(
    "day,expected",
    [
        (date(2023, 12, 31), Decimal("1")),
        (date(2024, 1, 1), Decimal("0.80")),
        (date(2024, 1, 4), Decimal("0.80")),
        (date(2024, 1, 5), Decimal("0.40")),
        (date(2024, 1, 10), Decimal("0.40")),
        (date(2024, 1, 15), Decimal("0.40")),
        (date(2024, 1, 16), Decimal("1")),
    ],
)
def test_highest_covering_discount_wins(overlapping_discounts, service_c, day, expected):
    """Overlaps never stack; range ends are inclusive."""
    multiplier = discount_multiplier(day, service_c.service_id, overlapping_discounts)
    assert multiplier == expected


def test_select_discount_returns_best(overlapping_discounts, service_c):
    discount = select_discount(date(2024, 1, 7), service_c.service_id, overlapping_discounts)
    assert discount.percentage == Decimal("0.60")


def test_discount_for_other_service_does_not_match(overlapping_discounts, service_a):
    assert select_discount(date(2024, 1, 7), service_a.service_id, overlapping_discounts) is None


def test_equal_discounts_give_same_multiplier(discount_factory, service_c):
    discounts = (
        discount_factory(service_c, "0.30", date(2024, 1, 1), date(2024, 1, 10)),
        discount_factory(service_c, "0.30", date(2024, 1, 5), date(2024, 1, 20)),
    )
    assert discount_multiplier(date(2024, 1, 7), service_c.service_id, discounts) == Decimal(
        "0.70"
    )


def test_vectorized_multipliers_match_per_day(overlapping_discounts, service_c):
    """resolve_discount_multipliers agrees with discount_multiplier on every day."""
    calendar = _build_calendar(date(2023, 12, 30), date(2024, 1, 17))

    multipliers = resolve_discount_multipliers(
        calendar, service_c.service_id, overlapping_discounts
    )

    expected = [
        discount_multiplier(day.date(), service_c.service_id, overlapping_discounts)
        for day in calendar["day"]
    ]
    assert list(multipliers) == expected


def test_vectorized_multipliers_order_independent(overlapping_discounts, service_c):
    """A lower discount listed after a higher one does not override it."""
    calendar = _build_calendar(date(2024, 1, 1), date(2024, 1, 15))

    forward = resolve_discount_multipliers(calendar, service_c.service_id, overlapping_discounts)
    backward = resolve_discount_multipliers(
        calendar, service_c.service_id, tuple(reversed(overlapping_discounts))
    )

    assert list(forward) == list(backward)
