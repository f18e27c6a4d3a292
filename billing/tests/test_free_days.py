"""
Unit tests for free day allocation.
"""

from datetime import date
from decimal import Decimal

import pytest

from billing.core.calculator import build_billing_frame
from billing.core.free_days import apply_free_days, mark_free_days


@pytest.mark.parametrize(
    "daily_totals,free_days,expected",
    [
        ([], 0, Decimal("0")),
        ([], 5, Decimal("0")),
        ([Decimal("1"), Decimal("2"), Decimal("3")], 0, Decimal("6")),
        ([Decimal("3"), Decimal("1"), Decimal("2")], 1, Decimal("5")),
        ([Decimal("3"), Decimal("1"), Decimal("2")], 2, Decimal("3")),
        ([Decimal("3"), Decimal("1"), Decimal("2")], 3, Decimal("0")),
        ([Decimal("3"), Decimal("1"), Decimal("2")], 10, Decimal("0")),
        ([Decimal("0.4"), Decimal("0.4"), Decimal("0.6")], 1, Decimal("1.0")),
    ],
)
def test_apply_free_days(daily_totals, free_days, expected):
    assert apply_free_days(daily_totals, free_days) == expected


def test_apply_free_days_returns_decimal_for_empty_ledger():
    assert isinstance(apply_free_days([], 3), Decimal)


def test_apply_free_days_does_not_mutate_input():
    daily_totals = [Decimal("3"), Decimal("1"), Decimal("2")]
    apply_free_days(daily_totals, 1)
    assert daily_totals == [Decimal("3"), Decimal("1"), Decimal("2")]


def test_mark_free_days_flags_cheapest_days(
    customer_factory, usage_factory, service_a, service_c
):
    """Weekend days are cheapest (Service C only) so they are waived first."""
    customer = customer_factory(usages=[usage_factory(service_a), usage_factory(service_c)])
    billing_df = build_billing_frame(date(2024, 1, 1), date(2024, 1, 7), customer)

    marked = mark_free_days(billing_df, 3)

    free = marked[marked["is_free_day"]]
    assert list(free["day"].dt.date) == [date(2024, 1, 1), date(2024, 1, 6), date(2024, 1, 7)]
    assert "is_free_day" not in billing_df.columns


def test_mark_free_days_never_flags_zero_cost_days(customer_factory, usage_factory, service_a):
    customer = customer_factory(usages=[usage_factory(service_a)])
    billing_df = build_billing_frame(date(2024, 1, 1), date(2024, 1, 7), customer)

    marked = mark_free_days(billing_df, 10)

    assert marked["is_free_day"].sum() == 5
    assert not marked.loc[marked["is_weekend"], "is_free_day"].any()


def test_mark_free_days_matches_apply_free_days(customer_factory, usage_factory, service_c):
    customer = customer_factory(usages=[usage_factory(service_c)])
    billing_df = build_billing_frame(date(2024, 1, 1), date(2024, 1, 10), customer)

    marked = mark_free_days(billing_df, 4)
    charged = sum(marked.loc[~marked["is_free_day"], "daily_total"], start=Decimal("0"))

    assert charged == apply_free_days(list(billing_df["daily_total"]), 4)
