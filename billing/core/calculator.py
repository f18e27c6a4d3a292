"""
Core price calculator functions.

Builds a per-day ledger of service usage costs and reduces it to a total price.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date
from decimal import Decimal

import pandas as pd

from .discounts import resolve_discount_multipliers
from .free_days import apply_free_days
from .types import Discount, PricingCustomer, ServiceUsage
from .util import _build_calendar, _zero_series

ZERO = Decimal("0")


def usage_column_name(usage: ServiceUsage, position: int) -> str:
    """
    Label for a usage's cost column in the billing DataFrame.

    The position keeps duplicate usages of the same service in separate columns.
    """
    return f"usage_{position}:{usage.service_id}"


def construct_chargeable_mask(calendar: pd.DataFrame, usage: ServiceUsage) -> pd.Series[bool]:
    """
    Construct the mask of days on which a usage incurs a charge.

    A day is chargeable once the usage has started, unless it falls on a
    weekend and the service does not charge on weekends.

    Args:
        calendar: dataframe with columns day, is_weekend
        usage: a usage with a resolved service

    Returns:
        A bool series with the same index as the calendar
    """
    mask = calendar["day"] >= pd.Timestamp(usage.start_date)
    if not usage.service.charges_on_weekends:
        mask &= ~calendar["is_weekend"]
    return mask


def apply_usage(
    calendar: pd.DataFrame,
    usage: ServiceUsage,
    discounts: Iterable[Discount],
) -> pd.Series:
    """
    Apply one service usage to a calendar.

    Args:
        calendar: dataframe with columns day, is_weekend
        usage: a usage with a resolved service
        discounts: all of the customer's discounts

    Returns:
        Object-dtype series of per-day Decimal costs, zero on days the usage
        is inactive or not chargeable
    """
    mask = construct_chargeable_mask(calendar, usage)
    multipliers = resolve_discount_multipliers(calendar, usage.service_id, discounts)

    cost = _zero_series(calendar.index)
    cost[mask] = multipliers[mask] * usage.price_per_day
    return cost


def build_billing_frame(
    start_date: date, end_date: date, customer: PricingCustomer
) -> pd.DataFrame:
    """
    Build the daily ledger for a customer over a date range.

    Creates a DataFrame with one row per calendar day and one column per usage,
    where each usage column holds that usage's discounted cost for the day.
    Usages whose service could not be resolved get no column.

    Args:
        start_date: first day to price (inclusive; time of day is ignored)
        end_date: last day to price (inclusive; time of day is ignored)
        customer: snapshot with usages and discounts already loaded

    Returns:
        DataFrame with columns day, is_weekend, one column per usage labeled by
        usage_column_name(), and daily_total
    """
    calendar = _build_calendar(start_date, end_date)
    billing_df = calendar.copy()

    for position, usage in enumerate(customer.usages):
        if usage.service is None:
            continue
        billing_df[usage_column_name(usage, position)] = apply_usage(
            calendar, usage, customer.discounts
        )

    usage_columns = [col for col in billing_df.columns if col not in calendar.columns]

    daily_total = _zero_series(billing_df.index)
    for col in usage_columns:
        daily_total = daily_total + billing_df[col]
    billing_df["daily_total"] = daily_total

    return billing_df


def chargeable_totals(billing_df: pd.DataFrame) -> list[Decimal]:
    """Positive daily totals of a billing DataFrame, in calendar order."""
    return [total for total in billing_df["daily_total"] if total > ZERO]


def calculate_daily_costs(
    start_date: date, end_date: date, customer: PricingCustomer
) -> list[Decimal]:
    """
    Calculate the total cost of every chargeable day in a date range.

    Days that cost nothing are left out, so they never use up a free day.

    Returns:
        List of positive Decimal daily totals, in calendar order
    """
    billing_df = build_billing_frame(start_date, end_date, customer)
    return chargeable_totals(billing_df)


def calculate_total_price(
    start_date: date, end_date: date, customer: PricingCustomer
) -> Decimal:
    """
    Calculate a customer's total price over a date range.

    This is a pure function of its inputs: the customer's free days are
    applied to the cheapest chargeable days and the rest are summed.
    """
    daily_costs = calculate_daily_costs(start_date, end_date, customer)
    return apply_free_days(daily_costs, customer.global_free_days)
