"""
Helper functions for resolving which discount applies on a given day.

Discounts never stack: when several discounts for the same service cover a day,
only the one with the highest percentage applies.

The calculator uses resolve_discount_multipliers(), which prices a whole
calendar at once. select_discount() and discount_multiplier() answer the same
question for a single day; they are reference helpers for checking and
explaining a ledger row, and the vectorized version must agree with them.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date
from decimal import Decimal
from typing import Optional

import pandas as pd

from .types import Discount
from .util import _zero_series

NO_DISCOUNT = Decimal("1")


def select_discount(
    day: date, service_id: int, discounts: Iterable[Discount]
) -> Optional[Discount]:
    """
    Pick the best discount for a service on a day.

    Args:
        day: the calendar day being priced
        service_id: the service being priced
        discounts: all of the customer's discounts (any service)

    Returns:
        The covering discount with the highest percentage, or None if no
        discount covers this service on this day. Ties are broken arbitrarily,
        since equal percentages give the same price.
    """
    applicable = [discount for discount in discounts if discount.covers(service_id, day)]
    return max(applicable, key=lambda discount: discount.percentage, default=None)


def discount_multiplier(day: date, service_id: int, discounts: Iterable[Discount]) -> Decimal:
    """Multiplier to apply to the unit price: 1 - best percentage, or 1 with no discount."""
    discount = select_discount(day, service_id, discounts)
    if discount is None:
        return NO_DISCOUNT
    return NO_DISCOUNT - discount.percentage


def _construct_discount_mask(calendar: pd.DataFrame, discount: Discount) -> pd.Series[bool]:
    """True for each calendar day inside the discount's inclusive date range."""
    return (calendar["day"] >= pd.Timestamp(discount.start_date)) & (
        calendar["day"] <= pd.Timestamp(discount.end_date)
    )


def resolve_discount_multipliers(
    calendar: pd.DataFrame,
    service_id: int,
    discounts: Iterable[Discount],
) -> pd.Series:
    """
    Vectorized discount_multiplier() over a calendar.

    Args:
        calendar: dataframe with a day column, as built by util._build_calendar
        service_id: the service being priced
        discounts: all of the customer's discounts (any service)

    Returns:
        Object-dtype series of Decimal multipliers with the calendar's index.
    """
    best_percentage = _zero_series(calendar.index)
    for discount in discounts:
        if discount.service_id != service_id:
            continue
        mask = _construct_discount_mask(calendar, discount) & (
            best_percentage < discount.percentage
        )
        best_percentage[mask] = discount.percentage

    return NO_DISCOUNT - best_percentage
