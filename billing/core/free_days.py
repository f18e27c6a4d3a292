"""
Logic for applying a customer's free days to a daily ledger.

Free days form a single pool for the whole ledger (not per service) and always
waive the cheapest chargeable days first.
"""

from __future__ import annotations

from collections.abc import Iterable
from decimal import Decimal

import pandas as pd


def apply_free_days(daily_totals: Iterable[Decimal], free_days: int) -> Decimal:
    """
    Waive the cheapest days and sum the rest.

    Args:
        daily_totals: positive per-day totals, in any order
        free_days: number of days to waive; may exceed the number of days

    Returns:
        Sum of the remaining days, Decimal("0") if every day is waived
    """
    ordered = sorted(daily_totals)
    waived = min(max(free_days, 0), len(ordered))
    return sum(ordered[waived:], start=Decimal("0"))


def mark_free_days(billing_df: pd.DataFrame, free_days: int) -> pd.DataFrame:
    """
    Flag the days waived by apply_free_days() in a billing DataFrame.

    Args:
        billing_df: DataFrame with day and daily_total columns, as built by
            calculator.build_billing_frame
        free_days: number of days to waive

    Returns:
        Copy of the DataFrame with an is_free_day column. Only days with a
        positive total can be free; ties in cost go to the earlier day.
    """
    result = billing_df.copy()

    chargeable = [
        (total, day, index)
        for index, day, total in zip(result.index, result["day"], result["daily_total"])
        if total > 0
    ]
    chargeable.sort(key=lambda entry: (entry[0], entry[1]))
    waived = min(max(free_days, 0), len(chargeable))

    result["is_free_day"] = result.index.isin([index for _, _, index in chargeable[:waived]])
    return result
