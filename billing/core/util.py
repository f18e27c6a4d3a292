"""Helper functions for the pricing engine."""

from datetime import date, datetime
from decimal import Decimal

import pandas as pd


def _as_date(value: date) -> date:
    """Drop the time of day from datetimes; plain dates pass through."""
    if isinstance(value, datetime):
        return value.date()
    return value


def _build_calendar(start_date: date, end_date: date) -> pd.DataFrame:
    """
    Build a frame with one row per calendar day in a date range.

    Args:
        start_date: Start of date range (inclusive)
        end_date: End of date range (inclusive)

    Returns:
        DataFrame with columns day (midnight timestamps) and is_weekend.
        Empty if end_date is before start_date.
    """
    days = pd.date_range(start=_as_date(start_date), end=_as_date(end_date), freq="D")
    calendar = pd.DataFrame({"day": days})
    calendar["is_weekend"] = calendar["day"].dt.dayofweek >= 5  # Sat=5, Sun=6
    return calendar


def _zero_series(index: pd.Index) -> pd.Series:
    """Object-dtype series of Decimal zeros, so sums stay in Decimal."""
    return pd.Series(Decimal("0"), index=index, dtype=object)
