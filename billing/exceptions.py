"""Custom exceptions for pricing services."""

from __future__ import annotations

from datetime import date


class PricingServiceError(Exception):
    """Base exception for pricing service errors."""

    pass


class InvalidDateRangeError(PricingServiceError):
    """Raised when date range is invalid."""

    def __init__(self, message: str, start_date: date, end_date: date):
        super().__init__(message)
        self.start_date = start_date
        self.end_date = end_date


class CustomerNotFoundError(PricingServiceError):
    """Raised when no customer matches the lookup."""

    def __init__(self, lookup: str, value: int | str):
        self.lookup = lookup
        self.value = value
        if lookup == "name":
            message = f"Customer with name '{value}' not found."
        else:
            message = f"Customer with ID {value} not found."
        super().__init__(message)
