"""
Define lightweight dataclasses to use for price calculations.

Adapters to convert between Django ORM and these classes are in billing.adapters.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional

from .util import _as_date


@dataclass(frozen=True, slots=True)
class Service:
    """
    A billable service with a daily base price.

    Services that do not charge on weekends cost nothing on Saturdays and Sundays.
    """

    service_id: int
    name: str
    base_price_per_day: Decimal
    charges_on_weekends: bool = False

    def __post_init__(self) -> None:
        if self.base_price_per_day < 0:
            raise ValueError("base_price_per_day must be non-negative")


@dataclass(frozen=True, slots=True)
class ServiceUsage:
    """
    One customer's use of one service, starting on start_date (inclusive).

    Usages are open-ended: once started, a usage is active on every later day.
    The service is None when the reference could not be resolved; such usages
    are skipped by the calculator.
    """

    service_id: int
    start_date: date
    service: Optional[Service] = None
    customer_price_per_day: Optional[Decimal] = None
    usage_id: Optional[int] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "start_date", _as_date(self.start_date))
        if self.customer_price_per_day is not None and self.customer_price_per_day < 0:
            raise ValueError("customer_price_per_day must be non-negative")
        if self.service is not None and self.service.service_id != self.service_id:
            raise ValueError("service does not match service_id")

    @property
    def price_per_day(self) -> Decimal:
        """Customer override if present, otherwise the service's base price."""
        if self.customer_price_per_day is not None:
            return self.customer_price_per_day
        return self.service.base_price_per_day


@dataclass(frozen=True, slots=True)
class Discount:
    """
    Percentage discount on one service over a date range.

    Date ranges are inclusive of both start and end. Percentages are fractions,
    e.g. Decimal("0.20") for 20% off.

    Validation:
        - 0 <= percentage < 1
        - start_date <= end_date
    """

    service_id: int
    percentage: Decimal
    start_date: date
    end_date: date
    discount_id: Optional[int] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "start_date", _as_date(self.start_date))
        object.__setattr__(self, "end_date", _as_date(self.end_date))
        if not Decimal("0") <= self.percentage < Decimal("1"):
            raise ValueError("percentage must be at least 0 and less than 1")
        if self.start_date > self.end_date:
            raise ValueError("start_date must be earlier than or equal to end_date")

    def covers(self, service_id: int, day: date) -> bool:
        """
        Whether this discount applies to the given service on the given day.

        Used by the single-day helpers in billing.core.discounts.
        """
        return self.service_id == service_id and self.start_date <= day <= self.end_date


@dataclass(frozen=True, slots=True)
class PricingCustomer:
    """
    Read-only snapshot of a customer with all usages and discounts joined.

    global_free_days is a single allowance for the whole ledger, not per service.
    """

    customer_id: int
    name: str
    global_free_days: int = 0
    usages: tuple[ServiceUsage, ...] = ()
    discounts: tuple[Discount, ...] = ()

    def __post_init__(self) -> None:
        if self.global_free_days < 0:
            raise ValueError("global_free_days must be non-negative")
