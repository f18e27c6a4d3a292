"""
Pricing service layer.

Orchestrates loading a customer snapshot from Django models and calculating
prices using the core pricing engine.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal

import pandas as pd

from billing.adapters import customer_to_dto
from billing.core.calculator import build_billing_frame, chargeable_totals
from billing.core.free_days import apply_free_days, mark_free_days
from billing.core.types import PricingCustomer
from billing.exceptions import CustomerNotFoundError, InvalidDateRangeError
from customers.models import Customer

logger = logging.getLogger(__name__)


@dataclass
class PriceCalculationResult:
    """Result of a price calculation."""

    customer: PricingCustomer
    period_start: date
    period_end: date
    billing_df: pd.DataFrame
    total_price: Decimal

    @property
    def chargeable_days(self) -> int:
        """Number of days with a positive total."""
        return int((self.billing_df["daily_total"] > 0).sum())

    @property
    def free_days_applied(self) -> int:
        return int(self.billing_df["is_free_day"].sum())

    @property
    def gross_total(self) -> Decimal:
        """Total before free days."""
        return sum(self.billing_df["daily_total"], start=Decimal("0"))


def validate_date_range(start_date: date, end_date: date) -> None:
    """
    Raises:
        InvalidDateRangeError: If end_date is before start_date
    """
    if end_date < start_date:
        logger.warning(
            "Invalid date range provided: start date %s is after end date %s",
            start_date,
            end_date,
        )
        raise InvalidDateRangeError(
            "End date must be on or after start date.", start_date, end_date
        )


def find_customer_by_name(customer_name: str) -> Customer:
    """
    Look up a customer by exact name.

    Raises:
        CustomerNotFoundError: If no customer has that name
    """
    customer = Customer.objects.filter(name=customer_name).first()
    if customer is None:
        logger.warning("Customer with name %r not found", customer_name)
        raise CustomerNotFoundError("name", customer_name)
    return customer


def load_pricing_customer(customer_id: int) -> PricingCustomer:
    """
    Load a customer with all usages and discounts and convert it to a DTO.

    Args:
        customer_id: primary key of the customer

    Returns:
        PricingCustomer snapshot ready for the core calculator

    Raises:
        CustomerNotFoundError: If the customer does not exist
    """
    customer = (
        Customer.objects.prefetch_related("service_usages__service", "discounts")
        .filter(pk=customer_id)
        .first()
    )
    if customer is None:
        logger.warning("Customer with ID %s not found", customer_id)
        raise CustomerNotFoundError("id", customer_id)

    return customer_to_dto(customer)


def _price_snapshot(
    customer: PricingCustomer,
    start_date: date,
    end_date: date,
) -> PriceCalculationResult:
    """Run the core over an already validated range; the total comes from the ledger."""
    billing_df = build_billing_frame(start_date, end_date, customer)
    billing_df = mark_free_days(billing_df, customer.global_free_days)
    total_price = apply_free_days(chargeable_totals(billing_df), customer.global_free_days)

    logger.info(
        "Calculated total price for customer %s is %s",
        customer.customer_id,
        total_price,
    )

    return PriceCalculationResult(
        customer=customer,
        period_start=start_date,
        period_end=end_date,
        billing_df=billing_df,
        total_price=total_price,
    )


def calculate_price(
    customer: PricingCustomer,
    start_date: date,
    end_date: date,
) -> PriceCalculationResult:
    """
    Calculate a customer's price over a date range from a loaded snapshot.

    Args:
        customer: snapshot with usages and discounts
        start_date: Start of period (inclusive)
        end_date: End of period (inclusive)

    Returns:
        PriceCalculationResult with the daily ledger and total price

    Raises:
        InvalidDateRangeError: If date range is invalid
    """
    validate_date_range(start_date, end_date)
    return _price_snapshot(customer, start_date, end_date)


def calculate_customer_price(
    customer_id: int,
    start_date: date,
    end_date: date,
) -> PriceCalculationResult:
    """
    Calculate the price for a customer identified by primary key.

    The date range is validated before the customer is loaded.

    Raises:
        InvalidDateRangeError: If date range is invalid
        CustomerNotFoundError: If the customer does not exist
    """
    logger.info(
        "Calculating price for customer %s from %s to %s",
        customer_id,
        start_date,
        end_date,
    )
    validate_date_range(start_date, end_date)

    customer = load_pricing_customer(customer_id)
    logger.info(
        "Customer %s found with %s free days", customer.customer_id, customer.global_free_days
    )

    return _price_snapshot(customer, start_date, end_date)


def calculate_customer_price_by_name(
    customer_name: str,
    start_date: date,
    end_date: date,
) -> PriceCalculationResult:
    """
    Calculate the price for a customer identified by name.

    Raises:
        InvalidDateRangeError: If date range is invalid
        CustomerNotFoundError: If no customer has that name
    """
    logger.info(
        "Calculating price for customer %r from %s to %s",
        customer_name,
        start_date,
        end_date,
    )
    validate_date_range(start_date, end_date)

    customer = load_pricing_customer(find_customer_by_name(customer_name).pk)
    return _price_snapshot(customer, start_date, end_date)
