"""
Adapters for converting Django ORM models to pricing DTOs.

This module provides lightweight mappings from the catalog, customers, usage and
discounts apps' Django models to the immutable dataclasses used by the pricing
engine core.
"""

import logging

from billing.core.types import Discount, PricingCustomer, Service, ServiceUsage
from catalog.models import Service as ServiceModel
from customers.models import Customer
from discounts.models import Discount as DiscountModel
from usage.models import CustomerServiceUsage

logger = logging.getLogger(__name__)


def service_to_dto(service: ServiceModel) -> Service:
    """
    Convert Django Service model to Service DTO.

    Args:
        service: Django Service model instance

    Returns:
        Service DTO keyed by the service's primary key
    """
    return Service(
        service_id=service.pk,
        name=service.name,
        base_price_per_day=service.base_price_per_day,
        charges_on_weekends=service.charges_on_weekends,
    )


def usage_to_dto(usage: CustomerServiceUsage) -> ServiceUsage:
    """
    Convert Django CustomerServiceUsage model to ServiceUsage DTO.

    A usage whose service has been deleted keeps its history but has no service
    to price against; it converts to a DTO with service=None, which the
    calculator skips.

    Args:
        usage: Django CustomerServiceUsage model instance

    Returns:
        ServiceUsage DTO, with the service resolved when it still exists
    """
    if usage.service is None:
        logger.warning(
            "Usage %s of customer %s has no service; it will not be priced",
            usage.pk,
            usage.customer_id,
        )
        return ServiceUsage(
            service_id=usage.service_id or 0,
            start_date=usage.start_date,
            customer_price_per_day=usage.customer_price_per_day,
            usage_id=usage.pk,
        )

    return ServiceUsage(
        service_id=usage.service_id,
        start_date=usage.start_date,
        service=service_to_dto(usage.service),
        customer_price_per_day=usage.customer_price_per_day,
        usage_id=usage.pk,
    )


def discount_to_dto(discount: DiscountModel) -> Discount:
    """
    Convert Django Discount model to Discount DTO.

    Raises:
        ValueError: If the Discount's post_init validation fails
    """
    return Discount(
        service_id=discount.service_id,
        percentage=discount.percentage,
        start_date=discount.start_date,
        end_date=discount.end_date,
        discount_id=discount.pk,
    )


def customer_to_dto(customer: Customer) -> PricingCustomer:
    """
    Convert a Django Customer with its usages and discounts to a PricingCustomer DTO.

    This is the main entry point for adapter conversion.

    IMPORTANT: For performance, the customer should be prefetched with:
        customer = Customer.objects.prefetch_related(
            "service_usages__service",
            "discounts",
        ).get(pk=customer_id)

    Without prefetching, this function will trigger N+1 queries.

    Args:
        customer: Django Customer model instance (preferably with prefetched relations)

    Returns:
        PricingCustomer DTO holding tuples of usage and discount DTOs
    """
    usages = tuple(usage_to_dto(usage) for usage in customer.service_usages.all())
    discounts = tuple(discount_to_dto(discount) for discount in customer.discounts.all())

    return PricingCustomer(
        customer_id=customer.pk,
        name=customer.name,
        global_free_days=customer.global_free_days,
        usages=usages,
        discounts=discounts,
    )
