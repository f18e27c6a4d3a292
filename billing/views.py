"""HTTP endpoints for price calculation."""

import logging

from django.db import DatabaseError
from django.http import JsonResponse
from django.views.decorators.http import require_GET

from billing.exceptions import CustomerNotFoundError, InvalidDateRangeError
from billing.forms import CustomerNamePriceQueryForm, CustomerPriceQueryForm
from billing.services import calculate_customer_price, calculate_customer_price_by_name

logger = logging.getLogger(__name__)


def _message_response(message: str, status: int) -> JsonResponse:
    return JsonResponse({"message": message}, status=status)


def _calculate(calculate, lookup_value, form) -> JsonResponse:
    """Run a validated price query and translate the outcome to a response."""
    start_date = form.cleaned_data["start_date"]
    end_date = form.cleaned_data["end_date"]

    try:
        result = calculate(lookup_value, start_date, end_date)
    except InvalidDateRangeError as e:
        return _message_response(str(e), 400)
    except CustomerNotFoundError as e:
        return _message_response(str(e), 404)
    except DatabaseError:
        logger.exception("Error fetching customer %s from database", lookup_value)
        return _message_response("An error occurred while fetching customer data.", 500)

    return JsonResponse({"total_price": result.total_price})


@require_GET
def calculate_price_view(request):
    """Calculate the total price for a customer over a period."""
    form = CustomerPriceQueryForm(request.GET)
    if not form.is_valid():
        return _message_response(form.error_message(), 400)

    return _calculate(calculate_customer_price, form.cleaned_data["customer_id"], form)


@require_GET
def calculate_price_by_name_view(request):
    """Calculate the total price for a customer identified by name."""
    form = CustomerNamePriceQueryForm(request.GET)
    if not form.is_valid():
        return _message_response(form.error_message(), 400)

    return _calculate(
        calculate_customer_price_by_name, form.cleaned_data["customer_name"], form
    )
