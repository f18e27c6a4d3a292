"""Forms for validating price calculation queries."""

from __future__ import annotations

from datetime import date

from django import forms
from django.conf import settings

# Time of day is accepted and dropped; only the date is priced.
PRICE_QUERY_DATE_FORMATS = [
    "%Y-%m-%d",
    "%Y-%m-%dT%H:%M:%S",
    "%Y-%m-%dT%H:%M",
]


def _shift_years(day: date, years: int) -> date:
    """Move a date by whole years, mapping Feb 29 to Feb 28 when needed."""
    try:
        return day.replace(year=day.year + years)
    except ValueError:
        return day.replace(year=day.year + years, day=28)


class PriceQueryForm(forms.Form):
    """Date range shared by all price calculation queries."""

    start_date = forms.DateField(
        input_formats=PRICE_QUERY_DATE_FORMATS,
        error_messages={"required": "Start date is required."},
        help_text="Start of pricing period (inclusive)",
    )
    end_date = forms.DateField(
        input_formats=PRICE_QUERY_DATE_FORMATS,
        error_messages={"required": "End date is required."},
        help_text="End of pricing period (inclusive)",
    )

    def clean(self):
        """Validate date range."""
        cleaned_data = super().clean()
        start = cleaned_data.get("start_date")
        end = cleaned_data.get("end_date")
        today = date.today()
        latest = _shift_years(today, settings.PRICING_MAX_YEARS_AHEAD)

        if start:
            if start >= latest:
                raise forms.ValidationError("Start date seems too far in the future.")
            if start <= _shift_years(today, -settings.PRICING_MAX_YEARS_BACK):
                raise forms.ValidationError("Start date seems too far in the past.")

        if end and end >= latest:
            raise forms.ValidationError("End date seems too far in the future.")

        if start and end and end < start:
            raise forms.ValidationError("End date must be on or after start date.")

        return cleaned_data

    def error_message(self) -> str:
        """Flatten all form errors into one message for an API response."""
        return " ".join(message for errors in self.errors.values() for message in errors)


class CustomerPriceQueryForm(PriceQueryForm):
    """Price query for a customer identified by ID."""

    customer_id = forms.IntegerField(
        min_value=1,
        error_messages={
            "required": "Customer ID is required.",
            "min_value": "Customer ID must be positive.",
        },
    )


class CustomerNamePriceQueryForm(PriceQueryForm):
    """Price query for a customer identified by name."""

    customer_name = forms.CharField(
        max_length=200,
        error_messages={"required": "Customer name cannot be empty."},
    )
