from decimal import Decimal

from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models


class Discount(models.Model):
    """
    Represents a percentage discount on one service for one customer.

    The discount applies between start_date and end_date, both inclusive.
    Discounts may overlap; the highest percentage wins on any given day.
    """

    customer = models.ForeignKey(
        "customers.Customer",
        on_delete=models.CASCADE,
        related_name="discounts",
        help_text="Customer",
    )
    service = models.ForeignKey(
        "catalog.Service",
        on_delete=models.CASCADE,
        related_name="discounts",
        help_text="Discounted service",
    )
    percentage = models.DecimalField(
        max_digits=5,
        decimal_places=4,
        validators=[MinValueValidator(0)],
        help_text="Fraction taken off the daily price (e.g., 0.20 for 20%)",
    )
    start_date = models.DateField(help_text="First discounted day (inclusive)")
    end_date = models.DateField(help_text="Last discounted day (inclusive)")

    class Meta:
        ordering = ["customer", "service", "start_date"]

    def __str__(self):
        return (
            f"{self.customer.name} - {self.service.name} "
            f"{self.percentage:.0%} ({self.start_date} to {self.end_date})"
        )

    def clean(self):
        """Validate percentage and date range."""
        if self.percentage is not None and self.percentage >= Decimal("1"):
            raise ValidationError({"percentage": "Percentage must be less than 1 (100%)."})

        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValidationError({"end_date": "End date must be on or after the start date."})

    def save(self, *args, **kwargs):
        """
        Ensure validation runs even when saving programmatically.
        """
        self.full_clean()
        return super().save(*args, **kwargs)
