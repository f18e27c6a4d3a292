from django.core.validators import MinValueValidator
from django.db import models


class Service(models.Model):
    """
    Represents a billable service (e.g., Service A) with a daily base price.
    """

    name = models.CharField(max_length=200, unique=True, help_text="Name of the service")
    base_price_per_day = models.DecimalField(
        max_digits=18,
        decimal_places=4,
        validators=[MinValueValidator(0)],
        help_text="Price per chargeable day, unless the customer has an override",
    )
    charges_on_weekends = models.BooleanField(
        default=False,
        help_text="Whether Saturdays and Sundays are chargeable days",
    )

    class Meta:
        ordering = ["name"]

    def __str__(self):
        return self.name
