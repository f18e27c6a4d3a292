from django.db import models


class Customer(models.Model):
    """
    Represents a customer using one or more services.
    """

    name = models.CharField(max_length=200, unique=True, help_text="Name of the customer")
    global_free_days = models.PositiveIntegerField(
        default=0,
        help_text="Number of chargeable days waived across all services, cheapest days first",
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["name"]

    def __str__(self):
        return self.name
