from django.core.validators import MinValueValidator
from django.db import models


class CustomerServiceUsage(models.Model):
    """
    Represents a customer's use of a service from start_date onwards.

    Usages have no end date. A customer may use the same service more than once;
    each usage is charged separately.
    If the service is deleted the usage is kept with no service, and it is not priced.
    """

    customer = models.ForeignKey(
        "customers.Customer",
        on_delete=models.CASCADE,
        related_name="service_usages",
        help_text="Customer",
    )
    service = models.ForeignKey(
        "catalog.Service",
        on_delete=models.SET_NULL,
        null=True,
        related_name="customer_usages",
        help_text="Service used",
    )
    start_date = models.DateField(help_text="First day the service is used (inclusive)")
    customer_price_per_day = models.DecimalField(
        max_digits=18,
        decimal_places=4,
        null=True,
        blank=True,
        validators=[MinValueValidator(0)],
        help_text="Price per day for this customer only. Blank = service base price.",
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name_plural = "Customer service usages"
        ordering = ["customer", "start_date"]

    def __str__(self):
        service_name = self.service.name if self.service else "(deleted service)"
        return f"{self.customer.name} - {service_name} (from {self.start_date})"

    def save(self, *args, **kwargs):
        """
        Ensure validation runs even when saving programmatically.
        """
        self.full_clean()
        return super().save(*args, **kwargs)
