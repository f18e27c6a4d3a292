from django.contrib import admin

from .models import CustomerServiceUsage


@admin.register(CustomerServiceUsage)
class CustomerServiceUsageAdmin(admin.ModelAdmin):
    list_display = [
        "customer",
        "service",
        "start_date",
        "customer_price_per_day",
        "created_at",
    ]
    list_filter = ["service", "customer"]
    search_fields = ["customer__name", "service__name"]
    date_hierarchy = "start_date"
    readonly_fields = ["created_at"]
    list_per_page = 50
