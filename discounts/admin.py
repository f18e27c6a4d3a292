from django.contrib import admin

from .models import Discount


@admin.register(Discount)
class DiscountAdmin(admin.ModelAdmin):
    list_display = ["customer", "service", "percentage", "start_date", "end_date"]
    list_filter = ["service", "customer"]
    search_fields = ["customer__name", "service__name"]
    date_hierarchy = "start_date"
