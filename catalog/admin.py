from django.contrib import admin

from .models import Service


@admin.register(Service)
class ServiceAdmin(admin.ModelAdmin):
    list_display = ["name", "base_price_per_day", "charges_on_weekends", "usage_count"]
    list_filter = ["charges_on_weekends"]
    search_fields = ["name"]

    def usage_count(self, obj):
        return obj.customer_usages.count()

    usage_count.short_description = "Usages"
