from django.contrib import admin
from django.http import HttpResponse
from django.shortcuts import render
from django.urls import path

from discounts.models import Discount
from usage.models import CustomerServiceUsage

from .forms import PricingYAMLUploadForm
from .models import Customer
from .yaml_service import PricingYAMLExporter, PricingYAMLImporter


class CustomerServiceUsageInline(admin.TabularInline):
    model = CustomerServiceUsage
    extra = 1
    fields = ["service", "start_date", "customer_price_per_day"]


class DiscountInline(admin.TabularInline):
    model = Discount
    extra = 1
    fields = ["service", "percentage", "start_date", "end_date"]


@admin.register(Customer)
class CustomerAdmin(admin.ModelAdmin):
    list_display = [
        "name",
        "global_free_days",
        "usage_count",
        "discount_count",
        "created_at",
        "updated_at",
    ]
    search_fields = ["name"]
    readonly_fields = ["created_at", "updated_at"]
    inlines = [CustomerServiceUsageInline, DiscountInline]
    change_list_template = "admin/customers/customer_changelist.html"
    actions = ["export_selected_customers_to_yaml"]

    def usage_count(self, obj):
        return obj.service_usages.count()

    usage_count.short_description = "Usages"

    def discount_count(self, obj):
        return obj.discounts.count()

    discount_count.short_description = "Discounts"

    def get_urls(self):
        """Add custom URLs for import/export views."""
        urls = super().get_urls()
        custom_urls = [
            path(
                "import/",
                self.admin_site.admin_view(self.import_customers_view),
                name="customers_customer_import",
            ),
            path(
                "export/",
                self.admin_site.admin_view(self.export_customers_view),
                name="customers_customer_export",
            ),
        ]
        return custom_urls + urls

    def import_customers_view(self, request):
        """Handle YAML import via file upload."""
        if request.method == "POST":
            form = PricingYAMLUploadForm(request.POST, request.FILES)
            if form.is_valid():
                yaml_file = form.cleaned_data["yaml_file"]
                replace_existing = form.cleaned_data["replace_existing"]

                # Read file content
                yaml_content = yaml_file.read().decode("utf-8")

                importer = PricingYAMLImporter(yaml_content, replace_existing=replace_existing)
                results = importer.import_catalog()

                # Render results page
                context = {
                    **self.admin_site.each_context(request),
                    "results": results,
                    "opts": self.model._meta,
                    "title": "YAML Import Results",
                }
                return render(request, "admin/customers/customer_import_result.html", context)
        else:
            form = PricingYAMLUploadForm()

        context = {
            **self.admin_site.each_context(request),
            "form": form,
            "opts": self.model._meta,
            "title": "Import Customers from YAML",
        }
        return render(request, "admin/customers/customer_import.html", context)

    def export_customers_view(self, request):
        """Export all customers as YAML download."""
        exporter = PricingYAMLExporter(Customer.objects.all())
        yaml_str = exporter.export_to_yaml()

        response = HttpResponse(yaml_str, content_type="application/x-yaml")
        response["Content-Disposition"] = 'attachment; filename="customers.yaml"'
        return response

    @admin.action(description="Export selected customers to YAML")
    def export_selected_customers_to_yaml(self, request, queryset):
        """Export selected customers as YAML download."""
        exporter = PricingYAMLExporter(queryset)
        yaml_str = exporter.export_to_yaml()

        response = HttpResponse(yaml_str, content_type="application/x-yaml")
        response["Content-Disposition"] = 'attachment; filename="customers_selected.yaml"'
        return response
