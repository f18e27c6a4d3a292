"""
YAML import/export service for the pricing catalog.

Provides bulk import and export of services and of customers with their service
usages and discounts. Validation matches web interface validation.

YAML Format:
    services:
      - name: "Service A"
        base_price_per_day: 0.2
        charges_on_weekends: false

    customers:
      - name: "Customer X"
        global_free_days: 0
        service_usages:
          - service: "Service A"
            start_date: "2019-09-20"
            customer_price_per_day: null
        discounts:
          - service: "Service A"
            percentage: 0.20
            start_date: "2019-09-22"
            end_date: "2019-09-24"
"""

import datetime
from decimal import Decimal, InvalidOperation
from typing import Any

import yaml
from django.core.exceptions import ValidationError
from django.db import transaction

from catalog.models import Service
from customers.models import Customer
from discounts.models import Discount
from usage.models import CustomerServiceUsage


class PricingYAMLExporter:
    """Export customers, and the services they use, to YAML format."""

    def __init__(self, customers_queryset):
        """
        Initialize exporter with customers queryset.

        Args:
            customers_queryset: Django queryset of Customer objects to export
        """
        self.customers = customers_queryset.prefetch_related(
            "service_usages__service",
            "discounts__service",
        )

    def export_to_yaml(self) -> str:
        """
        Export customers to YAML string.

        Returns:
            YAML string representation of services and customers
        """

        # Add custom representer for Decimal to preserve precision
        def decimal_representer(dumper, value):
            return dumper.represent_scalar("tag:yaml.org,2002:float", str(value))

        yaml.add_representer(Decimal, decimal_representer)

        # Collect all services referenced by any usage or discount
        all_services: set[Service] = set()
        for customer in self.customers:
            for usage in customer.service_usages.all():
                if usage.service is not None:
                    all_services.add(usage.service)
            for discount in customer.discounts.all():
                all_services.add(discount.service)

        data = {
            "services": [
                self._serialize_service(service)
                for service in sorted(all_services, key=lambda s: s.name)
            ],
            "customers": [self._serialize_customer(c) for c in self.customers],
        }
        return yaml.dump(data, default_flow_style=False, sort_keys=False, allow_unicode=True)

    def _serialize_service(self, service: Service) -> dict:
        """Convert service instance to dictionary."""
        return {
            "name": service.name,
            "base_price_per_day": service.base_price_per_day,
            "charges_on_weekends": service.charges_on_weekends,
        }

    def _serialize_customer(self, customer: Customer) -> dict:
        """Convert customer instance to dictionary."""
        return {
            "name": customer.name,
            "global_free_days": customer.global_free_days,
            # Usages of deleted services cannot be re-imported
            "service_usages": [
                self._serialize_usage(u)
                for u in customer.service_usages.all()
                if u.service is not None
            ],
            "discounts": [self._serialize_discount(d) for d in customer.discounts.all()],
        }

    def _serialize_usage(self, usage: CustomerServiceUsage) -> dict:
        """Convert usage instance to dictionary."""
        return {
            "service": usage.service.name,
            "start_date": usage.start_date.isoformat(),
            "customer_price_per_day": usage.customer_price_per_day,
        }

    def _serialize_discount(self, discount: Discount) -> dict:
        """Convert discount instance to dictionary."""
        return {
            "service": discount.service.name,
            "percentage": discount.percentage,
            "start_date": discount.start_date.isoformat(),
            "end_date": discount.end_date.isoformat(),
        }


class PricingYAMLImporter:
    """Import services and customers from YAML format with validation."""

    def __init__(self, yaml_content: str, replace_existing: bool = False):
        """
        Initialize importer with YAML content.

        Args:
            yaml_content: YAML string to parse and import
            replace_existing: If True, replace usages and discounts of existing
                            customers with the same name. If False, skip them.
        """
        self.yaml_content = yaml_content
        self.replace_existing = replace_existing
        self.results = {
            "services": [],  # [service, ...]
            "created": [],  # [(customer, counts), ...]
            "updated": [],  # [(customer, counts), ...]
            "skipped": [],  # [(customer_name, reason), ...]
            "errors": [],  # [(customer_name, error_messages), ...]
        }
        self._services_by_name: dict[str, Service] = {}

    def import_catalog(self) -> dict:
        """
        Parse and import services and customers from YAML.

        Returns:
            Dictionary with results:
            {
                'services': [service, ...],
                'created': [(customer, counts), ...],
                'updated': [(customer, counts), ...],
                'skipped': [(customer_name, reason), ...],
                'errors': [(customer_name, error_messages), ...]
            }
        """
        try:
            data = self._parse_yaml()
            self._validate_schema(data)
        except ValueError as e:
            # Parse or schema errors affect entire file
            self.results["errors"].append(("YAML File", [str(e)]))
            return self.results

        # First pass: create or update all services
        try:
            with transaction.atomic():
                self._import_services(data.get("services", []))
        except Exception as e:
            self.results["errors"].append(("Services", self._error_messages(e)))
            return self.results

        # Import each customer in its own transaction
        for customer_data in data["customers"]:
            try:
                self._import_single_customer(customer_data)
            except Exception as e:
                # Unexpected errors during import
                customer_name = customer_data.get("name", "Unknown")
                self.results["errors"].append((customer_name, [f"Unexpected error: {e}"]))

        return self.results

    def _parse_yaml(self) -> dict:
        """Parse YAML content with error handling."""
        try:
            data = yaml.safe_load(self.yaml_content)
            if data is None:
                raise ValueError("Empty YAML file")
            return data
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML syntax: {str(e)}")

    def _validate_schema(self, data: dict):
        """Validate top-level YAML structure."""
        if not isinstance(data, dict):
            raise ValueError("YAML must contain a dictionary at top level")

        if "customers" not in data:
            raise ValueError("Missing required top-level key: customers")

        if not isinstance(data["customers"], list):
            raise ValueError("customers must be a list")

        if "services" in data and not isinstance(data["services"], list):
            raise ValueError("services must be a list")

        for customer_data in data["customers"]:
            if not isinstance(customer_data, dict):
                raise ValueError("Each customer must be a dictionary")

    def _import_services(self, services_data: list[dict]):
        """Create or update services and store them by name for reference."""
        for service_data in services_data:
            if not isinstance(service_data, dict):
                raise ValueError("Each service must be a dictionary")
            if "name" not in service_data:
                raise ValueError("Service missing required field: name")

            service = Service.objects.filter(name=service_data["name"]).first()
            if service is None:
                service = Service(name=service_data["name"])
            service.base_price_per_day = self._parse_decimal(
                service_data.get("base_price_per_day"), "base_price_per_day"
            )
            service.charges_on_weekends = service_data.get("charges_on_weekends", False)
            service.full_clean()
            service.save()

            self._services_by_name[service.name] = service
            self.results["services"].append(service)

    def _import_single_customer(self, customer_data: dict):
        """Import a single customer atomically."""
        customer_name = customer_data.get("name", "Unknown")

        if "name" not in customer_data:
            self.results["errors"].append((customer_name, ["Missing required field: name"]))
            return

        existing_customer = Customer.objects.filter(name=customer_name).first()

        if existing_customer and not self.replace_existing:
            self.results["skipped"].append((customer_name, "Customer already exists"))
            return

        # Import in transaction (per-customer atomicity)
        try:
            with transaction.atomic():
                if existing_customer:
                    existing_customer.service_usages.all().delete()
                    existing_customer.discounts.all().delete()
                    customer = existing_customer
                    action = "updated"
                else:
                    customer = Customer(name=customer_name)
                    action = "created"

                customer.global_free_days = customer_data.get("global_free_days", 0)
                customer.full_clean()
                customer.save()

                counts = self._import_customer_records(customer, customer_data)
                self.results[action].append((customer, counts))

        except ValidationError as e:
            self.results["errors"].append((customer_name, self._error_messages(e)))

    def _import_customer_records(self, customer: Customer, customer_data: dict) -> dict:
        """
        Import all usages and discounts for a customer.

        Returns:
            Dictionary with counts: {'service_usages': N, 'discounts': N}
        """
        counts = {"service_usages": 0, "discounts": 0}

        for usage_data in self._records(customer_data, "service_usages"):
            CustomerServiceUsage.objects.create(
                customer=customer,
                service=self._lookup_service(usage_data.get("service")),
                start_date=self._parse_date(usage_data.get("start_date"), "start_date"),
                customer_price_per_day=self._parse_optional_decimal(
                    usage_data.get("customer_price_per_day"), "customer_price_per_day"
                ),
            )
            counts["service_usages"] += 1

        for discount_data in self._records(customer_data, "discounts"):
            Discount.objects.create(
                customer=customer,
                service=self._lookup_service(discount_data.get("service")),
                percentage=self._parse_decimal(discount_data.get("percentage"), "percentage"),
                start_date=self._parse_date(discount_data.get("start_date"), "start_date"),
                end_date=self._parse_date(discount_data.get("end_date"), "end_date"),
            )
            counts["discounts"] += 1

        return counts

    def _records(self, customer_data: dict, key: str) -> list[dict]:
        """Return a customer's list of usage or discount entries, checking its shape."""
        records = customer_data.get(key) or []
        if not isinstance(records, list):
            raise ValidationError(f"{key} must be a list")
        for record in records:
            if not isinstance(record, dict):
                raise ValidationError(f"Each entry in {key} must be a dictionary")
        return records

    def _lookup_service(self, service_name: str | None) -> Service:
        """Find a service from this file, falling back to existing services."""
        if not service_name:
            raise ValidationError("Missing required field: service")
        if service_name in self._services_by_name:
            return self._services_by_name[service_name]

        service = Service.objects.filter(name=service_name).first()
        if service is None:
            raise ValidationError(f"Unknown service: '{service_name}'")
        self._services_by_name[service_name] = service
        return service

    def _parse_date(self, value: Any, field: str) -> datetime.date:
        """Parse date in YYYY-MM-DD format (YAML may already have parsed it)."""
        if isinstance(value, datetime.datetime):
            return value.date()
        if isinstance(value, datetime.date):
            return value
        if value is None or value == "":
            raise ValidationError(f"Missing required field: {field}")

        try:
            return datetime.datetime.strptime(value, "%Y-%m-%d").date()
        except (ValueError, TypeError):
            raise ValidationError(f"Invalid date format for {field}: '{value}'. Expected YYYY-MM-DD")

    def _parse_decimal(self, value: Any, field: str) -> Decimal:
        """Parse a required decimal without binary-float artefacts."""
        if value is None or value == "":
            raise ValidationError(f"Missing required field: {field}")
        try:
            return Decimal(str(value))
        except InvalidOperation:
            raise ValidationError(f"Invalid number for {field}: '{value}'")

    def _parse_optional_decimal(self, value: Any, field: str) -> Decimal | None:
        if value is None or value == "":
            return None
        return self._parse_decimal(value, field)

    def _error_messages(self, error: Exception) -> list[str]:
        """Flatten a ValidationError (or other error) into readable messages."""
        if isinstance(error, ValidationError):
            if hasattr(error, "error_dict"):
                return [
                    f"{field}: {message}"
                    for field, errors in error.message_dict.items()
                    for message in errors
                ]
            return list(error.messages)
        return [str(error)]
