"""
Shared test base that loads the bundled seed catalog.
"""

from pathlib import Path

from django.test import TestCase

import customers
from customers.models import Customer
from customers.yaml_service import PricingYAMLImporter

SEED_FILE = Path(customers.__file__).parent / "fixtures" / "pricing_seed.yaml"


class SeededPricingTestCase(TestCase):
    """Loads the bundled seed catalog (Services A-C, Customers X and Y)."""

    @classmethod
    def setUpTestData(cls):
        results = PricingYAMLImporter(SEED_FILE.read_text()).import_catalog()
        assert not results["errors"], results["errors"]
        cls.customer_x = Customer.objects.get(name="Customer X")
        cls.customer_y = Customer.objects.get(name="Customer Y")
