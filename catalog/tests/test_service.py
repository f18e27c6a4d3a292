from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import IntegrityError
from django.test import TestCase

from catalog.models import Service


class ServiceModelTests(TestCase):
    def test_create_and_str(self):
        service = Service.objects.create(name="Service A", base_price_per_day=Decimal("0.2"))

        self.assertIsNotNone(service.pk)
        self.assertEqual(str(service), "Service A")
        self.assertFalse(service.charges_on_weekends)

    def test_name_is_unique(self):
        Service.objects.create(name="Service A", base_price_per_day=Decimal("0.2"))

        with self.assertRaises(IntegrityError):
            Service.objects.create(name="Service A", base_price_per_day=Decimal("0.3"))

    def test_negative_price_rejected(self):
        service = Service(name="Service A", base_price_per_day=Decimal("-0.2"))

        with self.assertRaises(ValidationError) as ctx:
            service.full_clean()

        self.assertIn("base_price_per_day", ctx.exception.message_dict)

    def test_price_precision(self):
        service = Service.objects.create(name="Service B", base_price_per_day=Decimal("0.2375"))

        service.refresh_from_db()
        self.assertEqual(service.base_price_per_day, Decimal("0.2375"))
