"""
Integration tests for the customer admin YAML import/export views.
"""

from decimal import Decimal

from django.contrib.auth.models import User
from django.core.files.uploadedfile import SimpleUploadedFile
from django.test import TestCase
from django.urls import reverse

from catalog.models import Service
from customers.models import Customer
from customers.tests.test_yaml_service import VALID_YAML


class CustomerAdminYAMLTests(TestCase):
    def setUp(self):
        self.admin_user = User.objects.create_superuser(
            username="admin", email="admin@test.com", password="admin123"
        )
        self.client.login(username="admin", password="admin123")

    def test_import_form_renders(self):
        response = self.client.get(reverse("admin:customers_customer_import"))

        self.assertEqual(response.status_code, 200)
        self.assertContains(response, "Import Customers from YAML")

    def test_import_upload_creates_customers(self):
        upload = SimpleUploadedFile("catalog.yaml", VALID_YAML.encode("utf-8"))

        response = self.client.post(
            reverse("admin:customers_customer_import"), {"yaml_file": upload}
        )

        self.assertEqual(response.status_code, 200)
        self.assertContains(response, "Customer X")
        self.assertTrue(Customer.objects.filter(name="Customer X").exists())

    def test_import_rejects_wrong_extension(self):
        upload = SimpleUploadedFile("catalog.txt", VALID_YAML.encode("utf-8"))

        response = self.client.post(
            reverse("admin:customers_customer_import"), {"yaml_file": upload}
        )

        self.assertContains(response, "File must have .yaml or .yml extension")
        self.assertFalse(Customer.objects.exists())

    def test_export_downloads_yaml(self):
        service = Service.objects.create(name="Service A", base_price_per_day=Decimal("0.2"))
        customer = Customer.objects.create(name="Customer X")
        customer.service_usages.create(service=service, start_date="2019-09-20")

        response = self.client.get(reverse("admin:customers_customer_export"))

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response["Content-Type"], "application/x-yaml")
        self.assertIn("customers.yaml", response["Content-Disposition"])
        self.assertIn("name: Customer X", response.content.decode("utf-8"))

    def test_export_selected_action(self):
        Customer.objects.create(name="Customer X")
        customer_y = Customer.objects.create(name="Customer Y")

        response = self.client.post(
            reverse("admin:customers_customer_changelist"),
            {
                "action": "export_selected_customers_to_yaml",
                "_selected_action": [customer_y.pk],
            },
        )

        content = response.content.decode("utf-8")
        self.assertIn("customers_selected.yaml", response["Content-Disposition"])
        self.assertIn("Customer Y", content)
        self.assertNotIn("Customer X", content)

    def test_anonymous_user_redirected(self):
        self.client.logout()

        response = self.client.get(reverse("admin:customers_customer_import"))

        self.assertEqual(response.status_code, 302)
