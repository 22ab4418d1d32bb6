# core/tests/test_health.py

from django.test import TestCase
from rest_framework.test import APIClient


class HealthCheckTests(TestCase):
    def test_health_reports_db_ok(self):
        response = APIClient().get("/api/health/")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"status": "ok", "db": "ok"})

    def test_api_root_lists_modules(self):
        response = APIClient().get("/api/")
        self.assertEqual(response.status_code, 200)
        self.assertIn("coupons", response.json()["modules"])
