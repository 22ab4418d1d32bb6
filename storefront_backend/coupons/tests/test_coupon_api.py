# coupons/tests/test_coupon_api.py

from __future__ import annotations

from datetime import timedelta
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import TestCase, override_settings
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APIClient

from core.models import AuditLog
from coupons.models import Coupon
from coupons.tests.factories import make_coupon

User = get_user_model()

VALIDATE_URL = "/api/coupons/validate/"
ADMIN_URL = "/api/coupons/admin/coupons/"


class CouponValidateApiTests(TestCase):
    def setUp(self):
        self.client = APIClient()

    def test_valid_coupon(self):
        make_coupon("SAVE10", min_order_amount=Decimal("500"))

        response = self.client.post(
            VALIDATE_URL, {"code": "save10", "order_amount": 1000}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        body = response.json()
        self.assertTrue(body["valid"])
        self.assertEqual(body["discount_amount"], "100.00")
        self.assertEqual(body["coupon"]["code"], "SAVE10")
        self.assertEqual(body["message"], "Coupon applied successfully!")

    def test_unknown_code_is_404(self):
        response = self.client.post(
            VALIDATE_URL, {"code": "NOPE", "order_amount": "100"}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        body = response.json()
        self.assertFalse(body["valid"])
        self.assertEqual(body["error"]["code"], "COUPON_NOT_FOUND")
        self.assertEqual(body["error"]["kind"], "NotFound")

    def test_policy_violation_is_400_with_message(self):
        make_coupon(min_order_amount=Decimal("500"))

        response = self.client.post(
            VALIDATE_URL, {"code": "SAVE10", "order_amount": "100"}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        error = response.json()["error"]
        self.assertEqual(error["kind"], "PolicyViolation")
        self.assertIn("500.00", error["message"])

    def test_missing_code_is_400(self):
        response = self.client.post(VALIDATE_URL, {"order_amount": "100"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.json()["error"]["message"], "Coupon code is required")


    def test_out_of_range_amount_is_400(self):
        make_coupon()

        for amount in ("1" + "0" * 30, "1e999999"):
            with self.subTest(amount=amount):
                response = self.client.post(
                    VALIDATE_URL, {"code": "SAVE10", "order_amount": amount}, format="json"
                )
                self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
                error = response.json()["error"]
                self.assertEqual(error["kind"], "InvalidInput")
                self.assertEqual(error["message"], "Valid order amount is required")

    def test_extra_precision_amount_is_rounded(self):
        make_coupon()

        response = self.client.post(
            VALIDATE_URL, {"code": "SAVE10", "order_amount": "100.05"}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.json()["discount_amount"], "10.01")


class CouponAdminApiTests(TestCase):
    def setUp(self):
        self.admin = User.objects.create_user(
            username="admin", password="pass", is_staff=True, is_superuser=True
        )
        self.manager = User.objects.create_user(username="manager", password="pass", is_staff=True)
        self.customer = User.objects.create_user(username="customer", password="pass")
        self.client = APIClient()
        self.client.force_authenticate(self.admin)

    def _payload(self, **overrides):
        data = {
            "code": " summer25 ",
            "name": "Summer sale",
            "type": "PERCENTAGE",
            "value": "25",
            "max_discount_amount": "500",
        }
        data.update(overrides)
        return data

    def test_create_normalizes_code_and_defaults_window(self):
        before = timezone.now()
        response = self.client.post(ADMIN_URL, self._payload(), format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.content)
        coupon = Coupon.objects.get()
        self.assertEqual(coupon.code, "SUMMER25")
        self.assertEqual(coupon.used_count, 0)
        self.assertGreaterEqual(coupon.start_date, before)
        self.assertGreater(coupon.end_date, before + timedelta(days=364))

        entry = AuditLog.objects.get(table_name="coupons")
        self.assertEqual(entry.action, AuditLog.ACTION_CREATE)
        self.assertEqual(entry.actor, self.admin)
        self.assertEqual(entry.new_values["code"], "SUMMER25")

    def test_duplicate_code_rejected_case_insensitively(self):
        make_coupon("SUMMER25")

        response = self.client.post(ADMIN_URL, self._payload(), format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("code", response.json())

    def test_value_rules(self):
        for overrides in (
            {"value": "101"},
            {"value": "-1"},
            {"name": "  "},
        ):
            with self.subTest(overrides=overrides):
                response = self.client.post(ADMIN_URL, self._payload(**overrides), format="json")
                self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

        flat = self.client.post(
            ADMIN_URL, self._payload(type="FLAT", value="250"), format="json"
        )
        self.assertEqual(flat.status_code, status.HTTP_201_CREATED)

    def test_start_after_end_rejected(self):
        now = timezone.now()
        response = self.client.post(
            ADMIN_URL,
            self._payload(
                start_date=(now + timedelta(days=5)).isoformat(),
                end_date=now.isoformat(),
            ),
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("end_date", response.json())

    @override_settings(COUPON_DEFAULT_VALIDITY_DAYS=365)
    def test_future_start_without_end_gets_a_window_from_start(self):
        start = timezone.now() + timedelta(days=400)

        response = self.client.post(
            ADMIN_URL, self._payload(start_date=start.isoformat()), format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.content)
        coupon = Coupon.objects.get()
        self.assertEqual(coupon.start_date, start)
        self.assertEqual(coupon.end_date, start + timedelta(days=365))

    def test_past_end_without_start_rejected(self):
        response = self.client.post(
            ADMIN_URL,
            self._payload(end_date=(timezone.now() - timedelta(days=1)).isoformat()),
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("end_date", response.json())
        self.assertFalse(Coupon.objects.exists())

    def test_update_keeps_dates_and_rejects_taken_code(self):
        coupon = make_coupon("SAVE10")
        make_coupon("OTHER")
        original_end = coupon.end_date

        ok = self.client.patch(f"{ADMIN_URL}{coupon.pk}/", {"name": "Renamed"}, format="json")
        self.assertEqual(ok.status_code, status.HTTP_200_OK)
        coupon.refresh_from_db()
        self.assertEqual(coupon.name, "Renamed")
        self.assertEqual(coupon.end_date, original_end)

        clash = self.client.patch(f"{ADMIN_URL}{coupon.pk}/", {"code": "other"}, format="json")
        self.assertEqual(clash.status_code, status.HTTP_400_BAD_REQUEST)

        same = self.client.patch(f"{ADMIN_URL}{coupon.pk}/", {"code": "save10"}, format="json")
        self.assertEqual(same.status_code, status.HTTP_200_OK)

        actions = list(
            AuditLog.objects.filter(record_id=str(coupon.pk)).values_list("action", flat=True)
        )
        self.assertEqual(actions, [AuditLog.ACTION_UPDATE, AuditLog.ACTION_UPDATE])

    def test_delete_is_hard_and_audited(self):
        coupon = make_coupon()

        response = self.client.delete(f"{ADMIN_URL}{coupon.pk}/")

        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Coupon.objects.filter(pk=coupon.pk).exists())
        entry = AuditLog.objects.get(record_id=str(coupon.pk))
        self.assertEqual(entry.action, AuditLog.ACTION_DELETE)
        self.assertEqual(entry.old_values["code"], "SAVE10")

    def test_manager_can_read_but_not_write(self):
        make_coupon()
        self.client.force_authenticate(self.manager)

        listed = self.client.get(ADMIN_URL)
        self.assertEqual(listed.status_code, status.HTTP_200_OK)
        self.assertEqual(listed.json()["count"], 1)

        created = self.client.post(ADMIN_URL, self._payload(), format="json")
        self.assertEqual(created.status_code, status.HTTP_403_FORBIDDEN)

    def test_customer_cannot_read(self):
        self.client.force_authenticate(self.customer)
        self.assertEqual(self.client.get(ADMIN_URL).status_code, status.HTTP_403_FORBIDDEN)

    def test_filter_by_type(self):
        make_coupon("PCT")
        make_coupon("FLAT5", type=Coupon.Type.FLAT, value=Decimal("5"))

        response = self.client.get(ADMIN_URL, {"type": "FLAT"})

        codes = [c["code"] for c in response.json()["results"]]
        self.assertEqual(codes, ["FLAT5"])
