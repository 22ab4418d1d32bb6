# customers/tests/test_address_api.py

from __future__ import annotations

from django.contrib.auth import get_user_model
from django.test import TestCase
from rest_framework import status
from rest_framework.test import APIClient

from customers.models import Customer, CustomerAddress

User = get_user_model()

BASE = "/api/customers/addresses/"


class CustomerAddressApiTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.user = User.objects.create_user(
            username="asha",
            email="asha@example.com",
            password="pass",
            first_name="Asha",
            last_name="Perera",
        )
        self.client.force_authenticate(self.user)

    def _create(self, **overrides):
        data = {
            "type": "home",
            "name": "Home",
            "address": "12 Lake Road",
            "city": "Colombo",
        }
        data.update(overrides)
        return self.client.post(BASE, data, format="json")

    def test_anonymous_is_rejected(self):
        response = APIClient().get(BASE)
        self.assertIn(
            response.status_code,
            (status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN),
        )

    def test_first_create_builds_customer_profile(self):
        response = self._create(is_default=True)

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertTrue(response.json()["address"]["is_default"])

        customer = Customer.objects.get(email="asha@example.com")
        self.assertEqual(customer.user, self.user)
        self.assertEqual(customer.name, "Asha Perera")

    def test_list_is_empty_without_profile(self):
        response = self.client.get(BASE)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.json(), {"addresses": []})

    def test_create_second_default_then_list(self):
        first = self._create(name="A", is_default=True).json()["address"]
        second = self._create(name="B", is_default=True).json()["address"]

        listed = self.client.get(BASE).json()["addresses"]

        self.assertEqual([a["id"] for a in listed], [second["id"], first["id"]])
        self.assertEqual([a["is_default"] for a in listed], [True, False])

    def test_missing_fields_return_400_with_message(self):
        response = self.client.post(BASE, {"type": "home"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(
            response.json()["error"]["message"],
            "Type, name, address, and city are required",
        )

    def test_set_default_action(self):
        a = self._create(name="A", is_default=True).json()["address"]
        b = self._create(name="B").json()["address"]

        response = self.client.post(f"{BASE}{b['id']}/set-default/")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertFalse(CustomerAddress.objects.get(pk=a["id"]).is_default)
        self.assertTrue(CustomerAddress.objects.get(pk=b["id"]).is_default)

    def test_put_without_flag_unsets_default(self):
        a = self._create(is_default=True).json()["address"]

        response = self.client.put(
            f"{BASE}{a['id']}/",
            {"type": "work", "name": "Office", "address": "1 Main St", "city": "Galle"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        body = response.json()["address"]
        self.assertEqual(body["type"], "work")
        self.assertFalse(body["is_default"])

    def test_patch_and_delete(self):
        a = self._create().json()["address"]

        patched = self.client.patch(f"{BASE}{a['id']}/", {"landmark": "Near the temple"}, format="json")
        self.assertEqual(patched.status_code, status.HTTP_200_OK)
        self.assertEqual(patched.json()["address"]["landmark"], "Near the temple")

        deleted = self.client.delete(f"{BASE}{a['id']}/")
        self.assertEqual(deleted.status_code, status.HTTP_200_OK)
        self.assertFalse(CustomerAddress.objects.filter(pk=a["id"]).exists())

    def test_cannot_touch_another_customers_address(self):
        other = Customer.objects.create(name="Ben", email="ben@example.com")
        theirs = CustomerAddress.objects.create(
            customer=other, name="Ben home", address="9 Hill St", city="Kandy", is_default=True
        )
        self._create()

        for response in (
            self.client.patch(f"{BASE}{theirs.pk}/", {"name": "Mine"}, format="json"),
            self.client.post(f"{BASE}{theirs.pk}/set-default/"),
            self.client.delete(f"{BASE}{theirs.pk}/"),
        ):
            self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
            self.assertEqual(response.json()["error"]["code"], "ADDRESS_NOT_FOUND")

        theirs.refresh_from_db()
        self.assertEqual(theirs.name, "Ben home")
        self.assertTrue(theirs.is_default)
