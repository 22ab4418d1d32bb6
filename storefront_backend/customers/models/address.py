# customers/models/address.py

"""
CUSTOMER ADDRESS

GUARANTEES:
- At most one is_default=True address per customer.
  Enforced by customers.services.address_service (clear-then-set inside
  one transaction) and backed by a partial unique constraint.
"""

import uuid

from django.db import models
from django.db.models import Q

from .customer import Customer


class CustomerAddress(models.Model):
    class AddressType(models.TextChoices):
        HOME = "home", "Home"
        WORK = "work", "Work"
        OTHER = "other", "Other"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    customer = models.ForeignKey(
        Customer,
        on_delete=models.CASCADE,
        related_name="addresses",
    )

    type = models.CharField(
        max_length=16,
        choices=AddressType.choices,
        default=AddressType.HOME,
    )
    name = models.CharField(max_length=120)
    address = models.TextField()
    city = models.CharField(max_length=120)
    landmark = models.CharField(max_length=255, null=True, blank=True)

    # {"lat": float, "lng": float}
    coordinates = models.JSONField(null=True, blank=True)

    is_default = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-is_default", "-created_at"]
        indexes = [
            models.Index(
                fields=["customer", "is_default"],
                name="custaddr_cust_default_idx",
            ),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=["customer"],
                condition=Q(is_default=True),
                name="uniq_default_address_per_customer",
            ),
        ]

    def __str__(self):
        flag = " (default)" if self.is_default else ""
        return f"{self.name}: {self.city}{flag}"
