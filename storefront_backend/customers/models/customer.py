# customers/models/customer.py

import uuid

from django.conf import settings
from django.db import models


class Customer(models.Model):
    """
    Storefront customer profile.

    Orders copy customer fields at checkout time; editing a Customer
    never rewrites historical orders.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="customer_profile",
    )

    name = models.CharField(max_length=180)
    email = models.EmailField(unique=True)
    phone = models.CharField(max_length=40, blank=True, default="")

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["name"]

    def __str__(self):
        return f"{self.name} <{self.email}>"
