# customers/services/address_store.py

"""
ADDRESS STORE (DATA ACCESS)

Thin data-access contract used by the address default invariant:
- find_address(id)
- clear_defaults_for_customer(customer_id, except_id=None)
- save_address(address)

Callers own the transaction boundary.
"""

from __future__ import annotations

from core.ids import as_uuid
from customers.models import CustomerAddress


def find_address(address_id, *, for_update: bool = False) -> CustomerAddress | None:
    pk = as_uuid(address_id)
    if pk is None:
        return None

    qs = CustomerAddress.objects.all()
    if for_update:
        qs = qs.select_for_update()
    return qs.filter(pk=pk).first()


def list_addresses_for_customer(customer_id):
    return CustomerAddress.objects.filter(customer_id=customer_id).order_by(
        "-is_default", "-created_at"
    )


def clear_defaults_for_customer(customer_id, except_id=None) -> int:
    """
    Unset is_default on every default address of the customer
    (optionally sparing one). Returns the number of rows touched.
    """
    qs = CustomerAddress.objects.filter(customer_id=customer_id, is_default=True)
    if except_id is not None:
        qs = qs.exclude(pk=except_id)
    return qs.update(is_default=False)


def save_address(address: CustomerAddress) -> CustomerAddress:
    address.save()
    return address


def delete_address(address: CustomerAddress) -> None:
    address.delete()
