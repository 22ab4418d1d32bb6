# customers/services/address_service.py

"""
ADDRESS SERVICE (DEFAULT-ADDRESS INVARIANT)

Purpose:
- Create / update / delete saved shipping addresses for a customer.
- Keep "at most one default address per customer" true at all times.

Rules:
- Supplying is_default=True (create, update or set_default) clears the flag
  on every other address of the same customer, then sets it on the target,
  inside ONE transaction (customer row locked to serialize writers).
- Supplying is_default=False on update touches no other address. If the
  address was the default, the customer ends up with no default (accepted).
- Unknown address and "belongs to someone else" are the same failure
  (ADDRESS_NOT_FOUND) so other customers' data is never revealed.
"""

from __future__ import annotations

import logging

from django.db import transaction
from rest_framework.fields import BooleanField

from core.ids import as_uuid
from core.results import ErrorKind, OperationResult, StorefrontError
from customers.models import Customer, CustomerAddress
from customers.services.address_store import (
    clear_defaults_for_customer,
    delete_address as _delete_row,
    find_address,
    list_addresses_for_customer,
    save_address,
)

logger = logging.getLogger(__name__)


# ============================================================
# DOMAIN ERRORS
# ============================================================


class AddressError(StorefrontError):
    pass


class AddressNotFoundError(AddressError):
    error_kind = ErrorKind.NOT_FOUND
    code = "ADDRESS_NOT_FOUND"

    def __init__(self, message: str = "Address not found"):
        super().__init__(message)


class AddressValidationError(AddressError):
    error_kind = ErrorKind.INVALID_INPUT
    code = "INVALID_ADDRESS"


# ============================================================
# INPUT NORMALIZATION
# ============================================================

REQUIRED_FIELDS = ("type", "name", "address", "city")
TEXT_FIELDS = ("type", "name", "address", "city", "landmark")


def _customer_id(customer):
    if customer is None:
        return None
    if isinstance(customer, Customer):
        return customer.pk
    return as_uuid(customer)


def _clean_coordinates(value):
    if value in (None, "", {}):
        return None

    if not isinstance(value, dict):
        raise AddressValidationError("Coordinates must be an object with lat and lng")

    try:
        lat = float(value.get("lat"))
        lng = float(value.get("lng"))
    except (TypeError, ValueError):
        raise AddressValidationError("Coordinates must contain numeric lat and lng")

    if not (-90.0 <= lat <= 90.0) or not (-180.0 <= lng <= 180.0):
        raise AddressValidationError("Coordinates are out of range")

    return {"lat": lat, "lng": lng}


def _clean_flag(value) -> bool:
    # same accepted spellings as the API's BooleanField ("true", "0", "off", ...)
    if value is None or value == "":
        return False
    try:
        if value in BooleanField.TRUE_VALUES:
            return True
        if value in BooleanField.FALSE_VALUES:
            return False
    except TypeError:
        pass
    raise AddressValidationError("is_default must be true or false")


def _clean_payload(data: dict, *, partial: bool) -> dict:
    cleaned = {}

    for field in TEXT_FIELDS:
        if field not in data:
            continue
        value = data.get(field)
        value = "" if value is None else str(value).strip()
        if field == "landmark":
            cleaned[field] = value or None
        else:
            cleaned[field] = value

    if not partial:
        missing = [f for f in REQUIRED_FIELDS if not cleaned.get(f)]
    else:
        missing = [f for f in REQUIRED_FIELDS if f in cleaned and not cleaned[f]]
    if missing:
        raise AddressValidationError("Type, name, address, and city are required")

    if "type" in cleaned:
        cleaned["type"] = cleaned["type"].lower()
        if cleaned["type"] not in CustomerAddress.AddressType.values:
            raise AddressValidationError(f"Invalid address type: {cleaned['type']}")

    if "coordinates" in data:
        cleaned["coordinates"] = _clean_coordinates(data.get("coordinates"))

    if "is_default" in data:
        cleaned["is_default"] = _clean_flag(data.get("is_default"))

    return cleaned


# ============================================================
# INTERNAL HELPERS (raise domain errors)
# ============================================================


def _lock_customer(customer_id):
    if customer_id is None:
        raise AddressNotFoundError()
    locked = Customer.objects.select_for_update().filter(pk=customer_id).first()
    if locked is None:
        raise AddressNotFoundError()
    return locked


def _owned_address(customer_id, address_id) -> CustomerAddress:
    address = find_address(address_id, for_update=True)
    if address is None or address.customer_id != customer_id:
        raise AddressNotFoundError()
    return address


@transaction.atomic
def _create(customer_id, data: dict) -> CustomerAddress:
    cleaned = _clean_payload(data, partial=False)
    _lock_customer(customer_id)

    make_default = cleaned.pop("is_default", False)
    if make_default:
        clear_defaults_for_customer(customer_id)

    address = CustomerAddress(customer_id=customer_id, is_default=make_default, **cleaned)
    return save_address(address)


@transaction.atomic
def _update(customer_id, address_id, data: dict, partial: bool) -> CustomerAddress:
    _lock_customer(customer_id)
    address = _owned_address(customer_id, address_id)
    cleaned = _clean_payload(data, partial=partial)

    make_default = cleaned.pop("is_default", None)
    if make_default:
        clear_defaults_for_customer(customer_id, except_id=address.pk)

    for field, value in cleaned.items():
        setattr(address, field, value)
    if make_default is not None:
        address.is_default = make_default

    return save_address(address)


@transaction.atomic
def _set_default(customer_id, address_id) -> CustomerAddress:
    _lock_customer(customer_id)
    address = _owned_address(customer_id, address_id)

    clear_defaults_for_customer(customer_id, except_id=address.pk)
    if not address.is_default:
        address.is_default = True
        save_address(address)
    return address


@transaction.atomic
def _delete(customer_id, address_id) -> None:
    _lock_customer(customer_id)
    address = _owned_address(customer_id, address_id)
    _delete_row(address)


# ============================================================
# PUBLIC OPERATIONS (return OperationResult)
# ============================================================


def list_addresses(*, customer):
    customer_id = _customer_id(customer)
    if customer_id is None:
        return CustomerAddress.objects.none()
    return list_addresses_for_customer(customer_id)


def create_address(*, customer, data: dict) -> OperationResult:
    customer_id = _customer_id(customer)
    try:
        address = _create(customer_id, data)
    except AddressError as exc:
        logger.info(
            "Address create rejected",
            extra={"customer_id": str(customer_id), "code": exc.code},
        )
        return OperationResult.failure(exc)

    logger.info(
        "Address created",
        extra={
            "customer_id": str(customer_id),
            "address_id": str(address.pk),
            "is_default": address.is_default,
        },
    )
    return OperationResult.success(address)


def update_address(*, customer, address_id, data: dict, partial: bool = True) -> OperationResult:
    customer_id = _customer_id(customer)
    try:
        address = _update(customer_id, address_id, data, partial)
    except AddressError as exc:
        logger.info(
            "Address update rejected",
            extra={"customer_id": str(customer_id), "address_id": str(address_id), "code": exc.code},
        )
        return OperationResult.failure(exc)

    return OperationResult.success(address)


def set_default_address(*, customer, address_id) -> OperationResult:
    customer_id = _customer_id(customer)
    try:
        address = _set_default(customer_id, address_id)
    except AddressError as exc:
        logger.info(
            "Set default address rejected",
            extra={"customer_id": str(customer_id), "address_id": str(address_id), "code": exc.code},
        )
        return OperationResult.failure(exc)

    logger.info(
        "Default address set",
        extra={"customer_id": str(customer_id), "address_id": str(address.pk)},
    )
    return OperationResult.success(address)


def delete_address(*, customer, address_id) -> OperationResult:
    customer_id = _customer_id(customer)
    try:
        _delete(customer_id, address_id)
    except AddressError as exc:
        return OperationResult.failure(exc)

    return OperationResult.success()
