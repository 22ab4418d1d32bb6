# customers/serializers/__init__.py

from .address import (
    CustomerAddressSerializer,
    CustomerAddressWriteSerializer,
    CoordinatesSerializer,
)

__all__ = [
    "CoordinatesSerializer",
    "CustomerAddressSerializer",
    "CustomerAddressWriteSerializer",
]
