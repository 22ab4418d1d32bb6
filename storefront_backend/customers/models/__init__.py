# customers/models/__init__.py

from .address import CustomerAddress
from .customer import Customer

__all__ = [
    "Customer",
    "CustomerAddress",
]
