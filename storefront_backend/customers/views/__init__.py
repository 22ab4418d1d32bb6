# customers/views/__init__.py

from .addresses import CustomerAddressViewSet

__all__ = ["CustomerAddressViewSet"]
