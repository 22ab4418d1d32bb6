# core/ids.py

import uuid


def as_uuid(value):
    """Parse an identifier from a URL/payload; None when it is not a UUID."""
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except (TypeError, ValueError, AttributeError):
        return None
