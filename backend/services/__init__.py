"""
Services package - Business logic layer.

This package contains all business logic services that operate on Django models
but are decoupled from the HTTP layer.

Modules:
    - identity: Rider/driver registration and lookup
    - pricing: Fare estimation and fare quotes
    - ride_management: Core ride lifecycle operations
    - dispatch: Read-side queries for polling clients
"""

from .exceptions import DispatchError

__all__ = [
    "DispatchError",
]
