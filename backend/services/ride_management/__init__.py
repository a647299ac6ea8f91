"""
Ride management service - Core ride lifecycle operations.

This module handles:
    - Creating ride requests
    - Accepting rides (exclusive claim)
    - Completing rides
    - Looking up a ride by id
"""

from .ride_lifecycle import (
    check_active_ride,
    create_ride,
    accept_ride,
    complete_ride,
    get_ride,
)

from .exceptions import (
    UnknownRiderError,
    DriverNotFoundError,
    RideNotFoundError,
    RideNoLongerAvailableError,
    NotAuthorizedError,
    InvalidTransitionError,
    ActiveRideExistsError,
    DriverBusyError,
    InvalidLocationError,
)

__all__ = [
    # Lifecycle operations
    "check_active_ride",
    "create_ride",
    "accept_ride",
    "complete_ride",
    "get_ride",
    # Exceptions
    "UnknownRiderError",
    "DriverNotFoundError",
    "RideNotFoundError",
    "RideNoLongerAvailableError",
    "NotAuthorizedError",
    "InvalidTransitionError",
    "ActiveRideExistsError",
    "DriverBusyError",
    "InvalidLocationError",
]
