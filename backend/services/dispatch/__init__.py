"""
Dispatch query service.

Read-only views used by rider and driver polling endpoints:
    - Rides waiting for a driver
    - The active ride of a rider or a driver
    - Past rides
"""

from .ride_queries import (
    available_rides,
    active_ride_for_rider,
    active_ride_for_driver,
    ride_history,
)

__all__ = [
    "available_rides",
    "active_ride_for_rider",
    "active_ride_for_driver",
    "ride_history",
]
