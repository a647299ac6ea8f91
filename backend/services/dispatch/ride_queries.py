"""
Read-side views over the ride ledger for polling clients.

Each function runs a single query, so a poll always reflects one committed
state of the ledger. Nothing here writes.
"""

from typing import List, Optional

from django.db.models import Q

from rides.models import Ride


def _rides():
    return Ride.objects.select_related('rider', 'driver')


def available_rides() -> List[Ride]:
    """Pending rides, oldest first."""
    return list(_rides().filter(status=Ride.PENDING).order_by('created_at', 'id'))


def active_ride_for_rider(rider_id) -> Optional[Ride]:
    """The rider's open (pending or accepted) ride, if any."""
    return _rides().filter(rider_id=rider_id, status__in=Ride.OPEN_STATUSES).first()


def active_ride_for_driver(driver_id) -> Optional[Ride]:
    """The driver's accepted ride, if any."""
    return _rides().filter(driver_id=driver_id, status=Ride.ACCEPTED).first()


def ride_history(user, limit: int = 20) -> List[Ride]:
    """Finished rides the user took part in, newest first."""
    qs = (
        _rides()
        .filter(Q(rider=user) | Q(driver=user), status__in=Ride.FINISHED_STATUSES)
        .order_by('-created_at', '-id')[:limit]
    )
    return list(qs)
