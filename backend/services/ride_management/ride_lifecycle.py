"""
Core ride lifecycle operations.

This module is the only writer of ride records. A ride moves
PENDING -> ACCEPTED -> COMPLETED and never backwards; every status write
is a conditional update on the status the caller expects, executed inside
a transaction, so concurrent callers cannot observe or produce a torn ride.
"""

import logging
from typing import Optional

from django.contrib.auth import get_user_model
from django.db import IntegrityError, transaction
from django.utils import timezone

from rides.models import Ride
from services.identity import find_by_id
from services.pricing import resolve_booking_fare
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

User = get_user_model()
logger = logging.getLogger(__name__)


def _load_ride(ride_id) -> Ride:
    return Ride.objects.select_related('rider', 'driver').get(id=ride_id)


def get_ride(ride_id) -> Optional[Ride]:
    """Read-only lookup of a single ride."""
    try:
        return _load_ride(ride_id)
    except (Ride.DoesNotExist, ValueError, TypeError):
        return None


# ===================== Rider Operations =====================

def check_active_ride(rider) -> Optional[Ride]:
    """Check if rider has an open ride."""
    return Ride.objects.filter(rider=rider, status__in=Ride.OPEN_STATUSES).first()


@transaction.atomic
def create_ride(rider_id, pickup_location: str, drop_location: str, quote_id=None) -> Ride:
    """
    Book a new ride in PENDING.

    Args:
        rider_id: Id of the booking rider
        pickup_location: Free-form pickup description
        drop_location: Free-form drop description
        quote_id: Optional fare quote, honored only under the honor_quote policy

    Returns:
        The created Ride

    Raises:
        InvalidLocationError: If pickup or drop is blank
        UnknownRiderError: If rider_id does not name a registered rider
        ActiveRideExistsError: If the rider already has an open ride
        FareQuoteInvalidError: If a presented quote cannot be honored
    """
    if not (pickup_location or "").strip() or not (drop_location or "").strip():
        raise InvalidLocationError()

    rider = find_by_id(rider_id)
    if rider is None or rider.role != User.RIDER:
        raise UnknownRiderError()

    if check_active_ride(rider):
        raise ActiveRideExistsError()

    fare = resolve_booking_fare(rider, pickup_location, drop_location, quote_id)

    try:
        with transaction.atomic():
            ride = Ride.objects.create(
                rider=rider,
                pickup_location=pickup_location,
                drop_location=drop_location,
                fare=fare,
                status=Ride.PENDING,
            )
    except IntegrityError:
        # A concurrent booking by the same rider committed first
        raise ActiveRideExistsError()

    logger.info("Ride %s created by rider %s (fare=%s)", ride.id, rider.id, fare)
    return ride


# ===================== Driver Operations =====================

@transaction.atomic
def accept_ride(ride_id, driver_id) -> Ride:
    """
    Claim a pending ride for a driver.

    The PENDING check and the write of ACCEPTED + driver happen in one
    conditional UPDATE; when several drivers race on the same ride exactly
    one update matches a row and every other caller gets
    RideNoLongerAvailableError.

    Raises:
        RideNotFoundError: If the ride does not exist
        DriverNotFoundError: If driver_id does not name a registered driver
        DriverBusyError: If the driver already holds an accepted ride
        RideNoLongerAvailableError: If the ride is not PENDING any more
    """
    if get_ride(ride_id) is None:
        raise RideNotFoundError()

    driver = find_by_id(driver_id)
    if driver is None or driver.role != User.DRIVER:
        raise DriverNotFoundError()

    if Ride.objects.filter(driver=driver, status=Ride.ACCEPTED).exists():
        raise DriverBusyError()

    try:
        with transaction.atomic():
            claimed = Ride.objects.filter(id=ride_id, status=Ride.PENDING).update(
                driver=driver,
                status=Ride.ACCEPTED,
                accepted_at=timezone.now(),
            )
    except IntegrityError:
        # Driver accepted another ride concurrently
        raise DriverBusyError()

    if not claimed:
        logger.info("Driver %s lost the race for ride %s", driver.id, ride_id)
        raise RideNoLongerAvailableError()

    logger.info("Ride %s accepted by driver %s", ride_id, driver.id)
    return _load_ride(ride_id)


@transaction.atomic
def complete_ride(ride_id, driver_id) -> Ride:
    """
    Complete a ride - called by the assigned driver at the destination.

    Raises:
        RideNotFoundError: If the ride does not exist
        NotAuthorizedError: If the caller is not the ride's assigned driver
        InvalidTransitionError: If the ride is not currently ACCEPTED
    """
    try:
        ride = Ride.objects.select_for_update().get(id=ride_id)
    except (Ride.DoesNotExist, ValueError, TypeError):
        raise RideNotFoundError()

    if ride.driver_id is None or str(ride.driver_id) != str(driver_id):
        raise NotAuthorizedError()

    if ride.status != Ride.ACCEPTED:
        logger.warning(
            "Rejected completion of ride %s by driver %s: status is %s",
            ride.id, driver_id, ride.status,
        )
        raise InvalidTransitionError(f"Cannot complete a ride that is {ride.status}")

    ride.status = Ride.COMPLETED
    ride.completed_at = timezone.now()
    ride.save(update_fields=['status', 'completed_at'])

    logger.info("Ride %s completed by driver %s", ride.id, driver_id)
    return _load_ride(ride.id)
