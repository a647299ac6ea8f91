"""Custom exceptions for ride management."""

from services.exceptions import DispatchError


class UnknownRiderError(DispatchError):
    """Raised when a ride is booked for a user that is not a registered rider."""
    error_code = "unknown_rider"
    default_message = "Rider not found"


class DriverNotFoundError(DispatchError):
    """Raised when the accepting user is not a registered driver."""
    error_code = "driver_not_found"
    default_message = "Driver not found"


class RideNotFoundError(DispatchError):
    """Raised when a ride cannot be found."""
    error_code = "ride_not_found"
    default_message = "Ride not found"


class RideNoLongerAvailableError(DispatchError):
    """Raised when another driver claimed the ride first."""
    error_code = "ride_not_available"
    default_message = "This ride is no longer available. Please try another ride."


class NotAuthorizedError(DispatchError):
    """Raised when a driver acts on a ride assigned to someone else."""
    error_code = "not_authorized"
    default_message = "Driver not authorized to complete this ride"


class InvalidTransitionError(DispatchError):
    """Raised when a status change would break the ride lifecycle."""
    error_code = "invalid_transition"
    default_message = "Ride cannot move to the requested status"


class ActiveRideExistsError(DispatchError):
    """Raised when user already has an active ride."""
    error_code = "active_ride_exists"
    default_message = "You already have an active ride request"


class DriverBusyError(DispatchError):
    """Raised when driver already holds an accepted ride."""
    error_code = "driver_busy"
    default_message = "Complete your current ride before accepting another"


class InvalidLocationError(DispatchError):
    """Raised when a pickup or drop location is blank."""
    error_code = "invalid_location"
    default_message = "Pickup and drop locations are required"
