"""
Translate service-layer failures into API responses.

Every failure body has the same shape:

    {"success": false, "error": "<error_code>", "message": "<human text>"}
"""

from rest_framework import status
from rest_framework.response import Response

from services.identity import DuplicatePhoneError
from services.pricing import FareQuoteInvalidError
from services.ride_management import (
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

ERROR_STATUS = {
    DuplicatePhoneError: status.HTTP_409_CONFLICT,
    UnknownRiderError: status.HTTP_404_NOT_FOUND,
    DriverNotFoundError: status.HTTP_404_NOT_FOUND,
    RideNotFoundError: status.HTTP_404_NOT_FOUND,
    RideNoLongerAvailableError: status.HTTP_409_CONFLICT,
    NotAuthorizedError: status.HTTP_403_FORBIDDEN,
    InvalidTransitionError: status.HTTP_409_CONFLICT,
    ActiveRideExistsError: status.HTTP_409_CONFLICT,
    DriverBusyError: status.HTTP_409_CONFLICT,
    FareQuoteInvalidError: status.HTTP_400_BAD_REQUEST,
    InvalidLocationError: status.HTTP_400_BAD_REQUEST,
}


def error_response(exc, **extra):
    return Response(
        {
            'success': False,
            'error': exc.error_code,
            'message': str(exc),
            **extra,
        },
        status=ERROR_STATUS.get(type(exc), status.HTTP_400_BAD_REQUEST),
    )
