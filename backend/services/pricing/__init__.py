"""
Pricing service.

This module handles:
    - Estimating fares from pickup/drop locations
    - Issuing fare quotes and applying the booking fare policy
"""

from .fare_estimator import FareEstimator, get_fare_estimator, estimate_fare
from .quotes import (
    issue_quote,
    resolve_booking_fare,
    purge_expired_quotes,
    FareQuoteInvalidError,
    POLICY_RESAMPLE,
    POLICY_HONOR_QUOTE,
)

__all__ = [
    "FareEstimator",
    "get_fare_estimator",
    "estimate_fare",
    "issue_quote",
    "resolve_booking_fare",
    "purge_expired_quotes",
    "FareQuoteInvalidError",
    "POLICY_RESAMPLE",
    "POLICY_HONOR_QUOTE",
]
