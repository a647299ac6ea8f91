"""
Fare quotes and the booking fare policy.

The estimate a rider previews and the fare charged at booking are two
separate estimator calls. ``settings.FARE_QUOTE_POLICY`` decides how they
relate:

    - ``resample``: estimates are non-binding; booking always re-estimates.
    - ``honor_quote``: a booking that presents a valid quote id is charged
      the quoted fare. Bookings without a quote are re-estimated.
"""

import logging
from datetime import timedelta

from django.conf import settings
from django.db import transaction
from django.utils import timezone

from rides.models import FareQuote
from services.exceptions import DispatchError
from .fare_estimator import estimate_fare

logger = logging.getLogger(__name__)

POLICY_RESAMPLE = "resample"
POLICY_HONOR_QUOTE = "honor_quote"
QUOTE_POLICIES = (POLICY_RESAMPLE, POLICY_HONOR_QUOTE)


class FareQuoteInvalidError(DispatchError):
    """Raised when a presented quote cannot be honored."""
    error_code = "quote_invalid"
    default_message = "Fare quote is invalid or has expired. Please get a new estimate."


def get_quote_policy() -> str:
    policy = settings.FARE_QUOTE_POLICY
    if policy not in QUOTE_POLICIES:
        raise ValueError(f"Unknown FARE_QUOTE_POLICY: {policy!r}")
    return policy


def issue_quote(rider, pickup: str, drop: str) -> FareQuote:
    """Estimate a fare for the rider and record it as a quote."""
    fare = estimate_fare(pickup, drop)
    return FareQuote.objects.create(
        rider=rider,
        pickup_location=pickup,
        drop_location=drop,
        fare=fare,
        expires_at=timezone.now() + timedelta(seconds=settings.FARE_QUOTE_TTL_SECONDS),
    )


@transaction.atomic
def resolve_booking_fare(rider, pickup: str, drop: str, quote_id=None) -> int:
    """
    Decide the fare to store on a new ride.

    Raises:
        FareQuoteInvalidError: Under ``honor_quote``, when the quote does not
            belong to the rider, does not match the trip, expired, or was
            already used for a booking.
    """
    if get_quote_policy() == POLICY_RESAMPLE or quote_id is None:
        return estimate_fare(pickup, drop)

    try:
        quote = FareQuote.objects.select_for_update().get(id=quote_id, rider=rider)
    except (FareQuote.DoesNotExist, ValueError, TypeError):
        raise FareQuoteInvalidError("Fare quote not found")

    if quote.pickup_location != pickup or quote.drop_location != drop:
        raise FareQuoteInvalidError("Fare quote was issued for a different trip")
    if quote.used_at is not None:
        raise FareQuoteInvalidError("Fare quote has already been used")

    now = timezone.now()
    if quote.expires_at <= now:
        raise FareQuoteInvalidError()

    quote.used_at = now
    quote.save(update_fields=['used_at'])
    return quote.fare


def purge_expired_quotes(older_than=None, dry_run=False) -> int:
    """Delete quotes that expired before ``older_than`` (default: now)."""
    cutoff = older_than or timezone.now()
    expired = FareQuote.objects.filter(expires_at__lt=cutoff)
    count = expired.count()
    if not dry_run:
        expired.delete()
        logger.info("Purged %s expired fare quote(s)", count)
    return count
