"""
Fare estimation.

There is no geodata behind pickup/drop locations, so the estimator samples
a synthetic trip distance from a bounded range and applies a flat per-unit
rate. Every call re-samples: two estimates for the same trip may differ.
"""

import random
from typing import Optional

from django.conf import settings


class FareEstimator:
    """Maps a (pickup, drop) pair to an integer fare."""

    def __init__(
        self,
        min_distance: int = 2,
        max_distance: int = 10,
        rate_per_unit: int = 15,
        rng: Optional[random.Random] = None,
    ):
        if min_distance < 1 or max_distance <= min_distance:
            raise ValueError("Distance range must satisfy 1 <= min < max")
        if rate_per_unit < 0:
            raise ValueError("Rate per unit cannot be negative")

        self.min_distance = min_distance
        self.max_distance = max_distance
        self.rate_per_unit = rate_per_unit
        self._rng = rng or random.Random()

    def sample_distance(self) -> int:
        """Distance in whole units, drawn from [min_distance, max_distance)."""
        return self._rng.randrange(self.min_distance, self.max_distance)

    def estimate(self, pickup: str, drop: str) -> int:
        if not pickup or not drop:
            raise ValueError("Pickup and drop locations are required")
        return self.sample_distance() * self.rate_per_unit


def get_fare_estimator(rng: Optional[random.Random] = None) -> FareEstimator:
    """Build an estimator from the FARE_* settings."""
    return FareEstimator(
        min_distance=settings.FARE_MIN_DISTANCE,
        max_distance=settings.FARE_MAX_DISTANCE,
        rate_per_unit=settings.FARE_RATE_PER_UNIT,
        rng=rng,
    )


def estimate_fare(pickup: str, drop: str) -> int:
    return get_fare_estimator().estimate(pickup, drop)
