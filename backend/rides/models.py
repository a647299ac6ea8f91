from django.db import models
from django.db.models import Q
from django.conf import settings


class Ride(models.Model):
    """A rider's trip request and its lifecycle, polled by riders and drivers"""
    PENDING = 'pending'
    ACCEPTED = 'accepted'
    COMPLETED = 'completed'
    CANCELLED = 'cancelled'

    STATUS_CHOICES = [
        (PENDING, 'Pending'),
        (ACCEPTED, 'Accepted'),
        (COMPLETED, 'Completed'),
        (CANCELLED, 'Cancelled'),
    ]

    # A rider may hold one open ride; a driver one accepted ride
    OPEN_STATUSES = (PENDING, ACCEPTED)
    FINISHED_STATUSES = (COMPLETED, CANCELLED)

    # Foreign keys
    rider = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name='rides'
    )

    driver = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='driven_rides'
    )

    # Locations are free-form; there is no geodata behind them
    pickup_location = models.CharField(max_length=255)
    drop_location = models.CharField(max_length=255)

    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=PENDING)
    fare = models.PositiveIntegerField()

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    accepted_at = models.DateTimeField(null=True, blank=True)
    completed_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = 'rides'
        ordering = ['created_at', 'id']
        constraints = [
            models.UniqueConstraint(
                fields=['rider'],
                condition=Q(status__in=['pending', 'accepted']),
                name='one_open_ride_per_rider'
            ),
            models.UniqueConstraint(
                fields=['driver'],
                condition=Q(status='accepted'),
                name='one_accepted_ride_per_driver'
            ),
        ]

    def __str__(self):
        return f"Ride #{self.id} - {self.rider} - {self.status}"


class FareQuote(models.Model):
    """Fare shown to a rider before booking; honored only under the honor_quote policy."""

    rider = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='fare_quotes'
    )

    pickup_location = models.CharField(max_length=255)
    drop_location = models.CharField(max_length=255)
    fare = models.PositiveIntegerField()

    created_at = models.DateTimeField(auto_now_add=True)
    expires_at = models.DateTimeField()
    used_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = 'fare_quotes'
        ordering = ['-created_at']

    def __str__(self):
        return f"Quote #{self.id} - {self.rider} - {self.fare}"
