from django.db import models
from django.contrib.auth.models import AbstractUser


class User(AbstractUser):
    """Registered rider or driver, identified by phone number"""
    RIDER = 'rider'
    DRIVER = 'driver'

    ROLE_CHOICES = [
        (RIDER, 'Rider'),
        (DRIVER, 'Driver'),
    ]

    # Role & basic info
    name = models.CharField(max_length=150)
    role = models.CharField(max_length=10, choices=ROLE_CHOICES)
    phone_number = models.CharField(max_length=20, unique=True)

    class Meta:
        db_table = 'users'

    @property
    def is_rider(self):
        return self.role == self.RIDER

    @property
    def is_driver(self):
        return self.role == self.DRIVER

    def __str__(self):
        return f"{self.name} ({self.get_role_display()})"
