"""Tells what to show in the Django admin interface for rides app"""

from django.contrib import admin
from .models import Ride, FareQuote


@admin.register(Ride)
class RideAdmin(admin.ModelAdmin):
    """Read-only view of the ride ledger; status changes go through the services layer"""
    list_display = ['id', 'rider', 'driver', 'status', 'fare', 'created_at', 'accepted_at', 'completed_at']
    list_filter = ['status', 'created_at']
    search_fields = ['rider__phone_number', 'driver__phone_number', 'pickup_location', 'drop_location']
    readonly_fields = [
        'rider', 'driver', 'pickup_location', 'drop_location', 'status', 'fare',
        'created_at', 'accepted_at', 'completed_at',
    ]
    date_hierarchy = 'created_at'

    def has_add_permission(self, request):
        return False


@admin.register(FareQuote)
class FareQuoteAdmin(admin.ModelAdmin):
    list_display = ("id", "rider", "fare", "created_at", "expires_at", "used_at")
    search_fields = ("rider__phone_number",)
