from rest_framework import serializers

from accounts.serializers import UserBasicSerializer
from .models import Ride, FareQuote


class RideSerializer(serializers.ModelSerializer):
    """Serializer for Rides"""
    rider = UserBasicSerializer(read_only=True)
    driver = UserBasicSerializer(read_only=True, allow_null=True)

    class Meta:
        model = Ride
        fields = ['id', 'rider_id', 'rider', 'driver_id', 'driver', 'pickup_location',
                  'drop_location', 'status', 'fare', 'created_at', 'accepted_at',
                  'completed_at']


class FareEstimateRequestSerializer(serializers.Serializer):
    """Pickup/drop pair; blank values are rejected after trimming"""
    pickup_location = serializers.CharField(max_length=255)
    drop_location = serializers.CharField(max_length=255)


class RideCreateSerializer(FareEstimateRequestSerializer):
    """Serializer for booking a ride"""
    quote_id = serializers.IntegerField(required=False, allow_null=True)


class FareQuoteSerializer(serializers.ModelSerializer):
    quote_id = serializers.IntegerField(source='id', read_only=True)

    class Meta:
        model = FareQuote
        fields = ['quote_id', 'pickup_location', 'drop_location', 'fare', 'expires_at']
