# riders/views/rides.py

from django.conf import settings
from rest_framework import status
from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated

from common.utils.responses import error_response
from rides.serializers import (
    RideSerializer,
    RideCreateSerializer,
    FareEstimateRequestSerializer,
    FareQuoteSerializer,
)
from services import DispatchError
from services.dispatch import active_ride_for_rider
from services.pricing import issue_quote
from services.ride_management import create_ride

from ..permissions import IsRider


class RiderFareEstimateView(APIView):
    """
    POST: Preview the fare for a trip. Does not book anything.

    Whether the booking is charged this fare depends on FARE_QUOTE_POLICY;
    under "resample" the returned quote is informational only.
    """
    permission_classes = [IsAuthenticated, IsRider]

    def post(self, request):
        serializer = FareEstimateRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        quote = issue_quote(
            request.user,
            serializer.validated_data['pickup_location'],
            serializer.validated_data['drop_location'],
        )

        return Response({
            **FareQuoteSerializer(quote).data,
            'quote_policy': settings.FARE_QUOTE_POLICY,
        })


class RiderCreateRideView(APIView):
    """
    POST: Rider books a ride.
    """
    permission_classes = [IsAuthenticated, IsRider]

    def post(self, request):
        serializer = RideCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            ride = create_ride(
                rider_id=request.user.id,
                pickup_location=serializer.validated_data['pickup_location'],
                drop_location=serializer.validated_data['drop_location'],
                quote_id=serializer.validated_data.get('quote_id'),
            )
        except DispatchError as exc:
            return error_response(exc)

        return Response({
            'success': True,
            'ride': RideSerializer(ride).data,
            'message': 'Ride requested. Waiting for a driver to accept.',
        }, status=status.HTTP_201_CREATED)


class RiderCurrentRideView(APIView):
    """
    GET: Rider polling endpoint to get current ride.
    """
    permission_classes = [IsAuthenticated, IsRider]

    def get(self, request):
        ride = active_ride_for_rider(request.user.id)
        poll_interval = settings.CLIENT_POLL_INTERVAL_SECONDS

        if not ride:
            return Response({
                "has_active_ride": False,
                "message": "No active ride found",
                "poll_interval": poll_interval,
            })

        resp = {
            "has_active_ride": True,
            "ride": RideSerializer(ride).data,
            "status": ride.status,
            "driver_assigned": ride.driver_id is not None,
            "poll_interval": poll_interval,
        }

        if ride.status == "pending":
            resp["message"] = "Searching for a driver..."
        else:
            resp["message"] = "Driver is on the way!"

        return Response(resp)
