from django.conf import settings
from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated

from common.utils.responses import error_response
from rides.serializers import RideSerializer
from services import DispatchError
from services.dispatch import available_rides, active_ride_for_driver, ride_history
from services.ride_management import accept_ride, complete_ride

from .permissions import IsDriver


# Polled by the driver app on a fixed interval.
class AvailableRidesView(APIView):
    permission_classes = [IsAuthenticated, IsDriver]

    def get(self, request):
        rides = available_rides()
        serialized = RideSerializer(rides, many=True)

        return Response({
            "rides": serialized.data,
            "count": len(serialized.data),
            "poll_interval": settings.CLIENT_POLL_INTERVAL_SECONDS,
        })


class AcceptRideView(APIView):
    """
    POST: Claim a pending ride. Exactly one driver wins a race; the others
    get 409 ``ride_not_available`` and should pick another ride.
    """
    permission_classes = [IsAuthenticated, IsDriver]

    def post(self, request, ride_id: int):
        try:
            ride = accept_ride(ride_id, request.user.id)
        except DispatchError as exc:
            return error_response(exc, ride_id=ride_id)

        return Response({
            "success": True,
            "ride": RideSerializer(ride).data,
            "message": "Ride Accepted Successfully! Navigate to pickup location.",
        })


class CompleteRideView(APIView):
    """
    POST: Driver taps "Complete Ride" when the rider reaches the destination.
    Changes status: accepted -> completed.
    """
    permission_classes = [IsAuthenticated, IsDriver]

    def post(self, request, ride_id: int):
        try:
            ride = complete_ride(ride_id, request.user.id)
        except DispatchError as exc:
            return error_response(exc, ride_id=ride_id)

        return Response({
            "success": True,
            "ride": RideSerializer(ride).data,
            "message": "Ride completed successfully",
        })


class DriverCurrentRideView(APIView):
    permission_classes = [IsAuthenticated, IsDriver]

    def get(self, request):
        ride = active_ride_for_driver(request.user.id)
        poll_interval = settings.CLIENT_POLL_INTERVAL_SECONDS

        if not ride:
            return Response({
                "has_active_ride": False,
                "message": "No active ride",
                "poll_interval": poll_interval,
            })

        return Response({
            "has_active_ride": True,
            "ride": RideSerializer(ride).data,
            "poll_interval": poll_interval,
        })


class DriverRideHistoryView(APIView):
    permission_classes = [IsAuthenticated, IsDriver]

    def get(self, request):
        rides = ride_history(request.user)
        serializer = RideSerializer(rides, many=True)

        return Response({"count": len(rides), "rides": serializer.data})
