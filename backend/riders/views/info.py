from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated

from rides.serializers import RideSerializer
from services.dispatch import ride_history

from ..permissions import IsRider


class RiderRideHistoryView(APIView):
    """
    GET: Retrieve rider ride history (completed + cancelled)
    """
    permission_classes = [IsAuthenticated, IsRider]

    def get(self, request):
        rides = ride_history(request.user)
        return Response({"count": len(rides), "rides": RideSerializer(rides, many=True).data})
