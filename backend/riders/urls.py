# riders/urls.py

from django.urls import path

from .views.info import RiderRideHistoryView
from .views.rides import (
    RiderFareEstimateView,
    RiderCreateRideView,
    RiderCurrentRideView,
)

app_name = "riders"

urlpatterns = [
    # INFO
    path("history/", RiderRideHistoryView.as_view(), name="ride-history"),

    # RIDE
    path("fare-estimate/", RiderFareEstimateView.as_view(), name="fare-estimate"),
    path("rides/", RiderCreateRideView.as_view(), name="create-ride"),
    path("current/", RiderCurrentRideView.as_view(), name="current-ride"),
]
