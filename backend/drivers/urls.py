from django.urls import path
from .views import (
    AvailableRidesView,
    AcceptRideView,
    CompleteRideView,
    DriverCurrentRideView,
    DriverRideHistoryView,
)

app_name = "drivers"

urlpatterns = [
    path("available-rides/", AvailableRidesView.as_view(), name="available-rides"),
    path("rides/<int:ride_id>/accept/", AcceptRideView.as_view(), name="accept-ride"),
    path("rides/<int:ride_id>/complete/", CompleteRideView.as_view(), name="complete-ride"),
    path("current-ride/", DriverCurrentRideView.as_view(), name="current-ride"),
    path("history/", DriverRideHistoryView.as_view(), name="history"),
]
