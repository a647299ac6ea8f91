from django.test import TestCase, override_settings
from django.urls import reverse
from rest_framework.test import APIClient

from accounts.models import User
from rides.models import Ride
from services import identity
from services.ride_management import accept_ride, complete_ride


class RiderApiTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.rider = identity.register("Alice", "111", User.RIDER)
        self.driver = identity.register("Bob", "222", User.DRIVER)
        self.client.force_authenticate(user=self.rider)

    def _book(self, **extra):
        payload = {"pickup_location": "Park", "drop_location": "Square", **extra}
        return self.client.post(reverse("riders:create-ride"), payload, format="json")

    def test_fare_estimate_returns_quote(self):
        response = self.client.post(
            reverse("riders:fare-estimate"),
            {"pickup_location": "Park", "drop_location": "Square"},
            format="json",
        )

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["fare"] % 15, 0)
        self.assertIn("quote_id", response.data)
        self.assertEqual(response.data["quote_policy"], "resample")
        self.assertFalse(Ride.objects.exists())

    def test_fare_estimate_requires_locations(self):
        response = self.client.post(
            reverse("riders:fare-estimate"),
            {"pickup_location": "  ", "drop_location": "Square"},
            format="json",
        )

        self.assertEqual(response.status_code, 400)

    def test_book_ride(self):
        response = self._book()

        self.assertEqual(response.status_code, 201)
        self.assertTrue(response.data["success"])
        self.assertEqual(response.data["ride"]["status"], "pending")
        self.assertEqual(response.data["ride"]["rider_id"], self.rider.id)
        self.assertIsNone(response.data["ride"]["driver"])

    def test_second_open_ride_is_rejected(self):
        self._book()

        response = self._book(pickup_location="Mall")

        self.assertEqual(response.status_code, 409)
        self.assertEqual(response.data["error"], "active_ride_exists")

    @override_settings(FARE_QUOTE_POLICY="honor_quote")
    def test_booking_honors_quote(self):
        estimate = self.client.post(
            reverse("riders:fare-estimate"),
            {"pickup_location": "Park", "drop_location": "Square"},
            format="json",
        )

        response = self._book(quote_id=estimate.data["quote_id"])

        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.data["ride"]["fare"], estimate.data["fare"])

    @override_settings(FARE_QUOTE_POLICY="honor_quote")
    def test_booking_with_unknown_quote(self):
        response = self._book(quote_id=424242)

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data["error"], "quote_invalid")

    def test_current_ride_polling(self):
        empty = self.client.get(reverse("riders:current-ride"))
        self.assertFalse(empty.data["has_active_ride"])
        self.assertEqual(empty.data["poll_interval"], 5)

        ride_id = self._book().data["ride"]["id"]
        pending = self.client.get(reverse("riders:current-ride"))
        self.assertEqual(pending.data["status"], "pending")
        self.assertFalse(pending.data["driver_assigned"])

        accept_ride(ride_id, self.driver.id)
        accepted = self.client.get(reverse("riders:current-ride"))
        self.assertEqual(accepted.data["status"], "accepted")
        self.assertTrue(accepted.data["driver_assigned"])
        self.assertEqual(accepted.data["ride"]["driver"]["name"], "Bob")

        complete_ride(ride_id, self.driver.id)
        done = self.client.get(reverse("riders:current-ride"))
        self.assertFalse(done.data["has_active_ride"])

        history = self.client.get(reverse("riders:ride-history"))
        self.assertEqual(history.data["count"], 1)
        self.assertEqual(history.data["rides"][0]["status"], "completed")

    def test_drivers_cannot_use_rider_endpoints(self):
        self.client.force_authenticate(user=self.driver)

        response = self._book()

        self.assertEqual(response.status_code, 403)

    def test_requires_authentication(self):
        self.client.force_authenticate(user=None)

        response = self.client.get(reverse("riders:current-ride"))

        self.assertEqual(response.status_code, 401)
