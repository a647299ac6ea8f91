from django.test import TestCase
from django.urls import reverse
from rest_framework.test import APIClient

from accounts.models import User
from services import identity
from services.ride_management import create_ride


class DriverApiTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.rider = identity.register("Alice", "111", User.RIDER)
        self.driver = identity.register("Bob", "222", User.DRIVER)
        self.other_driver = identity.register("Carl", "333", User.DRIVER)
        self.ride = create_ride(self.rider.id, "Park", "Square")
        self.client.force_authenticate(user=self.driver)

    def _accept(self, ride_id=None):
        return self.client.post(reverse("drivers:accept-ride", args=[ride_id or self.ride.id]))

    def _complete(self, ride_id=None):
        return self.client.post(reverse("drivers:complete-ride", args=[ride_id or self.ride.id]))

    def test_available_rides(self):
        response = self.client.get(reverse("drivers:available-rides"))

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["count"], 1)
        self.assertEqual(response.data["rides"][0]["id"], self.ride.id)
        self.assertEqual(response.data["rides"][0]["rider"]["name"], "Alice")

    def test_accept_and_complete(self):
        accepted = self._accept()
        self.assertEqual(accepted.status_code, 200)
        self.assertEqual(accepted.data["ride"]["status"], "accepted")
        self.assertEqual(accepted.data["ride"]["driver_id"], self.driver.id)

        available = self.client.get(reverse("drivers:available-rides"))
        self.assertEqual(available.data["count"], 0)

        current = self.client.get(reverse("drivers:current-ride"))
        self.assertTrue(current.data["has_active_ride"])
        self.assertEqual(current.data["ride"]["id"], self.ride.id)

        completed = self._complete()
        self.assertEqual(completed.status_code, 200)
        self.assertEqual(completed.data["ride"]["status"], "completed")

        current = self.client.get(reverse("drivers:current-ride"))
        self.assertFalse(current.data["has_active_ride"])

        history = self.client.get(reverse("drivers:history"))
        self.assertEqual(history.data["count"], 1)

    def test_losing_driver_is_told_to_try_another_ride(self):
        self._accept()
        self.client.force_authenticate(user=self.other_driver)

        response = self._accept()

        self.assertEqual(response.status_code, 409)
        self.assertFalse(response.data["success"])
        self.assertEqual(response.data["error"], "ride_not_available")
        self.assertEqual(response.data["ride_id"], self.ride.id)

    def test_only_assigned_driver_can_complete(self):
        self._accept()
        self.client.force_authenticate(user=self.other_driver)

        response = self._complete()

        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.data["error"], "not_authorized")

    def test_completing_twice_is_invalid_transition(self):
        self._accept()
        self._complete()

        response = self._complete()

        self.assertEqual(response.status_code, 409)
        self.assertEqual(response.data["error"], "invalid_transition")

    def test_unknown_ride(self):
        response = self._accept(ride_id=self.ride.id + 1000)

        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.data["error"], "ride_not_found")

    def test_busy_driver_cannot_accept_another(self):
        other_rider = identity.register("Dana", "444", User.RIDER)
        second = create_ride(other_rider.id, "Mall", "Airport")
        self._accept()

        response = self._accept(ride_id=second.id)

        self.assertEqual(response.status_code, 409)
        self.assertEqual(response.data["error"], "driver_busy")

    def test_riders_cannot_accept(self):
        self.client.force_authenticate(user=self.rider)

        response = self._accept()

        self.assertEqual(response.status_code, 403)
