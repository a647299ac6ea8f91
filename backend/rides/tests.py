import random
from datetime import timedelta
from io import StringIO
from unittest.mock import patch

from django.core.management import call_command
from django.test import TestCase, override_settings
from django.utils import timezone

from accounts.models import User
from services import identity
from services.dispatch import (
    available_rides,
    active_ride_for_rider,
    active_ride_for_driver,
    ride_history,
)
from services.pricing import (
    FareEstimator,
    FareQuoteInvalidError,
    issue_quote,
    resolve_booking_fare,
)
from services.ride_management import (
    create_ride,
    accept_ride,
    complete_ride,
    get_ride,
    UnknownRiderError,
    DriverNotFoundError,
    RideNotFoundError,
    RideNoLongerAvailableError,
    NotAuthorizedError,
    InvalidTransitionError,
    ActiveRideExistsError,
    DriverBusyError,
    InvalidLocationError,
)

from .models import Ride, FareQuote


class FareEstimatorTests(TestCase):
    def test_fare_is_rate_multiple_within_bounds(self):
        estimator = FareEstimator(min_distance=2, max_distance=10, rate_per_unit=15, rng=random.Random(7))

        fares = {estimator.estimate("Park", "Square") for _ in range(200)}

        self.assertTrue(all(f % 15 == 0 for f in fares))
        self.assertEqual(min(fares), 30)
        self.assertEqual(max(fares), 135)

    def test_estimates_are_resampled(self):
        estimator = FareEstimator(rng=random.Random(1))

        fares = {estimator.estimate("Park", "Square") for _ in range(50)}

        self.assertGreater(len(fares), 1)

    def test_rejects_bad_configuration(self):
        with self.assertRaises(ValueError):
            FareEstimator(min_distance=5, max_distance=5)
        with self.assertRaises(ValueError):
            FareEstimator(rate_per_unit=-1)

    def test_requires_locations(self):
        with self.assertRaises(ValueError):
            FareEstimator().estimate("", "Square")


class DispatchTestMixin:
    def setUp(self):
        self.rider = identity.register("Alice", "111", User.RIDER)
        self.driver = identity.register("Bob", "222", User.DRIVER)
        self.other_driver = identity.register("Carl", "333", User.DRIVER)


class FareQuoteTests(DispatchTestMixin, TestCase):
    def test_resample_policy_ignores_quote(self):
        quote = issue_quote(self.rider, "Park", "Square")

        with patch("services.pricing.quotes.estimate_fare", return_value=999) as mock_estimate:
            fare = resolve_booking_fare(self.rider, "Park", "Square", quote.id)

        self.assertEqual(fare, 999)
        mock_estimate.assert_called_once_with("Park", "Square")
        quote.refresh_from_db()
        self.assertIsNone(quote.used_at)

    @override_settings(FARE_QUOTE_POLICY="honor_quote")
    def test_honor_quote_policy_books_quoted_fare(self):
        quote = issue_quote(self.rider, "Park", "Square")

        with patch("services.pricing.quotes.estimate_fare", return_value=999):
            ride = create_ride(self.rider.id, "Park", "Square", quote_id=quote.id)

        self.assertEqual(ride.fare, quote.fare)
        quote.refresh_from_db()
        self.assertIsNotNone(quote.used_at)

    @override_settings(FARE_QUOTE_POLICY="honor_quote")
    def test_honor_quote_policy_rejects_bad_quotes(self):
        quote = issue_quote(self.rider, "Park", "Square")

        with self.assertRaises(FareQuoteInvalidError):
            resolve_booking_fare(self.rider, "Park", "Airport", quote.id)

        with self.assertRaises(FareQuoteInvalidError):
            resolve_booking_fare(self.driver, "Park", "Square", quote.id)

        FareQuote.objects.filter(id=quote.id).update(expires_at=timezone.now() - timedelta(seconds=1))
        with self.assertRaises(FareQuoteInvalidError):
            resolve_booking_fare(self.rider, "Park", "Square", quote.id)

    @override_settings(FARE_QUOTE_POLICY="honor_quote")
    def test_quote_is_single_use(self):
        quote = issue_quote(self.rider, "Park", "Square")
        resolve_booking_fare(self.rider, "Park", "Square", quote.id)

        with self.assertRaises(FareQuoteInvalidError):
            resolve_booking_fare(self.rider, "Park", "Square", quote.id)

    @override_settings(FARE_QUOTE_POLICY="surge")
    def test_unknown_policy_is_a_configuration_error(self):
        with self.assertRaises(ValueError):
            resolve_booking_fare(self.rider, "Park", "Square")

    def test_purge_command_deletes_expired_quotes(self):
        fresh = issue_quote(self.rider, "Park", "Square")
        stale = issue_quote(self.rider, "Park", "Mall")
        FareQuote.objects.filter(id=stale.id).update(expires_at=timezone.now() - timedelta(hours=1))

        out = StringIO()
        call_command("purge_fare_quotes", "--dry-run", stdout=out)
        self.assertIn("Would delete 1", out.getvalue())
        self.assertEqual(FareQuote.objects.count(), 2)

        call_command("purge_fare_quotes", stdout=StringIO())
        self.assertEqual(list(FareQuote.objects.values_list("id", flat=True)), [fresh.id])


class RideLedgerTests(DispatchTestMixin, TestCase):
    def test_create_ride_is_pending_with_fare(self):
        ride = create_ride(self.rider.id, "Park", "Square")

        self.assertEqual(ride.status, Ride.PENDING)
        self.assertIsNone(ride.driver_id)
        self.assertEqual(ride.rider_id, self.rider.id)
        self.assertEqual(ride.fare % 15, 0)
        self.assertIsNotNone(ride.created_at)

    def test_create_ride_unknown_rider(self):
        with self.assertRaises(UnknownRiderError):
            create_ride(999999, "Park", "Square")

        # Drivers cannot book rides
        with self.assertRaises(UnknownRiderError):
            create_ride(self.driver.id, "Park", "Square")

    def test_create_ride_requires_locations(self):
        with self.assertRaises(InvalidLocationError):
            create_ride(self.rider.id, "  ", "Square")

        with self.assertRaises(InvalidLocationError):
            create_ride(self.rider.id, "Park", "")

        self.assertFalse(Ride.objects.filter(rider=self.rider).exists())

    def test_rider_cannot_hold_two_open_rides(self):
        create_ride(self.rider.id, "Park", "Square")

        with self.assertRaises(ActiveRideExistsError):
            create_ride(self.rider.id, "Mall", "Airport")

        self.assertEqual(Ride.objects.filter(rider=self.rider).count(), 1)

    def test_rider_can_book_again_after_completion(self):
        ride = create_ride(self.rider.id, "Park", "Square")
        accept_ride(ride.id, self.driver.id)
        complete_ride(ride.id, self.driver.id)

        second = create_ride(self.rider.id, "Square", "Park")

        self.assertEqual(second.status, Ride.PENDING)

    def test_accept_ride_sets_driver(self):
        ride = create_ride(self.rider.id, "Park", "Square")

        accepted = accept_ride(ride.id, self.driver.id)

        self.assertEqual(accepted.status, Ride.ACCEPTED)
        self.assertEqual(accepted.driver, self.driver)
        self.assertIsNotNone(accepted.accepted_at)
        self.assertEqual(accepted.fare, ride.fare)

    def test_second_accept_loses(self):
        ride = create_ride(self.rider.id, "Park", "Square")
        accept_ride(ride.id, self.driver.id)

        with self.assertRaises(RideNoLongerAvailableError):
            accept_ride(ride.id, self.other_driver.id)

        # The winner is untouched
        self.assertEqual(get_ride(ride.id).driver_id, self.driver.id)

    def test_accept_errors(self):
        ride = create_ride(self.rider.id, "Park", "Square")

        with self.assertRaises(RideNotFoundError):
            accept_ride(ride.id + 1000, self.driver.id)
        with self.assertRaises(DriverNotFoundError):
            accept_ride(ride.id, 999999)
        with self.assertRaises(DriverNotFoundError):
            accept_ride(ride.id, self.rider.id)

    def test_driver_cannot_hold_two_accepted_rides(self):
        other_rider = identity.register("Dana", "444", User.RIDER)
        first = create_ride(self.rider.id, "Park", "Square")
        second = create_ride(other_rider.id, "Mall", "Airport")
        accept_ride(first.id, self.driver.id)

        with self.assertRaises(DriverBusyError):
            accept_ride(second.id, self.driver.id)

        self.assertEqual(get_ride(second.id).status, Ride.PENDING)

    def test_complete_ride(self):
        ride = create_ride(self.rider.id, "Park", "Square")
        accept_ride(ride.id, self.driver.id)

        completed = complete_ride(ride.id, self.driver.id)

        self.assertEqual(completed.status, Ride.COMPLETED)
        self.assertIsNotNone(completed.completed_at)
        self.assertEqual(completed.driver_id, self.driver.id)

    def test_complete_requires_assigned_driver(self):
        ride = create_ride(self.rider.id, "Park", "Square")

        # Pending rides have no driver yet
        with self.assertRaises(NotAuthorizedError):
            complete_ride(ride.id, self.driver.id)

        accept_ride(ride.id, self.driver.id)
        with self.assertRaises(NotAuthorizedError):
            complete_ride(ride.id, self.other_driver.id)
        with self.assertRaises(RideNotFoundError):
            complete_ride(ride.id + 1000, self.driver.id)

        self.assertEqual(get_ride(ride.id).status, Ride.ACCEPTED)

    def test_lifecycle_never_regresses(self):
        ride = create_ride(self.rider.id, "Park", "Square")
        accept_ride(ride.id, self.driver.id)
        complete_ride(ride.id, self.driver.id)

        with self.assertRaises(InvalidTransitionError):
            complete_ride(ride.id, self.driver.id)
        with self.assertRaises(RideNoLongerAvailableError):
            accept_ride(ride.id, self.other_driver.id)
        with self.assertRaises(RideNoLongerAvailableError):
            accept_ride(ride.id, self.driver.id)

        ride.refresh_from_db()
        self.assertEqual(ride.status, Ride.COMPLETED)
        self.assertEqual(ride.driver_id, self.driver.id)

    def test_invalid_transition_is_logged(self):
        ride = create_ride(self.rider.id, "Park", "Square")
        accept_ride(ride.id, self.driver.id)
        complete_ride(ride.id, self.driver.id)

        with self.assertLogs("services.ride_management.ride_lifecycle", level="WARNING"):
            with self.assertRaises(InvalidTransitionError):
                complete_ride(ride.id, self.driver.id)

    def test_get_ride(self):
        ride = create_ride(self.rider.id, "Park", "Square")

        self.assertEqual(get_ride(ride.id), ride)
        self.assertIsNone(get_ride(ride.id + 1000))


class DispatchQueryTests(DispatchTestMixin, TestCase):
    def test_available_rides_in_creation_order(self):
        riders = [identity.register(f"Rider {i}", f"90{i}", User.RIDER) for i in range(3)]
        rides = [create_ride(r.id, "Park", "Square") for r in riders]

        self.assertEqual([r.id for r in available_rides()], [r.id for r in rides])

        accept_ride(rides[1].id, self.driver.id)
        self.assertEqual([r.id for r in available_rides()], [rides[0].id, rides[2].id])

    def test_accepted_ride_leaves_available_list(self):
        ride = create_ride(self.rider.id, "X", "Y")
        self.assertIn(ride, available_rides())

        accept_ride(ride.id, self.driver.id)

        self.assertNotIn(ride, available_rides())
        self.assertEqual(active_ride_for_driver(self.driver.id), ride)

    def test_active_ride_queries(self):
        self.assertIsNone(active_ride_for_rider(self.rider.id))
        self.assertIsNone(active_ride_for_driver(self.driver.id))

        ride = create_ride(self.rider.id, "Park", "Square")
        self.assertEqual(active_ride_for_rider(self.rider.id).status, Ride.PENDING)
        self.assertIsNone(active_ride_for_driver(self.driver.id))

        accept_ride(ride.id, self.driver.id)
        self.assertEqual(active_ride_for_rider(self.rider.id).status, Ride.ACCEPTED)
        self.assertEqual(active_ride_for_driver(self.driver.id), ride)

        complete_ride(ride.id, self.driver.id)
        self.assertIsNone(active_ride_for_rider(self.rider.id))
        self.assertIsNone(active_ride_for_driver(self.driver.id))

    def test_ride_history(self):
        ride = create_ride(self.rider.id, "Park", "Square")
        self.assertEqual(ride_history(self.rider), [])

        accept_ride(ride.id, self.driver.id)
        complete_ride(ride.id, self.driver.id)

        self.assertEqual(ride_history(self.rider), [ride])
        self.assertEqual(ride_history(self.driver), [ride])
        self.assertEqual(ride_history(self.other_driver), [])


class EndToEndDispatchTests(TestCase):
    def test_rider_driver_flow(self):
        alice = identity.register("Alice", "111", User.RIDER)
        bob = identity.register("Bob", "222", User.DRIVER)
        carl = identity.register("Carl", "333", User.DRIVER)

        ride = create_ride(alice.id, "Park", "Square")
        self.assertIn(ride, available_rides())

        accept_ride(ride.id, bob.id)
        with self.assertRaises(RideNoLongerAvailableError):
            accept_ride(ride.id, carl.id)

        active = active_ride_for_rider(alice.id)
        self.assertEqual(active.status, Ride.ACCEPTED)
        self.assertEqual(active.driver, bob)

        completed = complete_ride(ride.id, bob.id)
        self.assertEqual(completed.status, Ride.COMPLETED)
        self.assertIsNone(active_ride_for_rider(alice.id))
