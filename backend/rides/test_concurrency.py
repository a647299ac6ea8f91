import threading

from django.db import connection
from django.test import TransactionTestCase

from accounts.models import User
from services import identity
from services.identity import DuplicatePhoneError
from services.ride_management import (
    create_ride,
    accept_ride,
    get_ride,
    RideNoLongerAvailableError,
    ActiveRideExistsError,
    DriverBusyError,
)

from .models import Ride

THREAD_COUNT = 6


def run_concurrently(calls):
    """
    Start every call on its own thread and connection, released together
    by a barrier. Returns one ``(result, exception)`` pair per call.
    """
    barrier = threading.Barrier(len(calls))
    outcomes = []
    lock = threading.Lock()

    def attempt(call):
        try:
            barrier.wait()
            try:
                result = (call(), None)
            except Exception as exc:
                result = (None, exc)
            with lock:
                outcomes.append(result)
        finally:
            connection.close()

    threads = [threading.Thread(target=attempt, args=(call,)) for call in calls]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=60)

    return outcomes


def split_outcomes(outcomes):
    successes = [result for result, exc in outcomes if exc is None]
    failures = [exc for result, exc in outcomes if exc is not None]
    return successes, failures


class ConcurrentAcceptTests(TransactionTestCase):
    """Drivers race on one pending ride from separate threads and connections."""

    def setUp(self):
        self.rider = identity.register("Alice", "111", User.RIDER)
        self.drivers = [
            identity.register(f"Driver {i}", f"20{i}", User.DRIVER)
            for i in range(THREAD_COUNT)
        ]
        self.ride = create_ride(self.rider.id, "Park", "Square")

    def test_exactly_one_driver_wins(self):
        outcomes = run_concurrently([
            lambda driver=driver: accept_ride(self.ride.id, driver.id)
            for driver in self.drivers
        ])

        self.assertEqual(len(outcomes), THREAD_COUNT, outcomes)
        winners, losers = split_outcomes(outcomes)
        self.assertEqual(len(winners), 1, outcomes)
        self.assertEqual(len(losers), THREAD_COUNT - 1, outcomes)
        for exc in losers:
            self.assertIsInstance(exc, RideNoLongerAvailableError)

        ride = get_ride(self.ride.id)
        self.assertEqual(ride.status, Ride.ACCEPTED)
        self.assertEqual(ride.driver_id, winners[0].driver_id)

    def test_driver_racing_on_many_rides_holds_one(self):
        driver = self.drivers[0]
        rides = [self.ride] + [
            create_ride(identity.register(f"Rider {i}", f"30{i}", User.RIDER).id, "Park", f"Stop {i}")
            for i in range(1, THREAD_COUNT)
        ]

        outcomes = run_concurrently([
            lambda ride=ride: accept_ride(ride.id, driver.id)
            for ride in rides
        ])

        self.assertEqual(len(outcomes), THREAD_COUNT, outcomes)
        accepted, refused = split_outcomes(outcomes)
        self.assertEqual(len(accepted), 1, outcomes)
        for exc in refused:
            self.assertIsInstance(exc, DriverBusyError)

        self.assertEqual(
            Ride.objects.filter(driver=driver, status=Ride.ACCEPTED).count(), 1
        )
        self.assertEqual(
            Ride.objects.filter(status=Ride.PENDING).count(), THREAD_COUNT - 1
        )


class ConcurrentBookingTests(TransactionTestCase):
    """One rider books from several devices at once."""

    def setUp(self):
        self.rider = identity.register("Alice", "111", User.RIDER)

    def test_rider_gets_one_open_ride(self):
        outcomes = run_concurrently([
            lambda i=i: create_ride(self.rider.id, "Park", f"Stop {i}")
            for i in range(THREAD_COUNT)
        ])

        self.assertEqual(len(outcomes), THREAD_COUNT, outcomes)
        booked, refused = split_outcomes(outcomes)
        self.assertEqual(len(booked), 1, outcomes)
        for exc in refused:
            self.assertIsInstance(exc, ActiveRideExistsError)

        self.assertEqual(Ride.objects.filter(rider=self.rider).count(), 1)


class ConcurrentRegistrationTests(TransactionTestCase):
    def test_phone_is_registered_once(self):
        outcomes = run_concurrently([
            lambda i=i: identity.register(f"User {i}", "555", User.RIDER)
            for i in range(THREAD_COUNT)
        ])

        self.assertEqual(len(outcomes), THREAD_COUNT, outcomes)
        registered, refused = split_outcomes(outcomes)
        self.assertEqual(len(registered), 1, outcomes)
        for exc in refused:
            self.assertIsInstance(exc, DuplicatePhoneError)

        self.assertEqual(User.objects.filter(phone_number="555").count(), 1)
