from django.test import TestCase
from django.urls import reverse
from rest_framework.test import APIClient

from services import identity
from services.identity import DuplicatePhoneError

from .models import User


class IdentityDirectoryTests(TestCase):
    def test_register_creates_user_with_role(self):
        user = identity.register("Alice", "555", User.RIDER)

        self.assertIsNotNone(user.id)
        self.assertEqual(user.name, "Alice")
        self.assertEqual(user.phone_number, "555")
        self.assertEqual(user.role, User.RIDER)
        self.assertFalse(user.has_usable_password())

    def test_register_rejects_duplicate_phone_across_roles(self):
        identity.register("A", "555", User.RIDER)

        with self.assertRaises(DuplicatePhoneError):
            identity.register("B", "555", User.DRIVER)

        self.assertEqual(User.objects.filter(phone_number="555").count(), 1)

    def test_register_rejects_unknown_role(self):
        with self.assertRaises(ValueError):
            identity.register("A", "555", "admin")

    def test_ids_are_distinct(self):
        first = identity.register("A", "555", User.RIDER)
        second = identity.register("B", "556", User.DRIVER)

        self.assertNotEqual(first.id, second.id)

    def test_find_by_phone(self):
        user = identity.register("Alice", "111", User.RIDER)

        self.assertEqual(identity.find_by_phone("111"), user)
        self.assertIsNone(identity.find_by_phone("999"))

    def test_find_by_id_is_total(self):
        user = identity.register("Bob", "222", User.DRIVER)

        self.assertEqual(identity.find_by_id(user.id), user)
        self.assertIsNone(identity.find_by_id(user.id + 1000))
        self.assertIsNone(identity.find_by_id("not-an-id"))


class AuthApiTests(TestCase):
    def setUp(self):
        self.client = APIClient()

    def test_register_returns_user_and_tokens(self):
        response = self.client.post(
            reverse("accounts:register"),
            {"name": "Alice", "phone_number": "111", "role": "rider"},
            format="json",
        )

        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.data["user"]["phone_number"], "111")
        self.assertEqual(response.data["user"]["role"], "rider")
        self.assertIn("access", response.data["tokens"])
        self.assertIn("refresh", response.data["tokens"])

    def test_register_duplicate_phone_is_conflict(self):
        identity.register("Alice", "111", User.RIDER)

        response = self.client.post(
            reverse("accounts:register"),
            {"name": "Mallory", "phone_number": "111", "role": "driver"},
            format="json",
        )

        self.assertEqual(response.status_code, 409)
        self.assertEqual(response.data["error"], "duplicate_phone")

    def test_register_validates_role(self):
        response = self.client.post(
            reverse("accounts:register"),
            {"name": "Alice", "phone_number": "111", "role": "pilot"},
            format="json",
        )

        self.assertEqual(response.status_code, 400)
        self.assertIn("role", response.data)

    def test_login_by_phone_and_fetch_profile(self):
        identity.register("Bob", "222", User.DRIVER)

        login = self.client.post(reverse("accounts:login"), {"phone_number": "222"}, format="json")
        self.assertEqual(login.status_code, 200)

        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {login.data['tokens']['access']}")
        me = self.client.get(reverse("accounts:me"))

        self.assertEqual(me.status_code, 200)
        self.assertEqual(me.data["name"], "Bob")
        self.assertEqual(me.data["role"], "driver")

    def test_login_unknown_phone(self):
        response = self.client.post(reverse("accounts:login"), {"phone_number": "000"}, format="json")

        self.assertEqual(response.status_code, 401)
        self.assertFalse(response.data["success"])
        self.assertEqual(response.data["error"], "invalid_credentials")

    def test_refresh_token(self):
        identity.register("Bob", "222", User.DRIVER)
        login = self.client.post(reverse("accounts:login"), {"phone_number": "222"}, format="json")

        response = self.client.post(
            reverse("accounts:refresh"), {"refresh": login.data["tokens"]["refresh"]}, format="json"
        )
        self.assertEqual(response.status_code, 200)
        self.assertIn("access", response.data)

        bad = self.client.post(reverse("accounts:refresh"), {"refresh": "garbage"}, format="json")
        self.assertEqual(bad.status_code, 401)
        self.assertFalse(bad.data["success"])
        self.assertEqual(bad.data["error"], "invalid_refresh_token")

    def test_refresh_requires_token(self):
        response = self.client.post(reverse("accounts:refresh"), {}, format="json")

        self.assertEqual(response.status_code, 400)
        self.assertFalse(response.data["success"])
        self.assertEqual(response.data["error"], "refresh_required")

    def test_me_requires_authentication(self):
        response = self.client.get(reverse("accounts:me"))

        self.assertEqual(response.status_code, 401)
