import importlib
import os
import sys
from unittest.mock import patch

from django.test import SimpleTestCase, TestCase
from rest_framework.test import APIClient

from app_backend.settings import settings as base_settings


class HealthCheckTests(TestCase):
    def test_health_check_is_public(self):
        response = APIClient().get("/health/")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["status"], "healthy")
        self.assertEqual(response.data["services"]["database"], "healthy")
        self.assertEqual(response.data["pending_rides"], 0)


class ProdSettingsTests(SimpleTestCase):
    def _load_prod(self, **env):
        sys.modules.pop("app_backend.settings.prod", None)
        with patch.dict(os.environ, env):
            return importlib.import_module("app_backend.settings.prod")

    def test_prod_inherits_env_driven_base_values(self):
        prod = self._load_prod(DJANGO_SECRET_KEY="prod-secret")

        self.assertFalse(prod.DEBUG)
        self.assertEqual(prod.SECRET_KEY, "prod-secret")
        self.assertEqual(prod.DATABASES, base_settings.DATABASES)
        self.assertEqual(prod.FARE_QUOTE_POLICY, base_settings.FARE_QUOTE_POLICY)
        self.assertFalse(prod.CORS_ALLOW_ALL_ORIGINS)

    def test_prod_requires_secret_key(self):
        env = {k: v for k, v in os.environ.items() if k != "DJANGO_SECRET_KEY"}
        sys.modules.pop("app_backend.settings.prod", None)
        with patch.dict(os.environ, env, clear=True):
            with self.assertRaises(KeyError):
                importlib.import_module("app_backend.settings.prod")
