"""Base test classes for different test types."""

from django.core.cache import cache
from django.test import Client, TestCase

from relay.services import health_service


class BaseComponentTest(TestCase):
    """Base class for component tests.

    Drives the full Django request/response cycle with the gateway mocked
    (``responses`` or FakeGateway) and SQLite in-memory for the queue tables.
    Each test starts without a dispatch lease and with fresh health probes.
    """

    def setUp(self):
        """Set up the client and reset shared state."""
        self.client = Client()
        cache.clear()
        health_service.clear()

    def tearDown(self):
        """Drop any lease left behind."""
        cache.clear()
        health_service.clear()
