"""Tests for HealthService."""

from unittest.mock import patch

from django.db.utils import OperationalError
from django.test import TestCase, override_settings

from relay.services.health_service import HealthService


class TestHealthService(TestCase):
    """Test suite for dependency probes."""

    def setUp(self):
        """Use a service without probe caching."""
        self.service = HealthService(cache_ttl_seconds=0)

    def test_liveness(self):
        """Liveness never depends on anything."""
        self.assertEqual(self.service.get_liveness_status().status, "alive")

    def test_all_dependencies_healthy(self):
        """Database, cache and gateway healthy: ready, not degraded."""
        readiness = self.service.get_readiness_status()

        self.assertTrue(readiness.ready)
        self.assertFalse(readiness.degraded)
        self.assertEqual(readiness.status, "ready")
        self.assertEqual(
            set(readiness.dependencies), {"database", "cache", "push_gateway"}
        )

    @patch("relay.services.health_service.connection.ensure_connection")
    def test_database_down(self, mock_ensure):
        """Without the database the service is not ready."""
        mock_ensure.side_effect = OperationalError("connection refused")

        readiness = self.service.get_readiness_status()

        self.assertFalse(readiness.ready)
        self.assertEqual(readiness.status, "not ready")
        self.assertEqual(readiness.dependencies["database"].status, "unhealthy")

    @override_settings(FCM_SERVER_KEY="")
    def test_gateway_unconfigured_is_degraded(self):
        """A missing gateway credential degrades but keeps readiness."""
        readiness = self.service.get_readiness_status()

        self.assertTrue(readiness.ready)
        self.assertTrue(readiness.degraded)
        self.assertEqual(readiness.status, "degraded")
        self.assertIn(
            "FCM_SERVER_KEY", readiness.dependencies["push_gateway"].message
        )

    @patch("relay.services.health_service.cache.set")
    def test_cache_down_is_degraded(self, mock_set):
        """An unreachable cache degrades but keeps readiness."""
        mock_set.side_effect = ConnectionError("redis down")

        readiness = self.service.get_readiness_status()

        self.assertTrue(readiness.ready)
        self.assertFalse(readiness.dependencies["cache"].healthy)

    @patch("relay.services.health_service.connection.ensure_connection")
    def test_probe_results_are_cached(self, mock_ensure):
        """Results are reused within the TTL."""
        service = HealthService(cache_ttl_seconds=60)

        service.check_database_health()
        service.check_database_health()
        self.assertEqual(mock_ensure.call_count, 1)

        service.clear()
        service.check_database_health()
        self.assertEqual(mock_ensure.call_count, 2)
