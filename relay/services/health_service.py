"""Health checks for the liveness and readiness probes."""

import logging
import time
from collections.abc import Callable

from django.core.cache import cache
from django.db import connection
from django.db.utils import OperationalError

from relay.enums import HealthStatus
from relay.exceptions import PushGatewayError
from relay.schemas.health import (
    DependencyHealth,
    LivenessResponse,
    ReadinessResponse,
)
from relay.services.gateway import build_push_gateway

logger = logging.getLogger(__name__)

HEALTH_CHECK_CACHE_KEY = "__push_relay_health_check__"


class HealthService:
    """Probes the relay's dependencies, caching each result briefly.

    Only the database is critical: without it no queue row can be claimed.
    An unreachable cache or a misconfigured gateway leaves the service ready
    but degraded.
    """

    def __init__(self, cache_ttl_seconds: float = 5.0) -> None:
        """Initialize the health service.

        Args:
            cache_ttl_seconds: How long a probe result is reused.
        """
        self.cache_ttl_seconds = cache_ttl_seconds
        self._results: dict[str, tuple[float, DependencyHealth]] = {}

    def get_liveness_status(self) -> LivenessResponse:
        """The process answers, so it is alive."""
        return LivenessResponse(status="alive")

    def get_readiness_status(self) -> ReadinessResponse:
        """Probe every dependency and derive the overall readiness."""
        dependencies = {
            "database": self.check_database_health(),
            "cache": self.check_cache_health(),
            "push_gateway": self.check_gateway_configuration(),
        }

        ready = dependencies["database"].healthy
        degraded = not all(dep.healthy for dep in dependencies.values())
        if not ready:
            overall = "not ready"
        elif degraded:
            overall = "degraded"
        else:
            overall = "ready"

        return ReadinessResponse(
            ready=ready,
            status=overall,
            degraded=degraded,
            dependencies=dependencies,
        )

    def check_database_health(self) -> DependencyHealth:
        """Validate the database connection without running a query."""
        return self._probe("database", self._probe_database)

    def check_cache_health(self) -> DependencyHealth:
        """Round-trip a value through the cache backing the dispatch lease."""
        return self._probe("cache", self._probe_cache)

    def check_gateway_configuration(self) -> DependencyHealth:
        """Check the push gateway credential is present and usable."""
        return self._probe("push_gateway", self._probe_gateway)

    def clear(self) -> None:
        """Drop cached probe results."""
        self._results.clear()

    def _probe(
        self, name: str, probe: Callable[[], tuple[bool, HealthStatus, str]]
    ) -> DependencyHealth:
        now = time.time()
        cached = self._results.get(name)
        if cached is not None and now - cached[0] < self.cache_ttl_seconds:
            return cached[1]

        start = time.perf_counter()
        healthy, probe_status, message = probe()
        result = DependencyHealth(
            healthy=healthy,
            status=probe_status,
            message=message,
            response_time_ms=(time.perf_counter() - start) * 1000,
        )
        if not healthy:
            logger.warning("Health check failed for %s: %s", name, message)

        self._results[name] = (now, result)
        return result

    @staticmethod
    def _probe_database() -> tuple[bool, HealthStatus, str]:
        try:
            connection.ensure_connection()
        except OperationalError as e:
            return False, HealthStatus.UNHEALTHY, f"Database connection failed: {e!s}"
        except Exception as e:
            return (
                False,
                HealthStatus.ERROR,
                f"Unexpected error checking database: {e!s}",
            )
        return True, HealthStatus.HEALTHY, "Database connection successful"

    @staticmethod
    def _probe_cache() -> tuple[bool, HealthStatus, str]:
        try:
            cache.set(HEALTH_CHECK_CACHE_KEY, "ok", timeout=1)
            value = cache.get(HEALTH_CHECK_CACHE_KEY)
        except Exception as e:
            return False, HealthStatus.ERROR, f"Cache connection failed: {e!s}"
        if value != "ok":
            return False, HealthStatus.UNHEALTHY, "Cache returned an unexpected value"
        return True, HealthStatus.HEALTHY, "Cache connection successful"

    @staticmethod
    def _probe_gateway() -> tuple[bool, HealthStatus, str]:
        try:
            gateway = build_push_gateway()
            gateway.check_configuration()
        except PushGatewayError as e:
            return False, HealthStatus.UNHEALTHY, str(e)
        return (
            True,
            HealthStatus.HEALTHY,
            f"Push gateway '{gateway.variant.value}' configured",
        )


health_service = HealthService()
