"""Health check schemas."""

from relay.schemas.health.dependency_health import DependencyHealth
from relay.schemas.health.liveness_response import LivenessResponse
from relay.schemas.health.readiness_response import ReadinessResponse

__all__ = ["DependencyHealth", "LivenessResponse", "ReadinessResponse"]
