"""Readiness response schema."""

from pydantic import BaseModel, Field

from relay.schemas.health.dependency_health import DependencyHealth


class ReadinessResponse(BaseModel):
    """Body of the readiness probe.

    ``ready`` is False only when the database is unreachable: without it no
    queue row can be claimed. Cache or gateway problems degrade the service.
    """

    ready: bool = Field(..., description="Service can process the queue")
    status: str = Field(..., description="'ready', 'degraded' or 'not ready'")
    degraded: bool = Field(..., description="A non-critical dependency is down")
    dependencies: dict[str, DependencyHealth] = Field(
        ..., description="Status of each dependency"
    )
