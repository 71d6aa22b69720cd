"""Dependency health schema."""

from pydantic import Field

from relay.enums import HealthStatus
from relay.schemas.base_schema_model import BaseSchemaModel


class DependencyHealth(BaseSchemaModel):
    """Result of probing one dependency (database, cache, push gateway)."""

    healthy: bool = Field(..., description="Whether the dependency is usable")
    status: HealthStatus = Field(..., description="Health status of the dependency")
    message: str = Field(..., description="Human-readable probe result")
    response_time_ms: float | None = Field(
        None, description="Probe duration in milliseconds"
    )
