"""Liveness response schema."""

from pydantic import BaseModel, Field


class LivenessResponse(BaseModel):
    """Body of the liveness probe."""

    status: str = Field("alive", description="Liveness status")
