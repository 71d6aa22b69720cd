"""Schemas describing the outcome of one dispatch run."""

from pydantic import BaseModel, Field


class DispatchDetails(BaseModel):
    """Per-notification counts for a processed batch."""

    total: int = Field(..., ge=0, description="Notifications claimed")
    success: int = Field(..., ge=0, description="Notifications marked sent")
    failed: int = Field(..., ge=0, description="Notifications not sent")


class DispatchSummary(BaseModel):
    """JSON body returned by the dispatch endpoint.

    ``details`` is omitted when the queue had nothing pending.
    """

    success: bool = Field(True, description="Whether the batch completed")
    message: str = Field(..., description="Human readable outcome")
    details: DispatchDetails | None = Field(None, description="Batch counts")

    def to_response(self) -> dict:
        """Serialize for the HTTP response, dropping absent details."""
        return self.model_dump(exclude_none=True)
