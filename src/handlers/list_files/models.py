"""
Pydantic models for the list files request and response.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictInt

from core.models.record import ListingItem


class ListFilesRequest(BaseModel):
    """Query parameters accepted by the list files API."""

    model_config = ConfigDict(extra="ignore")

    cursor: str | None = Field(
        None,
        description="Opaque token to start the walk from; the walk still drains to the end",
    )


class ListFilesResponse(BaseModel):
    """Every stored file with its normalized metadata."""

    items: list[ListingItem] = Field(..., description="Normalized listing items")
    total: StrictInt = Field(..., description="Number of items returned")

    def to_response(self) -> dict[str, Any]:
        return {
            "list": [item.to_response() for item in self.items],
            "total": self.total,
        }
