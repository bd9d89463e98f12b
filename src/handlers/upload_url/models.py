"""Pydantic models for upload-by-URL request/response."""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, StrictStr
from pydantic.alias_generators import to_camel


class UploadUrlRequest(BaseModel):
    """Validation model for the upload-by-URL body.

    Items stay untyped here: a malformed item fails on its own in the
    ingestion service instead of rejecting the whole batch.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    items: list[Any] = Field(..., alias="list", min_length=1, description="Images to ingest")


class IngestionRequestItem(BaseModel):
    """One image to ingest: an external URL and an optional title."""

    model_config = ConfigDict(extra="ignore")

    url: Any = Field(None, description="External image location")
    title: Any = Field(None, description="Caption and display name")

    @classmethod
    def from_raw(cls, raw: Any) -> "IngestionRequestItem":
        """Build an item from any JSON value; non-objects give an empty item."""
        if not isinstance(raw, dict):
            return cls()
        return cls.model_validate(raw)

    @property
    def title_text(self) -> str | None:
        return None if self.title is None else str(self.title)


class _ResultBase(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    url: Any = Field(None, description="Echo of the requested URL")

    def to_response(self) -> dict[str, Any]:
        """camelCase body; `url` is echoed even when it was null."""
        return self.model_dump(by_alias=True)


class IngestionSuccess(_ResultBase):
    """Result of an item that was stored."""

    success: Literal[True] = True
    src: StrictStr = Field(..., description="New serving URL")
    file_name: StrictStr = Field(..., description="Display filename")


class IngestionFailure(_ResultBase):
    """Result of an item that could not be ingested."""

    success: Literal[False] = False
    error: StrictStr = Field(..., description="Human-readable reason")


IngestionResult = IngestionSuccess | IngestionFailure


class UploadUrlResponse(BaseModel):
    """One result per requested item, in request order."""

    results: list[IngestionResult]

    def to_response(self) -> dict[str, Any]:
        return {"results": [result.to_response() for result in self.results]}
