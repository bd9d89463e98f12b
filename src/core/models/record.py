"""Key-value record models and the public listing projection."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictStr, field_validator
from pydantic.alias_generators import to_camel

Metadata = dict[str, Any]


class StoredRecord(BaseModel):
    """One key of the img_url store with its raw metadata and value."""

    key: StrictStr = Field(..., description="Unique key of the record")
    value: str | None = Field(None, description="Optional text payload, usually JSON")
    metadata: Metadata | None = Field(None, description="Attribute bag stored beside the key")


class KeyListPage(BaseModel):
    """One page of a store enumeration."""

    keys: list[StrictStr] = Field(default_factory=list)
    cursor: str | None = Field(None, description="Opaque token resuming the enumeration")
    list_complete: StrictBool = Field(..., description="True when no further page exists")


class _LenientFields(BaseModel):
    """Base for the typed views over untyped record data.

    Unknown keys are ignored and names are coerced to text so that
    legacy records with odd field types never fail a listing.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    @field_validator("file_name", "storage_type", mode="before", check_fields=False)
    @classmethod
    def coerce_text(cls, value: Any) -> str | None:
        if value is None or isinstance(value, str):
            return value
        return str(value)


class RecordMetadata(_LenientFields):
    """Fields of the record metadata read by the listing."""

    time_stamp: Any = Field(None, alias="TimeStamp")
    file_name: str | None = Field(None, alias="fileName")
    storage_type: str | None = Field(None, alias="storageType")


class ValuePayload(_LenientFields):
    """Legacy fields that may be carried by the JSON value payload."""

    file_name: str | None = Field(None, alias="fileName")
    upload_time: Any = Field(None, alias="uploadTime")
    time_stamp: Any = Field(None, alias="TimeStamp")


class ListingItem(BaseModel):
    """Public projection of a stored record returned by the listing."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    key: StrictStr
    url: StrictStr
    file_name: StrictStr
    upload_time: int | float | None = None
    storage_type: StrictStr | None = None

    def to_response(self) -> dict[str, Any]:
        """Serialize with camelCase names; storageType only when present."""
        body = self.model_dump(by_alias=True)
        if self.storage_type is None:
            body.pop("storageType")
        return body
