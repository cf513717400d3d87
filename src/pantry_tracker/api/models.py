"""Pydantic models for HTTP request payloads."""

from pydantic import BaseModel, ConfigDict, Field

NAME_MAX_LENGTH = 20


class AddIngredientRequest(BaseModel):
    """Payload for adding an ingredient."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(max_length=NAME_MAX_LENGTH)
    brand: str | None = Field(default=None, max_length=NAME_MAX_LENGTH)
    category: str | None = None
    location: str | None = None
    type: str | None = None
    expiration_date: str | None = Field(default=None, alias="expirationDate")
    estimate: str | None = None


class ScanRequest(BaseModel):
    """Payload with a scanned barcode."""

    code: str


class StartEditRequest(BaseModel):
    """Payload for opening an edit session."""

    name: str


class TypeChangeRequest(BaseModel):
    """Payload for changing the confection type."""

    type: str | None = None


class RipenessChangeRequest(BaseModel):
    """Payload for changing the ripeness status."""

    status: str | None = None


class OpenedChangeRequest(BaseModel):
    """Payload for opening or closing a package."""

    opened: bool


class DetailsRequest(BaseModel):
    """Payload for editing descriptive fields."""

    name: str | None = Field(default=None, max_length=NAME_MAX_LENGTH)
    brand: str | None = Field(default=None, max_length=NAME_MAX_LENGTH)
    category: str | None = None
    location: str | None = None


class ExactExpirationRequest(BaseModel):
    """Payload with a free-text expiration date."""

    date: str


class EstimateRequest(BaseModel):
    """Payload with an expiration estimate label."""

    estimate: str
