"""
Extract Layer Schemas

Wire format of the remote feed payload:

    {"items": [{"id": "<uuid>", "description": "...", "location": "...", "image": "<url>"}]}

`id` and `image` are mandatory; unknown keys are ignored.
"""

import re
from typing import List, Optional
from uuid import UUID

from pydantic import AnyHttpUrl, BaseModel, Field, TypeAdapter, ValidationError, field_validator

from ..transformation.models import FeedItem

CANONICAL_UUID = re.compile(
    r"[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}"
)

_HTTP_URL = TypeAdapter(AnyHttpUrl)


class RemoteFeedItem(BaseModel):
    """Feed entry exactly as decoded from the API"""

    id: UUID = Field(..., description="Item identifier, canonical 8-4-4-4-12 form")
    description: Optional[str] = Field(None, description="Free-text description")
    location: Optional[str] = Field(None, description="Where the image was taken")
    image: str = Field(..., description="Absolute http(s) image URL")

    @field_validator("id", mode="before")
    @classmethod
    def validate_canonical_id(cls, v):
        """Only accept hyphenated UUID text (no hex-only, urn: or braced forms)"""
        if not isinstance(v, str) or not CANONICAL_UUID.fullmatch(v):
            raise ValueError("id must be a canonical UUID string")
        return v

    @field_validator("image")
    @classmethod
    def validate_image_url(cls, v: str) -> str:
        """Validate as an http(s) URL but keep the original text"""
        try:
            _HTTP_URL.validate_python(v)
        except ValidationError as e:
            raise ValueError(f"image is not an http(s) URL: {v!r}") from e
        return v

    def to_model(self) -> FeedItem:
        return FeedItem(
            id=self.id,
            description=self.description,
            location=self.location,
            image_url=self.image,
        )


class RemoteFeedResponse(BaseModel):
    """Schema for the complete feed response"""

    items: List[RemoteFeedItem] = Field(..., description="Feed entries in display order")
