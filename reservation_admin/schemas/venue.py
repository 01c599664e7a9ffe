from __future__ import annotations

from typing import Any

from pydantic import BaseModel, field_validator

from ._validators import check_upload, require_text
from .uploads import IMAGE_TYPES, MAX_VENUE_IMAGE_BYTES, UploadFile


class VenueForm(BaseModel):
    name: str
    location: str
    venue_owner_id: str | None = None
    image: UploadFile | None = None

    @field_validator("name")
    @classmethod
    def _name_required(cls, v: str) -> str:
        return require_text(v, "Venue Name is required")

    @field_validator("location")
    @classmethod
    def _location_required(cls, v: str) -> str:
        return require_text(v, "Location is required")

    @field_validator("image")
    @classmethod
    def _image(cls, v: UploadFile | None) -> UploadFile | None:
        if v is None:
            return None
        return check_upload(
            v,
            allowed=IMAGE_TYPES,
            max_bytes=MAX_VENUE_IMAGE_BYTES,
            type_message="Invalid file type. Please select a JPG, PNG, or WEBP.",
            size_message="File too large (max 10MB).",
        )

    def to_payload(self) -> dict[str, Any]:
        payload = {"name": self.name, "location": self.location}
        if self.venue_owner_id:
            payload["venueOwnerPublicId"] = self.venue_owner_id
        return payload

    def files(self) -> list[tuple[str, UploadFile | None]]:
        return [("image", self.image)]
