from __future__ import annotations

from .base import ApiModel
from .user import UserDTO


class VenueDTO(ApiModel):
    public_id: str
    name: str
    location: str | None = None
    venue_owner: UserDTO | None = None
    image_path: str | None = None
    created_at: str | None = None
    updated_at: str | None = None
