from __future__ import annotations

from reservation_admin.dto import VenueDTO, parse_list
from reservation_admin.schemas import VenueForm

from .http_client import ApiClient, multipart_parts


class VenueService:
    def __init__(self, api: ApiClient) -> None:
        self._api = api

    async def list_venues(self) -> list[VenueDTO]:
        data = await self._api.get("/venues", empty=[])
        return parse_list(VenueDTO, data)

    async def get_venue(self, venue_id: str) -> VenueDTO:
        data = await self._api.get(f"/venues/{venue_id}")
        return VenueDTO.model_validate(data)

    async def create_venue(self, form: VenueForm) -> VenueDTO:
        files = multipart_parts("venue", form.to_payload(), form.files())
        data = await self._api.post("/admin/venues", files=files)
        return VenueDTO.model_validate(data)

    async def update_venue(self, venue_id: str, form: VenueForm) -> VenueDTO:
        files = multipart_parts("venue", form.to_payload(), form.files())
        data = await self._api.patch(f"/admin/venues/{venue_id}", files=files)
        return VenueDTO.model_validate(data)

    async def delete_venue(self, venue_id: str) -> None:
        await self._api.delete(f"/admin/venues/{venue_id}", empty="")
