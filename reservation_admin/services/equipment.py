"""Equipment inventory and equipment category endpoints."""

from __future__ import annotations

from reservation_admin.dto import EquipmentCategoryDTO, EquipmentDTO, parse_list
from reservation_admin.schemas import EquipmentForm

from .http_client import ApiClient, multipart_parts


class EquipmentService:
    def __init__(self, api: ApiClient) -> None:
        self._api = api

    async def list_equipment(self) -> list[EquipmentDTO]:
        data = await self._api.get("/equipments", empty=[])
        return parse_list(EquipmentDTO, data)

    async def list_owned_by(self, user_id: str) -> list[EquipmentDTO]:
        data = await self._api.get(f"/equipments/owner/{user_id}", empty=[])
        return parse_list(EquipmentDTO, data)

    async def create_equipment(self, form: EquipmentForm) -> EquipmentDTO:
        files = multipart_parts("equipment", form.to_payload(), form.files())
        data = await self._api.post("/equipments", files=files)
        return EquipmentDTO.model_validate(data)

    async def update_equipment(self, equipment_id: str, form: EquipmentForm) -> EquipmentDTO:
        files = multipart_parts("equipment", form.to_payload(), form.files())
        data = await self._api.patch(f"/equipments/{equipment_id}", files=files)
        return EquipmentDTO.model_validate(data)

    async def delete_equipment(self, equipment_id: str) -> None:
        await self._api.delete(f"/equipments/{equipment_id}", empty="")

    async def bulk_delete(self, equipment_ids: list[str]) -> None:
        await self._api.post("/equipments/bulk-delete", json=list(equipment_ids), empty="")

    async def list_categories(self) -> list[EquipmentCategoryDTO]:
        data = await self._api.get("/equipment-categories", empty=[])
        return parse_list(EquipmentCategoryDTO, data)

    async def get_category(self, category_id: str) -> EquipmentCategoryDTO:
        data = await self._api.get(f"/equipment-categories/{category_id}")
        return EquipmentCategoryDTO.model_validate(data)

    async def create_category(self, name: str, description: str | None = None) -> EquipmentCategoryDTO:
        body = {"name": name, "description": description}
        data = await self._api.post("/equipment-categories", json=body)
        return EquipmentCategoryDTO.model_validate(data)

    async def update_category(
        self, category_id: str, name: str, description: str | None = None
    ) -> EquipmentCategoryDTO:
        body = {"name": name, "description": description}
        data = await self._api.patch(f"/equipment-categories/{category_id}", json=body)
        return EquipmentCategoryDTO.model_validate(data)

    async def delete_category(self, category_id: str) -> None:
        await self._api.delete(f"/equipment-categories/{category_id}", empty="")
