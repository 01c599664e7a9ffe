from __future__ import annotations

from reservation_admin.dto import DepartmentDTO, parse_list
from reservation_admin.schemas import DepartmentForm, EditDepartmentForm

from .http_client import ApiClient


class DepartmentService:
    def __init__(self, api: ApiClient) -> None:
        self._api = api

    async def list_departments(self) -> list[DepartmentDTO]:
        data = await self._api.get("/departments", empty=[])
        return parse_list(DepartmentDTO, data)

    async def create_department(self, form: DepartmentForm) -> DepartmentDTO:
        data = await self._api.post("/admin/departments", json=form.to_payload())
        return DepartmentDTO.model_validate(data)

    async def update_department(self, department_id: str, form: EditDepartmentForm) -> DepartmentDTO:
        data = await self._api.patch(f"/admin/departments/{department_id}", json=form.to_payload())
        return DepartmentDTO.model_validate(data)

    async def delete_department(self, department_id: str) -> None:
        await self._api.delete(f"/admin/departments/{department_id}", empty="")

    async def bulk_delete(self, department_ids: list[str]) -> None:
        await self._api.post("/admin/departments/bulk-delete", json=list(department_ids), empty="")

    async def assign_head(self, department_id: str, user_id: str) -> DepartmentDTO:
        data = await self._api.patch(
            f"/admin/departments/{department_id}/head", json={"userPublicId": user_id}
        )
        return DepartmentDTO.model_validate(data)
