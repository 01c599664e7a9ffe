"""Admin user management and self-service profile endpoints."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from reservation_admin.dto import UserDTO, parse_list
from reservation_admin.schemas import EditUserForm, SetNewPasswordForm, UploadFile, UserForm

from .http_client import ApiClient, multipart_parts


class UserService:
    def __init__(self, api: ApiClient) -> None:
        self._api = api

    async def list_users(self) -> list[UserDTO]:
        data = await self._api.get("/admin/users", empty=[])
        return parse_list(UserDTO, data)

    async def create_user(self, form: UserForm) -> UserDTO:
        data = await self._api.post("/admin/users", json=form.to_payload())
        return UserDTO.model_validate(data)

    async def update_user(self, user_id: str, form: EditUserForm) -> UserDTO:
        data = await self._api.patch(f"/admin/users/{user_id}", json=form.to_payload())
        return UserDTO.model_validate(data)

    async def activate_user(self, user_id: str) -> None:
        await self._api.patch(f"/admin/users/{user_id}/activate", empty="")

    async def deactivate_user(self, user_id: str) -> None:
        await self._api.patch(f"/admin/users/{user_id}/deactivate", empty="")

    async def bulk_deactivate(self, user_ids: list[str]) -> None:
        await self._api.post("/admin/users/bulk-deactivate", json=list(user_ids), empty="")

    async def update_profile(
        self, fields: Mapping[str, Any], profile_image: UploadFile | None = None
    ) -> UserDTO:
        files = multipart_parts("user", dict(fields), [("profileImage", profile_image)])
        data = await self._api.patch("/users/me", files=files)
        return UserDTO.model_validate(data)

    async def change_password(self, form: SetNewPasswordForm) -> None:
        await self._api.patch("/users/me/password", json=form.to_payload(), empty="")
