"""User and department DTOs."""

from __future__ import annotations

from pydantic import Field

from .base import ApiModel


class UserDTO(ApiModel):
    public_id: str
    email: str
    first_name: str = ""
    last_name: str = ""
    id_number: str | None = None
    phone_number: str | None = None
    telephone_number: str | None = None
    roles: list[str] = Field(default_factory=list)
    department: DepartmentDTO | None = None
    email_verified: bool | None = None
    active: bool = True
    created_at: str | None = None
    updated_at: str | None = None
    profile_image_path: str | None = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def has_role(self, *roles: str) -> bool:
        return any(role in self.roles for role in roles)


class DepartmentDTO(ApiModel):
    public_id: str
    name: str
    description: str | None = None
    dept_head: UserDTO | None = None
    created_at: str | None = None
    updated_at: str | None = None


class LoginResponse(ApiModel):
    token: str | None = None
    token_type: str | None = None


UserDTO.model_rebuild()
DepartmentDTO.model_rebuild()
