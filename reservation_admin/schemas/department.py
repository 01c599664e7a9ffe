from __future__ import annotations

from typing import Any

from pydantic import BaseModel, field_validator

from ._validators import require_text


class DepartmentForm(BaseModel):
    name: str
    description: str | None = None
    dept_head_id: str | None = None

    @field_validator("name")
    @classmethod
    def _name_required(cls, v: str) -> str:
        return require_text(v, "Department Name is required")

    def to_payload(self) -> dict[str, Any]:
        payload = {
            "name": self.name,
            "description": self.description,
            "deptHeadPublicId": self.dept_head_id or None,
        }
        return {k: v for k, v in payload.items() if v is not None}


class EditDepartmentForm(BaseModel):
    name: str | None = None
    description: str | None = None
    dept_head_id: str | None = None

    def to_payload(self) -> dict[str, Any]:
        payload = {
            "name": self.name,
            "description": self.description,
            "deptHeadPublicId": self.dept_head_id or None,
        }
        return {k: v for k, v in payload.items() if v is not None}
