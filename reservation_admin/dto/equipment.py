"""DTOs for equipment inventory, categories and per-event checklists."""

from __future__ import annotations

from pydantic import Field

from .base import ApiModel
from .event import EventPersonnelDTO
from .user import UserDTO


class EquipmentCategoryDTO(ApiModel):
    public_id: str
    name: str
    description: str | None = None
    created_at: str | None = None
    updated_at: str | None = None


class EquipmentDTO(ApiModel):
    public_id: str
    name: str
    availability: bool = True
    brand: str | None = None
    total_quantity: int = 0
    available_quantity: int = 0
    equipment_owner: UserDTO | None = None
    image_path: str | None = None
    status: str | None = None
    categories: list[EquipmentCategoryDTO] = Field(default_factory=list)
    serial_no: str | None = None
    created_at: str | None = None
    updated_at: str | None = None


class EquipmentChecklistDTO(ApiModel):
    public_id: str
    event_personnel: EventPersonnelDTO | None = None
    task: str
    equipment_ids: list[str] = Field(default_factory=list)


class EquipmentChecklistRequest(ApiModel):
    event_personnel_id: str
    equipment_ids: list[str]


class EquipmentChecklistStatusDTO(ApiModel):
    equipment_id: str
    checked: bool = False
    checked_by_personnel_ids: list[str] = Field(default_factory=list)
