"""Equipment reservation DTOs and request inputs."""

from __future__ import annotations

from pydantic import Field

from .base import ApiModel, PublicRef
from .equipment import EquipmentDTO
from .event import EventDTO
from .user import DepartmentDTO, UserDTO


class EquipmentApprovalDTO(ApiModel):
    public_id: str
    equipment_reservation_public_id: str | None = None
    signed_by_user: UserDTO
    user_role: str | None = None
    remarks: str | None = None
    status: str
    date_signed: str | None = None


class EquipmentReservationDTO(ApiModel):
    public_id: str
    event: EventDTO | None = None
    requesting_user: UserDTO | None = None
    department: DepartmentDTO | None = None
    equipment: EquipmentDTO | None = None
    quantity: int = 0
    start_time: str | None = None
    end_time: str | None = None
    status: str
    approvals: list[EquipmentApprovalDTO] | None = None
    created_at: str | None = None
    updated_at: str | None = None


class CreateEquipmentReservationInput(ApiModel):
    event: PublicRef
    equipment: PublicRef
    department: PublicRef
    quantity: int = Field(ge=1)
    start_time: str
    end_time: str


class ReservationBatchRequest(ApiModel):
    """Body of ``/equipment-reservations/approve|reject|cancel``."""

    reservation_public_ids: list[str] = Field(min_length=1)
    remarks: str = ""
