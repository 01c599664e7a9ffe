"""Event DTOs. Placeholder rows built by optimistic updates leave most fields unset."""

from __future__ import annotations

from pydantic import Field

from .base import ApiModel
from .user import DepartmentDTO, UserDTO
from .venue import VenueDTO


class EventApprovalDTO(ApiModel):
    public_id: str
    event_public_id: str | None = None
    signed_by_user: UserDTO
    user_role: str | None = None
    remarks: str | None = None
    status: str
    date_signed: str | None = None


class EventPersonnelDTO(ApiModel):
    public_id: str
    personnel: UserDTO
    phone_number: str | None = None
    task: str


class EventDTO(ApiModel):
    public_id: str
    event_name: str
    event_type: str | None = None
    organizer: UserDTO | None = None
    approved_letter_url: str | None = None
    image_url: str | None = None
    event_venue: VenueDTO | None = None
    department: DepartmentDTO | None = None
    start_time: str | None = None
    end_time: str | None = None
    status: str
    approvals: list[EventApprovalDTO] | None = None
    cancellation_reason: str | None = None
    created_at: str | None = None
    updated_at: str | None = None
    assigned_personnel: list[EventPersonnelDTO] | None = None


class EventActionRequest(ApiModel):
    """Body of the batch ``/event-approval/action`` endpoint."""

    event_public_ids: list[str] = Field(min_length=1)
    action: str
    remarks: str = ""
