from __future__ import annotations

from typing import Any

from pydantic import Field, field_validator

from .base import ApiModel


class NotificationMessage(ApiModel):
    equipment_id: str | None = None
    equipment_name: str | None = None
    equipment_reservation_id: str | None = None
    venue_id: str | None = None
    venue_name: str | None = None
    venue_reservation_id: str | None = None
    requester_name: str | None = None
    event_name: str | None = None
    approver: str | None = None
    type: str | None = None
    message: str | None = None
    event_id: str | None = None


class NotificationDTO(ApiModel):
    id: int
    event_id: str | None = None
    message: NotificationMessage = Field(default_factory=NotificationMessage)
    created_at: str | None = None
    is_read: bool = False
    related_entity_id: int | None = None
    related_entity_type: str | None = None

    @field_validator("message", mode="before")
    @classmethod
    def _null_message(cls, v: Any) -> Any:
        return {} if v is None else v
