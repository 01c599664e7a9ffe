"""Event and event-personnel endpoints."""

from __future__ import annotations

from datetime import date
from typing import Any

import structlog

from reservation_admin.core.exceptions import ValidationError
from reservation_admin.dto import (
    ApprovalAction,
    EventActionRequest,
    EventApprovalDTO,
    EventDTO,
    EventPersonnelDTO,
    parse_list,
)
from reservation_admin.schemas import EditEventForm, EventForm
from reservation_admin.utils.datetime import to_api_date

from .http_client import ApiClient, multipart_parts

logger = structlog.get_logger(__name__)

REJECTION_REASON_REQUIRED = "Please provide a reason for rejection."
CANCELLATION_REASON_REQUIRED = "Please provide a reason for cancellation."


class EventService:
    def __init__(self, api: ApiClient) -> None:
        self._api = api

    async def create_event(self, form: EventForm) -> EventDTO:
        files = multipart_parts("event", form.to_payload(), form.files())
        data = await self._api.post("/events", files=files)
        return EventDTO.model_validate(data)

    async def update_event(self, event_id: str, form: EditEventForm) -> EventDTO:
        files = multipart_parts("event", form.to_payload(), form.files())
        data = await self._api.patch(f"/events/{event_id}", files=files)
        return EventDTO.model_validate(data)

    async def get_event(self, event_id: str) -> EventDTO:
        data = await self._api.get(f"/events/{event_id}")
        return EventDTO.model_validate(data)

    async def search_events(
        self,
        scope: str,
        status: str | None = None,
        sort_by: str | None = None,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> list[EventDTO]:
        params = {
            "scope": scope,
            "status": status,
            "sortBy": sort_by,
            "startDate": to_api_date(start_date),
            "endDate": to_api_date(end_date),
        }
        data = await self._api.get("/events", params=params, empty=[])
        return parse_list(EventDTO, data)

    async def timeline(
        self, start_date: date | None = None, end_date: date | None = None
    ) -> list[EventDTO]:
        params = {"startDate": to_api_date(start_date), "endDate": to_api_date(end_date)}
        data = await self._api.get("/events/timeline", params=params, empty=[])
        return parse_list(EventDTO, data)

    async def get_approvals(self, event_id: str) -> list[EventApprovalDTO]:
        data = await self._api.get(f"/events/{event_id}/approvals", empty=[])
        return parse_list(EventApprovalDTO, data)

    async def approve_event(self, event_id: str, remarks: str = "") -> str:
        return await self._api.post(
            f"/events/{event_id}/approve", json={"remarks": remarks}, empty=""
        )

    async def reject_event(self, event_id: str, remarks: str) -> str:
        if not remarks or not remarks.strip():
            raise ValidationError(REJECTION_REASON_REQUIRED)
        return await self._api.post(
            f"/events/{event_id}/reject", json={"remarks": remarks}, empty=""
        )

    async def cancel_event(self, event_id: str, reason: str) -> str:
        if not reason or not reason.strip():
            raise ValidationError(CANCELLATION_REASON_REQUIRED)
        return await self._api.patch(
            f"/events/{event_id}/cancel", json={"reason": reason}, empty=""
        )

    async def delete_event(self, event_id: str) -> None:
        await self._api.delete(f"/events/{event_id}", empty="")

    async def batch_action(
        self, event_ids: list[str], action: ApprovalAction, remarks: str = ""
    ) -> Any:
        """Apply one approve/reject action with shared remarks to many events in one call."""
        if action is ApprovalAction.REJECT and not remarks.strip():
            raise ValidationError(REJECTION_REASON_REQUIRED)
        body = EventActionRequest(event_public_ids=event_ids, action=action.value, remarks=remarks)
        data = await self._api.post("/event-approval/action", json=body.to_api(), empty="")
        logger.info("batch_event_action", action=action.value, count=len(event_ids))
        return data


class PersonnelService:
    def __init__(self, api: ApiClient) -> None:
        self._api = api

    async def list_personnel(self, event_id: str) -> list[EventPersonnelDTO]:
        data = await self._api.get(f"/events/{event_id}/personnel", empty=[])
        return parse_list(EventPersonnelDTO, data)

    async def add_personnel(
        self, event_id: str, user_id: str, task: str, phone_number: str | None = None
    ) -> EventPersonnelDTO:
        body = {"userPublicId": user_id, "task": task, "phoneNumber": phone_number}
        data = await self._api.post(
            f"/events/{event_id}/personnel",
            json={k: v for k, v in body.items() if v is not None},
        )
        return EventPersonnelDTO.model_validate(data)

    async def remove_personnel(self, event_id: str, personnel_id: str) -> None:
        await self._api.delete(f"/events/{event_id}/personnel/{personnel_id}", empty="")
