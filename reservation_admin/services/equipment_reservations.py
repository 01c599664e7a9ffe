"""Equipment reservation and checklist endpoints."""

from __future__ import annotations

from typing import Any

import structlog

from reservation_admin.core.exceptions import ValidationError
from reservation_admin.dto import (
    CreateEquipmentReservationInput,
    EquipmentApprovalDTO,
    EquipmentChecklistDTO,
    EquipmentChecklistRequest,
    EquipmentChecklistStatusDTO,
    EquipmentReservationDTO,
    ReservationBatchRequest,
    parse_list,
)
from reservation_admin.schemas import ReservationActionForm

from .events import REJECTION_REASON_REQUIRED
from .http_client import ApiClient

logger = structlog.get_logger(__name__)

BASE = "/equipment-reservations"


class EquipmentReservationService:
    def __init__(self, api: ApiClient) -> None:
        self._api = api

    async def _list(self, path: str) -> list[EquipmentReservationDTO]:
        data = await self._api.get(path, empty=[])
        return parse_list(EquipmentReservationDTO, data)

    async def create_reservations(
        self, inputs: list[CreateEquipmentReservationInput]
    ) -> list[EquipmentReservationDTO]:
        if not inputs:
            raise ValidationError("At least one equipment reservation is required")
        data = await self._api.post(BASE, json=[item.to_api() for item in inputs], empty=[])
        return parse_list(EquipmentReservationDTO, data)

    async def list_all(self) -> list[EquipmentReservationDTO]:
        return await self._list(BASE)

    async def list_own(self) -> list[EquipmentReservationDTO]:
        return await self._list(f"{BASE}/own")

    async def list_by_event(self, event_id: str) -> list[EquipmentReservationDTO]:
        return await self._list(f"{BASE}/event/{event_id}")

    async def list_for_owner(self) -> list[EquipmentReservationDTO]:
        return await self._list(f"{BASE}/owner")

    async def list_pending_for_owner(self) -> list[EquipmentReservationDTO]:
        return await self._list(f"{BASE}/owner/pending")

    async def get_reservation(self, reservation_id: str) -> EquipmentReservationDTO:
        data = await self._api.get(f"{BASE}/{reservation_id}")
        return EquipmentReservationDTO.model_validate(data)

    async def get_approvals(self, reservation_id: str) -> list[EquipmentApprovalDTO]:
        data = await self._api.get(f"{BASE}/{reservation_id}/approvals", empty=[])
        return parse_list(EquipmentApprovalDTO, data)

    async def approve(self, reservation_id: str, remarks: str = "") -> str:
        return await self._api.post(
            f"{BASE}/{reservation_id}/approve",
            json=ReservationActionForm(remarks=remarks).to_payload(),
            empty="",
        )

    async def reject(self, reservation_id: str, remarks: str) -> str:
        if not remarks or not remarks.strip():
            raise ValidationError(REJECTION_REASON_REQUIRED)
        return await self._api.post(
            f"{BASE}/{reservation_id}/reject",
            json=ReservationActionForm(remarks=remarks).to_payload(),
            empty="",
        )

    async def cancel(self, reservation_id: str) -> str:
        return await self._api.patch(f"{BASE}/{reservation_id}/cancel", empty="")

    async def delete(self, reservation_id: str) -> None:
        await self._api.delete(f"{BASE}/{reservation_id}", empty="")

    async def _batch(self, verb: str, reservation_ids: list[str], remarks: str) -> Any:
        body = ReservationBatchRequest(reservation_public_ids=reservation_ids, remarks=remarks)
        data = await self._api.post(f"{BASE}/{verb}", json=body.to_api(), empty="")
        logger.info("batch_reservation_action", action=verb, count=len(reservation_ids))
        return data

    async def approve_many(self, reservation_ids: list[str], remarks: str = "") -> Any:
        return await self._batch("approve", reservation_ids, remarks)

    async def reject_many(self, reservation_ids: list[str], remarks: str) -> Any:
        if not remarks or not remarks.strip():
            raise ValidationError(REJECTION_REASON_REQUIRED)
        return await self._batch("reject", reservation_ids, remarks)

    async def cancel_many(self, reservation_ids: list[str], remarks: str = "") -> Any:
        return await self._batch("cancel", reservation_ids, remarks)


class EquipmentChecklistService:
    def __init__(self, api: ApiClient) -> None:
        self._api = api

    async def checklist_for_event(self, event_id: str) -> list[EquipmentChecklistStatusDTO]:
        data = await self._api.get(f"/equipment-checklist/event/{event_id}", empty=[])
        return parse_list(EquipmentChecklistStatusDTO, data)

    async def submit(self, request: EquipmentChecklistRequest) -> EquipmentChecklistDTO:
        data = await self._api.post("/equipment-checklist", json=request.to_api())
        return EquipmentChecklistDTO.model_validate(data)
