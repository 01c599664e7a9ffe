"""Aggregate statistics under ``/dashboard``.

Range-based metrics need both ``start_date`` and ``end_date``; without them
nothing is requested and an empty list is returned.
"""

from __future__ import annotations

from datetime import date
from typing import Any

from pydantic import BaseModel

from reservation_admin.dto import (
    CancellationRateDTO,
    EventCountDTO,
    EventDTO,
    EventTypeStatusDistributionDTO,
    EventTypeSummaryDTO,
    PeakHourDTO,
    RecentActivityItemDTO,
    TopEquipmentDTO,
    TopVenueDTO,
    UserActivityDTO,
    UserReservationActivityDTO,
    parse_list,
)
from reservation_admin.utils.datetime import to_api_date

from .http_client import ApiClient


class DashboardService:
    def __init__(self, api: ApiClient) -> None:
        self._api = api

    async def _ranged(
        self,
        path: str,
        model: type[BaseModel],
        start_date: date | None,
        end_date: date | None,
        **params: Any,
    ) -> list[Any]:
        if not start_date or not end_date:
            return []
        query = {"startDate": to_api_date(start_date), "endDate": to_api_date(end_date), **params}
        data = await self._api.get(f"/dashboard/{path}", params=query, empty=[])
        return parse_list(model, data)

    async def top_venues(self, start_date=None, end_date=None, limit: int = 5) -> list[TopVenueDTO]:
        return await self._ranged("top-venues", TopVenueDTO, start_date, end_date, limit=limit)

    async def top_equipment(
        self, start_date=None, end_date=None, equipment_type: str | None = None, limit: int = 5
    ) -> list[TopEquipmentDTO]:
        return await self._ranged(
            "top-equipment",
            TopEquipmentDTO,
            start_date,
            end_date,
            equipmentTypeFilter=equipment_type,
            limit=limit,
        )

    async def events_overview(self, start_date=None, end_date=None) -> list[EventCountDTO]:
        return await self._ranged("events-overview", EventCountDTO, start_date, end_date)

    async def cancellation_rates(self, start_date=None, end_date=None) -> list[CancellationRateDTO]:
        return await self._ranged("cancellation-rates", CancellationRateDTO, start_date, end_date)

    async def peak_reservation_hours(self, start_date=None, end_date=None) -> list[PeakHourDTO]:
        return await self._ranged("peak-reservation-hours", PeakHourDTO, start_date, end_date)

    async def user_activity(self, start_date=None, end_date=None, limit: int = 5) -> list[UserActivityDTO]:
        return await self._ranged("user-activity", UserActivityDTO, start_date, end_date, limit=limit)

    async def user_reservation_activity(
        self, start_date=None, end_date=None, user_filter: str | None = None, limit: int = 10
    ) -> list[UserReservationActivityDTO]:
        return await self._ranged(
            "user-reservation-activity",
            UserReservationActivityDTO,
            start_date,
            end_date,
            userFilter=user_filter,
            limit=limit,
        )

    async def event_types_summary(
        self, start_date=None, end_date=None, limit: int | None = None
    ) -> list[EventTypeSummaryDTO]:
        return await self._ranged(
            "event-types-summary", EventTypeSummaryDTO, start_date, end_date, limit=limit
        )

    async def event_type_status_distribution(
        self, start_date=None, end_date=None
    ) -> list[EventTypeStatusDistributionDTO]:
        return await self._ranged(
            "event-type-status-distribution", EventTypeStatusDistributionDTO, start_date, end_date
        )

    async def recent_activity(self, limit: int = 10) -> list[RecentActivityItemDTO]:
        data = await self._api.get("/dashboard/recent-activity", params={"limit": limit}, empty=[])
        return parse_list(RecentActivityItemDTO, data)

    async def upcoming_approved_events(self, limit: int = 5) -> list[EventDTO]:
        data = await self._api.get("/dashboard/upcoming-events", params={"limit": limit}, empty=[])
        return parse_list(EventDTO, data)

    async def upcoming_approved_events_count(self, days: int = 30) -> int:
        data = await self._api.get("/dashboard/upcoming-events/count", params={"days": days}, empty=0)
        return int(data or 0)
