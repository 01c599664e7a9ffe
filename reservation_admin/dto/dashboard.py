"""Aggregates returned by the ``/dashboard/*`` endpoints."""

from __future__ import annotations

from .base import ApiModel


class _StatusCounts(ApiModel):
    pending_count: int = 0
    approved_count: int = 0
    rejected_count: int = 0
    canceled_count: int = 0
    ongoing_count: int = 0
    completed_count: int = 0


class TopVenueDTO(_StatusCounts):
    venue_name: str
    total_event_count: int = 0


class TopEquipmentDTO(_StatusCounts):
    equipment_name: str
    total_reservation_count: int = 0


class EventCountDTO(_StatusCounts):
    date: str


class EventTypeStatusDistributionDTO(_StatusCounts):
    name: str
    total_count: int = 0


class UserReservationActivityDTO(_StatusCounts):
    user_public_id: str
    user_first_name: str = ""
    user_last_name: str = ""
    total_reservation_count: int = 0


class CancellationRateDTO(ApiModel):
    date: str
    cancellation_rate: float = 0.0
    canceled_count: int = 0
    total_created_count: int = 0


class PeakHourDTO(ApiModel):
    hour_of_day: int
    event_count: int = 0


class UserActivityDTO(ApiModel):
    user_public_id: str
    user_first_name: str = ""
    user_last_name: str = ""
    event_count: int = 0


class RecentActivityItemDTO(ApiModel):
    id: str
    type: str
    title: str
    description: str | None = None
    timestamp: str
    actor_name: str | None = None
    entity_path: str | None = None


class EventTypeSummaryDTO(ApiModel):
    name: str
    value: int = 0
