"""Optimistic cache updates around event and equipment reservation mutations.

Each mutation cancels in-flight fetches of the cache entries it touches,
snapshots them, applies the expected result locally, then sends the
request. On failure the snapshot is restored and the error re-raised; in
every case the related prefixes are invalidated so the next read refetches.
Concurrent mutations are neither ordered nor deduplicated.
"""

from __future__ import annotations

import time
from collections.abc import Awaitable, Callable, Iterable
from datetime import UTC, datetime
from typing import Any, TypeVar

import structlog

from reservation_admin.core.exceptions import ValidationError
from reservation_admin.dto import (
    PENDING_OPTIMISTIC,
    CreateEquipmentReservationInput,
    DepartmentDTO,
    EquipmentApprovalDTO,
    EquipmentDTO,
    EquipmentReservationDTO,
    EventApprovalDTO,
    EventDTO,
    Status,
    UserDTO,
    VenueDTO,
)
from reservation_admin.schemas import EditEventForm, EventForm
from reservation_admin.utils.datetime import to_api_datetime

from .equipment_reservations import EquipmentReservationService
from .events import CANCELLATION_REASON_REQUIRED, REJECTION_REASON_REQUIRED, EventService
from .query_cache import CURRENT_USER_KEY, EquipmentReservationKeys, EventKeys, QueryCache, QueryKey

logger = structlog.get_logger(__name__)

T = TypeVar("T")

PROCESSING = "Processing..."


async def optimistic_update(
    cache: QueryCache,
    request: Callable[[], Awaitable[T]],
    *,
    touched: Iterable[QueryKey],
    apply: Callable[[QueryCache], None] | None = None,
    invalidate: Iterable[QueryKey] = (),
) -> T:
    touched = list(touched)
    invalidate = list(invalidate)
    for key in touched:
        await cache.cancel(key)
    snapshot = cache.snapshot(touched)
    if apply is not None:
        apply(cache)
    try:
        return await request()
    except Exception as exc:
        cache.restore(snapshot)
        logger.warning("optimistic_rollback", keys=[list(k) for k in touched], error=str(exc))
        raise
    finally:
        for prefix in invalidate:
            cache.invalidate(prefix)


def _now_iso() -> str:
    return datetime.now(UTC).isoformat()


def _temp_id(prefix: str, index: int | None = None) -> str:
    stamp = int(time.time() * 1000)
    return f"{prefix}-{stamp}" if index is None else f"{prefix}-{stamp}-{index}"


def _replace_in_list(rows: list[Any] | None, public_id: str, change: Callable[[Any], Any]) -> list[Any] | None:
    if rows is None:
        return None
    return [change(row) if row.public_id == public_id else row for row in rows]


class EventMutations:
    def __init__(self, events: EventService, cache: QueryCache) -> None:
        self._events = events
        self._cache = cache

    @property
    def current_user(self) -> UserDTO | None:
        return self._cache.get_data(CURRENT_USER_KEY)

    async def create_event(self, form: EventForm) -> EventDTO:
        """Create an event; a placeholder row is shown at the top of the own list meanwhile."""
        own_key = EventKeys.own()
        placeholder = EventDTO(
            public_id=_temp_id("temp"),
            event_name=form.event_name,
            event_type=form.event_type,
            organizer=self.current_user,
            start_time=to_api_datetime(form.start_time),
            end_time=to_api_datetime(form.end_time),
            status=PENDING_OPTIMISTIC,
            approvals=[],
            created_at=_now_iso(),
        )

        def apply(cache: QueryCache) -> None:
            cache.set_data(own_key, lambda rows: [placeholder, *(rows or [])])

        created = await optimistic_update(
            self._cache,
            lambda: self._events.create_event(form),
            touched=[own_key],
            apply=apply,
            invalidate=[EventKeys.all],
        )
        self._cache.set_data(EventKeys.detail(created.public_id), created)
        return created

    async def update_event(self, event_id: str, form: EditEventForm) -> EventDTO:
        detail_key = EventKeys.detail(event_id)

        def apply(cache: QueryCache) -> None:
            previous: EventDTO | None = cache.get_data(detail_key)
            if previous is None:
                return
            changes: dict[str, Any] = {}
            if form.event_name is not None:
                changes["event_name"] = form.event_name
            if form.event_type is not None:
                changes["event_type"] = form.event_type
            if form.start_time is not None:
                changes["start_time"] = to_api_datetime(form.start_time)
            if form.end_time is not None:
                changes["end_time"] = to_api_datetime(form.end_time)
            if form.venue_public_id:
                venue = previous.event_venue
                changes["event_venue"] = VenueDTO(
                    public_id=form.venue_public_id,
                    name=venue.name if venue else "Venue name updating...",
                )
            cache.set_data(detail_key, previous.model_copy(update=changes))

        return await optimistic_update(
            self._cache,
            lambda: self._events.update_event(event_id, form),
            touched=[detail_key, EventKeys.approved(), EventKeys.own(), EventKeys.lists()],
            apply=apply,
            invalidate=[detail_key, EventKeys.approved(), EventKeys.own(), EventKeys.lists()],
        )

    def _record_approval(self, event_id: str, status: Status, remarks: str) -> Callable[[QueryCache], None]:
        user = self.current_user

        def apply(cache: QueryCache) -> None:
            if user is None:
                return
            approval = EventApprovalDTO(
                public_id=_temp_id("optimistic-approval"),
                event_public_id=event_id,
                signed_by_user=user,
                user_role=user.roles[0] if user.roles else None,
                remarks=remarks or None,
                status=status.value,
                date_signed=_now_iso(),
            )
            detail_key = EventKeys.detail(event_id)
            event: EventDTO | None = cache.get_data(detail_key)
            if event is not None:
                approvals = [*(event.approvals or []), approval]
                cache.set_data(detail_key, event.model_copy(update={"approvals": approvals}))
            approvals_key = EventKeys.approvals(event_id)
            if approvals_key in cache:
                cache.set_data(approvals_key, lambda rows: [*(rows or []), approval])

        return apply

    def _after_review(self, event_id: str) -> list[QueryKey]:
        return [
            EventKeys.approvals(event_id),
            EventKeys.detail(event_id),
            EventKeys.lists(),
            EventKeys.approved(),
            EventKeys.pending(),
            EventKeys.own(),
        ]

    async def approve_event(self, event_id: str, remarks: str = "") -> str:
        return await optimistic_update(
            self._cache,
            lambda: self._events.approve_event(event_id, remarks),
            touched=[EventKeys.detail(event_id), EventKeys.approvals(event_id)],
            apply=self._record_approval(event_id, Status.APPROVED, remarks),
            invalidate=self._after_review(event_id),
        )

    async def reject_event(self, event_id: str, remarks: str) -> str:
        if not remarks or not remarks.strip():
            raise ValidationError(REJECTION_REASON_REQUIRED)
        return await optimistic_update(
            self._cache,
            lambda: self._events.reject_event(event_id, remarks),
            touched=[EventKeys.detail(event_id), EventKeys.approvals(event_id)],
            apply=self._record_approval(event_id, Status.REJECTED, remarks),
            invalidate=self._after_review(event_id),
        )

    async def cancel_event(self, event_id: str, reason: str) -> str:
        if not reason or not reason.strip():
            raise ValidationError(CANCELLATION_REASON_REQUIRED)
        detail_key = EventKeys.detail(event_id)
        list_keys = [EventKeys.own(), EventKeys.approved()]
        changes = {"status": Status.CANCELED.value, "cancellation_reason": reason}

        def apply(cache: QueryCache) -> None:
            event: EventDTO | None = cache.get_data(detail_key)
            if event is not None:
                cache.set_data(detail_key, event.model_copy(update=changes))
            for key in list_keys:
                if key in cache:
                    cache.set_data(
                        key,
                        lambda rows: _replace_in_list(rows, event_id, lambda e: e.model_copy(update=changes)),
                    )

        return await optimistic_update(
            self._cache,
            lambda: self._events.cancel_event(event_id, reason),
            touched=[detail_key, *list_keys],
            apply=apply,
            invalidate=self._after_review(event_id),
        )

    async def delete_event(self, event_id: str) -> None:
        await self._events.delete_event(event_id)
        self._cache.remove(EventKeys.detail(event_id))
        self._cache.invalidate(EventKeys.all)


class EquipmentReservationMutations:
    def __init__(self, reservations: EquipmentReservationService, cache: QueryCache) -> None:
        self._reservations = reservations
        self._cache = cache

    @property
    def current_user(self) -> UserDTO | None:
        return self._cache.get_data(CURRENT_USER_KEY)

    def event_id_for(self, reservation_id: str) -> str | None:
        """Look up the reservation's event among cached rows; no request is made."""
        candidates: list[EquipmentReservationDTO] = []
        detail = self._cache.get_data(EquipmentReservationKeys.detail(reservation_id))
        if detail is not None:
            candidates.append(detail)
        for key in self._cache.keys(EquipmentReservationKeys.all):
            data = self._cache.get_data(key)
            if isinstance(data, list):
                candidates.extend(data)
        for row in candidates:
            if getattr(row, "public_id", None) == reservation_id and getattr(row, "event", None):
                return row.event.public_id
        return None

    async def resolve_event_id(self, reservation_id: str) -> str | None:
        """Cached event id, else the one on the freshly fetched reservation."""
        event_id = self.event_id_for(reservation_id)
        if event_id is not None:
            return event_id
        reservation = await self._reservations.get_reservation(reservation_id)
        return reservation.event.public_id if reservation.event else None

    def _event_keys(self, event_id: str | None) -> list[QueryKey]:
        if not event_id:
            return []
        return [EventKeys.approvals(event_id), EventKeys.detail(event_id)]

    def _placeholder(self, item: CreateEquipmentReservationInput, index: int) -> EquipmentReservationDTO:
        user = self.current_user
        department_name = user.department.name if user and user.department else PROCESSING
        now = _now_iso()
        return EquipmentReservationDTO(
            public_id=_temp_id("temp", index),
            event=EventDTO(
                public_id=item.event.public_id,
                event_name=PROCESSING,
                start_time=item.start_time,
                end_time=item.end_time,
                status=PENDING_OPTIMISTIC,
            ),
            equipment=EquipmentDTO(public_id=item.equipment.public_id, name=PROCESSING),
            department=DepartmentDTO(public_id=item.department.public_id, name=department_name),
            requesting_user=user,
            quantity=item.quantity,
            start_time=item.start_time,
            end_time=item.end_time,
            status=PENDING_OPTIMISTIC,
            approvals=[],
            created_at=now,
            updated_at=now,
        )

    async def create_reservations(
        self, inputs: list[CreateEquipmentReservationInput]
    ) -> list[EquipmentReservationDTO]:
        event_id = inputs[0].event.public_id if inputs else None
        if not event_id:
            raise ValidationError("Event ID is required for equipment reservation")
        placeholders = [self._placeholder(item, index) for index, item in enumerate(inputs)]
        list_keys = [EquipmentReservationKeys.lists(), EquipmentReservationKeys.own()]

        def apply(cache: QueryCache) -> None:
            for key in list_keys:
                cache.set_data(key, lambda rows: [*placeholders, *(rows or [])])

        created = await optimistic_update(
            self._cache,
            lambda: self._reservations.create_reservations(inputs),
            touched=[*list_keys, EventKeys.approvals(event_id)],
            apply=apply,
            invalidate=[EquipmentReservationKeys.all, *self._event_keys(event_id)],
        )
        for reservation in created:
            self._cache.set_data(EquipmentReservationKeys.detail(reservation.public_id), reservation)
        return created

    def _record_approval(
        self, reservation_id: str, status: Status, remarks: str
    ) -> Callable[[QueryCache], None]:
        user = self.current_user
        owner_key = EquipmentReservationKeys.all_equipment_owner()

        def change(row: EquipmentReservationDTO) -> EquipmentReservationDTO:
            approval = EquipmentApprovalDTO(
                public_id=_temp_id("optimistic-approval"),
                equipment_reservation_public_id=row.public_id,
                signed_by_user=user,
                user_role=user.roles[0] if user.roles else None,
                remarks=remarks or None,
                status=status.value,
                date_signed=_now_iso(),
            )
            return row.model_copy(
                update={"status": status.value, "approvals": [*(row.approvals or []), approval]}
            )

        def apply(cache: QueryCache) -> None:
            if user is None or owner_key not in cache:
                return
            cache.set_data(owner_key, lambda rows: _replace_in_list(rows, reservation_id, change))

        return apply

    def _after_review(self, reservation_id: str, event_id: str | None) -> list[QueryKey]:
        return [
            EquipmentReservationKeys.all_equipment_owner(),
            EquipmentReservationKeys.detail(reservation_id),
            EquipmentReservationKeys.lists(),
            EquipmentReservationKeys.pending(),
            EquipmentReservationKeys.own(),
            *self._event_keys(event_id),
        ]

    async def _review(
        self, reservation_id: str, status: Status, remarks: str, request: Callable[[], Awaitable[str]]
    ) -> str:
        event_id = await self.resolve_event_id(reservation_id)
        return await optimistic_update(
            self._cache,
            request,
            touched=[
                EquipmentReservationKeys.all_equipment_owner(),
                EquipmentReservationKeys.detail(reservation_id),
                *self._event_keys(event_id),
            ],
            apply=self._record_approval(reservation_id, status, remarks),
            invalidate=self._after_review(reservation_id, event_id),
        )

    async def approve(self, reservation_id: str, remarks: str = "") -> str:
        return await self._review(
            reservation_id,
            Status.APPROVED,
            remarks,
            lambda: self._reservations.approve(reservation_id, remarks),
        )

    async def reject(self, reservation_id: str, remarks: str) -> str:
        if not remarks or not remarks.strip():
            raise ValidationError(REJECTION_REASON_REQUIRED)
        return await self._review(
            reservation_id,
            Status.REJECTED,
            remarks,
            lambda: self._reservations.reject(reservation_id, remarks),
        )

    async def cancel(self, reservation_id: str, event_id: str) -> str:
        by_event = EquipmentReservationKeys.by_event(event_id)

        def apply(cache: QueryCache) -> None:
            if by_event not in cache:
                return
            cache.set_data(
                by_event,
                lambda rows: _replace_in_list(
                    rows, reservation_id, lambda r: r.model_copy(update={"status": Status.CANCELED.value})
                ),
            )

        return await optimistic_update(
            self._cache,
            lambda: self._reservations.cancel(reservation_id),
            touched=[by_event, *self._event_keys(event_id)],
            apply=apply,
            invalidate=[by_event, *self._after_review(reservation_id, event_id)],
        )

    async def delete(self, reservation_id: str) -> None:
        event_id = self.event_id_for(reservation_id)
        await self._reservations.delete(reservation_id)
        self._cache.remove(EquipmentReservationKeys.detail(reservation_id))
        for key in [
            EquipmentReservationKeys.lists(),
            EquipmentReservationKeys.pending(),
            EquipmentReservationKeys.own(),
            *self._event_keys(event_id),
        ]:
            self._cache.invalidate(key)
