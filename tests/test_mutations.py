from __future__ import annotations

import asyncio

import pytest

from reservation_admin.core.exceptions import ApiError, ValidationError
from reservation_admin.dto import PENDING_OPTIMISTIC, CreateEquipmentReservationInput, PublicRef
from reservation_admin.services.mutations import (
    EquipmentReservationMutations,
    EventMutations,
    optimistic_update,
)
from reservation_admin.services.query_cache import (
    CURRENT_USER_KEY,
    EquipmentReservationKeys,
    EventKeys,
    QueryCache,
)
from tests.factories import make_event, make_reservation, make_user


class StubEvents:
    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.calls: list[tuple[str, str, str]] = []
        self.seen_during_request: list = []
        self.cache: QueryCache | None = None

    async def approve_event(self, event_id: str, remarks: str = "") -> str:
        self.calls.append(("approve", event_id, remarks))
        if self.cache is not None:
            self.seen_during_request.append(self.cache.get_data(EventKeys.detail(event_id)))
        if self.fail:
            raise ApiError("Approval window closed", 409)
        return "Event approved"

    async def reject_event(self, event_id: str, remarks: str) -> str:
        self.calls.append(("reject", event_id, remarks))
        return "Event rejected"

    async def cancel_event(self, event_id: str, reason: str) -> str:
        self.calls.append(("cancel", event_id, reason))
        if self.fail:
            raise ApiError("Too late to cancel", 400)
        return "Event canceled"


class StubReservations:
    def __init__(self, created=None, fail_ids=()) -> None:
        self.created = created or []
        self.fail_ids = set(fail_ids)
        self.calls: list[tuple] = []

    async def create_reservations(self, inputs):
        self.calls.append(("create", len(inputs)))
        return self.created

    async def approve(self, reservation_id: str, remarks: str = "") -> str:
        self.calls.append(("approve", reservation_id, remarks))
        if reservation_id in self.fail_ids:
            raise ApiError("Insufficient stock", 409)
        return "ok"

    async def reject(self, reservation_id: str, remarks: str) -> str:
        self.calls.append(("reject", reservation_id, remarks))
        return "ok"

    async def get_reservation(self, reservation_id: str):
        self.calls.append(("get", reservation_id))
        return make_reservation(public_id=reservation_id, event_id="event-9")


@pytest.fixture
def cache() -> QueryCache:
    cache = QueryCache()
    cache.set_data(CURRENT_USER_KEY, make_user(public_id="me", roles=["VENUE_OWNER"]))
    return cache


@pytest.mark.asyncio
async def test_optimistic_update_rolls_back_and_reraises(cache):
    key = EventKeys.own()
    cache.set_data(key, ["original"])

    async def failing():
        raise ApiError("boom", 500)

    with pytest.raises(ApiError):
        await optimistic_update(
            cache,
            failing,
            touched=[key],
            apply=lambda c: c.set_data(key, ["optimistic"]),
            invalidate=[EventKeys.all],
        )

    assert cache.get_data(key) == ["original"]
    assert cache.is_stale(key, 60)


@pytest.mark.asyncio
async def test_optimistic_update_keeps_speculative_state_until_refetch(cache):
    key = EventKeys.own()
    cache.set_data(key, ["original"])

    async def ok():
        return "done"

    result = await optimistic_update(
        cache, ok, touched=[key], apply=lambda c: c.set_data(key, ["optimistic"]), invalidate=[key]
    )

    assert result == "done"
    assert cache.get_data(key) == ["optimistic"]
    assert cache.is_stale(key, 60)


@pytest.mark.asyncio
async def test_optimistic_update_cancels_in_flight_fetch_of_touched_key(cache):
    key = EventKeys.detail("e1")

    async def never():
        await asyncio.Event().wait()

    pending = asyncio.create_task(cache.fetch(key, never))
    await asyncio.sleep(0)

    async def ok():
        return "done"

    await optimistic_update(cache, ok, touched=[key], apply=lambda c: c.set_data(key, "optimistic"))

    with pytest.raises(asyncio.CancelledError):
        await pending
    assert cache.get_data(key) == "optimistic"


@pytest.mark.asyncio
async def test_approve_event_appends_current_user_approval(cache):
    events = StubEvents()
    events.cache = cache
    cache.set_data(EventKeys.detail("e1"), make_event(public_id="e1"))
    mutations = EventMutations(events, cache)

    await mutations.approve_event("e1", "Looks good")

    during = events.seen_during_request[0]
    assert len(during.approvals) == 1
    approval = during.approvals[0]
    assert approval.signed_by_user.public_id == "me"
    assert approval.status == "APPROVED"
    assert approval.remarks == "Looks good"
    assert approval.user_role == "VENUE_OWNER"
    assert cache.is_stale(EventKeys.detail("e1"))


@pytest.mark.asyncio
async def test_failed_approval_restores_event_detail(cache):
    events = StubEvents(fail=True)
    original = make_event(public_id="e1")
    cache.set_data(EventKeys.detail("e1"), original)
    mutations = EventMutations(events, cache)

    with pytest.raises(ApiError, match="Approval window closed"):
        await mutations.approve_event("e1")

    assert cache.get_data(EventKeys.detail("e1")) == original


@pytest.mark.asyncio
async def test_reject_event_requires_remarks_before_any_request(cache):
    events = StubEvents()
    mutations = EventMutations(events, cache)

    with pytest.raises(ValidationError, match="Please provide a reason for rejection."):
        await mutations.reject_event("e1", "   ")

    assert events.calls == []


@pytest.mark.asyncio
async def test_cancel_event_marks_cached_rows_canceled(cache):
    events = StubEvents()
    cache.set_data(EventKeys.detail("e1"), make_event(public_id="e1", status="APPROVED"))
    cache.set_data(EventKeys.own(), [make_event(public_id="e1", status="APPROVED"), make_event(public_id="e2")])
    mutations = EventMutations(events, cache)

    await mutations.cancel_event("e1", "Venue flooded")

    detail = cache.get_data(EventKeys.detail("e1"))
    assert (detail.status, detail.cancellation_reason) == ("CANCELED", "Venue flooded")
    assert [e.status for e in cache.get_data(EventKeys.own())] == ["CANCELED", "PENDING"]


def reservation_input(event_id: str = "event-1", equipment_id: str = "eq-1") -> CreateEquipmentReservationInput:
    return CreateEquipmentReservationInput(
        event=PublicRef(public_id=event_id),
        equipment=PublicRef(public_id=equipment_id),
        department=PublicRef(public_id="dept-1"),
        quantity=1,
        start_time="2024-06-01T10:00:00",
        end_time="2024-06-01T12:00:00",
    )


@pytest.mark.asyncio
async def test_create_reservations_prepends_placeholders_then_caches_details(cache):
    created = [make_reservation(public_id="r-new")]
    service = StubReservations(created=created)
    existing = make_reservation(public_id="r-old")
    cache.set_data(EquipmentReservationKeys.own(), [existing])
    mutations = EquipmentReservationMutations(service, cache)

    result = await mutations.create_reservations([reservation_input(), reservation_input(equipment_id="eq-2")])

    assert result == created
    own = cache.get_data(EquipmentReservationKeys.own())
    assert [r.status for r in own] == [PENDING_OPTIMISTIC, PENDING_OPTIMISTIC, "PENDING"]
    assert own[0].department.name == "Engineering"
    assert cache.get_data(EquipmentReservationKeys.detail("r-new")) == created[0]
    assert cache.is_stale(EquipmentReservationKeys.own())


@pytest.mark.asyncio
async def test_create_reservations_requires_event_id(cache):
    mutations = EquipmentReservationMutations(StubReservations(), cache)
    with pytest.raises(ValidationError, match="Event ID is required"):
        await mutations.create_reservations([])


@pytest.mark.asyncio
async def test_reservation_approval_updates_owner_list_and_rolls_back_on_error(cache):
    key = EquipmentReservationKeys.all_equipment_owner()
    rows = [make_reservation(public_id="r1"), make_reservation(public_id="r2")]
    cache.set_data(key, rows)
    service = StubReservations(fail_ids={"r2"})
    mutations = EquipmentReservationMutations(service, cache)

    await mutations.approve("r1", "ok")
    updated = cache.get_data(key)
    assert updated[0].status == "APPROVED"
    assert updated[0].approvals[-1].signed_by_user.public_id == "me"
    assert mutations.event_id_for("r1") == "event-1"

    with pytest.raises(ApiError):
        await mutations.approve("r2")
    assert cache.get_data(key)[1].status == "PENDING"


@pytest.mark.asyncio
async def test_review_on_cold_cache_fetches_reservation_to_refresh_its_event(cache):
    cache.set_data(EventKeys.detail("event-9"), make_event(public_id="event-9"))
    service = StubReservations()
    mutations = EquipmentReservationMutations(service, cache)

    await mutations.reject("rX", "Broken lens")

    assert service.calls == [("get", "rX"), ("reject", "rX", "Broken lens")]
    assert cache.is_stale(EventKeys.detail("event-9"), 60)


@pytest.mark.asyncio
async def test_review_skips_fetch_when_reservation_is_cached(cache):
    cache.set_data(EquipmentReservationKeys.detail("r1"), make_reservation(public_id="r1"))
    service = StubReservations()

    await EquipmentReservationMutations(service, cache).approve("r1")

    assert service.calls == [("approve", "r1", "")]
