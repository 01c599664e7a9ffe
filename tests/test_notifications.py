from __future__ import annotations

import httpx
import pytest

from reservation_admin.dto import NotificationDTO
from reservation_admin.services import NotificationService, notification_title, poll_unread_count
from tests.factories import mock_client


def notification(**fields) -> NotificationDTO:
    return NotificationDTO.model_validate({"id": 1, **fields})


@pytest.mark.parametrize(
    ("fields", "title"),
    [
        ({"message": {"eventName": "Robotics Expo", "type": "EVENT_APPROVED"}}, "Event: Robotics Expo"),
        ({"message": {"type": "EQUIPMENT_RESERVATION_APPROVED"}}, "EQUIPMENT RESERVATION APPROVED"),
        ({"message": {"type": "new_request"}}, "New Request"),
        ({"relatedEntityType": "venue_reservation"}, "Venue Reservation"),
        ({}, "Notification Update"),
        ({"message": None}, "Notification Update"),
    ],
)
def test_notification_title_fallbacks(fields, title):
    assert notification_title(notification(**fields)) == title


@pytest.mark.asyncio
async def test_notification_page_and_mark_all_read(api, backend_state):
    backend_state.notifications.extend(
        {"id": i, "isRead": i == 1, "message": {"message": f"note {i}"}} for i in range(1, 13)
    )
    service = NotificationService(api)

    page = await service.list_notifications(page=1, size=10)
    assert [n.id for n in page.content] == [11, 12]
    assert (page.total_pages, page.total_elements, page.number) == (2, 12, 1)

    assert await service.unread_count() == 11
    await service.mark_all_read()
    assert await service.unread_count() == 0


@pytest.mark.asyncio
async def test_unread_count_accepts_bare_integer():
    async with mock_client(lambda request: httpx.Response(200, json={"data": 4})) as api:
        assert await NotificationService(api).unread_count() == 4


@pytest.mark.asyncio
async def test_poll_unread_count_sleeps_between_polls():
    counts = iter([3, 2, 0])
    sleeps: list[float] = []

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"unreadCount": next(counts)})

    async def fake_sleep(seconds: float) -> None:
        sleeps.append(seconds)

    async with mock_client(handler) as api:
        seen = [c async for c in poll_unread_count(NotificationService(api), 30, limit=3, sleep=fake_sleep)]

    assert seen == [3, 2, 0]
    assert sleeps == [30, 30]


@pytest.mark.asyncio
async def test_page_with_null_message_still_parses(api, backend_state):
    backend_state.notifications.extend(
        [{"id": 1, "message": None}, {"id": 2, "message": {"eventName": "Robotics Expo"}}]
    )

    page = await NotificationService(api).list_notifications(page=0, size=10)

    assert [notification_title(n) for n in page.content] == ["Notification Update", "Event: Robotics Expo"]
    assert page.content[0].message.message is None
