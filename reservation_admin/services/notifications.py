"""Notification endpoints plus title rendering and unread-count polling.

Notifications are delivered by polling; there is no push channel.
"""

from __future__ import annotations

import asyncio
import re
from collections.abc import AsyncIterator, Awaitable, Callable
from typing import Any

import structlog

from reservation_admin.dto import NotificationDTO, Page

from .http_client import ApiClient

logger = structlog.get_logger(__name__)

DEFAULT_TITLE = "Notification Update"

_WORD_START = re.compile(r"\b\w")


def _humanize(value: str) -> str:
    return _WORD_START.sub(lambda m: m.group(0).upper(), value.replace("_", " "))


def notification_title(notification: NotificationDTO) -> str:
    """Event name first, then the message type, then the related entity type."""
    message = notification.message
    if message.event_name:
        return f"Event: {message.event_name}"
    if message.type:
        return _humanize(message.type)
    if notification.related_entity_type:
        return _humanize(notification.related_entity_type)
    return DEFAULT_TITLE


def _as_count(data: Any) -> int:
    if isinstance(data, dict):
        data = data.get("unreadCount", data.get("count", 0))
    return int(data or 0)


class NotificationService:
    def __init__(self, api: ApiClient) -> None:
        self._api = api

    async def list_notifications(self, page: int = 0, size: int = 10) -> Page[NotificationDTO]:
        data = await self._api.get("/notifications", params={"page": page, "size": size})
        if not data:
            return Page[NotificationDTO](size=size, number=page)
        return Page[NotificationDTO].model_validate(data)

    async def unread_count(self) -> int:
        return _as_count(await self._api.get("/notifications/unread-count", empty=0))

    async def mark_read(self, notification_ids: list[int]) -> None:
        await self._api.post(
            "/notifications/mark-read", json={"notificationIds": list(notification_ids)}, empty=""
        )

    async def mark_all_read(self) -> None:
        await self._api.post("/notifications/mark-all-read", empty="")

    async def delete(self, notification_ids: list[int]) -> None:
        await self._api.request(
            "DELETE", "/notifications", json={"notificationIds": list(notification_ids)}, empty=""
        )


async def poll_unread_count(
    service: NotificationService,
    interval: float = 30.0,
    *,
    limit: int | None = None,
    sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
) -> AsyncIterator[int]:
    """Yield the unread count every ``interval`` seconds, ``limit`` times if given."""
    polls = 0
    while limit is None or polls < limit:
        count = await service.unread_count()
        logger.debug("unread_count_polled", count=count)
        yield count
        polls += 1
        if limit is not None and polls >= limit:
            break
        await sleep(interval)
