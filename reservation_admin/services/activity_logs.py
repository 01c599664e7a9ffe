from __future__ import annotations

from datetime import date

from reservation_admin.dto import ActivityLogDTO, Page
from reservation_admin.utils.datetime import to_api_date

from .http_client import ApiClient


class ActivityLogService:
    def __init__(self, api: ApiClient) -> None:
        self._api = api

    async def list_logs(
        self,
        page: int = 0,
        size: int = 20,
        *,
        action: str | None = None,
        entity_type: str | None = None,
        user_id: str | None = None,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> Page[ActivityLogDTO]:
        params = {
            "page": page,
            "size": size,
            "action": action,
            "entityType": entity_type,
            "userPublicId": user_id,
            "startDate": to_api_date(start_date),
            "endDate": to_api_date(end_date),
        }
        data = await self._api.get("/admin/activity-logs", params=params)
        if not data:
            return Page[ActivityLogDTO](size=size, number=page)
        return Page[ActivityLogDTO].model_validate(data)

    async def get_log(self, log_id: str) -> ActivityLogDTO:
        data = await self._api.get(f"/admin/activity-logs/{log_id}")
        return ActivityLogDTO.model_validate(data)
