from __future__ import annotations

from .base import ApiModel
from .user import UserDTO


class ActivityLogDTO(ApiModel):
    public_id: str
    action: str
    entity_type: str
    entity_id: str | None = None
    user: UserDTO | None = None
    user_email: str | None = None
    details: str | None = None
    ip_address: str | None = None
    created_at: str | None = None
