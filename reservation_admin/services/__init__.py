"""Backend services, the client-side query cache and the approval workflows."""

from .activity_logs import ActivityLogService
from .approval_queue import (
    ActionLabels,
    ApprovalQueue,
    ApprovalType,
    BulkActionResult,
    ItemOutcome,
    action_labels,
    event_queue,
    filter_events,
    find_user_approval,
    is_approver,
    is_eligible,
    reservation_queue,
    resolve_approval_type,
)
from .auth import AuthService
from .dashboard import DashboardService
from .departments import DepartmentService
from .equipment import EquipmentService
from .equipment_reservations import EquipmentChecklistService, EquipmentReservationService
from .events import EventService, PersonnelService
from .http_client import ApiClient, extract_error_message, multipart_parts, unwrap_envelope
from .mutations import EquipmentReservationMutations, EventMutations, optimistic_update
from .notifications import NotificationService, notification_title, poll_unread_count
from .query_cache import QueryCache
from .users import UserService
from .venues import VenueService

__all__ = [
    "ActionLabels",
    "ActivityLogService",
    "ApiClient",
    "ApprovalQueue",
    "ApprovalType",
    "AuthService",
    "BulkActionResult",
    "DashboardService",
    "DepartmentService",
    "EquipmentChecklistService",
    "EquipmentReservationMutations",
    "EquipmentReservationService",
    "EquipmentService",
    "EventMutations",
    "EventService",
    "ItemOutcome",
    "NotificationService",
    "PersonnelService",
    "QueryCache",
    "UserService",
    "VenueService",
    "action_labels",
    "event_queue",
    "extract_error_message",
    "filter_events",
    "find_user_approval",
    "is_approver",
    "is_eligible",
    "multipart_parts",
    "notification_title",
    "optimistic_update",
    "poll_unread_count",
    "reservation_queue",
    "resolve_approval_type",
    "unwrap_envelope",
]
