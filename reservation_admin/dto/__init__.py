"""Public DTO exports for the reservation backend's JSON contract."""

from .activity_log import ActivityLogDTO
from .base import ApiModel, Page, PublicRef, parse_list
from .dashboard import (
    CancellationRateDTO,
    EventCountDTO,
    EventTypeStatusDistributionDTO,
    EventTypeSummaryDTO,
    PeakHourDTO,
    RecentActivityItemDTO,
    TopEquipmentDTO,
    TopVenueDTO,
    UserActivityDTO,
    UserReservationActivityDTO,
)
from .enums import (
    PENDING_OPTIMISTIC,
    ActivityLogAction,
    ActivityLogEntityType,
    ApprovalAction,
    EquipmentStatus,
    Status,
    Task,
    UserRole,
)
from .equipment import (
    EquipmentCategoryDTO,
    EquipmentChecklistDTO,
    EquipmentChecklistRequest,
    EquipmentChecklistStatusDTO,
    EquipmentDTO,
)
from .event import EventActionRequest, EventApprovalDTO, EventDTO, EventPersonnelDTO
from .notification import NotificationDTO, NotificationMessage
from .reservation import (
    CreateEquipmentReservationInput,
    EquipmentApprovalDTO,
    EquipmentReservationDTO,
    ReservationBatchRequest,
)
from .user import DepartmentDTO, LoginResponse, UserDTO
from .venue import VenueDTO

__all__ = [
    "PENDING_OPTIMISTIC",
    "ActivityLogAction",
    "ActivityLogDTO",
    "ActivityLogEntityType",
    "ApiModel",
    "ApprovalAction",
    "CancellationRateDTO",
    "CreateEquipmentReservationInput",
    "DepartmentDTO",
    "EquipmentApprovalDTO",
    "EquipmentCategoryDTO",
    "EquipmentChecklistDTO",
    "EquipmentChecklistRequest",
    "EquipmentChecklistStatusDTO",
    "EquipmentDTO",
    "EquipmentReservationDTO",
    "EquipmentStatus",
    "EventActionRequest",
    "EventApprovalDTO",
    "EventCountDTO",
    "EventDTO",
    "EventPersonnelDTO",
    "EventTypeStatusDistributionDTO",
    "EventTypeSummaryDTO",
    "LoginResponse",
    "NotificationDTO",
    "NotificationMessage",
    "Page",
    "PeakHourDTO",
    "PublicRef",
    "RecentActivityItemDTO",
    "ReservationBatchRequest",
    "Status",
    "Task",
    "TopEquipmentDTO",
    "TopVenueDTO",
    "UserActivityDTO",
    "UserDTO",
    "UserReservationActivityDTO",
    "UserRole",
    "VenueDTO",
    "parse_list",
]
