from __future__ import annotations

from enum import Enum


class Status(str, Enum):
    APPROVED = "APPROVED"
    PENDING = "PENDING"
    CANCELED = "CANCELED"
    REJECTED = "REJECTED"
    ONGOING = "ONGOING"
    COMPLETED = "COMPLETED"
    ENDED = "ENDED"
    DEFECT = "DEFECT"
    MAINTENANCE = "MAINTENANCE"
    NEED_REPLACEMENT = "NEED_REPLACEMENT"
    NEW = "NEW"
    AVAILABLE = "AVAILABLE"
    RESERVED = "RESERVED"
    DENIED_RESERVATION = "DENIED_RESERVATION"
    PAID = "PAID"
    UNPAID = "UNPAID"


# status given to rows inserted by an optimistic create before the server answers
PENDING_OPTIMISTIC = "PENDING_OPTIMISTIC"


class UserRole(str, Enum):
    SUPER_ADMIN = "SUPER_ADMIN"
    VP_ADMIN = "VP_ADMIN"
    ADMIN = "ADMIN"
    ORGANIZER = "ORGANIZER"
    DEPT_HEAD = "DEPT_HEAD"
    VENUE_OWNER = "VENUE_OWNER"
    EQUIPMENT_OWNER = "EQUIPMENT_OWNER"
    ACCOUNTING = "ACCOUNTING"
    VPAA = "VPAA"
    ASSIGNED_PERSONNEL = "ASSIGNED_PERSONNEL"


class EquipmentStatus(str, Enum):
    NEW = "NEW"
    DEFECT = "DEFECT"
    MAINTENANCE = "MAINTENANCE"
    NEED_REPLACEMENT = "NEED_REPLACEMENT"


class Task(str, Enum):
    SETUP = "SETUP"
    PULLOUT = "PULLOUT"


class ActivityLogAction(str, Enum):
    USER_REGISTERED = "USER_REGISTERED"
    USER_CREATED_BY_ADMIN = "USER_CREATED_BY_ADMIN"
    USER_UPDATED_BY_ADMIN = "USER_UPDATED_BY_ADMIN"
    USER_ACTIVATED = "USER_ACTIVATED"
    USER_DEACTIVATED = "USER_DEACTIVATED"
    EVENT_CREATED = "EVENT_CREATED"
    EVENT_UPDATED = "EVENT_UPDATED"
    EVENT_DELETED = "EVENT_DELETED"
    EVENT_CANCELED = "EVENT_CANCELED"
    EVENT_APPROVAL_APPROVED = "EVENT_APPROVAL_APPROVED"
    EVENT_APPROVAL_REJECTED = "EVENT_APPROVAL_REJECTED"
    VENUE_CREATED = "VENUE_CREATED"
    VENUE_UPDATED = "VENUE_UPDATED"
    VENUE_DELETED = "VENUE_DELETED"
    DEPARTMENT_CREATED = "DEPARTMENT_CREATED"
    DEPARTMENT_UPDATED = "DEPARTMENT_UPDATED"
    DEPARTMENT_DELETED = "DEPARTMENT_DELETED"
    DEPARTMENT_HEAD_ASSIGNED = "DEPARTMENT_HEAD_ASSIGNED"
    EQUIPMENT_CREATED = "EQUIPMENT_CREATED"
    EQUIPMENT_UPDATED = "EQUIPMENT_UPDATED"
    EQUIPMENT_RESERVATION_APPROVED = "EQUIPMENT_RESERVATION_APPROVED"
    EQUIPMENT_RESERVATION_REJECTED = "EQUIPMENT_RESERVATION_REJECTED"


class ActivityLogEntityType(str, Enum):
    USER = "USER"
    EVENT = "EVENT"
    VENUE = "VENUE"
    EQUIPMENT = "EQUIPMENT"
    DEPARTMENT = "DEPARTMENT"
    EVENT_APPROVAL = "EVENT_APPROVAL"
    EQUIPMENT_RESERVATION = "EQUIPMENT_RESERVATION"


class ApprovalAction(str, Enum):
    APPROVE = "APPROVE"
    REJECT = "REJECT"
