"""Approval queues for events and equipment reservations.

A row is eligible for a bulk action when it is still ``PENDING`` and the
current user has not signed an approval on it yet. Both the event and the
equipment reservation queues use the same ``is_eligible`` predicate.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Iterable, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Protocol

import structlog

from reservation_admin.core.exceptions import ValidationError
from reservation_admin.dto import EventApprovalDTO, EventDTO, Status, UserRole

from .events import REJECTION_REASON_REQUIRED

logger = structlog.get_logger(__name__)

ItemAction = Callable[[str, str], Awaitable[Any]]


class ApprovableRow(Protocol):
    public_id: str
    status: str
    approvals: list[Any] | None


def is_eligible(row: ApprovableRow, current_user_id: str | None) -> bool:
    if row.status != Status.PENDING.value or not row.public_id:
        return False
    if current_user_id is None:
        return True
    return not any(
        approval.signed_by_user.public_id == current_user_id for approval in (row.approvals or [])
    )


class ApprovalType(str, Enum):
    VENUE_OWNER = "VENUE_OWNER"
    DEPT_HEAD = "DEPT_HEAD"
    ADMIN = "ADMIN"


def resolve_approval_type(roles: Iterable[str]) -> ApprovalType | None:
    """Pick the approver perspective for a user; venue owner wins over department head."""
    roles = set(roles)
    if UserRole.VENUE_OWNER.value in roles:
        return ApprovalType.VENUE_OWNER
    if UserRole.DEPT_HEAD.value in roles:
        return ApprovalType.DEPT_HEAD
    if roles & {UserRole.ADMIN.value, UserRole.SUPER_ADMIN.value}:
        return ApprovalType.ADMIN
    return None


def is_approver(approval_type: ApprovalType, event: EventDTO, current_user_id: str | None) -> bool:
    if approval_type is ApprovalType.ADMIN:
        return True
    if not current_user_id:
        return False
    if approval_type is ApprovalType.VENUE_OWNER:
        owner = event.event_venue.venue_owner if event.event_venue else None
        return owner is not None and owner.public_id == current_user_id
    head = event.department.dept_head if event.department else None
    return head is not None and head.public_id == current_user_id


_SIGNING_ROLES = {
    ApprovalType.VENUE_OWNER: {UserRole.VENUE_OWNER.value},
    ApprovalType.DEPT_HEAD: {UserRole.DEPT_HEAD.value},
    ApprovalType.ADMIN: {UserRole.ADMIN.value, UserRole.SUPER_ADMIN.value},
}


def find_user_approval(
    approval_type: ApprovalType, event: EventDTO, current_user_id: str | None
) -> EventApprovalDTO | None:
    """The approval the current user signed on ``event`` in the given capacity."""
    if not current_user_id or not event.approvals:
        return None
    roles = _SIGNING_ROLES[approval_type]
    for approval in event.approvals:
        signer = approval.signed_by_user
        if signer.public_id == current_user_id and roles & set(signer.roles):
            return approval
    return None


def filter_events(events: Iterable[EventDTO], query: str | None) -> list[EventDTO]:
    """Case-insensitive match on event name, type, venue name and department name."""
    events = list(events)
    if not query:
        return events
    needle = query.lower()

    def hit(event: EventDTO) -> bool:
        fields = [
            event.event_name,
            event.event_type,
            event.event_venue.name if event.event_venue else None,
            event.department.name if event.department else None,
        ]
        return any(value and needle in value.lower() for value in fields)

    return [event for event in events if hit(event)]


@dataclass(frozen=True)
class ActionLabels:
    approve: str = "Approve"
    reject: str = "Reject"
    approved: str = "approved"
    rejected: str = "rejected"
    approve_verb: str = "approve"
    reject_verb: str = "reject"


DEFAULT_LABELS = ActionLabels()

ACCOUNTING_LABELS = ActionLabels(
    approve="Paid",
    reject="Unpaid",
    approved="marked as paid",
    rejected="marked as unpaid",
    approve_verb="mark as paid",
    reject_verb="mark as unpaid",
)

VPAA_ADMIN_LABELS = ActionLabels(
    approve="Recommend",
    reject="Not Recommended",
    approved="recommended",
    rejected="marked Not Recommended",
    approve_verb="recommend",
    reject_verb="mark Not Recommended",
)


def action_labels(roles: Iterable[str]) -> ActionLabels:
    """Accounting marks events paid/unpaid; a VPAA who is also an admin recommends them."""
    roles = set(roles)
    if UserRole.ACCOUNTING.value in roles:
        return ACCOUNTING_LABELS
    if {UserRole.VPAA.value, UserRole.ADMIN.value} <= roles:
        return VPAA_ADMIN_LABELS
    return DEFAULT_LABELS


@dataclass
class ItemOutcome:
    public_id: str
    ok: bool
    error: str | None = None


@dataclass
class BulkActionResult:
    action: str
    outcomes: list[ItemOutcome] = field(default_factory=list)
    message: str = ""

    @property
    def succeeded(self) -> list[str]:
        return [o.public_id for o in self.outcomes if o.ok]

    @property
    def failed(self) -> list[str]:
        return [o.public_id for o in self.outcomes if not o.ok]

    @property
    def ok(self) -> bool:
        return bool(self.outcomes) and not self.failed


class ApprovalQueue:
    """Selection and bulk approve/reject over a list of approvable rows.

    ``noun`` is the singular used in messages ("reservation", "event").
    ``subject`` prefixes the action in the "nothing eligible" message, so
    the event queue reports "... selected for event approval.".
    ``approver_filter`` further restricts eligibility, e.g. to events the
    user approves as venue owner.
    """

    def __init__(
        self,
        rows: Sequence[ApprovableRow],
        current_user_id: str | None,
        noun: str = "reservation",
        *,
        subject: str | None = None,
        labels: ActionLabels = DEFAULT_LABELS,
        approver_filter: Callable[[Any], bool] | None = None,
    ) -> None:
        self.rows = list(rows)
        self.current_user_id = current_user_id
        self.noun = noun
        self.subject = subject
        self.labels = labels
        self.approver_filter = approver_filter
        self._selected: set[str] = set()

    @property
    def selected_ids(self) -> list[str]:
        return [row.public_id for row in self.rows if row.public_id in self._selected]

    def select(self, *ids: str) -> None:
        known = {row.public_id for row in self.rows}
        self._selected.update(i for i in ids if i in known)

    def deselect(self, *ids: str) -> None:
        self._selected.difference_update(ids)

    def toggle(self, public_id: str) -> None:
        if public_id in self._selected:
            self._selected.discard(public_id)
        else:
            self.select(public_id)

    def select_all(self) -> None:
        self._selected = {row.public_id for row in self.rows}

    def clear_selection(self) -> None:
        self._selected.clear()

    def is_eligible(self, row: ApprovableRow) -> bool:
        if not is_eligible(row, self.current_user_id):
            return False
        return self.approver_filter is None or self.approver_filter(row)

    @property
    def eligible_rows(self) -> list[ApprovableRow]:
        return [row for row in self.rows if self.is_eligible(row)]

    @property
    def eligible_selected_ids(self) -> list[str]:
        return [
            row.public_id for row in self.rows if row.public_id in self._selected and self.is_eligible(row)
        ]

    def _nothing_eligible(self, action: str) -> str:
        word = "approval" if action == "approve" else "rejection"
        target = f"{self.subject} {word}" if self.subject else word
        return f"No eligible {self.noun}s selected for {target}."

    async def _run(self, action: str, call: ItemAction, remarks: str) -> BulkActionResult:
        ids = self.eligible_selected_ids
        result = BulkActionResult(action=action)
        if not ids:
            result.message = self._nothing_eligible(action)
            logger.info("bulk_action", action=action, noun=self.noun, eligible=0)
            return result

        outcomes = await asyncio.gather(*(call(i, remarks) for i in ids), return_exceptions=True)
        first_error: str | None = None
        for public_id, outcome in zip(ids, outcomes, strict=True):
            if isinstance(outcome, BaseException):
                error = str(outcome) or "Unknown error"
                first_error = first_error or error
                result.outcomes.append(ItemOutcome(public_id, ok=False, error=error))
            else:
                result.outcomes.append(ItemOutcome(public_id, ok=True))

        if first_error is None:
            done = self.labels.approved if action == "approve" else self.labels.rejected
            result.message = f"{len(ids)} {self.noun}(s) {done}."
            self.clear_selection()
        else:
            verb = self.labels.approve_verb if action == "approve" else self.labels.reject_verb
            result.message = f"Failed to {verb} some {self.noun}s: {first_error}"
        logger.info(
            "bulk_action",
            action=action,
            noun=self.noun,
            eligible=len(ids),
            succeeded=len(result.succeeded),
            failed=len(result.failed),
        )
        return result

    async def approve_selected(self, approve: ItemAction, remarks: str = "") -> BulkActionResult:
        """Call ``approve(id, remarks)`` once per eligible selected row, all concurrently."""
        return await self._run("approve", approve, remarks)

    async def reject_selected(self, reject: ItemAction, remarks: str) -> BulkActionResult:
        if not remarks or not remarks.strip():
            raise ValidationError(REJECTION_REASON_REQUIRED)
        return await self._run("reject", reject, remarks)


def event_queue(
    events: Sequence[EventDTO], current_user: Any, approval_type: ApprovalType | None = None
) -> ApprovalQueue:
    """Queue over events as seen by ``current_user`` (a ``UserDTO``)."""
    approval_type = approval_type or resolve_approval_type(current_user.roles)
    if approval_type is None:
        raise ValidationError("Current user cannot approve events")
    user_id = current_user.public_id
    return ApprovalQueue(
        [e for e in events if is_approver(approval_type, e, user_id)],
        user_id,
        "event",
        subject="event",
        labels=action_labels(current_user.roles),
        approver_filter=lambda e: is_approver(approval_type, e, user_id),
    )


def reservation_queue(reservations: Sequence[Any], current_user_id: str | None) -> ApprovalQueue:
    return ApprovalQueue(reservations, current_user_id, "reservation")
