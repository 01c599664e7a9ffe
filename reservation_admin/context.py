"""One authenticated admin session: client, cache, services and mutations."""

from __future__ import annotations

import httpx
import structlog

from reservation_admin.core.config import Settings, settings
from reservation_admin.core.exceptions import ValidationError
from reservation_admin.dto import EquipmentReservationDTO, EventDTO, UserDTO
from reservation_admin.schemas import LoginForm
from reservation_admin.services import (
    ActivityLogService,
    ApiClient,
    ApprovalQueue,
    AuthService,
    DashboardService,
    DepartmentService,
    EquipmentChecklistService,
    EquipmentReservationMutations,
    EquipmentReservationService,
    EquipmentService,
    EventMutations,
    EventService,
    NotificationService,
    PersonnelService,
    QueryCache,
    UserService,
    VenueService,
    event_queue,
    reservation_queue,
)
from reservation_admin.services.query_cache import (
    CURRENT_USER_KEY,
    EquipmentReservationKeys,
    EventKeys,
)

logger = structlog.get_logger(__name__)

# search results stay fresh for two minutes
EVENT_SEARCH_STALE_SECONDS = 120.0


class AdminContext:
    def __init__(self, api: ApiClient, cache: QueryCache | None = None) -> None:
        self.api = api
        self.cache = cache or QueryCache()
        self.auth = AuthService(api)
        self.events = EventService(api)
        self.personnel = PersonnelService(api)
        self.reservations = EquipmentReservationService(api)
        self.checklists = EquipmentChecklistService(api)
        self.equipment = EquipmentService(api)
        self.venues = VenueService(api)
        self.departments = DepartmentService(api)
        self.users = UserService(api)
        self.notifications = NotificationService(api)
        self.dashboard = DashboardService(api)
        self.activity_logs = ActivityLogService(api)
        self.event_mutations = EventMutations(self.events, self.cache)
        self.reservation_mutations = EquipmentReservationMutations(self.reservations, self.cache)

    @classmethod
    async def open(
        cls,
        config: Settings = settings,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> AdminContext:
        """Create a context and, when credentials are configured, log in and load the user."""
        api = ApiClient(config.api_base_url, timeout=config.request_timeout, transport=transport)
        ctx = cls(api)
        try:
            if config.email and config.password:
                await ctx.auth.login(LoginForm(email=config.email, password=config.password))
                await ctx.load_current_user()
        except BaseException:
            await api.aclose()
            raise
        return ctx

    async def __aenter__(self) -> AdminContext:
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.api.aclose()

    @property
    def current_user(self) -> UserDTO | None:
        return self.cache.get_data(CURRENT_USER_KEY)

    async def load_current_user(self) -> UserDTO:
        user = await self.cache.fetch(CURRENT_USER_KEY, self.auth.current_user)
        logger.info("session_user", user_id=user.public_id, roles=user.roles)
        return user

    def _require_user(self) -> UserDTO:
        user = self.current_user
        if user is None:
            raise ValidationError("Not signed in")
        return user

    async def related_events(self, status: str | None = None) -> list[EventDTO]:
        key = EventKeys.search(scope="related", status=status or "ALL")
        return await self.cache.fetch_latest(
            EventKeys.lists_related(),
            key,
            lambda: self.events.search_events("related", status),
            stale_time=EVENT_SEARCH_STALE_SECONDS,
        )

    async def event_approval_queue(self) -> ApprovalQueue:
        user = self._require_user()
        return event_queue(await self.related_events(), user)

    async def owner_reservations(self) -> list[EquipmentReservationDTO]:
        return await self.cache.fetch(
            EquipmentReservationKeys.all_equipment_owner(), self.reservations.list_for_owner
        )

    async def reservation_approval_queue(self) -> ApprovalQueue:
        user = self._require_user()
        return reservation_queue(await self.owner_reservations(), user.public_id)
