# tests/conftest.py
from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

import httpx
import pytest
import pytest_asyncio
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse, Response

from reservation_admin.context import AdminContext
from reservation_admin.core.config import Settings
from reservation_admin.services import ApiClient
from tests.factories import BASE_URL, event_payload, user_payload

SESSION_COOKIE = "SESSION"


@dataclass
class BackendState:
    """In-memory state of the fake reservation backend plus a log of calls."""

    user: dict[str, Any] = field(
        default_factory=lambda: user_payload(public_id="owner-1", roles=["EQUIPMENT_OWNER", "VENUE_OWNER"])
    )
    events: list[dict[str, Any]] = field(default_factory=list)
    reservations: list[dict[str, Any]] = field(default_factory=list)
    notifications: list[dict[str, Any]] = field(default_factory=list)
    failing_ids: set[str] = field(default_factory=set)
    calls: list[tuple[str, str, Any]] = field(default_factory=list)

    def record(self, method: str, path: str, body: Any = None) -> None:
        self.calls.append((method, path, body))

    def paths(self, method: str | None = None) -> list[str]:
        return [p for m, p, _ in self.calls if method is None or m == method]


def create_backend(state: BackendState) -> FastAPI:
    app = FastAPI()

    def authorized(request: Request) -> bool:
        return request.cookies.get(SESSION_COOKIE) == "abc"

    def unauthorized() -> JSONResponse:
        return JSONResponse({"error": {"message": "Authentication required"}}, status_code=401)

    @app.post("/auth/login")
    async def login(request: Request):
        body = await request.json()
        state.record("POST", "/auth/login", body)
        if body.get("password") != "Secret123":
            return JSONResponse({"message": "Invalid email or password"}, status_code=401)
        response = PlainTextResponse("Login successful")
        response.set_cookie(SESSION_COOKIE, "abc")
        return response

    @app.get("/auth/me")
    async def me(request: Request):
        state.record("GET", "/auth/me")
        if not authorized(request):
            return unauthorized()
        return {"data": state.user}

    @app.get("/events")
    async def search_events(request: Request):
        state.record("GET", "/events", dict(request.query_params))
        if not authorized(request):
            return unauthorized()
        return state.events

    @app.post("/events")
    async def create_event(request: Request):
        form = await request.form()
        event = json.loads(await form["event"].read())
        letter = form["approvedLetter"]
        state.record(
            "POST",
            "/events",
            {"event": event, "letter": letter.filename, "image": "eventImage" in form},
        )
        created = event_payload(name=event["eventName"])
        state.events.append(created)
        return {"data": created}

    @app.post("/events/{event_id}/{verb}")
    async def review_event(event_id: str, verb: str, request: Request):
        body = await request.json()
        state.record("POST", f"/events/{event_id}/{verb}", body)
        if event_id in state.failing_ids:
            return JSONResponse({"error": f"Event {event_id} already processed"}, status_code=409)
        return PlainTextResponse(f"Event {verb}d")

    @app.post("/event-approval/action")
    async def event_action(request: Request):
        body = await request.json()
        state.record("POST", "/event-approval/action", body)
        return Response(status_code=204)

    @app.get("/equipment-reservations/owner")
    async def owner_reservations(request: Request):
        state.record("GET", "/equipment-reservations/owner")
        if not state.reservations:
            return Response(status_code=204)
        return {"data": state.reservations}

    @app.post("/equipment-reservations/{verb}")
    async def batch_reservations(verb: str, request: Request):
        body = await request.json()
        state.record("POST", f"/equipment-reservations/{verb}", body)
        return Response(status_code=204)

    @app.post("/equipment-reservations/{reservation_id}/{verb}")
    async def review_reservation(reservation_id: str, verb: str, request: Request):
        body = await request.json()
        state.record("POST", f"/equipment-reservations/{reservation_id}/{verb}", body)
        if reservation_id in state.failing_ids:
            payload = {"message": json.dumps({"error": {"message": "Insufficient stock"}})}
            return JSONResponse(payload, status_code=409)
        return PlainTextResponse(f"Reservation {verb}d")

    @app.get("/notifications")
    async def notifications(page: int = 0, size: int = 10):
        state.record("GET", "/notifications", {"page": page, "size": size})
        content = state.notifications[page * size : (page + 1) * size]
        total = len(state.notifications)
        return {
            "content": content,
            "totalPages": (total + size - 1) // size,
            "totalElements": total,
            "number": page,
            "size": size,
        }

    @app.get("/notifications/unread-count")
    async def unread_count():
        state.record("GET", "/notifications/unread-count")
        return {"unreadCount": sum(1 for n in state.notifications if not n.get("isRead"))}

    @app.post("/notifications/mark-all-read")
    async def mark_all_read():
        state.record("POST", "/notifications/mark-all-read")
        for item in state.notifications:
            item["isRead"] = True
        return Response(status_code=204)

    return app


@pytest.fixture
def backend_state() -> BackendState:
    return BackendState()


@pytest.fixture
def backend_transport(backend_state: BackendState) -> httpx.ASGITransport:
    return httpx.ASGITransport(app=create_backend(backend_state))


@pytest_asyncio.fixture
async def api(backend_transport):
    async with ApiClient(BASE_URL, transport=backend_transport) as client:
        yield client


@pytest.fixture
def settings_for_backend() -> Settings:
    return Settings(api_base_url=BASE_URL, email="owner@example.edu", password="Secret123")


@pytest_asyncio.fixture
async def admin(settings_for_backend, backend_transport):
    ctx = await AdminContext.open(settings_for_backend, transport=backend_transport)
    async with ctx:
        yield ctx
