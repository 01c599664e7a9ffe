"""Shared HTTP client for the reservation backend.

All endpoints are relative to ``settings.api_base_url``. Session cookies set by
``/auth/login`` live on the underlying ``httpx.AsyncClient`` and are sent with
every subsequent call made through the same ``ApiClient``.
"""

from __future__ import annotations

import json
import time
import uuid
from collections.abc import Iterable, Mapping
from typing import Any

import httpx
import structlog

from reservation_admin.core.config import settings
from reservation_admin.core.exceptions import ApiError, InfrastructureError

logger = structlog.get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
JSON_CONTENT_TYPE = "application/json"

# (field name, (filename, content, content type))
FilePart = tuple[str, tuple[str, bytes, str]]


def unwrap_envelope(value: Any) -> Any:
    """Return ``value["data"]`` for ``{"data": ...}`` envelopes, else ``value`` unchanged."""
    if isinstance(value, dict) and "data" in value:
        return value["data"]
    return value


def _message_from_payload(payload: Any) -> str | None:
    if not isinstance(payload, dict):
        return None
    error = payload.get("error")
    if isinstance(error, dict):
        nested = error.get("message")
        if isinstance(nested, str) and nested:
            return nested
    if isinstance(error, str) and error:
        return error
    message = payload.get("message")
    if isinstance(message, str) and message:
        return message
    detail = payload.get("detail")
    if isinstance(detail, str) and detail:
        return detail
    return None


def _loads_or_none(text: str) -> Any:
    try:
        return json.loads(text)
    except ValueError:
        return None


def extract_error_message(text: str, status: int) -> str:
    """Best-effort message extraction from an error response body.

    Tries ``{error: {message}}``, ``{error: str}``, ``{message: str}`` and
    ``{detail: str}``. When the message found is itself a JSON document the
    same strategies are applied to it once more.
    """
    fallback = f"Error! Status: {status}"
    if not text or not text.strip():
        return fallback
    payload = _loads_or_none(text)
    if payload is None:
        return text
    message = _message_from_payload(payload)
    if message is None:
        return text
    inner = _message_from_payload(_loads_or_none(message))
    return inner or message


def multipart_parts(
    part_name: str,
    payload: Mapping[str, Any],
    files: Iterable[tuple[str, Any]] = (),
) -> list[FilePart]:
    """Build multipart parts: one JSON part plus one binary part per upload.

    ``files`` yields ``(field name, upload)`` pairs; uploads set to ``None``
    are skipped. Uploads expose ``filename``, ``content_type`` and ``content``.
    """
    parts: list[FilePart] = [
        (
            part_name,
            ("blob", json.dumps(payload, ensure_ascii=False).encode("utf-8"), JSON_CONTENT_TYPE),
        )
    ]
    for field_name, upload in files:
        if upload is None:
            continue
        parts.append((field_name, (upload.filename, upload.content, upload.content_type)))
    return parts


def decode_response(response: httpx.Response, empty: Any = None) -> Any:
    if response.status_code == 204 or not response.content:
        return empty
    try:
        payload = response.json()
    except ValueError:
        return response.text
    return unwrap_envelope(payload)


class ApiClient:
    """Thin async wrapper over ``httpx.AsyncClient`` with error normalisation."""

    def __init__(
        self,
        base_url: str | None = None,
        *,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> None:
        client_kwargs: dict[str, Any] = {
            "base_url": base_url or settings.api_base_url,
            "headers": {"Accept": JSON_CONTENT_TYPE, **dict(headers or {})},
        }
        timeout = timeout if timeout is not None else settings.request_timeout
        if timeout is not None:
            client_kwargs["timeout"] = timeout
        if transport is not None:
            client_kwargs["transport"] = transport
        self._client = httpx.AsyncClient(**client_kwargs)

    @property
    def cookies(self) -> httpx.Cookies:
        return self._client.cookies

    async def __aenter__(self) -> ApiClient:
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, Any] | None = None,
        json: Any = None,
        files: list[FilePart] | None = None,
        empty: Any = None,
    ) -> Any:
        request_id = str(uuid.uuid4())
        query = {k: v for k, v in (params or {}).items() if v is not None}
        kwargs: dict[str, Any] = {
            "params": query or None,
            "headers": {REQUEST_ID_HEADER: request_id},
        }
        if files is not None:
            kwargs["files"] = files
        elif json is not None:
            kwargs["json"] = json

        structlog.contextvars.bind_contextvars(request_id=request_id)
        start_ns = time.perf_counter_ns()
        try:
            try:
                response = await self._client.request(method, path, **kwargs)
            except httpx.HTTPError as exc:
                logger.error("api_unreachable", method=method, path=path, error=str(exc))
                raise InfrastructureError(f"Request to {path} failed: {exc}") from exc

            duration_ms = round((time.perf_counter_ns() - start_ns) / 1_000_000.0, 3)
            logger.info(
                "api_request",
                method=method,
                path=path,
                status=response.status_code,
                duration_ms=duration_ms,
            )
            if not response.is_success:
                message = extract_error_message(response.text, response.status_code)
                logger.warning(
                    "api_error", method=method, path=path, status=response.status_code, message=message
                )
                raise ApiError(message, response.status_code)
            return decode_response(response, empty)
        finally:
            structlog.contextvars.unbind_contextvars("request_id")

    async def get(self, path: str, **kwargs: Any) -> Any:
        return await self.request("GET", path, **kwargs)

    async def post(self, path: str, **kwargs: Any) -> Any:
        return await self.request("POST", path, **kwargs)

    async def put(self, path: str, **kwargs: Any) -> Any:
        return await self.request("PUT", path, **kwargs)

    async def patch(self, path: str, **kwargs: Any) -> Any:
        return await self.request("PATCH", path, **kwargs)

    async def delete(self, path: str, **kwargs: Any) -> Any:
        return await self.request("DELETE", path, **kwargs)
