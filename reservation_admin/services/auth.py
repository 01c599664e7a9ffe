"""Session and account endpoints under ``/auth``."""

from __future__ import annotations

from typing import Any

import structlog

from reservation_admin.dto import UserDTO
from reservation_admin.schemas import EmailForm, LoginForm, OtpForm, RegisterForm, ResetPasswordForm

from .http_client import ApiClient

logger = structlog.get_logger(__name__)


class AuthService:
    def __init__(self, api: ApiClient) -> None:
        self._api = api

    async def login(self, form: LoginForm) -> Any:
        """Open a session; the backend sets the session cookie on ``api``."""
        data = await self._api.post("/auth/login", json=form.to_payload(), empty="")
        logger.info("login_succeeded", email=str(form.email))
        return data

    async def logout(self) -> None:
        await self._api.post("/auth/logout", empty="")

    async def register(self, form: RegisterForm) -> Any:
        return await self._api.post("/auth/register", json=form.to_payload(), empty="")

    async def current_user(self) -> UserDTO:
        data = await self._api.get("/auth/me")
        return UserDTO.model_validate(data)

    async def verify_email(self, email: str, form: OtpForm) -> Any:
        return await self._api.post(
            "/auth/verify-email", json={"email": email, "code": form.code}, empty=""
        )

    async def resend_verification(self, form: EmailForm) -> Any:
        return await self._api.post(
            "/auth/resend-verification", json={"email": str(form.email)}, empty=""
        )

    async def forgot_password(self, form: EmailForm) -> Any:
        return await self._api.post(
            "/auth/forgot-password", json={"email": str(form.email)}, empty=""
        )

    async def reset_password(self, token: str, form: ResetPasswordForm) -> Any:
        return await self._api.post(
            "/auth/reset-password",
            json={"token": token, "newPassword": form.password},
            empty="",
        )
