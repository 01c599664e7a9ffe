"""Shared field checks for the form schemas.

Every check raises ``PydanticCustomError`` so that the message shown on the
form field is exactly the message given here (no "Value error, " prefix).
"""

from __future__ import annotations

import re
import uuid
from collections.abc import Sequence
from datetime import datetime

from pydantic import ValidationError
from pydantic_core import PydanticCustomError

from reservation_admin.utils.datetime import as_utc_naive

END_BEFORE_START = "End date/time cannot be before start date/time."

MB = 1024 * 1024

_LOWER = re.compile(r"[a-z]")
_UPPER = re.compile(r"[A-Z]")
_DIGIT = re.compile(r"[0-9]")
_DIGITS_ONLY = re.compile(r"[0-9]+")


def fail(error_type: str, message: str) -> PydanticCustomError:
    return PydanticCustomError(error_type, message)


def require_text(value: str | None, message: str) -> str:
    if value is None or not str(value):
        raise fail("required", message)
    return value


def require_min_length(value: str, minimum: int, message: str) -> str:
    if len(value) < minimum:
        raise fail("too_short", message)
    return value


def require_uuid(value: str, message: str) -> str:
    try:
        uuid.UUID(value)
    except (ValueError, AttributeError, TypeError):
        raise fail("uuid", message) from None
    return value


class PasswordMessages:
    """Message set for one password rule; order of ``rules`` is the reporting order."""

    def __init__(self, too_short: str, lower: str, upper: str, digit: str, *, upper_first: bool = False):
        self.too_short = too_short
        ordered = [(_UPPER, upper), (_LOWER, lower)] if upper_first else [(_LOWER, lower), (_UPPER, upper)]
        self.rules = [*ordered, (_DIGIT, digit)]


ACCOUNT_PASSWORD = PasswordMessages(
    "Your password is too short.",
    "Your password must contain a lowercase letter.",
    "Your password must contain a uppercase letter.",
    "Your password must contain a number.",
)

NEW_PASSWORD = PasswordMessages(
    "Your new password is too short.",
    "Your new password must contain a lowercase letter.",
    "Your new password must contain an uppercase letter.",
    "Your new password must contain a number.",
)

LOGIN_PASSWORD = PasswordMessages(
    "Password must be at least 8 characters",
    "Password must contain at least one lowercase letter",
    "Password must contain at least one uppercase letter",
    "Password must contain at least one number",
    upper_first=True,
)


def check_password(value: str, messages: PasswordMessages = ACCOUNT_PASSWORD) -> str:
    if len(value) < 8:
        raise fail("password_too_short", messages.too_short)
    for pattern, message in messages.rules:
        if not pattern.search(value):
            raise fail("password_strength", message)
    return value


def check_optional_password(value: str | None, messages: PasswordMessages = LOGIN_PASSWORD) -> str:
    if not value:
        return ""
    return check_password(value, messages)


def check_phone_number(value: str | None) -> str | None:
    if value is None or value == "":
        return value
    if len(value) != 11:
        raise fail("phone_length", "Phone Number must be 11 digits")
    if not _DIGITS_ONLY.fullmatch(value):
        raise fail("phone_digits", "Phone Number must be a number")
    return value


def check_end_after_start(
    start: datetime | None, end: datetime | None, *, allow_equal: bool = False
) -> None:
    if start is None or end is None:
        return
    start, end = as_utc_naive(start), as_utc_naive(end)
    if end < start or (end == start and not allow_equal):
        raise fail("end_before_start", END_BEFORE_START)


def check_upload(
    upload,
    *,
    allowed: Sequence[str],
    max_bytes: int,
    type_message: str,
    size_message: str,
):
    if upload.content_type not in allowed:
        raise fail("file_type", type_message)
    if upload.size > max_bytes:
        raise fail("file_size", size_message)
    return upload


def form_errors(exc: ValidationError) -> dict[str, str]:
    """Map a ``ValidationError`` to ``{field: first message}`` like a form renders it."""
    errors: dict[str, str] = {}
    for error in exc.errors():
        loc = error.get("loc") or ("__root__",)
        field = str(loc[0])
        errors.setdefault(field, error["msg"])
    return errors
