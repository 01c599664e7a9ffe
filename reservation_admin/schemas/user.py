"""Admin user management forms."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, EmailStr, Field, ValidationInfo, field_validator

from ._validators import (
    LOGIN_PASSWORD,
    check_optional_password,
    check_phone_number,
    fail,
    require_min_length,
    require_text,
)

PASSWORD_PAIR_MESSAGE = "Passwords do not match. Both fields must be filled or both must be empty."

_USER_REQUIRED = {
    "id_number": "ID Number is required",
    "first_name": "First name is required",
    "last_name": "Last name is required",
}


class _UserFormBase(BaseModel):
    id_number: str
    first_name: str
    last_name: str
    email: EmailStr
    password: str = ""
    # validated even when omitted so a lone password is rejected
    confirm_password: str = Field("", validate_default=True)
    roles: list[str]
    department_public_id: str
    telephone_number: str
    phone_number: str | None = ""
    active: bool | None = None
    email_verified: bool | None = None

    @field_validator("id_number", "first_name", "last_name")
    @classmethod
    def _required(cls, v: str, info: ValidationInfo) -> str:
        return require_text(v, _USER_REQUIRED[info.field_name])

    @field_validator("email", mode="before")
    @classmethod
    def _email_required(cls, v: Any) -> Any:
        if isinstance(v, str) and not v:
            raise fail("required", "Email is required")
        return v

    @field_validator("password")
    @classmethod
    def _password_rules(cls, v: str) -> str:
        return check_optional_password(v, LOGIN_PASSWORD)

    @field_validator("confirm_password")
    @classmethod
    def _password_pair(cls, v: str, info: ValidationInfo) -> str:
        if "password" not in info.data:
            return v
        password = info.data["password"]
        if password and password != v:
            raise fail("password_mismatch", PASSWORD_PAIR_MESSAGE)
        if not password and v:
            raise fail("password_mismatch", PASSWORD_PAIR_MESSAGE)
        return v

    @field_validator("roles")
    @classmethod
    def _roles_required(cls, v: list[str]) -> list[str]:
        if not v:
            raise fail("required", "Role is required")
        return v

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "idNumber": self.id_number,
            "firstName": self.first_name,
            "lastName": self.last_name,
            "email": str(self.email),
            "roles": list(self.roles),
            "departmentPublicId": self.department_public_id or None,
            "telephoneNumber": self.telephone_number,
            "phoneNumber": self.phone_number or None,
            "active": self.active,
            "emailVerified": self.email_verified,
        }
        if self.password:
            payload["password"] = self.password
        return {k: v for k, v in payload.items() if v is not None}


class UserForm(_UserFormBase):
    """Admin "create user" form."""

    active: bool

    @field_validator("telephone_number")
    @classmethod
    def _telephone(cls, v: str) -> str:
        return require_min_length(v, 3, "Telephone Number is required")

    @field_validator("phone_number")
    @classmethod
    def _phone(cls, v: str | None) -> str | None:
        return check_phone_number(v)


class EditUserForm(_UserFormBase):
    """Admin "edit user" form; the phone number is free-form here."""

    @field_validator("telephone_number")
    @classmethod
    def _telephone(cls, v: str) -> str:
        return require_text(v, "Telephone number is required")
