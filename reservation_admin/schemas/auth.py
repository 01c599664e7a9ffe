"""Login, registration and password-recovery forms."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, EmailStr, ValidationInfo, field_validator

from ._validators import (
    ACCOUNT_PASSWORD,
    LOGIN_PASSWORD,
    NEW_PASSWORD,
    check_password,
    check_phone_number,
    fail,
    require_min_length,
    require_text,
)

__all__ = [
    "AccountInfoForm",
    "EmailForm",
    "LoginForm",
    "OtpForm",
    "PersonalInfoForm",
    "RegisterForm",
    "ResetPasswordForm",
    "SetNewPasswordForm",
]


class LoginForm(BaseModel):
    email: EmailStr
    password: str

    @field_validator("email", mode="before")
    @classmethod
    def _email_required(cls, v: Any) -> Any:
        if isinstance(v, str) and not v:
            raise fail("required", "Email is required")
        return v

    @field_validator("password")
    @classmethod
    def _password_rules(cls, v: str) -> str:
        return check_password(v, LOGIN_PASSWORD)

    def to_payload(self) -> dict[str, Any]:
        return {"email": str(self.email), "password": self.password}


class EmailForm(BaseModel):
    email: EmailStr

    @field_validator("email", mode="before")
    @classmethod
    def _email_required(cls, v: Any) -> Any:
        if isinstance(v, str) and not v:
            raise fail("required", "Email is required")
        return v


class OtpForm(BaseModel):
    code: str

    @field_validator("code")
    @classmethod
    def _six_chars(cls, v: str) -> str:
        if len(v) != 6:
            raise fail("otp_length", "Your verification code must be 6 characters.")
        return v


_PERSONAL_REQUIRED = {
    "id_number": "ID Number is required",
    "first_name": "First name is required",
    "last_name": "Last name is required",
    "department_public_id": "Department is required",
}


class PersonalInfoForm(BaseModel):
    id_number: str
    first_name: str
    last_name: str
    department_public_id: str

    @field_validator("id_number", "first_name", "last_name", "department_public_id")
    @classmethod
    def _required(cls, v: str, info: ValidationInfo) -> str:
        return require_text(v, _PERSONAL_REQUIRED[info.field_name])


class AccountInfoForm(BaseModel):
    email: EmailStr
    telephone_number: str
    phone_number: str | None = None
    password: str
    confirm_password: str

    @field_validator("email", mode="before")
    @classmethod
    def _email_required(cls, v: Any) -> Any:
        if isinstance(v, str) and not v:
            raise fail("required", "Email is required")
        return v

    @field_validator("telephone_number")
    @classmethod
    def _telephone(cls, v: str) -> str:
        return require_min_length(v, 3, "Telephone Number is required")

    @field_validator("phone_number")
    @classmethod
    def _phone(cls, v: str | None) -> str | None:
        return check_phone_number(v)

    @field_validator("password")
    @classmethod
    def _password_rules(cls, v: str) -> str:
        return check_password(v, ACCOUNT_PASSWORD)

    @field_validator("confirm_password")
    @classmethod
    def _passwords_match(cls, v: str, info: ValidationInfo) -> str:
        password = info.data.get("password")
        if password is not None and v != password:
            raise fail("password_mismatch", "Passwords do not match.")
        return v


class RegisterForm(BaseModel):
    """The two registration steps submitted together."""

    personal: PersonalInfoForm
    account: AccountInfoForm

    def to_payload(self) -> dict[str, Any]:
        return {
            "idNumber": self.personal.id_number,
            "firstName": self.personal.first_name,
            "lastName": self.personal.last_name,
            "departmentPublicId": self.personal.department_public_id,
            "email": str(self.account.email),
            "telephoneNumber": self.account.telephone_number,
            "phoneNumber": self.account.phone_number or None,
            "password": self.account.password,
        }


class ResetPasswordForm(BaseModel):
    password: str
    confirm_password: str

    @field_validator("password")
    @classmethod
    def _password_rules(cls, v: str) -> str:
        return check_password(v, ACCOUNT_PASSWORD)

    @field_validator("confirm_password")
    @classmethod
    def _passwords_match(cls, v: str, info: ValidationInfo) -> str:
        password = info.data.get("password")
        if password is not None and v != password:
            raise fail("password_mismatch", "Passwords do not match.")
        return v


class SetNewPasswordForm(BaseModel):
    current_password: str | None = None
    new_password: str
    confirm_password: str

    @field_validator("new_password")
    @classmethod
    def _password_rules(cls, v: str) -> str:
        return check_password(v, NEW_PASSWORD)

    @field_validator("confirm_password")
    @classmethod
    def _passwords_match(cls, v: str, info: ValidationInfo) -> str:
        password = info.data.get("new_password")
        if password is not None and v != password:
            raise fail("password_mismatch", "New passwords do not match.")
        return v

    def to_payload(self) -> dict[str, Any]:
        payload = {"newPassword": self.new_password}
        if self.current_password:
            payload["currentPassword"] = self.current_password
        return payload
