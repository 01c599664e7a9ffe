"""Event creation/edit forms and the venue reservation forms."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ValidationInfo, field_validator
from pydantic.networks import validate_email
from pydantic_core import PydanticCustomError

from reservation_admin.utils.datetime import to_api_datetime

from ._validators import (
    check_end_after_start,
    check_phone_number,
    check_upload,
    fail,
    require_min_length,
    require_text,
    require_uuid,
)
from .uploads import (
    IMAGE_TYPES,
    JPEG_PNG_TYPES,
    LETTER_TYPES,
    MAX_IMAGE_BYTES,
    MAX_LETTER_BYTES,
    MAX_RESERVATION_LETTER_BYTES,
    UploadFile,
)

LETTER_TYPE_MESSAGE = "Invalid file type. Please select an Image (JPG, PNG, WEBP), PDF, or DOCX file."
LETTER_SIZE_MESSAGE = "File too large (max 5MB)."
IMAGE_TYPE_MESSAGE = "Invalid file type. Please select a JPG, PNG, or WEBP image."
IMAGE_SIZE_MESSAGE = "Image file too large (max 5MB)."


def _check_letter(upload: UploadFile) -> UploadFile:
    return check_upload(
        upload,
        allowed=LETTER_TYPES,
        max_bytes=MAX_LETTER_BYTES,
        type_message=LETTER_TYPE_MESSAGE,
        size_message=LETTER_SIZE_MESSAGE,
    )


def _check_event_image(upload: UploadFile) -> UploadFile:
    return check_upload(
        upload,
        allowed=IMAGE_TYPES,
        max_bytes=MAX_IMAGE_BYTES,
        type_message=IMAGE_TYPE_MESSAGE,
        size_message=IMAGE_SIZE_MESSAGE,
    )


class EventForm(BaseModel):
    event_name: str
    event_type: str
    venue_public_id: str
    department_public_id: str
    start_time: datetime
    end_time: datetime
    approved_letter: UploadFile
    event_image: UploadFile | None = None

    @field_validator("event_name")
    @classmethod
    def _name_required(cls, v: str) -> str:
        return require_text(v, "Event Name is required")

    @field_validator("event_type")
    @classmethod
    def _type_required(cls, v: str) -> str:
        return require_text(v, "Event Type is required")

    @field_validator("venue_public_id")
    @classmethod
    def _venue_uuid(cls, v: str) -> str:
        require_text(v, "Event Venue is required")
        return require_uuid(v, "Event Venue Public ID must be a valid UUID")

    @field_validator("department_public_id")
    @classmethod
    def _department_uuid(cls, v: str) -> str:
        require_text(v, "Department is required")
        return require_uuid(v, "Department Public ID must be a valid UUID")

    @field_validator("end_time")
    @classmethod
    def _end_after_start(cls, v: datetime, info: ValidationInfo) -> datetime:
        check_end_after_start(info.data.get("start_time"), v)
        return v

    @field_validator("approved_letter")
    @classmethod
    def _letter(cls, v: UploadFile) -> UploadFile:
        return _check_letter(v)

    @field_validator("event_image")
    @classmethod
    def _image(cls, v: UploadFile | None) -> UploadFile | None:
        return _check_event_image(v) if v is not None else None

    def to_payload(self) -> dict[str, Any]:
        return {
            "eventName": self.event_name,
            "eventType": self.event_type,
            "venuePublicId": self.venue_public_id,
            "departmentPublicId": self.department_public_id,
            "startTime": to_api_datetime(self.start_time),
            "endTime": to_api_datetime(self.end_time),
        }

    def files(self) -> list[tuple[str, UploadFile | None]]:
        return [("approvedLetter", self.approved_letter), ("eventImage", self.event_image)]


class EditEventForm(BaseModel):
    """Partial update; only the fields that are set are sent."""

    event_name: str | None = None
    event_type: str | None = None
    venue_public_id: str | None = None
    department_public_id: str | None = None
    start_time: datetime | None = None
    end_time: datetime | None = None
    approved_letter: UploadFile | None = None

    @field_validator("event_name")
    @classmethod
    def _name_not_blank(cls, v: str | None) -> str | None:
        if v is None:
            return None
        return require_text(v, "Event Name cannot be empty if provided")

    @field_validator("event_type")
    @classmethod
    def _type_not_blank(cls, v: str | None) -> str | None:
        if v is None:
            return None
        return require_text(v, "Event Type cannot be empty if provided")

    @field_validator("venue_public_id")
    @classmethod
    def _venue_uuid(cls, v: str | None) -> str | None:
        if v is None:
            return None
        return require_uuid(v, "Venue Public ID must be a valid UUID")

    @field_validator("department_public_id")
    @classmethod
    def _department_uuid(cls, v: str | None) -> str | None:
        if v is None:
            return None
        return require_uuid(v, "Department Public ID must be a valid UUID")

    @field_validator("end_time")
    @classmethod
    def _end_after_start(cls, v: datetime | None, info: ValidationInfo) -> datetime | None:
        check_end_after_start(info.data.get("start_time"), v)
        return v

    @field_validator("approved_letter")
    @classmethod
    def _letter(cls, v: UploadFile | None) -> UploadFile | None:
        return _check_letter(v) if v is not None else None

    def to_payload(self) -> dict[str, Any]:
        payload = {
            "eventName": self.event_name,
            "eventType": self.event_type,
            "venuePublicId": self.venue_public_id,
            "departmentPublicId": self.department_public_id,
            "startTime": to_api_datetime(self.start_time),
            "endTime": to_api_datetime(self.end_time),
        }
        return {k: v for k, v in payload.items() if v is not None}

    def files(self) -> list[tuple[str, UploadFile | None]]:
        return [("approvedLetter", self.approved_letter)]


class VenueReservationDialogForm(BaseModel):
    """Combined venue + equipment request dialog; equal start/end instants are accepted."""

    event_name: str
    department: str
    description: str | None = None
    venue: str
    start_date_time: datetime
    end_date_time: datetime
    equipment: list[str]
    approved_letter: list[UploadFile]

    @field_validator("event_name")
    @classmethod
    def _name_length(cls, v: str) -> str:
        return require_min_length(v, 2, "Event name must be at least 2 characters.")

    @field_validator("end_date_time")
    @classmethod
    def _end_not_before_start(cls, v: datetime, info: ValidationInfo) -> datetime:
        check_end_after_start(info.data.get("start_date_time"), v, allow_equal=True)
        return v

    @field_validator("equipment")
    @classmethod
    def _some_equipment(cls, v: list[str]) -> list[str]:
        if len(v) < 1:
            raise fail("too_short", "Please select at least one equipment.")
        return v

    @field_validator("approved_letter")
    @classmethod
    def _letters(cls, v: list[UploadFile]) -> list[UploadFile]:
        if len(v) < 1:
            raise fail("required", "Approved letter is required.")
        for upload in v:
            check_upload(
                upload,
                allowed=JPEG_PNG_TYPES,
                max_bytes=MAX_RESERVATION_LETTER_BYTES,
                type_message="Please select a JPEG or PNG file.",
                size_message="Please select a file smaller than 10 MB.",
            )
        return v

    def to_payload(self) -> dict[str, Any]:
        payload = {
            "eventName": self.event_name,
            "departmentPublicId": self.department,
            "venuePublicId": self.venue,
            "description": self.description,
            "startTime": to_api_datetime(self.start_date_time),
            "endTime": to_api_datetime(self.end_date_time),
            "equipmentPublicIds": list(self.equipment),
        }
        return {k: v for k, v in payload.items() if v is not None}


class VenueReservationForm(BaseModel):
    """Stand-alone venue request: contact details plus one approved letter."""

    email: str
    phone_number: str | None = ""
    department: str
    event_name: str
    event_type: str
    venue: str
    approved_letter: UploadFile

    @field_validator("email")
    @classmethod
    def _valid_email(cls, v: str) -> str:
        try:
            validate_email(v)
        except PydanticCustomError:
            raise fail("email", "Please enter a valid email address") from None
        return v

    @field_validator("phone_number")
    @classmethod
    def _phone(cls, v: str | None) -> str | None:
        return check_phone_number(v)

    @field_validator("department")
    @classmethod
    def _department_required(cls, v: str) -> str:
        return require_text(v, "Department is required")

    @field_validator("event_name")
    @classmethod
    def _name_length(cls, v: str) -> str:
        return require_min_length(v, 3, "Event name must be at least 3 characters")

    @field_validator("event_type")
    @classmethod
    def _type_required(cls, v: str) -> str:
        return require_text(v, "Event Type is required")

    @field_validator("venue")
    @classmethod
    def _venue_required(cls, v: str) -> str:
        return require_text(v, "Venue is required")

    @field_validator("approved_letter")
    @classmethod
    def _letter(cls, v: UploadFile) -> UploadFile:
        return check_upload(
            v,
            allowed=JPEG_PNG_TYPES,
            max_bytes=MAX_RESERVATION_LETTER_BYTES,
            type_message="Please select a JPEG or PNG file.",
            size_message="Please select a file smaller than 10 MB.",
        )

    def to_payload(self) -> dict[str, Any]:
        payload = {
            "email": self.email,
            "phoneNumber": self.phone_number or None,
            "departmentPublicId": self.department,
            "eventName": self.event_name,
            "eventType": self.event_type,
            "venuePublicId": self.venue,
        }
        return {k: v for k, v in payload.items() if v is not None}

    def files(self) -> list[tuple[str, UploadFile | None]]:
        return [("approvedLetter", self.approved_letter)]
