"""Equipment inventory and equipment reservation forms."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, field_validator

from reservation_admin.core.exceptions import ValidationError
from reservation_admin.dto import CreateEquipmentReservationInput, EquipmentStatus, PublicRef
from reservation_admin.utils.datetime import as_utc_naive, to_api_datetime

from ._validators import END_BEFORE_START, check_upload, fail, require_text, require_uuid
from .event import IMAGE_SIZE_MESSAGE, IMAGE_TYPE_MESSAGE
from .uploads import IMAGE_TYPES, MAX_IMAGE_BYTES, UploadFile


class EquipmentForm(BaseModel):
    name: str
    brand: str
    availability: bool
    quantity: int
    status: EquipmentStatus
    owner_id: str | None = None
    category_ids: list[str] = []
    image: UploadFile | None = None

    @field_validator("name")
    @classmethod
    def _name_required(cls, v: str) -> str:
        return require_text(v, "Equipment Name is required")

    @field_validator("brand")
    @classmethod
    def _brand_required(cls, v: str) -> str:
        return require_text(v, "Brand is required")

    @field_validator("quantity")
    @classmethod
    def _non_negative(cls, v: int) -> int:
        if v < 0:
            raise fail("negative", "Quantity cannot be negative")
        return v

    @field_validator("status", mode="before")
    @classmethod
    def _known_status(cls, v: Any) -> Any:
        allowed = {s.value for s in EquipmentStatus}
        if (v.value if isinstance(v, EquipmentStatus) else v) not in allowed:
            raise fail("status", "Invalid equipment status")
        return v

    @field_validator("owner_id")
    @classmethod
    def _owner_uuid(cls, v: str | None) -> str | None:
        if v is None:
            return None
        return require_uuid(v, "Owner ID must be a valid UUID")

    @field_validator("image")
    @classmethod
    def _image(cls, v: UploadFile | None) -> UploadFile | None:
        if v is None:
            return None
        return check_upload(
            v,
            allowed=IMAGE_TYPES,
            max_bytes=MAX_IMAGE_BYTES,
            type_message=IMAGE_TYPE_MESSAGE,
            size_message=IMAGE_SIZE_MESSAGE,
        )

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "name": self.name,
            "brand": self.brand,
            "availability": self.availability,
            "quantity": self.quantity,
            "status": self.status.value,
        }
        if self.owner_id:
            payload["ownerPublicId"] = self.owner_id
        if self.category_ids:
            payload["categoryPublicIds"] = list(self.category_ids)
        return payload

    def files(self) -> list[tuple[str, UploadFile | None]]:
        return [("image", self.image)]


class SelectedEquipment(BaseModel):
    equipment_id: str
    quantity: int

    @field_validator("equipment_id")
    @classmethod
    def _id_required(cls, v: str) -> str:
        return require_text(v, "Equipment is required")

    @field_validator("quantity")
    @classmethod
    def _positive(cls, v: int) -> int:
        if v < 1:
            raise fail("quantity", "Quantity must be at least 1")
        return v


class EquipmentReservationForm(BaseModel):
    selected_equipment: list[SelectedEquipment]

    def to_inputs(
        self,
        *,
        event_id: str,
        department_id: str,
        start_time: datetime,
        end_time: datetime,
    ) -> list[CreateEquipmentReservationInput]:
        """One reservation request per selected equipment, all sharing the event window."""
        if as_utc_naive(end_time) < as_utc_naive(start_time):
            raise ValidationError(END_BEFORE_START)
        return [
            CreateEquipmentReservationInput(
                event=PublicRef(public_id=event_id),
                equipment=PublicRef(public_id=item.equipment_id),
                department=PublicRef(public_id=department_id),
                quantity=item.quantity,
                start_time=to_api_datetime(start_time),
                end_time=to_api_datetime(end_time),
            )
            for item in self.selected_equipment
        ]


class ReservationActionForm(BaseModel):
    remarks: str | None = None

    def to_payload(self) -> dict[str, Any]:
        return {"remarks": self.remarks or ""}
