"""Form input schemas with the same field checks the admin screens apply."""

from ._validators import END_BEFORE_START, form_errors
from .auth import (
    AccountInfoForm,
    EmailForm,
    LoginForm,
    OtpForm,
    PersonalInfoForm,
    RegisterForm,
    ResetPasswordForm,
    SetNewPasswordForm,
)
from .department import DepartmentForm, EditDepartmentForm
from .equipment import EquipmentForm, EquipmentReservationForm, ReservationActionForm, SelectedEquipment
from .event import EditEventForm, EventForm, VenueReservationDialogForm, VenueReservationForm
from .uploads import UploadFile
from .user import EditUserForm, UserForm
from .venue import VenueForm

__all__ = [
    "END_BEFORE_START",
    "AccountInfoForm",
    "DepartmentForm",
    "EditDepartmentForm",
    "EditEventForm",
    "EditUserForm",
    "EmailForm",
    "EquipmentForm",
    "EquipmentReservationForm",
    "EventForm",
    "LoginForm",
    "OtpForm",
    "PersonalInfoForm",
    "RegisterForm",
    "ReservationActionForm",
    "ResetPasswordForm",
    "SelectedEquipment",
    "SetNewPasswordForm",
    "UploadFile",
    "UserForm",
    "VenueForm",
    "VenueReservationDialogForm",
    "VenueReservationForm",
    "form_errors",
]
