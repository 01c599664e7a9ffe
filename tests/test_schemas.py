from __future__ import annotations

from datetime import UTC, datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from reservation_admin.core.exceptions import ValidationError as DomainValidationError
from reservation_admin.schemas import (
    END_BEFORE_START,
    AccountInfoForm,
    EditEventForm,
    EditUserForm,
    EquipmentForm,
    EquipmentReservationForm,
    EventForm,
    LoginForm,
    OtpForm,
    SetNewPasswordForm,
    UploadFile,
    UserForm,
    VenueForm,
    VenueReservationDialogForm,
    VenueReservationForm,
    form_errors,
)
from reservation_admin.schemas._validators import MB

VENUE_ID = "5b0c9a52-2f0e-4a0a-9a61-0f1f0f3f6a10"
DEPT_ID = "8d3e2f5a-1c4b-4e7d-9b2a-6c5d4e3f2a1b"

PDF = UploadFile(filename="letter.pdf", content_type="application/pdf", content=b"%PDF-1.7")
PNG = UploadFile(filename="scan.png", content_type="image/png", content=b"\x89PNG")


def errors_of(model, **data) -> dict[str, str]:
    with pytest.raises(ValidationError) as exc_info:
        model(**data)
    return form_errors(exc_info.value)


def account(**overrides):
    data = {
        "email": "ada@example.edu",
        "telephone_number": "8123",
        "phone_number": "09171234567",
        "password": "Secret123",
        "confirm_password": "Secret123",
    }
    data.update(overrides)
    return data


@pytest.mark.parametrize(
    ("password", "message"),
    [
        ("Ab1", "Your password is too short."),
        ("ABCDEFG1", "Your password must contain a lowercase letter."),
        ("abcdefg1", "Your password must contain a uppercase letter."),
        ("Abcdefgh", "Your password must contain a number."),
    ],
)
def test_account_password_rules_report_first_failure(password, message):
    errors = errors_of(AccountInfoForm, **account(password=password, confirm_password=password))
    assert errors == {"password": message}


def test_login_password_checks_uppercase_before_lowercase():
    errors = errors_of(LoginForm, email="ada@example.edu", password="12345678")
    assert errors["password"] == "Password must contain at least one uppercase letter"


def test_login_requires_email():
    errors = errors_of(LoginForm, email="", password="Secret123")
    assert errors["email"] == "Email is required"


def test_new_password_messages_and_confirmation():
    errors = errors_of(SetNewPasswordForm, new_password="short", confirm_password="short")
    assert errors == {"new_password": "Your new password is too short."}

    errors = errors_of(SetNewPasswordForm, new_password="Secret123", confirm_password="Secret124")
    assert errors == {"confirm_password": "New passwords do not match."}


@pytest.mark.parametrize(
    ("phone", "message"),
    [
        ("0917123456", "Phone Number must be 11 digits"),
        ("091712345678", "Phone Number must be 11 digits"),
        ("0917-123456", "Phone Number must be a number"),
        ("0917123456\n", "Phone Number must be a number"),
    ],
)
def test_phone_number_must_be_eleven_digits(phone, message):
    assert errors_of(AccountInfoForm, **account(phone_number=phone)) == {"phone_number": message}


@pytest.mark.parametrize("phone", ["", None, "09171234567"])
def test_phone_number_accepts_empty_or_valid(phone):
    form = AccountInfoForm(**account(phone_number=phone))
    assert form.phone_number == phone


def test_account_passwords_must_match():
    errors = errors_of(AccountInfoForm, **account(confirm_password="Secret124"))
    assert errors == {"confirm_password": "Passwords do not match."}


def test_otp_must_be_six_characters():
    assert errors_of(OtpForm, code="12345") == {"code": "Your verification code must be 6 characters."}
    assert OtpForm(code="123456").code == "123456"


def reservation_dialog(**overrides):
    data = {
        "event_name": "Robotics Expo",
        "department": DEPT_ID,
        "venue": VENUE_ID,
        "start_date_time": datetime(2024, 6, 1, 10, 0),
        "end_date_time": datetime(2024, 6, 1, 12, 0),
        "equipment": ["eq-1"],
        "approved_letter": [PNG],
    }
    data.update(overrides)
    return data


def test_end_before_start_is_reported_on_end_field():
    errors = errors_of(
        VenueReservationDialogForm,
        **reservation_dialog(
            start_date_time=datetime(2024, 6, 1, 10, 0),
            end_date_time=datetime(2024, 6, 1, 9, 0),
        ),
    )
    assert errors == {"end_date_time": "End date/time cannot be before start date/time."}


def test_reservation_dialog_accepts_equal_start_and_end():
    moment = datetime(2024, 6, 1, 10, 0)
    form = VenueReservationDialogForm(**reservation_dialog(start_date_time=moment, end_date_time=moment))
    assert form.to_payload()["startTime"] == form.to_payload()["endTime"] == "2024-06-01T10:00:00"


def test_reservation_dialog_compares_aware_times_in_utc():
    manila = timezone(timedelta(hours=8))
    errors = errors_of(
        VenueReservationDialogForm,
        **reservation_dialog(
            start_date_time=datetime(2024, 6, 1, 10, 0, tzinfo=UTC),
            end_date_time=datetime(2024, 6, 1, 17, 0, tzinfo=manila),
        ),
    )
    assert errors["end_date_time"] == END_BEFORE_START


def test_reservation_dialog_letter_and_equipment_rules():
    errors = errors_of(VenueReservationDialogForm, **reservation_dialog(equipment=[], approved_letter=[]))
    assert errors == {
        "equipment": "Please select at least one equipment.",
        "approved_letter": "Approved letter is required.",
    }
    errors = errors_of(VenueReservationDialogForm, **reservation_dialog(approved_letter=[PDF]))
    assert errors == {"approved_letter": "Please select a JPEG or PNG file."}


def event_form(**overrides):
    data = {
        "event_name": "Robotics Expo",
        "event_type": "Exhibit",
        "venue_public_id": VENUE_ID,
        "department_public_id": DEPT_ID,
        "start_time": datetime(2024, 6, 1, 10, 0),
        "end_time": datetime(2024, 6, 1, 12, 0),
        "approved_letter": PDF,
    }
    data.update(overrides)
    return data


def test_event_form_requires_end_strictly_after_start():
    moment = datetime(2024, 6, 1, 10, 0)
    errors = errors_of(EventForm, **event_form(start_time=moment, end_time=moment))
    assert errors == {"end_time": END_BEFORE_START}


def test_event_form_validates_ids_and_uploads():
    too_big = UploadFile(filename="big.pdf", content_type="application/pdf", content=b"x" * (5 * MB + 1))
    gif = UploadFile(filename="a.gif", content_type="image/gif", content=b"GIF8")
    errors = errors_of(
        EventForm,
        **event_form(venue_public_id="not-a-uuid", approved_letter=too_big, event_image=gif),
    )
    assert errors == {
        "venue_public_id": "Event Venue Public ID must be a valid UUID",
        "approved_letter": "File too large (max 5MB).",
        "event_image": "Invalid file type. Please select a JPG, PNG, or WEBP image.",
    }


def test_event_form_payload_and_files():
    form = EventForm(**event_form(event_image=PNG))
    assert form.to_payload() == {
        "eventName": "Robotics Expo",
        "eventType": "Exhibit",
        "venuePublicId": VENUE_ID,
        "departmentPublicId": DEPT_ID,
        "startTime": "2024-06-01T10:00:00",
        "endTime": "2024-06-01T12:00:00",
    }
    assert form.files() == [("approvedLetter", PDF), ("eventImage", PNG)]


def test_edit_event_form_only_sends_provided_fields():
    form = EditEventForm(event_name="Renamed")
    assert form.to_payload() == {"eventName": "Renamed"}
    assert form.files() == [("approvedLetter", None)]


def user_form(**overrides):
    data = {
        "id_number": "2020-0001",
        "first_name": "Ada",
        "last_name": "Reyes",
        "email": "ada@example.edu",
        "roles": ["ORGANIZER"],
        "department_public_id": DEPT_ID,
        "telephone_number": "8123",
        "phone_number": "",
        "active": True,
    }
    data.update(overrides)
    return data


def test_user_form_password_pair_must_be_both_or_neither():
    message = "Passwords do not match. Both fields must be filled or both must be empty."
    assert errors_of(UserForm, **user_form(password="Secret123")) == {"confirm_password": message}
    assert errors_of(UserForm, **user_form(confirm_password="Secret123")) == {"confirm_password": message}
    form = UserForm(**user_form())
    assert "password" not in form.to_payload()


def test_edit_user_form_rejects_lone_password():
    errors = errors_of(EditUserForm, **user_form(password="Secret123"))
    assert errors == {
        "confirm_password": "Passwords do not match. Both fields must be filled or both must be empty."
    }


def test_user_form_requires_roles():
    assert errors_of(UserForm, **user_form(roles=[])) == {"roles": "Role is required"}


def test_edit_user_form_telephone_message():
    errors = errors_of(EditUserForm, **user_form(telephone_number=""))
    assert errors == {"telephone_number": "Telephone number is required"}


def test_venue_form_image_limits():
    big = UploadFile(filename="hall.png", content_type="image/png", content=b"x" * (10 * MB + 1))
    errors = errors_of(VenueForm, name="", location="North Wing", image=big)
    assert errors == {"name": "Venue Name is required", "image": "File too large (max 10MB)."}


def test_equipment_form_rules():
    errors = errors_of(
        EquipmentForm,
        name="Projector",
        brand="",
        availability=True,
        quantity=-1,
        status="BROKEN",
        owner_id="owner-1",
    )
    assert errors == {
        "brand": "Brand is required",
        "quantity": "Quantity cannot be negative",
        "status": "Invalid equipment status",
        "owner_id": "Owner ID must be a valid UUID",
    }


def test_equipment_reservation_inputs_share_event_window():
    form = EquipmentReservationForm(
        selected_equipment=[{"equipment_id": "eq-1", "quantity": 2}, {"equipment_id": "eq-2", "quantity": 1}]
    )
    inputs = form.to_inputs(
        event_id="event-1",
        department_id="dept-1",
        start_time=datetime(2024, 6, 1, 10, 0),
        end_time=datetime(2024, 6, 1, 12, 0),
    )
    assert [i.equipment.public_id for i in inputs] == ["eq-1", "eq-2"]
    assert inputs[0].to_api() == {
        "event": {"publicId": "event-1"},
        "equipment": {"publicId": "eq-1"},
        "department": {"publicId": "dept-1"},
        "quantity": 2,
        "startTime": "2024-06-01T10:00:00",
        "endTime": "2024-06-01T12:00:00",
    }

    with pytest.raises(DomainValidationError, match="End date/time cannot be before"):
        form.to_inputs(
            event_id="event-1",
            department_id="dept-1",
            start_time=datetime(2024, 6, 1, 12, 0),
            end_time=datetime(2024, 6, 1, 10, 0),
        )


def venue_request(**overrides):
    data = {
        "email": "ada@example.edu",
        "phone_number": "09171234567",
        "department": DEPT_ID,
        "event_name": "Robotics Expo",
        "event_type": "Exhibit",
        "venue": VENUE_ID,
        "approved_letter": PNG,
    }
    data.update(overrides)
    return data


def test_venue_reservation_form_reports_each_field():
    errors = errors_of(
        VenueReservationForm,
        **venue_request(
            email="not-an-email",
            phone_number="0917",
            department="",
            event_name="Ex",
            event_type="",
            venue="",
            approved_letter=PDF,
        ),
    )
    assert errors == {
        "email": "Please enter a valid email address",
        "phone_number": "Phone Number must be 11 digits",
        "department": "Department is required",
        "event_name": "Event name must be at least 3 characters",
        "event_type": "Event Type is required",
        "venue": "Venue is required",
        "approved_letter": "Please select a JPEG or PNG file.",
    }


def test_venue_reservation_form_letter_size_limit():
    big = UploadFile(filename="scan.png", content_type="image/png", content=b"x" * (10 * MB + 1))
    errors = errors_of(VenueReservationForm, **venue_request(approved_letter=big))
    assert errors == {"approved_letter": "Please select a file smaller than 10 MB."}


def test_venue_reservation_form_payload_drops_empty_phone():
    form = VenueReservationForm(**venue_request(phone_number=""))
    assert form.to_payload() == {
        "email": "ada@example.edu",
        "departmentPublicId": DEPT_ID,
        "eventName": "Robotics Expo",
        "eventType": "Exhibit",
        "venuePublicId": VENUE_ID,
    }
    assert form.files() == [("approvedLetter", PNG)]
