import re
from dataclasses import dataclass
from datetime import date, datetime, time
from decimal import Decimal, InvalidOperation

from services.errors import ValidationError
from utils.timezones import TimeZones, as_aware_utc, combine, storage_today

# India mobile numbering: 10 digits, leading 6-9
PHONE_RE = re.compile(r"^[6-9][0-9]{9}$")
TIME_RE = re.compile(r"^([0-9]{1,2}):([0-9]{2})$")

PAYMENT_MODES = ("card", "upi", "cash")

NAME_MAX = 50
ADDRESS_MAX = 200
NOTES_MAX = 300
GST_NUMBER_MAX = 20


@dataclass(frozen=True)
class BookingWindow:
    start_date: date
    end_date: date
    start_time: time
    end_time: time

    @property
    def is_multi_day(self) -> bool:
        return self.start_date != self.end_date


@dataclass(frozen=True)
class BillingDetails:
    amount: Decimal
    is_gst: bool
    gst: Decimal | None
    gst_number: str | None
    mode_of_payment: str
    notes: str | None


@dataclass(frozen=True)
class PartyDetails:
    phone_number: str
    first_name: str | None
    last_name: str | None
    whatsapp_number: str | None
    address: str | None
    email: str | None


def _text(data: dict, key: str):
    value = data.get(key)
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def as_bool(value) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return bool(value)


def parse_day(value, label: str = "date") -> date:
    try:
        return datetime.fromisoformat(str(value).strip()).date()
    except ValueError:
        raise ValidationError(f"Invalid {label}. Use YYYY-MM-DD")


def parse_time_of_day(value) -> time:
    m = TIME_RE.match(str(value).strip())
    if not m:
        raise ValidationError("Invalid time format, expected HH:mm")
    hours, minutes = int(m.group(1)), int(m.group(2))
    if hours > 23 or minutes > 59:
        raise ValidationError("Invalid time format, expected HH:mm")
    return time(hours, minutes)


def _decimal(value):
    if value is None or isinstance(value, bool) or (isinstance(value, str) and not value.strip()):
        return None
    try:
        number = Decimal(str(value).strip())
    except InvalidOperation:
        return None
    return number if number.is_finite() else None


def is_valid_phone(value) -> bool:
    return isinstance(value, str) and PHONE_RE.match(value) is not None


def parse_window(data: dict, now: datetime, zones: TimeZones, max_range_days: int) -> BookingWindow:
    """Validate the date range and daily time window of a booking request."""
    start_raw, end_raw = data.get("start_date"), data.get("end_date")
    if not start_raw or not end_raw:
        raise ValidationError("Start and end date are required")

    try:
        start = datetime.fromisoformat(str(start_raw).strip()).date()
        end = datetime.fromisoformat(str(end_raw).strip()).date()
    except ValueError:
        raise ValidationError("Invalid start or end date")

    if start > end:
        raise ValidationError("Start date must be before end date")
    if start < storage_today(now, zones):
        raise ValidationError("Start date cannot be in the past")
    if (end - start).days > max_range_days:
        raise ValidationError(f"Booking cannot exceed {max_range_days} days")

    start_raw_t, end_raw_t = data.get("start_time"), data.get("end_time")
    if not start_raw_t or not end_raw_t:
        raise ValidationError("Start and end time are required")
    start_t = parse_time_of_day(start_raw_t)
    end_t = parse_time_of_day(end_raw_t)

    first_start = combine(start, start_t, zones)
    last_end = combine(end, end_t, zones)
    # minute resolution: a slot starting this minute is still bookable
    now_minute = as_aware_utc(now).replace(second=0, microsecond=0, tzinfo=None)
    if first_start < now_minute:
        raise ValidationError("Start time cannot be in the past")
    if last_end <= first_start:
        raise ValidationError("End time must be after start time")

    return BookingWindow(start_date=start, end_date=end, start_time=start_t, end_time=end_t)


def parse_notes(data: dict):
    notes = _text(data, "notes")
    if notes and len(notes) > NOTES_MAX:
        raise ValidationError(f"Notes too long (max {NOTES_MAX} chars)")
    return notes


def parse_billing(data: dict, notes=None) -> BillingDetails:
    if data.get("amount") is None:
        raise ValidationError("Amount is required")
    amount = _decimal(data.get("amount"))
    if amount is None or amount < 0:
        raise ValidationError("Amount must be a positive number")

    is_gst = as_bool(data.get("is_gst"))
    gst = None
    gst_number = None
    if is_gst:
        gst = _decimal(data.get("gst"))
        if gst is None or gst < 0:
            raise ValidationError("GST must be a valid non-negative number")
        gst_number = _text(data, "gst_number")
        if not gst_number or len(gst_number) > GST_NUMBER_MAX:
            raise ValidationError(f"GST Number is required and max {GST_NUMBER_MAX} chars")

    mode = _text(data, "mode_of_payment")
    if not mode:
        raise ValidationError("Payment mode is required")
    mode = mode.lower()
    if mode not in PAYMENT_MODES:
        raise ValidationError("Invalid payment mode, must be card, upi, or cash")

    return BillingDetails(
        amount=amount,
        is_gst=is_gst,
        gst=gst,
        gst_number=gst_number,
        mode_of_payment=mode,
        notes=notes,
    )


def parse_phone(data: dict) -> str:
    phone = _text(data, "phone_number")
    if not phone:
        raise ValidationError("Phone number is required")
    if not is_valid_phone(phone):
        raise ValidationError("Invalid phone number. Must be 10 digits and start with 6, 7, 8, or 9")
    return phone


def parse_party(data: dict, phone_number: str, is_new: bool) -> PartyDetails:
    """Party fields are mandatory for a new phone number, optional overrides otherwise."""
    first_name = _text(data, "first_name")
    last_name = _text(data, "last_name")
    whatsapp = _text(data, "whatsapp_number")
    address = _text(data, "address")
    email = _text(data, "email")

    if is_new:
        if not first_name or len(first_name) > NAME_MAX:
            raise ValidationError(f"First name is required (max {NAME_MAX} chars)")
        if not last_name or len(last_name) > NAME_MAX:
            raise ValidationError(f"Last name is required (max {NAME_MAX} chars)")
        if not whatsapp or not is_valid_phone(whatsapp):
            raise ValidationError("WhatsApp number must be 10 digits and start with 6, 7, 8, or 9")
        if not address or len(address) > ADDRESS_MAX:
            raise ValidationError(f"Address is required (max {ADDRESS_MAX} chars)")
    else:
        if first_name and len(first_name) > NAME_MAX:
            raise ValidationError("First name too long")
        if last_name and len(last_name) > NAME_MAX:
            raise ValidationError("Last name too long")
        if whatsapp and not is_valid_phone(whatsapp):
            raise ValidationError("WhatsApp number must be 10 digits and start with 6, 7, 8, or 9")
        if address and len(address) > ADDRESS_MAX:
            raise ValidationError("Address too long")

    if email and (len(email) > 255 or "@" not in email):
        raise ValidationError("Invalid email")

    return PartyDetails(
        phone_number=phone_number,
        first_name=first_name,
        last_name=last_name,
        whatsapp_number=whatsapp,
        address=address,
        email=email,
    )
