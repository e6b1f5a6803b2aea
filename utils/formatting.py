from datetime import date, datetime

from utils.timezones import TimeZones, to_display

DATE_FORMAT = "%a, %d %b %Y"   # Mon, 02 Jun 2025
TIME_FORMAT = "%I:%M %p"       # 02:30 PM


def display_date(value, zones: TimeZones):
    if value is None:
        return None
    if isinstance(value, datetime):
        return to_display(value, zones).strftime(DATE_FORMAT)
    return value.strftime(DATE_FORMAT)


def display_time(value: datetime, zones: TimeZones):
    if value is None:
        return None
    return to_display(value, zones).strftime(TIME_FORMAT)


def display_range(start: datetime, end: datetime, zones: TimeZones) -> str:
    return f"{display_time(start, zones)} - {display_time(end, zones)}"


def _iso(value):
    return value.isoformat() if value else None


def _money(value):
    return float(value) if value is not None else None


def booking_to_dict(b, zones: TimeZones) -> dict:
    return {
        "id": b.id,
        "court_id": b.court_id,
        "user_id": b.user_id,
        "slot_ids": b.slot_ids,
        "start_date": display_date(b.start_time, zones),
        "end_date": display_date(b.end_time, zones),
        "start_time": display_time(b.start_time, zones),
        "end_time": display_time(b.end_time, zones),
        "starts_at": _iso(b.start_time),
        "ends_at": _iso(b.end_time),
        "is_multi_day": b.is_multi_day,
        "status": b.status,
        "notes": b.notes,
        "amount": _money(b.amount),
        "is_gst": b.is_gst,
        "gst": _money(b.gst),
        "gst_number": b.gst_number,
        "mode_of_payment": b.mode_of_payment,
        "is_renewal": b.is_renewal,
        "parent_booking_id": b.parent_booking_id,
        "created_at": _iso(b.created_at),
        "cancelled_at": _iso(b.cancelled_at),
    }


def slot_to_dict(s) -> dict:
    return {
        "id": s.id,
        "court_id": s.court_id,
        "booking_id": s.booking_id,
        "user_id": s.user_id,
        "date": s.start_date.isoformat(),
        "start_time": s.start_time.isoformat(),
        "end_time": s.end_time.isoformat(),
        "is_booked": s.is_booked,
        "is_multi_day": s.is_multi_day,
        "notes": s.notes,
        "amount": _money(s.amount),
        "mode_of_payment": s.mode_of_payment,
    }


def court_to_dict(c) -> dict:
    return {
        "id": c.id,
        "name": c.name,
        "surface": c.surface,
        "created_at": _iso(c.created_at),
    }


def user_to_dict(u) -> dict:
    return {
        "id": u.id,
        "first_name": u.first_name,
        "last_name": u.last_name,
        "phone_number": u.phone_number,
        "whatsapp_number": u.whatsapp_number,
        "address": u.address,
        "email": u.email,
        "is_gst": u.is_gst,
        "gst": _money(u.gst),
        "gst_number": u.gst_number,
        "mode_of_payment": u.mode_of_payment,
        "created_at": _iso(u.created_at),
        "updated_at": _iso(u.updated_at),
    }


def deleted_user_to_dict(d) -> dict:
    return {
        "id": d.id,
        "user": d.user,
        "billings": d.billings or [],
        "deleted_at": _iso(d.deleted_at),
    }


def day_label(day: date) -> str:
    return day.strftime("%A, %d %b %Y")
