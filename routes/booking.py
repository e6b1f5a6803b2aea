from flask import Blueprint, request, jsonify, current_app

from models import db
from services.booking_engine import engine_from_config
from services.errors import ConflictError
from utils.audit import log_event
from utils.formatting import booking_to_dict, day_label, slot_to_dict

booking_bp = Blueprint("booking", __name__)


def _engine():
    return engine_from_config(db.session, current_app.config)


# ---------- book slots (DOUBLE-BOOKING SAFE) ----------
@booking_bp.post("/slots/book")
def book_slots():
    data = request.get_json(silent=True) or {}
    engine = _engine()

    try:
        booking = engine.book(data)
    except ConflictError as exc:
        log_event("BOOKING_FAIL_OVERLAP", entity="court", entity_id=data.get("court_id"), metadata=exc.details)
        raise

    log_event(
        "BOOKING_CREATE",
        user_id=booking.user_id,
        entity="booking",
        entity_id=booking.id,
        metadata={"court_id": booking.court_id, "slot_ids": booking.slot_ids},
    )
    return jsonify(message="Slots booked successfully", booking=booking_to_dict(booking, engine.zones)), 201


@booking_bp.get("/bookings/<int:booking_id>")
def get_booking(booking_id: int):
    engine = _engine()
    booking = engine.get_booking(booking_id)
    return jsonify(booking=booking_to_dict(booking, engine.zones)), 200


# ---------- renew for the same party ----------
@booking_bp.post("/bookings/<int:booking_id>/renew")
def renew_booking(booking_id: int):
    data = request.get_json(silent=True) or {}
    engine = _engine()

    try:
        booking = engine.renew(booking_id, data)
    except ConflictError as exc:
        log_event("BOOKING_FAIL_OVERLAP", entity="booking", entity_id=booking_id, metadata=exc.details)
        raise

    log_event(
        "BOOKING_RENEW",
        user_id=booking.user_id,
        entity="booking",
        entity_id=booking.id,
        metadata={"parent_booking_id": booking_id, "slot_ids": booking.slot_ids},
    )
    return jsonify(
        message="Renewal booking created successfully",
        booking=booking_to_dict(booking, engine.zones),
    ), 201


# ---------- cancel (cutoff window) ----------
@booking_bp.post("/bookings/<int:booking_id>/cancel")
def cancel_booking(booking_id: int):
    engine = _engine()
    booking = engine.cancel(booking_id)

    log_event("BOOKING_CANCEL", user_id=booking.user_id, entity="booking", entity_id=booking.id)
    return jsonify(
        message="Booking cancelled successfully",
        booking=booking_to_dict(booking, engine.zones),
    ), 200


# ---------- slot ledger views ----------
@booking_bp.get("/courts/<int:court_id>/available-slots")
def available_slots(court_id: int):
    slots = _engine().list_available(court_id)
    return jsonify(
        message="Available slots fetched successfully",
        data=[slot_to_dict(s) for s in slots],
    ), 200


@booking_bp.get("/courts/<int:court_id>/booked-slots")
def booked_slots(court_id: int):
    date_str = request.args.get("date")
    day, rows = _engine().list_booked_for_day(court_id, date_str)

    if not rows:
        message = f"No bookings found for {day_label(day)}" if date_str else "No bookings found for today"
    else:
        message = f"Bookings for {day_label(day)}" if date_str else "Today's booked slots"

    return jsonify(message=message, count=len(rows), data=rows), 200
