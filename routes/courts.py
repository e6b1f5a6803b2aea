from datetime import datetime

from flask import Blueprint, request, jsonify

from models import db
from models.booking import Booking
from models.court import Court
from models.slot import Slot
from services.errors import DuplicateError, NotFoundError, ValidationError
from utils.audit import log_event
from utils.formatting import court_to_dict

court_bp = Blueprint("court", __name__, url_prefix="/courts")

NAME_MAX = 120
SURFACE_MAX = 80


def _get_court(court_id: int) -> Court:
    court = db.session.get(Court, court_id)
    if not court:
        raise NotFoundError("Court not found")
    return court


def _clean(data: dict, key: str, limit: int):
    value = (data.get(key) or "").strip() or None
    if value and len(value) > limit:
        raise ValidationError(f"{key} too long (max {limit} chars)")
    return value


@court_bp.post("")
def create_court():
    data = request.get_json(silent=True) or {}
    name = _clean(data, "name", NAME_MAX)
    surface = _clean(data, "surface", SURFACE_MAX)
    if not name:
        raise ValidationError("Court name required")

    court = Court(name=name, surface=surface)
    db.session.add(court)
    db.session.commit()

    log_event("COURT_CREATE", entity="court", entity_id=court.id)
    return jsonify(message="Court created successfully", data=court_to_dict(court)), 201


@court_bp.get("")
def list_courts():
    courts = Court.query.order_by(Court.name.asc()).all()
    return jsonify(
        message="Courts fetched successfully",
        data=[court_to_dict(c) for c in courts],
    ), 200


@court_bp.get("/<int:court_id>")
def get_court(court_id: int):
    return jsonify(data=court_to_dict(_get_court(court_id))), 200


@court_bp.patch("/<int:court_id>")
def edit_court(court_id: int):
    data = request.get_json(silent=True) or {}
    court = _get_court(court_id)

    if "name" in data:
        name = _clean(data, "name", NAME_MAX)
        if not name:
            raise ValidationError("Court name required")
        court.name = name
    if "surface" in data:
        court.surface = _clean(data, "surface", SURFACE_MAX)
    db.session.commit()

    log_event("COURT_UPDATE", entity="court", entity_id=court.id)
    return jsonify(message="Court edited successfully", data=court_to_dict(court)), 200


@court_bp.delete("/<int:court_id>")
def delete_court(court_id: int):
    court = _get_court(court_id)

    # refuse while an active booking on this court has not finished yet
    live = (
        Booking.query
        .filter(
            Booking.court_id == court.id,
            Booking.status == "active",
            Booking.end_time > datetime.utcnow(),
        )
        .count()
    )
    if live:
        raise DuplicateError(f"Court has {live} active booking(s) and cannot be deleted")

    # past and cancelled history goes with the court; billing is kept
    booking_ids = [row.id for row in Booking.query.with_entities(Booking.id).filter_by(court_id=court.id)]
    if booking_ids:
        # renewals booked on another court keep existing, minus the parent link
        (
            Booking.query
            .filter(Booking.parent_booking_id.in_(booking_ids), Booking.court_id != court.id)
            .update({Booking.parent_booking_id: None}, synchronize_session="fetch")
        )
    slot_count = Slot.query.filter(Slot.court_id == court.id).delete(synchronize_session="fetch")
    booking_count = Booking.query.filter(Booking.court_id == court.id).delete(synchronize_session="fetch")
    db.session.delete(court)
    db.session.commit()

    log_event(
        "COURT_DELETE",
        entity="court",
        entity_id=court_id,
        metadata={"slots": slot_count, "bookings": booking_count},
    )
    return jsonify(
        message="Court deleted successfully",
        deleted={"slots": slot_count, "bookings": booking_count},
    ), 200
