"""Archive-then-delete for parties.

The archive row is written and flushed before any dependent row is touched,
so a failed archive write never leaves a party half deleted. Billing rows are
financial history and are never deleted here.
"""

import logging
from dataclasses import dataclass

from sqlalchemy import or_
from sqlalchemy.exc import SQLAlchemyError

from models.billing import Billing
from models.booking import Booking
from models.deleted_user import DeletedUser
from models.slot import Slot
from models.user import User
from services.errors import NotFoundError, TransactionError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ArchiveResult:
    archive_id: int
    bookings: int
    slots: int
    billings: int
    active_bookings: int


def _billing_snapshot(b: Billing) -> dict:
    return {
        "billing_id": b.id,
        "amount": float(b.amount),
        "payment_date": b.created_at.isoformat() if b.created_at else None,
        "mode_of_payment": b.mode_of_payment,
        "is_gst": b.is_gst,
        "gst": float(b.gst) if b.gst is not None else None,
        "gst_number": b.gst_number,
        "booking_id": b.booking_id,
        "court_id": b.court_id,
    }


def _user_snapshot(u: User) -> dict:
    return {
        "id": u.id,
        "first_name": u.first_name,
        "last_name": u.last_name,
        "phone_number": u.phone_number,
        "whatsapp_number": u.whatsapp_number,
        "address": u.address,
        "email": u.email,
    }


def archive_and_delete_user(session, user_id: int) -> ArchiveResult:
    user = session.get(User, user_id)
    if not user:
        raise NotFoundError("User not found")

    try:
        billings = session.query(Billing).filter_by(user_id=user.id).order_by(Billing.created_at.asc()).all()
        bookings = session.query(Booking).filter_by(user_id=user.id).all()
        booking_ids = [b.id for b in bookings]
        active = sum(1 for b in bookings if b.status == "active")

        # phase 1: durable snapshot first
        archive = DeletedUser(
            user=_user_snapshot(user),
            billings=[_billing_snapshot(b) for b in billings],
        )
        session.add(archive)
        session.flush()

        # phase 2: dependents, then the party
        slot_filter = Slot.user_id == user.id
        if booking_ids:
            slot_filter = or_(slot_filter, Slot.booking_id.in_(booking_ids))
        slot_count = session.query(Slot).filter(slot_filter).delete(synchronize_session="fetch")
        if booking_ids:
            session.query(Booking).filter(Booking.id.in_(booking_ids)).delete(synchronize_session="fetch")
        session.delete(user)
        session.commit()
    except SQLAlchemyError as exc:
        session.rollback()
        logger.exception("Archiving user %s failed", user_id)
        raise TransactionError(f"Server error: {exc}") from exc

    logger.info(
        "Archived user %s as %s: %d booking(s), %d slot(s), %d billing(s) kept",
        user_id, archive.id, len(booking_ids), slot_count, len(billings),
    )
    return ArchiveResult(
        archive_id=archive.id,
        bookings=len(booking_ids),
        slots=slot_count,
        billings=len(billings),
        active_bookings=active,
    )
