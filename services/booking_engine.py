"""Booking engine: the court slot ledger and everything that writes to it.

Booking and renewal expand a date range into one slot per calendar day,
reject the whole request if any day overlaps a booked slot on the same
court, and write party, slots, booking and billing in a single transaction.
The court row is locked for the duration, so overlapping requests for the
same court are serialized.
"""

import logging
from contextlib import contextmanager
from datetime import datetime, timedelta

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from models.billing import Billing
from models.booking import Booking, TERMINAL_STATUSES
from models.court import Court
from models.slot import Slot
from models.user import User
from services.errors import (
    BookingError,
    ConflictError,
    DuplicateError,
    NotFoundError,
    StateError,
    TransactionError,
    ValidationError,
)
from services.validation import (
    BillingDetails,
    BookingWindow,
    PartyDetails,
    parse_billing,
    parse_day,
    parse_notes,
    parse_party,
    parse_phone,
    parse_window,
)
from utils.formatting import display_date, display_range
from utils.timezones import TimeZones, as_aware_utc, combine, storage_today, utc_now

logger = logging.getLogger(__name__)

SLOT_WINDOW_INDEX = "uq_slot_booked_window"
# sqlite reports the columns of a violated unique index, postgres its name
SLOT_WINDOW_COLUMNS = "slots.court_id, slots.start_time, slots.end_time"


class BookingEngine:
    """Orchestrates booking, renewal, cancellation and slot queries for courts."""

    def __init__(
        self,
        session,
        zones: TimeZones,
        cancel_cutoff_minutes: int = 60,
        max_range_days: int = 365,
        clock=utc_now,
    ) -> None:
        self.session = session
        self.zones = zones
        self.cancel_cutoff_minutes = cancel_cutoff_minutes
        self.max_range_days = max_range_days
        self._clock = clock

    def now(self) -> datetime:
        return as_aware_utc(self._clock())

    # ---------- transactions ----------

    @contextmanager
    def _transaction(self):
        """Commit on success; roll back every staged write on any failure."""
        try:
            yield
            self.session.commit()
        except BookingError:
            self.session.rollback()
            raise
        except IntegrityError as exc:
            self.session.rollback()
            logger.warning("Booking write rejected by a constraint: %s", exc.orig)
            raise _integrity_error(exc) from exc
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.exception("Booking transaction aborted")
            raise TransactionError(f"Unexpected error: {exc}") from exc
        except Exception:
            self.session.rollback()
            raise

    def _lock_court(self, court_id) -> Court:
        """Serialize writers per court until the surrounding transaction ends.

        The version bump is a write, so it holds the row lock on Postgres and the
        database write lock on SQLite, where FOR UPDATE is not supported and a
        plain read would not open a transaction at all.
        """
        bumped = (
            self.session.query(Court)
            .filter(Court.id == court_id)
            .update({Court.lock_version: Court.lock_version + 1}, synchronize_session=False)
        )
        if not bumped:
            raise NotFoundError("Court not found")
        return (
            self.session.query(Court)
            .filter(Court.id == court_id)
            .with_for_update()
            .populate_existing()
            .one()
        )

    def _require_court(self, court_id) -> Court:
        court = self.session.get(Court, court_id)
        if not court:
            raise NotFoundError("Court not found")
        return court

    def get_booking(self, booking_id: int) -> Booking:
        booking = self.session.get(Booking, booking_id)
        if not booking:
            raise NotFoundError("Booking not found")
        return booking

    # ---------- party ----------

    def _resolve_party(self, data: dict, phone_number: str) -> User:
        """Find the party by phone number, then create it or merge non-empty fields."""
        user = self.session.query(User).filter_by(phone_number=phone_number).first()
        details = parse_party(data, phone_number, is_new=user is None)

        if user is None:
            user = User(
                first_name=details.first_name,
                last_name=details.last_name,
                phone_number=phone_number,
                whatsapp_number=details.whatsapp_number,
                address=details.address,
                email=details.email,
            )
            self.session.add(user)
        else:
            _merge_party(user, details)
        return user

    # ---------- slot expansion ----------

    def _find_overlap(self, court_id: int, slot_start: datetime, slot_end: datetime):
        return (
            self.session.query(Slot)
            .filter(
                Slot.court_id == court_id,
                Slot.is_booked.is_(True),
                Slot.start_time < slot_end,
                Slot.end_time > slot_start,
            )
            .order_by(Slot.start_time.asc())
            .first()
        )

    def _stage_slots(self, court: Court, user: User, window: BookingWindow,
                     billing: BillingDetails) -> list:
        """Build one slot per day in the window, aborting on the first overlap."""
        staged = []
        day = window.start_date
        while day <= window.end_date:
            slot_start = combine(day, window.start_time, self.zones)
            slot_end = combine(day, window.end_time, self.zones)
            if slot_start >= slot_end:
                raise ValidationError("Start time must be before end time")

            overlap = self._find_overlap(court.id, slot_start, slot_end)
            if overlap:
                raise self._conflict(overlap)

            staged.append(Slot(
                court_id=court.id,
                user_id=user.id,
                start_date=day,
                end_date=day,
                start_time=slot_start,
                end_time=slot_end,
                is_booked=True,
                is_multi_day=window.is_multi_day,
                notes=billing.notes,
                amount=billing.amount,
                is_gst=billing.is_gst,
                gst=billing.gst,
                gst_number=billing.gst_number,
                mode_of_payment=billing.mode_of_payment,
            ))
            day += timedelta(days=1)
        return staged

    def _conflict(self, overlap: Slot) -> ConflictError:
        booked_by = overlap.user.full_name if overlap.user else ""
        logger.warning(
            "Overlap on court %s with slot %s (%s - %s)",
            overlap.court_id, overlap.id, overlap.start_time, overlap.end_time,
        )
        return ConflictError(
            "Overlap found with existing booking",
            details={
                "date": display_date(overlap.start_time, self.zones),
                "time": display_range(overlap.start_time, overlap.end_time, self.zones),
                "booked_by": booked_by or "Unknown",
                "booking_id": overlap.booking_id,
            },
        )

    def _write_booking(self, court: Court, user: User, window: BookingWindow,
                       billing: BillingDetails, parent: Booking | None = None) -> Booking:
        # party must have an id before slots can reference it
        self.session.flush()
        slots = self._stage_slots(court, user, window, billing)
        self.session.add_all(slots)

        booking = Booking(
            court_id=court.id,
            user_id=user.id,
            start_date=window.start_date,
            end_date=window.end_date,
            start_time=combine(window.start_date, window.start_time, self.zones),
            end_time=combine(window.end_date, window.end_time, self.zones),
            is_multi_day=window.is_multi_day,
            status="active",
            notes=billing.notes,
            amount=billing.amount,
            is_gst=billing.is_gst,
            gst=billing.gst,
            gst_number=billing.gst_number,
            mode_of_payment=billing.mode_of_payment,
            is_renewal=parent is not None,
            parent_booking_id=parent.id if parent else None,
        )
        booking.slots = slots
        self.session.add(booking)
        self.session.flush()

        self.session.add(Billing(
            booking_id=booking.id,
            user_id=user.id,
            court_id=court.id,
            amount=billing.amount,
            is_gst=billing.is_gst,
            gst=billing.gst,
            gst_number=billing.gst_number,
            mode_of_payment=billing.mode_of_payment,
            user_info=snapshot_party(user),
        ))
        return booking

    # ---------- operations ----------

    def book(self, data: dict) -> Booking:
        """Create a booking, its per-day slots and its billing record atomically."""
        court_id = data.get("court_id")
        if not court_id:
            raise ValidationError("Court ID is required")

        now = self.now()
        window = parse_window(data, now, self.zones, self.max_range_days)
        phone_number = parse_phone(data)
        notes = parse_notes(data)
        billing = parse_billing(data, notes=notes)

        with self._transaction():
            court = self._lock_court(court_id)
            user = self._resolve_party(data, phone_number)
            _remember_billing_preferences(user, billing)
            booking = self._write_booking(court, user, window, billing)

        logger.info(
            "Booked court %s for user %s: booking %s, %d slot(s)",
            booking.court_id, booking.user_id, booking.id, len(booking.slots),
        )
        return booking

    def renew(self, booking_id: int, data: dict) -> Booking:
        """Book a new window for the party of an existing booking.

        The original booking and its slots are left as they are.
        """
        court_id = data.get("court_id")
        if not court_id:
            raise ValidationError("Court ID is required")
        self._require_court(court_id)

        now = self.now()
        window = parse_window(data, now, self.zones, self.max_range_days)
        notes = parse_notes(data)
        billing = parse_billing(data, notes=notes)

        with self._transaction():
            court = self._lock_court(court_id)
            original = self.session.get(Booking, booking_id)
            if not original:
                raise NotFoundError("Original booking not found")
            user = original.user
            booking = self._write_booking(court, user, window, billing, parent=original)

        logger.info("Renewed booking %s as %s", booking_id, booking.id)
        return booking

    def cancel(self, booking_id: int) -> Booking:
        """Cancel an active booking and release its slots for reuse."""
        with self._transaction():
            booking = self.get_booking(booking_id)
            if booking.status in TERMINAL_STATUSES:
                raise StateError(f"Booking is already {booking.status}")

            lead = as_aware_utc(booking.start_time) - self.now()
            if lead < timedelta(minutes=self.cancel_cutoff_minutes):
                raise StateError(
                    f"Cancellations are not allowed within {self.cancel_cutoff_minutes} "
                    "minutes of start time"
                )

            booking.status = "cancelled"
            booking.cancelled_at = self.now().replace(tzinfo=None)
            for slot in booking.slots:
                slot.is_booked = False
                slot.user_id = None
                slot.notes = None

        logger.info("Cancelled booking %s, released %d slot(s)", booking.id, len(booking.slots))
        return booking

    def list_available(self, court_id: int) -> list:
        self._require_court(court_id)
        return (
            self.session.query(Slot)
            .filter(Slot.court_id == court_id, Slot.is_booked.is_(False))
            .order_by(Slot.start_time.asc())
            .all()
        )

    def list_booked_for_day(self, court_id: int, day_str: str | None = None):
        """Booked slots on one calendar day, defaulting to today in the storage zone.

        Returns (day, rows) where rows are display-ready dicts.
        """
        day = parse_day(day_str) if day_str else storage_today(self.now(), self.zones)

        rows = (
            self.session.query(Slot, User, Court)
            .outerjoin(User, Slot.user_id == User.id)
            .outerjoin(Court, Slot.court_id == Court.id)
            .filter(
                Slot.court_id == court_id,
                Slot.is_booked.is_(True),
                Slot.start_date == day,
            )
            .order_by(Slot.start_date.asc(), Slot.start_time.asc())
            .all()
        )

        out = []
        for slot, user, court in rows:
            out.append({
                "slot_id": slot.id,
                "booking_id": slot.booking_id,
                "court": court.name if court else "Unknown Court",
                "booked_by": user.full_name if user else "",
                "phone_number": user.phone_number if user else "",
                "date": display_date(slot.start_time, self.zones),
                "time": display_range(slot.start_time, slot.end_time, self.zones),
                "notes": slot.notes or "",
            })
        return day, out


def _merge_party(user: User, details: PartyDetails) -> None:
    # empty incoming values keep what is on file
    user.first_name = details.first_name or user.first_name
    user.last_name = details.last_name or user.last_name
    user.whatsapp_number = details.whatsapp_number or user.whatsapp_number
    user.address = details.address or user.address
    user.email = details.email or user.email


def _remember_billing_preferences(user: User, billing: BillingDetails) -> None:
    user.mode_of_payment = billing.mode_of_payment
    if billing.is_gst:
        user.is_gst = True
        user.gst = billing.gst
        user.gst_number = billing.gst_number


def snapshot_party(user: User) -> dict:
    return {
        "first_name": user.first_name,
        "last_name": user.last_name,
        "phone_number": user.phone_number,
        "whatsapp_number": user.whatsapp_number,
        "email": user.email or None,
        "address": user.address or None,
    }


def _integrity_error(exc: IntegrityError) -> BookingError:
    message = str(exc.orig)
    if SLOT_WINDOW_INDEX in message or SLOT_WINDOW_COLUMNS in message:
        return ConflictError("Slot already booked")
    if "phone_number" in message:
        return DuplicateError("Phone number already exists")
    return TransactionError(f"Unexpected error: {message}")


def engine_from_config(session, config, clock=utc_now) -> BookingEngine:
    return BookingEngine(
        session,
        TimeZones.from_names(config.get("STORAGE_TIMEZONE", "UTC"),
                             config.get("DISPLAY_TIMEZONE", "Asia/Kolkata")),
        cancel_cutoff_minutes=config.get("CANCEL_CUTOFF_MINUTES", 60),
        max_range_days=config.get("MAX_BOOKING_RANGE_DAYS", 365),
        clock=clock,
    )
