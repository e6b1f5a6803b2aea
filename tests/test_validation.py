"""Unit tests for booking request validation.

Run with: pytest tests/test_validation.py -v
"""

from datetime import date, datetime, time, timezone
from decimal import Decimal

import pytest

from services.errors import ValidationError
from services.validation import (
    parse_billing,
    parse_notes,
    parse_party,
    parse_phone,
    parse_time_of_day,
    parse_window,
)
from utils.timezones import TimeZones

NOW = datetime(2025, 5, 31, 8, 0, 30, tzinfo=timezone.utc)
UTC_IST = TimeZones.from_names("UTC", "Asia/Kolkata")


def window(**overrides):
    data = {
        "start_date": "2025-06-01",
        "end_date": "2025-06-03",
        "start_time": "09:00",
        "end_time": "10:00",
    }
    data.update(overrides)
    return parse_window(data, NOW, UTC_IST, 365)


class TestWindow:

    def test_valid_multi_day_window(self):
        w = window()
        assert w.start_date == date(2025, 6, 1)
        assert w.end_date == date(2025, 6, 3)
        assert w.start_time == time(9, 0)
        assert w.is_multi_day

    def test_single_day_is_not_multi_day(self):
        assert not window(end_date="2025-06-01").is_multi_day

    def test_dates_required(self):
        with pytest.raises(ValidationError, match="Start and end date are required"):
            window(end_date=None)

    def test_unparseable_date(self):
        with pytest.raises(ValidationError, match="Invalid start or end date"):
            window(start_date="01/06/2025")

    def test_start_after_end(self):
        with pytest.raises(ValidationError, match="Start date must be before end date"):
            window(start_date="2025-06-04")

    def test_start_date_in_past(self):
        with pytest.raises(ValidationError, match="Start date cannot be in the past"):
            window(start_date="2025-05-30")

    def test_range_over_limit(self):
        with pytest.raises(ValidationError, match="cannot exceed 365 days"):
            window(end_date="2026-06-02")

    def test_range_at_limit_is_allowed(self):
        assert window(end_date="2026-06-01").end_date == date(2026, 6, 1)

    def test_bad_time_format(self):
        with pytest.raises(ValidationError, match="expected HH:mm"):
            window(start_time="9am")

    def test_out_of_range_time(self):
        with pytest.raises(ValidationError, match="expected HH:mm"):
            parse_time_of_day("25:00")

    def test_start_earlier_this_minute_is_allowed(self):
        # NOW is 08:00:30; minute resolution keeps 08:00 bookable
        w = window(start_date="2025-05-31", end_date="2025-05-31", start_time="08:00", end_time="09:00")
        assert w.start_time == time(8, 0)

    def test_start_time_in_past(self):
        with pytest.raises(ValidationError, match="Start time cannot be in the past"):
            window(start_date="2025-05-31", end_date="2025-05-31", start_time="07:59", end_time="09:00")

    def test_end_not_after_start(self):
        with pytest.raises(ValidationError, match="End time must be after start time"):
            window(end_date="2025-06-01", start_time="10:00", end_time="10:00")

    def test_storage_zone_shifts_today(self):
        # 08:00 UTC is already 13:30 in Kolkata; the same start is in the past there
        zones = TimeZones.from_names("Asia/Kolkata", "Asia/Kolkata")
        data = {"start_date": "2025-05-31", "end_date": "2025-05-31",
                "start_time": "12:00", "end_time": "13:00"}
        with pytest.raises(ValidationError, match="Start time cannot be in the past"):
            parse_window(data, NOW, zones, 365)


class TestBilling:

    def test_amount_required(self):
        with pytest.raises(ValidationError, match="Amount is required"):
            parse_billing({"mode_of_payment": "cash"})

    @pytest.mark.parametrize("amount", [-1, "abc", "NaN", True])
    def test_amount_must_be_non_negative_number(self, amount):
        with pytest.raises(ValidationError, match="Amount must be a positive number"):
            parse_billing({"amount": amount, "mode_of_payment": "cash"})

    def test_zero_amount_is_allowed(self):
        assert parse_billing({"amount": 0, "mode_of_payment": "cash"}).amount == Decimal("0")

    def test_gst_required_when_flagged(self):
        with pytest.raises(ValidationError, match="GST must be a valid non-negative number"):
            parse_billing({"amount": 100, "is_gst": True, "gst_number": "27AAAAA0000A1Z5",
                           "mode_of_payment": "card"})

    def test_gst_number_required_when_flagged(self):
        with pytest.raises(ValidationError, match="GST Number is required"):
            parse_billing({"amount": 100, "is_gst": True, "gst": 18, "mode_of_payment": "card"})

    def test_gst_number_length(self):
        with pytest.raises(ValidationError, match="max 20 chars"):
            parse_billing({"amount": 100, "is_gst": True, "gst": 18, "gst_number": "X" * 21,
                           "mode_of_payment": "card"})

    def test_gst_ignored_when_not_flagged(self):
        b = parse_billing({"amount": 100, "is_gst": "false", "gst": 18, "mode_of_payment": "card"})
        assert not b.is_gst
        assert b.gst is None

    def test_payment_mode_required(self):
        with pytest.raises(ValidationError, match="Payment mode is required"):
            parse_billing({"amount": 100})

    def test_payment_mode_must_be_known(self):
        with pytest.raises(ValidationError, match="must be card, upi, or cash"):
            parse_billing({"amount": 100, "mode_of_payment": "cheque"})

    def test_notes_length(self):
        with pytest.raises(ValidationError, match="Notes too long"):
            parse_notes({"notes": "x" * 301})


class TestParty:

    def test_phone_required(self):
        with pytest.raises(ValidationError, match="Phone number is required"):
            parse_phone({})

    @pytest.mark.parametrize("phone", ["5876543210", "987654321", "98765432100", "98765abcde"])
    def test_phone_pattern(self, phone):
        with pytest.raises(ValidationError, match="Invalid phone number"):
            parse_phone({"phone_number": phone})

    def test_numeric_phone_is_accepted(self):
        assert parse_phone({"phone_number": 9876543210}) == "9876543210"

    def test_new_party_needs_all_fields(self):
        with pytest.raises(ValidationError, match="First name is required"):
            parse_party({"last_name": "Rao"}, "9876543210", is_new=True)

    def test_new_party_needs_valid_whatsapp(self):
        data = {"first_name": "Asha", "last_name": "Rao", "whatsapp_number": "123", "address": "Pune"}
        with pytest.raises(ValidationError, match="WhatsApp number"):
            parse_party(data, "9876543210", is_new=True)

    def test_existing_party_fields_are_optional(self):
        details = parse_party({}, "9876543210", is_new=False)
        assert details.first_name is None
        assert details.address is None

    def test_existing_party_overrides_still_validated(self):
        with pytest.raises(ValidationError, match="Address too long"):
            parse_party({"address": "x" * 201}, "9876543210", is_new=False)
