from dataclasses import dataclass
from datetime import date, datetime, time, timezone
from zoneinfo import ZoneInfo


@dataclass(frozen=True)
class TimeZones:
    """Zone pair used across the booking flow.

    storage: zone in which request dates and HH:mm times are read.
    display: zone in which instants are rendered back to people.
    Instants themselves are persisted as naive UTC.
    """

    storage: ZoneInfo
    display: ZoneInfo

    @classmethod
    def from_names(cls, storage: str, display: str) -> "TimeZones":
        return cls(storage=ZoneInfo(storage), display=ZoneInfo(display))


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def combine(day: date, tod: time, zones: TimeZones) -> datetime:
    """Wall-clock `tod` on `day` in the storage zone, as a naive UTC datetime."""
    local = datetime.combine(day, tod, tzinfo=zones.storage)
    return local.astimezone(timezone.utc).replace(tzinfo=None)


def as_aware_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def storage_today(now: datetime, zones: TimeZones) -> date:
    return as_aware_utc(now).astimezone(zones.storage).date()


def to_display(value: datetime, zones: TimeZones) -> datetime:
    return as_aware_utc(value).astimezone(zones.display)
