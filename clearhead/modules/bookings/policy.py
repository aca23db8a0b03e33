"""Time-window rules for bookings.

Everything here is pure: callers pass ``now`` explicitly so the same rules
apply to API requests, scheduled jobs and tests.
"""
from datetime import date, datetime, time, timedelta, timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from clearhead.core.config import settings

ACTIVE_STATUSES = ("confirmed", "rescheduled")

def now_utc() -> datetime:
    return datetime.now(timezone.utc)

def zone(name: str | None = None) -> ZoneInfo:
    try:
        return ZoneInfo(name or settings.CLINIC_TIMEZONE)
    except (ZoneInfoNotFoundError, ValueError):
        return ZoneInfo(settings.CLINIC_TIMEZONE)

def local_now(now: datetime | None = None, tz: str | None = None) -> datetime:
    now = now or now_utc()
    if now.tzinfo is None:
        return now.replace(tzinfo=zone(tz))
    return now.astimezone(zone(tz))

def parse_hhmm(value: str) -> time:
    hh, mm = value.split(":")
    return time(int(hh), int(mm))

def slot_hour(value: str) -> int:
    return int(value.split(":")[0])

def scheduled_instant(day: date, at: str, tz: str | None = None) -> datetime:
    return datetime.combine(day, parse_hhmm(at), tzinfo=zone(tz))

def booking_instant(booking) -> datetime:
    return scheduled_instant(booking.date, booking.time, booking.timezone)

def as_utc(value: datetime) -> datetime:
    # aware datetimes sharing one ZoneInfo compare on wall clock, so go through UTC
    return value.astimezone(timezone.utc)

def hours_until(instant: datetime, now: datetime | None = None) -> float:
    return (as_utc(instant) - as_utc(local_now(now))).total_seconds() / 3600

def days_until(instant: datetime, now: datetime | None = None) -> int:
    # calendar days, counted in the instant's own timezone
    today = local_now(now).astimezone(instant.tzinfo).date()
    return (instant.date() - today).days

def is_refund_eligible(hours: float) -> bool:
    return hours >= settings.CANCELLATION_REFUND_HOURS

def can_cancel(booking, now: datetime | None = None) -> bool:
    # what the client offers; the cancel operation itself only uses the window for refunds
    return booking.status == "confirmed" and hours_until(booking_instant(booking), now) >= settings.CANCELLATION_REFUND_HOURS

def can_reschedule(booking, now: datetime | None = None) -> bool:
    return booking.status == "confirmed" and hours_until(booking_instant(booking), now) >= settings.RESCHEDULE_MIN_NOTICE_HOURS

def can_join(booking, now: datetime | None = None) -> bool:
    if booking.status != "confirmed":
        return False
    start = as_utc(booking_instant(booking))
    now = as_utc(local_now(now))
    opens = start - timedelta(minutes=settings.JOIN_WINDOW_BEFORE_MINUTES)
    closes = start + timedelta(minutes=settings.JOIN_WINDOW_AFTER_MINUTES)
    return opens <= now <= closes

def is_upcoming(booking, now: datetime | None = None) -> bool:
    return booking.status == "confirmed" and as_utc(booking_instant(booking)) > as_utc(local_now(now))

def is_past(booking, now: datetime | None = None) -> bool:
    return booking.status == "completed" or as_utc(booking_instant(booking)) < as_utc(local_now(now))
