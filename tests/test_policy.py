import datetime as dt
from types import SimpleNamespace

import pytest

from clearhead.core.config import settings
from clearhead.modules.bookings import policy
from tests.conftest import MONDAY, at


def booking(status="confirmed", day=MONDAY, time="09:00", timezone="UTC"):
    return SimpleNamespace(status=status, date=day, time=time, timezone=timezone)


def test_hours_until_counts_fractional_hours():
    start = policy.scheduled_instant(MONDAY, "09:00", "UTC")
    assert policy.hours_until(start, at(MONDAY, "07:30")) == pytest.approx(1.5)
    assert policy.hours_until(start, at(MONDAY, "10:00")) == pytest.approx(-1.0)


def test_refund_threshold_is_inclusive():
    start = policy.scheduled_instant(MONDAY, "09:00", "UTC")
    assert policy.is_refund_eligible(policy.hours_until(start, at(MONDAY, "09:00") - dt.timedelta(hours=25)))
    assert policy.is_refund_eligible(24)
    assert not policy.is_refund_eligible(policy.hours_until(start, at(MONDAY, "09:00") - dt.timedelta(hours=23)))


def test_scheduled_instant_uses_booking_timezone():
    start = policy.scheduled_instant(MONDAY, "09:00", "America/New_York")
    assert start.astimezone(dt.timezone.utc).hour == 13


def test_unknown_timezone_falls_back_to_clinic_zone():
    start = policy.scheduled_instant(MONDAY, "09:00", "Not/AZone")
    assert start.utcoffset() == dt.timedelta(0)


def test_days_until_is_calendar_based():
    start = policy.scheduled_instant(MONDAY, "09:00", "UTC")
    assert policy.days_until(start, at(MONDAY - dt.timedelta(days=1), "23:59")) == 1
    assert policy.days_until(start, at(MONDAY, "08:00")) == 0


@pytest.mark.parametrize("now, expected", [
    (at(MONDAY, "08:44"), False),
    (at(MONDAY, "08:45"), True),
    (at(MONDAY, "09:30"), True),
    (at(MONDAY, "10:00"), True),
    (at(MONDAY, "10:01"), False),
])
def test_join_window(now, expected):
    assert policy.can_join(booking(), now) is expected


@pytest.mark.parametrize("status", ["cancelled", "rescheduled", "completed"])
def test_join_requires_confirmed(status):
    assert not policy.can_join(booking(status=status), at(MONDAY, "09:00"))


def test_can_reschedule_needs_notice():
    b = booking()
    assert policy.can_reschedule(b, at(MONDAY, "05:00"))
    assert not policy.can_reschedule(b, at(MONDAY, "06:00") + dt.timedelta(minutes=1))


def test_can_cancel_reflects_refund_window():
    b = booking()
    assert policy.can_cancel(b, at(MONDAY, "09:00") - dt.timedelta(hours=24))
    assert not policy.can_cancel(b, at(MONDAY, "09:00") - dt.timedelta(hours=23))
    assert not policy.can_cancel(booking(status="cancelled"), at(MONDAY, "09:00") - dt.timedelta(days=3))


def test_upcoming_and_past():
    b = booking()
    assert policy.is_upcoming(b, at(MONDAY, "08:00"))
    assert not policy.is_upcoming(b, at(MONDAY, "09:30"))
    assert policy.is_past(b, at(MONDAY, "09:30"))
    assert policy.is_past(booking(status="completed"), at(MONDAY, "08:00"))


def test_naive_now_is_read_as_clinic_time():
    assert policy.local_now(dt.datetime(2024, 6, 10, 9, 30)).tzinfo is not None


@pytest.fixture
def new_york(monkeypatch):
    monkeypatch.setattr(settings, "CLINIC_TIMEZONE", "America/New_York")


def zulu(y, m, d, hh, mm):
    return dt.datetime(y, m, d, hh, mm, tzinfo=dt.timezone.utc)


def test_hours_until_spans_spring_forward(new_york):
    # 09:00 EDT on the day clocks go forward is 23.5 real hours away
    start = policy.scheduled_instant(dt.date(2024, 3, 10), "09:00")
    hours = policy.hours_until(start, zulu(2024, 3, 9, 13, 30))
    assert hours == pytest.approx(23.5)
    assert not policy.is_refund_eligible(hours)


def test_hours_until_spans_fall_back(new_york):
    # 03:00 EST after clocks go back is 4.5 real hours away
    b = booking(day=dt.date(2024, 11, 3), time="03:00", timezone=None)
    now = zulu(2024, 11, 3, 3, 30)
    assert policy.hours_until(policy.booking_instant(b), now) == pytest.approx(4.5)
    assert policy.can_reschedule(b, now)


def test_join_window_spans_spring_forward(new_york):
    # 01:50 EST is ten real minutes before 03:00 EDT
    b = booking(day=dt.date(2024, 3, 10), time="03:00", timezone=None)
    assert policy.can_join(b, zulu(2024, 3, 10, 6, 50))
    assert not policy.can_join(b, zulu(2024, 3, 10, 6, 44))
    assert policy.is_upcoming(b, zulu(2024, 3, 10, 6, 50))
