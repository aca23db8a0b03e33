import datetime as dt
from types import SimpleNamespace

from clearhead.modules.availability.service import AvailabilityService, template_slots, weekday_name
from tests.conftest import MONDAY, at, insert_booking


def test_weekday_name():
    assert weekday_name(MONDAY) == "monday"
    assert weekday_name(MONDAY + dt.timedelta(days=6)) == "sunday"


def test_same_day_slots_keep_only_later_hours():
    p = SimpleNamespace(is_active=True, availability={"monday": ["09:00", "10:00"]})
    assert template_slots(p, MONDAY, at(MONDAY, "09:30")) == ["10:00"]
    # the current hour is already gone even at the top of the hour
    assert template_slots(p, MONDAY, at(MONDAY, "09:00")) == ["10:00"]


def test_future_day_keeps_whole_template():
    p = SimpleNamespace(is_active=True, availability={"monday": ["09:00", "10:00"]})
    next_monday = MONDAY + dt.timedelta(days=7)
    assert template_slots(p, next_monday, at(MONDAY, "23:00")) == ["09:00", "10:00"]


def test_missing_or_inactive_provider_has_no_slots():
    assert template_slots(None, MONDAY) == []
    inactive = SimpleNamespace(is_active=False, availability={"monday": ["09:00"]})
    assert template_slots(inactive, MONDAY, at(MONDAY, "00:00")) == []
    no_sunday = SimpleNamespace(is_active=True, availability={"monday": ["09:00"]})
    assert template_slots(no_sunday, MONDAY + dt.timedelta(days=6), at(MONDAY, "00:00")) == []


async def test_slots_for_is_idempotent(session, provider):
    svc = AvailabilityService(session)
    now = at(MONDAY - dt.timedelta(days=1), "12:00")
    first = await svc.slots_for(provider.id, MONDAY, now)
    assert first == ["09:00", "10:00", "14:00"]
    assert await svc.slots_for(provider.id, MONDAY, now) == first
    assert await svc.slots_for("nobody", MONDAY, now) == []


async def test_is_available(session, provider):
    svc = AvailabilityService(session)
    now = at(MONDAY, "09:30")
    assert await svc.is_available(provider.id, MONDAY, "10:00", now)
    assert not await svc.is_available(provider.id, MONDAY, "09:00", now)
    assert not await svc.is_available(provider.id, MONDAY, "12:00", now)


async def test_open_slots_drop_active_bookings(session, provider):
    await insert_booking(session, provider, time="10:00")
    await insert_booking(session, provider, time="14:00", status="cancelled")
    svc = AvailabilityService(session)
    now = at(MONDAY - dt.timedelta(days=1), "12:00")
    assert await svc.open_slots(provider.id, MONDAY, now) == ["09:00", "14:00"]


async def test_available_providers_filters_by_day(session, provider):
    svc = AvailabilityService(session)
    now = at(MONDAY - dt.timedelta(days=1), "12:00")
    assert [p.id for p in await svc.available_providers(MONDAY, now=now)] == [provider.id]
    wednesday = MONDAY + dt.timedelta(days=2)
    assert await svc.available_providers(wednesday, now=now) == []
    assert await svc.available_providers(MONDAY, type="buddy", now=now) == []


async def test_next_available(session, provider):
    svc = AvailabilityService(session)
    # late Monday: today's slots are gone, Tuesday 11:00 is next
    assert await svc.next_available(provider.id, at(MONDAY, "15:30")) == {
        "date": MONDAY + dt.timedelta(days=1), "time": "11:00",
    }
    assert await svc.next_available(provider.id, at(MONDAY, "08:10")) == {"date": MONDAY, "time": "09:00"}
    assert await svc.next_available("nobody", at(MONDAY, "08:10")) is None
