import datetime as dt

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from clearhead.modules.bookings.repository import BookingRepository
from clearhead.modules.notifications.models import OutboundMessage
from clearhead.modules.notifications.service import NotificationsService
from clearhead.modules.reminders.service import ReminderService
from tests.conftest import MONDAY, RecordingNotifier, at, insert_booking

SUNDAY_MORNING = at(MONDAY - dt.timedelta(days=1), "09:00")


async def seed_tomorrow(session, provider):
    a = await insert_booking(session, provider, time="09:00", user_email="a@example.com")
    b = await insert_booking(session, provider, time="10:00", user_email="b@example.com")
    c = await insert_booking(session, provider, time="14:00", user_email="c@example.com")
    await insert_booking(session, provider, time="11:00", status="cancelled", user_email="x@example.com")
    await insert_booking(session, provider, time="12:00", status="rescheduled", user_email="y@example.com")
    await insert_booking(session, provider, date=MONDAY + dt.timedelta(days=1), user_email="z@example.com")
    return a, b, c


async def test_reminders_go_to_tomorrows_confirmed_sessions(session, provider):
    a, b, c = await seed_tomorrow(session, provider)
    notifier = RecordingNotifier(fail_for={"b@example.com"})

    result = await ReminderService(session, notifier).run(SUNDAY_MORNING)
    assert result == {"date": MONDAY, "processed": 3, "sent": 2, "failed": 1}
    assert sorted(m["to"] for m in notifier.sent) == ["a@example.com", "c@example.com"]
    assert all(m["kind"] == "booking_reminder" for m in notifier.sent)
    assert "Tomorrow at 09:00" in notifier.to("a@example.com")[0]["subject"]

    repo = BookingRepository(session)
    flags = {}
    for booking in (a, b, c):
        await session.refresh(booking)
        flags[booking.user_email] = booking.reminder_sent
    assert flags == {"a@example.com": True, "b@example.com": False, "c@example.com": True}
    assert len(await repo.list_due_reminders(MONDAY)) == 1

    failed = (await session.execute(
        select(OutboundMessage).where(OutboundMessage.status == "failed")
    )).scalars().all()
    assert [m.to for m in failed] == ["b@example.com"]


async def test_second_run_only_retries_failures(session, provider):
    await seed_tomorrow(session, provider)
    notifier = RecordingNotifier(fail_for={"b@example.com"})
    svc = ReminderService(session, notifier)

    await svc.run(SUNDAY_MORNING)
    again = await svc.run(SUNDAY_MORNING)
    assert again == {"date": MONDAY, "processed": 1, "sent": 0, "failed": 1}
    assert len(notifier.to("a@example.com")) == 1

    notifier.fail_for.clear()
    last = await svc.run(SUNDAY_MORNING)
    assert last["sent"] == 1
    assert len(notifier.to("b@example.com")) == 1


async def test_missing_address_counts_as_failure(session, provider, notifier):
    await insert_booking(session, provider, user_email=None)
    result = await ReminderService(session, notifier).run(SUNDAY_MORNING)
    assert result["failed"] == 1 and result["sent"] == 0
    assert notifier.sent == []


async def test_nothing_due(session, provider, notifier):
    result = await ReminderService(session, notifier).run(SUNDAY_MORNING)
    assert result == {"date": MONDAY, "processed": 0, "sent": 0, "failed": 0}


async def test_lost_message_log_does_not_resend(session, provider, notifier, monkeypatch):
    booking = await insert_booking(session, provider, user_email="a@example.com")

    async def refuse(self, **kw):
        raise SQLAlchemyError("message log unavailable")

    monkeypatch.setattr(NotificationsService, "record", refuse)
    svc = ReminderService(session, notifier)
    assert (await svc.run(SUNDAY_MORNING))["sent"] == 1

    await session.refresh(booking)
    assert booking.reminder_sent is True
    assert (await svc.run(SUNDAY_MORNING))["processed"] == 0
    assert len(notifier.sent) == 1
