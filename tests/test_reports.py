import datetime as dt
from decimal import Decimal

from clearhead.modules.reports.service import ReportService
from tests.conftest import MONDAY, at, insert_booking

NOW = at(MONDAY, "09:00")


async def test_weekly_report_totals(session, provider):
    recent = NOW - dt.timedelta(days=2)
    await insert_booking(session, provider, time="09:00", status="completed", amount=Decimal("100"), created_at=recent)
    await insert_booking(session, provider, time="10:00", status="completed", amount=Decimal("50"), created_at=recent)
    await insert_booking(session, provider, time="14:00", created_at=recent)
    await insert_booking(session, provider, date=MONDAY.replace(day=11), status="completed",
                         amount=Decimal("999"), created_at=NOW - dt.timedelta(days=30))

    report = await ReportService(session).generate(NOW)
    assert report.week == (NOW - dt.timedelta(days=7)).date()
    assert report.total_bookings == 3
    assert report.completed_bookings == 2
    assert report.total_revenue == Decimal("150")
    assert report.average_session_value == Decimal("75.00")

    [latest] = await ReportService(session).latest()
    assert latest.id == report.id


async def test_empty_week(session):
    report = await ReportService(session).generate(NOW)
    assert (report.total_bookings, report.completed_bookings) == (0, 0)
    assert report.average_session_value == Decimal("0")
