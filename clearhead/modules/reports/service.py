import logging
import datetime as dt
from decimal import Decimal
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from clearhead.modules.bookings.repository import BookingRepository
from clearhead.modules.bookings.policy import now_utc
from clearhead.modules.reports.models import WeeklyReport

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")

class ReportService:
    def __init__(self, s: AsyncSession):
        self.s = s
        self.bookings = BookingRepository(s)

    async def generate(self, now: dt.datetime | None = None) -> WeeklyReport:
        since = (now or now_utc()) - dt.timedelta(days=7)
        rows = await self.bookings.list_created_since(since)
        completed = [b for b in rows if b.status == "completed"]
        revenue = sum((Decimal(b.amount or 0) for b in completed), Decimal("0"))
        average = (revenue / len(completed)).quantize(CENT) if completed else Decimal("0")
        report = WeeklyReport(
            week=since.date(),
            total_bookings=len(rows),
            completed_bookings=len(completed),
            total_revenue=revenue,
            average_session_value=average,
        )
        self.s.add(report)
        await self.s.commit()
        logger.info(f"Weekly report generated: week={report.week} bookings={report.total_bookings} completed={report.completed_bookings} revenue={revenue}")
        return report

    async def latest(self, limit: int = 12):
        res = await self.s.execute(select(WeeklyReport).order_by(WeeklyReport.week.desc()).limit(limit))
        return res.scalars().all()
