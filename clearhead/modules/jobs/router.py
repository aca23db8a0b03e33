from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from clearhead.core.db import get_session
from clearhead.core.security import require_roles
from clearhead.modules.reminders.service import ReminderService
from clearhead.modules.reports.schemas import WeeklyReportOut
from clearhead.modules.reports.service import ReportService

router = APIRouter(dependencies=[Depends(require_roles("admin"))])

# manual triggers for the scheduled jobs

@router.post("/jobs/reminders/run")
async def run_reminders(s: AsyncSession = Depends(get_session)):
    return await ReminderService(s).run()

@router.post("/jobs/reports/weekly/run", response_model=WeeklyReportOut)
async def run_weekly_report(s: AsyncSession = Depends(get_session)):
    return await ReportService(s).generate()
