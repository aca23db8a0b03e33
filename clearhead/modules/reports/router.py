from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from clearhead.core.db import get_session
from clearhead.core.security import require_roles
from clearhead.modules.reports.schemas import WeeklyReportOut
from clearhead.modules.reports.service import ReportService

router = APIRouter(dependencies=[Depends(require_roles("admin"))])

@router.get("/reports/weekly", response_model=list[WeeklyReportOut])
async def weekly_reports(limit: int = Query(12, ge=1, le=104), s: AsyncSession = Depends(get_session)):
    return await ReportService(s).latest(limit)
