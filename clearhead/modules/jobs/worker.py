"""
ARQ worker for the scheduled jobs.

Run with ``arq clearhead.modules.jobs.worker.WorkerSettings``. Cron times are
read in the clinic timezone.
"""
import logging
from typing import Awaitable, Callable

from arq.connections import RedisSettings
from arq.cron import cron
from sqlalchemy.ext.asyncio import AsyncSession

from clearhead.core.config import settings
from clearhead.core.db import SessionLocal
from clearhead.core.logging import setup_logging
from clearhead.modules.bookings.policy import zone
from clearhead.modules.reminders.service import ReminderService
from clearhead.modules.reports.service import ReportService
from clearhead.platform.provider_registry import registry

log = logging.getLogger("jobs.worker")

def get_redis_settings() -> RedisSettings:
    return RedisSettings.from_dsn(settings.REDIS_URL or "redis://localhost:6379")

async def run_job(name: str, job: Callable[[AsyncSession], Awaitable[object]]):
    # one session per run; a failure rolls back only this run
    async with SessionLocal() as session:
        try:
            result = await job(session)
        except Exception:
            log.exception(f"Job {name} failed")
            await session.rollback()
            raise
    log.info(f"Job {name} finished: {result}")
    return result

async def send_daily_reminders(ctx):
    return await run_job("daily_reminders", lambda s: ReminderService(s).run())

async def generate_weekly_report(ctx):
    return await run_job("weekly_report", lambda s: ReportService(s).generate())

async def startup(ctx):
    setup_logging()
    log.info(f"Worker started tz={settings.CLINIC_TIMEZONE}")

async def shutdown(ctx):
    await registry.close()

class WorkerSettings:
    functions = [send_daily_reminders, generate_weekly_report]
    cron_jobs = [
        cron(send_daily_reminders, hour=settings.REMINDER_HOUR, minute=settings.REMINDER_MINUTE),
        cron(generate_weekly_report, weekday=settings.WEEKLY_REPORT_WEEKDAY, hour=settings.WEEKLY_REPORT_HOUR, minute=0),
    ]
    redis_settings = get_redis_settings()
    timezone = zone()
    on_startup = startup
    on_shutdown = shutdown
