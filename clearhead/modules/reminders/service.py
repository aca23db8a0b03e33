import asyncio
import logging
import datetime as dt
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError

from clearhead.modules.bookings.repository import BookingRepository
from clearhead.modules.bookings.notify import booking_variables
from clearhead.modules.bookings.policy import local_now
from clearhead.modules.notifications.service import NotificationsService
from clearhead.modules.notifications.templates import BOOKING_REMINDER
from clearhead.platform.ports.notifier import NotifierPort

logger = logging.getLogger(__name__)

class ReminderService:
    """Daily reminder batch for tomorrow's confirmed sessions.

    Deliveries fan out concurrently; each booking succeeds or fails on its
    own. A failed send leaves ``reminder_sent`` unset so the next run picks
    the booking up again.
    """

    def __init__(self, session: AsyncSession, notifier: NotifierPort | None = None):
        self.session = session
        self.bookings = BookingRepository(session)
        self.notifications = NotificationsService(session, notifier)

    async def _deliver(self, to: str | None, subject: str, body: str) -> str | None:
        if not to:
            return "no recipient address"
        return await self.notifications.deliver(to, BOOKING_REMINDER, subject, body)

    async def run(self, now: dt.datetime | None = None) -> dict:
        tomorrow = local_now(now).date() + dt.timedelta(days=1)
        due = list(await self.bookings.list_due_reminders(tomorrow))

        # render sequentially (one session), deliver concurrently (no session)
        rendered = []
        for b in due:
            variables = booking_variables(b)
            subject, body = await self.notifications.render(BOOKING_REMINDER, variables)
            # plain values only: a rollback below must not leave us reading expired rows
            rendered.append((b.id, b.user_email, variables, subject, body))
        errors = await asyncio.gather(*(self._deliver(to, subject, body) for _, to, _, subject, body in rendered))

        sent = failed = 0
        for (booking_id, to, variables, subject, body), error in zip(rendered, errors):
            if error:
                failed += 1
                logger.error(f"Failed to send reminder for booking {booking_id}: {error}")
            else:
                # the flag commits on its own, before the log row
                try:
                    await self.bookings.mark_reminder_sent(booking_id)
                    await self.session.commit()
                    sent += 1
                    logger.info(f"Reminder sent for booking {booking_id}")
                except SQLAlchemyError:
                    await self.session.rollback()
                    failed += 1
                    logger.exception(f"Reminder sent but not flagged for booking {booking_id}")
            if not to:
                continue
            try:
                await self.notifications.record(to=to, kind=BOOKING_REMINDER, subject=subject, body=body, variables=variables, error=error)
                await self.session.commit()
            except SQLAlchemyError:
                await self.session.rollback()
                logger.exception(f"Could not log reminder message for booking {booking_id}")

        logger.info(f"Processed {len(due)} reminder emails for {tomorrow}: sent={sent} failed={failed}")
        return {"date": tomorrow, "processed": len(due), "sent": sent, "failed": failed}
