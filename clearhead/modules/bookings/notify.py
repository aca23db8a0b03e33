import uuid
import logging
from sqlalchemy.ext.asyncio import AsyncSession
from clearhead.core.config import settings
from clearhead.core.errors import NotificationFailure
from clearhead.modules.bookings.models import Booking
from clearhead.modules.notifications.service import NotificationsService
from clearhead.modules.notifications.templates import BOOKING_CONFIRMATION
from clearhead.platform.ports.notifier import NotifierPort

logger = logging.getLogger(__name__)

def meeting_link(booking_id: uuid.UUID) -> str:
    # sessions run on the in-app call screen
    return f"{settings.FRONTEND_URL.rstrip('/')}/call/{booking_id}"

def meeting_password() -> str:
    return uuid.uuid4().hex[:8].upper()

def booking_variables(b: Booking) -> dict:
    return {
        "booking_id": str(b.id),
        "provider_name": b.provider_name,
        "user_name": b.user_name or "",
        "date": b.date.isoformat(),
        "date_long": b.date.strftime("%A, %B %d, %Y"),
        "time": b.time,
        "duration": b.duration,
        "session_format": b.session_format,
        "amount": str(b.amount),
        "meeting_link": b.meeting_link,
        "frontend_url": settings.FRONTEND_URL.rstrip("/"),
    }

class BookingNotifier:
    def __init__(self, s: AsyncSession, notifier: NotifierPort | None = None):
        self.s = s
        self.notifications = NotificationsService(s, notifier)

    async def dispatch_confirmation(self, booking: Booking) -> bool:
        """Attach meeting credentials, then email the user and the provider.

        Returns False if any recipient could not be reached. Never raises
        NotificationFailure; the booking stands either way.
        """
        booking.meeting_link = meeting_link(booking.id)
        booking.meeting_password = meeting_password()
        await self.s.commit()

        variables = booking_variables(booking)
        ok = True
        for to, extra in ((booking.user_email, {}), (booking.provider_email, {"is_provider_email": "yes"})):
            if not to:
                continue
            try:
                await self.notifications.send(to=to, kind=BOOKING_CONFIRMATION, variables={**variables, **extra})
            except NotificationFailure as e:
                logger.error(f"Confirmation for booking {booking.id} not delivered: {e}")
                ok = False
        return ok
