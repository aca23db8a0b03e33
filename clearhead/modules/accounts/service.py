import logging
import datetime as dt
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError
from clearhead.core.config import settings
from clearhead.core.errors import NotificationFailure, StoreFailure
from clearhead.core.security import Principal
from clearhead.modules.accounts.models import UserProfile
from clearhead.modules.accounts.repository import AccountRepository
from clearhead.modules.bookings.policy import local_now
from clearhead.modules.notifications.service import NotificationsService
from clearhead.modules.notifications.templates import WELCOME
from clearhead.platform.ports.notifier import NotifierPort

logger = logging.getLogger(__name__)

def greeting_name(first_name: str | None, display_name: str | None) -> str:
    if first_name:
        return first_name
    if display_name and display_name.split():
        return display_name.split()[0]
    return "there"

class AccountService:
    def __init__(self, s: AsyncSession, notifier: NotifierPort | None = None):
        self.s = s
        self.repo = AccountRepository(s)
        self.notifier = notifier

    async def on_signup(self, principal: Principal, first_name: str | None = None, display_name: str | None = None) -> UserProfile:
        try:
            profile = await self.repo.upsert(
                principal.user_id, email=principal.email, first_name=first_name,
                display_name=display_name or principal.name,
            )
            await self.s.commit()
        except SQLAlchemyError as e:
            await self.s.rollback()
            raise StoreFailure(detail=f"signup {principal.user_id}: {e}") from e

        if profile.email:
            try:
                await NotificationsService(self.s, self.notifier).send(
                    to=profile.email, kind=WELCOME,
                    variables={
                        "first_name": greeting_name(profile.first_name, profile.display_name),
                        "email": profile.email,
                        "frontend_url": settings.FRONTEND_URL.rstrip("/"),
                    },
                )
                logger.info(f"Welcome email sent to {profile.email}")
            except NotificationFailure as e:
                logger.error(f"Error sending welcome email to {profile.email}: {e}")
        return profile

    async def delete_account(self, user_id: str, now: dt.datetime | None = None) -> int:
        """Cancel the user's confirmed sessions and drop the profile, all in one transaction."""
        try:
            cancelled = await self.repo.cancel_confirmed_bookings(user_id, reason="Account deleted", at=local_now(now))
            await self.repo.delete(user_id)
            await self.s.commit()
        except SQLAlchemyError as e:
            await self.s.rollback()
            raise StoreFailure(detail=f"delete account {user_id}: {e}") from e
        logger.info(f"Cleaned up data for user {user_id}: {cancelled} bookings cancelled")
        return cancelled
