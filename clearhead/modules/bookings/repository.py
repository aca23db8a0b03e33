import uuid
import datetime as dt
from typing import Sequence
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, and_
from clearhead.modules.bookings.models import Booking
from clearhead.modules.bookings.policy import ACTIVE_STATUSES

class BookingRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, **data) -> Booking:
        obj = Booking(**data)
        self.session.add(obj)
        await self.session.flush()
        return obj

    async def get(self, booking_id: uuid.UUID) -> Booking | None:
        return await self.session.get(Booking, booking_id)

    async def list_for_user(self, user_id: str, *, status: str | None = None) -> Sequence[Booking]:
        cond = [Booking.user_id == user_id]
        if status:
            cond.append(Booking.status == status)
        q = select(Booking).where(and_(*cond)).order_by(Booking.date.asc(), Booking.time.asc())
        res = await self.session.execute(q)
        return res.scalars().all()

    async def list_all(self, *, status: str | None = None) -> Sequence[Booking]:
        q = select(Booking)
        if status:
            q = q.where(Booking.status == status)
        res = await self.session.execute(q.order_by(Booking.date.asc(), Booking.time.asc()))
        return res.scalars().all()

    async def list_active_for_slot(self, provider_id: str, day: dt.date, at: str | None = None) -> Sequence[Booking]:
        cond = [Booking.provider_id == provider_id, Booking.date == day, Booking.status.in_(ACTIVE_STATUSES)]
        if at:
            cond.append(Booking.time == at)
        res = await self.session.execute(select(Booking).where(and_(*cond)))
        return res.scalars().all()

    async def list_due_reminders(self, day: dt.date) -> Sequence[Booking]:
        q = select(Booking).where(
            and_(Booking.date == day,
                 Booking.status == "confirmed",
                 Booking.reminder_sent.is_(False))
        ).order_by(Booking.time.asc())
        res = await self.session.execute(q)
        return res.scalars().all()

    async def list_created_since(self, since: dt.datetime) -> Sequence[Booking]:
        res = await self.session.execute(select(Booking).where(Booking.created_at >= since))
        return res.scalars().all()

    async def mark_reminder_sent(self, booking_id: uuid.UUID) -> None:
        await self.session.execute(
            update(Booking).where(Booking.id == booking_id).values(reminder_sent=True)
        )
