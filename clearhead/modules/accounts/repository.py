from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, and_
from clearhead.modules.accounts.models import UserProfile
from clearhead.modules.bookings.models import Booking

class AccountRepository:
    def __init__(self, s: AsyncSession): self.s = s

    async def get(self, user_id: str) -> UserProfile | None:
        return await self.s.get(UserProfile, user_id)

    async def upsert(self, user_id: str, **data) -> UserProfile:
        obj = await self.get(user_id)
        if obj is None:
            obj = UserProfile(id=user_id, **data); self.s.add(obj)
        else:
            for k, v in data.items():
                if v is not None:
                    setattr(obj, k, v)
        await self.s.flush(); return obj

    async def delete(self, user_id: str) -> None:
        obj = await self.get(user_id)
        if obj is not None:
            await self.s.delete(obj); await self.s.flush()

    async def cancel_confirmed_bookings(self, user_id: str, *, reason: str, at) -> int:
        res = await self.s.execute(
            update(Booking)
            .where(and_(Booking.user_id == user_id, Booking.status == "confirmed"))
            .values(status="cancelled", cancellation_reason=reason, cancelled_at=at, cancelled_by="system")
            .execution_options(synchronize_session=False)
        )
        return res.rowcount or 0
