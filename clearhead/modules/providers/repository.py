from decimal import Decimal
from typing import Sequence
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, func
from clearhead.modules.providers.models import Provider

class ProviderRepository:
    def __init__(self, s: AsyncSession): self.s = s

    async def create(self, **data) -> Provider:
        obj = Provider(**data); self.s.add(obj); await self.s.flush(); return obj

    async def get(self, provider_id: str) -> Provider | None:
        return await self.s.get(Provider, provider_id)

    async def list(self, *, type: str | None = None, active_only: bool = True) -> Sequence[Provider]:
        q = select(Provider)
        if active_only:
            q = q.where(Provider.is_active.is_(True))
        if type:
            q = q.where(Provider.type == type)
        res = await self.s.execute(q.order_by(Provider.rank.asc(), Provider.name.asc()))
        return res.scalars().all()

    async def count(self) -> int:
        res = await self.s.execute(select(func.count()).select_from(Provider))
        return int(res.scalar_one())

    async def set_availability(self, provider: Provider, availability: dict) -> Provider:
        provider.availability = availability; await self.s.flush(); return provider

    async def set_active(self, provider: Provider, active: bool) -> Provider:
        provider.is_active = active; await self.s.flush(); return provider

    # counters: single UPDATE ... SET col = col + n, never read-then-write
    async def increment_bookings(self, provider_id: str, n: int = 1) -> None:
        await self.s.execute(
            update(Provider).where(Provider.id == provider_id)
            .values(total_bookings=Provider.total_bookings + n)
        )

    async def increment_completed(self, provider_id: str, revenue: Decimal) -> None:
        await self.s.execute(
            update(Provider).where(Provider.id == provider_id)
            .values(
                completed_sessions=Provider.completed_sessions + 1,
                total_revenue=Provider.total_revenue + revenue,
            )
        )
