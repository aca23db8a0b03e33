import logging
import datetime as dt
from sqlalchemy.ext.asyncio import AsyncSession
from clearhead.core.errors import NotFound
from clearhead.modules.providers.models import Provider
from clearhead.modules.providers.repository import ProviderRepository
from clearhead.modules.providers.schemas import ProviderCreate
from clearhead.modules.providers.seed import DEFAULT_PROVIDERS
from clearhead.modules.availability.service import AvailabilityService
from clearhead.modules.events.service import OutboxService
from clearhead.modules.events import models as events

logger = logging.getLogger(__name__)

def matches(provider: Provider, query: str) -> bool:
    q = query.lower()
    return (
        q in provider.name.lower()
        or q in (provider.title or "").lower()
        or any(q in s.lower() for s in provider.specialties or [])
    )

class ProviderService:
    def __init__(self, s: AsyncSession):
        self.s = s
        self.repo = ProviderRepository(s)

    async def list_providers(self, type: str | None = None) -> list[Provider]:
        return await self.repo.list(type=type)

    async def get(self, provider_id: str) -> Provider:
        obj = await self.repo.get(provider_id)
        if not obj:
            raise NotFound("We couldn't find that provider.", detail=f"provider {provider_id} not found")
        return obj

    async def search(self, query: str, type: str | None = None) -> list[Provider]:
        return [p for p in await self.repo.list(type=type) if matches(p, query)]

    async def stats(self, provider_id: str, now: dt.datetime | None = None) -> dict:
        p = await self.get(provider_id)
        return {
            "rating": p.rating,
            "hourly_rate": p.hourly_rate,
            "specialties": p.specialties,
            "total_slots_this_week": sum(len(v) for v in (p.availability or {}).values()),
            "next_available": await AvailabilityService(self.s).next_available(provider_id, now),
        }

    # ---- Admin ----
    async def create(self, payload: ProviderCreate) -> Provider:
        obj = await self.repo.create(**payload.model_dump())
        await self.s.commit()
        return obj

    async def update_availability(self, provider_id: str, availability: dict[str, list[str]]) -> Provider:
        p = await self.get(provider_id)
        await self.repo.set_availability(p, availability)
        await OutboxService(self.s).enqueue(
            events.PROVIDER_AVAILABILITY_UPDATED, "provider", p.id,
            {"days": sorted(availability.keys())}
        )
        await self.s.commit()
        return p

    async def deactivate(self, provider_id: str) -> Provider:
        p = await self.get(provider_id)
        await self.repo.set_active(p, False)
        await self.s.commit()
        return p

    async def seed_defaults(self) -> int:
        if await self.repo.count():
            return 0
        for rank, data in enumerate(DEFAULT_PROVIDERS):
            await self.repo.create(rank=rank, is_active=True, **data)
        await self.s.commit()
        logger.info(f"Seeded {len(DEFAULT_PROVIDERS)} default providers")
        return len(DEFAULT_PROVIDERS)
