import datetime as dt
from sqlalchemy.ext.asyncio import AsyncSession
from clearhead.modules.providers.models import Provider, WEEKDAYS
from clearhead.modules.providers.repository import ProviderRepository
from clearhead.modules.bookings.repository import BookingRepository
from clearhead.modules.bookings.policy import local_now, slot_hour

NEXT_AVAILABLE_HORIZON_DAYS = 14

def weekday_name(day: dt.date) -> str:
    return WEEKDAYS[day.weekday()]

def template_slots(provider: Provider | None, day: dt.date, now: dt.datetime | None = None) -> list[str]:
    """Open slots of a provider's weekly template on `day`.

    Same-day slots are gated on the hour only: a slot stays open while its
    hour is strictly after the current hour (09:00 is gone at 09:30).
    """
    if provider is None or not provider.is_active:
        return []
    slots = list((provider.availability or {}).get(weekday_name(day), []))
    today = local_now(now)
    if day == today.date():
        return [s for s in slots if slot_hour(s) > today.hour]
    return slots

class AvailabilityService:
    def __init__(self, s: AsyncSession):
        self.s = s
        self.providers = ProviderRepository(s)
        self.bookings = BookingRepository(s)

    async def slots_for(self, provider_id: str, day: dt.date, now: dt.datetime | None = None) -> list[str]:
        provider = await self.providers.get(provider_id)
        return template_slots(provider, day, now)

    async def is_available(self, provider_id: str, day: dt.date, at: str, now: dt.datetime | None = None) -> bool:
        return at in await self.slots_for(provider_id, day, now)

    async def open_slots(self, provider_id: str, day: dt.date, now: dt.datetime | None = None) -> list[str]:
        # template slots minus the ones already held by an active booking
        slots = await self.slots_for(provider_id, day, now)
        if not slots:
            return slots
        taken = {b.time for b in await self.bookings.list_active_for_slot(provider_id, day)}
        return [s for s in slots if s not in taken]

    async def available_providers(self, day: dt.date, type: str | None = None, now: dt.datetime | None = None) -> list[Provider]:
        providers = await self.providers.list(type=type)
        return [p for p in providers if template_slots(p, day, now)]

    async def next_available(self, provider_id: str, now: dt.datetime | None = None, horizon_days: int = NEXT_AVAILABLE_HORIZON_DAYS) -> dict | None:
        provider = await self.providers.get(provider_id)
        if provider is None:
            return None
        today = local_now(now).date()
        for i in range(horizon_days):
            day = today + dt.timedelta(days=i)
            slots = template_slots(provider, day, now)
            if slots:
                return {"date": day, "time": slots[0]}
        return None
