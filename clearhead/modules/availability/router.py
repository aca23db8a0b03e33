import datetime as dt
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from clearhead.core.db import get_session
from clearhead.core.errors import NotFound
from clearhead.modules.availability.schemas import SlotsOut, AvailabilityCheckOut
from clearhead.modules.availability.service import AvailabilityService
from clearhead.modules.providers.schemas import ProviderOut, NextAvailableOut

router = APIRouter()

def svc(s: AsyncSession = Depends(get_session)) -> AvailabilityService:
    return AvailabilityService(s)

@router.get("/availability/providers", response_model=list[ProviderOut])
async def available_providers(
    date: dt.date,
    type: str | None = Query(default=None, pattern="^(therapist|buddy)$"),
    service: AvailabilityService = Depends(svc),
):
    return await service.available_providers(date, type=type)

@router.get("/availability/{provider_id}/slots", response_model=SlotsOut)
async def slots(provider_id: str, date: dt.date, open_only: bool = False, service: AvailabilityService = Depends(svc)):
    found = await (service.open_slots(provider_id, date) if open_only else service.slots_for(provider_id, date))
    return {"provider_id": provider_id, "date": date, "slots": found}

@router.get("/availability/{provider_id}/check", response_model=AvailabilityCheckOut)
async def check(provider_id: str, date: dt.date, time: str = Query(..., pattern=r"^([01]\d|2[0-3]):[0-5]\d$"), service: AvailabilityService = Depends(svc)):
    ok = await service.is_available(provider_id, date, time)
    return {"provider_id": provider_id, "date": date, "time": time, "available": ok}

@router.get("/availability/{provider_id}/next", response_model=NextAvailableOut)
async def next_available(provider_id: str, service: AvailabilityService = Depends(svc)):
    nxt = await service.next_available(provider_id)
    if not nxt:
        raise NotFound("No availability in the next two weeks.", detail=f"{provider_id} has no slots within horizon")
    return nxt
