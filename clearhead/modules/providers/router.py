from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from clearhead.core.db import get_session
from clearhead.core.security import require_roles
from clearhead.modules.providers.schemas import ProviderCreate, ProviderOut, AvailabilityUpdate, ProviderStatsOut
from clearhead.modules.providers.service import ProviderService

router = APIRouter()

def svc(s: AsyncSession = Depends(get_session)) -> ProviderService:
    return ProviderService(s)

@router.get("/providers", response_model=list[ProviderOut])
async def list_providers(
    type: str | None = Query(default=None, pattern="^(therapist|buddy)$"),
    q: str | None = None,
    service: ProviderService = Depends(svc),
):
    if q:
        return await service.search(q, type=type)
    return await service.list_providers(type=type)

@router.get("/providers/{provider_id}", response_model=ProviderOut)
async def get_provider(provider_id: str, service: ProviderService = Depends(svc)):
    return await service.get(provider_id)

@router.get("/providers/{provider_id}/stats", response_model=ProviderStatsOut)
async def provider_stats(provider_id: str, service: ProviderService = Depends(svc)):
    return await service.stats(provider_id)

# ---- Admin ----

@router.post("/providers", response_model=ProviderOut, dependencies=[Depends(require_roles("admin"))])
async def create_provider(payload: ProviderCreate, service: ProviderService = Depends(svc)):
    return await service.create(payload)

@router.put("/providers/{provider_id}/availability", response_model=ProviderOut, dependencies=[Depends(require_roles("admin"))])
async def update_availability(provider_id: str, payload: AvailabilityUpdate, service: ProviderService = Depends(svc)):
    return await service.update_availability(provider_id, payload.availability)

@router.post("/providers/{provider_id}/deactivate", response_model=ProviderOut, dependencies=[Depends(require_roles("admin"))])
async def deactivate_provider(provider_id: str, service: ProviderService = Depends(svc)):
    return await service.deactivate(provider_id)
