import uuid
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from clearhead.core.db import get_session
from clearhead.core.security import get_principal, require_roles, Principal
from clearhead.modules.bookings.schemas import (
    BookingCreate, BookingUpdate, BookingCancel, BookingReschedule, BookingComplete, BookingOut, JoinOut
)
from clearhead.modules.bookings.service import BookingService

router = APIRouter()

def svc(session: AsyncSession = Depends(get_session)) -> BookingService:
    return BookingService(session)

@router.post("/bookings", response_model=BookingOut, status_code=status.HTTP_201_CREATED)
async def create_booking(
    payload: BookingCreate,
    principal: Principal = Depends(get_principal),
    service: BookingService = Depends(svc),
):
    return await service.create(principal, payload)

@router.get("/bookings", response_model=list[BookingOut])
async def list_bookings(
    status: str | None = Query(default=None, pattern="^(confirmed|cancelled|rescheduled|completed)$"),
    principal: Principal = Depends(get_principal),
    service: BookingService = Depends(svc),
):
    return await service.list_for_user(principal.user_id, status=status)

@router.get("/bookings/upcoming", response_model=list[BookingOut])
async def upcoming_bookings(principal: Principal = Depends(get_principal), service: BookingService = Depends(svc)):
    return await service.upcoming(principal.user_id)

@router.get("/bookings/past", response_model=list[BookingOut])
async def past_bookings(principal: Principal = Depends(get_principal), service: BookingService = Depends(svc)):
    return await service.past(principal.user_id)

@router.get("/bookings/{booking_id}", response_model=BookingOut)
async def get_booking(booking_id: uuid.UUID, principal: Principal = Depends(get_principal), service: BookingService = Depends(svc)):
    return await service.get_for(principal, booking_id)

@router.patch("/bookings/{booking_id}", response_model=BookingOut)
async def update_booking(
    booking_id: uuid.UUID,
    payload: BookingUpdate,
    principal: Principal = Depends(get_principal),
    service: BookingService = Depends(svc),
):
    await service.get_for(principal, booking_id)
    return await service.update(booking_id, payload)

@router.post("/bookings/{booking_id}/cancel", response_model=BookingOut)
async def cancel_booking(
    booking_id: uuid.UUID,
    payload: BookingCancel,
    principal: Principal = Depends(get_principal),
    service: BookingService = Depends(svc),
):
    await service.get_for(principal, booking_id)
    return await service.cancel(booking_id, payload.reason)

@router.post("/bookings/{booking_id}/reschedule", response_model=BookingOut)
async def reschedule_booking(
    booking_id: uuid.UUID,
    payload: BookingReschedule,
    principal: Principal = Depends(get_principal),
    service: BookingService = Depends(svc),
):
    await service.get_for(principal, booking_id)
    return await service.reschedule(booking_id, payload.date, payload.time)

@router.post("/bookings/{booking_id}/complete", response_model=BookingOut, dependencies=[Depends(require_roles("admin"))])
async def complete_booking(booking_id: uuid.UUID, payload: BookingComplete, service: BookingService = Depends(svc)):
    return await service.complete(booking_id, payload.actual_duration)

@router.get("/bookings/{booking_id}/join", response_model=JoinOut)
async def join_session(booking_id: uuid.UUID, principal: Principal = Depends(get_principal), service: BookingService = Depends(svc)):
    obj = await service.join(principal, booking_id)
    return {"booking_id": obj.id, "meeting_link": obj.meeting_link, "meeting_password": obj.meeting_password}

# ---- Admin ----

@router.get("/admin/bookings", response_model=list[BookingOut], dependencies=[Depends(require_roles("admin"))])
async def list_all_bookings(
    status: str | None = Query(default=None, pattern="^(confirmed|cancelled|rescheduled|completed)$"),
    service: BookingService = Depends(svc),
):
    return await service.list_all(status=status)
