import uuid
import logging
import datetime as dt
from contextlib import asynccontextmanager
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from clearhead.core.config import settings
from clearhead.core.errors import NotFound, PolicyViolation, SlotUnavailable, InvalidTransition, StoreFailure
from clearhead.core.security import Principal
from clearhead.modules.bookings.models import Booking
from clearhead.modules.bookings.repository import BookingRepository
from clearhead.modules.bookings.schemas import BookingCreate, BookingUpdate
from clearhead.modules.bookings.notify import BookingNotifier
from clearhead.modules.bookings import policy
from clearhead.modules.providers.repository import ProviderRepository
from clearhead.modules.availability.service import AvailabilityService
from clearhead.modules.events.service import OutboxService
from clearhead.modules.events import models as events
from clearhead.platform.ports.notifier import NotifierPort

logger = logging.getLogger(__name__)

class BookingService:
    def __init__(self, session: AsyncSession, notifier: NotifierPort | None = None):
        self.session = session
        self.bookings = BookingRepository(session)
        self.providers = ProviderRepository(session)
        self.availability = AvailabilityService(session)
        self.notifier = notifier

    @asynccontextmanager
    async def _write(self, action: str):
        # commit or roll back as a unit; store errors never leave partial state behind
        try:
            yield
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            logger.warning(f"Slot conflict during {action}: {e.orig}")
            raise SlotUnavailable(detail=f"{action}: {e.orig}") from e
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"Store failure during {action}: {e}")
            raise StoreFailure(detail=f"{action}: {e}") from e

    async def _ensure_open(self, provider_id: str, day: dt.date, at: str, now: dt.datetime | None, exclude: uuid.UUID | None = None):
        if not await self.availability.is_available(provider_id, day, at, now):
            raise SlotUnavailable(detail=f"{provider_id} has no slot {day} {at}")
        taken = [b for b in await self.bookings.list_active_for_slot(provider_id, day, at) if b.id != exclude]
        if taken:
            raise SlotUnavailable(detail=f"{provider_id} {day} {at} already booked")

    # ---- Reads ----
    async def get(self, booking_id: uuid.UUID) -> Booking:
        obj = await self.bookings.get(booking_id)
        if not obj:
            raise NotFound("We couldn't find that session.", detail=f"booking {booking_id} not found")
        return obj

    async def get_for(self, principal: Principal, booking_id: uuid.UUID) -> Booking:
        obj = await self.get(booking_id)
        if obj.user_id != principal.user_id and not principal.is_admin:
            raise NotFound("We couldn't find that session.", detail=f"booking {booking_id} not owned by {principal.user_id}")
        return obj

    async def list_for_user(self, user_id: str, status: str | None = None):
        return await self.bookings.list_for_user(user_id, status=status)

    async def list_all(self, status: str | None = None):
        return await self.bookings.list_all(status=status)

    async def upcoming(self, user_id: str, now: dt.datetime | None = None) -> list[Booking]:
        rows = [b for b in await self.bookings.list_for_user(user_id) if policy.is_upcoming(b, now)]
        return sorted(rows, key=lambda b: policy.as_utc(policy.booking_instant(b)))

    async def past(self, user_id: str, now: dt.datetime | None = None) -> list[Booking]:
        rows = [b for b in await self.bookings.list_for_user(user_id) if policy.is_past(b, now)]
        return sorted(rows, key=lambda b: policy.as_utc(policy.booking_instant(b)), reverse=True)

    # ---- Lifecycle ----
    async def create(self, principal: Principal, payload: BookingCreate, now: dt.datetime | None = None) -> Booking:
        provider = await self.providers.get(payload.provider_id)
        if not provider or not provider.is_active:
            raise NotFound("We couldn't find that provider.", detail=f"provider {payload.provider_id} not found")
        if settings.ENFORCE_SLOT_AVAILABILITY:
            await self._ensure_open(provider.id, payload.date, payload.time, now)

        async with self._write("create booking"):
            obj = await self.bookings.create(
                user_id=principal.user_id,
                user_email=principal.email,
                user_name=payload.user_name or principal.name,
                provider_id=provider.id,
                provider_name=provider.name,
                provider_email=provider.email,
                provider_type=provider.type,
                date=payload.date,
                time=payload.time,
                timezone=payload.timezone or settings.CLINIC_TIMEZONE,
                duration=payload.duration,
                session_format=payload.session_format,
                notes=payload.notes or "",
                amount=payload.amount,
                payment_status=payload.payment_status,
                status="confirmed",
                reminder_sent=False,
                meeting_link="",
                meeting_password="",
            )
            await self.providers.increment_bookings(provider.id)
            await OutboxService(self.session).enqueue(
                events.BOOKING_CREATED, "booking", obj.id,
                {"provider_id": provider.id, "date": obj.date.isoformat(), "time": obj.time}
            )
        await self.session.refresh(obj)
        logger.info(f"Booking {obj.id} created for user {obj.user_id} with {provider.id} on {obj.date} {obj.time}")

        try:
            await BookingNotifier(self.session, self.notifier).dispatch_confirmation(obj)
        except Exception:
            # the booking stands even when the confirmation step fails
            logger.exception(f"Confirmation dispatch failed for booking {obj.id}")
            await self.session.rollback()
            await self.session.refresh(obj)
        return obj

    async def cancel(self, booking_id: uuid.UUID, reason: str = "", now: dt.datetime | None = None, cancelled_by: str = "user") -> Booking:
        obj = await self.get(booking_id)
        if obj.status == "cancelled":
            logger.info(f"Booking {obj.id} already cancelled; nothing to do")
            return obj
        if obj.status == "completed":
            raise InvalidTransition("This session has already taken place.", detail=f"cancel {obj.id} from completed")

        now = policy.local_now(now)
        hours = policy.hours_until(policy.booking_instant(obj), now)
        async with self._write("cancel booking"):
            obj.status = "cancelled"
            obj.cancellation_reason = reason
            obj.cancelled_at = now
            obj.cancelled_by = cancelled_by
            obj.refund_eligible = policy.is_refund_eligible(hours)
            await OutboxService(self.session).enqueue(
                events.BOOKING_CANCELLED, "booking", obj.id,
                {"refund_eligible": obj.refund_eligible, "hours_before": round(hours, 2)}
            )
        logger.info(f"Booking {obj.id} cancelled {hours:.1f}h ahead, refund_eligible={obj.refund_eligible}")
        return obj

    async def reschedule(self, booking_id: uuid.UUID, new_date: dt.date, new_time: str, now: dt.datetime | None = None) -> Booking:
        obj = await self.get(booking_id)
        if obj.status in ("cancelled", "completed"):
            raise InvalidTransition(detail=f"reschedule {obj.id} from {obj.status}")

        now = policy.local_now(now)
        hours = policy.hours_until(policy.booking_instant(obj), now)
        if hours < settings.RESCHEDULE_MIN_NOTICE_HOURS:
            raise PolicyViolation(
                f"Reschedule must be done at least {settings.RESCHEDULE_MIN_NOTICE_HOURS} hours before the session.",
                detail=f"reschedule {obj.id} {hours:.2f}h ahead",
            )
        if settings.ENFORCE_SLOT_AVAILABILITY:
            await self._ensure_open(obj.provider_id, new_date, new_time, now, exclude=obj.id)

        async with self._write("reschedule booking"):
            if obj.original_date is None:
                obj.original_date = obj.date
                obj.original_time = obj.time
            prev = {"date": obj.date.isoformat(), "time": obj.time}
            obj.date = new_date
            obj.time = new_time
            obj.status = "rescheduled"
            obj.rescheduled_at = now
            await OutboxService(self.session).enqueue(
                events.BOOKING_RESCHEDULED, "booking", obj.id,
                {"from": prev, "to": {"date": new_date.isoformat(), "time": new_time}}
            )
        logger.info(f"Booking {obj.id} rescheduled to {new_date} {new_time}")
        return obj

    async def complete(self, booking_id: uuid.UUID, actual_duration: int | None = None, now: dt.datetime | None = None) -> Booking:
        obj = await self.get(booking_id)
        if obj.status == "completed":
            return obj
        if obj.status == "cancelled":
            raise InvalidTransition("A cancelled session can't be completed.", detail=f"complete {obj.id} from cancelled")

        async with self._write("complete booking"):
            obj.status = "completed"
            obj.actual_duration = actual_duration if actual_duration is not None else obj.duration
            obj.completed_at = policy.local_now(now)
            await self.providers.increment_completed(obj.provider_id, obj.amount or 0)
            await OutboxService(self.session).enqueue(
                events.BOOKING_COMPLETED, "booking", obj.id,
                {"provider_id": obj.provider_id, "amount": str(obj.amount), "actual_duration": obj.actual_duration}
            )
        logger.info(f"Booking {obj.id} completed")
        return obj

    async def update(self, booking_id: uuid.UUID, payload: BookingUpdate) -> Booking:
        obj = await self.get(booking_id)
        async with self._write("update booking"):
            for k, v in payload.model_dump(exclude_unset=True).items():
                setattr(obj, k, v)
        return obj

    @staticmethod
    def can_join(booking: Booking, now: dt.datetime | None = None) -> bool:
        return policy.can_join(booking, now)

    async def join(self, principal: Principal, booking_id: uuid.UUID, now: dt.datetime | None = None) -> Booking:
        obj = await self.get_for(principal, booking_id)
        if not policy.can_join(obj, now):
            raise PolicyViolation(
                f"You can join from {settings.JOIN_WINDOW_BEFORE_MINUTES} minutes before the session "
                f"until {settings.JOIN_WINDOW_AFTER_MINUTES} minutes after it starts.",
                detail=f"join {obj.id} outside window",
            )
        return obj
