import uuid
import asyncio
import logging
from datetime import datetime
from sqlalchemy.ext.asyncio import AsyncSession

from clearhead.core.config import settings
from clearhead.core.db import SessionLocal
from clearhead.modules.events.models import EventOutbox
from clearhead.modules.events.repository import OutboxRepository
from clearhead.platform.ports.event_bus import EventBusPort
from clearhead.platform.provider_registry import registry

log = logging.getLogger("event.outbox")

TOPIC = "clearhead.events"

class OutboxService:
    """Records domain events in the caller's transaction; the relay publishes them after commit."""

    def __init__(self, s: AsyncSession):
        self.repo = OutboxRepository(s)

    async def enqueue(self, event_type: str, subject_type: str, subject_id: str | uuid.UUID, payload: dict, occurred_at: datetime | None = None) -> EventOutbox:
        return await self.repo.add(
            event_type=event_type, subject_type=subject_type, subject_id=str(subject_id),
            payload=payload, occurred_at=occurred_at,
        )

def event_message(ev: EventOutbox) -> dict:
    return {
        "event_type": ev.event_type,
        "subject": {"type": ev.subject_type, "id": ev.subject_id},
        "payload": ev.payload,
        "occurred_at": ev.occurred_at.isoformat() if ev.occurred_at else None,
        "outbox_id": str(ev.id),
    }

class OutboxRelay:
    def __init__(self, bus: EventBusPort | None = None, batch_size: int | None = None):
        self.bus = bus or registry.event_bus()
        self.batch_size = batch_size or settings.OUTBOX_BATCH_SIZE

    async def publish_pending(self, session: AsyncSession) -> int:
        """Publish one batch of due events. Returns how many were claimed."""
        repo = OutboxRepository(session)
        batch = await repo.claim_due(self.batch_size)
        for ev in batch:
            try:
                await self.bus.publish(topic=TOPIC, key=ev.subject_id or "-", value=event_message(ev))
                await repo.mark_published(ev)
            except Exception as ex:
                log.warning(f"Publish of {ev.event_type} {ev.id} failed (attempt {ev.attempts + 1}): {ex}")
                await repo.mark_failed(ev, error=str(ex) or ex.__class__.__name__)
                if ev.status == "dead":
                    log.error(f"Giving up on outbox event {ev.id} after {ev.attempts} attempts")
        await session.commit()
        return len(batch)

    async def run(self, poll_interval_seconds: float | None = None):
        interval = poll_interval_seconds or settings.OUTBOX_POLL_SECONDS
        log.info("Outbox relay started with bus=%s", self.bus.__class__.__name__)
        try:
            while True:
                async with SessionLocal() as session:
                    try:
                        claimed = await self.publish_pending(session)
                    except Exception:
                        log.exception("Outbox relay iteration failed")
                        await session.rollback()
                        claimed = 0
                # drain without sleeping while there is a backlog
                await asyncio.sleep(0 if claimed else interval)
        except asyncio.CancelledError:
            log.info("Outbox relay cancelled; shutting down")
            raise
