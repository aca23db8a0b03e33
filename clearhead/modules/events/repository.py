from datetime import datetime, timedelta
from sqlalchemy import select, and_
from sqlalchemy.ext.asyncio import AsyncSession
from clearhead.core.base import utcnow
from clearhead.core.config import settings
from clearhead.modules.events.models import EventOutbox

MAX_BACKOFF_SECONDS = 300

def backoff_seconds(attempts: int) -> int:
    # 2, 4, 8, ... capped at five minutes
    return min(MAX_BACKOFF_SECONDS, 2 ** attempts)

class OutboxRepository:
    def __init__(self, s: AsyncSession): self.s = s

    async def add(self, *, event_type: str, subject_type: str, subject_id: str, payload: dict, occurred_at: datetime | None = None) -> EventOutbox:
        now = utcnow()
        obj = EventOutbox(
            event_type=event_type, subject_type=subject_type, subject_id=subject_id, payload=payload,
            occurred_at=occurred_at or now, status="pending", attempts=0, next_attempt_at=now,
        )
        self.s.add(obj); await self.s.flush(); return obj

    async def claim_due(self, limit: int, now: datetime | None = None) -> list[EventOutbox]:
        q = (
            select(EventOutbox)
            .where(and_(EventOutbox.status == "pending", EventOutbox.next_attempt_at <= (now or utcnow())))
            .order_by(EventOutbox.occurred_at.asc())
            .limit(limit)
            .with_for_update(skip_locked=True)  # several relays may poll the same table
        )
        rows = list((await self.s.execute(q)).scalars().all())
        for r in rows:
            r.status = "processing"
        await self.s.flush()
        return rows

    async def mark_published(self, ev: EventOutbox) -> None:
        ev.status = "sent"; ev.published_at = utcnow(); ev.last_error = None
        await self.s.flush()

    async def mark_failed(self, ev: EventOutbox, error: str) -> None:
        ev.attempts = (ev.attempts or 0) + 1
        ev.last_error = error[:2000]
        if ev.attempts >= settings.OUTBOX_MAX_ATTEMPTS:
            ev.status = "dead"
        else:
            ev.status = "pending"
            ev.next_attempt_at = utcnow() + timedelta(seconds=backoff_seconds(ev.attempts))
        await self.s.flush()
