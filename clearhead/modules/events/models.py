import uuid
from datetime import datetime
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import TIMESTAMP, String, Integer, Text, JSON, Index
from clearhead.core.base import Base, TimestampedMixin

BOOKING_CREATED = "BOOKING_CREATED"
BOOKING_CANCELLED = "BOOKING_CANCELLED"
BOOKING_RESCHEDULED = "BOOKING_RESCHEDULED"
BOOKING_COMPLETED = "BOOKING_COMPLETED"
PROVIDER_AVAILABILITY_UPDATED = "PROVIDER_AVAILABILITY_UPDATED"

class EventOutbox(Base, TimestampedMixin):
    __table_args__ = (Index("ix_eventoutbox_due", "status", "next_attempt_at"),)

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    event_type: Mapped[str] = mapped_column(String(64))
    subject_type: Mapped[str] = mapped_column(String(32))  # booking | provider
    subject_id: Mapped[str] = mapped_column(String(64), index=True)
    payload: Mapped[dict] = mapped_column(JSON)
    occurred_at: Mapped[datetime] = mapped_column(TIMESTAMP(timezone=True))

    status: Mapped[str] = mapped_column(String(16), default="pending")  # pending | processing | sent | dead
    attempts: Mapped[int] = mapped_column(Integer, default=0)
    next_attempt_at: Mapped[datetime] = mapped_column(TIMESTAMP(timezone=True))
    published_at: Mapped[datetime | None] = mapped_column(TIMESTAMP(timezone=True), nullable=True)
    last_error: Mapped[str | None] = mapped_column(Text, nullable=True)
