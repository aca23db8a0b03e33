import uuid
import datetime as dt
from decimal import Decimal
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import String, Text, Date, TIMESTAMP, Numeric, Integer, Boolean, ForeignKey, Index, text
from clearhead.core.base import Base, TimestampedMixin

class Booking(Base, TimestampedMixin):
    __table_args__ = (
        # one active booking per provider slot; cancelled/completed rows free the slot
        Index(
            "uq_booking_active_slot", "provider_id", "date", "time", unique=True,
            postgresql_where=text("status IN ('confirmed', 'rescheduled')"),
            sqlite_where=text("status IN ('confirmed', 'rescheduled')"),
        ),
        Index("ix_booking_reminder_scan", "date", "status", "reminder_sent"),
    )

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)

    # Who
    user_id: Mapped[str] = mapped_column(String(128), index=True)
    user_email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    user_name: Mapped[str | None] = mapped_column(String(160), nullable=True)
    provider_id: Mapped[str] = mapped_column(ForeignKey("provider.id"), index=True)
    provider_name: Mapped[str] = mapped_column(String(160))
    provider_email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    provider_type: Mapped[str | None] = mapped_column(String(16), nullable=True)  # therapist | buddy

    # When (wall clock in `timezone`)
    date: Mapped[dt.date] = mapped_column(Date)
    time: Mapped[str] = mapped_column(String(5))  # HH:MM
    timezone: Mapped[str] = mapped_column(String(64), default="UTC")
    duration: Mapped[int] = mapped_column(Integer, default=60)  # minutes
    session_format: Mapped[str] = mapped_column(String(16), default="video")  # video | audio | chat

    status: Mapped[str] = mapped_column(String(16), default="confirmed")  # confirmed | cancelled | rescheduled | completed
    amount: Mapped[Decimal] = mapped_column(Numeric(10, 2), default=Decimal("0"))
    payment_status: Mapped[str] = mapped_column(String(24), default="pending")
    notes: Mapped[str] = mapped_column(Text, default="")

    reminder_sent: Mapped[bool] = mapped_column(Boolean, default=False)
    meeting_link: Mapped[str] = mapped_column(String, default="")
    meeting_password: Mapped[str] = mapped_column(String(16), default="")

    # status == cancelled
    cancellation_reason: Mapped[str | None] = mapped_column(Text, nullable=True)
    cancelled_at: Mapped[dt.datetime | None] = mapped_column(TIMESTAMP(timezone=True), nullable=True)
    cancelled_by: Mapped[str | None] = mapped_column(String(16), nullable=True)  # user | system
    refund_eligible: Mapped[bool | None] = mapped_column(Boolean, nullable=True)

    # status == rescheduled
    original_date: Mapped[dt.date | None] = mapped_column(Date, nullable=True)
    original_time: Mapped[str | None] = mapped_column(String(5), nullable=True)
    rescheduled_at: Mapped[dt.datetime | None] = mapped_column(TIMESTAMP(timezone=True), nullable=True)

    # status == completed
    completed_at: Mapped[dt.datetime | None] = mapped_column(TIMESTAMP(timezone=True), nullable=True)
    actual_duration: Mapped[int | None] = mapped_column(Integer, nullable=True)
