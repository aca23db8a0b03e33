from decimal import Decimal
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import String, Text, JSON, Numeric, Float, Integer, Boolean
from clearhead.core.base import Base, TimestampedMixin

WEEKDAYS = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")

class Provider(Base, TimestampedMixin):
    # seeded ids are human readable (therapist-1, buddy-2, ...)
    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(160), index=True)
    title: Mapped[str] = mapped_column(String(160), default="")
    type: Mapped[str] = mapped_column(String(16), index=True)  # therapist | buddy
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    bio: Mapped[str | None] = mapped_column(Text, nullable=True)
    image_url: Mapped[str | None] = mapped_column(String, nullable=True)

    specialties: Mapped[list] = mapped_column(JSON, default=list)
    hourly_rate: Mapped[Decimal] = mapped_column(Numeric(10, 2), default=Decimal("0"))
    rating: Mapped[float] = mapped_column(Float, default=0.0)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, index=True)
    rank: Mapped[int] = mapped_column(Integer, default=0)  # catalog order

    # weekday name -> ordered list of "HH:MM"
    availability: Mapped[dict] = mapped_column(JSON, default=dict)

    # counters, only ever changed with atomic increments
    total_bookings: Mapped[int] = mapped_column(Integer, default=0)
    completed_sessions: Mapped[int] = mapped_column(Integer, default=0)
    total_revenue: Mapped[Decimal] = mapped_column(Numeric(12, 2), default=Decimal("0"))
