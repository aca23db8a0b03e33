import uuid
import datetime as dt
from decimal import Decimal
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import Date, Integer, Numeric
from clearhead.core.base import Base, TimestampedMixin

class WeeklyReport(Base, TimestampedMixin):
    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    week: Mapped[dt.date] = mapped_column(Date, index=True)  # first day of the window
    total_bookings: Mapped[int] = mapped_column(Integer, default=0)
    completed_bookings: Mapped[int] = mapped_column(Integer, default=0)
    total_revenue: Mapped[Decimal] = mapped_column(Numeric(12, 2), default=Decimal("0"))
    average_session_value: Mapped[Decimal] = mapped_column(Numeric(12, 2), default=Decimal("0"))
