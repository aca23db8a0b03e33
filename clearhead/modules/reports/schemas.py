import uuid
import datetime as dt
from decimal import Decimal
from pydantic import BaseModel

class WeeklyReportOut(BaseModel):
    id: uuid.UUID
    week: dt.date
    total_bookings: int
    completed_bookings: int
    total_revenue: Decimal
    average_session_value: Decimal
    class Config: from_attributes = True
