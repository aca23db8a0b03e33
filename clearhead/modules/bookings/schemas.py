import uuid
import datetime as dt
from decimal import Decimal
from typing import Literal
from pydantic import BaseModel, Field

HHMM = r"^([01]\d|2[0-3]):[0-5]\d$"

SessionFormat = Literal["video", "audio", "chat"]
BookingStatus = Literal["confirmed", "cancelled", "rescheduled", "completed"]

class BookingCreate(BaseModel):
    provider_id: str
    date: dt.date
    time: str = Field(..., pattern=HHMM)
    duration: int = Field(default=60, gt=0)
    session_format: SessionFormat = "video"
    notes: str = ""
    amount: Decimal = Field(default=Decimal("0"), ge=0)
    payment_status: str = "pending"
    timezone: str | None = None
    user_name: str | None = None

class BookingUpdate(BaseModel):
    # free-form fields only; status changes go through the lifecycle endpoints
    notes: str | None = None
    payment_status: str | None = None

class BookingCancel(BaseModel):
    reason: str = ""

class BookingReschedule(BaseModel):
    date: dt.date
    time: str = Field(..., pattern=HHMM)

class BookingComplete(BaseModel):
    actual_duration: int | None = Field(default=None, ge=0)

class BookingOut(BaseModel):
    id: uuid.UUID
    user_id: str
    user_email: str | None = None
    user_name: str | None = None
    provider_id: str
    provider_name: str
    provider_type: str | None = None
    date: dt.date
    time: str
    timezone: str
    duration: int
    session_format: str
    status: str
    amount: Decimal
    payment_status: str
    notes: str
    reminder_sent: bool
    meeting_link: str
    cancellation_reason: str | None = None
    cancelled_at: dt.datetime | None = None
    cancelled_by: str | None = None
    refund_eligible: bool | None = None
    original_date: dt.date | None = None
    original_time: str | None = None
    rescheduled_at: dt.datetime | None = None
    completed_at: dt.datetime | None = None
    actual_duration: int | None = None
    created_at: dt.datetime | None = None
    updated_at: dt.datetime | None = None
    class Config: from_attributes = True

class JoinOut(BaseModel):
    booking_id: uuid.UUID
    meeting_link: str
    meeting_password: str
