import re
from datetime import date
from decimal import Decimal
from typing import Literal
from pydantic import BaseModel, Field, field_validator
from clearhead.modules.providers.models import WEEKDAYS

TIME_RE = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")

ProviderType = Literal["therapist", "buddy"]

def validate_availability(v: dict[str, list[str]]) -> dict[str, list[str]]:
    out: dict[str, list[str]] = {}
    for day, slots in v.items():
        key = day.lower()
        if key not in WEEKDAYS:
            raise ValueError(f"unknown weekday: {day}")
        for s in slots:
            if not TIME_RE.match(s):
                raise ValueError(f"invalid time {s!r}, expected HH:MM")
        out[key] = list(slots)
    return out

class ProviderCreate(BaseModel):
    id: str = Field(..., min_length=1, max_length=64)
    name: str
    title: str = ""
    type: ProviderType
    email: str | None = None
    bio: str | None = None
    image_url: str | None = None
    specialties: list[str] = []
    hourly_rate: Decimal = Field(default=Decimal("0"), ge=0)
    rating: float = Field(default=0.0, ge=0.0, le=5.0)
    is_active: bool = True
    rank: int = 0
    availability: dict[str, list[str]] = {}

    @field_validator("availability")
    @classmethod
    def check_availability(cls, v):
        return validate_availability(v)

class AvailabilityUpdate(BaseModel):
    availability: dict[str, list[str]]

    @field_validator("availability")
    @classmethod
    def check_availability(cls, v):
        return validate_availability(v)

class ProviderOut(BaseModel):
    id: str
    name: str
    title: str
    type: str
    bio: str | None = None
    image_url: str | None = None
    specialties: list[str]
    hourly_rate: Decimal
    rating: float
    is_active: bool
    availability: dict[str, list[str]]
    total_bookings: int = 0
    completed_sessions: int = 0
    class Config: from_attributes = True

class NextAvailableOut(BaseModel):
    date: date
    time: str

class ProviderStatsOut(BaseModel):
    rating: float
    hourly_rate: Decimal
    specialties: list[str]
    total_slots_this_week: int
    next_available: NextAvailableOut | None = None
