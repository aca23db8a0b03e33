import datetime as dt
from pydantic import BaseModel

class SlotsOut(BaseModel):
    provider_id: str
    date: dt.date
    slots: list[str]

class AvailabilityCheckOut(BaseModel):
    provider_id: str
    date: dt.date
    time: str
    available: bool
