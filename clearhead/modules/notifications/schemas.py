import uuid
from pydantic import BaseModel, Field

class TemplateCreate(BaseModel):
    name: str = Field(..., pattern="^(booking_confirmation|booking_reminder|welcome)$")
    channel: str = Field(default="email", pattern="^email$")
    subject: str | None = None
    body: str

class TemplateOut(TemplateCreate):
    id: uuid.UUID
    class Config: from_attributes = True

class SendMessage(BaseModel):
    to: str
    kind: str = Field(..., pattern="^(booking_confirmation|booking_reminder|welcome)$")
    variables: dict | None = None

class OutboundOut(BaseModel):
    id: uuid.UUID
    channel: str
    kind: str
    to: str
    subject: str | None
    status: str
    error: str | None = None
    class Config: from_attributes = True
