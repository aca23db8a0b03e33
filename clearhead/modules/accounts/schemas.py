from pydantic import BaseModel

class SignupIn(BaseModel):
    first_name: str | None = None
    display_name: str | None = None

class ProfileOut(BaseModel):
    id: str
    email: str | None = None
    first_name: str | None = None
    display_name: str | None = None
    class Config: from_attributes = True

class AccountDeletedOut(BaseModel):
    user_id: str
    cancelled_bookings: int
