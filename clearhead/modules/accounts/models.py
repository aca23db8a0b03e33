from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import String
from clearhead.core.base import Base, TimestampedMixin

class UserProfile(Base, TimestampedMixin):
    # id issued by the identity provider
    id: Mapped[str] = mapped_column(String(128), primary_key=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    first_name: Mapped[str | None] = mapped_column(String(80), nullable=True)
    display_name: Mapped[str | None] = mapped_column(String(160), nullable=True)
