import datetime as dt
from decimal import Decimal

import pytest
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession

from clearhead.core.base import Base
from clearhead.core.db import import_models
from clearhead.core.security import Principal
from clearhead.modules.bookings.repository import BookingRepository
from clearhead.modules.providers.repository import ProviderRepository

import_models()

UTC = dt.timezone.utc

# 2024-06-10 is a Monday
MONDAY = dt.date(2024, 6, 10)


def at(day: dt.date, hhmm: str) -> dt.datetime:
    hh, mm = hhmm.split(":")
    return dt.datetime(day.year, day.month, day.day, int(hh), int(mm), tzinfo=UTC)


class RecordingNotifier:
    """Collects every message; addresses in ``fail_for`` raise like a refusing SMTP relay."""

    def __init__(self, fail_for=()):
        self.sent: list[dict] = []
        self.fail_for = set(fail_for)

    async def send(self, to: str, subject: str, body: str, kind: str) -> None:
        if to in self.fail_for:
            raise ConnectionError(f"relay refused {to}")
        self.sent.append({"to": to, "subject": subject, "body": body, "kind": kind})

    def to(self, address: str) -> list[dict]:
        return [m for m in self.sent if m["to"] == address]


@pytest.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'clearhead.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)


@pytest.fixture
async def session(session_factory):
    async with session_factory() as s:
        yield s


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def user():
    return Principal(user_id="user-1", email="jamie@example.com", name="Jamie Lee")


@pytest.fixture
async def provider(session):
    p = await ProviderRepository(session).create(
        id="therapist-x",
        name="Dr. Ada Park",
        title="Clinical Psychologist",
        type="therapist",
        email="ada@clearheadspace.com",
        specialties=["Anxiety", "Depression"],
        hourly_rate=Decimal("120"),
        rating=4.9,
        is_active=True,
        rank=0,
        availability={"monday": ["09:00", "10:00", "14:00"], "tuesday": ["11:00"]},
    )
    await session.commit()
    return p


async def insert_booking(session, provider, **overrides):
    """Store a booking row directly, bypassing the lifecycle checks."""
    data = dict(
        user_id="user-1",
        user_email="jamie@example.com",
        user_name="Jamie",
        provider_id=provider.id,
        provider_name=provider.name,
        provider_email=provider.email,
        provider_type=provider.type,
        date=MONDAY,
        time="09:00",
        timezone="UTC",
        duration=60,
        session_format="video",
        status="confirmed",
        amount=Decimal("120"),
        reminder_sent=False,
    )
    data.update(overrides)
    obj = await BookingRepository(session).create(**data)
    await session.commit()
    return obj
