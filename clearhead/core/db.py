from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from .config import settings
from .base import Base

engine = create_async_engine(settings.POSTGRES_DSN, pool_pre_ping=True)
SessionLocal = async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)

async def get_session():
    async with SessionLocal() as session:
        yield session

def import_models():
    # registers every table on Base.metadata
    from clearhead.modules.providers import models as _providers  # noqa: F401
    from clearhead.modules.bookings import models as _bookings  # noqa: F401
    from clearhead.modules.accounts import models as _accounts  # noqa: F401
    from clearhead.modules.notifications import models as _notifications  # noqa: F401
    from clearhead.modules.events import models as _events  # noqa: F401
    from clearhead.modules.reports import models as _reports  # noqa: F401

async def init_models():
    ## In dev-only "create_all" mode create tables directly; otherwise, migrations own the schema.
    import_models()
    if settings.DB_MANAGE == "create_all":
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
