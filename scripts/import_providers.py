import asyncio
import json
import os
import sys

# Add the project root to the Python path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from clearhead.core.db import SessionLocal, init_models
from clearhead.modules.providers.repository import ProviderRepository
from clearhead.modules.providers.schemas import ProviderCreate
from clearhead.modules.providers.service import ProviderService

async def import_file(path: str):
    """
    Upserts providers from a JSON list of provider objects.
    Existing providers get their profile and weekly template replaced.
    """
    with open(path, 'r', encoding='utf-8') as f:
        data = json.load(f)

    async with SessionLocal() as db:
        repo = ProviderRepository(db)
        for rank, raw in enumerate(data):
            payload = ProviderCreate(**{"rank": rank, **raw})
            existing = await repo.get(payload.id)
            if existing:
                print(f"  - Updating {payload.id} ({payload.name})")
                for k, v in payload.model_dump(exclude={"id"}).items():
                    setattr(existing, k, v)
            else:
                print(f"  - Creating {payload.id} ({payload.name})")
                await repo.create(**payload.model_dump())
        await db.commit()
    print(f"Imported {len(data)} providers.")

async def main():
    print("Starting provider import...")
    await init_models()
    if len(sys.argv) > 1:
        await import_file(sys.argv[1])
        return
    async with SessionLocal() as db:
        n = await ProviderService(db).seed_defaults()
    print(f"Seeded {n} default providers." if n else "Catalog not empty; nothing seeded.")

if __name__ == "__main__":
    asyncio.run(main())
