from typing import Sequence, TypeVar
from sqlalchemy.ext.asyncio import AsyncSession
from clearhead.modules.providers.repository import ProviderRepository

SPECIALTY_MATCH_POINTS = 10
RATING_WEIGHT = 2
TOP_SCORED = 6
TOP_UNSCORED = 4

P = TypeVar("P")

def _overlaps(specialty: str, preferences: Sequence[str]) -> bool:
    s = specialty.lower()
    return any(s in p.lower() or p.lower() in s for p in preferences)

def score(provider, preferences: Sequence[str]) -> float:
    matched = sum(1 for spec in provider.specialties or [] if _overlaps(spec, preferences))
    return SPECIALTY_MATCH_POINTS * matched + RATING_WEIGHT * (provider.rating or 0)

def recommend(catalog: Sequence[P], preferences: Sequence[str]) -> list[tuple[P, float | None]]:
    """Rank providers against a user's stated preferences.

    Without preferences the first four catalog entries come back unscored
    and in catalog order; otherwise the six best scores, ties kept in
    catalog order.
    """
    if not preferences:
        return [(p, None) for p in catalog[:TOP_UNSCORED]]
    scored = [(p, score(p, preferences)) for p in catalog]
    scored.sort(key=lambda pair: pair[1], reverse=True)
    return scored[:TOP_SCORED]

class RecommendationService:
    def __init__(self, s: AsyncSession):
        self.providers = ProviderRepository(s)

    async def for_preferences(self, preferences: list[str], type: str | None = None):
        catalog = await self.providers.list(type=type)
        return recommend(list(catalog), [p for p in preferences if p.strip()])
