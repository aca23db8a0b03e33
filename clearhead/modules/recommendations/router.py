from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from clearhead.core.db import get_session
from clearhead.modules.recommendations.schemas import RecommendationOut
from clearhead.modules.recommendations.service import RecommendationService

router = APIRouter()

def svc(s: AsyncSession = Depends(get_session)) -> RecommendationService: return RecommendationService(s)

@router.get("/recommendations", response_model=list[RecommendationOut])
async def recommendations(
    preferences: list[str] = Query(default=[]),
    type: str | None = Query(default=None, pattern="^(therapist|buddy)$"),
    service: RecommendationService = Depends(svc),
):
    ranked = await service.for_preferences(preferences, type=type)
    return [{"provider": p, "score": s} for p, s in ranked]
