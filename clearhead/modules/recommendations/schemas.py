from pydantic import BaseModel
from clearhead.modules.providers.schemas import ProviderOut

class RecommendationOut(BaseModel):
    provider: ProviderOut
    score: float | None = None
