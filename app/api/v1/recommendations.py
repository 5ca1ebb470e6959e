"""
Personalised company recommendation endpoint.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.services.recommendations import RecommendationPreferences, RecommendationService

router = APIRouter(prefix="/recommendations", tags=["recommendations"])


class RecommendationRequest(BaseModel):
    preferred_industry: Optional[str] = None
    preferred_location: Optional[str] = Field(None, description='Exact "City, ST"')
    preferred_size: Optional[str] = None
    min_culture_score: Optional[float] = Field(None, ge=0, le=5)
    max_culture_score: Optional[float] = Field(None, ge=0, le=5)
    priorities: List[str] = Field(
        default_factory=list, description='e.g. ["work-life-balance", "compensation"]'
    )
    exclude_company_ids: List[int] = Field(default_factory=list)
    limit: int = Field(5, ge=1, le=20)


@router.post("")
async def get_recommendations(request: RecommendationRequest, db: Session = Depends(get_db)):
    """
    Rank companies against the user's preferences.

    The response names the strategy used: "ai" when the LLM ranked the
    candidates, "heuristic" when it fell back to sorting by overall rating.
    """
    prefs = RecommendationPreferences(**request.model_dump(exclude={"limit"}))
    result = await RecommendationService(db).get_ai_recommendations(prefs, limit=request.limit)
    return result.to_dict()
