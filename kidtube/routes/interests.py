"""
Interest catalog route.

Endpoints:
- GET /interests?age=&sex=: Interests the form should offer
"""

from typing import Optional

from fastapi import APIRouter, Query

from kidtube.schemas.interests import InterestCatalogResponse
from kidtube.services.interest_service import (
    AGE_OPTIONS,
    SEX_OPTIONS,
    get_available_interests,
)
from kidtube.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["interests"])


@router.get(
    "/interests",
    response_model=InterestCatalogResponse,
    summary="List interests for an age and gender",
    description=(
        "Returns the interests the profile form offers for the given age and "
        "gender label, plus the age and gender options. Without an age only "
        "the base interests are returned."
    ),
)
async def list_interests(
    age: Optional[int] = Query(None, gt=0, description="Child's age in years"),
    sex: Optional[str] = Query(None, max_length=50, description="Gender label"),
) -> InterestCatalogResponse:
    """Interest catalog endpoint."""
    logger.debug(f"GET /interests called with age={age}, sex={sex}")

    return InterestCatalogResponse(
        interests=get_available_interests(age, sex),
        age_options=AGE_OPTIONS,
        sex_options=SEX_OPTIONS,
    )
