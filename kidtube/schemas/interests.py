"""
Schemas for the interest catalog endpoint.

The form only offers interests that fit the selected age and gender; the
catalog is served from the backend so every client shows the same list.
"""

from typing import List

from pydantic import BaseModel, Field


class InterestCatalogResponse(BaseModel):
    """Response for GET /interests."""

    interests: List[str] = Field(
        ...,
        description="Alphabetically sorted interests available for the age/gender",
        examples=[["animals", "art", "cartoons", "colors", "cooking", "music"]]
    )
    age_options: List[int] = Field(
        ...,
        description="Ages the form offers",
        examples=[[3, 4, 5, 6, 7, 8, 9, 10, 11, 12, 13, 14, 15]]
    )
    sex_options: List[str] = Field(
        ...,
        description="Gender labels the form offers",
        examples=[["male", "female", "other"]]
    )
