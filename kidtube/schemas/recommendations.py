"""
Pydantic schemas for the video recommendation endpoint.

These models define the request/response contract between the playlist UI
and the recommendation pipeline. The response always carries a
`recommendations` array, even when it is empty or synthetic.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

# ============================================================================
# REQUEST MODELS
# ============================================================================

class RecommendationRequest(BaseModel):
    """
    Profile of the child the playlist is built for.

    Submitted by the form once age, gender and at least one interest are
    selected. Any non-empty gender label is accepted.
    """
    age: int = Field(
        ...,
        description="Child's age in years",
        gt=0,
        examples=[6, 9]
    )
    sex: str = Field(
        ...,
        description="Gender label chosen in the form (not checked against a fixed set)",
        min_length=1,
        examples=["female", "male", "other"]
    )
    interests: List[str] = Field(
        ...,
        description="Interests selected in the form, in selection order",
        min_length=1,
        examples=[["animals", "music"], ["dinosaurs", "space", "robots"]]
    )

    @field_validator("sex")
    @classmethod
    def sex_not_blank(cls, value: str) -> str:
        stripped = value.strip()
        if not stripped:
            raise ValueError("sex must not be blank")
        return stripped

    @field_validator("interests")
    @classmethod
    def interests_not_blank(cls, value: List[str]) -> List[str]:
        """Strip whitespace and drop blank entries; at least one must remain."""
        cleaned = [interest.strip() for interest in value if interest and interest.strip()]
        if not cleaned:
            raise ValueError("interests must contain at least one non-empty entry")
        return cleaned


# ============================================================================
# RESPONSE MODELS
# ============================================================================

class VideoRecommendation(BaseModel):
    """
    One entry of the playlist.

    Either a real YouTube video (watch URL, real thumbnail and duration) or a
    fallback search link (results URL, placeholder thumbnail, "Various").
    Two entries with the same `url` are duplicates.
    """
    title: str = Field(..., examples=["Animal Songs for Kids"])
    url: str = Field(
        ...,
        description="Canonical watch URL (identity key)",
        examples=["https://www.youtube.com/watch?v=dQw4w9WgXcQ"]
    )
    description: str = Field("", examples=["Sing along with farm animals..."])
    thumbnail: str = Field(
        ...,
        description="Thumbnail URL or the placeholder path",
        examples=["https://i.ytimg.com/vi/dQw4w9WgXcQ/hqdefault.jpg"]
    )
    channelTitle: str = Field(..., examples=["Super Simple Songs", "YouTube Search"])
    duration: str = Field(
        ...,
        description='"M:SS", "H:MM:SS", "Various" or "Unknown"',
        examples=["4:13", "1:02:03", "Various"]
    )


class RecommendationResponse(BaseModel):
    """
    Response for POST /api/recommendations.

    `recommendations` is authoritative; `message` and `error` are advisory.
    `debug` is the per-request trace for client-side inspection.
    """
    recommendations: List[VideoRecommendation] = Field(
        default_factory=list,
        description="Final ordered playlist (never omitted)"
    )
    message: Optional[str] = Field(
        None,
        examples=["Found real YouTube videos!", "Using targeted search links (YouTube API not configured)"]
    )
    error: Optional[str] = Field(
        None,
        examples=["Missing required fields: age, sex, and interests are required"]
    )
    debug: Dict[str, Any] = Field(
        default_factory=dict,
        description="Diagnostic trace of the pipeline steps for this request"
    )
