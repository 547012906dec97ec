"""
Schemas for the shared-password gate.

The gate is a placeholder for the UI's static password screen. It is not
user authentication: there are no accounts, sessions or tokens.
"""

from pydantic import BaseModel, Field


class GateRequest(BaseModel):
    """Request for POST /auth/gate."""

    password: str = Field(
        ...,
        description="Shared password typed into the gate screen",
        max_length=200
    )


class GateResponse(BaseModel):
    """Response for POST /auth/gate."""

    unlocked: bool = Field(
        ...,
        description="True when the password matches (or no password is configured)"
    )
