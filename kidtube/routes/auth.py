"""
Shared-password gate.

Endpoints:
- POST /auth/gate: Check the password typed into the gate screen

This is a placeholder for the UI's static password screen, kept server-side
so the password is not shipped in the client bundle. It is NOT
authentication: the result is only a hint for the UI, nothing else in the
API checks it. Deployments that need access control must put real
credential verification in front of the service.
"""

import hmac
import logging

from fastapi import APIRouter

from kidtube.config import settings
from kidtube.schemas.auth import GateRequest, GateResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/gate",
    response_model=GateResponse,
    summary="Check the shared access password",
    description=(
        "Compares the submitted password with ACCESS_PASSWORD. When no "
        "password is configured the gate is open."
    ),
)
async def check_gate(request: GateRequest) -> GateResponse:
    """Shared-password check (constant-time comparison)."""
    expected = settings.ACCESS_PASSWORD

    if not expected:
        logger.debug("ACCESS_PASSWORD not configured, gate is open")
        return GateResponse(unlocked=True)

    unlocked = hmac.compare_digest(
        request.password.encode("utf-8"),
        expected.encode("utf-8"),
    )
    if not unlocked:
        logger.info("Gate password rejected")

    return GateResponse(unlocked=unlocked)
