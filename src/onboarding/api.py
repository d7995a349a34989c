"""
Onboarding API Endpoints.

Drives a single OnboardingFlow over HTTP. One flow instance per app, the
same way the device has one onboarding screen.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from .flow import OnboardingFlow
from .forms import get_step_prompt
from .images import decode_image
from .state import OnboardingStep
from .store import ProfileStoreAdapter

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/onboarding", tags=["onboarding"])


# =============================================================================
# Flow dependency
# =============================================================================

_flow: OnboardingFlow | None = None


def get_flow() -> OnboardingFlow:
    """
    The app's onboarding flow, built on first use from settings.

    Tests override this dependency with a flow wired to a fake store.
    """
    from aspas.config import settings
    from aspas.db.client import get_store

    global _flow

    if _flow is None:
        _flow = OnboardingFlow(
            adapter=ProfileStoreAdapter(get_store()),
            picture_quality=settings.profile_picture_quality,
            reset_on_finish=settings.reset_on_finish,
        )
    return _flow


# =============================================================================
# Request/Response Models
# =============================================================================


class PhoneNumberRequest(BaseModel):
    """Step 1: Phone number."""
    phone_number: str = ""


class FirstNameRequest(BaseModel):
    """Step 2: First name."""
    first_name: str = ""


class PictureRequest(BaseModel):
    """Step 3: Picked picture. null means the picker was cancelled."""
    image_base64: str | None = None


class StateResponse(BaseModel):
    """Current onboarding state."""
    step: str
    progress: float
    can_go_back: bool
    phone_number: str
    first_name: str
    has_picture: bool
    prompt: dict = Field(default_factory=dict)


class StepResponse(BaseModel):
    """Response after an onboarding action."""
    success: bool
    step: str
    message: str = ""
    record_id: int | None = None


# =============================================================================
# Helpers
# =============================================================================


def _require_step(flow: OnboardingFlow, step: OnboardingStep) -> None:
    if flow.step != step:
        raise HTTPException(
            status_code=409,
            detail=f"Expected step {step.value}, flow is on {flow.step.value}",
        )


def _step_response(flow: OnboardingFlow, success: bool, message: str = "", record_id: int | None = None) -> StepResponse:
    return StepResponse(
        success=success,
        step=flow.step.value,
        message=message,
        record_id=record_id,
    )


# =============================================================================
# Endpoints
# =============================================================================


@router.get("/state", response_model=StateResponse)
async def get_onboarding_state(flow: OnboardingFlow = Depends(get_flow)) -> StateResponse:
    """Get current onboarding progress."""
    data = flow.state.to_dict()
    return StateResponse(
        step=data["step"],
        progress=data["progress"],
        can_go_back=flow.can_go_back,
        phone_number=data["phone_number"],
        first_name=data["first_name"],
        has_picture=data["has_picture"],
        prompt=get_step_prompt(flow.step),
    )


@router.post("/phone-number", response_model=StepResponse)
async def submit_phone_number(request: PhoneNumberRequest, flow: OnboardingFlow = Depends(get_flow)) -> StepResponse:
    """Step 1: set phone number and advance if it is valid."""
    _require_step(flow, OnboardingStep.PHONE_NUMBER)
    flow.set_phone_number(request.phone_number)

    if not flow.advance():
        return _step_response(flow, False, "Phone number must be exactly 10 digits")
    return _step_response(flow, True)


@router.post("/first-name", response_model=StepResponse)
async def submit_first_name(request: FirstNameRequest, flow: OnboardingFlow = Depends(get_flow)) -> StepResponse:
    """Step 2: set first name and advance if it is non-empty."""
    _require_step(flow, OnboardingStep.FIRST_NAME)
    flow.set_first_name(request.first_name)

    if not flow.advance():
        return _step_response(flow, False, "First name is required")
    return _step_response(flow, True)


@router.post("/picture", response_model=StepResponse)
async def submit_picture(request: PictureRequest, flow: OnboardingFlow = Depends(get_flow)) -> StepResponse:
    """Step 3: set or replace the picture. A null image is a cancelled pick."""
    _require_step(flow, OnboardingStep.PROFILE_PICTURE)

    if request.image_base64 is None:
        return _step_response(flow, flow.state.has_picture, "Picture selection cancelled")

    try:
        image = decode_image(request.image_base64)
    except ValueError as e:
        logger.warning(f"Rejected picture upload: {e}")
        raise HTTPException(status_code=400, detail=str(e))

    flow.select_picture(image)
    return _step_response(flow, True)


@router.post("/back", response_model=StepResponse)
async def go_back(flow: OnboardingFlow = Depends(get_flow)) -> StepResponse:
    """Go back one step. No-op on the first step."""
    moved = flow.back()
    return _step_response(flow, moved)


@router.post("/finish", response_model=StepResponse)
async def finish_onboarding(flow: OnboardingFlow = Depends(get_flow)) -> StepResponse:
    """Save the profile. Stays on the picture step if the write fails."""
    result = await flow.finish()

    if result.status == "failed":
        reason = result.failure.reason if result.failure else "unknown error"
        raise HTTPException(status_code=503, detail=f"Failed to save profile: {reason}")

    if result.status == "rejected":
        if flow.step != OnboardingStep.PROFILE_PICTURE:
            return _step_response(flow, False, f"Cannot finish from the {flow.step.value} step")
        return _step_response(flow, False, "Select a picture before finishing")

    return _step_response(flow, True, "Profile saved", record_id=result.record_id)
