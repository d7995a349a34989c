"""
Onboarding Flow Controller.

Owns the active step and the collected fields, and decides when the user
may move forward. Validation gates `advance()` and `finish()`; `back()` never
re-validates. The only side effect anywhere in the flow is the single
profile write made by `finish()`.
"""

import logging
from dataclasses import dataclass
from typing import Literal

from PIL import Image

from .forms import validate_step
from .images import DEFAULT_PICTURE_QUALITY, ImagePicker, PictureEncodingError
from .payload import build_record_from_state
from .state import (
    OnboardingState,
    OnboardingStep,
    get_next_step,
    get_previous_step,
    get_progress,
)
from .store import ProfileStoreAdapter, StoreFailure

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FinishResult:
    """
    Outcome of OnboardingFlow.finish().

    - saved: profile written, flow reset to the first step
    - rejected: not on the picture step or no picture yet; nothing written
    - failed: the write (or picture encoding) failed; flow stays put for a retry
    """
    status: Literal["saved", "rejected", "failed"]
    record_id: int | None = None
    failure: StoreFailure | None = None

    @property
    def success(self) -> bool:
        return self.status == "saved"


class OnboardingFlow:
    """One run of the three-step onboarding wizard."""

    def __init__(
        self,
        adapter: ProfileStoreAdapter,
        picture_quality: float = DEFAULT_PICTURE_QUALITY,
        reset_on_finish: bool = True,
    ):
        self.adapter = adapter
        self.picture_quality = picture_quality
        self.reset_on_finish = reset_on_finish
        self.state = OnboardingState()

    @property
    def step(self) -> OnboardingStep:
        return self.state.step

    @property
    def progress(self) -> float:
        return get_progress(self.state.step)

    @property
    def can_go_back(self) -> bool:
        return get_previous_step(self.state.step) is not None

    # -------------------------------------------------------------------------
    # Field input (only the active step's field is writable)
    # -------------------------------------------------------------------------

    def set_phone_number(self, value: str) -> bool:
        if self.state.step != OnboardingStep.PHONE_NUMBER:
            return False
        self.state.phone_number = value
        return True

    def set_first_name(self, value: str) -> bool:
        if self.state.step != OnboardingStep.FIRST_NAME:
            return False
        self.state.first_name = value
        return True

    def select_picture(self, image: Image.Image) -> bool:
        """Set or replace the picture."""
        if self.state.step != OnboardingStep.PROFILE_PICTURE:
            return False
        self.state.picture = image
        return True

    async def pick_picture(self, picker: ImagePicker) -> bool:
        """
        Ask the picker for a picture.

        Returns True if a picture was selected. Cancelling leaves the current
        picture (or its absence) untouched.
        """
        if self.state.step != OnboardingStep.PROFILE_PICTURE:
            return False

        result = await picker.pick()
        if result.cancelled or result.image is None:
            logger.info("Picture selection cancelled")
            return False

        self.state.picture = result.image
        return True

    # -------------------------------------------------------------------------
    # Navigation
    # -------------------------------------------------------------------------

    def advance(self) -> bool:
        """
        Move to the next step if the active step accepts its value.

        On the picture step there is nowhere to advance to; use finish().
        """
        next_step = get_next_step(self.state.step)
        if next_step is None:
            return False
        if not validate_step(self.state):
            return False

        logger.debug(f"Onboarding {self.state.step.value} -> {next_step.value}")
        self.state.step = next_step
        return True

    def back(self) -> bool:
        """Go back one step. No-op on the first step."""
        previous = get_previous_step(self.state.step)
        if previous is None:
            return False

        logger.debug(f"Onboarding {self.state.step.value} <- {previous.value}")
        self.state.step = previous
        return True

    async def finish(self) -> FinishResult:
        """
        Encode the picture and save the profile.

        Writes at most one record. On success the flow starts over; on
        failure it stays on the picture step with every field intact.
        """
        if self.state.step != OnboardingStep.PROFILE_PICTURE:
            logger.warning(f"Finish requested on {self.state.step.value} step")
            return FinishResult(status="rejected")
        if not validate_step(self.state):
            logger.warning("Finish requested without a picture")
            return FinishResult(status="rejected")

        try:
            record = build_record_from_state(self.state, self.picture_quality)
        except PictureEncodingError as e:
            logger.error(f"Failed to encode profile picture: {e}")
            return FinishResult(
                status="failed",
                failure=StoreFailure(reason=f"Could not encode picture: {e}", stage="commit"),
            )

        result = await self.adapter.save(record)
        if not result.success:
            return FinishResult(status="failed", failure=result.failure)

        if self.reset_on_finish:
            self.state.reset()
        else:
            self.state.step = OnboardingStep.PHONE_NUMBER
        return FinishResult(status="saved", record_id=result.record_id)
