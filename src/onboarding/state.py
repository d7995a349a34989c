"""
Onboarding State Management.

Tracks which step of the three-step flow is active and the field values
collected so far. State lives only for one flow run; nothing here is
persisted.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class OnboardingStep(Enum):
    """Onboarding flow steps, in order."""
    PHONE_NUMBER = "phone_number"        # Step 1: Phone number
    FIRST_NAME = "first_name"            # Step 2: First name
    PROFILE_PICTURE = "profile_picture"  # Step 3: Profile picture + finish


NEXT_STEP: dict[OnboardingStep, OnboardingStep] = {
    OnboardingStep.PHONE_NUMBER: OnboardingStep.FIRST_NAME,
    OnboardingStep.FIRST_NAME: OnboardingStep.PROFILE_PICTURE,
}

PREVIOUS_STEP: dict[OnboardingStep, OnboardingStep] = {
    OnboardingStep.FIRST_NAME: OnboardingStep.PHONE_NUMBER,
    OnboardingStep.PROFILE_PICTURE: OnboardingStep.FIRST_NAME,
}

# Progress bar value shown above each step
STEP_PROGRESS: dict[OnboardingStep, float] = {
    OnboardingStep.PHONE_NUMBER: 0.0,
    OnboardingStep.FIRST_NAME: 0.5,
    OnboardingStep.PROFILE_PICTURE: 1.0,
}


@dataclass
class OnboardingState:
    """
    State of a single onboarding run.

    Each field is only written while its own step is active.
    `picture` is an opaque image reference (a PIL image in practice).
    """
    step: OnboardingStep = OnboardingStep.PHONE_NUMBER
    phone_number: str = ""
    first_name: str = ""
    picture: Any = None

    @property
    def has_picture(self) -> bool:
        return self.picture is not None

    def reset(self) -> None:
        """Clear every field and return to the first step."""
        self.step = OnboardingStep.PHONE_NUMBER
        self.phone_number = ""
        self.first_name = ""
        self.picture = None

    def to_dict(self) -> dict:
        """Serialize for API responses. The picture itself is never included."""
        return {
            "step": self.step.value,
            "progress": get_progress(self.step),
            "phone_number": self.phone_number,
            "first_name": self.first_name,
            "has_picture": self.has_picture,
        }


def get_next_step(step: OnboardingStep) -> OnboardingStep | None:
    """Step that follows `step`, or None on the last step."""
    return NEXT_STEP.get(step)


def get_previous_step(step: OnboardingStep) -> OnboardingStep | None:
    """Step before `step`, or None on the first step."""
    return PREVIOUS_STEP.get(step)


def get_progress(step: OnboardingStep) -> float:
    return STEP_PROGRESS[step]
