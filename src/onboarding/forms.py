"""
Onboarding Forms - Step validators.

One pure validator per step. Each returns True (accept) or False (reject);
none of them raise. A rejected value simply keeps the user on the step.
"""

import logging
from typing import Any

from .state import OnboardingState, OnboardingStep

logger = logging.getLogger(__name__)


PHONE_NUMBER_LENGTH = 10


# =============================================================================
# Step Prompts
# =============================================================================

STEP_PROMPTS: dict[OnboardingStep, dict[str, str]] = {
    OnboardingStep.PHONE_NUMBER: {
        "title": "What's your phone number?",
        "subtitle": "You'll get an OTP. Your number is not visible to others.",
        "placeholder": "Phone Number",
        "action": "Next",
    },
    OnboardingStep.FIRST_NAME: {
        "title": "What's your first name?",
        "subtitle": "",
        "placeholder": "First Name",
        "action": "Next",
    },
    OnboardingStep.PROFILE_PICTURE: {
        "title": "Add a profile picture",
        "subtitle": "",
        "placeholder": "Select Picture",
        "action": "Finish",
    },
}


def get_step_prompt(step: OnboardingStep) -> dict[str, str]:
    """Copy shown for a step: title, subtitle, input placeholder, action label."""
    return dict(STEP_PROMPTS[step])


# =============================================================================
# Validators
# =============================================================================

def validate_phone_number(value: str) -> bool:
    """
    Accept exactly 10 decimal digits.

    Any Unicode decimal digit counts (str.isdecimal). No leading-zero rules
    and no locale formats (spaces, dashes, +country).
    """
    if not value:
        return False
    if len(value) != PHONE_NUMBER_LENGTH:
        return False
    return value.isdecimal()


def validate_first_name(value: str) -> bool:
    """Accept any non-empty name."""
    return bool(value)


def validate_profile_picture(picture: Any) -> bool:
    """Accept once an image has been selected."""
    return picture is not None


def validate_step(state: OnboardingState) -> bool:
    """Run the validator for the active step against that step's field."""
    if state.step == OnboardingStep.PHONE_NUMBER:
        accepted = validate_phone_number(state.phone_number)
    elif state.step == OnboardingStep.FIRST_NAME:
        accepted = validate_first_name(state.first_name)
    else:
        accepted = validate_profile_picture(state.picture)

    if not accepted:
        logger.debug(f"Step {state.step.value} rejected current value")
    return accepted
