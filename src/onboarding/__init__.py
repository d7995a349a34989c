"""
Aspas Onboarding.

Three-step linear flow for creating the local profile:

1. Phone number - exactly 10 digits
2. First name - anything non-empty
3. Profile picture - picked image, stored as base64 JPEG

Finishing writes one ProfileRecord through the injected profile store and
starts the flow over.
"""

from .state import OnboardingState, OnboardingStep
from .payload import ProfileRecord
from .store import ProfileStoreAdapter, SaveResult, StoreFailure
from .flow import FinishResult, OnboardingFlow

__all__ = [
    "OnboardingState",
    "OnboardingStep",
    "ProfileRecord",
    "ProfileStoreAdapter",
    "SaveResult",
    "StoreFailure",
    "FinishResult",
    "OnboardingFlow",
]
