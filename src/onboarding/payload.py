"""
Onboarding Payload Definition.

The ProfileRecord is the contract between the onboarding flow and the
profile store: exactly what gets written once the user finishes.
"""

from dataclasses import dataclass, asdict
import json

from .forms import validate_first_name, validate_phone_number, validate_profile_picture
from .images import DEFAULT_PICTURE_QUALITY, PictureEncodingError, encode_profile_picture
from .state import OnboardingState


@dataclass(frozen=True)
class ProfileRecord:
    """
    One completed onboarding profile.

    - phone_number: exactly 10 decimal digits
    - first_name: non-empty
    - profile_picture: base64 text of a JPEG
    """
    phone_number: str
    first_name: str
    profile_picture: str

    def to_dict(self) -> dict:
        """Serialize for storage/transfer."""
        return asdict(self)

    def to_json(self) -> str:
        """Serialize to JSON string."""
        return json.dumps(self.to_dict())


def build_record_from_state(
    state: OnboardingState,
    quality: float = DEFAULT_PICTURE_QUALITY,
) -> ProfileRecord:
    """
    Build the ProfileRecord from a finished OnboardingState.

    Called once at the end of the flow. The picture is encoded here so the
    store only ever sees text.

    Raises ValueError for a state the validators reject, and
    PictureEncodingError if the picture cannot be compressed.
    """
    if not validate_phone_number(state.phone_number):
        raise ValueError("Cannot build profile: phone number is invalid")
    if not validate_first_name(state.first_name):
        raise ValueError("Cannot build profile: first name is empty")
    if not validate_profile_picture(state.picture):
        raise ValueError("Cannot build profile: no picture selected")

    try:
        picture = encode_profile_picture(state.picture, quality)
    except (OSError, ValueError) as e:
        raise PictureEncodingError(str(e)) from e

    return ProfileRecord(
        phone_number=state.phone_number,
        first_name=state.first_name,
        profile_picture=picture,
    )
