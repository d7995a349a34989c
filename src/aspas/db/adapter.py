"""
Profile Store Protocol.

Defines the abstract interface for the on-device profile store. The
onboarding flow only ever creates records, so that is the whole contract:
no reads, updates, deletes or queries.

Implementations raise StoreError for every failure. Nothing behind this
interface is allowed to terminate the process.
"""

from typing import Literal, Protocol, runtime_checkable


StoreStage = Literal["init", "commit"]


class StoreError(Exception):
    """
    The profile store could not complete a write.

    stage:
    - "init": the store could not be opened or its schema created
    - "commit": the store was open but the insert failed
    """

    def __init__(self, message: str, stage: StoreStage = "commit"):
        super().__init__(message)
        self.message = message
        self.stage = stage


@runtime_checkable
class ProfileStore(Protocol):
    """Abstract persistent-store collaborator for profile records."""

    async def create_record(
        self,
        phone_number: str,
        first_name: str,
        profile_picture: str,
    ) -> int:
        """
        Write one new profile record.

        profile_picture is already encoded (base64 JPEG text).
        Returns the new record's id.
        """
        ...
