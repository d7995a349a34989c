"""
Onboarding Store Adapter.

Boundary between the flow and the profile store. Turns store exceptions
into a result value so a failed write never takes the flow down with it.
"""

import logging
from dataclasses import dataclass

from aspas.db.adapter import ProfileStore, StoreError, StoreStage

from .payload import ProfileRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StoreFailure:
    """Why a profile could not be saved."""
    reason: str
    stage: StoreStage = "commit"


@dataclass(frozen=True)
class SaveResult:
    """Outcome of ProfileStoreAdapter.save()."""
    success: bool
    record_id: int | None = None
    failure: StoreFailure | None = None


class ProfileStoreAdapter:
    """Writes completed profiles through an injected ProfileStore."""

    def __init__(self, store: ProfileStore):
        self.store = store

    async def save(self, record: ProfileRecord) -> SaveResult:
        """
        Create one new profile record. Never updates existing ones.

        record.profile_picture must already be encoded.
        """
        try:
            record_id = await self.store.create_record(
                phone_number=record.phone_number,
                first_name=record.first_name,
                profile_picture=record.profile_picture,
            )
        except StoreError as e:
            logger.error(f"Failed to save profile ({e.stage}): {e.message}")
            return SaveResult(success=False, failure=StoreFailure(reason=e.message, stage=e.stage))

        logger.info(f"Profile saved (record {record_id})")
        return SaveResult(success=True, record_id=record_id)
