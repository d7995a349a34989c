"""
Pytest configuration and fixtures for Aspas tests.
"""

import os

import pytest
from PIL import Image

# Set test environment before importing aspas modules
os.environ["ASPAS_ENV"] = "development"

from aspas.db.adapter import StoreError
from onboarding.flow import OnboardingFlow
from onboarding.images import PickResult
from onboarding.store import ProfileStoreAdapter


# ---------------------------------------------------------------------------
# Fake collaborators
# ---------------------------------------------------------------------------


class InMemoryProfileStore:
    """ProfileStore that keeps records in a list."""

    def __init__(self):
        self.records: list[dict] = []

    async def create_record(self, phone_number: str, first_name: str, profile_picture: str) -> int:
        self.records.append({
            "phone_number": phone_number,
            "first_name": first_name,
            "profile_picture": profile_picture,
        })
        return len(self.records)


class FailingProfileStore:
    """
    ProfileStore whose writes fail until `fail` is switched off.

    With `failures` set, only the first that many writes fail.
    """

    def __init__(self, stage: str = "commit", failures: int | None = None):
        self.stage = stage
        self.failures = failures
        self.fail = True
        self.calls = 0
        self.records: list[dict] = []

    async def create_record(self, phone_number: str, first_name: str, profile_picture: str) -> int:
        self.calls += 1
        if self.fail and (self.failures is None or self.calls <= self.failures):
            raise StoreError("disk full", stage=self.stage)
        self.records.append({
            "phone_number": phone_number,
            "first_name": first_name,
            "profile_picture": profile_picture,
        })
        return len(self.records)


class StubImagePicker:
    """ImagePicker returning queued results in order."""

    def __init__(self, *results: PickResult):
        self.results = list(results)
        self.calls = 0

    async def pick(self) -> PickResult:
        self.calls += 1
        return self.results.pop(0)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def sample_image():
    """Small RGB test picture."""
    return Image.new("RGB", (32, 32), color=(200, 40, 40))


@pytest.fixture
def sample_rgba_image():
    """Picture with an alpha channel (needs flattening for JPEG)."""
    return Image.new("RGBA", (16, 16), color=(10, 120, 200, 128))


@pytest.fixture
def memory_store():
    return InMemoryProfileStore()


@pytest.fixture
def failing_store():
    return FailingProfileStore()


@pytest.fixture
def flow(memory_store):
    """Fresh flow writing to the in-memory store."""
    return OnboardingFlow(adapter=ProfileStoreAdapter(memory_store))


@pytest.fixture
def flow_on_picture_step(flow):
    """Flow with phone number and first name already accepted."""
    flow.set_phone_number("5551234567")
    assert flow.advance()
    flow.set_first_name("Ana")
    assert flow.advance()
    return flow
