"""Tests for the onboarding HTTP endpoints."""

import base64
from io import BytesIO

import pytest
from fastapi.testclient import TestClient
from PIL import Image

from aspas.web.app import app
from onboarding.api import get_flow
from onboarding.flow import OnboardingFlow
from onboarding.store import ProfileStoreAdapter


def _png_base64(image) -> str:
    buffer = BytesIO()
    image.save(buffer, format="PNG")
    return base64.b64encode(buffer.getvalue()).decode()


@pytest.fixture
def client(flow):
    app.dependency_overrides[get_flow] = lambda: flow
    yield TestClient(app)
    app.dependency_overrides.clear()


def _walk_to_picture(client):
    assert client.post("/api/onboarding/phone-number", json={"phone_number": "5551234567"}).json()["success"]
    assert client.post("/api/onboarding/first-name", json={"first_name": "Ana"}).json()["success"]


class TestState:

    def test_initial_state(self, client):
        data = client.get("/api/onboarding/state").json()

        assert data["step"] == "phone_number"
        assert data["progress"] == 0.0
        assert data["can_go_back"] is False
        assert data["has_picture"] is False
        assert data["prompt"]["title"] == "What's your phone number?"


class TestSteps:

    def test_valid_phone_advances(self, client):
        response = client.post("/api/onboarding/phone-number", json={"phone_number": "5551234567"})

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "step": "first_name",
            "message": "",
            "record_id": None,
        }

    def test_invalid_phone_is_not_an_error(self, client):
        response = client.post("/api/onboarding/phone-number", json={"phone_number": "555123456"})

        assert response.status_code == 200
        assert response.json()["success"] is False
        assert response.json()["step"] == "phone_number"

    def test_wrong_step_conflicts(self, client):
        response = client.post("/api/onboarding/first-name", json={"first_name": "Ana"})
        assert response.status_code == 409

    def test_back(self, client):
        _walk_to_picture(client)

        assert client.post("/api/onboarding/back").json()["step"] == "first_name"
        assert client.post("/api/onboarding/back").json()["step"] == "phone_number"

        response = client.post("/api/onboarding/back").json()
        assert response["success"] is False
        assert response["step"] == "phone_number"


class TestPicture:

    def test_upload_picture(self, client, sample_image):
        _walk_to_picture(client)

        response = client.post("/api/onboarding/picture", json={"image_base64": _png_base64(sample_image)})

        assert response.json()["success"] is True
        assert client.get("/api/onboarding/state").json()["has_picture"] is True

    def test_cancelled_pick(self, client):
        _walk_to_picture(client)

        response = client.post("/api/onboarding/picture", json={"image_base64": None})

        assert response.status_code == 200
        assert response.json()["success"] is False
        assert client.get("/api/onboarding/state").json()["has_picture"] is False

    def test_bad_image_is_400(self, client):
        _walk_to_picture(client)
        response = client.post("/api/onboarding/picture", json={"image_base64": "@@@"})
        assert response.status_code == 400

    def test_oversized_image_is_400(self, client, monkeypatch, sample_image):
        _walk_to_picture(client)
        data = _png_base64(sample_image)
        monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 100)

        response = client.post("/api/onboarding/picture", json={"image_base64": data})

        assert response.status_code == 400
        assert client.get("/api/onboarding/state").json()["has_picture"] is False


class TestFinish:

    def test_finish_without_picture(self, client, memory_store):
        _walk_to_picture(client)

        response = client.post("/api/onboarding/finish")

        assert response.json()["success"] is False
        assert memory_store.records == []

    def test_finish_saves_profile(self, client, memory_store, sample_image):
        _walk_to_picture(client)
        client.post("/api/onboarding/picture", json={"image_base64": _png_base64(sample_image)})

        response = client.post("/api/onboarding/finish").json()

        assert response["success"] is True
        assert response["record_id"] == 1
        assert response["step"] == "phone_number"
        assert len(memory_store.records) == 1
        assert memory_store.records[0]["first_name"] == "Ana"

    def test_store_failure_is_503(self, failing_store, sample_image):
        flow = OnboardingFlow(adapter=ProfileStoreAdapter(failing_store))
        app.dependency_overrides[get_flow] = lambda: flow
        try:
            client = TestClient(app)
            _walk_to_picture(client)
            client.post("/api/onboarding/picture", json={"image_base64": _png_base64(sample_image)})

            response = client.post("/api/onboarding/finish")

            assert response.status_code == 503
            assert "disk full" in response.json()["detail"]
            assert client.get("/api/onboarding/state").json()["step"] == "profile_picture"
        finally:
            app.dependency_overrides.clear()
