"""Tests for settings loading."""

import pytest
from pydantic import ValidationError

from aspas.config import AspasSettings


def test_defaults(monkeypatch):
    monkeypatch.delenv("ASPAS_DB_PATH", raising=False)
    monkeypatch.delenv("PROFILE_PICTURE_QUALITY", raising=False)

    settings = AspasSettings(_env_file=None)

    assert settings.aspas_db_path == "aspas.db"
    assert settings.profile_picture_quality == 0.8
    assert settings.reset_on_finish is True
    assert settings.is_development is True


def test_reads_environment(monkeypatch):
    monkeypatch.setenv("ASPAS_DB_PATH", "/tmp/profiles.db")
    monkeypatch.setenv("PROFILE_PICTURE_QUALITY", "0.5")
    monkeypatch.setenv("ASPAS_ENV", "production")

    settings = AspasSettings(_env_file=None)

    assert settings.aspas_db_path == "/tmp/profiles.db"
    assert settings.profile_picture_quality == 0.5
    assert settings.is_production is True


def test_rejects_bad_quality(monkeypatch):
    monkeypatch.setenv("PROFILE_PICTURE_QUALITY", "1.5")

    with pytest.raises(ValidationError):
        AspasSettings(_env_file=None)
