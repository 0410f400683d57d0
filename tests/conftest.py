from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from app.main import app
from config.settings import Settings, get_settings


@pytest.fixture
def no_key_settings():
    return Settings(gemini_api_key=None)


@pytest.fixture
def api(no_key_settings):
    app.dependency_overrides[get_settings] = lambda: no_key_settings
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()
