"""Shared fixtures for API route tests."""

import pytest
from httpx import ASGITransport, AsyncClient

from staggerline.api.app import create_app
from staggerline.api.deps import get_app_settings, verify_api_key
from staggerline.config import Settings
from staggerline.pipeline.constants import PURIFYING_BREW

PLAYER = 7


@pytest.fixture
def settings():
    return Settings(_env_file=None)


@pytest.fixture
async def client(settings):
    """Test client with DI overrides for settings and auth."""
    app = create_app()
    app.dependency_overrides[get_app_settings] = lambda: settings
    app.dependency_overrides[verify_api_key] = lambda: None
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def series_body():
    return {
        "fight": {"id": 12, "name": "Raszageth", "startTime": 50, "endTime": 600000},
        "playerId": PLAYER,
        "events": [
            {"timestamp": 100, "type": "addstagger", "amount": 20,
             "newPooledDamage": 20},
            {"timestamp": 150, "type": "damage", "targetID": PLAYER,
             "hitPoints": 80, "maxHitPoints": 100},
            {"timestamp": 200, "type": "removestagger", "amount": 15,
             "newPooledDamage": 5,
             "trigger": {"ability": {"guid": PURIFYING_BREW.id}}},
            {"timestamp": 250, "type": "death", "targetID": PLAYER},
        ],
    }
