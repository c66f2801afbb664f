"""Fixtures for API tests."""

import pytest
from fastapi.testclient import TestClient

from swimroster.api.app import create_app
from swimroster.api.dependencies import (
    get_event_dao,
    get_lineup_dao,
    get_meet_dao,
    get_preset_dao,
    get_result_dao,
    get_settings_dep,
    get_swimmer_dao,
)


@pytest.fixture
def client(daos, settings) -> TestClient:
    """Provide a test client backed by the in-memory stores."""
    app = create_app()

    app.dependency_overrides[get_swimmer_dao] = lambda: daos["swimmers"]
    app.dependency_overrides[get_event_dao] = lambda: daos["events"]
    app.dependency_overrides[get_meet_dao] = lambda: daos["meets"]
    app.dependency_overrides[get_preset_dao] = lambda: daos["meet_event_presets"]
    app.dependency_overrides[get_lineup_dao] = lambda: daos["lineup_assignments"]
    app.dependency_overrides[get_result_dao] = lambda: daos["results"]
    app.dependency_overrides[get_settings_dep] = lambda: settings

    return TestClient(app)
