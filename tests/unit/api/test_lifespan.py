"""
Unit Tests for Application Startup

Runs the real lifespan against in-memory SQLite.
"""

import pytest
from fastapi.testclient import TestClient

from heartbeat.config.settings import AlertSettings, DatabaseSettings
from heartbeat.main import create_application


class TestLifespan:
    """Tests for startup wiring and failure."""

    def test_full_flow_over_sqlite(self, test_settings) -> None:
        app = create_application(test_settings)

        with TestClient(app) as client:
            registered = client.post(
                "/api/v1/users/register",
                json={
                    "user_id": "u1",
                    "emergency_contact": {"name": "Bob", "phone": "+15550000001"},
                },
            )
            assert registered.status_code == 200

            # never checked in: overdue, calls are simulated
            evaluated = client.post("/api/v1/evaluate", json={"user_id": "u1"}).json()
            assert evaluated["triggered"] is True
            assert evaluated["results"][0]["provider"] == "simulated"

            status = client.get("/api/v1/status/u1").json()
            assert status["user"]["last_alert_at"] is not None

            client.post("/api/v1/checkin", json={"user_id": "u1"})
            status = client.get("/api/v1/status/u1").json()
            assert status["emergency_should_trigger"] is False

            ready = client.get("/api/v1/health/ready").json()
            assert ready["ready"] is True
            assert ready["call_provider"] == "simulated"

    def test_scheduler_started_when_enabled(self, test_settings) -> None:
        settings = test_settings.model_copy(update={"alerts": AlertSettings(sweep_enabled=True)})
        app = create_application(settings)

        with TestClient(app):
            assert app.state.db.is_initialized is True
            scheduler = app.state.alerting.scheduler
            assert scheduler is not None
            assert scheduler.running is True

        assert scheduler.running is False

    def test_unreachable_store_prevents_startup(self, test_settings, tmp_path) -> None:
        missing = tmp_path / "missing-dir" / "heartbeat.db"
        settings = test_settings.model_copy(
            update={"database": DatabaseSettings(url=f"sqlite+aiosqlite:///{missing}")}
        )
        app = create_application(settings)

        with pytest.raises(RuntimeError, match="unreachable"):
            with TestClient(app):
                pass
