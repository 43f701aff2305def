"""
Unit Tests for User Domain Model
"""

from datetime import datetime, timezone

import pytest

from heartbeat.domain.enums.language import Language
from heartbeat.domain.models.user import EmergencyContact, User

NOW = datetime(2026, 3, 10, 10, 0, tzinfo=timezone.utc)


class TestUser:
    """Tests for User normalization and behaviour."""

    def test_user_id_required(self) -> None:
        with pytest.raises(ValueError):
            User(user_id="")

    def test_language_parsed_from_string(self) -> None:
        assert User(user_id="u1", language="ZH").language == Language.ZH
        assert User(user_id="u1", language="klingon").language == Language.EN

    def test_display_name_prefers_call_name(self) -> None:
        assert User(user_id="u1", username="alice", call_name="Ally").display_name == "Ally"

    def test_display_name_falls_back_to_username(self) -> None:
        assert User(user_id="u1", username="alice", call_name="  ").display_name == "alice"

    def test_display_name_none_when_unset(self) -> None:
        assert User(user_id="u1").display_name is None

    def test_contacts_in_slot_order(self) -> None:
        user = User(
            user_id="u1",
            emergency_contact=EmergencyContact("Bob", "+1"),
            emergency_contact2=EmergencyContact("Carol", "+2"),
        )

        assert [c.name for c in user.emergency_contacts] == ["Bob", "Carol"]

    def test_naive_alert_time_becomes_utc(self) -> None:
        user = User(user_id="u1", last_alert_at=datetime(2026, 3, 10, 9, 0))

        assert user.last_alert_at.tzinfo is timezone.utc

    def test_to_dict(self) -> None:
        user = User(user_id="u1", last_alert_at=NOW)

        data = user.to_dict()

        assert data["user_id"] == "u1"
        assert data["language"] == "en"
        assert data["last_checkin_date"] is None
        assert data["last_alert_at"] == NOW.isoformat()
        assert data["emergency_contact"] == {"name": None, "phone": None}


class TestEmergencyContact:
    """Tests for EmergencyContact."""

    @pytest.mark.parametrize("phone,expected", [
        ("+15550000001", True),
        ("", False),
        ("   ", False),
        (None, False),
    ])
    def test_has_phone(self, phone, expected) -> None:
        assert EmergencyContact(name="Bob", phone=phone).has_phone is expected

