# mypy: ignore-errors
# tests/services/test_user_service.py
"""Tests for profile provisioning and updates."""

from waste_cycle.core.identity import Subject
from waste_cycle.models import User
from waste_cycle.schemas.user import ProfileUpdateRequest
from waste_cycle.services.user_service import get_or_provision_user, update_profile


def _stale_first_user_lookup(db_session, monkeypatch):
    """Make the first ``User`` lookup miss, as if another request had not committed yet."""
    real_get = db_session.get
    calls = []

    def stale_then_real(entity, ident, **kwargs):
        if entity is User:
            calls.append(ident)
            if len(calls) == 1:
                return None
        return real_get(entity, ident, **kwargs)

    monkeypatch.setattr(db_session, "get", stale_then_real)
    return calls


def test_provision_creates_profile(db_session) -> None:
    user = get_or_provision_user(db_session, Subject(uid="new-1", display_name="New Farmer"))

    assert user.name == "New Farmer"
    assert db_session.query(User).count() == 1


def test_concurrent_provisioning_returns_stored_profile(db_session, buyer, monkeypatch) -> None:
    """When another request provisioned the profile first, its row is returned."""
    db_session.expunge_all()
    calls = _stale_first_user_lookup(db_session, monkeypatch)

    user = get_or_provision_user(db_session, Subject(uid="u1", display_name="Someone Else"))

    assert user.id == "u1"
    assert user.name == "Buyer Bee"
    assert calls == ["u1", "u1"]
    assert db_session.query(User).count() == 1


def test_update_profile_applies_given_fields(db_session, buyer) -> None:
    updated = update_profile(db_session, buyer, ProfileUpdateRequest(farm_name="Hillside Farm"))

    assert updated.farm_name == "Hillside Farm"
    assert updated.name == "Buyer Bee"
