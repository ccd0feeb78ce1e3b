"""
Tests for audit trail statistics
"""
from datetime import datetime, timezone

import pytest
from fastapi import status

from app.core.security import hash_password
from app.db.audit_hooks import suppress_lifecycle_audit
from app.models import AuditLog, Role, User
from app.services.audit_log_service import audit_statistics

# Wednesday; the week started Monday 2026-10-12
NOW = datetime(2026, 10, 14, 12, 0, tzinfo=timezone.utc)


def _quiet_user(db, email, first_name, role=Role.USER):
    """Create a user without a lifecycle entry so only seeded rows are counted"""
    user = User(
        first_name=first_name,
        last_name="Tester",
        email=email,
        password_hash=hash_password("irrelevant-pass"),
        role=role.value,
    )
    db.add(user)
    suppress_lifecycle_audit(db, user)
    db.commit()
    db.refresh(user)
    return user


def _at(day, hour=9):
    return datetime(2026, day[0], day[1], hour, 0, tzinfo=timezone.utc)


@pytest.fixture
def stats_data(db):
    dana = _quiet_user(db, "dana@example.com", "Dana", Role.ADMIN)
    eli = _quiet_user(db, "eli@example.com", "Eli")
    rows = [
        (eli.id, "created", "Award", _at((10, 14), 8)),
        (eli.id, "updated", "Award", _at((10, 14), 10)),
        (dana.id, "updated", "Award", _at((10, 13))),
        (dana.id, "deleted", "TechTransfer", _at((10, 12), 0)),
        (eli.id, "updated", "Engagement", _at((10, 5))),
        (None, "updated", "Award", _at((9, 30))),
    ]
    db.add_all([
        AuditLog(
            actor_id=actor_id,
            action=action,
            entity_type=entity_type,
            entity_id=1,
            before_values={},
            after_values={},
            occurred_at=occurred_at,
        )
        for actor_id, action, entity_type, occurred_at in rows
    ])
    db.commit()
    return dana, eli


def test_window_counts(db, stats_data):
    stats = audit_statistics(db, now=NOW)

    assert stats["total_logs"] == 6
    assert stats["logs_today"] == 2
    assert stats["logs_this_week"] == 4
    assert stats["logs_this_month"] == 5


def test_rankings(db, stats_data):
    dana, eli = stats_data

    stats = audit_statistics(db, top_n=2, now=NOW)

    assert stats["top_actions"] == [
        {"action": "updated", "count": 4},
        {"action": "created", "count": 1},
    ]
    assert stats["top_entity_types"][0] == {"entity_type": "Award", "count": 4}
    assert len(stats["top_entity_types"]) == 2
    assert [row["actor_id"] for row in stats["top_actors"]] == [eli.id, dana.id]
    assert stats["top_actors"][0]["name"] == "Eli Tester"
    assert stats["top_actors"][0]["email"] == "eli@example.com"
    assert stats["top_actors"][0]["count"] == 3


def test_system_entries_not_ranked_as_actor(db, stats_data):
    stats = audit_statistics(db, now=NOW)
    assert all(row["actor_id"] is not None for row in stats["top_actors"])


def test_recent_entries_newest_first(db, stats_data):
    stats = audit_statistics(db, recent_n=3, now=NOW)

    recent = stats["recent"]
    assert len(recent) == 3
    assert [entry.action for entry in recent] == ["updated", "created", "updated"]
    assert recent[0].entity_type == "Award"


def test_empty_trail(db):
    stats = audit_statistics(db, now=NOW)

    assert stats["total_logs"] == 0
    assert stats["top_actions"] == []
    assert stats["top_actors"] == []
    assert stats["recent"] == []


def test_statistics_endpoint(client, db, admin_user, user_a, auth_headers):
    response = client.get("/api/v1/audit-logs/statistics", headers=auth_headers(admin_user))

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    # the fixture users' creation entries
    assert data["total_logs"] >= 2
    assert {"action": "created", "count": data["total_logs"]} in data["top_actions"]
    assert len(data["recent"]) <= 10


def test_statistics_endpoint_requires_admin(client, user_a, auth_headers):
    response = client.get("/api/v1/audit-logs/statistics", headers=auth_headers(user_a))
    assert response.status_code == status.HTTP_403_FORBIDDEN
