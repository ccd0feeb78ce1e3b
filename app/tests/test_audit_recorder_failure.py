"""
Tests that a failing audit write never breaks the business operation
"""
import logging

from fastapi import status

from app.core.context import OperationContext
from app.models import AuditLog, Campus
from app.models.audit_log import AuditAction, EntityType
from app.services import audit_service
from app.services.audit_service import record_change


def _broken_append(db, entry):
    raise RuntimeError("audit store unavailable")


def test_record_change_logs_and_returns_none(db, monkeypatch, caplog):
    monkeypatch.setattr(audit_service, "append_entry", _broken_append)

    with caplog.at_level(logging.ERROR, logger="app.services.audit_service"):
        result = record_change(
            db, AuditAction.LOGIN, EntityType.USER, 1, after={"email": "a@example.com"},
            context=OperationContext(actor_id=1),
        )

    assert result is None
    assert any(
        record.levelno == logging.ERROR and "Failed to record audit entry" in record.getMessage()
        for record in caplog.records
    )
    assert db.query(AuditLog).count() == 0


def test_record_change_writes_entry(db):
    entry = record_change(
        db, "exported", EntityType.AWARD, 42,
        after={"format": "csv"},
        context=OperationContext(actor_id=7, origin_address="127.0.0.1", client_agent="curl"),
    )

    assert entry is not None
    assert entry.action == "exported"
    assert entry.entity_type == "Award"
    assert entry.actor_id == 7
    assert entry.before_values == {}
    assert entry.after_values == {"format": "csv"}
    assert entry.description == "Exported Award"


def test_business_write_survives_audit_failure(db, monkeypatch, caplog):
    monkeypatch.setattr(audit_service, "append_entry", _broken_append)

    with caplog.at_level(logging.ERROR):
        campus = Campus(name="Resilient Campus")
        db.add(campus)
        db.commit()

    db.expire_all()
    assert db.query(Campus).filter(Campus.name == "Resilient Campus").count() == 1
    assert db.query(AuditLog).count() == 0


def test_api_request_succeeds_when_audit_fails(client, db, user_a, auth_headers, award_payload, monkeypatch):
    monkeypatch.setattr(audit_service, "append_entry", _broken_append)

    response = client.post("/api/v1/awards", json=award_payload(), headers=auth_headers(user_a))

    assert response.status_code == status.HTTP_201_CREATED
    assert response.json()["status"] == "pending"
    assert db.query(AuditLog).filter(AuditLog.entity_type == "Award").count() == 0
