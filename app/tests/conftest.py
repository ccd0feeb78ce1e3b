"""
Pytest configuration and fixtures
"""
import os

# Settings are read at import time
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-that-is-long-enough-for-hs256")
os.environ.setdefault("APP_ENV", "local")

from datetime import date

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from sqlalchemy.engine import Engine

from app.main import app
from app.db.base import Base
from app.core.context import OperationContext, bind_operation_context
from app.core.deps import get_db
from app.core.security import create_access_token, hash_password
from app.models import AuditLog, Campus, College, ReviewStatus, User, Role, model_for
from app.models.audit_log import EntityType

PASSWORD = "Passw0rd!2024"

# Use in-memory SQLite for testing
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)


# Enable foreign keys for SQLite
@event.listens_for(Engine, "connect")
def set_sqlite_pragma(dbapi_conn, connection_record):
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db():
    """Create a fresh database for each test"""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)

    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db):
    """Test client fixture with database override"""
    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def password():
    """Plain-text password of every user made by make_user"""
    return PASSWORD


@pytest.fixture
def auth_headers():
    def _auth_headers(user: User) -> dict:
        token = create_access_token({"sub": str(user.id), "role": user.role})
        return {"Authorization": f"Bearer {token}"}
    return _auth_headers


@pytest.fixture
def audit_entries(db):
    """Entries for one entity in commit order"""
    def _audit_entries(entity_type: EntityType, entity_id: int):
        db.expire_all()
        return (
            db.query(AuditLog)
            .filter(AuditLog.entity_type == entity_type.value, AuditLog.entity_id == entity_id)
            .order_by(AuditLog.occurred_at, AuditLog.id)
            .all()
        )
    return _audit_entries


@pytest.fixture
def campus(db):
    campus = Campus(name="Main Campus")
    db.add(campus)
    db.commit()
    db.refresh(campus)
    return campus


@pytest.fixture
def college(db, campus):
    college = College(code="CAS", name="College of Arts and Sciences", campus_id=campus.id)
    db.add(college)
    db.commit()
    db.refresh(college)
    return college


@pytest.fixture
def make_user(db):
    def _make_user(email, role=Role.USER, college_id=None, is_active=True, first_name="Test", last_name="User"):
        user = User(
            first_name=first_name,
            last_name=last_name,
            email=email,
            password_hash=hash_password(PASSWORD),
            role=role.value,
            college_id=college_id,
            is_active=is_active,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user
    return _make_user


@pytest.fixture
def admin_user(make_user):
    return make_user("admin@example.com", role=Role.ADMIN, first_name="Ada", last_name="Admin")


@pytest.fixture
def user_a(make_user, college):
    return make_user("alice@example.com", college_id=college.id, first_name="Alice", last_name="Owner")


@pytest.fixture
def user_b(make_user, college):
    return make_user("bob@example.com", college_id=college.id, first_name="Bob", last_name="Other")


@pytest.fixture
def tech_transfer_payload():
    def _payload(**overrides) -> dict:
        payload = {
            "name": "Solar Dryer",
            "description": "Low-cost solar dryer for farm produce",
            "category": "Agriculture",
            "purpose": "Post-harvest processing",
            "start_date": "2025-01-10",
            "end_date": "2025-06-30",
            "tags": "solar,agriculture",
            "leader": "Dr. Reyes",
            "agency_partner": "Department of Agriculture",
            "contact_person": "Maria Santos",
            "copyright": "no",
        }
        payload.update(overrides)
        return payload
    return _payload


@pytest.fixture
def award_payload():
    def _payload(**overrides) -> dict:
        payload = {
            "award_name": "Outstanding Extension Program",
            "description": "Recognition for community outreach",
            "date_received": "2025-03-15",
            "event_details": "Regional awards night",
            "location": "Iloilo City",
            "awarding_body": "Regional Development Council",
            "people_involved": "Extension office staff",
        }
        payload.update(overrides)
        return payload
    return _payload


_MODEL_DEFAULTS = {
    EntityType.TECH_TRANSFER: {
        "name": "Solar Dryer",
        "description": "Low-cost solar dryer",
        "category": "Agriculture",
        "purpose": "Processing",
        "start_date": date(2025, 1, 10),
        "end_date": date(2025, 6, 30),
        "tags": "solar",
        "leader": "Dr. Reyes",
        "agency_partner": "DA",
        "contact_person": "Maria Santos",
    },
    EntityType.ENGAGEMENT: {
        "agency_partner": "Barangay Council",
        "location": "Barangay San Jose",
        "activity_conducted": "Composting workshop",
        "start_date": date(2025, 2, 1),
        "end_date": date(2025, 2, 2),
        "number_of_participants": 40,
        "faculty_involved": "Prof. Cruz",
        "narrative": "Hands-on composting training",
    },
    EntityType.AWARD: {
        "award_name": "Outstanding Extension Program",
        "description": "Recognition",
        "date_received": date(2025, 3, 15),
        "event_details": "Awards night",
        "location": "Iloilo City",
        "awarding_body": "RDC",
        "people_involved": "Staff",
    },
}


@pytest.fixture
def make_submission(db):
    """Insert a submission directly, bypassing the HTTP layer"""
    def _make_submission(entity_type, owner, status=ReviewStatus.PENDING, is_archived=False, **fields):
        values = dict(_MODEL_DEFAULTS[entity_type])
        values.setdefault("college_id", owner.college_id)
        values.update(fields)
        bind_operation_context(db, OperationContext(actor_id=owner.id))
        entity = model_for(entity_type)(
            **values, owner_id=owner.id, status=status, is_archived=is_archived
        )
        db.add(entity)
        db.commit()
        db.refresh(entity)
        return entity
    return _make_submission
