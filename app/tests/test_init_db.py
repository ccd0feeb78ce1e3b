"""
Tests for initial admin bootstrap
"""
from app.core.config import settings
from app.core.security import verify_password
from app.db.init_db import bootstrap_initial_admin
from app.models import User


def test_bootstrap_creates_admin_once(db):
    admin = bootstrap_initial_admin(db)

    assert admin is not None
    assert admin.is_admin
    assert admin.email == settings.INITIAL_ADMIN_EMAIL.strip().lower()
    assert verify_password(settings.INITIAL_ADMIN_PASSWORD, admin.password_hash)

    assert bootstrap_initial_admin(db) is None
    assert db.query(User).count() == 1


def test_bootstrap_skipped_when_admin_exists(db, admin_user):
    assert bootstrap_initial_admin(db) is None
