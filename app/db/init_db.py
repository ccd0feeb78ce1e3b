"""
Initial data bootstrap
"""
import logging
from typing import Optional

from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.security import hash_password
from app.models.user import Role, User

logger = logging.getLogger(__name__)


def bootstrap_initial_admin(db: Session) -> Optional[User]:
    """
    Create the initial admin from INITIAL_ADMIN_EMAIL / INITIAL_ADMIN_PASSWORD
    when no admin exists yet.

    Returns:
        The created admin, or None if one already existed
    """
    if db.query(User).filter(User.role == Role.ADMIN.value).first():
        logger.info("Admin user already exists, skipping initial bootstrap")
        return None

    email = settings.INITIAL_ADMIN_EMAIL.strip().lower()
    if db.query(User).filter(User.email == email).first():
        logger.warning("User %s exists but is not an admin; skipping bootstrap", email)
        return None

    admin = User(
        first_name="System",
        last_name="Administrator",
        email=email,
        password_hash=hash_password(settings.INITIAL_ADMIN_PASSWORD),
        role=Role.ADMIN.value,
        is_active=True,
    )
    db.add(admin)
    db.commit()
    db.refresh(admin)

    logger.info("Initial admin user created: %s", email)
    logger.info("Password: [set via INITIAL_ADMIN_PASSWORD environment variable]")
    return admin
