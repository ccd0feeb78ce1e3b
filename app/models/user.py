"""
User model
"""
from sqlalchemy import Column, Integer, String, Boolean, ForeignKey
from sqlalchemy.orm import relationship
import enum
from app.db.base import Base
from app.models.audit_log import EntityType
from app.models.mixins import Auditable, TimestampMixin, DEFAULT_AUDIT_EXCLUDE


class Role(str, enum.Enum):
    ADMIN = "admin"
    USER = "user"


class User(Auditable, TimestampMixin, Base):
    __tablename__ = "users"
    __audit_type__ = EntityType.USER
    __audit_exclude__ = DEFAULT_AUDIT_EXCLUDE | {"password_hash", "remember_token"}

    id = Column(Integer, primary_key=True, index=True)
    first_name = Column(String(255), nullable=False)
    last_name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String, nullable=True)
    remember_token = Column(String(100), nullable=True)
    role = Column(String(20), nullable=False, default=Role.USER.value)
    college_id = Column(Integer, ForeignKey("colleges.id"), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    avatar = Column(String, nullable=True)

    college = relationship("College", back_populates="users")

    @property
    def name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN.value
