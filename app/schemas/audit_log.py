"""
Audit log schemas
"""
from datetime import datetime
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, field_serializer

from app.schemas.user import UserRef
from app.utils.datetime_utils import iso_8601_utc


class AuditLogOut(BaseModel):
    """One audit entry with its derived description and joined actor"""
    id: int
    actor_id: Optional[int] = None
    actor: Optional[UserRef] = None
    action: str
    entity_type: str
    entity_id: Optional[int] = None
    description: str
    before_values: Dict[str, Any] = {}
    after_values: Dict[str, Any] = {}
    origin_address: Optional[str] = None
    client_agent: Optional[str] = None
    occurred_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @field_serializer("occurred_at", when_used="always")
    @classmethod
    def _ser_datetime(cls, dt):
        return iso_8601_utc(dt) if dt is not None else None


class AuditLogPage(BaseModel):
    items: List[AuditLogOut]
    total: int
    page: int
    per_page: int
    pages: int


class ActionCount(BaseModel):
    action: str
    count: int


class EntityTypeCount(BaseModel):
    entity_type: str
    count: int


class ActorCount(BaseModel):
    actor_id: int
    name: Optional[str] = None
    email: Optional[str] = None
    count: int


class AuditStatistics(BaseModel):
    total_logs: int
    logs_today: int
    logs_this_week: int
    logs_this_month: int
    top_actions: List[ActionCount]
    top_entity_types: List[EntityTypeCount]
    top_actors: List[ActorCount]
    recent: List[AuditLogOut]
