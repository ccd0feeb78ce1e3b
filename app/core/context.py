"""
Per-operation actor/request context

Every entity-mutating service call receives an OperationContext and binds it
to the SQLAlchemy session it writes through; the audit hooks read it back
from the session when the transaction commits.
"""
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.orm import Session

from app.core.constants import OPERATION_CONTEXT_KEY


@dataclass(frozen=True)
class OperationContext:
    actor_id: Optional[int] = None
    origin_address: Optional[str] = None
    client_agent: Optional[str] = None


SYSTEM_CONTEXT = OperationContext()


def bind_operation_context(db: Session, ctx: Optional[OperationContext]) -> None:
    """Attach ctx to the session; None resets it to the system context."""
    db.info[OPERATION_CONTEXT_KEY] = ctx or SYSTEM_CONTEXT


def get_bound_context(db: Session) -> OperationContext:
    return db.info.get(OPERATION_CONTEXT_KEY) or SYSTEM_CONTEXT
