from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel

from src.taskboard.schemas.user import UserSummary


class ActivityRead(BaseModel):
    """Activity feed entry with the actor resolved to a name.

    ``user`` is None when the actor's account no longer exists.
    """

    id: UUID
    action: str
    entity_type: str
    entity_id: UUID
    project_id: UUID | None
    details: dict[str, Any] | None
    user: UserSummary | None
    created_at: datetime
