"""Pydantic schemas for tasks.

Learn: Separate schemas for create/read keeps the API clean.
- TaskCreate: what you POST to create a task
- TaskRead: what the API returns, with camelCase keys (ownerId, isCompleted)
  generated from the snake_case ORM attributes

Title rules (required, not blank, ≤500 chars) are enforced in TaskService
so the error message is ours rather than pydantic's.
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class TaskCreate(BaseModel):
    title: Optional[str] = None


class TaskRead(BaseModel):
    id: uuid.UUID
    owner_id: uuid.UUID
    title: str
    is_completed: bool
    created_at: datetime

    model_config = {
        "from_attributes": True,
        "alias_generator": to_camel,
        "populate_by_name": True,
    }


class MessageResponse(BaseModel):
    message: str
