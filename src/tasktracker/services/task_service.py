"""Task service — business logic for a user's to-do list.

Learn: Ownership is part of every query, never a check bolted on after a
fetch. Toggle and delete each run as ONE statement with both predicates:

  UPDATE tasks SET is_completed = NOT is_completed
   WHERE id = :id AND owner_id = :owner RETURNING ...
  DELETE FROM tasks WHERE id = :id AND owner_id = :owner

If no row matches we raise NotFoundError, whether the task never existed
or belongs to someone else, so task ids can't be probed across accounts.

Lifecycle of a task:
  (none) --create--> open --toggle--> done --toggle--> open --delete--> (none)
Toggle is a flip, not a set: two toggles restore the original state.
"""

import uuid
from typing import Optional

import structlog
from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from tasktracker.db.models import Task
from tasktracker.errors import NotFoundError, ValidationError

logger = structlog.get_logger()

MAX_TITLE_LENGTH = 500


def parse_task_id(raw: str) -> uuid.UUID:
    """Turn a path segment into a task id. Garbage is just another missing task."""
    try:
        return uuid.UUID(raw)
    except (ValueError, TypeError, AttributeError):
        raise NotFoundError("Task not found")


class TaskService:
    """Owner-scoped task CRUD."""

    def __init__(self, db: AsyncSession):
        self.db = db

    # ─── Read ────────────────────────────────────────────

    async def list_tasks(self, owner_id: uuid.UUID) -> list[Task]:
        """All of the owner's tasks, oldest first. Empty list if none."""
        result = await self.db.execute(
            select(Task)
            .where(Task.owner_id == owner_id)
            .order_by(Task.created_at, Task.id)
        )
        return list(result.scalars().all())

    # ─── Create ──────────────────────────────────────────

    async def create_task(self, owner_id: uuid.UUID, title: Optional[str]) -> Task:
        title = (title or "").strip()
        if not title:
            raise ValidationError("Title is required")
        if len(title) > MAX_TITLE_LENGTH:
            raise ValidationError(f"Title must be at most {MAX_TITLE_LENGTH} characters")

        task = Task(owner_id=owner_id, title=title, is_completed=False)
        self.db.add(task)
        await self.db.commit()

        logger.info("tasks.created", task_id=str(task.id))
        return task

    # ─── Toggle ──────────────────────────────────────────

    async def toggle_task(self, owner_id: uuid.UUID, task_id: uuid.UUID) -> Task:
        """Flip is_completed on the owner's task and return the new row."""
        result = await self.db.execute(
            update(Task)
            .where(Task.id == task_id, Task.owner_id == owner_id)
            .values(is_completed=~Task.is_completed)
            .returning(Task)
            .execution_options(populate_existing=True)
        )
        task = result.scalars().first()
        if task is None:
            await self.db.rollback()
            raise NotFoundError("Task not found")

        await self.db.commit()
        logger.info("tasks.toggled", task_id=str(task_id), is_completed=task.is_completed)
        return task

    # ─── Delete ──────────────────────────────────────────

    async def delete_task(self, owner_id: uuid.UUID, task_id: uuid.UUID) -> None:
        result = await self.db.execute(
            delete(Task)
            .where(Task.id == task_id, Task.owner_id == owner_id)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            await self.db.rollback()
            raise NotFoundError("Task not found")

        await self.db.commit()
        logger.info("tasks.deleted", task_id=str(task_id))
